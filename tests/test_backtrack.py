import io

import pytest

from _backparse.backtrack import backtrack, backtrack_on_fail, seek_back_one
from _backparse.errors import ParseError
from _backparse.position_reader import Location, PositionReader


class FailingStream(io.BytesIO):
    def read(self, size=-1):
        super().read(size)
        raise OSError("device error")


def test_backtrack_restores_position_on_failure():
    stream = io.BytesIO(b"abcdef")
    stream.read(1)

    with pytest.raises(ParseError, match="failed"):
        with backtrack(stream):
            stream.read(3)
            raise ParseError("failed")

    assert stream.tell() == 1


def test_backtrack_keeps_position_on_success():
    stream = io.BytesIO(b"abcdef")

    with backtrack(stream) as start:
        stream.read(2)

    assert start == 0
    assert stream.tell() == 2


def test_backtrack_ignores_other_exceptions():
    stream = io.BytesIO(b"abc")

    with pytest.raises(KeyError):
        with backtrack(stream):
            stream.read(2)
            raise KeyError("key")

    assert stream.tell() == 2


def test_io_error_is_parse_error():
    stream = FailingStream(b"abc")

    with pytest.raises(ParseError, match="exceptional error") as excinfo:
        backtrack_on_fail(stream, lambda s: s.read(2))

    assert isinstance(excinfo.value.__cause__, OSError)
    assert stream.tell() == 0


def test_backtrack_on_fail_returns_value():
    stream = io.BytesIO(b"abc")
    assert backtrack_on_fail(stream, lambda s: s.read(2)) == b"ab"
    assert stream.tell() == 2


def test_error_gets_location_of_position_reader():
    reader = PositionReader(io.BytesIO(b"a\nbc"))
    reader.read(2)

    with pytest.raises(ParseError) as excinfo:
        with backtrack(reader):
            reader.read(2)
            raise ParseError("failed")

    assert excinfo.value.location == Location(2, 1, 0)
    assert "line 1, column 0" in str(excinfo.value)


def test_innermost_location_is_kept():
    reader = PositionReader(io.BytesIO(b"abc"))

    with pytest.raises(ParseError) as excinfo:
        with backtrack(reader):
            reader.read(1)
            with backtrack(reader):
                reader.read(1)
                raise ParseError("failed")

    assert excinfo.value.location == Location(1, 0, 1)
    assert reader.tell() == 0


def test_seek_back_one():
    stream = io.BytesIO(b"abc")
    stream.read(2)
    seek_back_one(stream)
    assert stream.read(1) == b"b"
