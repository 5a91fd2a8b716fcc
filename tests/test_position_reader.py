import io

import hypothesis.strategies as st
import pytest
from hypothesis import given

from _backparse.errors import ParseError, PositionUnavailableError
from _backparse.position_reader import Location, PositionReader
from _backparse.primitives import decimal, literal

from .generators.inputs import expected_location, lines, stream_operations


def test_read_counts_lines_and_columns():
    reader = PositionReader(io.BytesIO(b"ab\ncd"))
    assert reader.read() == b"ab\ncd"
    assert (reader.position, reader.line, reader.col) == (5, 1, 2)


def test_seek_backwards():
    reader = PositionReader(io.BytesIO(b"ab\ncd"))
    reader.read()

    reader.seek(-2, io.SEEK_CUR)
    assert reader.location == Location(3, 1, 0)

    reader.seek(-1, io.SEEK_CUR)
    assert reader.location == Location(2, 0, 2)

    reader.seek(0)
    assert reader.location == Location(0, 0, 0)


def test_seek_forwards_counts_newlines():
    reader = PositionReader(io.BytesIO(b"ab\ncd\n\nx"))
    assert reader.seek(4) == 4
    assert reader.location == Location(4, 1, 1)
    assert reader.seek(0, io.SEEK_END) == 8
    assert reader.location == Location(8, 3, 1)


def test_seek_from_end():
    reader = PositionReader(io.BytesIO(b"ab\ncd"))
    reader.seek(-3, io.SEEK_END)
    assert reader.location == Location(2, 0, 2)


def test_underlying_stream_follows():
    stream = io.BytesIO(b"ab\ncd")
    reader = PositionReader(stream)
    reader.seek(4)
    assert stream.tell() == 4
    reader.seek(1)
    assert stream.tell() == 1
    assert reader.read(1) == b"b"


def test_reread_after_backwards_seek():
    reader = PositionReader(io.BytesIO(b"a\nb\nc"))
    reader.read()
    reader.seek(1)
    assert reader.location == Location(1, 0, 1)
    reader.read()
    assert reader.location == Location(5, 2, 1)


def test_requires_offset_zero():
    stream = io.BytesIO(b"abc")
    stream.read(1)
    with pytest.raises(PositionUnavailableError):
        PositionReader(stream)


def test_seek_past_end_warns():
    reader = PositionReader(io.BytesIO(b"abc"))
    with pytest.warns(RuntimeWarning, match="past the end"):
        assert reader.seek(10) == 3


def test_negative_seek():
    reader = PositionReader(io.BytesIO(b"abc"))
    with pytest.raises(ValueError):
        reader.seek(-1)


def test_invalid_whence():
    reader = PositionReader(io.BytesIO(b"abc"))
    with pytest.raises(ValueError):
        reader.seek(0, 5)


def test_parse_failure_restores_location():
    reader = PositionReader(io.BytesIO(b"1\n2\nx"))
    reader.read(2)
    with pytest.raises(ParseError):
        decimal().and_(literal(b"\n")).exact(2).parse(reader)
    assert reader.location == Location(2, 1, 0)


@given(lines, st.data())
def test_location_after_operations(contents, data):
    reader = PositionReader(io.BytesIO(contents))
    for operation, argument in data.draw(stream_operations(len(contents))):
        if operation == "seek":
            reader.seek(argument)
        else:
            reader.read(argument)
        position = reader.tell()
        assert reader.location == Location(
            position, *expected_location(contents, position)
        )
