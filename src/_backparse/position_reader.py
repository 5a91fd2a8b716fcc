import io
import warnings
from dataclasses import dataclass

from _backparse.errors import PositionUnavailableError


@dataclass(frozen=True)
class Location:
    """
    A position in a stream with its zero based line and column.
    """

    position: int
    line: int
    col: int


class PositionReader:
    """
    A seekable byte stream wrapper which keeps track of the line and column
    of the current position, useful for reporting where a parse failed.

    Lines and columns start at 0. A newline byte ends a line and is not
    counted as a column of either line.

    >>> reader = PositionReader(io.BytesIO(b"ab\\ncd"))
    >>> reader.read()
    b'ab\\ncd'
    >>> reader.line, reader.col
    (1, 2)

    """

    def __init__(self, stream):
        """
        :param stream: A seekable byte stream, positioned at offset 0.
        :raises PositionUnavailableError: If the stream is not at offset 0,
            line and column of earlier positions are then unknown.
        """
        start = stream.tell()
        if start != 0:
            raise PositionUnavailableError(
                f"Can only track positions of streams at offset 0, got {start}"
            )
        self._stream = stream
        self._length = stream.seek(0, io.SEEK_END)
        stream.seek(0)

        self._position = 0
        self._line = 0
        self._col = 0
        # Lengths of all lines up to the current position. The last entry
        # is always the current column.
        self._line_lengths = [0]

    @property
    def position(self):
        return self._position

    @property
    def line(self):
        return self._line

    @property
    def col(self):
        return self._col

    @property
    def location(self):
        return Location(self._position, self._line, self._col)

    @property
    def length(self):
        return self._length

    def readable(self):
        return True

    def seekable(self):
        return True

    def tell(self):
        return self._position

    def read(self, size=-1):
        data = self._stream.read(size)
        self._advance(data)
        return data

    def _advance(self, data):
        newlines = data.count(b"\n")
        if newlines:
            lines = data.split(b"\n")
            self._line_lengths[-1] += len(lines[0])
            self._line_lengths.extend(len(line) for line in lines[1:])
            self._line += newlines
        else:
            self._line_lengths[-1] += len(data)
        self._col = self._line_lengths[-1]
        self._position += len(data)

    def seek(self, offset, whence=io.SEEK_SET):
        """
        Seek like io.IOBase.seek, updating line and column.

        Seeking forward reads every skipped byte, and seeking backward
        re-reads the bytes between the target and the current position,
        so the cost of a seek is proportional to the distance.
        """
        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self._position + offset
        elif whence == io.SEEK_END:
            target = self._length + offset
        else:
            raise ValueError(f"Invalid whence ({whence})")

        if target < 0:
            raise ValueError(f"Negative seek position {target}")

        if target > self._position:
            self._skip(target - self._position)
        elif target < self._position:
            self._rewind(self._position - target)
        return self._position

    def _skip(self, distance):
        # Skipped bytes are read so that newlines in them are counted.
        skipped = len(self.read(distance))
        if skipped < distance:
            warnings.warn(
                f"Seek past the end of the stream, stopped at {self._position}",
                RuntimeWarning,
            )

    def _rewind(self, distance):
        target = self._position - distance
        self._stream.seek(target)
        span = self._stream.read(distance)
        self._stream.seek(target)

        newlines = span.count(b"\n")
        before_newline = span.find(b"\n") if newlines else len(span)

        self._line -= newlines
        del self._line_lengths[self._line + 1 :]
        self._line_lengths[-1] -= before_newline
        self._col = self._line_lengths[-1]
        self._position = target
