"""
Every parser winds the stream back to where it started before it raises,
which is what allows a sibling alternative to retry at the same position.
Parsers that do more than one read or sub-parse get this guarantee from
backtrack().
"""

import io
from contextlib import contextmanager

from _backparse.errors import ParseError


@contextmanager
def backtrack(stream):
    """
    Context manager which records the position of the stream and seeks
    back to it if the body raises ParseError.

    Errors from the stream itself (OSError) are not distinguished from
    parse failures, they are re-raised as ParseError.

    >>> with backtrack(stream):
    ...     name = name_parser.parse(stream)
    ...     value = decimal().parse(stream)

    :param stream: A seekable byte stream.
    :returns: The position of the stream when entering.
    """
    start = stream.tell()
    try:
        yield start
    except ParseError as err:
        stream.seek(start)
        if err.location is None:
            err.location = getattr(stream, "location", None)
        raise
    except OSError as err:
        stream.seek(start)
        raise ParseError("exceptional error") from err


def backtrack_on_fail(stream, func):
    """
    Call func(stream), winding back the stream if it raises ParseError.

    :param stream: A seekable byte stream.
    :param func: Function taking the stream and returning a parsed value.
    :returns: The value returned by func.
    """
    with backtrack(stream):
        return func(stream)


def seek_back_one(stream):
    return stream.seek(-1, io.SEEK_CUR)
