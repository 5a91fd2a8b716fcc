import io
import os
from contextlib import contextmanager

from _backparse.parser import as_parser
from _backparse.position_reader import PositionReader


@contextmanager
def open_source(source):
    """
    Context manager giving a seekable byte stream for source.

    :param source: Either bytes, a str (parsed as its utf-8 encoding), a
        path (os.PathLike) of a file which is opened in binary mode for
        the duration of the context, or a seekable byte stream which is
        used as is.
    """
    if isinstance(source, (bytes, bytearray)):
        yield io.BytesIO(source)
    elif isinstance(source, str):
        yield io.BytesIO(source.encode("utf-8"))
    elif isinstance(source, os.PathLike):
        with open(source, "rb") as stream:
            yield stream
    else:
        yield source


def parse(parser, source, to_end=True, track_position=False):
    """
    Parses source with the given parser, ie.
    parse(decimal(), "-32") == -32.

    :param parser: Any parser, or anything accepted by as_parser.
    :param source: Anything accepted by open_source.
    :param to_end: Whether the entire source has to be consumed.
    :param track_position: Whether to parse through a PositionReader,
        so that errors carry the line and column where the failure
        occurred. The source then has to start at offset 0.
    :raises ParseError: If parsing fails.
    """
    parser = as_parser(parser)
    with open_source(source) as stream:
        if track_position:
            stream = PositionReader(stream)
        if to_end:
            return parser.parse_to_end(stream)
        return parser.parse(stream)
