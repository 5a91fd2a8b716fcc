"""
A parser derives a value from the bytes at the current position of a
seekable byte stream. On success the stream is left just past the consumed
bytes, on failure a ParseError is raised and the stream is left where it
was when the parser was called.

Parsers hold no state between calls, so the same parser can be reused for
any number of parses and at any number of positions within one parse.
"""

from abc import ABC, abstractmethod

from _backparse.backtrack import backtrack


class Parser(ABC):
    @abstractmethod
    def parse(self, stream):
        """
        Parse a value from the current position of the stream.

        :param stream: A seekable byte stream.
        :returns: The parsed value.
        :raises ParseError: If no value could be parsed, the stream is
            then at the position it had when parse was called.
        """
        pass

    def parse_to_end(self, stream):
        """
        Like parse, but also requires that the entire stream is consumed.

        :raises TrailingInputError: If the parse succeeded but did not
            reach the end of the stream.
        """
        from _backparse.primitives import eof

        with backtrack(stream):
            value = self.parse(stream)
            eof.parse(stream)
            return value

    def and_(self, other):
        from _backparse.combinators import And

        return And(self, other)

    def or_(self, other):
        from _backparse.combinators import AnyOf

        return AnyOf(self, other)

    def then(self, other):
        from _backparse.combinators import Then

        return Then(self, other)

    def with_(self, other):
        from _backparse.combinators import With

        return With(self, other)

    def optional(self, default=None):
        from _backparse.combinators import Optional

        return Optional(self, default)

    def many(self):
        from _backparse.combinators import Many

        return Many(self)

    def many1(self):
        from _backparse.combinators import Many

        return Many(self, min_count=1)

    def exact(self, count):
        from _backparse.combinators import Exact

        return Exact(self, count)

    def between(self, prefix, suffix):
        from _backparse.combinators import Between

        return Between(prefix, self, suffix)

    def map(self, func):
        from _backparse.combinators import Map

        return Map(self, func)

    def recursive(self):
        from _backparse.combinators import Recursive

        return Recursive(self)

    def with_position(self):
        from _backparse.combinators import WithPosition

        return WithPosition(self)

    def __and__(self, other):
        return self.and_(other)

    def __rand__(self, other):
        return as_parser(other).and_(self)

    def __or__(self, other):
        return self.or_(other)

    def __ror__(self, other):
        return as_parser(other).or_(self)

    def __rshift__(self, other):
        return self.then(other)

    def __rrshift__(self, other):
        return as_parser(other).then(self)

    def __lshift__(self, other):
        return self.with_(other)

    def __rlshift__(self, other):
        return as_parser(other).with_(self)


def as_parser(obj):
    """
    Convert obj to a parser: parsers are returned as is, bytes become
    literal parsers, str become string parsers and functions taking no
    arguments become lazily constructed parsers.
    """
    from _backparse.combinators import Lazy
    from _backparse.primitives import literal, string

    if isinstance(obj, Parser):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return literal(obj)
    if isinstance(obj, str):
        return string(obj)
    if callable(obj):
        return Lazy(obj)
    raise TypeError(f"Cannot use {obj!r} as a parser")

