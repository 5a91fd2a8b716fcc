import io
from functools import cached_property

from _backparse.backtrack import backtrack
from _backparse.errors import MissingRepetitionError, ParseError
from _backparse.parser import Parser, as_parser
from _backparse.position_reader import PositionReader


class And(Parser):
    """
    Parses first then second, returning both values as a tuple.
    """

    def __init__(self, first, second):
        self.first = as_parser(first)
        self.second = as_parser(second)

    def parse(self, stream):
        with backtrack(stream):
            first_value = self.first.parse(stream)
            return first_value, self.second.parse(stream)

    def __repr__(self):
        return f"({self.first!r} & {self.second!r})"


class AnyOf(Parser):
    """
    Combinator for parsers.

    :param parsers: List of parsers.
    :returns: A parser that returns the value of the first parser in
        parsers that succeeds. If none succeed, the error of the last
        one is raised.
    """

    def __init__(self, *parsers):
        self.parsers = tuple(as_parser(p) for p in parsers)

    def or_(self, other):
        return AnyOf(*self.parsers, other)

    def parse(self, stream):
        with backtrack(stream):
            error = ParseError("no alternatives")
            for parser in self.parsers:
                try:
                    return parser.parse(stream)
                except ParseError as err:
                    error = err
            raise error

    def __repr__(self):
        return "(" + " | ".join(repr(p) for p in self.parsers) + ")"


def any_of(*parsers):
    return AnyOf(*parsers)


class Then(Parser):
    """
    Parses first then second, returning the value of second.
    """

    def __init__(self, first, second):
        self.first = as_parser(first)
        self.second = as_parser(second)

    def parse(self, stream):
        with backtrack(stream):
            self.first.parse(stream)
            return self.second.parse(stream)

    def __repr__(self):
        return f"({self.first!r} >> {self.second!r})"


class With(Parser):
    """
    Parses first then second, returning the value of first.
    """

    def __init__(self, first, second):
        self.first = as_parser(first)
        self.second = as_parser(second)

    def parse(self, stream):
        with backtrack(stream):
            value = self.first.parse(stream)
            self.second.parse(stream)
            return value

    def __repr__(self):
        return f"({self.first!r} << {self.second!r})"


class Optional(Parser):
    """
    Runs parser, returning default instead of failing.

    :param parser: Any parser.
    :param default: Value returned when parser fails. Give a sentinel to
        tell an absent match from a parser whose value is None, ie.
        eof.optional(default=missing).
    """

    def __init__(self, parser, default=None):
        self.parser = as_parser(parser)
        self.default = default

    def parse(self, stream):
        try:
            return self.parser.parse(stream)
        except ParseError:
            return self.default

    def __repr__(self):
        return f"{self.parser!r}.optional()"


class Many(Parser):
    """
    Combinator for parser.

    :param parser: Any parser.
    :param min_count: The number of values required for success.
    :returns: Parser that applies the parser until it fails and
        returns the list of values.
    """

    def __init__(self, parser, min_count=0):
        self.parser = as_parser(parser)
        self.min_count = min_count

    def parse(self, stream):
        with backtrack(stream):
            values = []
            error = ParseError("matched without consuming input")
            while True:
                start = stream.tell()
                try:
                    values.append(self.parser.parse(stream))
                except ParseError as err:
                    error = err
                    break
                # A parser which consumes nothing would match forever.
                if stream.tell() == start:
                    break

            if len(values) < self.min_count:
                raise MissingRepetitionError(
                    f"expected at least {self.min_count} of {self.parser!r},"
                    f" found {len(values)}: {error.reason}"
                ) from error
            return values

    def __repr__(self):
        if self.min_count == 1:
            return f"{self.parser!r}.many1()"
        return f"{self.parser!r}.many()"


class Exact(Parser):
    """
    Applies parser exactly count times, returning the list of values.
    """

    def __init__(self, parser, count):
        if count < 0:
            raise ValueError(f"count has to be nonnegative, got {count}")
        self.parser = as_parser(parser)
        self.count = count

    def parse(self, stream):
        with backtrack(stream):
            return [self.parser.parse(stream) for _ in range(self.count)]

    def __repr__(self):
        return f"{self.parser!r}.exact({self.count})"


class Between(Parser):
    """
    Parses prefix, parser and suffix, returning the value of parser, ie.
    decimal().between("(", ")") returns 1 for b"(1)".
    """

    def __init__(self, prefix, parser, suffix):
        self.prefix = as_parser(prefix)
        self.parser = as_parser(parser)
        self.suffix = as_parser(suffix)

    def parse(self, stream):
        with backtrack(stream):
            self.prefix.parse(stream)
            value = self.parser.parse(stream)
            self.suffix.parse(stream)
            return value

    def __repr__(self):
        return f"{self.parser!r}.between({self.prefix!r}, {self.suffix!r})"


class Map(Parser):
    """
    Applies func to the value of parser. func is not expected to fail.
    """

    def __init__(self, parser, func):
        self.parser = as_parser(parser)
        self.func = func

    def parse(self, stream):
        return self.func(self.parser.parse(stream))

    def __repr__(self):
        return f"{self.parser!r}.map({getattr(self.func, '__name__', self.func)})"


class Recursive(Parser):
    """
    Parses the remainder of the stream in isolation, as a separate
    stream, then advances the actual stream past what was consumed.

    This buffers all the remaining bytes on each call.
    """

    def __init__(self, parser):
        self.parser = as_parser(parser)

    def parse(self, stream):
        with backtrack(stream) as start:
            remainder = io.BytesIO(stream.read())
            value = self.parser.parse(remainder)
            stream.seek(start + remainder.tell())
            return value

    def __repr__(self):
        return f"{self.parser!r}.recursive()"


class Lazy(Parser):
    """
    A parser constructed by factory at the time it is first used. This
    allows grammar rules to refer to rules which are defined later, or to
    themselves:

    >>> @rule
    ... def expr():
    ...     return decimal() | expr.between("(", ")")

    """

    def __init__(self, factory):
        """
        :param factory: Function without arguments returning a parser, or
            anything as_parser accepts.
        """
        self.factory = factory

    @cached_property
    def parser(self):
        return as_parser(self.factory())

    def parse(self, stream):
        return self.parser.parse(stream)

    def __repr__(self):
        return getattr(self.factory, "__name__", "lazy")


def lazy(factory):
    return Lazy(factory)


rule = lazy


class WithPosition(Parser):
    """
    Runs parser on a PositionReader so that failures carry the line
    and column of where the innermost failing parser started, see
    ParseError.location.

    Positions are only tracked when the stream is at offset 0 or already
    is a PositionReader, elsewhere parser runs on the stream as is.
    """

    def __init__(self, parser):
        self.parser = as_parser(parser)

    def reader(self, stream):
        if isinstance(stream, PositionReader) or stream.tell() != 0:
            return stream
        return PositionReader(stream)

    def parse(self, stream):
        return self.parser.parse(self.reader(stream))

    def parse_to_end(self, stream):
        return self.parser.parse_to_end(self.reader(stream))

    def __repr__(self):
        return f"{self.parser!r}.with_position()"
