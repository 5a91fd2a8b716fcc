import operator

import numpy as np

from _backparse.backtrack import backtrack, seek_back_one
from _backparse.errors import (
    LiteralMismatchError,
    NumericOverflowError,
    ParseError,
    TrailingInputError,
    UnexpectedEndError,
)
from _backparse.parser import Parser


def describe(bytestring):
    """
    :returns: The bytestring quoted for use in error messages, ie.
        describe(b"+") == "'+'".
    """
    return "'" + bytestring.decode("ascii", errors="backslashreplace") + "'"


class Literal(Parser):
    """
    Parser for a fixed sequence of bytes, ie. when the stream contains
    b"tag" Literal(b"tag") will return b"tag" and leave the stream
    after the g.
    """

    def __init__(self, literal):
        """
        :param literal: The bytes to be matched, a str is encoded as utf-8.
        """
        if isinstance(literal, str):
            literal = literal.encode("utf-8")
        self.literal = bytes(literal)

    def parse(self, stream):
        with backtrack(stream):
            read = stream.read(len(self.literal))
            if read == self.literal:
                return self.literal
            if len(read) < len(self.literal) and self.literal.startswith(read):
                raise UnexpectedEndError(
                    f"expected {describe(self.literal)}, reached end of input"
                )
            raise LiteralMismatchError(f"expected {describe(self.literal)}")

    def __repr__(self):
        return f"Literal({self.literal!r})"


def literal(bytestring):
    return Literal(bytestring)


def string(text):
    """
    :returns: Parser for the utf-8 encoding of text which returns text.
    """
    return Literal(text).map(lambda _: text)


def spaces():
    """
    :returns: Parser skipping any number of spaces, returns None.
    """
    return Literal(b" ").many().map(lambda _: None)


def _identity(value):
    return value


def sign():
    """
    Parser for an optional minus sign.

    :returns: A parser returning a function which negates its argument if
        there was a minus sign, and returns it unchanged otherwise.
    """
    return (
        Literal(b"-")
        .optional()
        .map(lambda minus: _identity if minus is None else operator.neg)
    )


def integer_type(dtype):
    """
    :param dtype: Any numpy integer type, or int for unbounded integers.
    :returns: The normalized type, ie. np.dtype(dtype) or int.
    """
    if dtype is int:
        return int
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.integer):
        raise ValueError(f"Expected an integer type, got {dtype}")
    return dtype


class NonNegDecimal(Parser):
    """
    Parser for a nonnegative base 10 integer. Any number of leading
    zeros is accepted, ie. b"005" is parsed as 5.
    """

    def __init__(self, dtype=np.int64):
        """
        :param dtype: The integer type of the parsed value, either a
            numpy integer type or int.
        """
        self.dtype = integer_type(dtype)

    def parse(self, stream):
        with backtrack(stream):
            digits = bytearray()
            read_char = stream.read(1)
            while read_char:
                if not read_char.isdigit():
                    seek_back_one(stream)
                    break
                digits += read_char
                read_char = stream.read(1)

            if not digits:
                raise ParseError("no digits")
            return self.convert(bytes(digits))

    def convert(self, digits):
        if self.dtype is int:
            try:
                return int(digits)
            except ValueError as err:
                # Longer than sys.get_int_max_str_digits().
                raise self.overflow(digits) from err

        # Compared as strings, int() refuses very long digit runs.
        significant = digits.lstrip(b"0") or b"0"
        maximum = str(np.iinfo(self.dtype).max).encode("ascii")
        if (len(significant), significant) > (len(maximum), maximum):
            raise self.overflow(digits)
        return self.dtype.type(int(significant))

    def overflow(self, digits):
        return NumericOverflowError(
            f"decimal integer literal too large: {digits.decode('ascii')}"
        )

    def __repr__(self):
        return f"NonNegDecimal({self.dtype})"


def non_neg_decimal(dtype=np.int64):
    return NonNegDecimal(dtype)


def decimal(dtype=np.int64):
    """
    Parser for a base 10 integer with an optional minus sign, leading
    zeros are accepted, ie. b"-0032" is parsed as -32.

    The magnitude is parsed as dtype before negation, so the most
    negative value of dtype is reported as an overflow.

    :param dtype: A signed numpy integer type, or int.
    """
    dtype = integer_type(dtype)
    if dtype is not int and not np.issubdtype(dtype, np.signedinteger):
        raise ValueError(f"decimal requires a signed integer type, got {dtype}")
    return (
        sign()
        .and_(NonNegDecimal(dtype))
        .map(lambda sign_and_value: sign_and_value[0](sign_and_value[1]))
    )


class EndOfStream(Parser):
    """
    Parser which succeeds, returning None, only when there is nothing
    left in the stream.
    """

    def parse(self, stream):
        with backtrack(stream):
            try:
                read_char = stream.read(1)
            except OSError as err:
                raise ParseError("expected eof") from err
            if read_char:
                raise TrailingInputError(f"unexpected {describe(read_char)}")

    def __repr__(self):
        return "eof"


eof = EndOfStream()
