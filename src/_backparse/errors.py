class ParseError(Exception):
    """
    A parser will throw a ParseError if it could not derive a value from the
    start of the stream. When the error propagates out of a parser, the
    stream has been wound back to where that parser started (however, some
    other parser could still succeed at that position).
    """

    def __init__(self, reason=None):
        super().__init__(reason)
        self.reason = reason
        # Set when parsing through a PositionReader, see backtrack().
        self.location = None

    def __str__(self):
        message = "parse failed"
        if self.reason is not None:
            message += f": {self.reason}"
        if self.location is not None:
            message += (
                f" at line {self.location.line}, column {self.location.col}"
                f" (offset {self.location.position})"
            )
        return message


class LiteralMismatchError(ParseError):
    """
    The stream did not start with the expected literal.
    """

    pass


class UnexpectedEndError(ParseError):
    """
    The stream ended in the middle of something that was expected.
    """

    pass


class MissingRepetitionError(ParseError):
    """
    A repetition that requires at least one match found none.
    """

    pass


class NumericOverflowError(ParseError):
    """
    A decimal literal does not fit in the requested integer type.
    """

    pass


class TrailingInputError(ParseError):
    """
    End of stream was expected, but there is more input.
    """

    pass


class PositionUnavailableError(Exception):
    """
    Thrown when a PositionReader is created for a stream which is not at
    offset 0, as line and column can then not be determined.
    """

    pass
