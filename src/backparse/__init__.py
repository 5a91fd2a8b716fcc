import backparse.version
from _backparse.backtrack import backtrack, backtrack_on_fail
from _backparse.combinators import (
    And,
    AnyOf,
    Between,
    Exact,
    Lazy,
    Many,
    Map,
    Optional,
    Recursive,
    Then,
    With,
    WithPosition,
    any_of,
    lazy,
    rule,
)
from _backparse.errors import (
    LiteralMismatchError,
    MissingRepetitionError,
    NumericOverflowError,
    ParseError,
    PositionUnavailableError,
    TrailingInputError,
    UnexpectedEndError,
)
from _backparse.parser import Parser, as_parser
from _backparse.position_reader import Location, PositionReader
from _backparse.primitives import (
    decimal,
    eof,
    literal,
    non_neg_decimal,
    sign,
    spaces,
    string,
)
from _backparse.reading import open_source, parse

__author__ = """BackParse developers"""

__version__ = backparse.version.version

__all__ = [
    "And",
    "AnyOf",
    "Between",
    "Exact",
    "Lazy",
    "Location",
    "LiteralMismatchError",
    "Many",
    "Map",
    "MissingRepetitionError",
    "NumericOverflowError",
    "Optional",
    "ParseError",
    "Parser",
    "PositionReader",
    "PositionUnavailableError",
    "Recursive",
    "Then",
    "TrailingInputError",
    "UnexpectedEndError",
    "With",
    "WithPosition",
    "any_of",
    "as_parser",
    "backtrack",
    "backtrack_on_fail",
    "decimal",
    "eof",
    "lazy",
    "literal",
    "non_neg_decimal",
    "open_source",
    "parse",
    "rule",
    "sign",
    "spaces",
    "string",
]
