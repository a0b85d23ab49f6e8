"""
Token definitions for the Mython lexer.

This module defines all token types supported by Mython:
- Valued tokens (numbers, identifiers, single characters, strings)
- Keywords
- Two-character comparison operators
- Structural markers (newline, indent, dedent, end of file)

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Optional, Union


class TokenType(Enum):
    """
    Enumeration of all token types in Mython.

    The value of each member is the name used in the debug text form.
    """

    # ========================================================================
    # Valued Tokens
    # ========================================================================
    NUMBER = "Number"               # 42
    ID = "Identifier"               # variable_name
    CHAR = "SingleChar"             # ( ) : + - etc.
    STRING = "StringLiteral"        # "hello", 'world'

    # ========================================================================
    # Keywords
    # ========================================================================
    CLASS = "Class"                 # class
    RETURN = "Return"               # return
    IF = "If"                       # if
    ELSE = "Else"                   # else
    DEF = "Def"                     # def
    PRINT = "Print"                 # print
    AND = "And"                     # and
    OR = "Or"                       # or
    NOT = "Not"                     # not
    NONE = "None"                   # None
    TRUE = "True"                   # True
    FALSE = "False"                 # False

    # ========================================================================
    # Comparison Operators
    # ========================================================================
    EQ = "Eq"                       # ==
    NOT_EQ = "NotEq"                # !=
    LESS_OR_EQ = "LessOrEq"         # <=
    GREATER_OR_EQ = "GreaterOrEq"   # >=

    # ========================================================================
    # Structural Tokens
    # ========================================================================
    NEWLINE = "Newline"             # end of logical line
    INDENT = "Indent"               # indentation increase (one level)
    DEDENT = "Dedent"               # indentation decrease (one level)
    EOF = "Eof"                     # end of file

    def __str__(self) -> str:
        return self.value

    @property
    def is_valued(self) -> bool:
        """Check if tokens of this type carry a payload."""
        return self in VALUED_TYPES


# Payload type required by each valued token type
VALUED_TYPES = MappingProxyType({
    TokenType.NUMBER: int,
    TokenType.ID: str,
    TokenType.CHAR: str,
    TokenType.STRING: str,
})

KEYWORD_TYPES = frozenset({
    TokenType.CLASS, TokenType.RETURN, TokenType.IF, TokenType.ELSE,
    TokenType.DEF, TokenType.PRINT, TokenType.AND, TokenType.OR,
    TokenType.NOT, TokenType.NONE, TokenType.TRUE, TokenType.FALSE,
})

OPERATOR_TYPES = frozenset({
    TokenType.EQ, TokenType.NOT_EQ, TokenType.LESS_OR_EQ, TokenType.GREATER_OR_EQ,
})

STRUCTURAL_TYPES = frozenset({
    TokenType.NEWLINE, TokenType.INDENT, TokenType.DEDENT, TokenType.EOF,
})

Payload = Union[int, str, None]


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Mython language.

    Two tokens are equal when they have the same type and, for valued
    types, equal payloads. The source location never takes part in
    equality, so tokens produced by the lexer compare equal to tokens
    built by hand in a parser or a test.
    """
    type: TokenType
    value: Payload = None
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        expected = VALUED_TYPES.get(self.type)
        if expected is None:
            if self.value is not None:
                raise TypeError(f"{self.type} token takes no value, got {self.value!r}")
            return

        # bool is an int subclass but never a valid Number payload
        if not isinstance(self.value, expected) or isinstance(self.value, bool):
            raise TypeError(
                f"{self.type} token requires a {expected.__name__} value, got {self.value!r}"
            )
        if self.type is TokenType.CHAR and len(self.value) != 1:
            raise ValueError(f"SingleChar token requires exactly one character, got {self.value!r}")

    def __str__(self) -> str:
        if self.type.is_valued:
            return f"{self.type.value}{{{self.value}}}"
        return self.type.value

    def __repr__(self) -> str:
        if self.type.is_valued:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"

    def is_type(self, token_type: TokenType) -> bool:
        """Check if this token has the given type."""
        return self.type is token_type

    def value_as(self, token_type: TokenType) -> Payload:
        """
        Return the payload, checking that the token has the given type.

        Raises:
            TypeError: If the token is of a different type
        """
        if self.type is not token_type:
            raise TypeError(f"Expected {token_type} token, got {self}")
        return self.value

    def try_value(self, token_type: TokenType) -> Payload:
        """Return the payload if the token has the given type, else None."""
        if self.type is token_type:
            return self.value
        return None

    @property
    def is_valued(self) -> bool:
        """Check if this token carries a payload."""
        return self.type.is_valued

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is a two-character operator."""
        return self.type in OPERATOR_TYPES

    @property
    def is_structural(self) -> bool:
        """Check if this token is a newline, indent, dedent or end of file."""
        return self.type in STRUCTURAL_TYPES

    def at(self, location: SourceLocation) -> "Token":
        """Return a copy of this token bound to a source location."""
        return Token(self.type, self.value, location)


# Lookup tables for keyword and operator recognition.
# Built once at import time and read-only afterwards.

KEYWORDS = MappingProxyType({
    "class": Token(TokenType.CLASS),
    "return": Token(TokenType.RETURN),
    "if": Token(TokenType.IF),
    "else": Token(TokenType.ELSE),
    "def": Token(TokenType.DEF),
    "print": Token(TokenType.PRINT),
    "and": Token(TokenType.AND),
    "or": Token(TokenType.OR),
    "not": Token(TokenType.NOT),
    "None": Token(TokenType.NONE),
    "True": Token(TokenType.TRUE),
    "False": Token(TokenType.FALSE),
})

DUAL_SYMBOLS = MappingProxyType({
    "==": Token(TokenType.EQ),
    "!=": Token(TokenType.NOT_EQ),
    "<=": Token(TokenType.LESS_OR_EQ),
    ">=": Token(TokenType.GREATER_OR_EQ),
})


def format_tokens(tokens: Iterable["Token"]) -> str:
    """Join the debug text forms of tokens with single spaces."""
    return " ".join(str(token) for token in tokens)
