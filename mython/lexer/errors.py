"""
Error handling for the Mython lexer.

Provides error reporting with source location information and
suggestions, so a parser can report lexer failures with its own context.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import Token, TokenType, SourceLocation, KEYWORDS


# Error codes and their default messages
ERROR_CODES = {
    "L002": "Unterminated string literal",
    "L007": "Number literal overflow",
    "L011": "Unexpected token",
}


@dataclass
class Diagnostic:
    """Diagnostic information attached to a lexer error."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        prefix = self.severity.upper()
        if self.code:
            prefix += f"[{self.code}]"
        result = f"{prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    The lexer that raised it must not be used any further.
    """

    def __init__(
        self,
        message: Optional[str],
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        if message is None:
            message = ERROR_CODES.get(code, "Lexer error")
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnterminatedStringError(LexerError):
    """A string literal reached the end of input before its closing quote."""

    def __init__(self, quote: str, partial: str, location: SourceLocation):
        super().__init__(
            message=None,
            location=location,
            code="L002",
            help_text=f"String literals must be closed with a matching {quote} quote.",
            suggestions=[f"Add a closing {quote} quote", "Check for unescaped quotes in the string"]
        )
        self.quote = quote
        self.partial = partial


class NumberOverflowError(LexerError):
    """An integer literal does not fit the configured range."""

    def __init__(self, lexeme: str, int_min: int, int_max: int, location: SourceLocation):
        super().__init__(
            message=f"Number literal overflow: '{lexeme}'",
            location=location,
            code="L007",
            help_text=f"Integer literals must lie between {int_min} and {int_max}."
        )
        self.lexeme = lexeme


class TokenMismatchError(LexerError):
    """The current token does not have the kind (or value) a caller expected."""

    def __init__(
        self,
        expected_type: TokenType,
        actual: Token,
        location: SourceLocation,
        expected_value=None,
        check_value: bool = False
    ):
        if check_value:
            expected = f"{expected_type.value}{{{expected_value}}}"
        else:
            expected = expected_type.value

        suggestions = None
        help_text = None
        if actual.type is TokenType.ID and not expected_type.is_valued:
            suggestions = ErrorRecovery.suggest_keyword_corrections(actual.value, expected_type) or None
            if suggestions:
                help_text = f"'{actual.value}' is an identifier; did you misspell a keyword?"

        super().__init__(
            message=f"Expected {expected}, got {actual}",
            location=location,
            code="L011",
            help_text=help_text,
            suggestions=suggestions
        )
        self.expected_type = expected_type
        self.expected_value = expected_value
        self.actual = actual


class ErrorRecovery:
    """
    Suggestion helpers for lexer diagnostics.
    """

    @staticmethod
    def suggest_keyword_corrections(word: str, expected_type: Optional[TokenType] = None) -> List[str]:
        """
        Suggest keywords close to a word using edit distance.

        If expected_type is a keyword type, only its keyword is considered.
        """
        candidates = [
            text for text, token in KEYWORDS.items()
            if expected_type is None or token.type is expected_type
        ]

        suggestions = []
        for keyword in candidates:
            distance = ErrorRecovery._edit_distance(word, keyword)
            if 0 < distance <= 2:  # Allow up to 2 character differences
                suggestions.append(keyword)

        return sorted(suggestions, key=lambda k: ErrorRecovery._edit_distance(word, k))[:3]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]
