"""
Character classifiers and scanning primitives for the Mython lexer.

Classifiers only recognize ASCII; any other character (and the empty
end-of-input marker) is rejected. Each primitive consumes exactly the
characters of its lexeme and leaves the stream right after it.

Author: xwest
"""

import logging
import string

from .config import LexerConfig, EscapePolicy, OverflowPolicy, DEFAULT_CONFIG
from .errors import UnterminatedStringError, NumberOverflowError
from .stream import CharStream, EOF

log = logging.getLogger(__name__)

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_ALNUM = _DIGITS | _LETTERS
_IDENTIFIER_CHARS = _ALNUM | {"_"}

QUOTES = frozenset("'\"")

ESCAPE_SEQUENCES = {
    '"': '"',
    "'": "'",
    "n": "\n",
    "t": "\t",
}


def is_digit(char: str) -> bool:
    return char in _DIGITS


def is_alpha(char: str) -> bool:
    return char in _LETTERS


def is_alnum(char: str) -> bool:
    return char in _ALNUM


def is_identifier_char(char: str) -> bool:
    """Letter, digit or underscore."""
    return char in _IDENTIFIER_CHARS


def read_string(stream: CharStream, config: LexerConfig = DEFAULT_CONFIG) -> str:
    """
    Read a quoted string literal and return its decoded text.

    The stream must be positioned on the opening quote (' or "). The
    literal ends at the next unescaped occurrence of the same quote.

    Raises:
        UnterminatedStringError: If the input ends before the closing quote
    """
    location = stream.location()
    quote = stream.get()
    chars = []

    while True:
        char = stream.get()
        if char == EOF:
            raise UnterminatedStringError(quote, "".join(chars), location)

        if char == "\\":
            escaped = stream.get()
            if escaped == EOF:
                raise UnterminatedStringError(quote, "".join(chars), location)

            if escaped in ESCAPE_SEQUENCES:
                chars.append(ESCAPE_SEQUENCES[escaped])
            elif config.unknown_escape is EscapePolicy.LITERAL:
                chars.append(escaped)
            else:
                log.warning("%s: dropping unknown escape sequence \\%s", location, escaped)
        elif char == quote:
            break
        else:
            chars.append(char)

    return "".join(chars)


def read_name(stream: CharStream) -> str:
    """Read a run of identifier characters."""
    chars = []
    while is_identifier_char(stream.peek()):
        chars.append(stream.get())
    return "".join(chars)


def read_number(stream: CharStream, config: LexerConfig = DEFAULT_CONFIG) -> int:
    """
    Read a run of decimal digits and return its value, or 0 if there are none.

    Raises:
        NumberOverflowError: If the value is out of range and the overflow
            policy is ERROR
    """
    location = stream.location()
    digits = []
    while is_digit(stream.peek()):
        digits.append(stream.get())

    if not digits:
        return 0

    lexeme = "".join(digits)
    value = int(lexeme)
    if config.int_min <= value <= config.int_max:
        return value

    if config.overflow is OverflowPolicy.ERROR:
        raise NumberOverflowError(lexeme, config.int_min, config.int_max, location)

    clamped = config.clamp_int(value)
    log.warning("%s: number literal %s out of range, using %d", location, lexeme, clamped)
    return clamped


def count_spaces(stream: CharStream) -> int:
    """Consume a run of space characters and return how many there were."""
    count = 0
    while stream.peek() == " ":
        stream.get()
        count += 1
    return count


def read_line(stream: CharStream) -> str:
    """
    Consume the rest of the current line, including its newline.

    Returns the line text without the newline.
    """
    chars = []
    while True:
        char = stream.get()
        if char == EOF or char == "\n":
            break
        chars.append(char)
    return "".join(chars)


def skip_comment(stream: CharStream) -> str:
    """
    Consume a comment up to, but not including, the end of the line.

    Returns the comment text including the leading '#'.
    """
    chars = []
    while True:
        char = stream.get()
        if char == EOF:
            break
        if char == "\n":
            stream.unget()
            break
        chars.append(char)
    return "".join(chars)
