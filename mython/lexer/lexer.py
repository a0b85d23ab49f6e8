"""
Mython Lexer - turns source text into tokens for the parser

The lexer is pull-based: it always holds exactly one current token and
produces the next one on demand. Block structure comes from leading
spaces (two per level by default), which the lexer turns into
Indent/Dedent tokens one level at a time.

xwest
"""

import logging
from typing import Iterator, List, Optional, TextIO, Union

from .tokens import Token, TokenType, KEYWORDS, DUAL_SYMBOLS
from .config import LexerConfig, DEFAULT_CONFIG
from .errors import TokenMismatchError
from .stream import CharStream, EOF
from . import scanning

log = logging.getLogger(__name__)

Source = Union[str, TextIO, CharStream]


class Lexer:
    """
    Mython lexical analyzer.

    Reads a character stream and produces tokens one at a time. The first
    token is available right after construction.
    """

    def __init__(
        self,
        source: Source,
        filename: str = "<string>",
        config: Optional[LexerConfig] = None
    ):
        """
        Initialize the lexer and read the first token.

        Args:
            source: Source text, a readable text file or a CharStream
            filename: Name of source file for error reporting
            config: Lexer options, DEFAULT_CONFIG if omitted
        """
        if isinstance(source, CharStream):
            self.stream = source
        else:
            self.stream = CharStream(source, filename)
        self.config = config or DEFAULT_CONFIG

        self.start_of_line = True   # No significant token on this line yet
        self.current_indent = 0     # Indent levels emitted and not yet closed
        self.line_indent = 0        # Indent level measured on this line

        log.debug("Lexer created for %s (indent width %d)",
                  self.stream.filename, self.config.indent_width)

        self._current_token: Token = self._read_next_token()

    def current_token(self) -> Token:
        """Return the current token, Eof once the input is exhausted."""
        return self._current_token

    def next_token(self) -> Token:
        """Read the next token, make it current and return it."""
        self._current_token = self._read_next_token()
        return self._current_token

    def expect(self, token_type: TokenType):
        """
        Check the current token's type and return its value.

        Unvalued token types return None.

        Raises:
            TokenMismatchError: If the current token has another type
        """
        token = self._current_token
        if token.type is not token_type:
            raise TokenMismatchError(token_type, token, self._token_location(token))
        return token.value

    def expect_value(self, token_type: TokenType, value) -> None:
        """
        Check that the current token has the given type and value.

        Raises:
            TokenMismatchError: If the type or the value differs
        """
        token = self._current_token
        # True == 1 in Python, but a bool never matches a Number payload
        if token.type is not token_type or isinstance(value, bool) or token.value != value:
            raise TokenMismatchError(
                token_type, token, self._token_location(token),
                expected_value=value, check_value=True
            )

    def expect_next(self, token_type: TokenType):
        """Read the next token, then expect(token_type)."""
        self.next_token()
        return self.expect(token_type)

    def expect_next_value(self, token_type: TokenType, value) -> None:
        """Read the next token, then expect_value(token_type, value)."""
        self.next_token()
        self.expect_value(token_type, value)

    def __iter__(self) -> Iterator[Token]:
        """Yield the current token and every following one up to Eof."""
        token = self._current_token
        while True:
            yield token
            if token.type is TokenType.EOF:
                return
            token = self.next_token()

    def tokenize(self) -> List[Token]:
        """Return the current and all remaining tokens, ending with Eof."""
        return list(self)

    def _token_location(self, token: Token):
        return token.location or self.stream.location()

    def _read_next_token(self) -> Token:
        """
        Produce one token.

        Blank lines, comments and spaces produce nothing by themselves,
        so the loop keeps going until some branch yields a token.
        """
        while True:
            char = self.stream.peek()

            if char == EOF:
                return self._parse_eof()

            if char == "\n":
                if self.start_of_line:
                    # Blank line
                    self._next_line()
                    continue
                location = self.stream.location()
                self._next_line()
                return Token(TokenType.NEWLINE, location=location)

            if char == "#":
                scanning.skip_comment(self.stream)
                continue

            if char == " ":
                spaces = scanning.count_spaces(self.stream)
                if self.start_of_line:
                    self.line_indent = spaces // self.config.indent_width
                continue

            if self.start_of_line and self.current_indent != self.line_indent:
                return self._parse_indent()

            token = self._parse_token()
            self.start_of_line = False
            return token

    def _next_line(self):
        scanning.read_line(self.stream)
        self.start_of_line = True
        self.line_indent = 0

    def _parse_eof(self) -> Token:
        location = self.stream.location()

        # Last line has no trailing newline
        if not self.start_of_line:
            self._next_line()
            return Token(TokenType.NEWLINE, location=location)

        # Close the blocks that are still open
        if self.current_indent > 0:
            self.current_indent -= 1
            log.debug("%s: Dedent at end of input, depth now %d", location, self.current_indent)
            return Token(TokenType.DEDENT, location=location)

        return Token(TokenType.EOF, location=location)

    def _parse_indent(self) -> Token:
        location = self.stream.location()
        if self.current_indent < self.line_indent:
            self.current_indent += 1
            token_type = TokenType.INDENT
        else:
            self.current_indent -= 1
            token_type = TokenType.DEDENT
        log.debug("%s: %s, depth now %d (line depth %d)",
                  location, token_type, self.current_indent, self.line_indent)
        return Token(token_type, location=location)

    def _parse_token(self) -> Token:
        char = self.stream.peek()
        location = self.stream.location()

        if scanning.is_digit(char):
            return Token(TokenType.NUMBER, scanning.read_number(self.stream, self.config), location)

        if scanning.is_identifier_char(char):
            name = scanning.read_name(self.stream)
            keyword = KEYWORDS.get(name)
            if keyword is not None:
                return keyword.at(location)
            return Token(TokenType.ID, name, location)

        if char in scanning.QUOTES:
            return Token(TokenType.STRING, scanning.read_string(self.stream, self.config), location)

        return self._parse_char(location)

    def _parse_char(self, location) -> Token:
        first = self.stream.get()
        pair = first + self.stream.peek()
        operator = DUAL_SYMBOLS.get(pair)
        if operator is not None:
            self.stream.get()
            return operator.at(location)
        return Token(TokenType.CHAR, first, location)


def tokenize_string(
    source: str,
    filename: str = "<string>",
    config: Optional[LexerConfig] = None
) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        config: Lexer options

    Returns:
        List of tokens ending with Eof

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename, config).tokenize()


def tokenize_file(filepath: str, config: Optional[LexerConfig] = None) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file
        config: Lexer options

    Returns:
        List of tokens ending with Eof

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath, config)
