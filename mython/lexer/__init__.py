"""
Mython Lexer Package

Implements the lexical analyzer (tokenizer) for Mython, a small
Python-like teaching language. The lexer is indentation-sensitive:
leading spaces become Indent/Dedent tokens that mark block structure.

Key Features:
- Pull-based token stream with a single current token
- Indent/Dedent tokens driven by 2-space indentation levels
- Keyword and two-character operator recognition
- Expect helpers for the parser, with diagnostics on mismatch
- Source location tracking for error reporting

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, DUAL_SYMBOLS, format_tokens
from .config import LexerConfig, OverflowPolicy, EscapePolicy
from .stream import CharStream
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexerError, UnterminatedStringError, NumberOverflowError, TokenMismatchError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "CharStream",
    "KEYWORDS",
    "DUAL_SYMBOLS",
    "LexerConfig",
    "OverflowPolicy",
    "EscapePolicy",
    "LexerError",
    "UnterminatedStringError",
    "NumberOverflowError",
    "TokenMismatchError",
    "tokenize_string",
    "tokenize_file",
    "format_tokens",
]
