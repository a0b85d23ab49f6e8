"""
Mython Package

Front end for Mython, a small Python-like teaching language.

Architecture:
    mython/
    └── lexer/           # Tokenization and lexical analysis

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@mython.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "LexerError",

    # Version info
    "__version__",
]
