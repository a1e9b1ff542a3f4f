"""
loxcst Lexer Package

Lossless tokenizer for the loxcst expression language. Every code point of
the input lands in exactly one token, trivia included, and unrecognized
input becomes an error token rather than an exception.

Key Features:
- Greedy longest-match tokenization
- Whitespace, newline and comment tokens kept for lossless trees
- Error tokens for unexpected input and unterminated strings
- Diagnostics with source locations, recorded but never raised
"""

from .tokens import Token, TokenKind, SourceLocation, KEYWORDS, TRIVIA_KINDS, ERROR_KINDS
from .lexer import Lexer, lex, tokenize_file
from .errors import Diagnostic, ERROR_CODES

__all__ = [
    "Lexer",
    "lex",
    "tokenize_file",
    "Token",
    "TokenKind",
    "SourceLocation",
    "KEYWORDS",
    "TRIVIA_KINDS",
    "ERROR_KINDS",
    "Diagnostic",
    "ERROR_CODES",
]
