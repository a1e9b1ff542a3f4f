"""
loxcst - lossless front end for a small expression language

Architecture:
    loxcst/
    ├── lexer/           # Lossless tokenization
    ├── parser/          # Syntax kinds, green tree, parser, syntax tree view
    └── cli.py           # File / prompt entry point

Typical use:

    from loxcst import lex, parse
    result = parse(lex("1 + 2"))
    print(result.syntax().debug_dump())
    print(result.errors)

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenKind, lex
from .parser import (
    Parser, ParseResult, SyntaxKind, SyntaxNode, SyntaxToken, GreenNode,
    GreenNodeBuilder, parse, parse_string
)

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParseResult",

    # Data model
    "Token",
    "TokenKind",
    "SyntaxKind",
    "GreenNode",
    "GreenNodeBuilder",
    "SyntaxNode",
    "SyntaxToken",

    # Functions
    "lex",
    "parse",
    "parse_string",

    # Version info
    "__version__",
    "__license__",
]
