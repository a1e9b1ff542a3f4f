"""
loxcst Parser Package

Error-tolerant recursive descent parser that builds a lossless concrete
syntax tree. The tree is immutable and structurally shared (the green tree);
a navigable view with parent links and offsets (the syntax tree) is derived
from it on demand.

Key Features:
- One numeric kind space shared by tokens and composite nodes
- Stack-based green tree builder with node interning
- Every token, trivia included, kept in the tree
- Syntax errors collected as messages and diagnostics, never raised
"""

from .syntax_kind import (
    SyntaxKind, COMPOSITE_KINDS, to_syntax_kind, to_token_kind, syntax_kind_from_raw,
    is_terminal, is_composite
)
from .green import GreenNode, GreenToken, GreenNodeBuilder, NodeCache, Checkpoint
from .syntax_tree import SyntaxNode, SyntaxToken, TextRange
from .parser import Parser, ParseResult, MAX_NESTING_DEPTH, parse, parse_string, parse_file
from .errors import InvalidSyntaxKindError, TreeBuilderError, PARSER_ERROR_CODES

__all__ = [
    # Core parser
    "Parser",
    "ParseResult",
    "MAX_NESTING_DEPTH",
    "parse",
    "parse_string",
    "parse_file",

    # Kinds
    "SyntaxKind", "COMPOSITE_KINDS", "to_syntax_kind", "to_token_kind",
    "syntax_kind_from_raw", "is_terminal", "is_composite",

    # Trees
    "GreenNode", "GreenToken", "GreenNodeBuilder", "NodeCache", "Checkpoint",
    "SyntaxNode", "SyntaxToken", "TextRange",

    # Error handling
    "InvalidSyntaxKindError", "TreeBuilderError", "PARSER_ERROR_CODES",
]
