"""
Error handling for the loxcst parser.

Syntax errors are never raised: the parser records a message plus a
Diagnostic and keeps going, so every parse produces a complete tree. The
exception classes here are for programming errors only (a bad raw kind,
unbalanced builder calls) and should never be caught inside loxcst.
"""

from typing import Optional

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic


class InvalidSyntaxKindError(ValueError):
    """Raised when an integer or kind does not decode to the expected SyntaxKind."""


class TreeBuilderError(RuntimeError):
    """Raised when GreenNodeBuilder calls are not properly nested."""


# Messages reported in ParseResult.errors
UNEXPECTED_TOKEN = "Unexpected token"
UNEXPECTED_EOF = "Unexpected EOF"
EXPECTED_EOF = "Expected EOF"

# Parser diagnostic codes
PARSER_ERROR_CODES = {
    "P001": UNEXPECTED_TOKEN,
    "P010": UNEXPECTED_EOF,
    "P013": EXPECTED_EOF,
    "P020": UNEXPECTED_TOKEN,
}


def create_unexpected_token_error(found: str, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for a token that cannot start an operand."""
    return Diagnostic(
        message=UNEXPECTED_TOKEN,
        location=location,
        severity="error",
        code="P001",
        help_text=f"Expected a number, string, true, false, nil or '(', found {found!r}.",
    )


def create_unexpected_eof_error(location: SourceLocation, expected: Optional[str] = None) -> Diagnostic:
    """Create a diagnostic for input that ends in the middle of an expression."""
    expected = expected or "an expression"
    return Diagnostic(
        message=UNEXPECTED_EOF,
        location=location,
        severity="error",
        code="P010",
        help_text=f"The input ended while expecting {expected}.",
        suggestions=[f"Add the missing {expected}"],
    )


def create_expected_eof_error(location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for leftover input after a complete expression."""
    return Diagnostic(
        message=EXPECTED_EOF,
        location=location,
        severity="error",
        code="P013",
        help_text="Only one expression is allowed; everything after it is unexpected.",
    )


def create_nesting_too_deep_error(limit: int, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for a '(' nested deeper than the parser descends."""
    return Diagnostic(
        message=UNEXPECTED_TOKEN,
        location=location,
        severity="error",
        code="P020",
        help_text=f"Parentheses are nested more than {limit} levels deep; "
                  "the rest of the input is not parsed.",
        suggestions=["Split the expression into smaller parts"],
    )
