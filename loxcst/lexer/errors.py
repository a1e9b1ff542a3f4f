"""
Diagnostics for the loxcst lexer.

The lexer never raises on bad input: unrecognized text becomes an error-kind
token. The records in this module describe those tokens (and a few
suspicious-but-valid ones) for error reporting, without changing the token
stream.
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass(frozen=True)
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


# Lexical diagnostic codes
ERROR_CODES = {
    "L001": "Unexpected input",
    "L002": "Unterminated string literal",
    "L011": "Unterminated block comment",
}


def create_unexpected_input_error(text: str, location: SourceLocation) -> Diagnostic:
    """Describe an ERROR_UNEXPECTED token."""
    if len(text) == 1 and not text.isprintable():
        help_text = f"Non-printable character (Unicode: U+{ord(text):04X}) is not allowed."
    else:
        help_text = f"{text!r} does not start any token of the language."

    return Diagnostic(
        message=f"Unexpected input: {text!r}",
        location=location,
        severity="error",
        code="L001",
        help_text=help_text,
    )


def create_unterminated_string_error(location: SourceLocation) -> Diagnostic:
    """Describe an ERROR_UNTERMINATED_STRING token."""
    return Diagnostic(
        message="Unterminated string literal",
        location=location,
        severity="error",
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote'],
    )


def create_unterminated_block_comment_warning(location: SourceLocation) -> Diagnostic:
    """
    Describe a block comment that runs to the end of input.

    The token is still a BLOCK_COMMENT; only the diagnostic records that its
    closing */ is missing.
    """
    return Diagnostic(
        message="Unterminated block comment",
        location=location,
        severity="warning",
        code="L011",
        help_text="The comment extends to the end of the input.",
        suggestions=["Add a closing */"],
    )
