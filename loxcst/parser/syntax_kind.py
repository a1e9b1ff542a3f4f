"""
Syntax kinds: one numeric namespace for tree leaves and tree nodes.

SyntaxKind contains every TokenKind under the same name and value, followed
by the composite kinds only the parser produces. ROOT is always last and
doubles as the upper bound when decoding raw integers.
"""

from enum import IntEnum

from ..lexer.tokens import TokenKind
from .errors import InvalidSyntaxKindError

# Composite kinds in value order; ROOT must stay last
COMPOSITE_KINDS = (
    "UNARY",
    "FACTOR",
    "TERM",
    "COMPARISON",
    "EQUALITY",
    "ROOT",
)

SyntaxKind = IntEnum(
    "SyntaxKind",
    [(kind.name, kind.value) for kind in TokenKind]
    + [(name, len(TokenKind) + i) for i, name in enumerate(COMPOSITE_KINDS)],
    module=__name__,
)
SyntaxKind.__doc__ = "Every TokenKind plus the composite node kinds, ROOT last."

_TOKEN_TO_SYNTAX = {kind: SyntaxKind[kind.name] for kind in TokenKind}
_SYNTAX_TO_TOKEN = {syntax: kind for kind, syntax in _TOKEN_TO_SYNTAX.items()}

assert max(SyntaxKind) is SyntaxKind.ROOT


def to_syntax_kind(kind: TokenKind) -> SyntaxKind:
    """Map a terminal kind to its SyntaxKind (same name, same value)."""
    return _TOKEN_TO_SYNTAX[kind]


def to_token_kind(kind: SyntaxKind) -> TokenKind:
    """
    Map a terminal SyntaxKind back to its TokenKind.

    Raises:
        InvalidSyntaxKindError: If ``kind`` is a composite kind
    """
    try:
        return _SYNTAX_TO_TOKEN[kind]
    except KeyError:
        raise InvalidSyntaxKindError(f"{kind.name} is a composite kind, not a token kind") from None


def syntax_kind_from_raw(raw: int) -> SyntaxKind:
    """
    Decode a raw integer into a SyntaxKind.

    The range is checked before conversion; anything above ROOT means the
    caller has a bug.

    Raises:
        InvalidSyntaxKindError: If ``raw`` is outside 0..ROOT
    """
    if not 0 <= raw <= SyntaxKind.ROOT:
        raise InvalidSyntaxKindError(
            f"raw syntax kind {raw} is outside 0..{int(SyntaxKind.ROOT)}"
        )
    return SyntaxKind(raw)


def is_terminal(kind: SyntaxKind) -> bool:
    return kind in _SYNTAX_TO_TOKEN


def is_composite(kind: SyntaxKind) -> bool:
    return kind not in _SYNTAX_TO_TOKEN
