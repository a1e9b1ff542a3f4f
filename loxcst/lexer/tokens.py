"""
Token definitions for the loxcst lexer.

This module defines every terminal kind the lexer can produce:
- Single-character punctuation and one-or-two character operators
- Literals (identifiers, strings, numbers)
- Keywords
- Trivia (whitespace, newlines, comments), which is kept so trees are lossless
- Error kinds for input the lexer could not classify

The numeric value of each TokenKind is significant: SyntaxKind reuses the
same values for terminals, so the declaration order below must not change
without updating the syntax kinds as well.
"""

from enum import IntEnum
from dataclasses import dataclass


class TokenKind(IntEnum):
    """
    Enumeration of all terminal kinds, numbered from zero in declaration order.
    """

    # ========================================================================
    # Single character
    # ========================================================================
    LEFT_PAREN = 0                  # (
    RIGHT_PAREN = 1                 # )
    LEFT_BRACE = 2                  # {
    RIGHT_BRACE = 3                 # }
    COMMA = 4                       # ,
    DOT = 5                         # .
    MINUS = 6                       # -
    PLUS = 7                        # +
    SEMICOLON = 8                   # ;
    SLASH = 9                       # /
    STAR = 10                       # *

    # ========================================================================
    # One or two character
    # ========================================================================
    BANG = 11                       # !
    BANG_EQUAL = 12                 # !=
    EQUAL = 13                      # =
    EQUAL_EQUAL = 14                # ==
    GREATER = 15                    # >
    GREATER_EQUAL = 16              # >=
    LESS = 17                       # <
    LESS_EQUAL = 18                 # <=

    # ========================================================================
    # Literals
    # ========================================================================
    IDENTIFIER = 19                 # name, _tmp, x1
    STRING = 20                     # "hello"
    NUMBER = 21                     # 42, 1_000, 3.14

    # ========================================================================
    # Keywords
    # ========================================================================
    AND = 22
    CLASS = 23
    ELSE = 24
    FALSE = 25
    FN = 26
    FOR = 27
    IF = 28
    NIL = 29
    OR = 30
    PRINT = 31
    RETURN = 32
    SUPER = 33
    THIS = 34
    TRUE = 35
    VAR = 36
    WHILE = 37

    # ========================================================================
    # Trivia
    # ========================================================================
    LINE_COMMENT = 38               # // up to the end of the line
    BLOCK_COMMENT = 39              # /* ... */
    WHITESPACE = 40                 # runs of space, tab, carriage return
    NEWLINE = 41                    # a single \n

    # ========================================================================
    # Error tokens
    # ========================================================================
    ERROR_UNEXPECTED = 42           # run of unrecognized input
    ERROR_UNTERMINATED_STRING = 43  # string literal missing its closing quote


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for diagnostics only; tokens themselves carry no position so that
    equal text always produces equal tokens.
    """
    filename: str
    line: int
    column: int
    offset: int  # Code point offset from start of input

    def advanced_by(self, text: str) -> "SourceLocation":
        """Return the location just past ``text`` when it starts here."""
        newlines = text.count('\n')
        if newlines:
            column = len(text) - text.rfind('\n')
        else:
            column = self.column + len(text)
        return SourceLocation(self.filename, self.line + newlines, column, self.offset + len(text))

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A classified, exact slice of the source text.

    Concatenating the text of every token the lexer produces, in order,
    gives back the original input.
    """
    kind: TokenKind
    text: str

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text!r})"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r})"

    @property
    def is_trivia(self) -> bool:
        """Check if this token is whitespace, a newline or a comment."""
        return self.kind in TRIVIA_KINDS

    @property
    def is_error(self) -> bool:
        """Check if this token holds input the lexer could not classify."""
        return self.kind in ERROR_KINDS

    @property
    def is_keyword(self) -> bool:
        return self.kind in KEYWORD_KINDS

    @property
    def is_literal(self) -> bool:
        return self.kind in LITERAL_KINDS


# Lookup tables used by the lexer and parser

SINGLE_CHAR_TOKENS = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# first char -> (second char, two-char kind, one-char fallback)
TWO_CHAR_OPERATORS = {
    "!": ("=", TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": ("=", TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    "<": ("=", TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": ("=", TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}

KEYWORDS = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "fn": TokenKind.FN,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}

KEYWORD_KINDS = frozenset(KEYWORDS.values())

WHITESPACE_CHARS = frozenset(" \r\t")

TRIVIA_KINDS = frozenset({
    TokenKind.LINE_COMMENT,
    TokenKind.BLOCK_COMMENT,
    TokenKind.WHITESPACE,
    TokenKind.NEWLINE,
})

ERROR_KINDS = frozenset({
    TokenKind.ERROR_UNEXPECTED,
    TokenKind.ERROR_UNTERMINATED_STRING,
})

LITERAL_KINDS = frozenset({
    TokenKind.NUMBER,
    TokenKind.STRING,
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.NIL,
})
