"""
loxcst recursive descent parser

Consumes the lexer's token list left to right and drives a GreenNodeBuilder
in lockstep, so every token (trivia and error tokens included) ends up in
the tree exactly once. Syntax errors never stop the parse: they are
recorded, the offending region is wrapped in an ERROR_UNEXPECTED node, and
the caller always gets a complete tree plus the list of problems.

Grammar, lowest precedence first, binary operators left-associative:

    expression -> equality
    equality   -> comparison ( ( "!=" | "==" ) comparison )*
    comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       -> factor ( ( "-" | "+" ) factor )*
    factor     -> unary ( ( "/" | "*" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from ..lexer.tokens import Token, TokenKind, SourceLocation, LITERAL_KINDS
from ..lexer.errors import Diagnostic
from ..lexer.lexer import Lexer
from .green import GreenNode, GreenNodeBuilder, NodeCache
from .syntax_kind import SyntaxKind, to_syntax_kind
from .syntax_tree import SyntaxNode
from .errors import (
    UNEXPECTED_TOKEN, UNEXPECTED_EOF, EXPECTED_EOF, create_unexpected_token_error,
    create_unexpected_eof_error, create_expected_eof_error, create_nesting_too_deep_error
)

logger = logging.getLogger(__name__)

# Trivia the grammar looks past; NEWLINE is left alone because it ends a statement
SKIPPED_TRIVIA = frozenset({
    TokenKind.WHITESPACE,
    TokenKind.LINE_COMMENT,
    TokenKind.BLOCK_COMMENT,
})

EQUALITY_OPERATORS = frozenset({TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL})
COMPARISON_OPERATORS = frozenset({
    TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL,
})
TERM_OPERATORS = frozenset({TokenKind.MINUS, TokenKind.PLUS})
FACTOR_OPERATORS = frozenset({TokenKind.SLASH, TokenKind.STAR})
UNARY_OPERATORS = frozenset({TokenKind.BANG, TokenKind.MINUS})

# Each open '(' costs about a dozen Python frames; deeper input is not descended into
MAX_NESTING_DEPTH = 64


@dataclass(frozen=True)
class ParseResult:
    """
    The outcome of one parse: an immutable green tree and the syntax errors.

    ``errors`` holds the plain messages in the order they were found;
    ``diagnostics`` holds the same problems with codes and locations.
    """
    green_node: GreenNode
    errors: Tuple[str, ...]
    diagnostics: Tuple[Diagnostic, ...] = ()
    lex_diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def tree(self) -> GreenNode:
        return self.green_node

    def syntax(self) -> SyntaxNode:
        """Build a fresh navigable view of the tree."""
        return SyntaxNode.new_root(self.green_node)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def text(self) -> str:
        return self.green_node.text()


class Parser:
    """
    loxcst expression parser.

    Each grammar rule is a method; the Python call stack is the parser's
    only stack, so parenthesized groups are limited to MAX_NESTING_DEPTH
    levels. The cursor only moves forward, and every rule either consumes a
    token or stops at end of input, so parsing always terminates.
    """

    def __init__(self, tokens: Sequence[Token], filename: str = "<unknown>",
                 cache: Optional[NodeCache] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Complete token list from the lexer, trivia included
            filename: Name used in diagnostic locations
            cache: Node cache to share green elements with other parses
        """
        self.tokens = list(tokens)
        self.current = 0
        self.builder = GreenNodeBuilder(cache)
        self.errors: List[str] = []
        self.diagnostics: List[Diagnostic] = []
        self._location = SourceLocation(filename, 1, 1, 0)
        self._depth = 0
        self._abandoned = False

    def parse(self) -> ParseResult:
        """
        Parse the whole token list.

        Returns:
            ParseResult with a ROOT node covering every token
        """
        self.builder.start_node(SyntaxKind.ROOT)
        self._expression()

        # trailing trivia and newlines terminate the expression
        while self._current() in SKIPPED_TRIVIA or self._current() == TokenKind.NEWLINE:
            self._bump()

        if not self._is_at_end():
            self._error(EXPECTED_EOF, create_expected_eof_error(self._location))
            self.builder.start_node(SyntaxKind.ERROR_UNEXPECTED)
            while not self._is_at_end():
                self._bump()
            self.builder.finish_node()

        self.builder.finish_node()

        logger.debug("parsed %d tokens with %d errors", len(self.tokens), len(self.errors))
        return ParseResult(
            green_node=self.builder.finish(),
            errors=tuple(self.errors),
            diagnostics=tuple(self.diagnostics),
        )

    # Grammar rules

    def _expression(self):
        self._skip_trivia()
        self._equality()

    def _equality(self):
        self._binary(SyntaxKind.EQUALITY, self._comparison, EQUALITY_OPERATORS)

    def _comparison(self):
        self._binary(SyntaxKind.COMPARISON, self._term, COMPARISON_OPERATORS)

    def _term(self):
        self._binary(SyntaxKind.TERM, self._factor, TERM_OPERATORS)

    def _factor(self):
        self._binary(SyntaxKind.FACTOR, self._unary, FACTOR_OPERATORS)

    def _binary(self, kind: SyntaxKind, operand: Callable[[], None],
                operators: FrozenSet[TokenKind]):
        """
        Parse ``operand ( operator operand )*`` into one node of ``kind``.

        The node is emitted even when no operator follows. Trivia before an
        operator is only consumed once the operator is known to match, so
        it stays with the level that owns the operator.
        """
        self.builder.start_node(kind)
        operand()

        while self._peek_significant() in operators:
            self._skip_trivia()
            self._bump()
            self._skip_trivia()
            operand()

        self.builder.finish_node()

    def _unary(self):
        self._skip_trivia()

        # one nested UNARY node per prefix operator, opened in a loop
        prefixes = 0
        while self._current() in UNARY_OPERATORS:
            self.builder.start_node(SyntaxKind.UNARY)
            self._bump()
            self._skip_trivia()
            prefixes += 1

        self._primary()

        for _ in range(prefixes):
            self.builder.finish_node()

    def _primary(self):
        kind = self._current()

        if kind is None:
            self._unexpected_eof()
        elif kind in LITERAL_KINDS:
            self._bump()
        elif kind == TokenKind.LEFT_PAREN:
            if self._depth >= MAX_NESTING_DEPTH:
                self._too_deep()
                return
            self._depth += 1
            self._bump()
            self._expression()
            self._skip_trivia()
            if self._current() == TokenKind.RIGHT_PAREN:
                self._bump()
            elif self._is_at_end():
                self._unexpected_eof("')'")
            else:
                self._unexpected()
            self._depth -= 1
        else:
            self._unexpected()

    # Error recovery

    def _unexpected(self):
        """Wrap the current token in an ERROR_UNEXPECTED node and consume it."""
        token = self.tokens[self.current]
        self._error(UNEXPECTED_TOKEN, create_unexpected_token_error(token.text, self._location))
        self.builder.start_node(SyntaxKind.ERROR_UNEXPECTED)
        self._bump()
        self.builder.finish_node()

    def _unexpected_eof(self, expected: Optional[str] = None):
        """
        Record a missing token at end of input; consumes nothing.

        Not reported once the parse was abandoned by _too_deep(), which
        already accounts for every unclosed group.
        """
        if self._abandoned:
            return
        self._error(UNEXPECTED_EOF, create_unexpected_eof_error(self._location, expected))

    def _too_deep(self):
        """Wrap everything from the current '(' to end of input in one ERROR_UNEXPECTED node."""
        self._error(UNEXPECTED_TOKEN,
                    create_nesting_too_deep_error(MAX_NESTING_DEPTH, self._location))
        self._abandoned = True
        self.builder.start_node(SyntaxKind.ERROR_UNEXPECTED)
        while not self._is_at_end():
            self._bump()
        self.builder.finish_node()

    def _error(self, message: str, diagnostic: Diagnostic):
        self.errors.append(message)
        self.diagnostics.append(diagnostic)

    # Utility methods

    def _current(self) -> Optional[TokenKind]:
        """Kind of the first unconsumed token, or None at end of input."""
        if self._is_at_end():
            return None
        return self.tokens[self.current].kind

    def _peek_significant(self) -> Optional[TokenKind]:
        """Kind of the first unconsumed token that is not skippable trivia."""
        position = self.current
        while position < len(self.tokens) and self.tokens[position].kind in SKIPPED_TRIVIA:
            position += 1
        if position < len(self.tokens):
            return self.tokens[position].kind
        return None

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _bump(self):
        """Consume the current token and add it to the innermost open node."""
        token = self.tokens[self.current]
        self.current += 1
        self.builder.token(to_syntax_kind(token.kind), token.text)
        self._location = self._location.advanced_by(token.text)

    def _skip_trivia(self):
        while self._current() in SKIPPED_TRIVIA:
            self._bump()


def parse(tokens: Sequence[Token]) -> ParseResult:
    """Parse a token list produced by the lexer."""
    return Parser(tokens).parse()


def parse_string(source: str, filename: str = "<string>") -> ParseResult:
    """
    Convenience function to lex and parse a source string.

    Never raises for bad input; problems are reported in the result.
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()
    result = Parser(tokens, filename).parse()
    return replace(result, lex_diagnostics=tuple(lexer.diagnostics))


def parse_file(filepath: str) -> ParseResult:
    """
    Convenience function to parse a source file.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        source = f.read()

    return parse_string(source, filepath)
