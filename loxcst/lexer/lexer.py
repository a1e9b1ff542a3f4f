"""
loxcst Lexer - turns source text into a lossless token list

Every code point of the input ends up in exactly one token. Whitespace,
newlines and comments are tokens too, and anything the lexer cannot
classify becomes an ERROR_UNEXPECTED token instead of an exception, so
tokenize() always succeeds.
"""

import logging
import re
from typing import Callable, List, Optional

from .tokens import (
    Token, TokenKind, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS,
    TWO_CHAR_OPERATORS, WHITESPACE_CHARS
)
from .errors import (
    Diagnostic, create_unexpected_input_error, create_unterminated_string_error,
    create_unterminated_block_comment_warning
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    loxcst lexical analyzer.

    Greedy longest match, one token per step, always working on the
    unconsumed rest of the input.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Decoded source text
            filename: Name of source file for diagnostics
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.tokens: List[Token] = []
        self.diagnostics: List[Diagnostic] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.whitespace_pattern = re.compile(r'[ \r\t]+')
        self.line_comment_pattern = re.compile(r'//[^\n]*')
        # an unclosed comment runs to the end of input
        self.block_comment_pattern = re.compile(r'/\*.*?(?:\*/|\Z)', re.DOTALL)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens whose texts concatenate to the source
        """
        self.pos = 0
        self.tokens = []
        self.diagnostics = []
        location = SourceLocation(self.filename, 1, 1, 0)

        while self.pos < len(self.source):
            token = self._next_valid_token(self.pos) or self._invalid_token()
            self._record_diagnostics(token, location)
            self.tokens.append(token)
            self.pos += len(token.text)
            location = location.advanced_by(token.text)

        assert sum(len(t.text) for t in self.tokens) == len(self.source), \
            "lexer did not consume the whole input"

        logger.debug("lexed %d tokens from %s (%d diagnostics)",
                     len(self.tokens), self.filename, len(self.diagnostics))
        return self.tokens

    def _next_valid_token(self, pos: int) -> Optional[Token]:
        """Recognize the token starting at ``pos``, or None if nothing does."""
        source = self.source
        char = source[pos]

        if char in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[char], char)

        if char in TWO_CHAR_OPERATORS:
            second, pair_kind, single_kind = TWO_CHAR_OPERATORS[char]
            if source.startswith(second, pos + 1):
                return Token(pair_kind, source[pos:pos + 2])
            return Token(single_kind, char)

        if char == '/':
            if source.startswith('/', pos + 1):
                match = self.line_comment_pattern.match(source, pos)
                return Token(TokenKind.LINE_COMMENT, match.group(0))
            if source.startswith('*', pos + 1):
                match = self.block_comment_pattern.match(source, pos)
                return Token(TokenKind.BLOCK_COMMENT, match.group(0))
            return Token(TokenKind.SLASH, char)

        if char in WHITESPACE_CHARS:
            match = self.whitespace_pattern.match(source, pos)
            return Token(TokenKind.WHITESPACE, match.group(0))

        if char == '\n':
            return Token(TokenKind.NEWLINE, char)

        if char == '"':
            return self._tokenize_string(pos)

        if char.isdigit():
            return self._tokenize_number(pos)

        if self._is_identifier_start(char):
            return self._tokenize_identifier_or_keyword(pos)

        return None

    def _invalid_token(self) -> Token:
        """
        Collect a run of unrecognized input into one ERROR_UNEXPECTED token.

        Consumes at least one code point, then stops at the first position
        where a valid token can be recognized.
        """
        end = self.pos + 1
        while end < len(self.source) and self._next_valid_token(end) is None:
            end += 1
        return Token(TokenKind.ERROR_UNEXPECTED, self.source[self.pos:end])

    def _tokenize_string(self, pos: int) -> Token:
        """Tokenize a string literal; no escape sequences exist."""
        close = self.source.find('"', pos + 1)
        if close == -1:
            return Token(TokenKind.ERROR_UNTERMINATED_STRING, self.source[pos:])
        return Token(TokenKind.STRING, self.source[pos:close + 1])

    def _tokenize_number(self, pos: int) -> Token:
        """
        Tokenize a number: digits and underscores, then an optional fraction.

        The fraction is only taken when the dot is followed by a digit, so
        ``1.`` lexes as NUMBER then DOT.
        """
        end = self._scan_while(pos + 1, _is_number_continue)
        if (end + 1 < len(self.source) and self.source[end] == '.'
                and self.source[end + 1].isdigit()):
            end = self._scan_while(end + 2, _is_number_continue)
        return Token(TokenKind.NUMBER, self.source[pos:end])

    def _tokenize_identifier_or_keyword(self, pos: int) -> Token:
        """Tokenize an identifier; exact, case-sensitive keyword lookup."""
        end = self._scan_while(pos + 1, self._is_identifier_continue)
        lexeme = self.source[pos:end]
        return Token(KEYWORDS.get(lexeme, TokenKind.IDENTIFIER), lexeme)

    def _scan_while(self, pos: int, predicate: Callable[[str], bool]) -> int:
        while pos < len(self.source) and predicate(self.source[pos]):
            pos += 1
        return pos

    def _is_identifier_start(self, char: str) -> bool:
        return char.isalpha() or char == '_'

    def _is_identifier_continue(self, char: str) -> bool:
        return char.isalnum() or char == '_'

    def _record_diagnostics(self, token: Token, location: SourceLocation):
        if token.kind == TokenKind.ERROR_UNEXPECTED:
            self.diagnostics.append(create_unexpected_input_error(token.text, location))
        elif token.kind == TokenKind.ERROR_UNTERMINATED_STRING:
            self.diagnostics.append(create_unterminated_string_error(location))
        elif token.kind == TokenKind.BLOCK_COMMENT and not is_closed_block_comment(token.text):
            self.diagnostics.append(create_unterminated_block_comment_warning(location))

    def has_errors(self) -> bool:
        """Check if the lexer produced any error-kind tokens."""
        return any(d.is_error for d in self.diagnostics)

    def has_warnings(self) -> bool:
        return any(d.severity == "warning" for d in self.diagnostics)


def _is_number_continue(char: str) -> bool:
    return char.isdigit() or char == '_'


def is_closed_block_comment(text: str) -> bool:
    """Check that a BLOCK_COMMENT token ends with its own closing */."""
    return len(text) >= 4 and text.endswith('*/')


def lex(source: str) -> List[Token]:
    """
    Tokenize a source string.

    Never fails: unrecognized input becomes error-kind tokens.
    """
    return Lexer(source).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        source = f.read()

    return Lexer(source, filepath).tokenize()
