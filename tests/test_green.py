"""
Test suite for syntax kinds and the green tree builder.

Tests cover:
- Shared numbering of token and syntax kinds
- Checked decoding of raw kind values
- Builder nesting, checkpoints and misuse
- Immutability and structural sharing of green elements
"""

import dataclasses
import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxcst.lexer import TokenKind
from loxcst.parser import (
    SyntaxKind, COMPOSITE_KINDS, GreenNode, GreenToken, GreenNodeBuilder, NodeCache, Checkpoint,
    InvalidSyntaxKindError, TreeBuilderError, to_syntax_kind, to_token_kind,
    syntax_kind_from_raw, is_terminal, is_composite
)

S = SyntaxKind


class TestSyntaxKind(unittest.TestCase):

    def test_terminals_share_values_with_token_kinds(self):
        for kind in TokenKind:
            with self.subTest(kind=kind.name):
                syntax = to_syntax_kind(kind)
                self.assertEqual(syntax.name, kind.name)
                self.assertEqual(int(syntax), int(kind))
                self.assertIs(to_token_kind(syntax), kind)

    def test_composite_kinds_follow_terminals(self):
        self.assertEqual(len(SyntaxKind), len(TokenKind) + len(COMPOSITE_KINDS))
        self.assertEqual(int(S.UNARY), len(TokenKind))
        self.assertEqual([S[name] for name in COMPOSITE_KINDS],
                         [S.UNARY, S.FACTOR, S.TERM, S.COMPARISON, S.EQUALITY, S.ROOT])

    def test_root_is_the_maximum(self):
        self.assertIs(max(SyntaxKind), S.ROOT)

    def test_decode_raw_values(self):
        self.assertIs(syntax_kind_from_raw(0), S.LEFT_PAREN)
        self.assertIs(syntax_kind_from_raw(int(S.ROOT)), S.ROOT)
        self.assertIs(syntax_kind_from_raw(TokenKind.NUMBER), S.NUMBER)

    def test_decode_out_of_range_is_a_programming_error(self):
        for raw in (int(S.ROOT) + 1, -1, 10_000):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidSyntaxKindError):
                    syntax_kind_from_raw(raw)

    def test_composite_has_no_token_kind(self):
        with self.assertRaises(InvalidSyntaxKindError):
            to_token_kind(S.TERM)

    def test_terminal_and_composite_predicates(self):
        self.assertTrue(is_terminal(S.PLUS))
        self.assertTrue(is_terminal(S.ERROR_UNEXPECTED))
        self.assertFalse(is_terminal(S.ROOT))
        self.assertTrue(is_composite(S.FACTOR))
        self.assertFalse(is_composite(S.WHITESPACE))


class TestGreenNodeBuilder(unittest.TestCase):

    def setUp(self):
        self.builder = GreenNodeBuilder()

    def test_builds_nested_tree(self):
        b = self.builder
        b.start_node(S.ROOT)
        b.start_node(S.TERM)
        b.token(S.NUMBER, "1")
        b.token(S.PLUS, "+")
        b.token(S.NUMBER, "2")
        b.finish_node()
        b.token(S.NEWLINE, "\n")
        b.finish_node()
        root = b.finish()

        self.assertEqual(root.kind, S.ROOT)
        self.assertEqual(len(root.children), 2)
        term = root.children[0]
        self.assertEqual(term.kind, S.TERM)
        self.assertEqual([c.text for c in term.children], ["1", "+", "2"])
        self.assertEqual(root.text(), "1+2\n")
        self.assertEqual(root.text_len, 4)

    def test_empty_node(self):
        self.builder.start_node(S.ROOT)
        self.builder.finish_node()
        root = self.builder.finish()
        self.assertEqual(root.children, ())
        self.assertEqual(root.text(), "")

    def test_finish_node_without_open_node(self):
        with self.assertRaises(TreeBuilderError):
            self.builder.finish_node()

    def test_token_without_open_node(self):
        with self.assertRaises(TreeBuilderError):
            self.builder.token(S.NUMBER, "1")

    def test_finish_with_unclosed_nodes(self):
        self.builder.start_node(S.ROOT)
        self.builder.start_node(S.TERM)
        self.builder.finish_node()
        with self.assertRaises(TreeBuilderError) as ctx:
            self.builder.finish()
        self.assertIn("ROOT", str(ctx.exception))

    def test_finish_without_root(self):
        with self.assertRaises(TreeBuilderError):
            self.builder.finish()

    def test_second_root_is_rejected(self):
        self.builder.start_node(S.ROOT)
        self.builder.finish_node()
        with self.assertRaises(TreeBuilderError):
            self.builder.start_node(S.ROOT)

    def test_raw_kind_is_validated(self):
        with self.assertRaises(InvalidSyntaxKindError):
            self.builder.start_node(int(S.ROOT) + 1)

    def test_checkpoint_wraps_emitted_children(self):
        """Test that a node opened at a checkpoint adopts what came after it."""
        b = self.builder
        b.start_node(S.ROOT)
        checkpoint = b.checkpoint()
        b.token(S.NUMBER, "1")
        b.start_node_at(checkpoint, S.TERM)
        b.token(S.PLUS, "+")
        b.token(S.NUMBER, "2")
        b.finish_node()
        b.finish_node()
        root = b.finish()

        self.assertEqual(len(root.children), 1)
        self.assertEqual(root.children[0].kind, S.TERM)
        self.assertEqual(root.children[0].text(), "1+2")

    def test_checkpoint_before_open_node_is_rejected(self):
        b = self.builder
        b.start_node(S.ROOT)
        checkpoint = b.checkpoint()
        b.token(S.NUMBER, "1")
        b.start_node(S.TERM)
        with self.assertRaises(TreeBuilderError):
            b.start_node_at(checkpoint, S.FACTOR)

    def test_checkpoint_past_emitted_children_is_rejected(self):
        with self.assertRaises(TreeBuilderError):
            self.builder.start_node_at(Checkpoint(5), S.ROOT)


class TestGreenElements(unittest.TestCase):

    def test_green_elements_are_immutable(self):
        token = GreenToken(S.NUMBER, "1")
        node = GreenNode(S.FACTOR, (token,))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            node.children = ()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            token.text = "2"
        self.assertIsInstance(node.children, tuple)

    def test_structural_equality_and_hash(self):
        a = GreenNode(S.FACTOR, (GreenToken(S.NUMBER, "1"),))
        b = GreenNode(S.FACTOR, (GreenToken(S.NUMBER, "1"),))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, GreenNode(S.TERM, a.children))

    def test_cache_shares_identical_subtrees(self):
        cache = NodeCache()
        b = GreenNodeBuilder(cache)
        b.start_node(S.ROOT)
        for text in ("1", "+", "1"):
            if text == "+":
                b.token(S.PLUS, text)
                continue
            b.start_node(S.FACTOR)
            b.token(S.NUMBER, text)
            b.finish_node()
        b.finish_node()
        root = b.finish()

        left, _, right = root.children
        self.assertIs(left, right)
        self.assertIs(cache.token(S.NUMBER, "1"), left.children[0])

    def test_large_nodes_are_not_interned(self):
        cache = NodeCache()
        children = tuple(cache.token(S.NUMBER, str(i)) for i in range(4))
        self.assertIsNot(cache.node(S.TERM, children), cache.node(S.TERM, children))
        self.assertEqual(cache.node(S.TERM, children), cache.node(S.TERM, children))

    def test_cache_can_be_shared_between_builders(self):
        cache = NodeCache()
        roots = []
        for _ in range(2):
            b = GreenNodeBuilder(cache)
            b.start_node(S.ROOT)
            b.token(S.NUMBER, "7")
            b.finish_node()
            roots.append(b.finish())
        self.assertIs(roots[0], roots[1])


if __name__ == "__main__":
    unittest.main()
