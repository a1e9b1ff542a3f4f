"""
Syntax tree view ("red tree") over a finished green tree.

SyntaxNode and SyntaxToken add what the green tree leaves out: parent
links, the index in the parent and absolute text offsets. They are cheap,
disposable wrappers computed on demand while navigating; the green tree
underneath is never touched, and two views of the same tree are
interchangeable.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .green import GreenNode, GreenToken
from .syntax_kind import SyntaxKind


@dataclass(frozen=True)
class TextRange:
    """Half-open range of code point offsets."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


class _SyntaxElement:
    """Shared behaviour of SyntaxNode and SyntaxToken."""

    __slots__ = ("green", "parent", "index", "offset")

    def __init__(self, green, parent: Optional["SyntaxNode"], index: int, offset: int):
        self.green = green
        self.parent = parent
        self.index = index
        self.offset = offset

    @property
    def kind(self) -> SyntaxKind:
        return self.green.kind

    @property
    def text_range(self) -> TextRange:
        return TextRange(self.offset, self.offset + self.green.text_len)

    def ancestors(self) -> Iterator["SyntaxNode"]:
        """Yield the parent, its parent, and so on up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def next_sibling_or_token(self) -> Optional["SyntaxElement"]:
        if self.parent is None:
            return None
        siblings = self.parent.green.children
        index = self.index + 1
        if index >= len(siblings):
            return None
        return self.parent._wrap(siblings[index], index, self.offset + self.green.text_len)

    def prev_sibling_or_token(self) -> Optional["SyntaxElement"]:
        if self.parent is None or self.index == 0:
            return None
        index = self.index - 1
        green = self.parent.green.children[index]
        return self.parent._wrap(green, index, self.offset - green.text_len)

    def __eq__(self, other) -> bool:
        # a green element can be shared, but never twice at the same offset
        return (type(self) is type(other)
                and self.green is other.green
                and self.offset == other.offset)

    def __hash__(self) -> int:
        return hash((id(self.green), self.offset))


class SyntaxToken(_SyntaxElement):
    """A positioned leaf of the syntax tree."""

    __slots__ = ()

    def text(self) -> str:
        return self.green.text

    def __repr__(self) -> str:
        return f"{self.kind.name}@{self.text_range} {self.green.text!r}"


class SyntaxNode(_SyntaxElement):
    """A positioned composite node of the syntax tree."""

    __slots__ = ()

    @classmethod
    def new_root(cls, green: GreenNode) -> "SyntaxNode":
        return cls(green, None, 0, 0)

    def text(self) -> str:
        return self.green.text()

    def children_with_tokens(self) -> Iterator["SyntaxElement"]:
        offset = self.offset
        for index, child in enumerate(self.green.children):
            yield self._wrap(child, index, offset)
            offset += child.text_len

    def children(self) -> Iterator["SyntaxNode"]:
        for child in self.children_with_tokens():
            if isinstance(child, SyntaxNode):
                yield child

    def first_child(self) -> Optional["SyntaxNode"]:
        return next(self.children(), None)

    def last_child(self) -> Optional["SyntaxNode"]:
        children = list(self.children())
        return children[-1] if children else None

    def next_sibling(self) -> Optional["SyntaxNode"]:
        sibling = self.next_sibling_or_token()
        while sibling is not None and not isinstance(sibling, SyntaxNode):
            sibling = sibling.next_sibling_or_token()
        return sibling

    def prev_sibling(self) -> Optional["SyntaxNode"]:
        sibling = self.prev_sibling_or_token()
        while sibling is not None and not isinstance(sibling, SyntaxNode):
            sibling = sibling.prev_sibling_or_token()
        return sibling

    def descendants_with_tokens(self) -> Iterator["SyntaxElement"]:
        """Pre-order walk starting with this node."""
        stack: List[SyntaxElement] = [self]
        while stack:
            element = stack.pop()
            yield element
            if isinstance(element, SyntaxNode):
                stack.extend(reversed(list(element.children_with_tokens())))

    def descendants(self) -> Iterator["SyntaxNode"]:
        for element in self.descendants_with_tokens():
            if isinstance(element, SyntaxNode):
                yield element

    def tokens(self) -> Iterator[SyntaxToken]:
        for element in self.descendants_with_tokens():
            if isinstance(element, SyntaxToken):
                yield element

    def token_at_offset(self, offset: int) -> Optional[SyntaxToken]:
        """Return the token covering ``offset``, or None if it is out of range."""
        if offset not in self.text_range:
            return None
        node = self
        while True:
            for child in node.children_with_tokens():
                if offset in child.text_range:
                    break
            else:
                return None
            if isinstance(child, SyntaxToken):
                return child
            node = child

    def debug_dump(self) -> str:
        """Render the subtree one element per line, indented by depth."""
        lines = []
        stack = [(self, 0)]
        while stack:
            element, depth = stack.pop()
            lines.append("  " * depth + repr(element))
            if isinstance(element, SyntaxNode):
                stack.extend((child, depth + 1)
                             for child in reversed(list(element.children_with_tokens())))
        return "\n".join(lines)

    def _wrap(self, green, index: int, offset: int) -> "SyntaxElement":
        if isinstance(green, GreenToken):
            return SyntaxToken(green, self, index, offset)
        return SyntaxNode(green, self, index, offset)

    def __repr__(self) -> str:
        return f"{self.kind.name}@{self.text_range}"


SyntaxElement = Union[SyntaxNode, SyntaxToken]
