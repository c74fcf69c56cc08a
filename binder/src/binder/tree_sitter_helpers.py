# --- Tree-sitter plumbing ----------------------------------------------------
from typing import Iterator, Optional

from tree_sitter import Node


def node_text(source_bytes: bytes, node) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_point(node) -> tuple[int, int]:
    """
    Returns the (line, column) of a node's start in 0-based coordinates.
    """
    return (node.start_point[0], node.start_point[1])


def walk(root: Node) -> Iterator[Node]:
    """
    Pre-order walk over every node, each visited exactly once, in source order.
    Uses an explicit stack so deeply nested files can't blow the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def first_error(root: Node) -> Optional[Node]:
    """Finds the first ERROR or MISSING node, if the tree has any."""
    if not root.has_error:
        return None
    for node in walk(root):
        if node.is_error or node.is_missing:
            return node
    return root


def unquote(literal: str) -> str:
    """Strips the quotes off a Go interpreted or raw string literal."""
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
        return literal[1:-1]
    return literal
