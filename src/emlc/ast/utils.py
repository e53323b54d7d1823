#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/ast/utils.py
"""Utility functions for working with AST nodes.

All traversals here use an explicit worklist rather than recursion, so they
work on trees of any depth.

Functions
---------
iter_nodes : Depth-first pre-order walk yielding ``(node, depth)`` pairs
tree_depth : Maximum element nesting depth of a tree
node_signature : Flattened structural signature used to compare trees

Examples
--------
    >>> from emlc.api import parse
    >>> doc = parse('div { span { Hi } }', "eml")
    >>> [type(n).__name__ for n, _ in iter_nodes(doc)]
    ['Document', 'Element', 'Element', 'Text']
    >>> tree_depth(doc)
    2

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from emlc.ast.nodes import (
    Comment,
    CommentBlock,
    Element,
    Import,
    ProcessingInstruction,
    Text,
    Whitespace,
    get_node_children,
)

if TYPE_CHECKING:
    from emlc.ast.nodes import Node


def iter_nodes(root: Node) -> Iterator[tuple[Node, int]]:
    """Walk a tree depth-first in pre-order.

    Parameters
    ----------
    root : Node
        Node to start from; it is yielded first at depth 0

    Yields
    ------
    tuple of (Node, int)
        Each node with its depth below ``root``

    """
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        children = get_node_children(node)
        # Reverse so the first child is popped first
        for child in reversed(children):
            stack.append((child, depth + 1))


def tree_depth(root: Node) -> int:
    """Return the maximum Element nesting depth below ``root``.

    A document holding only top-level text has depth 0; ``div { span }``
    has depth 2.

    """
    deepest = 0
    for node, depth in iter_nodes(root):
        if isinstance(node, Element):
            deepest = max(deepest, depth)
    return deepest


def _normalize_payload(text: str) -> str:
    """Strip a payload and the indentation of each of its lines."""
    return "\n".join(line.strip() for line in text.strip().splitlines())


def node_signature(root: Node) -> list[tuple[Any, ...]]:
    """Flatten a tree into a comparable structural signature.

    The signature keeps the sequence of tag names, attribute key/value
    pairs, trimmed text payloads and whitespace-run counts while ignoring
    layout details such as indentation and edge spaces, which renderers are
    free to change.

    Parameters
    ----------
    root : Node
        Root of the tree to flatten

    Returns
    -------
    list of tuple
        One entry per node below ``root``, tagged with its kind and depth

    Examples
    --------
        >>> node_signature(parse("h1 { Hello }", "eml"))
        [('element', 1, 'h1', ()), ('text', 2, 'Hello')]

    """
    signature: list[tuple[Any, ...]] = []
    for node, depth in iter_nodes(root):
        if depth == 0:
            continue
        if isinstance(node, Element):
            attrs = tuple((attr.key, attr.value or "") for attr in node.attributes)
            signature.append(("element", depth, node.tag, attrs))
        elif isinstance(node, Text):
            signature.append(("text", depth, _normalize_payload(node.content)))
        elif isinstance(node, (Comment, CommentBlock)):
            signature.append(("comment", depth, _normalize_payload(node.content)))
        elif isinstance(node, ProcessingInstruction):
            signature.append(("pi", depth, node.target, _normalize_payload(node.content)))
        elif isinstance(node, Import):
            signature.append(("import", depth, node.content.strip()))
        elif isinstance(node, Whitespace):
            signature.append(("whitespace", depth, node.line_count))
    return signature
