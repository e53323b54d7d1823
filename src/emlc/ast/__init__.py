#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

Both front-end parsers (EML and angle-bracket markup) build this tree and
both back-end renderers consume it, which is what makes conversion work in
either direction.

The module consists of:

- nodes: AST node classes representing document structure
- visitors: Visitor pattern base class and invariant validation
- utils: Iterative traversal and structural comparison helpers

Examples
--------
    >>> from emlc.ast import Attribute, Document, Element, Text
    >>> from emlc.renderers.markup import MarkupRenderer
    >>>
    >>> doc = Document(children=[
    ...     Element(tag="h1", attributes=[Attribute("id", "top")], children=[Text("Hello")])
    ... ])
    >>> MarkupRenderer().render_to_string(doc)
    '<h1 id="top">Hello</h1>\\n'

"""

from __future__ import annotations

from emlc.ast.nodes import (
    Attribute,
    Comment,
    CommentBlock,
    Document,
    Element,
    Import,
    Node,
    ProcessingInstruction,
    Text,
    Whitespace,
    get_node_children,
)
from emlc.ast.utils import iter_nodes, node_signature, tree_depth
from emlc.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    # Nodes
    "Attribute",
    "Comment",
    "CommentBlock",
    "Document",
    "Element",
    "Import",
    "Node",
    "ProcessingInstruction",
    "Text",
    "Whitespace",
    "get_node_children",
    # Visitors
    "NodeVisitor",
    "ValidationVisitor",
    # Utilities
    "iter_nodes",
    "node_signature",
    "tree_depth",
]
