#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class that both renderers implement,
plus a validating visitor that checks the tree invariants. Each node kind
has exactly one ``visit_*`` method, so a concrete visitor handles every
kind explicitly instead of testing node types while rendering.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from emlc.ast.nodes import (
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


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node kind. Visitors that
    descend into children do so themselves, typically by calling
    ``child.accept(self)``.

    Examples
    --------
    Visitor that counts elements:

        >>> class ElementCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_document(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_element(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)
        ...     # remaining visit_* methods return None

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit the synthetic root node."""
        pass

    @abstractmethod
    def visit_element(self, node: Element) -> Any:
        """Visit an Element node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_comment(self, node: Comment) -> Any:
        """Visit a line-style Comment node."""
        pass

    @abstractmethod
    def visit_comment_block(self, node: CommentBlock) -> Any:
        """Visit a block-style CommentBlock node."""
        pass

    @abstractmethod
    def visit_processing_instruction(self, node: ProcessingInstruction) -> Any:
        """Visit a ProcessingInstruction node (raw code, generic PI, declaration)."""
        pass

    @abstractmethod
    def visit_import(self, node: Import) -> Any:
        """Visit an Import node."""
        pass

    @abstractmethod
    def visit_whitespace(self, node: Whitespace) -> Any:
        """Visit a Whitespace node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class ValidationVisitor(NodeVisitor):
    """Visitor that checks the structural invariants of a parsed tree.

    Checked invariants:
    - the root Document only appears at the top of the tree
    - no node is owned by more than one parent (and hence no cycles)
    - Whitespace nodes represent at least two line breaks
    - Element tag names are non-empty
    - raw code and generic processing instructions have a target

    The traversal itself is iterative, so arbitrarily deep trees are checked
    without growing the call stack; the ``visit_*`` methods only inspect the
    node they are handed.

    Parameters
    ----------
    strict : bool, default = True
        Raise ``ValueError`` on the first violation instead of collecting
        violations in ``errors``

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> validator.validate(doc)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []
        self._seen: set[int] = set()

    def _add_error(self, message: str) -> None:
        """Record a violation, raising immediately in strict mode."""
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def validate(self, root: Node) -> list[str]:
        """Validate every node reachable from ``root``.

        Parameters
        ----------
        root : Node
            Root of the tree (normally a Document)

        Returns
        -------
        list of str
            Violations found (always empty in strict mode, which raises)

        """
        self.errors = []
        self._seen = set()
        stack: list[tuple[Node, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if id(node) in self._seen:
                # Children of a repeated node were already queued once
                self._add_error(f"{type(node).__name__} is owned by more than one parent")
                continue
            self._seen.add(id(node))
            if depth > 0 and isinstance(node, Document):
                self._add_error(f"Document node found at depth {depth}; only the root may be a Document")
            node.accept(self)
            for child in reversed(get_node_children(node)):
                stack.append((child, depth + 1))
        return self.errors

    def visit_document(self, node: Document) -> None:
        """Validate the root node."""
        pass

    def visit_element(self, node: Element) -> None:
        """Validate an Element node."""
        if not node.tag:
            self._add_error("Element has an empty tag name")
        if node.explicit_empty_block and node.children:
            self._add_error(f"Element '{node.tag}' is marked explicit-empty but has {len(node.children)} children")

    def visit_text(self, node: Text) -> None:
        """Text nodes have no structural constraints."""
        pass

    def visit_comment(self, node: Comment) -> None:
        """Comment nodes have no structural constraints."""
        pass

    def visit_comment_block(self, node: CommentBlock) -> None:
        """CommentBlock nodes have no structural constraints."""
        pass

    def visit_processing_instruction(self, node: ProcessingInstruction) -> None:
        """Validate a ProcessingInstruction node."""
        if not node.target:
            self._add_error("ProcessingInstruction has an empty target")

    def visit_import(self, node: Import) -> None:
        """Import nodes have no structural constraints."""
        pass

    def visit_whitespace(self, node: Whitespace) -> None:
        """Validate a Whitespace node."""
        if node.line_count < 2:
            self._add_error(f"Whitespace must represent at least 2 line breaks, got {node.line_count}")
