#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy shared by both front-end parsers
(EML and angle-bracket markup) and both back-end renderers. Either parser
produces a tree of identical shape, so any parser can be paired with any
renderer.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

    - Document: synthetic root owning the top-level node sequence
    - Element: tag with ordered attributes and owned children
    - Text: raw text payload
    - Comment: line-style comment (``// x`` or single-line ``<!-- x -->``)
    - CommentBlock: block-style comment (``/* x */``)
    - ProcessingInstruction: ``<?target ...?>`` including raw ``php`` code and
      ``<!DOCTYPE ...>`` style declarations
    - Import: ``import x;`` / ``<?import x?>`` directive
    - Whitespace: run of two or more line breaks between siblings

Invariants
----------
The tree is a strict ownership hierarchy: no node has two parents and there
are no cycles. Attribute keys are not deduplicated. Whitespace nodes only
exist for runs of two or more line breaks.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from emlc.constants import RAW_CODE_TAGS, ROOT_TAG, VOID_ELEMENTS


@dataclass
class Attribute:
    """A single element attribute.

    Parameters
    ----------
    key : str
        Attribute name, kept exactly as written (repeated keys are allowed)
    value : str or None, default = None
        Attribute value; None marks a valueless (boolean) attribute
    separator : str, default = " "
        Literal text that preceded the key in the source (whitespace and,
        in EML, commas)

    """

    key: str
    value: Optional[str] = None
    separator: str = " "

    @property
    def is_boolean(self) -> bool:
        """Return True when the attribute was written without a value."""
        return self.value is None


class Node(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Document(Node):
    """Synthetic root node owning the top-level node sequence.

    The root is never rendered with tags; renderers emit its children at
    nesting depth zero.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes in source order
    metadata : dict, default = empty dict
        Document-level information recorded by the parser (source format,
        anomaly count)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        """Return the reserved root sentinel tag."""
        return ROOT_TAG

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Element(Node):
    """Element node with a tag name, attributes and children.

    Parameters
    ----------
    tag : str
        Element tag name
    attributes : list of Attribute, default = empty list
        Attributes in source order
    children : list of Node, default = empty list
        Owned child nodes
    explicit_empty_block : bool, default = False
        True when the source explicitly wrote an empty content block
        (EML ``tag {}`` or markup ``<tag></tag>``) as opposed to writing no
        block at all (EML ``tag`` or markup ``<tag/>``). Renderers use this
        to choose between self-closed and expanded-empty forms.

    Examples
    --------
        >>> Element(tag="div", attributes=[Attribute("class", "a")], children=[Text(" Hi ")])

    """

    tag: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    explicit_empty_block: bool = False

    @property
    def is_void(self) -> bool:
        """Return True if the tag belongs to the HTML void element set."""
        return self.tag in VOID_ELEMENTS

    @property
    def single_text(self) -> Optional[Text]:
        """Return the sole child when it is a Text node, else None."""
        if len(self.children) == 1 and isinstance(self.children[0], Text):
            return self.children[0]
        return None

    def get_attribute(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute named ``key``.

        Parameters
        ----------
        key : str
            Attribute name to look up
        default : str or None, default = None
            Value returned when the attribute is absent

        Returns
        -------
        str or None
            The attribute value, ``default`` when missing. Valueless
            attributes return None.

        """
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return default

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_element``."""
        return visitor.visit_element(self)


@dataclass
class Text(Node):
    """Raw text payload, kept untrimmed as it appeared in the source."""

    content: str

    @property
    def has_line_break(self) -> bool:
        """Return True if the payload spans more than one line."""
        return "\n" in self.content

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Comment(Node):
    """Line-style comment. Payload is stored trimmed."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment``."""
        return visitor.visit_comment(self)


@dataclass
class CommentBlock(Node):
    """Block-style comment. Payload is stored verbatim, including edge spaces."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment_block``."""
        return visitor.visit_comment_block(self)


@dataclass
class ProcessingInstruction(Node):
    """Processing instruction, raw code block, or markup declaration.

    Parameters
    ----------
    target : str
        Instruction target. ``"php"`` marks a raw code block; a target that
        starts with ``"!"`` (e.g. ``"!DOCTYPE"``) marks a declaration.
    content : str
        Payload after the target. Raw code payloads keep their line breaks
        and indentation exactly.

    """

    target: str
    content: str = ""

    @property
    def is_raw_code(self) -> bool:
        """Return True for ``php``-style raw code blocks."""
        return self.target in RAW_CODE_TAGS

    @property
    def is_declaration(self) -> bool:
        """Return True for ``<!X ...>`` declarations such as DOCTYPE."""
        return self.target.startswith("!")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_processing_instruction``."""
        return visitor.visit_processing_instruction(self)


@dataclass
class Import(Node):
    """Import directive (``import com.example.Foo;``)."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_import``."""
        return visitor.visit_import(self)


@dataclass
class Whitespace(Node):
    """Run of consecutive line breaks between siblings.

    Only materialized for two or more line breaks; renderers emit
    ``line_count - 1`` blank lines for it.

    Parameters
    ----------
    line_count : int
        Number of line breaks in the run (at least 2)

    Raises
    ------
    ValueError
        If ``line_count`` is below 2

    """

    line_count: int

    def __post_init__(self) -> None:
        """Enforce the two-line-break minimum."""
        if self.line_count < 2:
            raise ValueError(f"Whitespace requires at least 2 line breaks, got {self.line_count}")

    @property
    def blank_lines(self) -> int:
        """Return the number of blank lines this run represents."""
        return self.line_count - 1

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_whitespace``."""
        return visitor.visit_whitespace(self)


def get_node_children(node: Node) -> list[Node]:
    """Get the owned child nodes of a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        Child nodes (empty list for leaf nodes)

    """
    if isinstance(node, (Document, Element)):
        return list(node.children)
    return []
