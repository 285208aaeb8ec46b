import re
from typing import TYPE_CHECKING, Iterator, List, Optional

from tree_sitter import Node

if TYPE_CHECKING:
    from .source_file import SourceFile

CLASS_KINDS = ("class_declaration", "abstract_class_declaration", "class")
IDENTIFIER_KINDS = (
    "identifier",
    "property_identifier",
    "type_identifier",
    "shorthand_property_identifier",
)
_WRAPPER_KINDS = (
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
)


class SyntaxNode:
    """
    A tree-sitter node bound to its source file. Offsets are character
    offsets into ``source_file.text``.
    """

    __slots__ = ("_node", "source_file")

    def __init__(self, node: Node, source_file: "SourceFile"):
        self._node = node
        self.source_file = source_file

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def start(self) -> int:
        return self.source_file.char_offset(self._node.start_byte)

    @property
    def end(self) -> int:
        return self.source_file.char_offset(self._node.end_byte)

    @property
    def width(self) -> int:
        return self.end - self.start

    @property
    def text(self) -> str:
        return self.source_file.text[self.start : self.end]

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def parent(self) -> Optional["SyntaxNode"]:
        return self._wrap(self._node.parent)

    @property
    def children(self) -> List["SyntaxNode"]:
        """Named children, comments excluded."""
        return [
            SyntaxNode(child, self.source_file)
            for child in self._node.named_children
            if child.type != "comment"
        ]

    @property
    def all_children(self) -> List["SyntaxNode"]:
        return [SyntaxNode(child, self.source_file) for child in self._node.children]

    def field(self, name: str) -> Optional["SyntaxNode"]:
        return self._wrap(self._node.child_by_field_name(name))

    def fields(self, name: str) -> List["SyntaxNode"]:
        return [
            SyntaxNode(child, self.source_file)
            for child in self._node.children_by_field_name(name)
        ]

    def children_of_kind(self, *kinds: str) -> List["SyntaxNode"]:
        return [child for child in self.children if child.kind in kinds]

    def first_child_of_kind(self, *kinds: str) -> Optional["SyntaxNode"]:
        for child in self.children:
            if child.kind in kinds:
                return child
        return None

    def has_token(self, token: str) -> bool:
        """True when an anonymous child token such as ``readonly`` is present."""
        return any(
            not child.is_named and child.type == token for child in self._node.children
        )

    def ancestors(self) -> Iterator["SyntaxNode"]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def find_ancestor(self, *kinds: str) -> Optional["SyntaxNode"]:
        for ancestor in self.ancestors():
            if ancestor.kind in kinds:
                return ancestor
        return None

    def descendants(self) -> Iterator["SyntaxNode"]:
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def _wrap(self, node: Optional[Node]) -> Optional["SyntaxNode"]:
        if node is None:
            return None
        return SyntaxNode(node, self.source_file)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self.source_file is other.source_file and self._node.id == other._node.id

    def __hash__(self) -> int:
        return hash((id(self.source_file), self._node.id))

    def __repr__(self) -> str:
        return f"<SyntaxNode {self.kind} {self.source_file.file_name}:{self.start}-{self.end}>"


def is_string_literal_like(node: Optional[SyntaxNode]) -> bool:
    """A string literal, or a template string without substitutions."""
    if node is None:
        return False
    if node.kind == "string":
        return True
    if node.kind == "template_string":
        return node.first_child_of_kind("template_substitution") is None
    return False


_ESCAPE_PATTERN = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _unescape(match: "re.Match[str]") -> str:
    sequence = match.group(1)
    if sequence.startswith("u{"):
        return chr(int(sequence[2:-1], 16))
    if sequence[0] in "ux" and len(sequence) > 1:
        return chr(int(sequence[1:], 16))
    if sequence in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        return ""
    return _SIMPLE_ESCAPES.get(sequence, sequence)


def literal_raw_text(node: SyntaxNode) -> str:
    """Source text between the quotes, escapes untouched."""
    return node.text[1:-1]


def literal_text(node: SyntaxNode) -> str:
    """Cooked value of a string-literal-like node."""
    return _ESCAPE_PATTERN.sub(_unescape, literal_raw_text(node))


def unwrap_expression(node: Optional[SyntaxNode]) -> Optional[SyntaxNode]:
    """Strips parentheses, ``as``/``satisfies`` casts and non-null assertions."""
    while node is not None and node.kind in _WRAPPER_KINDS:
        children = node.children
        if not children:
            return None
        node = children[-1] if node.kind == "type_assertion" else children[0]
    return node


def property_name_text(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is None:
        return None
    if node.kind in IDENTIFIER_KINDS or node.kind in (
        "number",
        "private_property_identifier",
    ):
        return node.text
    if is_string_literal_like(node):
        return literal_text(node)
    if node.kind == "computed_property_name":
        inner = node.children[0] if node.children else None
        if is_string_literal_like(inner):
            return literal_text(inner)
    return None


def call_arguments(call: SyntaxNode) -> List[SyntaxNode]:
    arguments = call.field("arguments")
    if arguments is None or arguments.kind != "arguments":
        return []
    return arguments.children


def is_call_argument(node: SyntaxNode) -> bool:
    parent = node.parent
    return (
        parent is not None
        and parent.kind == "arguments"
        and parent.parent is not None
        and parent.parent.kind in ("call_expression", "new_expression")
    )


def get_class_name(class_node: SyntaxNode) -> Optional[str]:
    name = class_node.field("name")
    return name.text if name is not None else None
