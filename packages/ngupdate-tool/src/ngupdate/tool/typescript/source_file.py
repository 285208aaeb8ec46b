from typing import TYPE_CHECKING, Dict, List, Optional

from tree_sitter import Tree

from ngupdate.tool.line_mappings import (
    LineAndCharacter,
    compute_line_starts_map,
    get_line_and_character_from_position,
)
from .nodes import SyntaxNode
from .parser import parse_source

if TYPE_CHECKING:
    from .imports import ImportBinding


class SourceFile:
    def __init__(
        self,
        file_name: str,
        text: str,
        tree: Tree,
        is_from_external_library: bool = False,
    ):
        self.file_name = file_name
        self.text = text
        self.tree = tree
        self.is_declaration_file = file_name.endswith(".d.ts")
        self.is_from_external_library = is_from_external_library
        self._line_starts: Optional[List[int]] = None
        self._byte_to_char: Optional[List[int]] = self._build_offset_map(text)
        self.import_bindings: Optional[Dict[str, "ImportBinding"]] = None

    @classmethod
    def parse(cls, file_name: str, text: str) -> "SourceFile":
        return cls(
            file_name,
            text,
            parse_source(text, file_name),
            is_from_external_library="/node_modules/" in file_name,
        )

    @staticmethod
    def _build_offset_map(text: str) -> Optional[List[int]]:
        # tree-sitter reports UTF-8 byte offsets; ASCII text needs no mapping.
        if text.isascii():
            return None
        mapping: List[int] = []
        for index, char in enumerate(text):
            mapping.extend([index] * len(char.encode("utf-8")))
        mapping.append(len(text))
        return mapping

    def char_offset(self, byte_offset: int) -> int:
        if self._byte_to_char is None:
            return byte_offset
        return self._byte_to_char[byte_offset]

    @property
    def root(self) -> SyntaxNode:
        return SyntaxNode(self.tree.root_node, self)

    @property
    def line_starts(self) -> List[int]:
        if self._line_starts is None:
            self._line_starts = compute_line_starts_map(self.text)
        return self._line_starts

    def get_line_and_character_of_position(self, position: int) -> LineAndCharacter:
        return get_line_and_character_from_position(self.line_starts, position)

    def __repr__(self) -> str:
        return f"<SourceFile {self.file_name}>"
