from typing import List, Optional, Set

from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.imports import (
    is_export_specifier_node,
    is_import_specifier_node,
    is_namespace_import_node,
)
from ngupdate.tool.typescript.nodes import SyntaxNode
from ngupdate.migrations.data import ClassNameUpgradeData, get_version_upgrade_data
from ngupdate.migrations.module_specifiers import (
    is_material_export_declaration,
    is_material_import_declaration,
)

NAME_KINDS = ("identifier", "type_identifier", "property_identifier")


class ClassNamesMigration(Migration):
    """
    Renames identifiers that belong to Angular Material or the CDK. Only names
    imported from those packages, re-exported from them, or accessed through
    one of their namespace imports are touched.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[ClassNameUpgradeData] = get_version_upgrade_data(
            self, "class_names"
        )
        # Names and namespaces imported from Material or the CDK in the
        # current source file.
        self.trusted_identifiers: Set[str] = set()
        self.trusted_namespaces: Set[str] = set()
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if node.kind == "program":
            self.trusted_identifiers = set()
            self.trusted_namespaces = set()
        elif node.kind in NAME_KINDS:
            self._visit_identifier(node)

    def _visit_identifier(self, identifier: SyntaxNode) -> None:
        if is_namespace_import_node(identifier):
            if is_material_import_declaration(identifier):
                self.trusted_namespaces.add(identifier.text)
            return

        replacement = self._find_replacement(identifier.text)
        if replacement is None:
            return

        if is_export_specifier_node(identifier) and is_material_export_declaration(
            identifier
        ):
            self._replace(identifier, replacement)
            return

        if is_import_specifier_node(identifier) and is_material_import_declaration(
            identifier
        ):
            self.trusted_identifiers.add(identifier.text)
            self._replace(identifier, replacement)
            return

        # `ns.Name` is only renamed when `ns` is a trusted namespace import.
        parent = identifier.parent
        if parent is not None and parent.kind in (
            "member_expression",
            "nested_type_identifier",
        ):
            qualifier = parent.field("object") or parent.field("module")
            if qualifier is not None and qualifier != identifier:
                if (
                    qualifier.kind == "identifier"
                    and qualifier.text in self.trusted_namespaces
                ):
                    self._replace(identifier, replacement)
                return

        if identifier.text in self.trusted_identifiers:
            self._replace(identifier, replacement)

    def _find_replacement(self, name: str) -> Optional[ClassNameUpgradeData]:
        return next((data for data in self.data if data.replace == name), None)

    def _replace(self, identifier: SyntaxNode, data: ClassNameUpgradeData) -> None:
        file_path = self.file_system.resolve(identifier.source_file.file_name)
        self.file_system.edit(file_path).remove(
            identifier.start, identifier.width
        ).insert_right(identifier.start, data.replace_with)
