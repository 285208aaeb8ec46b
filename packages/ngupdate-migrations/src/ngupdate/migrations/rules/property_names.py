from typing import List

from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.nodes import SyntaxNode
from ngupdate.migrations.data import PropertyNameUpgradeData, get_version_upgrade_data


class PropertyNamesMigration(Migration):
    """
    Renames accessed properties. Renames limited to classes only apply when
    the accessed object resolves to one of those classes.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[PropertyNameUpgradeData] = get_version_upgrade_data(
            self, "property_names"
        )
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if node.kind == "member_expression":
            self._visit_property_access_expression(node)

    def _visit_property_access_expression(self, node: SyntaxNode) -> None:
        name = node.field("property")
        if name is None or name.kind != "property_identifier":
            return
        matches = [data for data in self.data if data.replace == name.text]
        if not matches:
            return

        type_name = self.type_checker.get_type_name_at_location(node.field("object"))
        file_path = self.file_system.resolve(node.source_file.file_name)
        for data in matches:
            if data.limited_to is None or type_name in data.limited_to.classes:
                self.file_system.edit(file_path).remove(
                    name.start, name.width
                ).insert_right(name.start, data.replace_with)
