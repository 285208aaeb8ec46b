from typing import Dict

from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.base_types import determine_base_types
from ngupdate.tool.typescript.nodes import SyntaxNode, get_class_name
from ngupdate.migrations.data import PropertyNameUpgradeData, get_version_upgrade_data

CLASS_DECLARATION_KINDS = ("class_declaration", "abstract_class_declaration")


class ClassInheritanceMigration(Migration):
    """
    Reports classes that extend a class whose properties were renamed, since
    the subclass may use or override the old names.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Base class name -> property rename limited to that class.
        self.property_names: Dict[str, PropertyNameUpgradeData] = {}
        for data in get_version_upgrade_data(self, "property_names"):
            if data.limited_to is None:
                continue
            for class_name in data.limited_to.classes:
                self.property_names[class_name] = data
        self.enabled = len(self.property_names) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if node.kind in CLASS_DECLARATION_KINDS:
            self._visit_class_declaration(node)

    def _visit_class_declaration(self, node: SyntaxNode) -> None:
        class_name = get_class_name(node) or "{unknown-name}"
        for type_name in determine_base_types(node):
            data = self.property_names.get(type_name)
            if data is None:
                continue
            self.create_failure_at_node(
                node,
                f'Found class "{class_name}" which extends class "{type_name}". '
                f'Please note that the base class property "{data.replace}" '
                f'has changed to "{data.replace_with}". '
                f"You may need to update your class as well.",
            )
