from typing import List

from ngupdate.tool.component_resource_collector import ResolvedResource
from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.nodes import (
    SyntaxNode,
    is_call_argument,
    is_string_literal_like,
)
from ngupdate.migrations.data import (
    ElementSelectorUpgradeData,
    get_version_upgrade_data,
)
from ngupdate.migrations.literal import find_all_substring_indices


class ElementSelectorsMigration(Migration):
    """Migrates outdated element selectors in call arguments, templates and stylesheets."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[ElementSelectorUpgradeData] = get_version_upgrade_data(
            self, "element_selectors"
        )
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if is_string_literal_like(node) and is_call_argument(node):
            text = node.text
            file_path = self.file_system.resolve(node.source_file.file_name)
            for selector in self.data:
                for offset in find_all_substring_indices(text, selector.replace):
                    self._replace_selector(file_path, node.start + offset, selector)

    def visit_template(self, template: ResolvedResource) -> None:
        self._visit_resource(template)

    def visit_stylesheet(self, stylesheet: ResolvedResource) -> None:
        self._visit_resource(stylesheet)

    def _visit_resource(self, resource: ResolvedResource) -> None:
        for selector in self.data:
            for offset in find_all_substring_indices(resource.content, selector.replace):
                self._replace_selector(
                    resource.file_path, resource.start + offset, selector
                )

    def _replace_selector(
        self, file_path: str, start: int, data: ElementSelectorUpgradeData
    ) -> None:
        self.file_system.edit(file_path).remove(start, len(data.replace)).insert_right(
            start, data.replace_with
        )
