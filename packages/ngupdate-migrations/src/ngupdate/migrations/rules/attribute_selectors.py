from typing import List

from ngupdate.tool.component_resource_collector import ResolvedResource
from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.nodes import (
    SyntaxNode,
    is_call_argument,
    is_string_literal_like,
)
from ngupdate.migrations.data import (
    AttributeSelectorUpgradeData,
    get_version_upgrade_data,
)
from ngupdate.migrations.literal import find_all_substring_indices


class AttributeSelectorsMigration(Migration):
    """
    Migrates outdated attribute selectors in string literals passed to calls,
    in templates, and as ``[attr]`` selectors in stylesheets.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[AttributeSelectorUpgradeData] = get_version_upgrade_data(
            self, "attribute_selectors"
        )
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if is_string_literal_like(node) and is_call_argument(node):
            self._visit_string_literal_like(node)

    def visit_template(self, template: ResolvedResource) -> None:
        for selector in self.data:
            for offset in find_all_substring_indices(template.content, selector.replace):
                self._replace(
                    template.file_path,
                    template.start + offset,
                    len(selector.replace),
                    selector.replace_with,
                )

    def visit_stylesheet(self, stylesheet: ResolvedResource) -> None:
        for selector in self.data:
            current = f"[{selector.replace}]"
            updated = f"[{selector.replace_with}]"
            for offset in find_all_substring_indices(stylesheet.content, current):
                self._replace(
                    stylesheet.file_path, stylesheet.start + offset, len(current), updated
                )

    def _visit_string_literal_like(self, literal: SyntaxNode) -> None:
        text = literal.text
        file_path = self.file_system.resolve(literal.source_file.file_name)
        for selector in self.data:
            for offset in find_all_substring_indices(text, selector.replace):
                self._replace(
                    file_path,
                    literal.start + offset,
                    len(selector.replace),
                    selector.replace_with,
                )

    def _replace(self, file_path: str, start: int, width: int, new_text: str) -> None:
        self.file_system.edit(file_path).remove(start, width).insert_right(
            start, new_text
        )
