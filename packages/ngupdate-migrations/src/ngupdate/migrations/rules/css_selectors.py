from typing import List

from ngupdate.tool.component_resource_collector import ResolvedResource
from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.nodes import (
    SyntaxNode,
    is_call_argument,
    is_string_literal_like,
)
from ngupdate.migrations.data import CssSelectorUpgradeData, get_version_upgrade_data
from ngupdate.migrations.literal import find_all_substring_indices


class CssSelectorsMigration(Migration):
    """
    Migrates outdated CSS selectors in string literals passed to calls, in
    templates and in stylesheets. ``replace_in`` restricts where a selector
    is rewritten.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[CssSelectorUpgradeData] = get_version_upgrade_data(
            self, "css_selectors"
        )
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if is_string_literal_like(node) and is_call_argument(node):
            self._visit_string_literal_like(node)

    def visit_template(self, template: ResolvedResource) -> None:
        for data in self.data:
            if data.replace_in is not None and not data.replace_in.html:
                continue
            for offset in find_all_substring_indices(template.content, data.replace):
                self._replace_selector(template.file_path, template.start + offset, data)

    def visit_stylesheet(self, stylesheet: ResolvedResource) -> None:
        for data in self.data:
            if data.replace_in is not None and not data.replace_in.stylesheet:
                continue
            for offset in find_all_substring_indices(stylesheet.content, data.replace):
                self._replace_selector(
                    stylesheet.file_path, stylesheet.start + offset, data
                )

    def _visit_string_literal_like(self, node: SyntaxNode) -> None:
        text = node.text
        file_path = self.file_system.resolve(node.source_file.file_name)
        for data in self.data:
            if data.replace_in is not None and not data.replace_in.ts_string_literals:
                continue
            for offset in find_all_substring_indices(text, data.replace):
                self._replace_selector(file_path, node.start + offset, data)

    def _replace_selector(
        self, file_path: str, start: int, data: CssSelectorUpgradeData
    ) -> None:
        self.file_system.edit(file_path).remove(start, len(data.replace)).insert_right(
            start, data.replace_with
        )
