from typing import List

from ngupdate.tool.component_resource_collector import ResolvedResource
from ngupdate.tool.migration import Migration
from ngupdate.migrations.data import InputNameUpgradeData, get_version_upgrade_data
from ngupdate.migrations.html import (
    find_inputs_on_element_with_attr,
    find_inputs_on_element_with_tag,
)
from ngupdate.migrations.literal import find_all_substring_indices


class InputNamesMigration(Migration):
    """
    Renames ``@Input`` bindings in templates, both plain (``name="x"``) and
    bound (``[name]="x"``), and ``[name]`` attribute selectors in stylesheets.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[InputNameUpgradeData] = get_version_upgrade_data(
            self, "input_names"
        )
        self.enabled = len(self.data) != 0

    def visit_stylesheet(self, stylesheet: ResolvedResource) -> None:
        for name in self.data:
            current = f"[{name.replace}]"
            updated = f"[{name.replace_with}]"
            for offset in find_all_substring_indices(stylesheet.content, current):
                self._replace_input_name(
                    stylesheet.file_path, stylesheet.start + offset, len(current), updated
                )

    def visit_template(self, template: ResolvedResource) -> None:
        for name in self.data:
            limited_to = name.limited_to
            offsets: List[int] = []
            if limited_to.attributes:
                offsets.extend(
                    find_inputs_on_element_with_attr(
                        template.content, name.replace, limited_to.attributes
                    )
                )
            if limited_to.elements:
                offsets.extend(
                    find_inputs_on_element_with_tag(
                        template.content, name.replace, limited_to.elements
                    )
                )
            for offset in offsets:
                self._replace_input_name(
                    template.file_path,
                    template.start + offset,
                    len(name.replace),
                    name.replace_with,
                )

    def _replace_input_name(
        self, file_path: str, start: int, width: int, new_name: str
    ) -> None:
        self.file_system.edit(file_path).remove(start, width).insert_right(
            start, new_name
        )
