from typing import List

from ngupdate.tool.component_resource_collector import ResolvedResource
from ngupdate.tool.migration import Migration
from ngupdate.migrations.data import OutputNameUpgradeData, get_version_upgrade_data
from ngupdate.migrations.html import (
    find_outputs_on_element_with_attr,
    find_outputs_on_element_with_tag,
)


class OutputNamesMigration(Migration):
    """Renames ``(output)`` event bindings in templates."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[OutputNameUpgradeData] = get_version_upgrade_data(
            self, "output_names"
        )
        self.enabled = len(self.data) != 0

    def visit_template(self, template: ResolvedResource) -> None:
        for name in self.data:
            limited_to = name.limited_to
            offsets: List[int] = []
            if limited_to.attributes:
                offsets.extend(
                    find_outputs_on_element_with_attr(
                        template.content, name.replace, limited_to.attributes
                    )
                )
            if limited_to.elements:
                offsets.extend(
                    find_outputs_on_element_with_tag(
                        template.content, name.replace, limited_to.elements
                    )
                )
            for offset in offsets:
                start = template.start + offset
                self.file_system.edit(template.file_path).remove(
                    start, len(name.replace)
                ).insert_right(start, name.replace_with)
