from ngupdate.tool.component_resource_collector import ResolvedResource
from ngupdate.tool.migration import Migration, MigrationFailure
from ngupdate.tool.target_version import TargetVersion
from ngupdate.migrations.literal import find_all_substring_indices


class MiscTemplateMigration(Migration):
    """Reports template usages of CDK APIs that cannot be migrated automatically."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enabled = self.target_version == TargetVersion.V6

    def visit_template(self, template: ResolvedResource) -> None:
        for offset in find_all_substring_indices(template.content, "cdk-focus-trap"):
            self.failures.append(
                MigrationFailure(
                    file_path=template.file_path,
                    position=template.get_character_and_line_of_position(
                        template.start + offset
                    ),
                    message='Found deprecated element selector "cdk-focus-trap" which '
                    'has been changed to an attribute selector "[cdkTrapFocus]".',
                )
            )
