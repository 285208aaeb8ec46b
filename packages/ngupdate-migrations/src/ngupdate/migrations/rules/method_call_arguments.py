from typing import List

from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.nodes import SyntaxNode, call_arguments, unwrap_expression
from ngupdate.migrations.data import MethodCallUpgradeData, get_version_upgrade_data


class MethodCallArgumentsMigration(Migration):
    """Reports method calls made with an argument count that is no longer valid."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.data: List[MethodCallUpgradeData] = get_version_upgrade_data(
            self, "method_call_checks"
        )
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if node.kind != "call_expression":
            return
        function = unwrap_expression(node.field("function"))
        if function is not None and function.kind == "member_expression":
            self._check_property_access_method_call(node, function)

    def _check_property_access_method_call(
        self, call: SyntaxNode, property_access: SyntaxNode
    ) -> None:
        name = property_access.field("property")
        if name is None or name.kind != "property_identifier":
            return
        host_type_name = self.type_checker.get_type_name_at_location(
            property_access.field("object")
        )
        if not host_type_name:
            return

        method_name = name.text
        data = next(
            (
                d
                for d in self.data
                if d.method == method_name and d.class_name == host_type_name
            ),
            None,
        )
        if data is None:
            return

        argument_count = len(call_arguments(call))
        failure = next(
            (f for f in data.invalid_arg_counts if f.count == argument_count), None
        )
        if failure is None:
            return

        self.create_failure_at_node(
            call,
            f'Found call to "{host_type_name}.{method_name}" '
            f"with {failure.count} arguments. Message: {failure.message}",
        )
