from typing import List, Optional

from ngupdate.tool.migration import Migration
from ngupdate.tool.typescript.nodes import SyntaxNode, call_arguments, unwrap_expression
from ngupdate.tool.version_changes import get_all_changes


class ConstructorSignatureMigration(Migration):
    """
    Reports ``new`` expressions and ``super`` calls whose argument count no
    longer matches any constructor signature of a class listed in the
    constructor checks.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Signatures are not tracked per version, so every version's checks apply.
        self.data: List[str] = get_all_changes(self.upgrade_data.constructor_checks)
        self.enabled = len(self.data) != 0

    def visit_node(self, node: SyntaxNode) -> None:
        if node.kind == "new_expression":
            class_name = self.type_checker.resolve_reference_name(
                node.field("constructor")
            )
            self._check_construction(node, class_name, is_new_expression=True)
        elif node.kind == "call_expression":
            function = unwrap_expression(node.field("function"))
            if function is not None and function.kind == "super":
                class_name = self.type_checker.get_type_name_at_location(function)
                self._check_construction(node, class_name, is_new_expression=False)

    def _check_construction(
        self, node: SyntaxNode, class_name: Optional[str], is_new_expression: bool
    ) -> None:
        if not class_name:
            return
        signatures = self.type_checker.get_construct_signatures(class_name)
        if not signatures:
            return

        # Inherited constructors are checked against the class declaring them.
        owners = [s.owner for s in signatures if s.owner]
        if class_name not in self.data and not any(o in self.data for o in owners):
            return

        arguments = call_arguments(node)
        if any(arg.kind == "spread_element" for arg in arguments):
            return
        if any(signature.accepts(len(arguments)) for signature in signatures):
            return

        expression_name = f"new {class_name}" if is_new_expression else "super"
        described = " or ".join(s.describe(expression_name) for s in signatures)
        plural = "s" if len(signatures) > 1 else ""
        self.create_failure_at_node(
            node,
            f'Found "{class_name}" constructed with an invalid signature. '
            f"Please manually update the {expression_name} expression to match "
            f"the new signature{plural}: {described}",
        )
