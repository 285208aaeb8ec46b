from dataclasses import dataclass
from typing import List, Optional

from .imports import get_import_bindings
from .nodes import SyntaxNode

ANGULAR_CORE = "@angular/core"


@dataclass
class NgDecorator:
    name: str
    node: SyntaxNode
    call: Optional[SyntaxNode]


def get_decorators(class_node: SyntaxNode) -> List[SyntaxNode]:
    # `@Dec() export class X` attaches the decorators to the export statement.
    decorators = class_node.children_of_kind("decorator")
    parent = class_node.parent
    if parent is not None and parent.kind == "export_statement":
        decorators = parent.children_of_kind("decorator") + decorators
    return decorators


def _resolve_angular_name(expression: SyntaxNode) -> Optional[str]:
    bindings = get_import_bindings(expression.source_file)
    if expression.kind == "identifier":
        binding = bindings.get(expression.text)
        if binding is None or binding.is_namespace:
            return None
        if binding.module_specifier != ANGULAR_CORE:
            return None
        return binding.imported_name
    if expression.kind == "member_expression":
        obj = expression.field("object")
        prop = expression.field("property")
        if obj is None or prop is None or obj.kind != "identifier":
            return None
        binding = bindings.get(obj.text)
        if binding is None or not binding.is_namespace:
            return None
        if binding.module_specifier != ANGULAR_CORE:
            return None
        return prop.text
    return None


def get_angular_decorators(decorators: List[SyntaxNode]) -> List[NgDecorator]:
    """Decorators that resolve to an export of ``@angular/core``."""
    result = []
    for decorator in decorators:
        children = decorator.children
        if not children:
            continue
        expression = children[0]
        call = expression if expression.kind == "call_expression" else None
        target = call.field("function") if call is not None else expression
        if target is None:
            continue
        name = _resolve_angular_name(target)
        if name is not None:
            result.append(NgDecorator(name=name, node=decorator, call=call))
    return result
