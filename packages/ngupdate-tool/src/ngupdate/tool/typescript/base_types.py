from typing import List, Optional

from .nodes import SyntaxNode, unwrap_expression


def get_heritage_nodes(class_node: SyntaxNode, clause_kind: str) -> List[SyntaxNode]:
    """
    Type expressions of one heritage clause: ``extends_clause`` and
    ``implements_clause`` for classes, ``extends_type_clause`` for interfaces.
    """
    heritage = class_node.first_child_of_kind("class_heritage")
    if heritage is None:
        clause = class_node.first_child_of_kind(clause_kind)
        return clause.fields("type") if clause is not None else []
    clause = heritage.first_child_of_kind(clause_kind)
    if clause is None:
        return []
    if clause_kind == "extends_clause":
        return clause.fields("value")
    return clause.children


def get_all_heritage_nodes(class_node: SyntaxNode) -> List[SyntaxNode]:
    return (
        get_heritage_nodes(class_node, "extends_clause")
        + get_heritage_nodes(class_node, "implements_clause")
        + get_heritage_nodes(class_node, "extends_type_clause")
    )


def get_extends_node(class_node: SyntaxNode) -> Optional[SyntaxNode]:
    nodes = get_heritage_nodes(class_node, "extends_clause")
    return unwrap_expression(nodes[0]) if nodes else None


def determine_base_types(class_node: SyntaxNode) -> List[str]:
    """
    Names of the plain identifiers a class extends or implements, in
    declaration order. Qualified and computed base expressions are left out.
    """
    names = []
    for node in get_all_heritage_nodes(class_node):
        if node.kind == "generic_type":
            node = node.field("name")
        if node is not None and node.kind in ("identifier", "type_identifier"):
            names.append(node.text)
    return names
