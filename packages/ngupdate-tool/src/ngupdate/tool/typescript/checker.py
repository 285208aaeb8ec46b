import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

import networkx as nx

from .base_types import get_all_heritage_nodes, get_extends_node
from .imports import get_import_bindings, resolve_imported_name
from .nodes import (
    CLASS_KINDS,
    SyntaxNode,
    get_class_name,
    property_name_text,
    unwrap_expression,
)

if TYPE_CHECKING:
    from .program import Program

log = logging.getLogger(__name__)

DECLARATION_KINDS = CLASS_KINDS + ("interface_declaration",)
FUNCTION_KINDS = (
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
)
PARAMETER_KINDS = ("required_parameter", "optional_parameter")
MEMBER_KINDS = (
    "public_field_definition",
    "property_signature",
    "method_definition",
    "method_signature",
    "abstract_method_signature",
)
METHOD_KINDS = ("method_definition", "method_signature", "abstract_method_signature")
SCOPE_KINDS = ("program", "statement_block", "class_body")
MAX_INFERENCE_DEPTH = 16


@dataclass
class Parameter:
    name: str
    type_text: str = "any"
    optional: bool = False
    rest: bool = False


@dataclass
class ConstructSignature:
    # Class declaring the constructor; None for an implicit empty constructor.
    owner: Optional[str]
    parameters: List[Parameter] = field(default_factory=list)

    @property
    def min_arguments(self) -> int:
        return sum(1 for p in self.parameters if not (p.optional or p.rest))

    def accepts(self, argument_count: int) -> bool:
        if argument_count < self.min_arguments:
            return False
        if any(p.rest for p in self.parameters):
            return True
        return argument_count <= len(self.parameters)

    def describe(self, expression_name: str) -> str:
        types = ", ".join(p.type_text for p in self.parameters)
        return f"{expression_name}({types})"


class TypeChecker:
    """
    Declaration-based type resolution over a Program.

    Types are identified by the name of the class or interface that declares
    them. Expressions whose type cannot be derived from explicit annotations,
    initializers or class declarations resolve to None.
    """

    def __init__(self, program: "Program"):
        self._program = program
        self._declarations: Dict[str, List[SyntaxNode]] = {}
        # Edges point from a class or interface to each of its base types.
        self._inheritance = nx.DiGraph()
        self._build_index()

    def _build_index(self) -> None:
        for source_file in self._program.get_source_files():
            for node in source_file.root.descendants():
                if node.kind not in DECLARATION_KINDS:
                    continue
                name = get_class_name(node)
                if not name:
                    continue
                self._declarations.setdefault(name, []).append(node)
                self._inheritance.add_node(name)
                for base in get_all_heritage_nodes(node):
                    base_name = self.resolve_reference_name(base)
                    if base_name:
                        self._inheritance.add_edge(name, base_name)

    # --- Declarations ---

    def get_declarations(self, name: str) -> List[SyntaxNode]:
        return list(self._declarations.get(name, []))

    def get_class_declaration(self, name: str) -> Optional[SyntaxNode]:
        for declaration in self._declarations.get(name, []):
            if declaration.kind in CLASS_KINDS:
                return declaration
        return None

    def get_ancestor_names(self, name: str) -> List[str]:
        """Base types of ``name``, nearest first."""
        if name not in self._inheritance:
            return []
        return [n for n in nx.bfs_tree(self._inheritance, name) if n != name]

    def is_subtype_of(self, name: str, base: str) -> bool:
        if name not in self._inheritance or base not in self._inheritance:
            return False
        return nx.has_path(self._inheritance, name, base)

    def resolve_reference_name(self, node: Optional[SyntaxNode]) -> Optional[str]:
        """Declared name a type or value reference points at, following import aliases."""
        node = unwrap_expression(node)
        if node is None:
            return None
        if node.kind in ("identifier", "type_identifier"):
            return resolve_imported_name(node)
        if node.kind == "generic_type":
            return self.resolve_reference_name(node.field("name"))
        if node.kind == "nested_type_identifier":
            name = node.field("name")
            return name.text if name is not None else None
        if node.kind == "member_expression":
            prop = node.field("property")
            return prop.text if prop is not None else None
        return None

    # --- Expression types ---

    def get_type_name_at_location(
        self, node: Optional[SyntaxNode], _depth: int = 0
    ) -> Optional[str]:
        node = unwrap_expression(node)
        if node is None or _depth > MAX_INFERENCE_DEPTH:
            return None

        kind = node.kind
        if kind == "this":
            class_node = node.find_ancestor(*CLASS_KINDS)
            return get_class_name(class_node) if class_node is not None else None
        if kind == "super":
            class_node = node.find_ancestor(*CLASS_KINDS)
            if class_node is None:
                return None
            return self.resolve_reference_name(get_extends_node(class_node))
        if kind in ("identifier", "shorthand_property_identifier"):
            return self._type_of_identifier(node, _depth)
        if kind == "member_expression":
            owner = self.get_type_name_at_location(node.field("object"), _depth + 1)
            prop = node.field("property")
            if owner is None or prop is None:
                return None
            return self._type_of_member(owner, prop.text, _depth)
        if kind == "new_expression":
            return self.resolve_reference_name(node.field("constructor"))
        if kind == "call_expression":
            return self._type_of_call(node, _depth)
        if kind == "await_expression" and node.children:
            return self.get_type_name_at_location(node.children[0], _depth + 1)
        if kind == "assignment_expression":
            return self.get_type_name_at_location(node.field("right"), _depth + 1)
        return None

    def type_name_from_annotation(self, node: Optional[SyntaxNode]) -> Optional[str]:
        if node is None:
            return None
        if node.kind == "type_annotation":
            children = node.children
            node = children[0] if children else None
            if node is None:
                return None

        kind = node.kind
        if kind in ("type_identifier", "generic_type", "nested_type_identifier"):
            return self.resolve_reference_name(node)
        if kind == "parenthesized_type" and node.children:
            return self.type_name_from_annotation(node.children[0])
        if kind == "union_type":
            members = [
                child
                for child in node.children
                if child.kind not in ("predefined_type", "literal_type")
            ]
            if len(members) == 1:
                return self.type_name_from_annotation(members[0])
        return None

    def _type_of_identifier(self, identifier: SyntaxNode, depth: int) -> Optional[str]:
        declaration = self.find_declaration(identifier)
        if declaration is None:
            binding = get_import_bindings(identifier.source_file).get(identifier.text)
            if binding is not None and not binding.is_namespace:
                return binding.imported_name
            return None

        if declaration.kind in PARAMETER_KINDS or declaration.kind in (
            "variable_declarator",
            "public_field_definition",
        ):
            annotated = self.type_name_from_annotation(declaration.field("type"))
            if annotated is not None:
                return annotated
            return self.get_type_name_at_location(declaration.field("value"), depth + 1)
        if declaration.kind in CLASS_KINDS:
            return get_class_name(declaration)
        return None

    def _type_of_member(self, owner: str, member_name: str, depth: int) -> Optional[str]:
        member = self.find_member(owner, member_name)
        if member is None:
            return None
        if member.kind in METHOD_KINDS:
            # Only getters describe a value type.
            if member.has_token("get"):
                return self.type_name_from_annotation(member.field("return_type"))
            return None
        annotated = self.type_name_from_annotation(member.field("type"))
        if annotated is not None:
            return annotated
        return self.get_type_name_at_location(member.field("value"), depth + 1)

    def _type_of_call(self, call: SyntaxNode, depth: int) -> Optional[str]:
        function = unwrap_expression(call.field("function"))
        if function is None:
            return None
        if function.kind == "member_expression":
            owner = self.get_type_name_at_location(function.field("object"), depth + 1)
            prop = function.field("property")
            if owner is None or prop is None:
                return None
            member = self.find_member(owner, prop.text)
            if member is not None and member.kind in METHOD_KINDS:
                return self.type_name_from_annotation(member.field("return_type"))
            return None
        if function.kind == "identifier":
            declaration = self.find_declaration(function)
            if declaration is not None and declaration.kind in FUNCTION_KINDS:
                return self.type_name_from_annotation(declaration.field("return_type"))
        return None

    # --- Scopes and members ---

    def find_declaration(self, identifier: SyntaxNode) -> Optional[SyntaxNode]:
        """Nearest declaration of the identifier's name in an enclosing scope."""
        name = identifier.text
        for scope in identifier.ancestors():
            found = self._declaration_in_scope(scope, name)
            if found is not None:
                return found
        return None

    def _declaration_in_scope(self, scope: SyntaxNode, name: str) -> Optional[SyntaxNode]:
        if scope.kind in FUNCTION_KINDS:
            single = scope.field("parameter")
            if single is not None and single.text == name:
                return single
            parameters = scope.field("parameters")
            for parameter in parameters.children if parameters is not None else []:
                pattern = parameter.field("pattern")
                if (
                    parameter.kind in PARAMETER_KINDS
                    and pattern is not None
                    and pattern.kind == "identifier"
                    and pattern.text == name
                ):
                    return parameter
            return None

        if scope.kind not in ("program", "statement_block"):
            return None

        for statement in scope.children:
            if statement.kind == "export_statement":
                statement = statement.field("declaration") or statement
            if statement.kind in ("lexical_declaration", "variable_declaration"):
                for declarator in statement.children_of_kind("variable_declarator"):
                    declared = declarator.field("name")
                    if declared is not None and declared.text == name:
                        return declarator
            elif statement.kind in CLASS_KINDS or statement.kind in FUNCTION_KINDS:
                if get_class_name(statement) == name:
                    return statement
        return None

    def find_member(self, owner: str, member_name: str) -> Optional[SyntaxNode]:
        """Looks the member up on ``owner`` first, then on its base types."""
        for type_name in [owner] + self.get_ancestor_names(owner):
            for declaration in self._declarations.get(type_name, []):
                member = self._lookup_member(declaration, member_name)
                if member is not None:
                    return member
        return None

    def _lookup_member(self, declaration: SyntaxNode, name: str) -> Optional[SyntaxNode]:
        body = declaration.field("body")
        if body is None:
            return None
        for member in body.children:
            if member.kind not in MEMBER_KINDS:
                continue
            member_name = property_name_text(member.field("name"))
            if member_name == name:
                return member
            if member_name == "constructor" and member.kind in METHOD_KINDS:
                for parameter in self._parameter_nodes(member):
                    pattern = parameter.field("pattern")
                    is_property = parameter.first_child_of_kind(
                        "accessibility_modifier"
                    ) is not None or parameter.has_token("readonly")
                    if is_property and pattern is not None and pattern.text == name:
                        return parameter
        return None

    # --- Construct signatures ---

    def get_construct_signatures(self, class_name: str) -> List[ConstructSignature]:
        """
        Construct signatures of a class. Classes without a constructor use
        the signatures of their closest base class declaring one. An empty
        list means the signatures cannot be determined.
        """
        visited = set()
        name: Optional[str] = class_name
        while name and name not in visited:
            visited.add(name)
            declaration = self.get_class_declaration(name)
            if declaration is None:
                log.debug(f"No class declaration found for '{name}'")
                return []
            signatures = self._declared_constructors(declaration, name)
            if signatures:
                return signatures
            extends = get_extends_node(declaration)
            if extends is None:
                return [ConstructSignature(owner=None)]
            name = self.resolve_reference_name(extends)
        return []

    def _declared_constructors(
        self, declaration: SyntaxNode, owner: str
    ) -> List[ConstructSignature]:
        body = declaration.field("body")
        if body is None:
            return []
        overloads: List[SyntaxNode] = []
        implementations: List[SyntaxNode] = []
        for member in body.children:
            if property_name_text(member.field("name")) != "constructor":
                continue
            if member.kind == "method_definition":
                implementations.append(member)
            elif member.kind in METHOD_KINDS:
                overloads.append(member)
        # An implementation signature is hidden by its overloads.
        return [
            ConstructSignature(owner=owner, parameters=self._parameters(member))
            for member in overloads or implementations
        ]

    @staticmethod
    def _parameter_nodes(member: SyntaxNode) -> List[SyntaxNode]:
        parameters = member.field("parameters")
        if parameters is None:
            return []
        return parameters.children_of_kind(*PARAMETER_KINDS)

    def _parameters(self, member: SyntaxNode) -> List[Parameter]:
        result = []
        for node in self._parameter_nodes(member):
            pattern = node.field("pattern")
            if pattern is None or pattern.kind == "this":
                continue
            annotation = node.field("type")
            type_text = "any"
            if annotation is not None and annotation.children:
                type_text = annotation.children[0].text
            result.append(
                Parameter(
                    name=pattern.text,
                    type_text=type_text,
                    optional=node.kind == "optional_parameter"
                    or node.field("value") is not None,
                    rest=pattern.kind == "rest_pattern",
                )
            )
        return result
