from dataclasses import dataclass
from typing import Dict, List, Optional

from .nodes import SyntaxNode, literal_text
from .source_file import SourceFile

NAMESPACE = "*"
DEFAULT = "default"


@dataclass(frozen=True)
class ImportBinding:
    local_name: str
    # NAMESPACE for `import * as x`, DEFAULT for `import x from`.
    imported_name: str
    module_specifier: str
    node: SyntaxNode

    @property
    def is_namespace(self) -> bool:
        return self.imported_name == NAMESPACE


def get_import_bindings(source_file: SourceFile) -> Dict[str, ImportBinding]:
    """Maps every locally bound import name of the file to its origin."""
    if source_file.import_bindings is not None:
        return source_file.import_bindings

    bindings: Dict[str, ImportBinding] = {}
    for statement in source_file.root.children_of_kind("import_statement"):
        source = statement.field("source")
        clause = statement.first_child_of_kind("import_clause")
        if source is None or clause is None:
            continue
        module = literal_text(source)
        for child in clause.children:
            if child.kind == "identifier":
                bindings[child.text] = ImportBinding(child.text, DEFAULT, module, child)
            elif child.kind == "namespace_import":
                ident = child.first_child_of_kind("identifier")
                if ident is not None:
                    bindings[ident.text] = ImportBinding(
                        ident.text, NAMESPACE, module, ident
                    )
            elif child.kind == "named_imports":
                for specifier in child.children_of_kind("import_specifier"):
                    name = specifier.field("name")
                    if name is None:
                        continue
                    local = specifier.field("alias") or name
                    bindings[local.text] = ImportBinding(
                        local.text, property_text(name), module, local
                    )

    source_file.import_bindings = bindings
    return bindings


def property_text(node: SyntaxNode) -> str:
    # `import {"a-b" as c}` names may be strings.
    return literal_text(node) if node.kind == "string" else node.text


def get_module_specifiers(source_file: SourceFile) -> List[str]:
    """Specifiers of every import and re-export statement, in source order."""
    specifiers = []
    for statement in source_file.root.children_of_kind(
        "import_statement", "export_statement"
    ):
        source = statement.field("source")
        if source is not None:
            specifiers.append(literal_text(source))
    return specifiers


def get_declaration_module_specifier(node: SyntaxNode) -> Optional[str]:
    """Module specifier of the import/export declaration enclosing ``node``."""
    declaration = node.find_ancestor("import_statement", "export_statement")
    if declaration is None:
        return None
    source = declaration.field("source")
    return literal_text(source) if source is not None else None


def is_import_specifier_node(node: SyntaxNode) -> bool:
    parent = node.parent
    return parent is not None and parent.kind == "import_specifier"


def is_export_specifier_node(node: SyntaxNode) -> bool:
    parent = node.parent
    return parent is not None and parent.kind == "export_specifier"


def is_namespace_import_node(node: SyntaxNode) -> bool:
    parent = node.parent
    return parent is not None and parent.kind == "namespace_import"


def resolve_imported_name(node: SyntaxNode) -> str:
    """The exported name an identifier refers to, following import aliases."""
    binding = get_import_bindings(node.source_file).get(node.text)
    if binding is not None and binding.imported_name not in (NAMESPACE, DEFAULT):
        return binding.imported_name
    return node.text
