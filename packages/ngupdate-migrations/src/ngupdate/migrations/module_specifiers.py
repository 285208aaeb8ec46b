import re

from ngupdate.tool.typescript.imports import get_declaration_module_specifier
from ngupdate.tool.typescript.nodes import SyntaxNode

MATERIAL_MODULE_SPECIFIER = re.compile(r"^@angular/material(/.+)?$")
CDK_MODULE_SPECIFIER = re.compile(r"^@angular/cdk(/.+)?$")


def is_material_module_specifier(specifier: str) -> bool:
    return bool(
        MATERIAL_MODULE_SPECIFIER.match(specifier)
        or CDK_MODULE_SPECIFIER.match(specifier)
    )


def is_material_import_declaration(node: SyntaxNode) -> bool:
    """Whether the import enclosing ``node`` comes from Angular Material or the CDK."""
    if node.find_ancestor("import_statement") is None:
        return False
    specifier = get_declaration_module_specifier(node)
    return specifier is not None and is_material_module_specifier(specifier)


def is_material_export_declaration(node: SyntaxNode) -> bool:
    """Whether the re-export enclosing ``node`` comes from Angular Material or the CDK."""
    if node.find_ancestor("export_statement") is None:
        return False
    specifier = get_declaration_module_specifier(node)
    return specifier is not None and is_material_module_specifier(specifier)
