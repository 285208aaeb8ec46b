from .checker import ConstructSignature, Parameter, TypeChecker
from .nodes import SyntaxNode
from .program import Program, resolve_module_name
from .source_file import SourceFile
from .tsconfig import ParsedTsconfig, parse_tsconfig_file

__all__ = [
    "ConstructSignature",
    "Parameter",
    "TypeChecker",
    "SyntaxNode",
    "Program",
    "resolve_module_name",
    "SourceFile",
    "ParsedTsconfig",
    "parse_tsconfig_file",
]
