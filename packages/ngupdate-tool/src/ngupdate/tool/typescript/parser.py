from typing import Dict

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())
TSX = Language(tree_sitter_typescript.language_tsx())

_parsers: Dict[str, Parser] = {}


def get_language(file_name: str) -> Language:
    return TSX if file_name.endswith(".tsx") else TYPESCRIPT


def get_parser(file_name: str) -> Parser:
    key = "tsx" if file_name.endswith(".tsx") else "typescript"
    parser = _parsers.get(key)
    if parser is None:
        parser = Parser(get_language(file_name))
        _parsers[key] = parser
    return parser


def parse_source(text: str, file_name: str) -> Tree:
    return get_parser(file_name).parse(text.encode("utf-8"))
