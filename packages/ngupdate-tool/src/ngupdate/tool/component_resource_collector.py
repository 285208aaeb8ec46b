import logging
import posixpath
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .file_system import FileSystem
from .line_mappings import (
    LineAndCharacter,
    compute_line_starts_map,
    get_line_and_character_from_position,
)
from .typescript.checker import TypeChecker
from .typescript.decorators import get_angular_decorators, get_decorators
from .typescript.nodes import (
    CLASS_KINDS,
    SyntaxNode,
    call_arguments,
    is_string_literal_like,
    literal_raw_text,
    literal_text,
    property_name_text,
    unwrap_expression,
)

log = logging.getLogger(__name__)


@dataclass
class ResolvedResource:
    """A component template or stylesheet, inline or external."""

    file_path: str
    # Class declaration of the component, None for global stylesheets.
    container: Optional[SyntaxNode]
    content: str
    inline: bool
    # Offset of ``content`` within ``file_path``.
    start: int
    line_starts: List[int] = field(repr=False, default_factory=list)

    def get_character_and_line_of_position(self, pos: int) -> LineAndCharacter:
        """Maps an offset within ``file_path`` to a line and character."""
        return get_line_and_character_from_position(self.line_starts, pos)


@dataclass
class ComponentMetadata:
    template: Optional[SyntaxNode] = None
    template_url: Optional[str] = None
    styles: List[SyntaxNode] = field(default_factory=list)
    style_urls: List[str] = field(default_factory=list)


def _string_literals(node: Optional[SyntaxNode]) -> List[SyntaxNode]:
    """A single literal or the literal elements of an array literal."""
    node = unwrap_expression(node)
    if node is None:
        return []
    if is_string_literal_like(node):
        return [node]
    if node.kind == "array":
        return [
            element
            for element in (unwrap_expression(c) for c in node.children)
            if is_string_literal_like(element)
        ]
    return []


def extract_component_metadata(class_node: SyntaxNode) -> Optional[ComponentMetadata]:
    """
    Reads the statically known resource fields of an Angular ``@Component``.

    Returns None unless the class carries a ``Component`` decorator imported
    from ``@angular/core`` whose single argument is an object literal.
    """
    decorators = get_angular_decorators(get_decorators(class_node))
    component = next((d for d in decorators if d.name == "Component"), None)
    if component is None or component.call is None:
        return None

    arguments = call_arguments(component.call)
    if len(arguments) != 1:
        return None
    metadata_node = unwrap_expression(arguments[0])
    if metadata_node is None or metadata_node.kind != "object":
        return None

    metadata = ComponentMetadata()
    for prop in metadata_node.children_of_kind("pair"):
        name = property_name_text(prop.field("key"))
        value = unwrap_expression(prop.field("value"))
        if name == "template" and is_string_literal_like(value):
            metadata.template = value
        elif name == "templateUrl" and is_string_literal_like(value):
            metadata.template_url = literal_text(value)
        elif name == "styles":
            metadata.styles.extend(_string_literals(value))
        elif name in ("styleUrls", "styleUrl"):
            metadata.style_urls.extend(literal_text(n) for n in _string_literals(value))
    return metadata


class ComponentResourceCollector:
    """
    Collects the templates and stylesheets of every Angular component the
    walk passes through.
    """

    def __init__(self, type_checker: TypeChecker, file_system: FileSystem):
        self.type_checker = type_checker
        self._file_system = file_system
        self.resolved_templates: List[ResolvedResource] = []
        self.resolved_stylesheets: List[ResolvedResource] = []

    def visit_node(self, node: SyntaxNode) -> None:
        if node.kind in CLASS_KINDS:
            self._visit_class_declaration(node)

    def _visit_class_declaration(self, node: SyntaxNode) -> None:
        metadata = extract_component_metadata(node)
        if metadata is None:
            return

        source_file = node.source_file
        file_path = self._file_system.resolve(source_file.file_name)
        source_dir = posixpath.dirname(file_path)

        for style in metadata.styles:
            self.resolved_stylesheets.append(
                self._inline_resource(file_path, node, style)
            )

        for style_url in metadata.style_urls:
            stylesheet_path = self._file_system.resolve(source_dir, style_url)
            stylesheet = self.resolve_external_stylesheet(stylesheet_path, node)
            if stylesheet is not None:
                self.resolved_stylesheets.append(stylesheet)

        if metadata.template is not None:
            self.resolved_templates.append(
                self._inline_resource(file_path, node, metadata.template)
            )

        if metadata.template_url is not None:
            template_path = self._file_system.resolve(source_dir, metadata.template_url)
            # Missing templates are reported by the Angular compiler, not here.
            if not self._file_system.exists(template_path):
                log.debug(f"Skipping missing template {template_path}")
                return
            content = self._file_system.read(template_path)
            if content:
                self.resolved_templates.append(
                    ResolvedResource(
                        file_path=template_path,
                        container=node,
                        content=content,
                        inline=False,
                        start=0,
                        line_starts=compute_line_starts_map(content),
                    )
                )

    def _inline_resource(
        self, file_path: str, container: SyntaxNode, literal: SyntaxNode
    ) -> ResolvedResource:
        # Content is the raw source text so offsets map back onto the file.
        return ResolvedResource(
            file_path=file_path,
            container=container,
            content=literal_raw_text(literal),
            inline=True,
            start=literal.start + 1,
            line_starts=literal.source_file.line_starts,
        )

    def resolve_external_stylesheet(
        self, file_path: str, container: Optional[SyntaxNode]
    ) -> Optional[ResolvedResource]:
        content = self._file_system.read(file_path)
        if not content:
            return None
        return ResolvedResource(
            file_path=file_path,
            container=container,
            content=content,
            inline=False,
            start=0,
            line_starts=compute_line_starts_map(content),
        )


def collect_program_resources(
    program: Any, file_system: FileSystem
) -> ComponentResourceCollector:
    """Runs a collector over every first-party source file of ``program``."""
    collector = ComponentResourceCollector(program.get_type_checker(), file_system)
    for source_file in program.get_source_files():
        if source_file.is_declaration_file:
            continue
        if program.is_source_file_from_external_library(source_file):
            continue
        for node in source_file.root.descendants():
            collector.visit_node(node)
    return collector
