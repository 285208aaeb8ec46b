import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Dict, List

_TAG_NAME = re.compile(r"<\s*[^\s/>]+")
_ATTRIBUTE = re.compile(
    r"""([^\s/>"'=][^\s/>=]*)(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]*))?"""
)


@dataclass
class Element:
    tag_name: str
    # Lower-cased attribute name -> offset of the attribute in the template.
    attrs: Dict[str, int] = field(default_factory=dict)

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attrs


def _parse_attributes(start_tag: str, tag_offset: int) -> Dict[str, int]:
    attrs: Dict[str, int] = {}
    head = _TAG_NAME.match(start_tag)
    position = head.end() if head else 1
    while True:
        match = _ATTRIBUTE.search(start_tag, position)
        if match is None:
            break
        name = match.group(1).lower()
        # The first occurrence wins, like in browsers.
        attrs.setdefault(name, tag_offset + match.start(1))
        position = match.end()
    return attrs


class _ElementCollector(HTMLParser):
    def __init__(self, html: str):
        super().__init__(convert_charrefs=True)
        self.elements: List[Element] = []
        # HTMLParser counts lines on LF only.
        self._line_starts = [0] + [i + 1 for i, c in enumerate(html) if c == "\n"]

    def handle_starttag(self, tag, attrs):
        line, column = self.getpos()
        offset = self._line_starts[line - 1] + column
        start_tag = self.get_starttag_text() or ""
        self.elements.append(
            Element(tag_name=tag.lower(), attrs=_parse_attributes(start_tag, offset))
        )


def parse_elements(html: str) -> List[Element]:
    """Every element of an HTML fragment, in document order."""
    collector = _ElementCollector(html)
    collector.feed(html)
    collector.close()
    return collector.elements


def find_elements_with_attribute(html: str, attribute_name: str) -> List[Element]:
    return [el for el in parse_elements(html) if el.has_attribute(attribute_name)]


def get_start_offset_of_attribute(element: Element, attribute_name: str) -> int:
    return element.attrs[attribute_name.lower()]


def find_attribute_on_element_with_tag(
    html: str, name: str, tag_names: List[str]
) -> List[int]:
    """Offsets of ``name`` on elements whose tag is one of ``tag_names``."""
    tags = {tag.lower() for tag in tag_names}
    return [
        get_start_offset_of_attribute(element, name)
        for element in find_elements_with_attribute(html, name)
        if element.tag_name in tags
    ]


def find_attribute_on_element_with_attrs(
    html: str, name: str, attrs: List[str]
) -> List[int]:
    """Offsets of ``name`` on elements that also carry one of ``attrs``."""
    return [
        get_start_offset_of_attribute(element, name)
        for element in find_elements_with_attribute(html, name)
        if any(element.has_attribute(attr) for attr in attrs)
    ]
