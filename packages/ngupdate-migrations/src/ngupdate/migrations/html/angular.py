from typing import List

from .elements import find_attribute_on_element_with_attrs, find_attribute_on_element_with_tag

# Offsets of bound forms skip the opening bracket or parenthesis so they
# point at the name itself.


def find_inputs_on_element_with_tag(
    html: str, input_name: str, tag_names: List[str]
) -> List[int]:
    return find_attribute_on_element_with_tag(html, input_name, tag_names) + [
        offset + 1
        for offset in find_attribute_on_element_with_tag(
            html, f"[{input_name}]", tag_names
        )
    ]


def find_inputs_on_element_with_attr(
    html: str, input_name: str, attrs: List[str]
) -> List[int]:
    return find_attribute_on_element_with_attrs(html, input_name, attrs) + [
        offset + 1
        for offset in find_attribute_on_element_with_attrs(
            html, f"[{input_name}]", attrs
        )
    ]


def find_outputs_on_element_with_tag(
    html: str, output_name: str, tag_names: List[str]
) -> List[int]:
    return [
        offset + 1
        for offset in find_attribute_on_element_with_tag(
            html, f"({output_name})", tag_names
        )
    ]


def find_outputs_on_element_with_attr(
    html: str, output_name: str, attrs: List[str]
) -> List[int]:
    return [
        offset + 1
        for offset in find_attribute_on_element_with_attrs(
            html, f"({output_name})", attrs
        )
    ]
