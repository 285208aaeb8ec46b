from .angular import (
    find_inputs_on_element_with_attr,
    find_inputs_on_element_with_tag,
    find_outputs_on_element_with_attr,
    find_outputs_on_element_with_tag,
)
from .elements import (
    Element,
    find_attribute_on_element_with_attrs,
    find_attribute_on_element_with_tag,
    find_elements_with_attribute,
    parse_elements,
)

__all__ = [
    "find_inputs_on_element_with_attr",
    "find_inputs_on_element_with_tag",
    "find_outputs_on_element_with_attr",
    "find_outputs_on_element_with_tag",
    "Element",
    "find_attribute_on_element_with_attrs",
    "find_attribute_on_element_with_tag",
    "find_elements_with_attribute",
    "parse_elements",
]
