from typing import Dict, List, Type

from ngupdate.tool.migration import Migration
from .attribute_selectors import AttributeSelectorsMigration
from .class_inheritance import ClassInheritanceMigration
from .class_names import ClassNamesMigration
from .constructor_signature import ConstructorSignatureMigration
from .css_selectors import CssSelectorsMigration
from .element_selectors import ElementSelectorsMigration
from .input_names import InputNamesMigration
from .method_call_arguments import MethodCallArgumentsMigration
from .misc_template import MiscTemplateMigration
from .output_names import OutputNamesMigration
from .property_names import PropertyNamesMigration

cdk_migrations: List[Type[Migration]] = [
    AttributeSelectorsMigration,
    ClassInheritanceMigration,
    ClassNamesMigration,
    ConstructorSignatureMigration,
    CssSelectorsMigration,
    ElementSelectorsMigration,
    InputNamesMigration,
    MethodCallArgumentsMigration,
    MiscTemplateMigration,
    OutputNamesMigration,
    PropertyNamesMigration,
]


def get_migrations_by_name() -> Dict[str, Type[Migration]]:
    return {migration.__name__: migration for migration in cdk_migrations}


__all__ = [
    "AttributeSelectorsMigration",
    "ClassInheritanceMigration",
    "ClassNamesMigration",
    "ConstructorSignatureMigration",
    "CssSelectorsMigration",
    "ElementSelectorsMigration",
    "InputNamesMigration",
    "MethodCallArgumentsMigration",
    "MiscTemplateMigration",
    "OutputNamesMigration",
    "PropertyNamesMigration",
    "cdk_migrations",
    "get_migrations_by_name",
]
