import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from ngupdate.tool.migration import Migration
from ngupdate.tool.target_version import TargetVersion
from ngupdate.tool.version_changes import (
    VersionChanges,
    VersionChangesEntry,
    get_changes_for_target,
)


class UpgradeDataError(Exception):
    pass


@dataclass
class AttributeSelectorUpgradeData:
    replace: str
    replace_with: str


@dataclass
class ClassNameUpgradeData:
    replace: str
    replace_with: str


@dataclass
class CssSelectorReplaceIn:
    html: bool = True
    stylesheet: bool = True
    ts_string_literals: bool = True


@dataclass
class CssSelectorUpgradeData:
    replace: str
    replace_with: str
    # None replaces everywhere.
    replace_in: Optional[CssSelectorReplaceIn] = None


@dataclass
class ElementSelectorUpgradeData:
    replace: str
    replace_with: str


@dataclass
class ElementLimits:
    elements: List[str] = field(default_factory=list)
    attributes: List[str] = field(default_factory=list)


@dataclass
class InputNameUpgradeData:
    replace: str
    replace_with: str
    limited_to: ElementLimits = field(default_factory=ElementLimits)


@dataclass
class OutputNameUpgradeData:
    replace: str
    replace_with: str
    limited_to: ElementLimits = field(default_factory=ElementLimits)


@dataclass
class InvalidArgCount:
    count: int
    message: str


@dataclass
class MethodCallUpgradeData:
    class_name: str
    method: str
    invalid_arg_counts: List[InvalidArgCount] = field(default_factory=list)


@dataclass
class ClassLimits:
    classes: List[str] = field(default_factory=list)


@dataclass
class PropertyNameUpgradeData:
    replace: str
    replace_with: str
    limited_to: Optional[ClassLimits] = None


# Constructor checks are plain class names.
ConstructorChecksUpgradeData = str


@dataclass
class UpgradeData:
    attribute_selectors: VersionChanges[AttributeSelectorUpgradeData] = field(
        default_factory=dict
    )
    class_names: VersionChanges[ClassNameUpgradeData] = field(default_factory=dict)
    constructor_checks: VersionChanges[ConstructorChecksUpgradeData] = field(
        default_factory=dict
    )
    css_selectors: VersionChanges[CssSelectorUpgradeData] = field(default_factory=dict)
    element_selectors: VersionChanges[ElementSelectorUpgradeData] = field(
        default_factory=dict
    )
    input_names: VersionChanges[InputNameUpgradeData] = field(default_factory=dict)
    method_call_checks: VersionChanges[MethodCallUpgradeData] = field(
        default_factory=dict
    )
    output_names: VersionChanges[OutputNameUpgradeData] = field(default_factory=dict)
    property_names: VersionChanges[PropertyNameUpgradeData] = field(
        default_factory=dict
    )

    def merge(self, other: "UpgradeData") -> "UpgradeData":
        """Returns a table holding this data's entries followed by ``other``'s."""
        merged = UpgradeData()
        for f in fields(self):
            table: VersionChanges = {}
            for source in (getattr(self, f.name), getattr(other, f.name)):
                for version, entries in source.items():
                    table.setdefault(version, []).extend(entries)
            setattr(merged, f.name, table)
        return merged


def get_version_upgrade_data(migration: Migration, data_name: str) -> List[Any]:
    """The changes of one upgrade data table for the migration's target version."""
    table = getattr(migration.upgrade_data, data_name, None)
    return get_changes_for_target(migration.target_version, table)


# --- Loading ---

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: Any) -> str:
    return _CAMEL_BOUNDARY.sub("_", str(key)).lower()


def _normalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_snake(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    return value


def _string_list(value: Any, where: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise UpgradeDataError(f"{where}: expected a list of strings.")
    return list(value)


def _require(raw: Dict[str, Any], key: str, where: str) -> Any:
    if key not in raw:
        raise UpgradeDataError(f"{where}: missing required key '{key}'.")
    return raw[key]


def _replacement(cls: type) -> Callable[[Any, str], Any]:
    def build(raw: Any, where: str) -> Any:
        if not isinstance(raw, dict):
            raise UpgradeDataError(f"{where}: expected a mapping.")
        return cls(
            replace=str(_require(raw, "replace", where)),
            replace_with=str(_require(raw, "replace_with", where)),
        )

    return build


def _css_selector(raw: Any, where: str) -> CssSelectorUpgradeData:
    base = _replacement(CssSelectorUpgradeData)(raw, where)
    replace_in = raw.get("replace_in")
    if replace_in is not None:
        if not isinstance(replace_in, dict):
            raise UpgradeDataError(f"{where}.replace_in: expected a mapping.")
        # Unlisted targets are off once a filter is given.
        base.replace_in = CssSelectorReplaceIn(
            html=bool(replace_in.get("html", False)),
            stylesheet=bool(replace_in.get("stylesheet", False)),
            ts_string_literals=bool(replace_in.get("ts_string_literals", False)),
        )
    return base


def _element_name(cls: type) -> Callable[[Any, str], Any]:
    def build(raw: Any, where: str) -> Any:
        base = _replacement(cls)(raw, where)
        limited_to = raw.get("limited_to") or {}
        if not isinstance(limited_to, dict):
            raise UpgradeDataError(f"{where}.limited_to: expected a mapping.")
        base.limited_to = ElementLimits(
            elements=_string_list(limited_to.get("elements"), f"{where}.limited_to"),
            attributes=_string_list(
                limited_to.get("attributes"), f"{where}.limited_to"
            ),
        )
        return base

    return build


def _property_name(raw: Any, where: str) -> PropertyNameUpgradeData:
    base = _replacement(PropertyNameUpgradeData)(raw, where)
    limited_to = raw.get("limited_to")
    if limited_to is not None:
        if not isinstance(limited_to, dict):
            raise UpgradeDataError(f"{where}.limited_to: expected a mapping.")
        base.limited_to = ClassLimits(
            classes=_string_list(limited_to.get("classes"), f"{where}.limited_to")
        )
    return base


def _method_call(raw: Any, where: str) -> MethodCallUpgradeData:
    if not isinstance(raw, dict):
        raise UpgradeDataError(f"{where}: expected a mapping.")
    counts = []
    for index, item in enumerate(raw.get("invalid_arg_counts") or []):
        item_where = f"{where}.invalid_arg_counts[{index}]"
        if not isinstance(item, dict):
            raise UpgradeDataError(f"{item_where}: expected a mapping.")
        try:
            count = int(_require(item, "count", item_where))
        except (TypeError, ValueError) as e:
            raise UpgradeDataError(f"{item_where}: 'count' must be an integer.") from e
        counts.append(
            InvalidArgCount(count=count, message=str(item.get("message", "")))
        )
    return MethodCallUpgradeData(
        class_name=str(_require(raw, "class_name", where)),
        method=str(_require(raw, "method", where)),
        invalid_arg_counts=counts,
    )


def _constructor_check(raw: Any, where: str) -> str:
    if not isinstance(raw, str):
        raise UpgradeDataError(f"{where}: expected a class name.")
    return raw


_BUILDERS: Dict[str, Callable[[Any, str], Any]] = {
    "attribute_selectors": _replacement(AttributeSelectorUpgradeData),
    "class_names": _replacement(ClassNameUpgradeData),
    "constructor_checks": _constructor_check,
    "css_selectors": _css_selector,
    "element_selectors": _replacement(ElementSelectorUpgradeData),
    "input_names": _element_name(InputNameUpgradeData),
    "method_call_checks": _method_call,
    "output_names": _element_name(OutputNameUpgradeData),
    "property_names": _property_name,
}


def _parse_table(
    name: str, raw: Any, builder: Callable[[Any, str], Any]
) -> VersionChanges:
    if not isinstance(raw, dict):
        raise UpgradeDataError(f"{name}: expected a mapping of target versions.")
    table: VersionChanges = {}
    for version_key, entries in raw.items():
        try:
            version = TargetVersion.parse(version_key)
        except ValueError as e:
            raise UpgradeDataError(f"{name}: {e}") from e
        parsed_entries = []
        for index, entry in enumerate(entries or []):
            where = f"{name}.{version_key}[{index}]"
            if not isinstance(entry, dict):
                raise UpgradeDataError(f"{where}: expected a mapping with 'changes'.")
            changes = [
                builder(change, f"{where}.changes[{i}]")
                for i, change in enumerate(entry.get("changes") or [])
            ]
            parsed_entries.append(
                VersionChangesEntry(pr=str(entry.get("pr", "")), changes=changes)
            )
        table.setdefault(version, []).extend(parsed_entries)
    return table


def parse_upgrade_data(raw: Any) -> UpgradeData:
    """
    Builds typed upgrade data from plain mappings. Keys may be written in
    snake_case or camelCase; target versions as ``6``, ``v6`` or ``version 6``.
    """
    if raw is None:
        return UpgradeData()
    if not isinstance(raw, dict):
        raise UpgradeDataError("Upgrade data must be a mapping of data tables.")

    data = UpgradeData()
    for name, value in _normalize(raw).items():
        builder = _BUILDERS.get(name)
        if builder is None:
            raise UpgradeDataError(f"Unknown upgrade data table '{name}'.")
        setattr(data, name, _parse_table(name, value, builder))
    return data


def load_upgrade_data(path: Union[str, Path]) -> UpgradeData:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Upgrade data file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise UpgradeDataError(f"Could not parse upgrade data '{path}': {e}") from e
    try:
        return parse_upgrade_data(raw)
    except UpgradeDataError as e:
        raise UpgradeDataError(f"{path}: {e}") from e
