from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar

from .target_version import TargetVersion

T = TypeVar("T")


@dataclass
class VersionChangesEntry(Generic[T]):
    pr: str
    changes: List[T] = field(default_factory=list)


# Ordered list of PR entries per target version.
VersionChanges = Dict[TargetVersion, List[VersionChangesEntry[T]]]


def get_changes_for_target(
    target: TargetVersion, data: Optional[VersionChanges]
) -> List[T]:
    """
    Flattens the changes of every PR recorded for the given target version.
    A version without entries yields an empty list.
    """
    if data is None:
        raise ValueError(f"No data could be found for target version: {target.value}")
    return [change for entry in data.get(target, []) for change in entry.changes]


def get_all_changes(data: VersionChanges) -> List[T]:
    """Flattens the changes of every version, in table order."""
    return [
        change for target in data for change in get_changes_for_target(target, data)
    ]
