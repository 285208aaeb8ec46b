import re
from enum import Enum
from typing import List, Union

_VERSION_PATTERN = re.compile(r"^\s*(?:version\s*|v)?(\d+)\s*$", re.IGNORECASE)


class TargetVersion(str, Enum):
    V6 = "version 6"
    V7 = "version 7"
    V8 = "version 8"
    V9 = "version 9"
    V10 = "version 10"
    V11 = "version 11"

    @property
    def major(self) -> int:
        return int(self.value.split()[-1])

    @classmethod
    def parse(cls, value: Union[str, int, "TargetVersion"]) -> "TargetVersion":
        """Accepts ``9``, ``"9"``, ``"v9"`` and ``"version 9"``."""
        if isinstance(value, TargetVersion):
            return value
        match = _VERSION_PATTERN.match(str(value))
        if match:
            candidate = f"version {int(match.group(1))}"
            for member in cls:
                if member.value == candidate:
                    return member
        raise ValueError(
            f"Unknown target version '{value}'. "
            f"Supported: {', '.join(str(v.major) for v in cls)}"
        )


def get_all_target_versions() -> List[TargetVersion]:
    return list(TargetVersion)
