import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Type

from ngupdate.common import L, bus
from ngupdate.config import UpdateConfig
from ngupdate.migrations import UpgradeData, cdk_migrations, load_upgrade_data
from ngupdate.tool.migration import Migration
from ngupdate.tool.target_version import TargetVersion, get_all_target_versions


def _migration_key(name: str) -> str:
    key = re.sub(r"[^a-z0-9]", "", name.lower())
    if key.endswith("migration"):
        key = key[: -len("migration")]
    return key


def resolve_target_version(
    option: Optional[str], config: UpdateConfig
) -> TargetVersion:
    value = option or config.target
    if value is None:
        latest = get_all_target_versions()[-1]
        bus.debug(L.debug.log.default_target, version=latest.major)
        return latest
    return TargetVersion.parse(value)


def load_data_files(
    options: Optional[List[Path]], config: UpdateConfig, root: Path
) -> UpgradeData:
    if options:
        paths = list(options)
    else:
        base = config.root or root
        paths = [base / p for p in config.data]

    if not paths:
        bus.warning(L.update.run.no_data)

    data = UpgradeData()
    for path in paths:
        bus.debug(L.debug.log.data_file, path=str(path))
        data = data.merge(load_upgrade_data(path))
    return data


def select_migrations(excluded: Iterable[str]) -> List[Type[Migration]]:
    """
    The built-in migrations minus ``excluded``. Names match the class name or
    its kebab-case form, e.g. ``ClassNamesMigration`` or ``class-names``.
    """
    by_key: Dict[str, Type[Migration]] = {
        _migration_key(m.__name__): m for m in cdk_migrations
    }
    dropped = set()
    for name in excluded:
        key = _migration_key(name)
        if key not in by_key:
            raise ValueError(
                f"Unknown migration '{name}'. "
                f"Available: {', '.join(m.__name__ for m in cdk_migrations)}"
            )
        dropped.add(by_key[key])
    return [m for m in cdk_migrations if m not in dropped]
