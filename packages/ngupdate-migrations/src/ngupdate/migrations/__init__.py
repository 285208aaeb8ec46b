from .data import UpgradeData, UpgradeDataError, load_upgrade_data, parse_upgrade_data
from .rules import cdk_migrations, get_migrations_by_name

__all__ = [
    "UpgradeData",
    "UpgradeDataError",
    "load_upgrade_data",
    "parse_upgrade_data",
    "cdk_migrations",
    "get_migrations_by_name",
]
