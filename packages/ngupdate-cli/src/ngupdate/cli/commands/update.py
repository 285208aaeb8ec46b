from pathlib import Path
from typing import List, Optional

import typer

from ngupdate.common import L, bus, catalog
from ngupdate.config import ConfigError, load_config_from_path
from ngupdate.migrations import UpgradeDataError
from ngupdate.tool.exceptions import UpdateToolError
from ngupdate.tool.fs import RealFileSystem
from ngupdate.workspace import WorkspaceError, WorkspaceUpdateRunner
from ngupdate.cli.factories import (
    load_data_files,
    resolve_target_version,
    select_migrations,
)
from ngupdate.cli.logger import BusLogger


def update_command(
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help=catalog.get(L.cli.option.target.help)
    ),
    data: Optional[List[Path]] = typer.Option(
        None, "--data", "-d", help=catalog.get(L.cli.option.data.help)
    ),
    project: Optional[List[str]] = typer.Option(
        None, "--project", "-p", help=catalog.get(L.cli.option.project.help)
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", help=catalog.get(L.cli.option.exclude.help)
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help=catalog.get(L.cli.option.dry_run.help)
    ),
    strict: bool = typer.Option(
        False, "--strict", help=catalog.get(L.cli.option.strict.help)
    ),
):
    root_path = Path.cwd()
    catalog.add_root(root_path)

    try:
        # 1. Resolve configuration; options win over the config file
        config = load_config_from_path(root_path)
        target_version = resolve_target_version(target, config)
        upgrade_data = load_data_files(data, config, root_path)
        migrations = select_migrations(exclude or config.exclude)

        # 2. Migrate the workspace
        file_system = RealFileSystem(root_path, dry_run=dry_run)
        runner = WorkspaceUpdateRunner(
            file_system,
            target_version,
            upgrade_data,
            migrations,
            project_names=project or config.projects or None,
            stylesheet_extensions=config.stylesheet_extensions,
            logger=BusLogger(),
        )
        summary = runner.run()
    except (
        ConfigError,
        UpgradeDataError,
        UpdateToolError,
        WorkspaceError,
        FileNotFoundError,
        ValueError,
    ) as e:
        bus.error(L.error.generic, error=str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        bus.error(L.error.generic, error=f"An unexpected error occurred: {e}")
        raise typer.Exit(code=1)

    # 3. Report
    if dry_run:
        bus.warning(L.update.run.preview_header, count=len(summary.changed_files))
        for path in summary.changed_files:
            typer.echo(bus.format(L.update.run.preview_entry, path=path))
    else:
        for path in summary.changed_files:
            bus.debug(L.debug.log.file_written, path=path)

    for name in summary.projects_skipped:
        bus.debug(L.debug.log.project_skipped, project=name)

    bus.success(
        L.update.run.complete,
        version=target_version.major,
        count=len(summary.changed_files),
    )
    if summary.run_package_manager:
        bus.info(L.update.run.install_required)
    if summary.has_failures:
        bus.warning(L.update.run.has_failures, count=len(summary.failures))
        if strict:
            raise typer.Exit(code=1)
