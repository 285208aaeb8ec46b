from pathlib import Path
from typing import Optional

import typer

from ngupdate.common import L, bus, catalog
from ngupdate.tool.component_resource_collector import (
    ResolvedResource,
    collect_program_resources,
)
from ngupdate.tool.exceptions import UpdateToolError
from ngupdate.tool.fs import RealFileSystem
from ngupdate.tool.project import UpdateProject
from ngupdate.workspace import (
    AngularWorkspace,
    WorkspaceNotFoundError,
    get_target_tsconfig_path,
)


def _describe(resource: ResolvedResource) -> str:
    if not resource.inline:
        return resource.file_path
    position = resource.get_character_and_line_of_position(resource.start)
    return f"{resource.file_path}@{position.line + 1}:{position.character + 1} (inline)"


def resources_command(
    project: Optional[str] = typer.Option(
        None, "--project", "-p", help=catalog.get(L.cli.option.project.help)
    ),
):
    root_path = Path.cwd()
    file_system = RealFileSystem(root_path, dry_run=True)

    try:
        workspace = AngularWorkspace.load(file_system)
        if workspace is None:
            raise WorkspaceNotFoundError(str(root_path))

        projects = list(workspace.projects.values())
        if project is not None:
            projects = [p for p in projects if p.name == project]
            if not projects:
                bus.error(L.update.project.unknown, project=project)
                raise typer.Exit(code=1)

        for ws_project in projects:
            tsconfig_path = get_target_tsconfig_path(file_system, ws_project, "build")
            if tsconfig_path is None or not file_system.is_file(tsconfig_path):
                bus.warning(L.resources.no_tsconfig, project=ws_project.name)
                continue

            program = UpdateProject.create_program_from_tsconfig(
                tsconfig_path, file_system
            )
            collector = collect_program_resources(program, file_system)

            bus.info(L.resources.project_header, project=ws_project.name)
            bus.info(
                L.resources.templates_header, count=len(collector.resolved_templates)
            )
            for template in collector.resolved_templates:
                typer.echo(
                    bus.format(L.resources.entry, resource=_describe(template))
                )
            bus.info(
                L.resources.stylesheets_header,
                count=len(collector.resolved_stylesheets),
            )
            for stylesheet in collector.resolved_stylesheets:
                typer.echo(
                    bus.format(L.resources.entry, resource=_describe(stylesheet))
                )
    except (UpdateToolError, WorkspaceNotFoundError, FileNotFoundError) as e:
        bus.error(L.error.generic, error=str(e))
        raise typer.Exit(code=1)
