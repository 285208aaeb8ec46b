import logging

import typer

from ngupdate.common import L, bus, catalog
from .rendering import CliRenderer

from .commands.resources import resources_command
from .commands.update import update_command

app = typer.Typer(
    name="ngupdate",
    help=catalog.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=catalog.get(L.cli.option.verbose.help)
    ),
):
    # The CLI decides which renderer the bus uses.
    cli_renderer = CliRenderer(verbose=verbose)
    bus.set_renderer(cli_renderer)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


app.command(name="update", help=catalog.get(L.cli.command.update.help))(
    update_command
)
app.command(name="resources", help=catalog.get(L.cli.command.resources.help))(
    resources_command
)


if __name__ == "__main__":
    app()
