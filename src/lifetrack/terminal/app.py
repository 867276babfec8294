# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from lifetrack.terminal import configuration, entry, track_type, view
from lifetrack.terminal.custom_typer import OrderedAliasedTyperGroup
from lifetrack.terminal.export import export
from lifetrack.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="lifetrack - Personal activity tracking in the CLI",
    no_args_is_help=True,
)
app.add_typer(entry.app, name="entry, e", help="Log and edit entries")
app.add_typer(track_type.app, name="type, t", help="Manage track types")
app.add_typer(view.app, name="view, v", help="Month, timeline and activity views")
app.command(name="export, x")(export)
app.add_typer(configuration.app, name="config, c", help="Show and change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    lifetrack - Personal activity tracking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
