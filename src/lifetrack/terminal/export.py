# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from lifetrack.model.export import ExportSnapshot
from lifetrack.service.export import export_file_name, write_export_file
from lifetrack.service.mutation import MutationCoordinator
from lifetrack.terminal.runtime import error_console, run_loaded
from lifetrack.time import today


def export(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="File or directory, defaults to the current directory"),
    ] = None,
) -> None:
    """Write all entries and track types to a JSON file."""

    async def __snapshot(coordinator: MutationCoordinator) -> ExportSnapshot:
        return coordinator.export_snapshot()

    snapshot = run_loaded(__snapshot)
    target = path if path is not None else Path.cwd() / export_file_name(today())
    try:
        written = write_export_file(snapshot, target)
    except OSError as e:
        error_console.print(f"[red]Could not write {target}: {e}[/red]")
        raise typer.Exit(1)

    typer.echo(
        f"Exported {len(snapshot['entries'])} entries and "
        f"{len(snapshot['trackTypes'])} track types to {written}"
    )
