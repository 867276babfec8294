# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from lifetrack import configuration
from lifetrack.remote.factory import BACKENDS
from lifetrack.repository.configuration import CONFIGURATION_REPO
from lifetrack.service.calendar import WEEKDAYS
from lifetrack.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def __config_table(config: configuration.Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("backend", config["backend"])
    table.add_row("backend_url", config["backend_url"] or "None")
    table.add_row("api_key", "✓ Set" if config["api_key"] else "✗ Not set")
    table.add_row("user_id", config["user_id"] or "None")
    table.add_row("access_token", "✓ Set" if config["access_token"] else "✗ Not set")
    table.add_row("data_path", str(configuration.resolve_data_path(config)))
    table.add_row("first_weekday", config["first_weekday"])
    table.add_row("day_badge_cap", str(config["day_badge_cap"]))
    table.add_row("timeline_page_months", str(config["timeline_page_months"]))
    table.add_row("timeline_max_years_back", str(config["timeline_max_years_back"]))
    table.add_row("request_timeout", f"{config['request_timeout']}s")
    table.add_row("log_level", config["log_level"])
    return table


@app.command("show, s")
def show() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(__config_table(CONFIGURATION_REPO.get_config()))
    console.print(f"\nConfig file: {configuration.APP_CONFIG_PATH}")


@app.command("set", no_args_is_help=True)
def set(
    backend: Annotated[
        Optional[str], typer.Option("--backend", help="local, postgrest")
    ] = None,
    backend_url: Annotated[
        Optional[str], typer.Option("--backend-url", help="Base URL of the hosted backend")
    ] = None,
    api_key: Annotated[Optional[str], typer.Option("--api-key")] = None,
    user_id: Annotated[
        Optional[str], typer.Option("--user-id", help="Signed-in user id")
    ] = None,
    access_token: Annotated[
        Optional[str], typer.Option("--access-token", help="Session access token")
    ] = None,
    remove_access_token: Annotated[
        bool, typer.Option("--remove-access-token", help="Sign out of the hosted backend")
    ] = False,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory for the local backend's files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Use the default data directory"),
    ] = False,
    first_weekday: Annotated[
        Optional[str], typer.Option("--first-weekday", help="sunday, monday, ...")
    ] = None,
    day_badge_cap: Annotated[
        Optional[int],
        typer.Option("--day-badge-cap", help="Badges shown per day before +N", min=0),
    ] = None,
    timeline_page_months: Annotated[
        Optional[int], typer.Option("--timeline-page-months", min=1)
    ] = None,
    timeline_max_years_back: Annotated[
        Optional[int], typer.Option("--timeline-max-years-back", min=0)
    ] = None,
    request_timeout: Annotated[
        Optional[float], typer.Option("--request-timeout", help="Seconds", min=1)
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if backend is not None and backend not in BACKENDS:
        typer.echo(f"Invalid backend: {backend}. Valid options: {', '.join(BACKENDS)}")
        raise typer.Exit(1)
    if first_weekday is not None:
        first_weekday = first_weekday.lower()
        if first_weekday not in WEEKDAYS:
            typer.echo(
                f"Invalid weekday: {first_weekday}. Valid options: {', '.join(WEEKDAYS)}"
            )
            raise typer.Exit(1)
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            typer.echo(
                f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
            )
            raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        backend=backend,
        backend_url=backend_url,
        api_key=api_key,
        user_id=user_id,
        access_token=access_token,
        data_path=data_path,
        first_weekday=first_weekday,
        day_badge_cap=day_badge_cap,
        timeline_page_months=timeline_page_months,
        timeline_max_years_back=timeline_max_years_back,
        request_timeout=request_timeout,
        log_level=log_level,
        remove_access_token=remove_access_token,
        remove_data_path=remove_data_path,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__config_table(CONFIGURATION_REPO.get_config(), "Updated Configuration"))
