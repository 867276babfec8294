# SPDX-License-Identifier: MIT

import asyncio
from typing import Awaitable, Callable, TypeVar

import typer
from rich.console import Console

from lifetrack.errors import LifeTrackError
from lifetrack.remote.factory import build_session, build_storage_client
from lifetrack.repository.configuration import CONFIGURATION_REPO
from lifetrack.service.mutation import MutationCoordinator

T = TypeVar("T")

error_console = Console(stderr=True)


def build_coordinator() -> MutationCoordinator:
    config = CONFIGURATION_REPO.get_config()
    return MutationCoordinator(build_storage_client(config), build_session(config))


def run_loaded(operation: Callable[[MutationCoordinator], Awaitable[T]]) -> T:
    """
    Load the signed-in user's data, then run operation against the coordinator.

    Errors surfaced by the core are printed and turned into exit code 1.
    """

    async def __run() -> T:
        coordinator = build_coordinator()
        await coordinator.load()
        return await operation(coordinator)

    try:
        return asyncio.run(__run())
    except (LifeTrackError, ValueError) as e:
        error_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
