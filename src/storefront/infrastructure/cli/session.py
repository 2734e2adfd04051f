"""Shared plumbing for CLI commands: one storefront session per command."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.bootstrap import Storefront
from storefront.infrastructure.cli.console_view import ConsoleView


@asynccontextmanager
async def storefront_session(view: ConsoleView | None = None) -> AsyncIterator[Storefront]:
    """Build the storefront, load the catalog and restore the saved basket.

    Exits with status 1 when the catalog cannot be loaded; the view has
    already told the user why.
    """
    app = bootstrap.build_storefront(view or ConsoleView())
    try:
        if not await app.controller.start():
            raise click.exceptions.Exit(1)
        yield app
    finally:
        await app.aclose()


def run(command: Callable[[], Awaitable[None]]) -> None:
    try:
        asyncio.run(command())
    except DomainException as exc:
        raise click.ClickException(str(exc))
