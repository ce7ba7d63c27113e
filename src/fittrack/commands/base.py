"""Shared CLI utilities."""

import asyncio
from contextlib import asynccontextmanager
from functools import wraps
from typing import AsyncIterator

import click

from ..config import Settings
from ..errors import ConfigError
from ..store import Repositories, StoreClient


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def load_settings(ctx: click.Context) -> Settings:
    """Load settings from the environment, exiting with a message if incomplete."""
    try:
        return Settings.from_env()
    except ConfigError as e:
        echo_error(str(e))
        click.echo("Set FITTRACK_STORE_URL and FITTRACK_STORE_KEY (or add them to .env).")
        ctx.exit(1)


@asynccontextmanager
async def open_repositories(ctx: click.Context) -> AsyncIterator[Repositories]:
    """Open a store client for the duration of a command.

    A transport placed in ``ctx.obj["transport"]`` replaces the network.
    """
    settings = load_settings(ctx)
    transport = (ctx.obj or {}).get("transport")
    async with StoreClient(settings, transport=transport) as client:
        yield Repositories.from_client(client)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
