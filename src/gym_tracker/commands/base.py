"""Shared CLI utilities."""

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from functools import wraps

import click

from ..config import Settings
from ..db import create_backend
from ..db.backends import StorageBackend
from ..errors import StorageError


def async_command(f):
    """Decorator to run async Click commands.

    Storage failures and malformed input end the command with exit code 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except (StorageError, ValueError) as e:
            echo_error(str(e))
            click.get_current_context().exit(1)

    return wrapper


def get_settings(ctx: click.Context) -> Settings:
    """Get the settings loaded by the root command."""
    return ctx.obj["settings"]


def require_user(ctx: click.Context) -> str:
    """Return the current user id, or exit when none is configured."""
    user_id = ctx.obj.get("user")
    if not user_id:
        echo_error("No user selected. Pass --user or set GYM_TRACKER_USER.")
        ctx.exit(1)
    return user_id


@asynccontextmanager
async def open_backend(ctx: click.Context):
    """Select the storage backend for this command and close it afterwards."""
    backend: StorageBackend = create_backend(get_settings(ctx))
    try:
        yield backend
    finally:
        await backend.aclose()


def today_iso() -> str:
    return date.today().isoformat()


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


def format_minutes(minutes: int | None) -> str:
    """Human-readable duration: ``45 min``, ``1h``, ``1h 30min``."""
    if not minutes:
        return "-" if minutes is None else "0 min"
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins} min"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"


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
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )
    return "\n".join(line.rstrip() for line in lines)
