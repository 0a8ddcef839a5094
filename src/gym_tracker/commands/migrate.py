"""Data migration commands."""

import click

from ..db import AttendanceRepository
from .base import async_command, echo_info, echo_success, open_backend, require_user


@click.group()
def migrate():
    """One-off data migrations."""
    pass


@migrate.command("backfill-duration")
@click.option(
    "--year",
    "years",
    type=int,
    multiple=True,
    help="Year to migrate (repeatable; default: this year and the two before)",
)
@click.pass_context
@async_command
async def backfill_duration(ctx: click.Context, years: tuple[int, ...]):
    """Add an empty duration field to records created before durations existed."""
    user_id = require_user(ctx)
    echo_info("Scanning attendance records...")
    async with open_backend(ctx) as backend:
        result = await AttendanceRepository(backend).backfill_duration(
            user_id, years=list(years) or None
        )
    echo_success(f"Migrated {result.migrated} of {result.total} record(s)")
