"""Attendance commands."""

import click

from ..db import AttendanceRepository
from ..models.attendance import AttendanceRecord, TrainingType
from .base import (
    async_command,
    echo_info,
    echo_success,
    format_minutes,
    format_table,
    open_backend,
    require_user,
    today_iso,
)


@click.group()
def attendance():
    """Mark, remove and browse gym attendance."""
    pass


def _print_records(records: list[AttendanceRecord], types: list[TrainingType]) -> None:
    if not records:
        echo_info("No attendance recorded")
        return
    names = {t.id: t.name for t in types}
    rows = [
        [
            r.date,
            names.get(r.training_type_id, "-") if r.training_type_id else "-",
            format_minutes(r.duration_minutes),
            r.notes or "",
        ]
        for r in records
    ]
    click.echo(format_table(["Date", "Type", "Duration", "Notes"], rows))
    click.echo()
    click.echo(f"Total: {len(records)} day(s)")


@attendance.command("mark")
@click.argument("day", required=False)
@click.option("--type", "-t", "type_id", help="Training type id")
@click.option("--duration", "-d", type=int, help="Duration in minutes")
@click.option("--notes", "-n", help="Free-text notes")
@click.pass_context
@async_command
async def mark(
    ctx: click.Context,
    day: str | None,
    type_id: str | None,
    duration: int | None,
    notes: str | None,
):
    """Mark DAY (YYYY-MM-DD, default today) as attended.

    Marking an already attended day overwrites it.
    """
    user_id = require_user(ctx)
    day = day or today_iso()
    async with open_backend(ctx) as backend:
        await AttendanceRepository(backend).mark_attendance(
            user_id, day, training_type_id=type_id, duration_minutes=duration, notes=notes
        )
    echo_success(f"Attendance marked for {day}")


@attendance.command("unmark")
@click.argument("day", required=False)
@click.pass_context
@async_command
async def unmark(ctx: click.Context, day: str | None):
    """Remove attendance for DAY (default today)."""
    user_id = require_user(ctx)
    day = day or today_iso()
    async with open_backend(ctx) as backend:
        await AttendanceRepository(backend).remove_attendance(user_id, day)
    echo_success(f"Attendance removed for {day}")


@attendance.command("toggle")
@click.argument("day", required=False)
@click.pass_context
@async_command
async def toggle(ctx: click.Context, day: str | None):
    """Flip attendance for DAY (default today)."""
    user_id = require_user(ctx)
    day = day or today_iso()
    async with open_backend(ctx) as backend:
        present = await AttendanceRepository(backend).toggle_attendance(user_id, day)
    echo_success(f"{day}: {'attended' if present else 'not attended'}")


@attendance.command("month")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.pass_context
@async_command
async def show_month(ctx: click.Context, year: int, month: int):
    """List attendance for one month."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        repo = AttendanceRepository(backend)
        records = await repo.get_month(user_id, year, month)
        types = await repo.list_training_types(user_id)
    _print_records(records, types)


@attendance.command("year")
@click.argument("year", type=int)
@click.pass_context
@async_command
async def show_year(ctx: click.Context, year: int):
    """List attendance for a whole year."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        repo = AttendanceRepository(backend)
        records = await repo.get_year(user_id, year)
        types = await repo.list_training_types(user_id)
    _print_records(records, types)


@attendance.command("range")
@click.argument("start")
@click.argument("end")
@click.pass_context
@async_command
async def show_range(ctx: click.Context, start: str, end: str):
    """List attendance from START to END (inclusive)."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        repo = AttendanceRepository(backend)
        records = await repo.get_range(user_id, start, end)
        types = await repo.list_training_types(user_id)
    _print_records(records, types)
