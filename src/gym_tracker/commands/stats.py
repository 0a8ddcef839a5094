"""Statistics commands."""

import calendar
from datetime import date

import click

from ..db import AttendanceRepository, SupplementRepository
from ..services.stats import StatsService
from .base import (
    async_command,
    echo_info,
    format_minutes,
    format_table,
    open_backend,
    require_user,
)


def _bar(count: int, maximum: int, width: int = 30) -> str:
    if maximum <= 0:
        return ""
    return "#" * round(width * count / maximum)


@click.group()
def stats():
    """Attendance and supplement statistics."""
    pass


@stats.command("year")
@click.argument("year", type=int, required=False)
@click.pass_context
@async_command
async def year_stats(ctx: click.Context, year: int | None):
    """Yearly attendance overview (default: current year)."""
    user_id = require_user(ctx)
    year = year or date.today().year
    async with open_backend(ctx) as backend:
        service = StatsService(AttendanceRepository(backend), SupplementRepository(backend))
        report = await service.year_report(user_id, year)

    click.echo(click.style(f"Attendance {year}", bold=True))
    click.echo(f"  This year:  {report.yearly_count}")
    click.echo(f"  This month: {report.current_month_count}")
    click.echo()

    peak = max((m.count for m in report.monthly), default=0)
    for m in report.monthly:
        click.echo(f"  {calendar.month_abbr[m.month]}  {m.count:>3}  {_bar(m.count, peak)}")
    click.echo()

    if report.types:
        rows = [[t.name, str(t.count)] for t in report.types]
        click.echo(format_table(["Type", "Workouts"], rows))
        click.echo()

    click.echo(f"Average duration: {format_minutes(report.duration.avg_minutes)}")
    click.echo(f"Untracked workouts: {report.duration.untracked_count}")
    if report.type_durations:
        click.echo()
        rows = [
            [t.name, format_minutes(t.avg_minutes), str(t.count)]
            for t in report.type_durations
        ]
        click.echo(format_table(["Type", "Avg duration", "Tracked"], rows))


@stats.command("month")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.pass_context
@async_command
async def month_stats(ctx: click.Context, year: int, month: int):
    """Workout breakdown for one month."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        service = StatsService(AttendanceRepository(backend), SupplementRepository(backend))
        report = await service.month_report(user_id, year, month)

    click.echo(click.style(f"{calendar.month_name[month]} {year}", bold=True))
    click.echo(f"  Workouts: {report.count}")
    click.echo(f"  Average duration: {format_minutes(report.duration.avg_minutes)}")
    click.echo(f"  Untracked: {report.duration.untracked_count}")
    types = [t for t in report.types if t.count > 0]
    if types:
        click.echo()
        click.echo(format_table(["Type", "Workouts"], [[t.name, str(t.count)] for t in types]))


@stats.command("health")
@click.argument("year", type=int, required=False)
@click.option("--top", "top_n", type=int, default=5, show_default=True, help="Nutrients to show")
@click.pass_context
@async_command
async def health_stats(ctx: click.Context, year: int | None, top_n: int):
    """Supplement consistency and nutrient totals."""
    user_id = require_user(ctx)
    year = year or date.today().year
    async with open_backend(ctx) as backend:
        service = StatsService(AttendanceRepository(backend), SupplementRepository(backend))
        report = await service.health_report(user_id, year, top_n=top_n)

    click.echo(click.style(f"Supplements {year}", bold=True))
    click.echo(f"  Consistency: {report.consistency}% of {report.days_elapsed} day(s)")
    if report.top_product:
        top = report.top_product
        click.echo(
            f"  Top product: {top.name} ({top.total_servings:g} servings, "
            f"{top.avg_per_day:.2f}/day)"
        )
    click.echo()
    if not report.nutrients:
        echo_info("No supplement intake logged")
        return
    rows = [[n.name, f"{n.amount:g}", n.unit] for n in report.nutrients]
    click.echo(format_table(["Nutrient", "Total", "Unit"], rows))
