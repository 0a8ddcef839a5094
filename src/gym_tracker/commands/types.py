"""Training type commands."""

import click

from ..db import AttendanceRepository
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    format_table,
    open_backend,
    require_user,
)


@click.group("types")
def training_types():
    """Manage workout categories."""
    pass


@training_types.command("list")
@click.pass_context
@async_command
async def list_types(ctx: click.Context):
    """List training types."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        types = await AttendanceRepository(backend).list_training_types(user_id)

    if not types:
        echo_info("No training types yet. Add one with 'gym-tracker types add'.")
        return
    rows = [[t.id, t.name, t.color, t.icon or ""] for t in types]
    click.echo(format_table(["ID", "Name", "Color", "Icon"], rows))


@training_types.command("add")
@click.argument("name")
@click.option("--color", "-c", default="#2196f3", show_default=True, help="Display color")
@click.option("--icon", "-i", help="Icon name")
@click.pass_context
@async_command
async def add_type(ctx: click.Context, name: str, color: str, icon: str | None):
    """Add a training type called NAME."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        type_id = await AttendanceRepository(backend).create_training_type(
            user_id, name, color, icon
        )
    echo_success(f"Training type '{name}' created (id: {type_id})")


@training_types.command("update")
@click.argument("type_id")
@click.option("--name", help="New name")
@click.option("--color", help="New color")
@click.option("--icon", help="New icon")
@click.pass_context
@async_command
async def update_type(
    ctx: click.Context,
    type_id: str,
    name: str | None,
    color: str | None,
    icon: str | None,
):
    """Update fields of a training type."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        found = await AttendanceRepository(backend).update_training_type(
            user_id, type_id, name=name, color=color, icon=icon
        )
    if not found:
        echo_error(f"Training type {type_id} not found")
        ctx.exit(1)
    echo_success(f"Training type {type_id} updated")


@training_types.command("delete")
@click.argument("type_id")
@click.pass_context
@async_command
async def delete_type(ctx: click.Context, type_id: str):
    """Delete a training type. Records that use it keep the id."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        await AttendanceRepository(backend).delete_training_type(user_id, type_id)
    echo_success(f"Training type {type_id} deleted")
