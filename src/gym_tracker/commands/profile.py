"""User profile commands."""

import click

from ..db import UserProfileRepository
from ..models.user_profile import Theme
from .base import async_command, echo_info, echo_success, open_backend, require_user


@click.group()
def profile():
    """Show and edit your profile."""
    pass


@profile.command("login")
@click.argument("email")
@click.option("--name", help="Display name")
@click.pass_context
@async_command
async def login(ctx: click.Context, email: str, name: str | None):
    """Create your profile or refresh its last login time."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        await UserProfileRepository(backend).ensure_profile(user_id, email, name)
    echo_success(f"Signed in as {email}")


@profile.command("show")
@click.pass_context
@async_command
async def show(ctx: click.Context):
    """Display the stored profile."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        user = await UserProfileRepository(backend).get_profile(user_id)

    if user is None:
        echo_info("No profile stored yet. Run 'gym-tracker profile login EMAIL'.")
        return
    click.echo(f"User:       {user_id}")
    click.echo(f"Email:      {user.email}")
    click.echo(f"Name:       {user.display_name or '-'}")
    click.echo(f"Theme:      {user.theme.value if user.theme else '-'}")
    click.echo(f"Created:    {user.created_at or '-'}")
    click.echo(f"Last login: {user.last_login_at or '-'}")


@profile.command("theme")
@click.argument("theme", type=click.Choice([t.value for t in Theme]), required=False)
@click.pass_context
@async_command
async def theme(ctx: click.Context, theme: str | None):
    """Show or set the display theme."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        repo = UserProfileRepository(backend)
        if theme is None:
            current = await repo.get_theme(user_id)
            click.echo(current.value if current else "not set")
            return
        await repo.set_theme(user_id, Theme(theme))
    echo_success(f"Theme set to {theme}")
