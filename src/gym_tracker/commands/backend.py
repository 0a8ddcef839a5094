"""Storage backend information command."""

import click

from .base import async_command, echo_warning, get_settings, open_backend


@click.command("backend")
@click.pass_context
@async_command
async def backend(ctx: click.Context):
    """Show which storage backend is in use."""
    settings = get_settings(ctx)
    async with open_backend(ctx) as store:
        click.echo(f"Backend:    {store.name}")
        if store.is_local_fallback():
            click.echo(f"Database:   {settings.db_path}")
            if settings.has_remote_config() and not settings.force_local:
                echo_warning("Remote store configured but unavailable; running on local storage")
        else:
            click.echo(f"Project:    {settings.firebase_project_id}")
            click.echo(f"Database:   {settings.firebase_database_id}")
