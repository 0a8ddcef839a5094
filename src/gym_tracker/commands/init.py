"""Initialize project command."""

import click

from ..db import SupplementRepository, init_db
from .base import async_command, echo_info, echo_success, get_settings, open_backend


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize gym-tracker storage.

    Creates the data directory and local database, then seeds the
    ingredient catalog of the selected backend if it is empty.
    """
    settings = get_settings(ctx)
    echo_info(f"Initializing gym-tracker in {settings.data_dir}")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    await init_db(settings.db_path)
    echo_success("Local database initialized")

    async with open_backend(ctx) as backend:
        echo_info(f"Storage backend: {backend.name}")
        count = await SupplementRepository(backend).seed_if_empty()

    if count:
        echo_success(f"Ingredient catalog populated ({count} ingredients)")
    else:
        echo_info("Ingredient catalog already populated")

    click.echo()
    click.echo("gym-tracker is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Add your workout categories:")
    click.echo('     gym-tracker --user me types add "Push" --color "#ff5722"')
    click.echo()
    click.echo("  2. Mark today's session:")
    click.echo("     gym-tracker --user me attendance mark --duration 60")
