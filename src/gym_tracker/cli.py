"""CLI entry point for gym-tracker."""

import logging

import click

from . import __version__
from .commands import (
    attendance,
    backend,
    init,
    migrate,
    profile,
    serve,
    stats,
    supplements,
    training_types,
)
from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="gym-tracker")
@click.option("--user", "-u", help="User id to act as (default: GYM_TRACKER_USER)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    help="Load settings from this .env file",
)
@click.pass_context
def main(ctx: click.Context, user: str | None, verbose: bool, env_file: str | None):
    """gym-tracker: gym attendance and supplement tracking.

    Data is stored in Firestore when FIREBASE_API_KEY and
    FIREBASE_PROJECT_ID are configured, otherwise in a local database.

    Example usage:

        # Initialize storage and the ingredient catalog
        gym-tracker init

        # Mark today as attended
        gym-tracker --user me attendance mark --duration 60

        # See the year at a glance
        gym-tracker --user me stats year
    """
    settings = get_settings(env_file)
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format=LOG_FORMAT,
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["user"] = user or settings.default_user


# Register commands
main.add_command(init)
main.add_command(backend)
main.add_command(attendance)
main.add_command(training_types)
main.add_command(supplements)
main.add_command(stats)
main.add_command(profile)
main.add_command(migrate)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
