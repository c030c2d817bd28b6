"""
Command line entry points.

Usage:
    run-goals goal-check     # scheduled trigger (cron)
    run-goals totals         # print aggregate totals as JSON
    run-goals init-db        # create the user directory table
"""

import asyncio
import json
import logging
import sys

import click

from run_goals.config import settings


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper())
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Strava running totals and goal notifications."""
    _setup_logging(verbose)


@cli.command("goal-check")
def goal_check():
    """
    Evaluate goals for every user and send notifications.

    Exits with status 1 only if credentials or the user directory
    could not be loaded.
    """
    from run_goals.features.goals import run_goal_check

    result = asyncio.run(run_goal_check())
    if not result.ok:
        click.echo(json.dumps(result.error.to_dict()), err=True)
        sys.exit(1)
    click.echo(json.dumps(result.value.to_dict()))


@cli.command("totals")
def totals():
    """Print aggregate totals across all users."""
    from run_goals.features.goals import query_totals

    response = asyncio.run(query_totals())
    click.echo(json.dumps(response.body))
    if response.status_code != 200:
        sys.exit(1)


@cli.command("init-db")
def init_db():
    """Create database tables."""
    from run_goals.db.session import init_models

    asyncio.run(init_models())
    click.echo("Database initialized")


if __name__ == "__main__":
    cli()
