"""CLI command for provisioning the document store.

Usage:
    flask init-db            # Create the database and all containers
    flask init-db --status   # Also print which containers are mocked
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from lifetracker.extensions import cosmos


@click.command("init-db")
@click.option("--status", "show_status", is_flag=True, help="Print the backing store for each container")
@with_appcontext
def init_db_command(show_status: bool):
    """Create the Cosmos DB database and containers (idempotent)."""
    mode = "mock" if cosmos.use_mock else "cosmos"
    click.echo(f"Initialising {mode} database '{cosmos.database_id}'...")
    containers = cosmos.initialize_cosmos_db()
    click.echo(f"  ✓ {len(containers)} containers ready")
    if show_status:
        for name, backing in sorted(cosmos.status()["containers"].items()):
            click.echo(f"  {name}: {backing}")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(init_db_command)
