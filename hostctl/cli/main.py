"""
hostctl CLI - Command-line interface for organizations on the hosting platform.

Usage:
    hostctl orgs list       List your organizations
    hostctl orgs sites      List, add or remove an organization's sites
    hostctl orgs team       List, add, remove or re-role organization members
"""

import logging

import typer
from rich.console import Console

from .commands import orgs

# Create the main Typer app
app = typer.Typer(
    name="hostctl",
    help="Manage organizations, members and sites on the hosting platform",
    add_completion=False,
)

# Create a Rich console for pretty output
console = Console()

# Create orgs subcommand group
orgs_app = typer.Typer(help="Show and manage your organizations")
orgs_app.command(name="list")(orgs.orgs_list_command)
orgs_app.command(name="sites")(orgs.orgs_sites_command)
orgs_app.command(name="team")(orgs.orgs_team_command)
app.add_typer(orgs_app, name="orgs")


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """
    hostctl - manage organizations on the hosting platform.

    Configure with HOSTCTL_API_URL, HOSTCTL_SESSION_TOKEN and HOSTCTL_USER_ID.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
