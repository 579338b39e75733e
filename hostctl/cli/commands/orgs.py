"""
hostctl orgs command - Organization management CLI.

List organizations, manage their team members and their sites.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ...client import Hostctl
from ...entities import Organization
from ...errors import HostctlError, UnresolvedIdentifierError
from ...workflows import Workflow

console = Console()


class SiteAction(str, Enum):
    """Actions of `hostctl orgs sites`."""

    LIST = "list"
    ADD = "add"
    REMOVE = "remove"


class TeamAction(str, Enum):
    """Actions of `hostctl orgs team`."""

    LIST = "list"
    ADD_MEMBER = "add-member"
    REMOVE_MEMBER = "remove-member"
    CHANGE_ROLE = "change-role"


async def _connect() -> Hostctl:
    """Create a client from the environment, exiting on bad configuration."""
    try:
        hostctl = await Hostctl.create()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1)
    if hostctl.config.debug:
        logging.getLogger("hostctl").setLevel(logging.DEBUG)
    return hostctl


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _print_records(title: str, records: Iterable[Dict[str, Any]]) -> None:
    """Render flat records as a table; columns are the union of keys."""
    records = list(records)
    columns: Dict[str, None] = {}
    for record in records:
        for key in record:
            columns.setdefault(key)

    table = Table(title=title)
    for column in columns:
        table.add_column(column.replace("_", " ").title())
    for record in records:
        table.add_row(*(_format_value(record.get(column)) for column in columns))

    console.print(table)
    console.print()


def _prompt_choice(message: str, choices: Dict[str, str]) -> str:
    """Let the user pick one of `choices` (key -> label); returns the key."""
    if not choices:
        raise UnresolvedIdentifierError("choice", None, message=f"{message}: nothing to choose from")

    keys = list(choices)
    for number, key in enumerate(keys, start=1):
        console.print(f"  [cyan]{number}[/cyan]. {choices[key]}")
    while True:
        picked = typer.prompt(message, type=int)
        if 1 <= picked <= len(keys):
            return keys[picked - 1]
        console.print(f"[red]Please enter a number between 1 and {len(keys)}[/red]")


def _workflow_output(workflow: Workflow) -> None:
    """Report a settled workflow; a failed one exits through the error handler."""
    workflow.raise_for_failure()
    result = workflow.result
    message = result.message if result is not None and result.message else "Workflow succeeded"
    console.print(f"[green]✓[/green] {message}")


async def _resolve_org(hostctl: Hostctl, org: Optional[str]) -> Organization:
    if org is None:
        org = _prompt_choice("Select an organization", await hostctl.orgs.choices())
    return await hostctl.orgs.get(org)


def orgs_list_command() -> None:
    """
    List your organizations.

    Example:
        $ hostctl orgs list
    """
    console.print("\n[bold cyan]Organizations[/bold cyan]\n")

    asyncio.run(_list_orgs())


async def _list_orgs() -> None:
    """Internal async function to list organizations."""
    hostctl = await _connect()
    try:
        rows = await hostctl.orgs.list()
        if not rows:
            console.print("[yellow]You are not a member of any organization[/yellow]\n")
            return
        _print_records(f"Organizations (showing {len(rows)})", rows)
    except HostctlError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        await hostctl.close()


def orgs_sites_command(
    action: SiteAction = typer.Argument(SiteAction.LIST, help="Subfunction to run"),
    org: Optional[str] = typer.Option(None, "--org", help="Organization UUID or name"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Tag name to filter sites list by"),
    site: Optional[str] = typer.Option(
        None, "--site", help="Site to add to or remove from organization"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """
    List an organization's sites, or add/remove a site.

    Example:
        $ hostctl orgs sites --org Acme --tag prod
        $ hostctl orgs sites add --org Acme --site my-site
        $ hostctl orgs sites remove --org Acme --site my-site --yes
    """
    asyncio.run(_sites(action, org, tag, site, yes))


async def _sites(
    action: SiteAction,
    org: Optional[str],
    tag: Optional[str],
    site: Optional[str],
    yes: bool,
) -> None:
    """Internal async function for site actions."""
    hostctl = await _connect()
    try:
        organization = await _resolve_org(hostctl, org)

        if action == SiteAction.ADD:
            if site is None:
                site = _prompt_choice("Choose site", await hostctl.sites.addable_choices())
            target = await hostctl.sites.resolve_addable(site)
            if not yes:
                typer.confirm(
                    f"Are you sure you want to add {target.name} to {organization.label}?",
                    abort=True,
                )
            _workflow_output(await hostctl.sites.add(organization, target))

        elif action == SiteAction.REMOVE:
            if site is None:
                site = _prompt_choice(
                    "Choose site", await hostctl.sites.removable_choices(organization)
                )
            target = await hostctl.sites.resolve_removable(organization, site)
            if not yes:
                typer.confirm(
                    f"Are you sure you want to remove {target.name} from {organization.label}?",
                    abort=True,
                )
            _workflow_output(await hostctl.sites.remove(organization, target))

        else:
            listing = await hostctl.sites.list(organization, tag=tag)
            if listing.empty_message:
                console.print(f"[yellow]{listing.empty_message}[/yellow]\n")
                return
            _print_records(f"Sites of {organization.label}", listing.rows)

    except HostctlError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        await hostctl.close()


def orgs_team_command(
    action: TeamAction = typer.Argument(TeamAction.LIST, help="Subfunction to run"),
    org: Optional[str] = typer.Option(None, "--org", help="Organization UUID or name"),
    member: Optional[str] = typer.Option(
        None, "--member", help="Email, name or UUID of the member"
    ),
    role: Optional[str] = typer.Option(
        None,
        "--role",
        help="Role for the member: unprivileged, admin, and with change management, "
        "team_member or developer",
    ),
) -> None:
    """
    List an organization's team, or add/remove a member or change a role.

    Example:
        $ hostctl orgs team --org Acme
        $ hostctl orgs team add-member --org Acme --member new@example.com --role admin
        $ hostctl orgs team change-role --org Acme --member old@example.com --role developer
    """
    asyncio.run(_team(action, org, member, role))


async def _team(
    action: TeamAction,
    org: Optional[str],
    member: Optional[str],
    role: Optional[str],
) -> None:
    """Internal async function for team actions."""
    hostctl = await _connect()
    try:
        organization = await _resolve_org(hostctl, org)
        roles = {r: r for r in hostctl.teams.role_choices(organization)}

        if action == TeamAction.ADD_MEMBER:
            if member is None:
                member = typer.prompt("What is the email address of the user to be added?")
            if role is None:
                role = _prompt_choice("Select a role for your new member", roles)
            _workflow_output(await hostctl.teams.add_member(organization, member, role))

        elif action == TeamAction.REMOVE_MEMBER:
            if member is None:
                member = _prompt_choice(
                    "Please select a member to remove",
                    await hostctl.teams.member_choices(organization, can_pick_self=False),
                )
            _workflow_output(await hostctl.teams.remove_member(organization, member))

        elif action == TeamAction.CHANGE_ROLE:
            if member is None:
                member = _prompt_choice(
                    "Please select a member to update",
                    await hostctl.teams.member_choices(organization),
                )
            if role is None:
                role = _prompt_choice("Select a role for this member", roles)
            _workflow_output(await hostctl.teams.change_role(organization, member, role))

        else:
            rows = await hostctl.teams.list(organization)
            if not rows:
                console.print("[yellow]No members found[/yellow]\n")
                return
            _print_records(f"Team of {organization.label}", rows.values())

    except HostctlError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        await hostctl.close()
