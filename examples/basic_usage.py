"""
Basic hostctl usage example.

This example demonstrates the core features of hostctl:
- Listing your organizations
- Team management with role checks
- Listing and associating sites

Run with:
    python examples/basic_usage.py
"""

import asyncio

from hostctl import Hostctl, HostctlError


async def main():
    # Create client (loads config from .env)
    hostctl = await Hostctl.create()

    try:
        # =================================================================
        # 1. Organizations
        # =================================================================
        print("Your organizations:")

        for row in await hostctl.orgs.list():
            print(f"  {row['name']} ({row['id']})")

        org = await hostctl.orgs.get("Acme Corporation")

        # =================================================================
        # 2. Team
        # =================================================================
        print(f"\nTeam of {org.name}:")

        for uuid, member in (await hostctl.teams.list(org)).items():
            print(f"  {member['email']}: {member['role']}")

        print(f"\nAssignable roles: {', '.join(hostctl.teams.role_choices(org))}")

        workflow = await hostctl.teams.add_member(org, "new@example.com", "admin")
        if workflow.result.succeeded:
            print(f"  {workflow.result.message}")
        else:
            print(f"  Failed: {workflow.result.reason}")

        # =================================================================
        # 3. Sites
        # =================================================================
        print("\nProduction sites:")

        listing = await hostctl.sites.list(org, tag="prod")
        if not listing.rows:
            print(f"  {listing.empty_message}")
        for row in listing.rows:
            frozen = " (frozen)" if row.get("frozen") else ""
            print(f"  {row['name']} [{row['framework']}]{frozen}")

    except HostctlError as e:
        print(f"Error: {e}")

    finally:
        await hostctl.close()


if __name__ == "__main__":
    asyncio.run(main())
