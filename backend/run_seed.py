#!/usr/bin/env python
"""
Create the admin users listed in ADMIN_EMAILS.

Existing accounts are left untouched. The API runs the same seed on
startup unless AUTO_SEED_ADMIN=false.

Usage:
    python run_seed.py
    python run_seed.py --password 'initial-secret'
"""

import argparse
import sys

from rich.console import Console

from api.app import configure_logging
from api.dependencies import get_container
from modules.auth.seed import ensure_admin_seed

console = Console()


def main():
    parser = argparse.ArgumentParser(description="Seed admin users")
    parser.add_argument("--password", help="Initial password (defaults to ADMIN_SEED_PASSWORD)")
    parser.add_argument("--name", help="Display name (defaults to ADMIN_SEED_NAME)")
    args = parser.parse_args()

    container = get_container()
    settings = container.settings
    configure_logging(settings.log_level)

    if not settings.admin_email_list:
        console.print("[yellow]ADMIN_EMAILS is empty, nothing to seed.[/yellow]")
        return

    password = args.password or settings.admin_seed_password
    if not password:
        console.print("[red]Error:[/red] pass --password or set ADMIN_SEED_PASSWORD.")
        sys.exit(1)

    container.check_storage()
    created = ensure_admin_seed(
        container.users,
        container.hasher,
        settings.admin_email_list,
        name=args.name or settings.admin_seed_name,
        password=password,
    )
    console.print(f"[green]✓[/green] {created} admin user(s) created, "
                  f"{len(settings.admin_email_list) - created} already present")


if __name__ == "__main__":
    main()
