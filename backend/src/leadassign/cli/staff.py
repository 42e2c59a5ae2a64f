"""CLI commands for inspecting the staff directory.

Usage:
    leadassign staff list [--directory FILE]
    leadassign staff show EMAIL [--directory FILE]
"""

import sys

import click

from ..assignment.directory import (
    StaffDirectory,
    StaffDirectoryError,
    get_staff_directory,
    load_staff_directory,
)

directory_option = click.option(
    "--directory",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML/JSON staff directory to use instead of the configured one",
)


def _load(directory: str | None) -> StaffDirectory:
    try:
        return load_staff_directory(directory) if directory else get_staff_directory()
    except StaffDirectoryError as e:
        click.echo(f"Error loading staff directory: {e}", err=True)
        sys.exit(1)


@click.group(name="staff")
def cli():
    """Staff directory commands."""
    pass


@cli.command(name="list")
@directory_option
def list_staff(directory: str | None):
    """List every staff member in directory order."""
    staff_directory = _load(directory)

    click.echo(f"\nStaff Directory ({len(staff_directory)} members)")
    click.echo("=" * 70)
    for member in staff_directory:
        click.echo(f"{member.id:<12} {member.name:<20} {member.role:<22} {member.email}")


@cli.command(name="show")
@click.argument("email")
@directory_option
def show_staff(email: str, directory: str | None):
    """Show skills and services for the member with EMAIL."""
    member = _load(directory).get_by_email(email)
    if member is None:
        click.echo(f"No staff member with email {email}", err=True)
        sys.exit(1)

    click.echo(f"{member.name} ({member.role})")
    click.echo(f"  ID:       {member.id}")
    click.echo(f"  Email:    {member.email}")
    click.echo(f"  Services: {', '.join(member.primary_services) or '-'}")
    click.echo(f"  Skills:   {', '.join(member.skills) or '-'}")
