"""Analyze CLI command.

Runs the assignment resolver on a lead without touching the database,
which is handy for checking how a directory change routes real inquiries.

Usage:
    leadassign analyze -s "Mobile App Development" -d "We need an iOS app"
    leadassign analyze -d "Kubernetes migration" --json
"""

import json
import sys

import click

from ..assignment.directory import StaffDirectoryError, get_staff_directory, load_staff_directory
from ..assignment.resolver import AssignmentResolver
from ..config import get_settings


@click.command("analyze")
@click.option(
    "--service",
    "-s",
    "services",
    multiple=True,
    help="Selected service interest (repeatable, order matters)",
)
@click.option(
    "--description",
    "-d",
    default="",
    help="Project description as the lead wrote it",
)
@click.option(
    "--directory",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML/JSON staff directory to use instead of the configured one",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the raw assignment result as JSON",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show the analysis log",
)
def cli(
    services: tuple[str, ...],
    description: str,
    directory: str | None,
    as_json: bool,
    verbose: bool,
):
    """Show which staff a lead would be assigned to.

    Examples:

        # Service and keyword signals together
        leadassign analyze -s "Mobile App Development" -d "We need an iOS app"

        # Keyword signal only, JSON output
        leadassign analyze -d "blockchain on kubernetes" --json
    """
    try:
        staff_directory = (
            load_staff_directory(directory) if directory else get_staff_directory()
        )
    except StaffDirectoryError as e:
        click.echo(f"Error loading staff directory: {e}", err=True)
        sys.exit(1)

    result = AssignmentResolver(staff_directory).analyze(list(services), description)

    if as_json:
        click.echo(json.dumps(result.to_storage(), indent=2))
        return

    click.echo(f"Primary category: {result.primary_category}")
    click.echo(f"Confidence: {result.confidence_score:.1f}")
    click.echo(
        "Detected keywords: "
        + (", ".join(result.detected_keywords) if result.detected_keywords else "None")
    )

    if result.assigned_staff:
        click.echo(f"\nAssigned staff ({len(result.assigned_staff)}):")
        for staff in result.assigned_staff:
            click.echo(f"  - {staff.name} ({staff.role}) <{staff.email}>")
    else:
        inbox = get_settings().admin_email
        click.echo(
            click.style(f"\nNo staff matched; route to the general inbox ({inbox}).", fg="yellow")
        )

    if verbose:
        click.echo("\nAnalysis log:")
        for line in result.analysis_log:
            click.echo(f"  {line}")
