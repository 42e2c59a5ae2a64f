"""CLI entry points for the lead assignment service.

Provides command-line tools for:
- Running the assignment resolver on a lead
- Inspecting the staff directory
"""

import click

from .. import __version__
from .analyze import cli as analyze_cli
from .staff import cli as staff_cli


@click.group()
@click.version_option(version=__version__, prog_name="leadassign")
def main():
    """Lead assignment service.

    Command-line tools for checking how leads are routed to staff.
    """
    pass


main.add_command(analyze_cli, name="analyze")
main.add_command(staff_cli, name="staff")


if __name__ == "__main__":
    main()
