# towboat/cli/main.py
"""Main CLI entry point for towboat"""

import logging
import sys

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api.exceptions import TowboatError
from ..api.runner import run_towboat
from ..constants import APP_NAME, LOG_FORMAT, DEFAULT_STOW_DIR, DEFAULT_TARGET_DIR
from ..services.config_service import ConfigService
from .utils.output import console, print_header, print_item, format_run_result, print_error


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True,
    )


@click.command(name=APP_NAME)
@click.argument('package')
@click.option('-d', '--dir', 'stow_dir', default=DEFAULT_STOW_DIR, show_default=True,
              metavar='DIR', help='Stow directory containing packages')
@click.option('-t', '--target', default=DEFAULT_TARGET_DIR, show_default=True,
              metavar='DIR', help='Target directory to create symlinks in')
@click.option('-b', '--build', 'build_tag', metavar='TAG',
              help="Build tag to match (defaults to the manifest's first build tag, then 'default')")
@click.option('--dry-run', is_flag=True, help='Show what would be done without making changes')
@click.option('-f', '--force', is_flag=True, help='Overwrite existing files in target directory')
@click.option('--adopt', is_flag=True,
              help='Adopt existing files from target directory back to package')
@click.option('-r', '--remove', is_flag=True,
              help='Remove symlinks/files for this package from target directory')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress log output except errors')
@click.version_option(__version__, prog_name=APP_NAME)
def cli(package, stow_dir, target, build_tag, dry_run, force, adopt, remove,
        verbose, debug, quiet):
    """A stow-like tool for cross-platform dotfiles with build tags

    Deploys PACKAGE from the stow directory into the target directory.
    Files carrying blocks for the build tag are written as processed
    copies; all other files are symlinked.

    Examples:

        # Deploy the bash package for Linux into $HOME
        towboat -b linux bash

        # Preview the deployment
        towboat -b macos --dry-run bash

        # Remove what was deployed
        towboat -b linux -r bash
    """
    if quiet:
        logging.disable(logging.WARNING)
    else:
        setup_logging(verbose=verbose, debug=debug)

    try:
        config = ConfigService().resolve(
            package,
            stow_dir=stow_dir,
            target=target,
            build_tag=build_tag,
            dry_run=dry_run,
            force=force,
            adopt=adopt,
            remove=remove,
        )

        print_header(config)
        result = run_towboat(config, reporter=print_item)
        format_run_result(result)

    except TowboatError as e:
        print_error(e)
        if debug:
            console.print_exception()
        sys.exit(1)


def main():
    """Main entry point for the CLI application"""
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
