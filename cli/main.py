# cli/main.py
"""Main CLI entry point for FlowForge Generator."""

import click
from pathlib import Path
import sys

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core import __version__
from core.config import get_settings
from core.log import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, verbose: bool):
    """FlowForge Generator CLI - turn process graphs into .NET projects."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    settings = get_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_output=settings.log_json,
    )


# Import and register command groups
def register_commands():
    """Register all CLI command groups."""
    # Process commands
    from cli.commands.process import process
    cli.add_command(process)

    # Generate code commands
    from core.generator.cli import generate
    cli.add_command(generate)


# Register all commands
register_commands()


if __name__ == '__main__':
    cli()
