"""
Reportobello CLI - Command line interface for the Reportobello report service.

Provides commands for:
- Configuration management
- Template upload and version history
- Environment variables
- Building reports
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__, __prog_name__
from .commands import ReportobelloContext
from .commands.build import register_build_commands
from .commands.env import register_env_commands
from .commands.settings import register_settings_commands
from .commands.templates import register_template_commands
from .config import get_config_manager
from .utils import print_error

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name=__prog_name__)
@click.option(
    '--config-dir',
    type=click.Path(file_okay=False, path_type=Path),
    envvar='REPORTOBELLO_CONFIG_DIR',
    help='Custom configuration directory'
)
@click.pass_context
def cli(ctx, config_dir: Optional[Path]):
    """
    Reportobello CLI - Report Rendering Service Tool.

    Upload Typst templates, manage rendering environment variables
    and build PDF reports through the Reportobello API.

    \b
    Quick Start:
      1. Set your API key:     reportobello configure --api-key rbo_XXXX
      2. Upload a template:    reportobello upload invoice invoice.typ
      3. Build a report:       reportobello build invoice -d '{"total": 42}'

    \b
    Environment Variables:
      REPORTOBELLO_API_KEY      - API key (overrides the stored one)
      REPORTOBELLO_SERVER_URL   - Server URL (default: https://reportobello.com)
      REPORTOBELLO_CONFIG_DIR   - Custom configuration directory
    """
    ctx.ensure_object(ReportobelloContext)
    ctx.obj.config_manager = get_config_manager(config_dir)


register_settings_commands(cli)
register_template_commands(cli)
register_env_commands(cli)
register_build_commands(cli)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nAborted.")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
