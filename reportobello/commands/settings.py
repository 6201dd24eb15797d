"""
Configuration/settings commands for the Reportobello CLI.

Commands:
- configure: Configure CLI settings
- config-clear: Clear all configuration
"""

import sys
from typing import Optional

import click

from .. import __prog_name__
from ..api._http import validate_base_url
from ..config import DEFAULT_SERVER_URL
from ..exceptions import ReportobelloError
from . import (
    ReportobelloContext,
    pass_context,
    print_error,
    print_success,
    print_info,
)


def _mask(api_key: str) -> str:
    if not api_key:
        return '(not configured)'
    return api_key[:4] + '*' * 16 + '...'


def register_settings_commands(cli: click.Group) -> None:
    """Register configuration commands with the CLI."""

    @cli.command('configure')
    @click.option(
        '--api-key', '-k',
        help='Reportobello API key'
    )
    @click.option(
        '--server', '-s',
        help=f'Server URL (default: {DEFAULT_SERVER_URL})'
    )
    @click.option(
        '--timeout', '-t',
        type=click.IntRange(min=1),
        help='Request timeout in seconds'
    )
    @click.option(
        '--show',
        is_flag=True,
        help='Show current configuration'
    )
    @pass_context
    def configure(
        ctx: ReportobelloContext,
        api_key: Optional[str],
        server: Optional[str],
        timeout: Optional[int],
        show: bool
    ):
        """
        Configure Reportobello CLI settings.

        \b
        Examples:
          reportobello configure --api-key rbo_XXXX
          reportobello configure --server https://reports.example.com
          reportobello configure --show
        """
        config_manager = ctx.config_manager

        try:
            if show:
                config = config_manager.get()
                click.echo("\nCurrent Configuration:")
                click.echo(f"  Server URL:      {config.server_url}")
                click.echo(f"  API Key:         {_mask(config.api_key)}")
                click.echo(f"  Timeout:         {config.timeout}s")
                click.echo(f"  Config Path:     {config_manager.get_config_path()}")
                return

            # Interactive configuration if no options provided
            if not any([api_key, server, timeout]):
                click.echo("Interactive configuration setup:")

                current = config_manager.get()

                server = click.prompt(
                    "Server URL",
                    default=current.server_url or DEFAULT_SERVER_URL
                )

                api_key = click.prompt(
                    "API key (leave empty to keep the current one)",
                    default='',
                    show_default=False,
                    hide_input=True
                )

                timeout = click.prompt(
                    "Request timeout (seconds)",
                    default=current.timeout,
                    type=click.IntRange(min=1)
                )

            updates = {}
            if server:
                updates['server_url'] = validate_base_url(server)
            if api_key:
                updates['api_key'] = api_key
            if timeout:
                updates['timeout'] = timeout

            if updates:
                config_manager.update(**updates)
                print_success("Configuration saved successfully.")
                if 'api_key' not in updates and not config_manager.get().is_configured():
                    print_info(f"Run '{__prog_name__} configure --api-key KEY' to set your API key.")
            else:
                print_info("No changes made.")

        except ReportobelloError as e:
            print_error(e.message, e.details)
            sys.exit(1)

    @cli.command('config-clear')
    @click.confirmation_option(prompt='Are you sure you want to clear all configuration?')
    @pass_context
    def config_clear(ctx: ReportobelloContext):
        """Clear all stored configuration."""
        ctx.config_manager.clear()
        print_success("Configuration cleared.")
