"""
Environment variable commands for the Reportobello CLI.

Commands:
- env set: Set variables from KEY=VALUE arguments and/or a dotenv file
- env delete: Delete variables by name
"""

import asyncio
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
import httpx

from ..exceptions import ReportobelloError
from ..utils import confirm_action, load_env_file, parse_env_assignments, setup_logging
from . import (
    ReportobelloContext,
    common_options,
    exit_with_error,
    make_client,
    pass_context,
    print_error,
    print_info,
    print_success,
    require_config,
)


def register_env_commands(cli: click.Group) -> None:
    """Register environment variable commands with the CLI."""

    @cli.group('env')
    def env():
        """Manage environment variables available to templates."""
        pass

    @env.command('set')
    @common_options
    @click.argument('assignments', nargs=-1)
    @click.option(
        '--env-file', '-e',
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help='Read KEY=VALUE lines from a file'
    )
    @pass_context
    @require_config
    def set_env(
        ctx: ReportobelloContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        assignments: Tuple[str, ...],
        env_file: Optional[Path],
    ):
        """
        Set environment variables.

        Command-line assignments override values from --env-file.

        \b
        Examples:
          reportobello env set COMPANY="ACME Inc" CURRENCY=EUR
          reportobello env set --env-file .env.reports
        """
        setup_logging(verbose, quiet)

        variables: Dict[str, str] = {}
        try:
            if env_file:
                variables.update(load_env_file(env_file))
            variables.update(parse_env_assignments(assignments))
        except ValueError as e:
            print_error(str(e))
            sys.exit(1)

        if not variables:
            print_error("No variables given.", "Pass KEY=VALUE arguments or --env-file.")
            sys.exit(1)

        async def run() -> None:
            async with make_client(ctx) as client:
                await client.set_environment_variables(variables, timeout=ctx.config.timeout)

        try:
            asyncio.run(run())
        except (ReportobelloError, httpx.HTTPError) as e:
            exit_with_error(e)

        if not quiet:
            print_success(f"Set {len(variables)} variable(s): {', '.join(sorted(variables))}")

    @env.command('delete')
    @common_options
    @click.argument('keys', nargs=-1, required=True)
    @click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
    @pass_context
    @require_config
    def delete_env(
        ctx: ReportobelloContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        keys: Tuple[str, ...],
        yes: bool,
    ):
        """
        Delete environment variables.

        \b
        Examples:
          reportobello env delete COMPANY CURRENCY
          reportobello env delete OLD_KEY --yes
        """
        setup_logging(verbose, quiet)

        if not yes:
            if not confirm_action(f"Delete {len(keys)} variable(s): {', '.join(keys)}?"):
                print_info("Cancelled.")
                return

        async def run() -> None:
            async with make_client(ctx) as client:
                await client.delete_environment_variables(list(keys), timeout=ctx.config.timeout)

        try:
            asyncio.run(run())
        except (ReportobelloError, httpx.HTTPError) as e:
            exit_with_error(e)

        if not quiet:
            print_success(f"Deleted {len(keys)} variable(s).")
