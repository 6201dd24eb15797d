"""
Template commands for the Reportobello CLI.

Commands:
- upload: Upload a template file as a new version
- versions: List the stored versions of a template
"""

import asyncio
import sys
from pathlib import Path

import click
import httpx

from ..exceptions import ReportobelloError
from ..utils import OutputFormat, format_template_versions, setup_logging
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


def register_template_commands(cli: click.Group) -> None:
    """Register template commands with the CLI."""

    @cli.command('upload')
    @common_options
    @click.argument('name')
    @click.argument('template_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @pass_context
    @require_config
    def upload_template(
        ctx: ReportobelloContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        name: str,
        template_file: Path,
    ):
        """
        Upload a Typst template file.

        Each upload is stored by the server as a new version of NAME.

        \b
        Examples:
          reportobello upload invoice templates/invoice.typ
        """
        setup_logging(verbose, quiet)

        try:
            content = template_file.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            print_error(f"Template file is not valid UTF-8: {template_file}", str(e))
            sys.exit(1)

        async def run() -> None:
            async with make_client(ctx) as client:
                await client.upload_template(name, content, timeout=ctx.config.timeout)

        if not quiet:
            print_info(f"Uploading {template_file} as '{name}'...")

        try:
            asyncio.run(run())
        except (ReportobelloError, httpx.HTTPError) as e:
            exit_with_error(e)

        if not quiet:
            print_success(f"Template '{name}' uploaded.")

    @cli.command('versions')
    @common_options
    @click.argument('name')
    @pass_context
    @require_config
    def list_versions(
        ctx: ReportobelloContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        name: str,
    ):
        """
        List the stored versions of a template.

        Versions are shown in the order the server returns them.

        \b
        Examples:
          reportobello versions invoice
          reportobello versions invoice --format json
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        async def run():
            async with make_client(ctx) as client:
                return await client.get_template_versions(name, timeout=ctx.config.timeout)

        try:
            templates = asyncio.run(run())
        except (ReportobelloError, httpx.HTTPError) as e:
            exit_with_error(e)

        format_template_versions(templates, fmt)
