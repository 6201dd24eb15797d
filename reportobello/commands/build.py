"""
Report build command for the Reportobello CLI.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
import httpx

from .. import browser
from ..exceptions import ReportobelloError
from ..utils import OutputFormat, load_json_file, print_json, print_warning, setup_logging
from . import (
    ReportobelloContext,
    common_options,
    exit_with_error,
    make_client,
    pass_context,
    print_error,
    print_info,
    require_config,
)


def register_build_commands(cli: click.Group) -> None:
    """Register the build command with the CLI."""

    @cli.command('build')
    @common_options
    @click.argument('name')
    @click.option('--data', '-d', 'data_json', help='Report data as a JSON string')
    @click.option(
        '--data-file', '-D',
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help='JSON file with report data'
    )
    @click.option('--preview', is_flag=True, help='Build a preview instead of a recorded report')
    @click.option('--open', 'open_browser', is_flag=True, help='Open the PDF in a browser tab')
    @click.option('--download', 'download_as', help='Download the PDF in the browser under this file name')
    @pass_context
    @require_config
    def build_report(
        ctx: ReportobelloContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        name: str,
        data_json: Optional[str],
        data_file: Optional[Path],
        preview: bool,
        open_browser: bool,
        download_as: Optional[str],
    ):
        """
        Build a report from a template and print the PDF's URL.

        \b
        Examples:
          reportobello build invoice -d '{"total": 42}'
          reportobello build invoice --data-file invoice.json --open
          reportobello build invoice -D invoice.json --download invoice-42.pdf
          reportobello build invoice --preview
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        if data_json and data_file:
            print_error("Use either --data or --data-file, not both.")
            sys.exit(1)

        data: Any = {}
        if data_file:
            try:
                data = load_json_file(data_file)
            except ValueError as e:
                print_error(f"Invalid data file: {e}")
                sys.exit(1)
        elif data_json:
            try:
                data = json.loads(data_json)
            except json.JSONDecodeError as e:
                print_error(f"Invalid data JSON: {e}")
                sys.exit(1)

        async def run() -> str:
            async with make_client(ctx) as client:
                return await client.run_report(name, data, preview, timeout=ctx.config.timeout)

        if not quiet and fmt != OutputFormat.JSON:
            print_info(f"Building {'preview of ' if preview else ''}'{name}'...")

        try:
            url = asyncio.run(run())
        except (ReportobelloError, httpx.HTTPError) as e:
            exit_with_error(e)

        if fmt == OutputFormat.JSON:
            print_json({"template": name, "preview": preview, "url": url})
        else:
            click.echo(url)

        if download_as:
            opened = browser.download(url, download_as)
        elif open_browser:
            opened = browser.open_in_new_tab(url)
        else:
            return

        if not opened:
            print_warning("Could not launch a browser.")
