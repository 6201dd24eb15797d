"""
Command modules for the Reportobello CLI.

Each module exposes a register_*_commands(cli) function that attaches its
commands to the main click group.
"""

import sys
from typing import NoReturn

import click
import httpx

from ..api import ReportobelloAPIClient
from ..config import ConfigManager, ReportobelloConfig
from ..exceptions import APIError, ReportobelloError
from ..utils import (
    print_error,
    print_info,
    print_success,
    print_warning,
)


class ReportobelloContext:
    """CLI context object for sharing state between commands."""

    def __init__(self):
        self.config_manager: ConfigManager = None  # type: ignore[assignment]

    @property
    def config(self) -> ReportobelloConfig:
        return self.config_manager.get()


pass_context = click.make_pass_decorator(ReportobelloContext, ensure=True)


def common_options(f):
    """Common options for all commands."""
    f = click.option(
        '-v', '--verbose',
        is_flag=True,
        help='Enable verbose output'
    )(f)
    f = click.option(
        '-q', '--quiet',
        is_flag=True,
        help='Suppress non-essential output'
    )(f)
    f = click.option(
        '-f', '--format',
        'output_format',
        type=click.Choice(['table', 'json']),
        default='table',
        help='Output format'
    )(f)
    return f


def require_config(f):
    """Decorator to require an API key."""
    @click.pass_context
    def wrapper(click_ctx, *args, **kwargs):
        ctx = click_ctx.ensure_object(ReportobelloContext)

        try:
            config = ctx.config_manager.get()
        except ReportobelloError as e:
            print_error(e.message, e.details)
            sys.exit(1)

        if not config.is_configured():
            print_error(
                "Reportobello CLI is not configured.",
                "Run 'reportobello configure --api-key KEY' or set REPORTOBELLO_API_KEY."
            )
            sys.exit(1)

        return click_ctx.invoke(f, *args, **kwargs)

    return wrapper


def make_client(ctx: ReportobelloContext) -> ReportobelloAPIClient:
    """Create an API client from the current configuration."""
    config = ctx.config
    return ReportobelloAPIClient(config.api_key, config.server_url)


def exit_with_error(error: Exception) -> NoReturn:
    """Print an SDK or transport error and exit with status 1."""
    if isinstance(error, APIError):
        print_error(f"Request failed (HTTP {error.status_code})", error.message)
    elif isinstance(error, ReportobelloError):
        print_error(error.message, error.details)
    elif isinstance(error, httpx.HTTPError):
        print_error(f"Connection failed: {error}")
    else:
        print_error(str(error))
    sys.exit(1)


__all__ = [
    "ReportobelloContext",
    "pass_context",
    "common_options",
    "require_config",
    "make_client",
    "exit_with_error",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
