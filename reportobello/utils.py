"""
Utility functions for the Reportobello CLI.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import click

from .api.models import Template


class OutputFormat(str, Enum):
    """Output format options."""
    TABLE = "table"
    JSON = "json"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure logging for the CLI.

    Args:
        verbose: Show debug output (including request/response lines)
        quiet: Only show errors
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )

    # httpx logs every request at INFO; keep it for -v only
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_success(message: str) -> None:
    """Print a success message."""
    click.secho(f"✓ {message}", fg="green")


def print_error(message: str, details: Optional[str] = None) -> None:
    """Print an error message to stderr."""
    click.secho(f"✗ {message}", fg="red", err=True)
    if details:
        click.secho(f"  {details}", fg="red", err=True)


def print_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"! {message}", fg="yellow")


def print_info(message: str) -> None:
    """Print an informational message."""
    click.secho(f"→ {message}", fg="blue")


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def truncate_string(value: str, max_length: int = 50) -> str:
    """Truncate a string to max_length, ending with '...' when cut."""
    if len(value) <= max_length:
        return value
    return value[:max_length - 3] + "..."


def print_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """Print a simple left-aligned table."""
    cells = [[str(c) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(values: Sequence[str]) -> str:
        return "  ".join(v.ljust(widths[i]) for i, v in enumerate(values)).rstrip()

    click.echo(line(list(headers)))
    click.echo("  ".join("-" * w for w in widths))
    for row in cells:
        click.echo(line(row))


def format_template_versions(templates: List[Template], fmt: OutputFormat = OutputFormat.TABLE) -> None:
    """Print template versions as a table or JSON."""
    if fmt == OutputFormat.JSON:
        print_json([
            {"name": t.name, "version": t.version, "template_content": t.template_content}
            for t in templates
        ])
        return

    if not templates:
        print_info("No versions found.")
        return

    rows = [
        [t.name, t.version, len(t.template_content.splitlines()), truncate_string(t.template_content.split("\n", 1)[0], 40)]
        for t in templates
    ]
    print_table(["Name", "Version", "Lines", "First Line"], rows)


def load_json_file(path: Path) -> Any:
    """
    Load a JSON file.

    Raises:
        ValueError: If the file is missing or not valid JSON
    """
    if not path.exists():
        raise ValueError(f"File not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")


def parse_env_assignments(assignments: Sequence[str]) -> Dict[str, str]:
    """
    Parse KEY=VALUE strings into a dict.

    The value is everything after the first '='. Later keys win.

    Raises:
        ValueError: If an entry has no '=' or an empty key
    """
    result: Dict[str, str] = {}
    for item in assignments:
        if "=" not in item:
            raise ValueError(f"Invalid variable format: {item!r} (expected KEY=VALUE)")

        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid variable format: {item!r} (empty name)")

        result[key] = value

    return result


def load_env_file(path: Path) -> Dict[str, str]:
    """
    Load KEY=VALUE lines from a dotenv-style file.

    Blank lines and lines starting with '#' are skipped. Matching single or
    double quotes around a value are removed.
    """
    lines = []
    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            stripped = raw.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if stripped.startswith("export "):
                stripped = stripped[len("export "):]
            lines.append(stripped)

    variables = parse_env_assignments(lines)
    for key, value in variables.items():
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        variables[key] = value

    return variables


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask the user for confirmation."""
    return click.confirm(message, default=default)
