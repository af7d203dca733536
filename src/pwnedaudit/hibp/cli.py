"""
CLI commands for auditing passwords against Pwned Passwords.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pwnedaudit.hibp.config import CheckerConfig
from pwnedaudit.hibp.errors import BreachCheckError
from pwnedaudit.hibp.formatting import format_result, status_color
from pwnedaudit.hibp.models import (
    MAX_PREFIX_LENGTH,
    MIN_PREFIX_LENGTH,
    AuditResult,
    CheckStatus,
)
from pwnedaudit.hibp.sources import iter_directory

console = Console(highlight=False)


def build_config(
    prefix_length: int | None = None,
    min_interval: float | None = None,
    max_retries: int | None = None,
    padding: bool | None = None,
) -> CheckerConfig:
    """Environment configuration with command-line overrides applied."""
    config = CheckerConfig.from_env()
    if prefix_length is not None:
        config.prefix_length = prefix_length
    if min_interval is not None:
        config.min_interval = min_interval
    if max_retries is not None:
        config.max_retries = max_retries
    if padding is not None:
        config.add_padding = padding
    return config


prefix_length_option = click.option(
    "--prefix-length",
    "-l",
    type=click.IntRange(MIN_PREFIX_LENGTH, MAX_PREFIX_LENGTH),
    help="Hash characters sent to the API (default 5)",
)
padding_option = click.option(
    "--padding/--no-padding",
    default=None,
    help="Ask the API to pad responses",
)


# =============================================================================
# Directory Audit
# =============================================================================

@click.command("audit")
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--pattern", default="*.txt", show_default=True, help="File name pattern")
@prefix_length_option
@click.option("--min-interval", type=click.FloatRange(min=0), help="Seconds between checks (default 0.5)")
@click.option("--max-retries", type=click.IntRange(min=0), help="Give up after this many throttle retries")
@padding_option
@click.option("--hide-secrets", is_flag=True, help="Do not print file contents")
@click.option(
    "--stop-on-error/--continue-on-error",
    default=True,
    help="Abort on the first failed check, or report it and carry on",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def audit(
    directory: Path,
    pattern: str,
    prefix_length: int | None,
    min_interval: float | None,
    max_retries: int | None,
    padding: bool | None,
    hide_secrets: bool,
    stop_on_error: bool,
    json_output: bool,
) -> None:
    """Check every password file in a directory.

    Each file must hold exactly one password on its first line; files
    with more non-empty lines are skipped.

    Example:
        pwnedaudit audit ./passwords
        pwnedaudit audit ./passwords --prefix-length 6 --hide-secrets
    """
    try:
        config = build_config(prefix_length, min_interval, max_retries, padding)
    except BreachCheckError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    items = list(iter_directory(directory, pattern))

    if not items:
        console.print(f"[yellow]No files matching {pattern} in {directory}[/yellow]")
        return

    async def _audit() -> list[AuditResult]:
        results = []
        async with config.create_checker() as checker:
            async for result in checker.check_items(
                items,
                prefix_length=config.prefix_length,
                stop_on_error=stop_on_error,
            ):
                results.append(result)
                if not json_output:
                    console.print(format_result(result, show_content=not hide_secrets))
        return results

    try:
        results = asyncio.run(_audit())
    except BreachCheckError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if json_output:
        console.print_json(json.dumps([r.to_dict() for r in results], default=str))
        return

    console.print("[DONE] The password check operation has completed.", markup=False)

    counts = {status: 0 for status in CheckStatus}
    for result in results:
        counts[result.status] += 1

    table = Table(title="Audit Summary")
    table.add_column("Status", style="cyan")
    table.add_column("Files", justify="right")
    for status in CheckStatus:
        color = status_color(status)
        table.add_row(f"[{color}]{status.name}[/{color}]", str(counts[status]))
    console.print(table)


# =============================================================================
# Single Password
# =============================================================================

@click.command("password")
@click.option("--password", "-p", help="Password to check (or prompts securely)")
@prefix_length_option
@padding_option
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def check_password(
    password: str | None,
    prefix_length: int | None,
    padding: bool | None,
    json_output: bool,
) -> None:
    """Check one password.

    Only the first few characters of its SHA-1 hash are sent to the API.

    Example:
        pwnedaudit password
    """
    if not password:
        password = click.prompt("Password to check", hide_input=True)

    try:
        config = build_config(prefix_length=prefix_length, padding=padding)
    except BreachCheckError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    async def _check() -> bool:
        async with config.create_checker() as checker:
            return await checker.check(password.encode("utf-8"), config.prefix_length)

    try:
        pwned = asyncio.run(_check())
    except BreachCheckError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if json_output:
        console.print_json(json.dumps({"is_pwned": pwned, "prefix_length": config.prefix_length}))
        return

    if pwned:
        console.print(Panel(
            "[red]Warning![/red] This password appears in known data breaches.",
            title="Password Check Result",
        ))
    else:
        console.print(Panel(
            "[green]Good news![/green] This password was not found in any known data breaches.",
            title="Password Check Result",
        ))


# =============================================================================
# Configuration
# =============================================================================

@click.command("config")
def show_config() -> None:
    """Show the effective checker configuration."""
    try:
        config = CheckerConfig.from_env()
    except BreachCheckError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    table = Table(title="Checker Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)

    for error in config.validate():
        console.print(f"[red]{error}[/red]")


def add_hibp_commands(main_cli: click.Group) -> None:
    """Add audit commands to main CLI."""
    main_cli.add_command(audit)
    main_cli.add_command(check_password)
    main_cli.add_command(show_config)
