"""Shared utility functions for create-geo-app.

Provides async command execution, project-name validation, the npm registry
probe, and Rich-based progress reporting.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

import httpx
from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    capture: bool = True,
) -> tuple[int, str, str]:
    """Run an argv command asynchronously.

    Args:
        cmd: Program and arguments; no shell is involved.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams, so the user sees the tool's own output).

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A timed-out command
        reports a return code of ``-1``.
    """
    pipe = asyncio.subprocess.PIPE if capture else None
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=pipe,
        stderr=pipe,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (
            -1,
            "",
            f"Command timed out after {timeout}s: {format_command(cmd)}",
        )

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


def format_command(cmd: list[str]) -> str:
    """Render an argv command for display."""
    return " ".join(cmd)


# ---------------------------------------------------------------------------
# Project name helpers
# ---------------------------------------------------------------------------

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` if *name* only uses lowercase letters, digits and hyphens.

    Examples::

        is_valid_project_name("my-app")  -> True
        is_valid_project_name("My App")  -> False
        is_valid_project_name("")        -> False
    """
    return bool(name) and PROJECT_NAME_PATTERN.fullmatch(name) is not None


def title_from_name(name: str) -> str:
    """Turn ``my-geo-app`` into ``My Geo App``."""
    return " ".join(part.capitalize() for part in name.split("-") if part)


# ---------------------------------------------------------------------------
# Registry probe
# ---------------------------------------------------------------------------


async def check_registry(url: str, timeout: float = 5.0) -> bool:
    """Return ``True`` if the package registry answers with a non-5xx status.

    Network errors and timeouts are reported as ``False``; the caller decides
    whether that is fatal.
    """
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=timeout)) as client:
        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL):
            return False
    return response.status_code < 500


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step_header(index: int, total: int, description: str) -> None:
    """Print a dim rule announcing the next setup step."""
    console.print()
    console.print(
        Rule(f"[bold cyan]{index}/{total}[/bold cyan] {description}", style="cyan", align="left")
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Step", style="dim", no_wrap=True)
    table.add_column("Duration")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
