"""Shared utility functions for Portfolify.

Provides async command execution, best-effort step wrapping, project-name
validation, JSON I/O and the Rich-based console helpers every other module
prints through.
"""

from __future__ import annotations

import asyncio
import json
import re
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import quote

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.table import Table

console = Console()

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int | None = 120,
) -> tuple[int, str, str]:
    """Run *cmd* (an argument list, no shell) and capture its output.

    ``timeout=None`` waits for as long as the process runs; package
    installs are unbounded, analysis tools and builds are not.

    Returns:
        ``(returncode, stdout, stderr)`` with both streams decoded and
        stripped.  A timeout kills the process and yields ``-1``; an
        executable that cannot be started yields ``127``.  Neither case
        raises.
    """
    display = " ".join(cmd)
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as exc:
        return (127, "", f"Could not start '{display}': {exc}")

    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {display}")

    return (process.returncode or 0, _decode(out), _decode(err))


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace").strip()


def first_lines(text: str, limit: int = 5) -> list[str]:
    """Return at most *limit* non-blank lines of *text*."""
    return [line for line in text.splitlines() if line.strip()][:limit]


async def best_effort(label: str, step: Callable[[], Awaitable[T]]) -> T | None:
    """Run *step*, downgrading any failure to a printed warning.

    Used for install, git init and formatting: steps whose failure must
    never abort a generation that already succeeded.

    Returns:
        The step's result, or ``None`` when it raised.
    """
    try:
        return await step()
    except Exception as exc:  # noqa: BLE001
        print_warning(f"{label} failed: {exc}")
        return None


async def ensure_git_repo(path: Path, message: str, timeout: int = 30) -> bool:
    """Initialise a git repository at *path* with one initial commit.

    Returns ``True`` on success; failures are printed as warnings.
    """
    steps = (
        ["git", "init"],
        ["git", "add", "-A"],
        ["git", "commit", "-m", message],
    )
    for cmd in steps:
        rc, _, stderr = await run_command(cmd, cwd=path, timeout=timeout)
        if rc != 0:
            print_warning(f"'{' '.join(cmd[:2])}' failed:")
            for line in first_lines(stderr):
                console.print(f"  [dim]{line}[/dim]")
            return False
    return True


# ---------------------------------------------------------------------------
# Project-name validation
# ---------------------------------------------------------------------------


class InvalidProjectNameError(Exception):
    """Raised when a project name is not a valid package name."""

    def __init__(self, name: str, problems: list[str]) -> None:
        self.name = name
        self.problems = problems
        super().__init__(f"Invalid project name '{name}': {'; '.join(problems)}")


_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARS = re.compile(r"[~'!()*]")
_NAME_BLACKLIST = {"node_modules", "favicon.ico"}
_NODE_BUILTINS = {
    "assert", "buffer", "child_process", "cluster", "console", "constants",
    "crypto", "dgram", "dns", "domain", "events", "fs", "http", "http2",
    "https", "module", "net", "os", "path", "process", "punycode",
    "querystring", "readline", "repl", "stream", "string_decoder", "sys",
    "timers", "tls", "tty", "url", "util", "v8", "vm", "worker_threads",
    "zlib",
}
MAX_NAME_LENGTH = 214


def name_problems(name: str) -> list[str]:
    """List every rule *name* breaks as a package name (empty when valid)."""
    problems: list[str] = []
    if not name:
        return ["name length must be greater than zero"]
    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if name.strip() != name:
        problems.append("name cannot contain leading or trailing spaces")
    if name.lower() in _NAME_BLACKLIST:
        problems.append(f"{name} is a blacklisted name")
    if name.lower() in _NODE_BUILTINS:
        problems.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        problems.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        problems.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS.search(name.split("/")[-1]):
        problems.append('name can no longer contain special characters ("~\'!()*")')
    if quote(name, safe="") != name:
        match = _SCOPED_NAME.match(name)
        scoped_ok = bool(
            match
            and match.group(1)
            and quote(match.group(1), safe="") == match.group(1)
            and quote(match.group(2), safe="") == match.group(2)
        )
        if not scoped_ok:
            problems.append("name can only contain URL-friendly characters")
    return problems


def validate_project_name(name: str) -> str:
    """Return *name* unchanged when valid.

    Raises:
        InvalidProjectNameError: listing every rule the name breaks.
    """
    problems = name_problems(name)
    if problems:
        raise InvalidProjectNameError(name, problems)
    return name


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load a JSON object from *path*; any other top-level value loads as ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def dump_json(data: Any) -> str:
    """Pretty-print *data* the way every generated JSON file is written."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str, subtitle: str = "") -> None:
    """Print a banner panel."""
    body = f"[bold cyan]{title}[/bold cyan]"
    if subtitle:
        body += f"\n[dim]{subtitle}[/dim]"
    console.print(Panel(body, border_style="cyan", expand=False))
    console.print()


def print_step(number: int, name: str) -> None:
    """Print a full-width rule introducing a numbered step."""
    console.print()
    console.print(Rule(f"[bold bright_cyan] Step {number}: {name} [/bold bright_cyan]", style="bright_cyan"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    console.print(f"[cyan]{message}[/cyan]")


def print_debug(message: str, enabled: bool) -> None:
    """Print a dim diagnostic line when *enabled*."""
    if enabled:
        console.print(f"[dim][debug] {message}[/dim]")


def create_progress() -> Progress:
    """Create a Rich spinner for long-running steps (installs, builds)."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
