"""Post-generation checks for a portfolio project.

Runs the required-file checklist, the dependency check, the TypeScript
compiler, ESLint and an asset review against a generated project and
collects everything into a :class:`ValidationReport`.  Every check is
isolated: one that raises becomes a failed result for that check only and
the remaining checks still run.
"""

from __future__ import annotations

import json
import re
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

from rich.table import Table

from portfolify.config import Settings
from portfolify.frameworks import Framework, FrameworkSpec, detect_framework, get_framework_spec
from portfolify.utils import (
    console,
    create_progress,
    first_lines,
    load_json,
    print_debug,
    print_info,
    print_success,
    print_warning,
    run_command,
)

from .results import MAX_DETAILS, BuildResult, CheckResult, LintResult, ValidationReport

R = TypeVar("R", bound=CheckResult)

ESLINT_CONFIGS = (".eslintrc.json", ".eslintrc.js", ".eslintrc.cjs", "eslint.config.js")
PRETTIER_CONFIGS = (".prettierrc", ".prettierrc.json", "prettier.config.js")
BUILD_ERROR_LINES = 5

_LINT_SUMMARY = re.compile(r"(\d+) problems? \((\d+) errors?, (\d+) warnings?\)")
_LINT_MESSAGE = re.compile(r"^\s*\d+:\d+\s+(error|warning)\s")


# ---------------------------------------------------------------------------
# Output parsers
# ---------------------------------------------------------------------------


def parse_typecheck_output(output: str) -> list[str]:
    """Extract compiler error lines (``error TS`` or ``: error``), at most 10."""
    errors = [
        line.strip()
        for line in output.splitlines()
        if "error TS" in line or ": error" in line
    ]
    return errors[:MAX_DETAILS]


def parse_lint_output(output: str) -> tuple[list[str], int]:
    """Extract ESLint error messages (at most 10) and the warning count.

    Only stylish-format message lines (``  12:5  error  ...``) count, so
    file headers and the "potentially fixable" footer never register as
    errors.  Warnings are counted the same way unless the trailing
    ``N problems (X errors, Y warnings)`` summary is present, in which case
    its ``Y`` is authoritative.  A summary reporting errors that no message
    line matched contributes the summary line itself.
    """
    errors: list[str] = []
    warnings = 0
    for line in output.splitlines():
        match = _LINT_MESSAGE.match(line)
        if match is None:
            continue
        if match.group(1) == "error":
            errors.append(line.strip())
        else:
            warnings += 1

    summaries = list(_LINT_SUMMARY.finditer(output))
    if summaries:
        last = summaries[-1]
        warnings = int(last.group(3))
        if not errors and int(last.group(2)):
            errors.append(last.group(0))
    return errors[:MAX_DETAILS], warnings



def _build_error_lines(output: str) -> list[str]:
    lines = [
        line.strip()
        for line in output.splitlines()
        if "error" in line.lower() or "failed" in line
    ]
    return lines[:BUILD_ERROR_LINES]


# ---------------------------------------------------------------------------
# ProjectValidator
# ---------------------------------------------------------------------------


class ProjectValidator:
    """Validates a generated project directory.

    Parameters
    ----------
    project_dir:
        Root of the generated project (the directory holding ``package.json``).
    auto_fix:
        Pass ``--fix`` to ESLint and run Prettier afterwards.
    settings:
        Supplies tool timeouts and the debug flag.
    """

    def __init__(
        self,
        project_dir: str | Path,
        auto_fix: bool = False,
        settings: Settings | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.auto_fix = auto_fix
        self.settings = settings or Settings()

    # -- Public API ----------------------------------------------------------

    async def validate(self) -> ValidationReport:
        """Run every check and return the aggregated report."""
        spec = get_framework_spec(self._detect())
        print_debug(f"Validating {self.project_dir} as {spec.display_name}", self.settings.debug)

        files = await self._isolated("files", CheckResult, self._check_files, spec)
        dependencies = await self._isolated("dependencies", CheckResult, self._check_dependencies, spec)
        typecheck = await self._isolated("typecheck", CheckResult, self._check_typecheck, spec)
        lint = await self._isolated("lint", LintResult, self._check_lint, spec)
        assets = await self._isolated("assets", CheckResult, self._check_assets, spec)
        auto_fixed = await self._run_prettier() if self.auto_fix else False

        return ValidationReport(
            framework=spec.framework,
            files=files,
            dependencies=dependencies,
            typecheck=typecheck,
            lint=lint,
            assets=assets,
            auto_fixed=auto_fixed,
        )

    # -- Isolation -------------------------------------------------------------

    async def _isolated(
        self,
        name: str,
        result_type: type[R],
        check: Callable[[FrameworkSpec], Awaitable[R]],
        spec: FrameworkSpec,
    ) -> R:
        try:
            return await check(spec)
        except Exception as exc:  # noqa: BLE001
            print_warning(f"Check '{name}' crashed: {exc}")
            return result_type.crashed(name, exc)

    def _detect(self) -> Framework:
        manifest_path = self.project_dir / "package.json"
        try:
            manifest = load_json(manifest_path)
        except (OSError, json.JSONDecodeError):
            return detect_framework(None)
        return detect_framework(manifest)

    # -- Checks ----------------------------------------------------------------

    async def _check_files(self, spec: FrameworkSpec) -> CheckResult:
        missing = [rel for rel in spec.required_files if not (self.project_dir / rel).exists()]
        if missing:
            print_warning(f"Missing {len(missing)} required file(s)")
            return CheckResult(name="files", success=False, details=missing)
        print_success("All required files present")
        return CheckResult(name="files")

    async def _check_dependencies(self, spec: FrameworkSpec) -> CheckResult:
        node_modules = self.project_dir / "node_modules"
        if not node_modules.is_dir():
            print_warning("Dependencies not installed")
            return CheckResult(
                name="dependencies", success=False, details=["node_modules (run npm install)"]
            )
        missing = [pkg for pkg in spec.critical_packages if not (node_modules / pkg).is_dir()]
        if missing:
            print_warning(f"Missing {len(missing)} dependency(ies)")
            return CheckResult(name="dependencies", success=False, details=missing)
        print_success("All dependencies installed")
        return CheckResult(name="dependencies")

    async def _check_typecheck(self, spec: FrameworkSpec) -> CheckResult:
        tsc = self._local_bin("tsc")
        if tsc is None:
            print_info("TypeScript not installed, skipping check")
            return CheckResult.skip("typecheck", "tsc not found in node_modules/.bin")
        if spec.framework is Framework.SVELTEKIT:
            await self._sync_sveltekit()

        rc, stdout, stderr = await run_command(
            [str(tsc), "--noEmit"],
            cwd=self.project_dir,
            timeout=self.settings.timeouts.typecheck,
        )
        if rc == 0:
            print_success("TypeScript: no errors")
            return CheckResult(name="typecheck")
        if rc == -1:
            print_warning(stderr)
            return CheckResult(name="typecheck", success=False, details=[stderr])

        errors = parse_typecheck_output(f"{stdout}\n{stderr}")
        if not errors:
            print_success("TypeScript: no errors")
            return CheckResult(name="typecheck")
        print_warning(f"TypeScript: {len(errors)} error(s)")
        return CheckResult(name="typecheck", success=False, details=errors)

    async def _sync_sveltekit(self) -> None:
        """Generate ``.svelte-kit/tsconfig.json``, which the project tsconfig extends.

        The manifest's ``prepare`` script normally does this during install;
        a project installed with scripts disabled still needs it before tsc.
        """
        if (self.project_dir / ".svelte-kit" / "tsconfig.json").exists():
            return
        svelte_kit = self._local_bin("svelte-kit")
        if svelte_kit is None:
            return
        rc, _, stderr = await run_command(
            [str(svelte_kit), "sync"],
            cwd=self.project_dir,
            timeout=self.settings.timeouts.typecheck,
        )
        if rc != 0:
            print_warning("svelte-kit sync failed")
            for line in first_lines(stderr):
                console.print(f"  [dim]{line}[/dim]")

    async def _check_lint(self, spec: FrameworkSpec) -> LintResult:
        if not any((self.project_dir / name).exists() for name in ESLINT_CONFIGS):
            print_info("ESLint not configured, skipping check")
            return LintResult(name="lint", skipped=True, details=["no ESLint configuration"])
        eslint = self._local_bin("eslint")
        if eslint is None:
            print_info("ESLint not installed, skipping check")
            return LintResult(name="lint", skipped=True, details=["eslint not found in node_modules/.bin"])

        cmd = [str(eslint), "src", "--ext", ".ts,.tsx"]
        if self.auto_fix:
            cmd.append("--fix")
        cmd.append("--max-warnings=0")
        rc, stdout, stderr = await run_command(
            cmd, cwd=self.project_dir, timeout=self.settings.timeouts.lint
        )
        if rc == 0:
            print_success("ESLint: clean")
            return LintResult(name="lint")
        if rc == -1:
            print_warning(stderr)
            return LintResult(name="lint", success=False, details=[stderr])

        errors, warnings = parse_lint_output(stdout or stderr)
        if errors:
            print_warning(f"ESLint: {len(errors)} error(s), {warnings} warning(s)")
            return LintResult(name="lint", success=False, details=errors, warnings=warnings)
        if warnings:
            print_warning(f"ESLint: {warnings} warning(s)")
        else:
            print_success("ESLint: clean")
        return LintResult(name="lint", warnings=warnings)

    async def _check_assets(self, spec: FrameworkSpec) -> CheckResult:
        warnings: list[str] = []
        assets_dir = self.project_dir / spec.assets_dir
        if assets_dir.is_dir() and any(
            "placeholder" in path.name for path in assets_dir.rglob("*") if path.is_file()
        ):
            warnings.append("Contains placeholder images - consider replacing with real assets")

        public_dir = self.project_dir / spec.public_dir
        if public_dir.is_dir() and not any("favicon" in path.name for path in public_dir.iterdir()):
            warnings.append(f"Missing favicon in {spec.public_dir}/")

        if warnings:
            print_warning(f"{len(warnings)} asset warning(s)")
        else:
            print_success("Assets check passed")
        return CheckResult(name="assets", details=warnings)

    # -- Auto-fix --------------------------------------------------------------

    async def _run_prettier(self) -> bool:
        """Format the sources with Prettier; failures only warn."""
        if not any((self.project_dir / name).exists() for name in PRETTIER_CONFIGS):
            print_info("Prettier not configured, skipping")
            return False
        rc, _, stderr = await run_command(
            ["npx", "--no-install", "prettier", "--write", "src/**/*.{ts,tsx,svelte,css,json}"],
            cwd=self.project_dir,
            timeout=self.settings.timeouts.format,
        )
        if rc != 0:
            print_warning("Could not run Prettier")
            for line in first_lines(stderr):
                console.print(f"  [dim]{line}[/dim]")
            return False
        print_success("Prettier: formatted")
        return True

    # -- Helpers ---------------------------------------------------------------

    def _local_bin(self, tool: str) -> Path | None:
        bin_dir = self.project_dir / "node_modules" / ".bin"
        for candidate in (bin_dir / tool, bin_dir / f"{tool}.cmd"):
            if candidate.exists():
                return candidate
        return None


# ---------------------------------------------------------------------------
# Build check
# ---------------------------------------------------------------------------


async def run_build_check(
    project_dir: str | Path,
    timeout: int = 120,
    settings: Settings | None = None,
) -> BuildResult:
    """Run the project's production build with a bounded timeout.

    Returns:
        A :class:`BuildResult` with up to five error lines on failure.
    """
    settings = settings or Settings()
    with create_progress() as progress:
        progress.add_task("Running production build...", total=None)
        rc, stdout, stderr = await run_command(
            settings.build_command(), cwd=project_dir, timeout=timeout
        )

    if rc == 0:
        print_success("Build completed successfully")
        return BuildResult(success=True)

    errors = _build_error_lines(f"{stdout}\n{stderr}") or first_lines(stderr, BUILD_ERROR_LINES)
    print_warning("Build failed")
    for line in errors:
        console.print(f"  [red]{line}[/red]")
    return BuildResult(success=False, errors=errors)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def _status(check: CheckResult, ok: str) -> tuple[str, str]:
    if check.skipped:
        return "[dim]SKIPPED[/dim]", check.details[0] if check.details else ""
    if check.success:
        return "[green]PASS[/green]", ok
    return "[red]FAIL[/red]", ", ".join(check.details[:3])


def print_validation_summary(report: ValidationReport) -> None:
    """Print the report as a Rich table followed by the overall verdict."""
    table = Table(title="Validation Summary", show_header=True, header_style="bold cyan")
    table.add_column("Check", style="dim", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Details")

    table.add_row("Required files", *_status(report.files, "all present"))
    table.add_row("Dependencies", *_status(report.dependencies, "all installed"))
    table.add_row("TypeScript", *_status(report.typecheck, "no errors"))

    lint_status, lint_detail = _status(report.lint, "clean")
    if report.lint.success and not report.lint.skipped and report.lint.warnings:
        lint_status = "[yellow]WARN[/yellow]"
        lint_detail = f"{report.lint.warnings} warning(s)"
    table.add_row("ESLint", lint_status, lint_detail)

    for warning in report.asset_warnings:
        table.add_row("Assets", "[yellow]WARN[/yellow]", warning)
    if not report.asset_warnings:
        table.add_row("Assets", "[green]PASS[/green]", "")

    console.print()
    console.print(table)
    if report.success:
        print_success("Overall: PASSED")
    else:
        print_warning("Overall: FAILED - see details above")
    console.print()
