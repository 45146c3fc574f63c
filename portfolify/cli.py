"""Portfolify command-line interface.

Wires argument parsing to the generator, the package-manager install, the
validator and git initialisation, and prints the final summary.

Usage::

    portfolify my-portfolio
    portfolify my-portfolio -y --theme photographer --framework nextjs
    portfolify portfolio --all --skip-install
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, Field, computed_field

from portfolify import __version__
from portfolify.catalog import resolve, theme_keys
from portfolify.config import Settings
from portfolify.frameworks import FRAMEWORKS, Framework, LayoutMode
from portfolify.models import PortfolioConfiguration
from portfolify.prompts import UserAborted, collect_configuration, defaults_for, prompt_project_name
from portfolify.scaffolder import GenerationOptions, ProjectGenerator, TargetExistsError, TemplateSourceError
from portfolify.utils import (
    InvalidProjectNameError,
    best_effort,
    console,
    create_progress,
    ensure_git_repo,
    first_lines,
    print_error,
    print_header,
    print_info,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    validate_project_name,
)
from portfolify.validator import (
    ProjectValidator,
    ValidationReport,
    print_validation_summary,
    run_build_check,
)

DEFAULT_PROJECT_NAME = "my-portfolio"
GIT_COMMIT_MESSAGE = "Initial commit from Portfolify"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ABORTED = 130


# ---------------------------------------------------------------------------
# Batch results
# ---------------------------------------------------------------------------


class BatchItem(BaseModel):
    """Outcome of one project in ``portfolio --all``."""

    name: str
    theme: str
    success: bool
    error: Optional[str] = None


class BatchResult(BaseModel):
    """Per-item tally of a batch run."""

    root: Path
    items: list[BatchItem] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def total(self) -> int:
        return len(self.items)

    @computed_field  # type: ignore[misc]
    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.success)

    @computed_field  # type: ignore[misc]
    @property
    def failed(self) -> int:
        return sum(1 for item in self.items if not item.success)


# ---------------------------------------------------------------------------
# Steps shared by single and batch generation
# ---------------------------------------------------------------------------


def generation_options(args: argparse.Namespace) -> GenerationOptions:
    return GenerationOptions(
        deploy_ready=args.deploy_ready,
        custom_assets=Path(args.custom_assets) if args.custom_assets else None,
    )


async def install_dependencies(project_dir: Path, settings: Settings) -> None:
    """Run the package manager's install in *project_dir*.

    Raises:
        RuntimeError: The install exited non-zero; the message carries the
            first lines of its stderr.
    """
    with create_progress() as progress:
        progress.add_task("Installing packages...", total=None)
        rc, _, stderr = await run_command(
            settings.install_command(), cwd=project_dir, timeout=settings.timeouts.install
        )
    if rc != 0:
        detail = "\n  ".join(first_lines(stderr))
        raise RuntimeError(f"'{' '.join(settings.install_command())}' exited with {rc}\n  {detail}")
    print_success("Dependencies installed")


async def _init_git(project_dir: Path, settings: Settings) -> None:
    if not await ensure_git_repo(project_dir, GIT_COMMIT_MESSAGE, settings.timeouts.git):
        raise RuntimeError("see the git output above")
    print_success("Git repository initialized")


# ---------------------------------------------------------------------------
# Single project
# ---------------------------------------------------------------------------


def _resolve_configuration(args: argparse.Namespace) -> PortfolioConfiguration:
    if args.yes:
        configuration = defaults_for(
            args.theme,
            framework=args.framework or Framework.REACT_VITE,
            layout=args.layout or LayoutMode.SINGLE_PAGE,
        )
        print_info(f"Using default configuration for: {configuration.resolved_theme().name}")
        return configuration

    configuration = collect_configuration()
    updates: dict[str, object] = {}
    if args.framework:
        updates["framework"] = Framework(args.framework)
    if args.layout:
        updates["layout"] = LayoutMode(args.layout)
    return configuration.model_copy(update=updates) if updates else configuration


async def run_generation(args: argparse.Namespace, settings: Settings) -> int:
    """Generate one project as described by *args*; returns the exit code."""
    if getattr(args, "all", False):
        result = await generate_batch(args, settings)
        return EXIT_ERROR if result is None else EXIT_OK

    name = args.name or (DEFAULT_PROJECT_NAME if args.yes else prompt_project_name(DEFAULT_PROJECT_NAME))
    try:
        validate_project_name(name)
    except InvalidProjectNameError as exc:
        print_error(str(exc))
        return EXIT_ERROR

    target = settings.output_dir / name
    if target.exists():
        print_error(f"Directory '{target}' already exists!")
        return EXIT_ERROR

    print_step(1, "Configure your portfolio")
    configuration = _resolve_configuration(args)

    print_step(2, "Generate project files")
    generator = ProjectGenerator(settings)
    try:
        tree = await generator.generate(name, configuration, target, options=generation_options(args))
    except (TargetExistsError, TemplateSourceError) as exc:
        print_error(str(exc))
        return EXIT_ERROR
    except Exception as exc:  # noqa: BLE001
        print_error(f"Generation failed: {exc}")
        if settings.debug:
            console.print_exception()
        return EXIT_ERROR
    print_success(f"Project files created ({len(tree.files)} files)")

    if not args.skip_install:
        print_step(3, "Install dependencies")
        installed = await best_effort(
            "Dependency install", lambda: install_dependencies(target, settings)
        )
        if installed is None:
            print_info(f"You can install them manually: cd {name} && {settings.package_manager} install")

    report: ValidationReport | None = None
    if not args.skip_validation:
        print_step(4, "Validate generated code")
        report = await ProjectValidator(target, auto_fix=args.auto_fix, settings=settings).validate()
        print_validation_summary(report)

    if args.verify_build:
        await run_build_check(target, timeout=settings.timeouts.build, settings=settings)

    if args.git:
        await best_effort("Git initialization", lambda: _init_git(target, settings))

    print_generation_summary(name, configuration, report, args.deploy_ready, settings)
    return EXIT_OK


def print_generation_summary(
    name: str,
    configuration: PortfolioConfiguration,
    report: ValidationReport | None,
    deploy_ready: bool,
    settings: Settings,
) -> None:
    theme = configuration.resolved_theme()
    features = configuration.features.enabled()
    data = {
        "Location": str(settings.output_dir / name),
        "Type": f"{theme.name} {theme.emoji}",
        "Framework": FRAMEWORKS[configuration.framework].display_name,
        "Layout": "Multi-Page" if configuration.layout is LayoutMode.MULTI_PAGE else "Single Page",
        "Features": ", ".join(features) if features else "none",
    }
    if report is not None:
        data["Validation"] = "passed" if report.success else "failed"
    print_summary_table(data, title="Portfolio Generation Complete")

    console.print("[cyan]Next steps:[/cyan]")
    console.print(f"  cd {name}")
    console.print(f"  {settings.package_manager} run dev")
    if deploy_ready:
        console.print("[cyan]Deploy:[/cyan]")
        console.print("  vercel deploy  |  netlify deploy  |  push to GitHub for Pages")
    console.print()


# ---------------------------------------------------------------------------
# Batch mode
# ---------------------------------------------------------------------------


async def generate_batch(args: argparse.Namespace, settings: Settings) -> BatchResult | None:
    """Generate ``portfolio-<theme>`` for every catalog theme.

    Failures are recorded per item and never stop the batch.  Returns
    ``None`` when the batch directory already exists.
    """
    root = settings.batch_path
    if root.exists():
        print_error(f"Directory '{root}' already exists!")
        return None
    root.mkdir(parents=True)

    print_header("Generating all portfolio types", str(root))
    generator = ProjectGenerator(settings)
    options = generation_options(args)
    result = BatchResult(root=root)

    for key in theme_keys():
        theme = resolve(key)
        name = f"portfolio-{key}"
        target = root / name
        print_info(f"Generating {theme.name}...")
        try:
            configuration = defaults_for(
                key,
                framework=args.framework or Framework.REACT_VITE,
                layout=args.layout or LayoutMode.SINGLE_PAGE,
            )
            await generator.generate(name, configuration, target, options=options)
            if not args.skip_install:
                await best_effort(
                    f"{theme.name} install", lambda: install_dependencies(target, settings)
                )
            if not args.skip_validation:
                await ProjectValidator(target, auto_fix=args.auto_fix, settings=settings).validate()
        except Exception as exc:  # noqa: BLE001
            print_error(f"Failed to generate {theme.name}: {exc}")
            result.items.append(BatchItem(name=name, theme=key, success=False, error=str(exc)))
            continue
        print_success(f"{theme.name} generated successfully")
        result.items.append(BatchItem(name=name, theme=key, success=True))

    print_batch_summary(result)
    return result


def print_batch_summary(result: BatchResult) -> None:
    console.print()
    for item in result.items:
        if item.success:
            console.print(f"  [green]OK[/green]   {item.name}")
        else:
            console.print(f"  [red]FAIL[/red] {item.name}: {item.error}")
    print_summary_table(
        {
            "Total": str(result.total),
            "Succeeded": str(result.succeeded),
            "Failed": str(result.failed),
        },
        title="Generation Summary",
    )
    print_info(f"All portfolios generated in: {result.root}")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser(prog: str = "portfolify", batch: bool = False) -> argparse.ArgumentParser:
    """Build the parser for the main command or the ``portfolio`` sub-command."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Portfolify -- generate a portfolio website in seconds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  portfolify my-portfolio\n"
            "  portfolify my-portfolio -y --theme photographer --framework nextjs\n"
            "  portfolify portfolio --all --skip-install\n"
        ),
    )
    parser.add_argument("name", nargs="?", default=None, help="Project (and directory) name")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip prompts and use theme defaults")
    parser.add_argument(
        "-t", "--theme", "--type",
        dest="theme",
        default=None,
        help=f"Portfolio type ({', '.join(theme_keys())}); unknown values use the default",
    )
    parser.add_argument(
        "--framework",
        choices=[fw.value for fw in Framework],
        default=None,
        help="Target framework (default: react-vite)",
    )
    parser.add_argument(
        "--layout",
        choices=[mode.value for mode in LayoutMode],
        default=None,
        help="Section layout (default: single-page)",
    )
    parser.add_argument("--deploy-ready", action="store_true", help="Write Vercel, Netlify and GitHub Pages configs")
    parser.add_argument("--git", action="store_true", help="Initialise a git repository with one commit")
    parser.add_argument("--custom-assets", metavar="PATH", default=None, help="Directory copied into the assets folder")
    parser.add_argument("--skip-validation", action="store_true", help="Do not validate the generated project")
    parser.add_argument("--auto-fix", action="store_true", help="Run ESLint --fix and Prettier during validation")
    parser.add_argument("--skip-install", action="store_true", help="Do not install dependencies")
    parser.add_argument("--verify-build", action="store_true", help="Run the production build after validation")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    if batch:
        parser.add_argument(
            "--all",
            action="store_true",
            help="Generate one project per portfolio type under portfolify-portfolios/",
        )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] == "portfolio":
        return build_parser("portfolify portfolio", batch=True).parse_args(argv[1:])
    return build_parser().parse_args(argv)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for the ``portfolify`` console script."""
    args = parse_args(argv)
    settings = Settings.from_env(
        output_dir=Path(args.output_dir) if args.output_dir else None,
    )

    print_header(f"Portfolify v{__version__}", "Create production-ready portfolio websites")
    try:
        code = asyncio.run(run_generation(args, settings))
    except UserAborted:
        print_warning("Cancelled by user")
        code = EXIT_ABORTED
    sys.exit(code)


if __name__ == "__main__":
    main()
