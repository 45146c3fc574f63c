"""Tests for portfolify.validator.

Projects are laid out by hand in ``tmp_path``; every external tool call
goes through a patched ``run_command``.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from portfolify.config import Settings
from portfolify.frameworks import FRAMEWORKS, Framework
from portfolify.validator import (
    CheckResult,
    LintResult,
    ProjectValidator,
    ValidationReport,
    parse_lint_output,
    parse_typecheck_output,
    print_validation_summary,
    run_build_check,
)

pytestmark = pytest.mark.unit

RUN_COMMAND = "portfolify.validator.validator.run_command"


def _make_project(
    root: Path,
    framework: Framework = Framework.REACT_VITE,
    *,
    installed: bool = True,
    bins: tuple[str, ...] = (),
) -> Path:
    """Lay out a minimal but complete project for *framework*."""
    spec = FRAMEWORKS[framework]
    manifest: dict = {"name": "site", "dependencies": {}, "devDependencies": {}}
    if framework is Framework.NEXTJS:
        manifest["dependencies"]["next"] = "^14.0.0"
    if framework is Framework.SVELTEKIT:
        manifest["devDependencies"]["@sveltejs/kit"] = "^2.0.0"

    for relative in spec.required_files:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    (root / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    (root / spec.public_dir).mkdir(exist_ok=True)
    (root / spec.public_dir / "favicon.svg").write_text("<svg/>", encoding="utf-8")

    if installed:
        for package in spec.critical_packages:
            (root / "node_modules" / package).mkdir(parents=True)
        (root / "node_modules" / ".bin").mkdir()
        for tool in bins:
            (root / "node_modules" / ".bin" / tool).write_text("", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Output parsers
# ---------------------------------------------------------------------------


class TestParsers:
    def test_typecheck_lines(self):
        output = "\n".join(
            [
                "src/App.tsx(3,7): error TS2322: Type 'string' is not assignable.",
                "some unrelated line",
                "src/main.tsx:1:1 - error TS2307: Cannot find module.",
                "vite.config.ts: error reading file",
            ]
        )
        errors = parse_typecheck_output(output)
        assert len(errors) == 3
        assert errors[0].startswith("src/App.tsx(3,7)")

    def test_typecheck_caps_at_ten(self):
        output = "\n".join(f"a.ts({i},1): error TS1000: bad" for i in range(25))
        assert len(parse_typecheck_output(output)) == 10

    def test_lint_summary_is_authoritative_for_warnings(self):
        output = "\n".join(
            [
                "/app/src/App.tsx",
                "  3:7  warning  'x' is assigned a value but never used  no-unused-vars",
                "",
                "✖ 5 problems (0 errors, 5 warnings)",
            ]
        )
        errors, warnings = parse_lint_output(output)
        assert errors == []
        assert warnings == 5

    def test_lint_errors(self):
        output = "\n".join(
            [
                "  1:1  error  Unexpected var  no-var",
                "  2:1  error  Missing semicolon  semi",
                "  4:1  warning  Unexpected console  no-console",
                "✖ 3 problems (2 errors, 1 warning)",
            ]
        )
        errors, warnings = parse_lint_output(output)
        assert len(errors) == 2
        assert warnings == 1

    def test_lint_without_summary_counts_lines(self):
        errors, warnings = parse_lint_output("  1:1  warning  a\n  2:1  warning  b\n")
        assert errors == []
        assert warnings == 2

    def test_stylish_output_with_fixable_footer(self):
        output = "\n".join(
            [
                "",
                "/app/src/lib/error-utils.ts",
                "  3:7  warning  'x' is assigned a value but never used  @typescript-eslint/no-unused-vars",
                "",
                "✖ 1 problem (0 errors, 1 warning)",
                "  0 errors and 1 warning potentially fixable with the `--fix` option.",
                "",
            ]
        )
        errors, warnings = parse_lint_output(output)
        assert errors == []
        assert warnings == 1

    def test_summary_overrides_counted_warning_lines(self):
        output = "\n".join(
            [
                "/app/src/App.tsx",
                "  1:1  error    Unexpected var          no-var",
                "  2:9  warning  Unexpected console      no-console",
                "  5:3  error    Missing semicolon       semi",
                "  8:1  warning  Unexpected any          @typescript-eslint/no-explicit-any",
                "",
                "✖ 7 problems (2 errors, 5 warnings)",
            ]
        )
        errors, warnings = parse_lint_output(output)
        assert warnings == 5
        assert len(errors) == 2

    def test_summary_errors_without_message_lines(self):
        errors, warnings = parse_lint_output("✖ 2 problems (1 error, 1 warning)\n")
        assert errors == ["2 problems (1 error, 1 warning)"]
        assert warnings == 1


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class TestResults:
    def test_details_are_capped(self):
        result = CheckResult(name="x", details=[str(i) for i in range(30)])
        assert len(result.details) == 10

    def test_crashed(self):
        result = LintResult.crashed("lint", RuntimeError("boom"))
        assert isinstance(result, LintResult)
        assert not result.success
        assert result.details == ["RuntimeError: boom"]

    def test_skipped_check_does_not_fail_report(self):
        report = ValidationReport(typecheck=CheckResult.skip("typecheck", "no tsc"))
        assert report.success

    def test_assets_never_fail_report(self):
        report = ValidationReport(assets=CheckResult(name="assets", success=False, details=["x"]))
        assert report.success
        assert report.asset_warnings == ["x"]

    def test_success_is_serialised(self):
        report = ValidationReport(files=CheckResult(name="files", success=False))
        assert report.model_dump()["success"] is False


# ---------------------------------------------------------------------------
# ProjectValidator
# ---------------------------------------------------------------------------


class TestProjectValidator:
    @pytest.mark.parametrize("framework", list(Framework))
    async def test_detects_framework(self, tmp_path, framework):
        project = _make_project(tmp_path / "site", framework)
        report = await ProjectValidator(project).validate()
        assert report.framework is framework
        assert report.files.success

    async def test_unreadable_manifest_defaults_to_react(self, tmp_path):
        project = tmp_path / "site"
        project.mkdir()
        (project / "package.json").write_text("{not json", encoding="utf-8")
        report = await ProjectValidator(project).validate()
        assert report.framework is Framework.REACT_VITE

    async def test_complete_project_passes(self, tmp_path):
        project = _make_project(tmp_path / "site")
        report = await ProjectValidator(project).validate()

        assert report.success
        assert report.typecheck.skipped
        assert report.lint.skipped
        assert report.asset_warnings == []

    async def test_missing_files_are_listed(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("tsc", "eslint"))
        (project / ".eslintrc.json").write_text("{}", encoding="utf-8")
        (project / "vite.config.ts").unlink()
        (project / "src" / "App.tsx").unlink()

        async def fake_run(cmd, cwd=None, timeout=None):
            if cmd[0].endswith("tsc"):
                return (2, "src/main.tsx(1,1): error TS2307: Cannot find module './App'.", "")
            return (1, "  2:1  warning  Unexpected console  no-console\n✖ 1 problem (0 errors, 1 warning)\n", "")

        with patch(RUN_COMMAND, AsyncMock(side_effect=fake_run)) as run:
            report = await ProjectValidator(project).validate()

        tools = [Path(call.args[0][0]).name for call in run.call_args_list]
        assert tools == ["tsc", "eslint"]
        assert not report.files.success
        assert report.files.details == ["vite.config.ts", "src/App.tsx"]
        assert report.dependencies.success
        assert report.typecheck.details == ["src/main.tsx(1,1): error TS2307: Cannot find module './App'."]
        assert report.lint.success
        assert report.lint.warnings == 1
        assert not report.success

    async def test_dependencies_not_installed(self, tmp_path):
        project = _make_project(tmp_path / "site", installed=False)
        report = await ProjectValidator(project).validate()

        assert not report.dependencies.success
        assert report.dependencies.details == ["node_modules (run npm install)"]
        assert not report.success

    async def test_missing_critical_package(self, tmp_path):
        project = _make_project(tmp_path / "site", Framework.NEXTJS)
        (project / "node_modules" / "next").rmdir()

        report = await ProjectValidator(project).validate()

        assert report.dependencies.details == ["next"]

    async def test_typecheck_errors(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("tsc",))
        output = "src/App.tsx(1,7): error TS2322: Type 'number' is not assignable to type 'string'.\n"

        with patch(RUN_COMMAND, AsyncMock(return_value=(2, output, ""))) as run:
            report = await ProjectValidator(project).validate()

        cmd = run.call_args.args[0]
        assert cmd[0].endswith("tsc")
        assert cmd[1:] == ["--noEmit"]
        assert not report.typecheck.success
        assert report.typecheck.details[0].startswith("src/App.tsx(1,7)")
        assert not report.success

    async def test_typecheck_timeout(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("tsc",))
        with patch(RUN_COMMAND, AsyncMock(return_value=(-1, "", "Command timed out after 120s"))):
            report = await ProjectValidator(project).validate()
        assert report.typecheck.details == ["Command timed out after 120s"]

    async def test_lint_skipped_without_config(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("eslint",))
        with patch(RUN_COMMAND, AsyncMock(return_value=(0, "", ""))) as run:
            report = await ProjectValidator(project).validate()

        assert report.lint.skipped
        run.assert_not_called()

    async def test_lint_warnings_do_not_fail(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("eslint",))
        (project / ".eslintrc.json").write_text("{}", encoding="utf-8")
        output = "  3:7  warning  unused  no-unused-vars\n✖ 1 problem (0 errors, 1 warning)\n"

        with patch(RUN_COMMAND, AsyncMock(return_value=(1, output, ""))) as run:
            report = await ProjectValidator(project).validate()

        assert run.call_args.args[0][1:] == ["src", "--ext", ".ts,.tsx", "--max-warnings=0"]
        assert report.lint.success
        assert report.lint.warnings == 1
        assert report.success

    async def test_lint_errors_fail(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("eslint",))
        (project / ".eslintrc.json").write_text("{}", encoding="utf-8")
        output = "  1:1  error  Unexpected var  no-var\n✖ 1 problem (1 error, 0 warnings)\n"

        with patch(RUN_COMMAND, AsyncMock(return_value=(1, output, ""))):
            report = await ProjectValidator(project).validate()

        assert not report.lint.success
        assert report.lint.details == ["1:1  error  Unexpected var  no-var"]

    async def test_warnings_only_lint_run_passes(self, tmp_path):
        project = _make_project(tmp_path / "site", bins=("eslint",))
        (project / ".eslintrc.json").write_text("{}", encoding="utf-8")
        output = "\n".join(
            [
                "/app/src/lib/error-utils.ts",
                "  3:7  warning  'x' is assigned a value but never used  no-unused-vars",
                "",
                "✖ 1 problem (0 errors, 1 warning)",
                "  0 errors and 1 warning potentially fixable with the `--fix` option.",
            ]
        )

        with patch(RUN_COMMAND, AsyncMock(return_value=(1, output, ""))):
            report = await ProjectValidator(project).validate()

        assert report.lint.success
        assert report.lint.details == []
        assert report.lint.warnings == 1
        assert report.success

    async def test_sveltekit_syncs_before_typecheck(self, tmp_path):
        project = _make_project(tmp_path / "site", Framework.SVELTEKIT, bins=("svelte-kit", "tsc"))

        with patch(RUN_COMMAND, AsyncMock(return_value=(0, "", ""))) as run:
            report = await ProjectValidator(project).validate()

        commands = [call.args[0] for call in run.call_args_list]
        assert commands[0][0].endswith("svelte-kit")
        assert commands[0][1:] == ["sync"]
        assert commands[1][0].endswith("tsc")
        assert report.typecheck.success and not report.typecheck.skipped

    async def test_sveltekit_already_synced(self, tmp_path):
        project = _make_project(tmp_path / "site", Framework.SVELTEKIT, bins=("svelte-kit", "tsc"))
        (project / ".svelte-kit").mkdir()
        (project / ".svelte-kit" / "tsconfig.json").write_text("{}", encoding="utf-8")

        with patch(RUN_COMMAND, AsyncMock(return_value=(0, "", ""))) as run:
            await ProjectValidator(project).validate()

        assert [Path(call.args[0][0]).name for call in run.call_args_list] == ["tsc"]

    async def test_crashing_check_does_not_stop_the_others(self, tmp_path):
        project = _make_project(tmp_path / "site")
        (project / "src" / "main.tsx").unlink()

        with patch.object(
            ProjectValidator, "_check_dependencies", AsyncMock(side_effect=PermissionError("denied"))
        ):
            report = await ProjectValidator(project).validate()

        assert report.dependencies.details == ["PermissionError: denied"]
        assert report.files.details == ["src/main.tsx"]
        assert report.assets.success

    async def test_asset_warnings(self, tmp_path):
        project = _make_project(tmp_path / "site")
        (project / "public" / "favicon.svg").unlink()
        gallery = project / "src" / "assets" / "gallery"
        gallery.mkdir(parents=True)
        (gallery / "placeholder-1.svg").write_text("<svg/>", encoding="utf-8")

        report = await ProjectValidator(project).validate()

        assert report.asset_warnings == [
            "Contains placeholder images - consider replacing with real assets",
            "Missing favicon in public/",
        ]
        assert report.success

    async def test_auto_fix_runs_prettier(self, tmp_path):
        project = _make_project(tmp_path / "site")
        (project / ".prettierrc").write_text("{}", encoding="utf-8")

        with patch(RUN_COMMAND, AsyncMock(return_value=(0, "", ""))) as run:
            report = await ProjectValidator(project, auto_fix=True).validate()

        assert report.auto_fixed
        cmd = run.call_args.args[0]
        assert cmd[:4] == ["npx", "--no-install", "prettier", "--write"]

    async def test_prettier_failure_is_reported(self, tmp_path):
        project = _make_project(tmp_path / "site")
        (project / ".prettierrc").write_text("{}", encoding="utf-8")

        with patch(RUN_COMMAND, AsyncMock(return_value=(1, "", "npx: command not found"))):
            report = await ProjectValidator(project, auto_fix=True).validate()

        assert not report.auto_fixed
        assert report.success

    def test_summary_prints(self, tmp_path):
        report = ValidationReport(
            lint=LintResult(name="lint", warnings=2),
            assets=CheckResult(name="assets", details=["Missing favicon in public/"]),
        )
        with patch("portfolify.validator.validator.print_success") as ok:
            print_validation_summary(report)
        ok.assert_called_once_with("Overall: PASSED")


# ---------------------------------------------------------------------------
# Build check
# ---------------------------------------------------------------------------


class TestBuildCheck:
    async def test_success(self, tmp_path):
        with patch(RUN_COMMAND, AsyncMock(return_value=(0, "built in 2s", ""))) as run:
            result = await run_build_check(tmp_path, settings=Settings(package_manager="pnpm"))

        assert result.success
        assert result.errors == []
        assert run.call_args.args[0] == ["pnpm", "run", "build"]
        assert run.call_args.kwargs["timeout"] == 120

    async def test_failure_keeps_five_error_lines(self, tmp_path):
        stdout = "\n".join(f"Error: module {i} not found" for i in range(9))

        with patch(RUN_COMMAND, AsyncMock(return_value=(1, stdout, "Build failed"))):
            result = await run_build_check(tmp_path, timeout=30)

        assert not result.success
        assert len(result.errors) == 5
        assert result.errors[0] == "Error: module 0 not found"

    async def test_failure_without_error_lines_uses_stderr(self, tmp_path):
        with patch(RUN_COMMAND, AsyncMock(return_value=(1, "", "Killed\nout of memory"))):
            result = await run_build_check(tmp_path)

        assert result.errors == ["Killed", "out of memory"]
