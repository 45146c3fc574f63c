"""Unit tests for utility functions (portfolify.utils).

Tests cover:
- run_command (success, failure, timeout, missing executable)
- best_effort and ensure_git_repo
- project-name validation
- load_json / dump_json
- Rich output helpers
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from portfolify.utils import (
    InvalidProjectNameError,
    best_effort,
    dump_json,
    ensure_git_repo,
    first_lines,
    load_json,
    name_problems,
    print_debug,
    print_summary_table,
    run_command,
    validate_project_name,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command_list(self):
        returncode, stdout, stderr = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, _, _ = await run_command([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert returncode == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_timeout(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable(self):
        returncode, _, stderr = await run_command(["definitely-not-a-real-binary-xyz"])
        assert returncode == 127
        assert "Could not start" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_mocked_process(self, mock_subprocess):
        proc = mock_subprocess(stdout="  out  ", stderr="err\n", returncode=2)
        with patch("asyncio.create_subprocess_exec", return_value=proc) as create:
            returncode, stdout, stderr = await run_command(["npm", "install"], cwd="/tmp")
        assert (returncode, stdout, stderr) == (2, "out", "err")
        assert create.call_args.kwargs["cwd"] == "/tmp"


# ---------------------------------------------------------------------------
# Best-effort steps
# ---------------------------------------------------------------------------


class TestBestEffort:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def step():
            return 42

        assert await best_effort("answer", step) == 42

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_becomes_warning(self):
        async def step():
            raise RuntimeError("boom")

        with patch("portfolify.utils.print_warning") as warn:
            assert await best_effort("Install", step) is None
        warn.assert_called_once_with("Install failed: boom")


class TestEnsureGitRepo:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_init_add_commit(self, tmp_path: Path):
        runner = AsyncMock(return_value=(0, "", ""))
        with patch("portfolify.utils.run_command", runner):
            assert await ensure_git_repo(tmp_path, "Initial commit") is True
        commands = [call.args[0] for call in runner.call_args_list]
        assert commands == [
            ["git", "init"],
            ["git", "add", "-A"],
            ["git", "commit", "-m", "Initial commit"],
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self, tmp_path: Path):
        runner = AsyncMock(side_effect=[(0, "", ""), (128, "", "fatal: not a repo")])
        with patch("portfolify.utils.run_command", runner), \
             patch("portfolify.utils.print_warning") as warn:
            assert await ensure_git_repo(tmp_path, "msg") is False
        assert runner.call_count == 2
        warn.assert_called_once()


# ---------------------------------------------------------------------------
# Project names
# ---------------------------------------------------------------------------


class TestProjectNames:
    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["my-portfolio", "portfolio-2024", "a.b_c", "@jane/site"])
    def test_valid_names(self, name):
        assert name_problems(name) == []
        assert validate_project_name(name) == name

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name, fragment",
        [
            ("", "length must be greater than zero"),
            (".hidden", "cannot start with a period"),
            ("_private", "cannot start with an underscore"),
            (" padded", "leading or trailing spaces"),
            ("node_modules", "blacklisted"),
            ("fs", "core module"),
            ("a" * 215, "more than 214"),
            ("MyPortfolio", "capital letters"),
            ("hello!", "special characters"),
            ("my portfolio", "URL-friendly"),
        ],
    )
    def test_invalid_names(self, name, fragment):
        problems = name_problems(name)
        assert any(fragment in problem for problem in problems)

    @pytest.mark.unit
    def test_validate_lists_every_problem(self):
        with pytest.raises(InvalidProjectNameError) as exc_info:
            validate_project_name("My Site")
        assert exc_info.value.name == "My Site"
        assert len(exc_info.value.problems) >= 2


# ---------------------------------------------------------------------------
# JSON I/O and output helpers
# ---------------------------------------------------------------------------


class TestJson:
    @pytest.mark.unit
    def test_dump_json_format(self):
        assert dump_json({"b": 1, "a": "é"}) == '{\n  "b": 1,\n  "a": "é"\n}\n'

    @pytest.mark.unit
    def test_load_json_roundtrip(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text(dump_json({"name": "x"}), encoding="utf-8")
        assert load_json(path) == {"name": "x"}

    @pytest.mark.unit
    def test_load_json_non_object_is_empty(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        assert load_json(path) == {}

    @pytest.mark.unit
    def test_load_json_invalid(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)


class TestOutputHelpers:
    @pytest.mark.unit
    def test_first_lines_skips_blank(self):
        assert first_lines("a\n\nb\n  \nc\nd\ne\nf", limit=3) == ["a", "b", "c"]

    @pytest.mark.unit
    def test_print_debug_only_when_enabled(self):
        with patch("portfolify.utils.console") as console:
            print_debug("hidden", False)
            console.print.assert_not_called()
            print_debug("shown", True)
            console.print.assert_called_once()

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("portfolify.utils.console") as console:
            print_summary_table({"Total": "3"}, title="Summary")
        assert console.print.call_count == 2
