"""Shared pytest fixtures for the Portfolify test suite.

Provides reusable fixtures for:
- Settings pointing at a temporary output directory
- Sample portfolio configurations (minimal and fully featured)
- A fixed generation date for byte-stable output
- Mock subprocess helpers
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from portfolify.config import Settings
from portfolify.frameworks import Framework, LayoutMode
from portfolify.models import (
    Features,
    PortfolioConfiguration,
    Project,
    SeoSettings,
    SocialLinks,
)
from portfolify.prompts import defaults_for
from portfolify.scaffolder import GenerationOptions

FIXED_DATE = date(2024, 3, 15)


# ---------------------------------------------------------------------------
# Settings & directories
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings writing into a per-test output directory."""
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    return Settings(output_dir=output_dir)


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """A project path that does not exist yet."""
    return tmp_path / "my-portfolio"


@pytest.fixture
def fixed_options() -> GenerationOptions:
    """Generation options with a pinned date."""
    return GenerationOptions(today=FIXED_DATE)


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def developer_config() -> PortfolioConfiguration:
    """Non-interactive defaults for the developer theme."""
    return defaults_for("developer")


@pytest.fixture
def full_config() -> PortfolioConfiguration:
    """A configuration that turns on every optional output."""
    return PortfolioConfiguration(
        name="Jane Roe",
        role="Photographer",
        bio="I photograph people and places.",
        skills=["Portraits", "Lightroom", "Portraits", " Film "],
        projects=[
            Project(
                name="City Lights",
                description="Night photography series.",
                tech=["Film", "Darkroom"],
                repo_url="",
                demo_url="https://example.com/city-lights",
            ),
        ],
        social=SocialLinks(
            email="jane@example.com",
            instagram="https://instagram.com/janeroe",
            twitter="https://twitter.com/janeroe/",
        ),
        location="Lisbon",
        theme="photographer",
        color_scheme="ocean-blue",
        features=Features(blog=True, gallery=True, contact_form=True, testimonials=True),
        framework=Framework.REACT_VITE,
        layout=LayoutMode.SINGLE_PAGE,
        seo=SeoSettings(site_url="https://janeroe.photo/", keywords=["photography", "portraits"]),
    )


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
