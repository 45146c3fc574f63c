"""Portfolify runtime settings.

Typed settings shared by the generator, the validator and the CLI.  The
template directory is injected here (defaulting to the templates shipped
inside the package) instead of being searched for at generation time.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates"

_TRUTHY = {"1", "true", "yes", "on"}


class TimeoutConfig(BaseModel):
    """Wall-clock limits, in seconds, for external tools.

    ``None`` means wait indefinitely.
    """

    install: int | None = Field(default=None, description="Package manager install")
    typecheck: int = Field(default=120, ge=1)
    lint: int = Field(default=120, ge=1)
    format: int = Field(default=60, ge=1)
    build: int = Field(default=120, ge=1)
    git: int = Field(default=30, ge=1)


class Settings(BaseModel):
    """Global Portfolify settings.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the generator and the validator.
    """

    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    debug: bool = Field(default=False)
    package_manager: str = Field(default="npm")
    batch_dir_name: str = Field(default="portfolify-portfolios")
    output_dir: Path = Field(default=Path("."))
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def batch_path(self) -> Path:
        """Parent directory used by ``portfolify portfolio --all``."""
        return self.output_dir / self.batch_dir_name

    def install_command(self) -> list[str]:
        return [self.package_manager, "install"]

    def build_command(self) -> list[str]:
        return [self.package_manager, "run", "build"]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: object) -> "Settings":
        """Build ``Settings`` from the environment.

        Only ``DEBUG`` is recognised (``true``/``1`` enables debug output).
        Keyword arguments override the resulting fields.
        """
        debug = os.environ.get("DEBUG", "").strip().lower() in _TRUTHY
        values: dict[str, object] = {"debug": debug}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
