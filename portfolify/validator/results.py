"""Validation results for a generated project.

Pydantic v2 models for the outcome of each check and the aggregated
report the CLI prints.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field, field_validator

from portfolify.frameworks import Framework

MAX_DETAILS = 10


# ---------------------------------------------------------------------------
# Per-check results
# ---------------------------------------------------------------------------

class CheckResult(BaseModel):
    """Outcome of one validation check."""

    name: str = Field(..., description="Check name such as 'files' or 'typecheck'")
    success: bool = Field(default=True)
    skipped: bool = Field(default=False, description="The tool needed for the check was unavailable")
    details: list[str] = Field(
        default_factory=list,
        description=f"Diagnostic lines, at most {MAX_DETAILS}",
    )

    @field_validator("details")
    @classmethod
    def _cap_details(cls, value: list[str]) -> list[str]:
        return value[:MAX_DETAILS]

    @classmethod
    def skip(cls, name: str, reason: str) -> "CheckResult":
        return cls(name=name, skipped=True, details=[reason])

    @classmethod
    def crashed(cls, name: str, exc: BaseException) -> "CheckResult":
        """A failed result for a check that raised instead of reporting."""
        return cls(name=name, success=False, details=[f"{type(exc).__name__}: {exc}"])


class LintResult(CheckResult):
    """Lint outcome; warnings are counted but never fail the check."""

    warnings: int = Field(default=0, ge=0)


# ---------------------------------------------------------------------------
# Aggregate report
# ---------------------------------------------------------------------------

class ValidationReport(BaseModel):
    """Every check run against a generated project."""

    framework: Framework = Field(default=Framework.REACT_VITE, description="Detected framework")
    files: CheckResult = Field(default_factory=lambda: CheckResult(name="files"))
    dependencies: CheckResult = Field(default_factory=lambda: CheckResult(name="dependencies"))
    typecheck: CheckResult = Field(default_factory=lambda: CheckResult(name="typecheck"))
    lint: LintResult = Field(default_factory=lambda: LintResult(name="lint"))
    assets: CheckResult = Field(default_factory=lambda: CheckResult(name="assets"))
    auto_fixed: bool = Field(default=False, description="Whether formatting ran in auto-fix mode")
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO-8601 timestamp of when the report was created",
    )

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when files, dependencies, type-check and lint all passed.

        Asset findings are advisory and never affect the verdict.
        """
        return all(
            check.success
            for check in (self.files, self.dependencies, self.typecheck, self.lint)
        )

    @property
    def asset_warnings(self) -> list[str]:
        return list(self.assets.details)


class BuildResult(BaseModel):
    """Outcome of ``npm run build``."""

    success: bool
    errors: list[str] = Field(default_factory=list, description="First error lines of the build output")
