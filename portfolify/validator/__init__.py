"""Portfolify validator -- post-generation project checks.

Checks a generated project for required files, installed dependencies,
TypeScript and ESLint errors and leftover placeholder assets, and runs the
optional production build check.

Public API
----------
.. autoclass:: ProjectValidator
.. autoclass:: ValidationReport
.. autoclass:: CheckResult
.. autoclass:: LintResult
.. autofunction:: run_build_check
"""

from .results import BuildResult, CheckResult, LintResult, ValidationReport
from .validator import (
    ProjectValidator,
    parse_lint_output,
    parse_typecheck_output,
    print_validation_summary,
    run_build_check,
)

__all__ = [
    # Validator
    "ProjectValidator",
    "run_build_check",
    "print_validation_summary",
    # Parsers
    "parse_lint_output",
    "parse_typecheck_output",
    # Results
    "BuildResult",
    "CheckResult",
    "LintResult",
    "ValidationReport",
]
