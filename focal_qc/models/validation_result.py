from __future__ import annotations

from dataclasses import dataclass, field

"""Validation result models for the merged-data consistency checks."""

__all__ = [
    "ValidationResult",
    "ValidationThresholds",
    "DEFAULT_THRESHOLDS",
]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single consistency check.

    ``issues`` are blocking problems and decide ``passed``; ``warnings`` are
    informational and never fail a check.
    """
    check: str  # human readable check name
    issues: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return not self.issues

    @staticmethod
    def create(check: str, issues: list[str], warnings: list[str] | None = None) -> ValidationResult:
        return ValidationResult(check=check, issues=tuple(issues), warnings=tuple(warnings or ()))


@dataclass(frozen=True)
class ValidationThresholds:
    """Tunable limits of the timestamp and interval checks.

    Defaults reproduce the field protocol: point samples every 2.5 minutes,
    tolerated between 2 and 3 minutes apart.
    """
    min_run_length: int = 3  # consecutive xx:xx:00 rows that count as a problem
    min_interval_minutes: float = 2.0
    max_interval_minutes: float = 3.0
    expected_average_minutes: float = 2.5
    average_tolerance_minutes: float = 0.5


DEFAULT_THRESHOLDS = ValidationThresholds()
