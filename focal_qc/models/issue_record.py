from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""IssueRecord model for the JSON Lines validation report.

Each issue or warning produced by a consistency check becomes one record. The
record keys are fixed so downstream tooling can rely on the line schema.
"""

__all__ = [
    "IssueRecord",
    "SEVERITY_ISSUE",
    "SEVERITY_WARNING",
]

SEVERITY_ISSUE = "ISSUE"
SEVERITY_WARNING = "WARNING"


@dataclass(frozen=True)
class IssueRecord:
    """Structured report line.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: merged workbook the checks ran against
        check: Name of the check that produced the message
        severity: ISSUE (blocking) or WARNING
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    source: str
    check: str
    severity: str  # ISSUE | WARNING
    message: str

    @staticmethod
    def create(source: str, check: str, severity: str, message: str) -> IssueRecord:
        """Create a new IssueRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(
            timestamp=ts,
            source=source,
            check=check,
            severity=severity,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
