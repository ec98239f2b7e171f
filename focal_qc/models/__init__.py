"""Domain models for the focal-follow quality check tool.

Row sets come in from the workbook reader, ranges and validation results come
out of the core services, and the analysis result aggregates one run.
"""

from .analysis_result import AnalysisResult
from .config_models import AnalysisConfig
from .focal_range import FocalFollowRange
from .issue_record import IssueRecord
from .row_set import CODE_COLUMN, TIMESTAMP_COLUMN, Row, SourceRows
from .validation_result import DEFAULT_THRESHOLDS, ValidationResult, ValidationThresholds

__all__ = [
    # Input models
    "Row",
    "SourceRows",
    "TIMESTAMP_COLUMN",
    "CODE_COLUMN",
    # Configuration
    "AnalysisConfig",
    # Derived models
    "FocalFollowRange",
    "ValidationResult",
    "ValidationThresholds",
    "DEFAULT_THRESHOLDS",
    "AnalysisResult",
    "IssueRecord",
]
