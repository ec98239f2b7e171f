"""Core services: timestamp normalization, segment extraction, consistency checks."""

from .focal_colors import DEFAULT_PALETTE, build_focal_color_map
from .segment_extractor import extract_ranges, extract_ranges_by_file
from .time_normalizer import normalize, parse_instant, serial_to_datetime
from .validators import (
    check_consecutive_no_second_timestamps,
    check_marker_balance,
    check_point_sample_intervals,
    run_all_validations,
)

__all__ = [
    "DEFAULT_PALETTE",
    "build_focal_color_map",
    "extract_ranges",
    "extract_ranges_by_file",
    "normalize",
    "parse_instant",
    "serial_to_datetime",
    "check_consecutive_no_second_timestamps",
    "check_point_sample_intervals",
    "check_marker_balance",
    "run_all_validations",
]
