from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.focal_range import FocalFollowRange

"""Stable focal-type -> color assignment.

Types are collected from every range set, sorted alphabetically and mapped to
the palette by position, wrapping around when there are more types than
colors. The same type therefore gets the same color in the merged view and in
each per-file view.
"""

__all__ = [
    "DEFAULT_PALETTE",
    "build_focal_color_map",
]

DEFAULT_PALETTE: tuple[str, ...] = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
    "#14B8A6",
    "#F97316",
    "#06B6D4",
    "#84CC16",
)


def build_focal_color_map(
    *range_sets: Iterable[FocalFollowRange], palette: Sequence[str] = DEFAULT_PALETTE
) -> dict[str, str]:
    """Map every focal type found in ``range_sets`` to a palette color.

    Raises:
        ValueError: palette is empty
    """
    if not palette:
        raise ValueError("palette must contain at least one color")
    focal_types = {r.focal_type for ranges in range_sets for r in ranges}
    return {t: palette[i % len(palette)] for i, t in enumerate(sorted(focal_types))}
