"""Weighted proportions with a custom denominator, and percentage bar charts.

`stat_prop` computes, for every combination of discrete aesthetics, the sum of
weights (`count`) and its share among all groups sharing the same `by` value
(`prop`). `ggally_colbar` and `ggally_rowbar` build column and row percentage
bar charts on top of it.
"""

from .analysis import (
    Aes,
    AestheticError,
    AfterStat,
    Position,
    PropUsageError,
    StatPropError,
    aes,
    after_stat,
    label_percent,
    percent,
    position_dodge,
    position_fill,
    position_identity,
    position_stack,
    swap_x_y,
)
from .charting import PercentBarOptions, ggally_colbar, ggally_rowbar, stat_prop

__all__ = [
    "Aes",
    "AestheticError",
    "AfterStat",
    "PercentBarOptions",
    "Position",
    "PropUsageError",
    "StatPropError",
    "aes",
    "after_stat",
    "ggally_colbar",
    "ggally_rowbar",
    "label_percent",
    "percent",
    "position_dodge",
    "position_fill",
    "position_identity",
    "position_stack",
    "stat_prop",
    "swap_x_y",
]
