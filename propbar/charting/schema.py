"""Option types for percentage bar charts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .defaults import BAR_WIDTH, DISCRETE_PADDING_OUTER, PERCENT_EXPANSION

Orientation = Literal["vertical", "horizontal"]


@dataclass(frozen=True, slots=True)
class PercentBarOptions:
    """Presentation options shared by column and row percentage bar charts.

    Args:
        orientation: `vertical` puts categories on x and percentages on y;
            `horizontal` is the coordinate flip.
        remove_background: Blank the panel background and drop axis expansion.
        remove_percentage_axis: Hide grid, labels and ticks of the percentage axis.
        reverse_fill_levels: Stack the first fill level at the bottom (or left).
        reverse_legend: List fill levels in reverse order in the legend.
        bar_width: Bar width as a fraction of one category step.
    """

    orientation: Orientation = "vertical"
    remove_background: bool = False
    remove_percentage_axis: bool = False
    reverse_fill_levels: bool = False
    reverse_legend: bool = False
    bar_width: float = BAR_WIDTH

    @property
    def percent_domain(self) -> tuple[float, float]:
        expansion = 0.0 if self.remove_background else PERCENT_EXPANSION
        return (-expansion, 1.0 + expansion)

    @property
    def discrete_padding(self) -> float:
        return 0.0 if self.remove_background else DISCRETE_PADDING_OUTER
