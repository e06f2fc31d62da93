"""Default styling constants for proportion layers and percentage bar charts."""

from __future__ import annotations

from typing import Final

from propbar.analysis.layer import DEFAULT_LABEL_ACCURACY
from propbar.analysis.proportions import DEFAULT_WIDTH_FACTOR

LABEL_ACCURACY: Final[float] = DEFAULT_LABEL_ACCURACY
BAR_WIDTH: Final[float] = DEFAULT_WIDTH_FACTOR

# Multiplicative expansion of the percentage axis on each side.
PERCENT_EXPANSION: Final[float] = 0.05

# Outer padding of the discrete axis, as a fraction of one category step.
DISCRETE_PADDING_OUTER: Final[float] = 0.1

PERCENT_TICKS: Final[tuple[float, ...]] = (0.0, 0.25, 0.5, 0.75, 1.0)
PERCENT_AXIS_FORMAT: Final[str] = "%"

# Tableau 10.
FILL_PALETTE: Final[tuple[str, ...]] = (
    "#4e79a7",
    "#f28e2b",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc948",
    "#b07aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ac",
)

# Points per millimetre; ggplot-style text sizes are given in mm.
PT_PER_MM: Final[float] = 72.27 / 25.4
