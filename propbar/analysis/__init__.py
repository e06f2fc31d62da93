"""Pure analysis package for propbar.

This package contains deterministic, testable computations that operate on
in-memory pandas tables and return tables or small dataclasses. It must not
import Altair or build any chart objects.
"""

from .errors import AestheticError, PropUsageError, StatPropError
from .labels import format_number, label_percent, percent
from .layer import PropLayer, build_prop_layer
from .mapping import Aes, AfterStat, aes, after_stat, as_aes, swap_x_y
from .positions import (
    Position,
    as_position,
    position_dodge,
    position_fill,
    position_identity,
    position_stack,
)
from .proportions import compute_prop, resolution, validate_prop_data

__all__ = [
    "Aes",
    "AestheticError",
    "AfterStat",
    "Position",
    "PropLayer",
    "PropUsageError",
    "StatPropError",
    "aes",
    "after_stat",
    "as_aes",
    "as_position",
    "build_prop_layer",
    "compute_prop",
    "format_number",
    "label_percent",
    "percent",
    "position_dodge",
    "position_fill",
    "position_identity",
    "position_stack",
    "resolution",
    "swap_x_y",
    "validate_prop_data",
]
