"""Position adjustments for proportion layers.

A position adjustment turns statistic output (one value per group) into
segment extents along the value axis:

- `ymin`/`ymax`: extent of the bar segment.
- `ylabel`: anchor for a text label, `ymin + vjust * (ymax - ymin)`.

Stacking happens within each `x` value (and facet panel). Positive and
negative values are stacked separately.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

import numpy as np
import pandas as pd

PositionKind = Literal["identity", "stack", "fill", "dodge"]

_KINDS: tuple[PositionKind, ...] = ("identity", "stack", "fill", "dodge")


@dataclass(frozen=True, slots=True)
class Position:
    """A position adjustment.

    Args:
        kind: Adjustment type.
        vjust: Relative anchor of text labels within a segment (0 = bottom,
            0.5 = middle, 1 = top).
        reverse: When True, the first group level is stacked at the bottom
            instead of the top.
    """

    kind: PositionKind
    vjust: float = 1.0
    reverse: bool = False

    @property
    def is_stacked(self) -> bool:
        return self.kind in ("stack", "fill")


def position_identity() -> Position:
    return Position(kind="identity")


def position_stack(vjust: float = 1.0, reverse: bool = False) -> Position:
    """Stack overlapping segments on top of each other."""

    return Position(kind="stack", vjust=vjust, reverse=reverse)


def position_fill(vjust: float = 1.0, reverse: bool = False) -> Position:
    """Stack segments and normalize each stack to span [0, 1]."""

    return Position(kind="fill", vjust=vjust, reverse=reverse)


def position_dodge() -> Position:
    """Place segments side by side; the renderer offsets them within a band."""

    return Position(kind="dodge")


def as_position(position: Position | str) -> Position:
    """Resolve a position name (`"fill"`, `"stack"`, ...) into a `Position`.

    Raises:
        ValueError: When the name is not a known position adjustment.
    """

    if isinstance(position, Position):
        return position
    if position not in _KINDS:
        raise ValueError(f"Unknown position {position!r}; expected one of {', '.join(_KINDS)}.")
    return Position(kind=position)


def apply_position(
    frame: pd.DataFrame,
    position: Position,
    *,
    value: str = "count",
    panel_keys: Sequence[str] = (),
) -> pd.DataFrame:
    """Add `ymin`, `ymax` and `ylabel` columns for a position adjustment.

    Args:
        frame: Statistic output; rows must be in group order within each `x`.
        position: Position adjustment to apply.
        value: Column holding segment heights.
        panel_keys: Facet columns; stacks never cross panels.

    Returns:
        A copy of `frame` with position columns added.
    """

    positioned = frame.reset_index(drop=True).copy()
    heights = positioned[value].astype(float).fillna(0.0)

    if not position.is_stacked or positioned.empty:
        positioned["ymin"] = 0.0
        positioned["ymax"] = heights
        positioned["ylabel"] = heights
        return positioned

    stack_keys = [*panel_keys, "x"]
    work = positioned[stack_keys].copy()
    work["_height"] = heights
    work["_negative"] = heights < 0
    ordered = work if position.reverse else work.iloc[::-1]
    ymax = ordered.groupby(
        [*stack_keys, "_negative"], observed=True, sort=False, dropna=False
    )["_height"].cumsum()
    ymax = ymax.reindex(positioned.index)
    ymin = ymax - heights

    if position.kind == "fill":
        totals = (
            heights.abs()
            .groupby([positioned[name] for name in stack_keys], observed=True, sort=False, dropna=False)
            .transform("sum")
        )
        scale = totals.where(totals != 0, np.nan)
        ymin = (ymin / scale).fillna(0.0)
        ymax = (ymax / scale).fillna(0.0)

    positioned["ymin"] = ymin
    positioned["ymax"] = ymax
    positioned["ylabel"] = ymin + position.vjust * (ymax - ymin)
    return positioned
