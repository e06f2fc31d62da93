"""Assemble a positioned, labelled proportion table for one chart layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from .errors import StatPropError
from .labels import LabelFormatter, format_number, label_percent
from .mapping import Aes, AfterStat, as_aes, evaluate_aesthetics
from .positions import Position, apply_position, as_position
from .proportions import COMPUTED_VARIABLES, compute_prop, panel_keys, validate_prop_data

logger = logging.getLogger(__name__)

DEFAULT_LABEL_ACCURACY = 0.1


@dataclass(frozen=True, slots=True)
class PropLayer:
    """Statistic output ready to be encoded by a renderer.

    Args:
        frame: One row per aesthetic combination with `count`, `prop`,
            `width`, `ymin`, `ymax`, `ylabel` and `label` columns.
        titles: Display title per aesthetic (source column name when mapped
            from a column).
        position: Position adjustment applied to `frame`.
    """

    frame: pd.DataFrame
    titles: Mapping[str, str] = field(default_factory=dict)
    position: Position = field(default_factory=lambda: Position(kind="fill"))

    def has(self, aesthetic: str) -> bool:
        """Return True when `aesthetic` is a column of the computed frame."""

        return aesthetic in self.frame.columns

    def title(self, aesthetic: str) -> str:
        """Return the display title of an aesthetic, defaulting to its name."""

        return self.titles.get(aesthetic, aesthetic)

    def levels(self, aesthetic: str) -> list[Any]:
        """Observed levels of a discrete aesthetic, in category order.

        Categorical columns keep their declared order; other columns are
        sorted. Values are converted to plain Python scalars.
        """

        values = self.frame[aesthetic]
        if isinstance(values.dtype, pd.CategoricalDtype):
            observed = set(values.dropna().unique())
            ordered = [level for level in values.cat.categories if level in observed]
        else:
            ordered = sorted(values.dropna().unique())
        return [level.item() if hasattr(level, "item") else level for level in ordered]


def _resolve_labels(
    frame: pd.DataFrame,
    label: Any,
    default_label: LabelFormatter,
) -> pd.Series:
    if isinstance(label, AfterStat):
        if label.variable not in COMPUTED_VARIABLES:
            raise StatPropError(
                f"Unknown computed variable {label.variable!r}; expected one of {', '.join(COMPUTED_VARIABLES)}."
            )
        formatter = label.formatter or format_number
        return pd.Series(list(formatter(frame[label.variable])), index=frame.index, dtype=object)
    if "label" in frame.columns:
        return frame["label"].astype(str)
    return pd.Series(default_label(frame["prop"]), index=frame.index, dtype=object)


def build_prop_layer(
    data: pd.DataFrame | Mapping[str, Any],
    mapping: Aes | Mapping[str, Any] | None,
    *,
    position: Position | str = "fill",
    width: float | None = None,
    na_rm: bool = False,
    default_label: LabelFormatter | None = None,
) -> PropLayer:
    """Evaluate a mapping against data and compute the proportion statistic.

    Args:
        data: Observations (anything `pandas.DataFrame` accepts).
        mapping: Aesthetic mapping; requires `x` and `by`.
        position: Position adjustment name or object.
        width: Optional bar width passed to `compute_prop`.
        na_rm: Silence the warning about rows removed for missing values.
        default_label: Formatter for `prop` when no `label` is mapped.
            Defaults to percentages with one decimal.

    Returns:
        PropLayer with the computed, positioned and labelled frame.

    Raises:
        StatPropError: When `y` is mapped or `by` is free-form text.
        AestheticError: When required aesthetics are missing or unknown.
    """

    mapping = as_aes(mapping)
    if "y" in mapping:
        raise StatPropError("stat_prop() must not be used with a y aesthetic.")

    frame = data if isinstance(data, pd.DataFrame) else pd.DataFrame(data)
    resolved_position = as_position(position)

    layer, titles = evaluate_aesthetics(frame, mapping)
    validate_prop_data(layer)

    computed = compute_prop(layer, width=width, na_rm=na_rm)
    positioned = apply_position(
        computed,
        resolved_position,
        panel_keys=panel_keys(computed.columns),
    )
    positioned["label"] = _resolve_labels(
        positioned,
        mapping.get("label"),
        default_label or label_percent(accuracy=DEFAULT_LABEL_ACCURACY),
    )

    logger.debug(
        "Built %s proportion layer with %d rows (aesthetics: %s).",
        resolved_position.kind,
        len(positioned),
        ", ".join(layer.columns),
    )
    return PropLayer(frame=positioned, titles=titles, position=resolved_position)
