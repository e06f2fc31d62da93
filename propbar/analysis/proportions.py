"""Weighted proportions with a custom denominator.

`compute_prop` is a variation of a plain count statistic: observations are
counted (summing weights) for every combination of discrete aesthetics, then
each count is divided by the total of all counts sharing the same `by` value.
All proportions for a same value of `by` therefore sum to 1.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from .errors import AestheticError, StatPropError

logger = logging.getLogger(__name__)

REQUIRED_AESTHETICS: Final[tuple[str, ...]] = ("x", "by")
FACET_AESTHETICS: Final[tuple[str, ...]] = ("row", "column")
COMPUTED_VARIABLES: Final[tuple[str, ...]] = ("count", "prop", "width")
DEFAULT_WIDTH_FACTOR: Final[float] = 0.9


def validate_prop_data(layer: pd.DataFrame) -> None:
    """Validate an evaluated layer table before computing proportions.

    Args:
        layer: Layer table with one column per aesthetic.

    Raises:
        StatPropError: When a `y` aesthetic is present, or when `by` holds
            free-form text rather than categories.
        AestheticError: When a required aesthetic is missing.
    """

    if "y" in layer.columns:
        raise StatPropError("stat_prop() must not be used with a y aesthetic.")

    missing = [name for name in REQUIRED_AESTHETICS if name not in layer.columns]
    if missing:
        raise AestheticError(
            f"stat_prop() requires the following missing aesthetics: {', '.join(missing)}",
            aesthetic=missing[0],
        )

    if not is_categorical_like(layer["by"]):
        raise StatPropError("The by aesthetic should be a categorical instead of a string.")


def is_categorical_like(values: pd.Series) -> bool:
    """Return True when `values` can act as a grouping denominator.

    Categorical, numeric and boolean columns qualify; free-form text (object
    or string dtype) does not.
    """

    dtype = values.dtype
    if isinstance(dtype, pd.CategoricalDtype):
        return True
    if ptypes.is_bool_dtype(dtype) or ptypes.is_numeric_dtype(dtype):
        return True
    return not (ptypes.is_object_dtype(dtype) or ptypes.is_string_dtype(dtype))


def resolution(values: pd.Series | Sequence[float], *, zero: bool = True) -> float:
    """Compute the resolution of a position vector.

    The resolution is the smallest non-zero gap between adjacent distinct
    values. Discrete and integer data have a resolution of 1.

    Args:
        values: Position values.
        zero: Whether 0 is considered part of the data.

    Returns:
        The resolution, as a float.
    """

    series = pd.Series(values)
    if isinstance(series.dtype, pd.CategoricalDtype) or not ptypes.is_numeric_dtype(series.dtype):
        return 1.0
    if ptypes.is_integer_dtype(series.dtype) or ptypes.is_bool_dtype(series.dtype):
        return 1.0

    finite = series.dropna().to_numpy(dtype=float)
    if finite.size == 0 or np.ptp(finite) == 0:
        return 1.0
    if zero:
        finite = np.append(finite, 0.0)
    gaps = np.diff(np.unique(finite))
    gaps = gaps[gaps > 0]
    if gaps.size == 0:
        return 1.0
    return float(gaps.min())


def panel_keys(columns: Sequence[str]) -> list[str]:
    """Return the facet columns present in a layer, in a stable order."""

    return [name for name in FACET_AESTHETICS if name in columns]


def compute_prop(
    layer: pd.DataFrame,
    *,
    width: float | None = None,
    na_rm: bool = False,
) -> pd.DataFrame:
    """Count observations per aesthetic combination and normalize by `by`.

    Args:
        layer: Validated layer table (see `validate_prop_data`).
        width: Optional bar width. Defaults to 90% of the resolution of `x`.
        na_rm: When False, log a warning for rows dropped due to missing values.

    Returns:
        One row per observed combination of discrete aesthetics, with the
        aesthetic columns followed by `count`, `prop` and `width`. Rows are in
        category order of the grouping columns.
    """

    layer = layer.copy()
    if "weight" not in layer.columns:
        layer["weight"] = 1
    facets = panel_keys(layer.columns)
    keys = facets + [name for name in layer.columns if name != "weight" and name not in facets]

    complete = layer.dropna(subset=keys + ["weight"])
    removed = len(layer) - len(complete)
    if removed and not na_rm:
        logger.warning("Removed %d rows containing missing values (stat_prop).", removed)

    if width is None:
        width = resolution(complete["x"]) * DEFAULT_WIDTH_FACTOR

    if complete.empty:
        empty = complete[keys].copy()
        empty["count"] = pd.Series(dtype=float)
        empty["prop"] = pd.Series(dtype=float)
        empty["width"] = pd.Series(dtype=float)
        return empty.reset_index(drop=True)

    panel = (
        complete.groupby(keys, observed=True, sort=True, dropna=True)["weight"]
        .sum()
        .reset_index(name="count")
    )
    panel["count"] = panel["count"].astype(float).fillna(0.0)

    denominator_keys = facets + ["by"]
    denominator = (
        panel["count"]
        .abs()
        .groupby([panel[name] for name in denominator_keys], observed=True, sort=False)
        .transform("sum")
    )
    panel["prop"] = panel["count"].div(denominator).where(denominator != 0, 0.0)
    panel["width"] = float(width)

    logger.debug(
        "stat_prop reduced %d observations to %d groups across %d by-values.",
        len(complete),
        len(panel),
        panel["by"].nunique(),
    )
    return panel
