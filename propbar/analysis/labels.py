"""Label formatters for computed proportions and counts."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

import numpy as np
import pandas as pd

LabelFormatter = Callable[[Iterable[float]], list[str]]


def _decimals(accuracy: float) -> int:
    return max(0, -math.floor(math.log10(accuracy) + 1e-9))


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value)) or value is pd.NA


def label_percent(
    accuracy: float | None = None,
    *,
    scale: float = 100.0,
    prefix: str = "",
    suffix: str = "%",
    big_mark: str = " ",
    decimal_mark: str = ".",
) -> LabelFormatter:
    """Build a formatter rendering proportions as percentages.

    Args:
        accuracy: Rounding step in percentage points (e.g. `0.1` -> `12.3%`,
            `1` -> `12%`). Defaults to whole percentages.
        scale: Multiplier applied before rounding.
        prefix: Text prepended to every label.
        suffix: Text appended to every label.
        big_mark: Thousands separator.
        decimal_mark: Decimal separator.

    Returns:
        A callable mapping numbers to strings; missing values become `""`.

    Raises:
        ValueError: When `accuracy` is not strictly positive.
    """

    if accuracy is None:
        accuracy = 1.0
    if accuracy <= 0:
        raise ValueError("accuracy must be > 0")
    decimals = _decimals(accuracy)

    def formatter(values: Iterable[float]) -> list[str]:
        labels: list[str] = []
        for value in values:
            if _is_missing(value):
                labels.append("")
                continue
            rounded = round(float(value) * scale / accuracy) * accuracy
            text = f"{rounded:,.{decimals}f}"
            text = text.replace(",", "\0").replace(".", decimal_mark).replace("\0", big_mark)
            if text.lstrip("-").strip("0").strip(decimal_mark) == "":
                text = text.lstrip("-")
            labels.append(f"{prefix}{text}{suffix}")
        return labels

    return formatter


def percent(values: Iterable[float], accuracy: float | None = None) -> list[str]:
    """Format proportions as percentages in one call."""

    return label_percent(accuracy)(values)


def format_number(values: Iterable[float]) -> list[str]:
    """Format raw statistic values compactly (`3` rather than `3.0`)."""

    labels: list[str] = []
    for value in values:
        if _is_missing(value):
            labels.append("")
            continue
        number = float(value)
        if np.isfinite(number) and number.is_integer():
            labels.append(str(int(number)))
        else:
            labels.append(f"{number:g}")
    return labels
