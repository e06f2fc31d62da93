"""Aesthetic mappings between data columns and visual channels.

An `Aes` is an immutable mapping from aesthetic names (`x`, `fill`, `by`, ...)
to one of:

- a column name (`str`) looked up in the data,
- a callable evaluated against the data and returning one value per row,
- an `AfterStat` marker referring to a variable computed by the statistic,
- any other scalar, broadcast to every row (e.g. `by=1`).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

import pandas as pd

from .errors import AestheticError

_ALIASES: Final[dict[str, str]] = {
    "color": "colour",
    "facet_row": "row",
    "facet_col": "column",
}


def _canonical(name: str) -> str:
    return _ALIASES.get(name, name)


@dataclass(frozen=True, slots=True)
class AfterStat:
    """Reference to a variable computed by the statistic.

    Args:
        variable: Computed column name (`count`, `prop`, `width`).
        formatter: Optional callable turning the computed values into labels.
    """

    variable: str
    formatter: Callable[[Sequence[float]], Sequence[str]] | None = None


def after_stat(
    variable: str,
    formatter: Callable[[Sequence[float]], Sequence[str]] | None = None,
) -> AfterStat:
    """Map an aesthetic to a statistic output instead of a data column."""

    return AfterStat(variable=variable, formatter=formatter)


class Aes(Mapping[str, Any]):
    """Immutable aesthetic mapping."""

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, Any] | None = None) -> None:
        normalized: dict[str, Any] = {}
        for name, value in (items or {}).items():
            normalized[_canonical(name)] = value
        self._items = normalized

    def __getitem__(self, name: str) -> Any:
        return self._items[_canonical(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _canonical(name) in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value!r}" for name, value in self._items.items())
        return f"aes({inner})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Aes):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items))

    def update(self, **aesthetics: Any) -> Aes:
        """Return a copy with the given aesthetics added or replaced."""

        merged = dict(self._items)
        for name, value in aesthetics.items():
            merged[_canonical(name)] = value
        return Aes(merged)

    def without(self, *names: str) -> Aes:
        """Return a copy without the given aesthetics (missing names are ignored)."""

        dropped = {_canonical(name) for name in names}
        return Aes({name: value for name, value in self._items.items() if name not in dropped})


def aes(**aesthetics: Any) -> Aes:
    """Build an aesthetic mapping.

    Example:
        `aes(x="Class", fill="Survived", weight="Freq", by="Class")`
    """

    return Aes(aesthetics)


def as_aes(mapping: Aes | Mapping[str, Any] | None) -> Aes:
    """Coerce `None`, a plain dict or an `Aes` into an `Aes`."""

    if mapping is None:
        return Aes()
    if isinstance(mapping, Aes):
        return mapping
    return Aes(mapping)


def swap_x_y(mapping: Aes | Mapping[str, Any] | None) -> Aes:
    """Exchange the `x` and `y` aesthetics of a mapping.

    Missing entries stay missing on the other side, so swapping a mapping with
    only `x` yields a mapping with only `y`.
    """

    mapping = as_aes(mapping)
    swapped = mapping.without("x", "y")
    if "y" in mapping:
        swapped = swapped.update(x=mapping["y"])
    if "x" in mapping:
        swapped = swapped.update(y=mapping["x"])
    return swapped


def evaluate_aesthetics(data: pd.DataFrame, mapping: Aes) -> tuple[pd.DataFrame, dict[str, str]]:
    """Evaluate the non-statistic aesthetics of a mapping against data.

    Args:
        data: Source observations.
        mapping: Aesthetic mapping; `AfterStat` entries are skipped.

    Returns:
        A tuple of (layer table with one column per aesthetic, titles). Titles
        map each aesthetic to the source column name, or to the aesthetic name
        when the value was not a column.

    Raises:
        AestheticError: When a string value does not name a column of `data`.
    """

    columns: dict[str, Any] = {}
    titles: dict[str, str] = {}
    for name, value in mapping.items():
        if isinstance(value, AfterStat):
            titles[name] = value.variable
            continue
        if isinstance(value, str):
            if value not in data.columns:
                raise AestheticError(
                    f"Aesthetic {name!r} refers to unknown column {value!r}.",
                    aesthetic=name,
                )
            columns[name] = data[value].reset_index(drop=True)
            titles[name] = value
        elif callable(value):
            result = value(data)
            columns[name] = pd.Series(result).reset_index(drop=True)
            label = getattr(value, "__name__", "")
            titles[name] = name if not label or label.startswith("<") else label
        else:
            columns[name] = pd.Series(value, index=pd.RangeIndex(len(data)))
            titles[name] = name

    layer = pd.DataFrame(columns, index=pd.RangeIndex(len(data)))
    return layer, titles
