"""Unit tests for aesthetic mappings."""

from __future__ import annotations

import pandas as pd
import pytest

from propbar.analysis.errors import AestheticError
from propbar.analysis.mapping import AfterStat, aes, after_stat, as_aes, evaluate_aesthetics, swap_x_y

pytestmark = pytest.mark.unit


def test_aes_normalizes_colour_aliases() -> None:
    """`color` and `colour` address the same aesthetic."""

    mapping = aes(x="a", color="b")

    assert "colour" in mapping
    assert "color" in mapping
    assert mapping["colour"] == "b"
    assert list(mapping) == ["x", "colour"]


def test_aes_update_and_without_return_new_mappings() -> None:
    """Mappings are immutable; edits produce copies."""

    mapping = aes(x="a", y="b")

    updated = mapping.update(fill="c").without("y")

    assert dict(updated) == {"x": "a", "fill": "c"}
    assert dict(mapping) == {"x": "a", "y": "b"}


def test_swap_x_y_exchanges_position_aesthetics() -> None:
    """Swapping keeps every other aesthetic untouched."""

    swapped = swap_x_y(aes(x="smoker", y="sex", weight="n"))

    assert swapped["x"] == "sex"
    assert swapped["y"] == "smoker"
    assert swapped["weight"] == "n"
    assert dict(swap_x_y({"y": "only"})) == {"x": "only"}


def test_as_aes_accepts_none_and_dicts() -> None:
    """Plain dicts and None are coerced into mappings."""

    assert dict(as_aes(None)) == {}
    assert as_aes({"x": "a"}) == aes(x="a")


def test_evaluate_aesthetics_resolves_columns_callables_and_constants() -> None:
    """Columns are looked up, callables evaluated and scalars broadcast."""

    data = pd.DataFrame({"Class": ["1st", "2nd"], "Freq": [3, 4]})
    mapping = aes(
        x="Class",
        weight=lambda df: df["Freq"] * 2,
        by=1,
        label=after_stat("count"),
    )

    layer, titles = evaluate_aesthetics(data, mapping)

    assert list(layer.columns) == ["x", "weight", "by"]
    assert list(layer["x"]) == ["1st", "2nd"]
    assert list(layer["weight"]) == [6, 8]
    assert list(layer["by"]) == [1, 1]
    assert titles == {"x": "Class", "weight": "weight", "by": "by", "label": "count"}


def test_evaluate_aesthetics_rejects_unknown_columns() -> None:
    """A string that names no column is a usage error."""

    data = pd.DataFrame({"a": [1]})

    with pytest.raises(AestheticError, match="unknown column 'missing'") as excinfo:
        evaluate_aesthetics(data, aes(x="missing"))
    assert excinfo.value.aesthetic == "x"


def test_after_stat_keeps_its_formatter() -> None:
    """`after_stat` records the computed variable and an optional formatter."""

    marker = after_stat("prop", str)

    assert marker == AfterStat(variable="prop", formatter=str)
