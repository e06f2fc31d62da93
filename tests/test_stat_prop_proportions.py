"""Unit tests for the weighted proportion statistic."""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import pytest

from propbar.analysis.errors import AestheticError, StatPropError
from propbar.analysis.proportions import compute_prop, resolution, validate_prop_data

pytestmark = pytest.mark.unit


def _layer(**columns: object) -> pd.DataFrame:
    return pd.DataFrame(columns)


def test_compute_prop_splits_counts_within_a_single_by_value() -> None:
    """Three groups sharing one `by` value split the total 1:1:2."""

    layer = _layer(
        x=pd.Categorical(["a", "b", "c", "c"]),
        by=pd.Categorical(["A", "A", "A", "A"]),
    )

    result = compute_prop(layer)

    assert list(result["x"]) == ["a", "b", "c"]
    assert list(result["count"]) == [1.0, 1.0, 2.0]
    assert list(result["prop"]) == pytest.approx([0.25, 0.25, 0.5])


def test_compute_prop_sums_to_one_for_every_by_value(titanic: pd.DataFrame) -> None:
    """Proportions within each denominator group add up to 1."""

    layer = _layer(x=titanic["Class"], fill=titanic["Survived"], by=titanic["Class"], weight=titanic["Freq"])

    result = compute_prop(layer)

    totals = result.groupby("by", observed=True)["prop"].sum()
    assert list(totals) == pytest.approx([1.0, 1.0, 1.0])
    first_class = result[result["x"] == "1st"]
    assert list(first_class["count"]) == [122.0, 203.0]
    assert list(first_class["prop"]) == pytest.approx([122 / 325, 203 / 325])


def test_compute_prop_defaults_weights_to_one() -> None:
    """Without a weight column, `prop` is the share of rows."""

    layer = _layer(
        x=pd.Categorical(["a", "a", "b", "b", "b"]),
        fill=pd.Categorical(["u", "v", "u", "u", "v"]),
        by=pd.Categorical(["a", "a", "b", "b", "b"]),
    )

    result = compute_prop(layer)

    assert list(result["count"]) == [1.0, 1.0, 2.0, 1.0]
    assert list(result["prop"]) == pytest.approx([0.5, 0.5, 2 / 3, 1 / 3])


def test_compute_prop_normalizes_over_a_constant_denominator() -> None:
    """`by=1` makes every proportion relative to the grand total."""

    layer = _layer(x=pd.Categorical(["a", "b", "b", "c"]), by=[1, 1, 1, 1])

    result = compute_prop(layer)

    assert list(result["prop"]) == pytest.approx([0.25, 0.5, 0.25])


def test_compute_prop_zero_weights_normalize_to_zero() -> None:
    """A `by` value whose counts are all zero yields zero proportions, not NaN."""

    layer = _layer(
        x=pd.Categorical(["a", "a", "b"]),
        fill=pd.Categorical(["u", "v", "u"]),
        by=pd.Categorical(["a", "a", "b"]),
        weight=[0.0, 0.0, 3.0],
    )

    result = compute_prop(layer)

    assert list(result["prop"]) == [0.0, 0.0, 1.0]
    assert not result["prop"].isna().any()


def test_compute_prop_uses_absolute_counts_in_the_denominator() -> None:
    """Negative weights contribute their magnitude to the denominator."""

    layer = _layer(
        x=pd.Categorical(["a", "b"]),
        by=pd.Categorical(["g", "g"]),
        weight=[-1.0, 3.0],
    )

    result = compute_prop(layer)

    assert list(result["prop"]) == pytest.approx([-0.25, 0.75])


def test_compute_prop_normalizes_within_each_facet_panel() -> None:
    """Facet variables split the denominator per panel."""

    layer = _layer(
        x=pd.Categorical(["a", "b", "a", "a"]),
        by=[1, 1, 1, 1],
        column=pd.Categorical(["left", "left", "right", "right"]),
    )

    result = compute_prop(layer)

    assert list(result["column"]) == ["left", "left", "right"]
    assert list(result["prop"]) == pytest.approx([0.5, 0.5, 1.0])


def test_compute_prop_drops_missing_rows_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    """Rows with missing aesthetics or weights are removed and reported."""

    layer = _layer(
        x=pd.Categorical(["a", None, "b", "b"]),
        by=[1, 1, 1, 1],
        weight=[1.0, 1.0, np.nan, 3.0],
    )

    with caplog.at_level(logging.WARNING, logger="propbar.analysis.proportions"):
        result = compute_prop(layer)

    assert list(result["count"]) == [1.0, 3.0]
    assert "Removed 2 rows" in caplog.text


def test_compute_prop_na_rm_silences_the_missing_value_warning(caplog: pytest.LogCaptureFixture) -> None:
    """`na_rm=True` removes rows silently."""

    layer = _layer(x=pd.Categorical(["a", None]), by=[1, 1])

    with caplog.at_level(logging.WARNING, logger="propbar.analysis.proportions"):
        result = compute_prop(layer, na_rm=True)

    assert len(result) == 1
    assert caplog.text == ""


def test_compute_prop_adds_default_and_explicit_width() -> None:
    """Width defaults to 90% of the x resolution."""

    layer = _layer(x=pd.Categorical(["a", "b"]), by=[1, 1])

    assert list(compute_prop(layer)["width"]) == pytest.approx([0.9, 0.9])
    assert list(compute_prop(layer, width=0.5)["width"]) == [0.5, 0.5]


def test_compute_prop_handles_empty_input() -> None:
    """An empty table yields an empty result with the computed columns."""

    layer = _layer(x=pd.Categorical([]), by=pd.Categorical([]))

    result = compute_prop(layer)

    assert result.empty
    assert {"count", "prop", "width"} <= set(result.columns)


def test_validate_prop_data_rejects_a_y_aesthetic() -> None:
    """A mapped `y` conflicts with the computed value axis."""

    layer = _layer(x=pd.Categorical(["a"]), by=[1], y=[3])

    with pytest.raises(StatPropError, match="must not be used with a y aesthetic"):
        validate_prop_data(layer)


def test_validate_prop_data_rejects_text_by() -> None:
    """Free-form text is not a valid denominator."""

    layer = _layer(x=pd.Categorical(["a"]), by=["a"])

    with pytest.raises(StatPropError, match="should be a categorical"):
        validate_prop_data(layer)


def test_validate_prop_data_requires_x_and_by() -> None:
    """Missing required aesthetics are reported by name."""

    with pytest.raises(AestheticError, match="missing aesthetics: by"):
        validate_prop_data(_layer(x=pd.Categorical(["a"])))


def test_validate_prop_data_accepts_categorical_numeric_and_boolean_by() -> None:
    """Categorical, numeric and boolean columns are valid denominators."""

    for by in (pd.Categorical(["a"]), [1], [True]):
        validate_prop_data(_layer(x=pd.Categorical(["a"]), by=by))


def test_resolution_of_discrete_integer_and_float_positions() -> None:
    """Discrete and integer data have unit resolution; floats use the smallest gap."""

    assert resolution(pd.Series(pd.Categorical(["a", "b"]))) == 1.0
    assert resolution(pd.Series([1, 5, 9])) == 1.0
    assert resolution(pd.Series([0.5, 1.0, 2.0])) == pytest.approx(0.5)
    assert resolution(pd.Series([2.5, 2.5])) == 1.0
