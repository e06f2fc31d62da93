"""Column and row percentage bar charts.

`ggally_colbar` shows, for every category of `x`, the distribution of `y`
(column percentages). `ggally_rowbar` is its transpose: it swaps `x` and `y`,
builds the same chart, then flips the coordinates so that percentages run
horizontally.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import altair as alt
import pandas as pd
from pandas.api import types as ptypes

from propbar.analysis.errors import AestheticError
from propbar.analysis.labels import LabelFormatter, label_percent
from propbar.analysis.layer import build_prop_layer
from propbar.analysis.mapping import Aes, after_stat, as_aes, swap_x_y
from propbar.analysis.positions import position_fill

from .defaults import LABEL_ACCURACY, PERCENT_AXIS_FORMAT, PERCENT_TICKS
from .encoding import facet_channels
from .schema import PercentBarOptions
from .stat_prop import prop_encoding, prop_mark

logger = logging.getLogger(__name__)

PercentBarChart = alt.LayerChart | alt.FacetChart


def _with_categoricals(data: pd.DataFrame, mapping: Aes, aesthetics: Sequence[str]) -> pd.DataFrame:
    """Convert text columns mapped to `aesthetics` into categoricals.

    Levels keep their order of first appearance.
    """

    converted = data
    for name in aesthetics:
        column = mapping.get(name)
        if not isinstance(column, str) or column not in data.columns:
            continue
        values = data[column]
        if isinstance(values.dtype, pd.CategoricalDtype):
            continue
        if ptypes.is_object_dtype(values.dtype) or ptypes.is_string_dtype(values.dtype):
            if converted is data:
                converted = data.copy()
            converted[column] = pd.Categorical(values, categories=list(pd.unique(values.dropna())))
    return converted


def _percent_axis(options: PercentBarOptions) -> alt.Axis:
    if options.remove_percentage_axis:
        return alt.Axis(labels=False, ticks=False, grid=False)
    return alt.Axis(format=PERCENT_AXIS_FORMAT, values=list(PERCENT_TICKS))


def _percent_bar_chart(
    data: pd.DataFrame | Mapping[str, Any],
    mapping: Aes | Mapping[str, Any],
    *,
    label_format: LabelFormatter,
    options: PercentBarOptions,
    geom_bar_args: Mapping[str, Any] | None,
    text_args: Mapping[str, Any],
) -> PercentBarChart:
    mapping = as_aes(mapping)
    if "x" not in mapping:
        raise AestheticError("'x' aesthetic is required.", aesthetic="x")
    if "y" not in mapping:
        raise AestheticError("'y' aesthetic is required.", aesthetic="y")

    # y is shown as fill, proportions are computed within each x
    mapping = mapping.update(fill=mapping["y"], by=mapping["x"]).without("y", "colour")
    if "label" not in mapping:
        mapping = mapping.update(label=after_stat("prop", label_format))

    frame = data if isinstance(data, pd.DataFrame) else pd.DataFrame(data)
    frame = _with_categoricals(frame, mapping, ("x", "fill"))
    layer = build_prop_layer(
        frame,
        mapping,
        position=position_fill(0.5, reverse=options.reverse_fill_levels),
    )

    bar_style = dict(geom_bar_args or {})
    band = bar_style.pop("width", options.bar_width)
    shared = {
        "orientation": options.orientation,
        "reverse_legend": options.reverse_legend,
        "value_axis": _percent_axis(options),
        "value_scale": alt.Scale(domain=list(options.percent_domain), nice=False, zero=False),
        "value_title": None,
        "padding_outer": options.discrete_padding,
        "facets": False,
    }
    bars = prop_mark(alt.Chart(), layer, geom="bar", orientation=options.orientation, band=band, style=bar_style)
    bars = bars.encode(*prop_encoding(layer, geom="bar", **shared))
    texts = prop_mark(alt.Chart(), layer, geom="text", orientation=options.orientation, style=text_args)
    texts = texts.encode(*prop_encoding(layer, geom="text", **shared))

    chart = alt.LayerChart(data=layer.frame, layer=[bars, texts])
    if options.remove_background:
        chart = chart.properties(view=alt.ViewBackground(fill=None, stroke=None))

    logger.debug(
        "Assembled %s percentage bar chart with %d segments.",
        options.orientation,
        len(layer.frame),
    )
    facets = facet_channels(layer)
    if facets:
        return chart.facet(**facets)
    return chart


def ggally_colbar(
    data: pd.DataFrame | Mapping[str, Any],
    mapping: Aes | Mapping[str, Any],
    label_format: LabelFormatter | None = None,
    *,
    remove_background: bool = False,
    remove_percentage_axis: bool = False,
    reverse_fill_levels: bool = False,
    geom_bar_args: Mapping[str, Any] | None = None,
    **text_args: Any,
) -> PercentBarChart:
    """Plot column percentages with stacked bars.

    Each bar is one category of `x`, split by the categories of `y`; labels
    show the share of each `y` category within the bar.

    Args:
        data: Observations.
        mapping: Aesthetic mapping with `x` and `y` (and optionally `weight`,
            `label`, `row`, `column`). A `colour` mapping is ignored.
        label_format: Formatter for the proportions; defaults to percentages
            with one decimal. Ignored when `label` is mapped.
        remove_background: Blank the panel background and drop axis expansion.
        remove_percentage_axis: Remove the percentage (y) axis.
        reverse_fill_levels: Reverse the stacking order and legend of `y`.
        geom_bar_args: Arguments for the bar mark (`width` sets the band width).
        **text_args: Arguments for the text mark (e.g. `size`, `colour`,
            `fontface`).

    Returns:
        A layered Altair chart (faceted when `row`/`column` are mapped).

    Raises:
        AestheticError: When `x` or `y` is missing.
    """

    options = PercentBarOptions(
        orientation="vertical",
        remove_background=remove_background,
        remove_percentage_axis=remove_percentage_axis,
        reverse_fill_levels=reverse_fill_levels,
        reverse_legend=reverse_fill_levels,
    )
    return _percent_bar_chart(
        data,
        mapping,
        label_format=label_format or label_percent(accuracy=LABEL_ACCURACY),
        options=options,
        geom_bar_args=geom_bar_args,
        text_args=text_args,
    )


def ggally_rowbar(
    data: pd.DataFrame | Mapping[str, Any],
    mapping: Aes | Mapping[str, Any],
    label_format: LabelFormatter | None = None,
    *,
    remove_background: bool = False,
    remove_percentage_axis: bool = False,
    reverse_fill_levels: bool = True,
    geom_bar_args: Mapping[str, Any] | None = None,
    **text_args: Any,
) -> PercentBarChart:
    """Plot row percentages with horizontal stacked bars.

    The transpose of `ggally_colbar`: each horizontal bar is one category of
    `y`, split by the categories of `x`. Arguments match `ggally_colbar`;
    `remove_percentage_axis` removes the (horizontal) x axis.
    """

    options = PercentBarOptions(
        orientation="horizontal",
        remove_background=remove_background,
        remove_percentage_axis=remove_percentage_axis,
        reverse_fill_levels=reverse_fill_levels,
        reverse_legend=not reverse_fill_levels,
    )
    return _percent_bar_chart(
        data,
        swap_x_y(mapping),
        label_format=label_format or label_percent(accuracy=LABEL_ACCURACY),
        options=options,
        geom_bar_args=geom_bar_args,
        text_args=text_args,
    )
