"""Proportion stat layer for Altair charts.

`stat_prop` is a variation of a count layer computing custom proportions
according to the `by` aesthetic, which defines the denominator: all
proportions for a same value of `by` sum to 1. The `by` aesthetic should be
categorical.

Computed variables available through `after_stat`:

- `count`: number of observations (sum of weights) in the group.
- `prop`: computed proportion.
- `width`: bar width.

Example:
    ```python
    stat_prop(titanic, aes(x="Class", fill="Survived", weight="Freq", by="Class"))
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

import altair as alt
import pandas as pd

from propbar.analysis.errors import StatPropError
from propbar.analysis.layer import PropLayer, build_prop_layer
from propbar.analysis.mapping import Aes
from propbar.analysis.positions import Position

from .defaults import BAR_WIDTH
from .encoding import (
    axis_channels,
    discrete_channel,
    facet_channels,
    fill_channel,
    tooltip_channel,
    value_channels,
)
from .marks import translate_mark_style
from .schema import Orientation

logger = logging.getLogger(__name__)

Geom = Literal["bar", "text", "point"]


def prop_mark(
    chart: alt.Chart,
    layer: PropLayer,
    *,
    geom: Geom,
    orientation: Orientation,
    band: float = BAR_WIDTH,
    style: Mapping[str, Any] | None = None,
) -> alt.Chart:
    """Set the mark of a proportion layer.

    Text marks are centred on their anchor for stacked positions and sit just
    past the end of the bar otherwise.

    Raises:
        ValueError: When `geom` is not `bar`, `text` or `point`.
    """

    if geom == "bar":
        return chart.mark_bar(width=alt.RelativeBandSize(band), **translate_mark_style(style, kind="bar"))
    if geom == "text":
        if layer.position.is_stacked:
            placement: dict[str, Any] = {"align": "center", "baseline": "middle"}
        elif orientation == "vertical":
            placement = {"align": "center", "baseline": "bottom"}
        else:
            placement = {"align": "left", "baseline": "middle"}
        placement.update(translate_mark_style(style, kind="text"))
        return chart.mark_text(**placement)
    if geom == "point":
        return chart.mark_point(**translate_mark_style(style, kind="point"))
    raise ValueError(f"Unsupported geom {geom!r}; expected 'bar', 'text' or 'point'.")


def prop_encoding(
    layer: PropLayer,
    *,
    geom: Geom,
    orientation: Orientation,
    show_legend: bool = True,
    reverse_legend: bool = False,
    value_axis: Any = alt.Undefined,
    value_scale: Any = alt.Undefined,
    value_title: Any = alt.Undefined,
    padding_outer: float | None = None,
    facets: bool = True,
) -> list[Any]:
    """Build the channels of a proportion layer.

    Args:
        layer: Positioned proportion layer.
        geom: Mark type; bars encode the full segment extent, other marks the
            label anchor.
        orientation: `vertical` or `horizontal`.
        show_legend: Whether the fill legend is displayed.
        reverse_legend: List fill levels in reverse order.
        value_axis: Optional axis for the value channel.
        value_scale: Optional scale for the value channel.
        value_title: Optional title for the value axis.
        padding_outer: Outer padding of the discrete axis.
        facets: Encode `row`/`column` facets on the layer itself. Layered
            charts facet the whole layer instead.

    Returns:
        Channel objects for `Chart.encode`.
    """

    channels: list[Any] = [discrete_channel(layer, orientation, padding_outer=padding_outer)]
    channels += value_channels(
        layer,
        orientation,
        field="ymin" if geom == "bar" else "ylabel",
        axis=value_axis,
        scale=value_scale,
        title=value_title,
        extent=geom == "bar",
    )

    if layer.has("fill") and geom != "text":
        channels.append(fill_channel(layer, reverse_legend=reverse_legend, show_legend=show_legend))
    if layer.has("colour"):
        channels.append(alt.Stroke(field="colour", type="nominal", title=layer.title("colour")))
    if geom == "text":
        channels.append(alt.Text(field="label", type="nominal"))
    if layer.position.kind == "dodge":
        dodge_by = "fill" if layer.has("fill") else "by"
        channels.append(axis_channels(orientation).offset(field=dodge_by, type="nominal", sort=layer.levels(dodge_by)))
    channels.append(tooltip_channel(layer))

    if facets:
        channels += list(facet_channels(layer).values())
    return channels


def stat_prop(
    data: pd.DataFrame | Mapping[str, Any],
    mapping: Aes | Mapping[str, Any] | None = None,
    *,
    geom: Geom = "bar",
    position: Position | str = "fill",
    width: float | None = None,
    na_rm: bool = False,
    show_legend: bool = True,
    orientation: Orientation = "vertical",
    **params: Any,
) -> alt.Chart:
    """Build a chart layer computing proportions with a custom denominator.

    Args:
        data: Observations.
        mapping: Aesthetic mapping; requires `x` and `by`, accepts `fill`,
            `colour`, `weight`, `label`, `row`, `column`. Must not map `y`.
        geom: `bar`, `text` or `point`.
        position: Position adjustment (`fill`, `stack`, `dodge`, `identity` or
            a `Position`).
        width: Bar width as a fraction of one category step.
        na_rm: Silence the warning about rows removed for missing values.
        show_legend: Whether to display the fill legend.
        orientation: `horizontal` flips the discrete and value axes.
        **params: Mark styling passed to Altair (ggplot aliases accepted).

    Returns:
        An Altair chart bound to the computed proportion table.

    Raises:
        StatPropError: When `y` is supplied or `by` is not categorical.
        AestheticError: When `x` or `by` is missing.
    """

    if "y" in params:
        raise StatPropError("stat_prop() must not be used with a y aesthetic.")

    layer = build_prop_layer(data, mapping, position=position, width=width, na_rm=na_rm)
    chart = prop_mark(
        alt.Chart(layer.frame),
        layer,
        geom=geom,
        orientation=orientation,
        band=BAR_WIDTH if width is None else width,
        style=params,
    )
    logger.debug("stat_prop built a %s layer (%s, %s).", geom, layer.position.kind, orientation)
    return chart.encode(*prop_encoding(layer, geom=geom, orientation=orientation, show_legend=show_legend))
