"""
Compile a PlotSpec into the backend-agnostic IR.

One SubplotData per facet key, one trace per color group inside a panel.
Coordinate limits and explicit scales are copied onto every panel.
"""

from typing import Optional, List, Any, Dict, Set, Tuple

import pandas as pd

from ..plot_spec import PlotSpec
from .ir import FigureData, SubplotData, TraceData, TraceStyle, FacetSpec
from .style.colors import create_color_lookup, STANDARD_PALETTE
from .style.defaults import StyleSpec, default_style
from .utils import iter_facet_panels, format_facet_key

MISSING_COLOR = "#7f7f7f"


def _build_color_lookup(
    plot: PlotSpec,
    palette: Optional[List[str]] = None,
) -> Dict[Any, str]:
    """Use the plot's pinned color levels, else the sorted levels of its data."""
    color_by = plot.aes.color
    if color_by is None:
        return {}
    if plot.color_order is not None:
        levels = list(plot.color_order)
    else:
        levels = sorted_levels(plot.data[color_by])
    return create_color_lookup(levels, palette or STANDARD_PALETTE)


def sorted_levels(values: pd.Series) -> List[Any]:
    unique_vals = list(values.dropna().unique())
    try:
        return sorted(unique_vals)
    except TypeError:
        # mixed types: keep order of appearance
        return unique_vals


def _build_subplot_ir(
    panel_df: pd.DataFrame,
    plot: PlotSpec,
    color_lookup: Dict[Any, str],
    subplot_key: Tuple[Any, ...],
    legend_tracker: Set[str],
    style: StyleSpec,
) -> SubplotData:
    """Build SubplotData (IR) for one facet panel."""
    x_col, y_col, color_by = plot.aes.x, plot.aes.y, plot.aes.color

    # (group value, row mask, label)
    if color_by:
        values = panel_df[color_by]
        groups = [(g, values == g, str(g)) for g in color_lookup if (values == g).any()]
        if values.isna().any():
            groups.append((None, values.isna(), 'NA'))
    else:
        groups = [(None, None, None)]

    traces: List[TraceData] = []
    for group_val, mask, label in groups:
        group_df = panel_df if mask is None else panel_df[mask]
        if plot.geom == 'line':
            group_df = group_df.sort_values(x_col)

        if color_by and group_val is None:
            color = MISSING_COLOR
        else:
            color = color_lookup.get(group_val, STANDARD_PALETTE[0])

        # Legend: show once per group across all subplots
        legend_key = f"{color_by}_{group_val}"
        show_legend = label is not None and legend_key not in legend_tracker
        if show_legend:
            legend_tracker.add(legend_key)

        traces.append(TraceData(
            x=group_df[x_col].to_numpy(),
            y=group_df[y_col].to_numpy(),
            style=TraceStyle(
                color=color,
                alpha=plot.alpha,
                width=style.line_width if plot.geom == 'line' else style.marker_size,
            ),
            label=label,
            legend_group=legend_key,
            show_legend=show_legend,
            render_as=plot.geom,
        ))

    return SubplotData(
        key=subplot_key,
        traces=traces,
        title=format_facet_key(subplot_key) if subplot_key else None,
        x_label=plot.label_for('x'),
        y_label=plot.label_for('y'),
        xlim=plot.limits_for('x'),
        ylim=plot.limits_for('y'),
    )


def compile_figure(plot: PlotSpec, style: Optional[StyleSpec] = None) -> FigureData:
    """Compile ``plot`` into FigureData.

    Parameters
    ----------
    plot : PlotSpec
        Plot to compile. Must map both x and y.
    style : StyleSpec, optional
        Supplies the palette and trace sizes.

    Returns
    -------
    FigureData
        One subplot per facet key (a single subplot when not faceted).
    """
    if plot.aes.x is None or plot.aes.y is None:
        raise ValueError("Rendering requires both the 'x' and 'y' aesthetics")
    style = style or default_style()
    color_lookup = _build_color_lookup(plot, style.palette)

    if plot.facet is None:
        panels = [((), plot.data)]
    else:
        panels = list(iter_facet_panels(plot.data, plot.facet.facets, plot.facet.order))

    legend_tracker: Set[str] = set()
    subplots = [
        _build_subplot_ir(panel_df, plot, color_lookup, key, legend_tracker, style)
        for key, panel_df in panels
    ]

    return FigureData(
        title=plot.title,
        subplots=subplots,
        legend_title=plot.aes.color,
    )


def facet_spec_for(plot: PlotSpec) -> FacetSpec:
    """Layout rules for the plot's facet directive."""
    if plot.facet is None:
        return FacetSpec(wrap=1)
    return FacetSpec(
        wrap=plot.facet.ncol,
        nrow=plot.facet.nrow,
        sharex=plot.facet.sharex,
        sharey=plot.facet.sharey,
    )
