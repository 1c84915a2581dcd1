"""
Plotly renderer for faceted plots.
"""

import html

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..ir import FigureData, TraceData, FacetSpec
from ..style.defaults import StyleSpec
from ..utils import calculate_grid_map, compute_figure_size, expand_limits


def render_plotly(
    data: FigureData,
    facet: FacetSpec,
    style: StyleSpec,
) -> go.Figure:
    """Render FigureData to Plotly figure."""
    n_rows, n_cols, positions = calculate_grid_map(data, facet)
    height, width = compute_figure_size(n_rows, n_cols, style)

    # Strip titles go in grid order; padding cells get none
    titles = [''] * (n_rows * n_cols)
    for idx, sub in enumerate(data.subplots):
        pos = positions[idx]
        titles[(pos['row'] - 1) * n_cols + (pos['col'] - 1)] = (
            f"<b>{html.escape(sub.title)}</b>" if sub.title else ''
        )

    fig = make_subplots(
        rows=n_rows,
        cols=n_cols,
        subplot_titles=titles,
        vertical_spacing=min(style.vertical_spacing, 1.0 / max(n_rows - 1, 1)),
        horizontal_spacing=min(style.horizontal_spacing, 1.0 / max(n_cols - 1, 1)),
    )

    used = set()
    for idx, sub in enumerate(data.subplots):
        pos = positions[idx]
        used.add((pos['row'], pos['col']))

        for trace in sub.traces:
            _add_trace(fig, trace, pos['row'], pos['col'])

        x_title = sub.x_label if pos['show_x'] else None
        y_title = sub.y_label if pos['show_y'] else None

        fig.update_xaxes(range=expand_limits(sub.xlim, style.axis_expand), title_text=x_title,
                         showgrid=style.show_grid, row=pos['row'], col=pos['col'])
        fig.update_yaxes(range=expand_limits(sub.ylim, style.axis_expand), title_text=y_title,
                         showgrid=style.show_grid, row=pos['row'], col=pos['col'])

    # Padding cells of a sparse grid
    for r in range(1, n_rows + 1):
        for c in range(1, n_cols + 1):
            if (r, c) not in used:
                fig.update_xaxes(visible=False, row=r, col=c)
                fig.update_yaxes(visible=False, row=r, col=c)

    # Shared axes: every panel follows the first one
    if facet.sharex:
        fig.update_xaxes(matches='x')
    if facet.sharey:
        fig.update_yaxes(matches='y')

    legend_config = dict(x=1.02, y=1, font=dict(size=style.legend_fontsize))
    if data.legend_title:
        legend_config['title'] = dict(text=data.legend_title)

    fig.update_layout(
        title_text=_title_html(data.title),
        height=height,
        width=width,
        hovermode='closest',
        template='plotly_white',
        legend=legend_config,
        margin=dict(l=style.margin_left, r=style.margin_right,
                    t=style.margin_top, b=style.margin_bottom),
    )

    return fig


def _title_html(title) -> str:
    if title is None:
        return ''
    if hasattr(title, 'to_html'):
        return title.to_html()
    return f"<b>{html.escape(str(title))}</b>"


def _add_trace(fig, trace: TraceData, row: int, col: int):
    """Add a point or line trace."""
    if trace.render_as == 'line':
        mark = dict(
            mode='lines',
            line=dict(color=trace.style.color, width=trace.style.width),
        )
    else:
        mark = dict(
            mode='markers',
            marker=dict(color=trace.style.color, size=trace.style.width),
        )

    fig.add_trace(
        go.Scatter(
            x=trace.x, y=trace.y,
            opacity=trace.style.alpha,
            name=trace.label,
            legendgroup=trace.legend_group,
            showlegend=trace.show_legend,
            **mark,
        ),
        row=row, col=col
    )
