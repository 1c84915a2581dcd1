"""
Matplotlib renderer for faceted plots.
"""

import matplotlib.pyplot as plt
from matplotlib.lines import Line2D

from ..ir import FigureData, FacetSpec
from ..style.defaults import StyleSpec
from ..utils import calculate_grid_map, expand_limits


def render_matplotlib(
    data: FigureData,
    facet: FacetSpec,
    style: StyleSpec,
) -> plt.Figure:
    """Render FigureData to Matplotlib figure."""
    n_rows, n_cols, positions = calculate_grid_map(data, facet)
    figsize = (style.mpl_width_per_col * n_cols, style.mpl_height_per_row * n_rows)
    fig, axes = plt.subplots(
        n_rows, n_cols, figsize=figsize, squeeze=False,
        sharex=facet.sharex, sharey=facet.sharey,
    )

    legend_entries = {}  # label → (color, render_as)
    used = set()

    for idx, sub in enumerate(data.subplots):
        pos = positions[idx]
        ax = axes[pos['row'] - 1][pos['col'] - 1]
        used.add((pos['row'], pos['col']))

        for trace in sub.traces:
            if trace.render_as == 'line':
                ax.plot(
                    trace.x, trace.y,
                    color=trace.style.color, alpha=trace.style.alpha,
                    linewidth=trace.style.width,
                )
            else:
                ax.scatter(
                    trace.x, trace.y,
                    color=trace.style.color, alpha=trace.style.alpha,
                    s=trace.style.width ** 2,
                )

            if trace.show_legend and trace.label and trace.label not in legend_entries:
                legend_entries[trace.label] = (trace.style.color, trace.render_as)

        if not sub.traces:
            ax.text(0.5, 0.5, 'No data', ha='center', va='center',
                    transform=ax.transAxes, fontsize=10, color='lightgray')

        xlim = expand_limits(sub.xlim, style.axis_expand)
        ylim = expand_limits(sub.ylim, style.axis_expand)
        if xlim:
            ax.set_xlim(xlim)
        if ylim:
            ax.set_ylim(ylim)
        if sub.title:
            ax.set_title(sub.title, fontweight='bold', fontsize=style.strip_fontsize)
        if pos['show_x']:
            # Shared x hides tick labels above the bottom row; the lowest
            # panel of a short column still needs them.
            ax.xaxis.set_tick_params(labelbottom=True)
            if sub.x_label:
                ax.set_xlabel(sub.x_label, fontsize=style.axis_label_fontsize)
        if pos['show_y'] and sub.y_label:
            ax.set_ylabel(sub.y_label, fontsize=style.axis_label_fontsize)

        if style.show_grid:
            ax.grid(True, alpha=style.grid_alpha, linestyle='--', linewidth=0.5)

    # Padding cells of a sparse grid
    for r in range(n_rows):
        for c in range(n_cols):
            if (r + 1, c + 1) not in used:
                axes[r][c].set_visible(False)

    # Unified legend
    if legend_entries:
        handles = [
            Line2D([0], [0], color=color, label=lbl,
                   linewidth=style.line_width if kind == 'line' else 0,
                   marker=None if kind == 'line' else 'o')
            for lbl, (color, kind) in legend_entries.items()
        ]
        rightmost_ax = axes[0, -1]
        fig.legend(handles=handles, loc='upper left', title=data.legend_title,
                   bbox_to_anchor=(1.01, 1.0), bbox_transform=rightmost_ax.transAxes,
                   fontsize=style.legend_fontsize, frameon=True, framealpha=0.9)

    top = _add_title(fig, data, style)
    fig.tight_layout(rect=[0, 0, 0.82 if legend_entries else 1, top])

    return fig


def _add_title(fig: plt.Figure, data: FigureData, style: StyleSpec) -> float:
    """Draw the figure title; return the top of the axes area (figure fraction)."""
    title = data.title
    if title is None:
        return 1.0

    subtitle = getattr(title, 'subtitle', None)
    if subtitle is None:
        fig.suptitle(str(title), fontsize=style.title_fontsize, fontweight='bold')
        return 0.96

    label = getattr(title, 'label', None)
    if label:
        fig.suptitle(label, fontsize=style.title_fontsize, fontweight='bold', y=0.995)
        fig.text(0.5, 0.955, subtitle, ha='center', va='top',
                 fontsize=style.subtitle_fontsize, style='italic')
        return 0.93
    fig.suptitle(subtitle, fontsize=style.subtitle_fontsize, style='italic')
    return 0.96
