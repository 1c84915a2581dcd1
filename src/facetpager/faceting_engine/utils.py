"""
Generic grid iteration and layout calculation utilities.

Facet keys are grouped with pandas and numbered in one canonical order,
shared by the panel iterator and by page assignment:
- 'appearance': order in which each key first appears in the data
- 'sorted': lexicographic over the facet columns, first column slowest
Missing values form their own key (sorted last).
"""

import math
from typing import Iterator, Tuple, Dict, Any, Optional, Sequence

import pandas as pd

from .ir import FigureData, FacetSpec
from .style.defaults import StyleSpec


def facet_groupby(df: pd.DataFrame, facets: Sequence[str], order: str = 'appearance'):
    """Group ``df`` by facet columns in the canonical key order."""
    return df.groupby(
        list(facets), sort=(order == 'sorted'), dropna=False, observed=True,
    )


def iter_facet_panels(
    df: pd.DataFrame,
    facets: Sequence[str],
    order: str = 'appearance',
) -> Iterator[Tuple[Tuple[Any, ...], pd.DataFrame]]:
    """Iterate over facet panels, yielding (facet_key, panel_df).

    facet_key is always a tuple, one value per facet column.
    """
    if df.empty:
        return
    for key, panel_df in facet_groupby(df, facets, order):
        if not isinstance(key, tuple):
            key = (key,)
        yield key, panel_df


def format_facet_key(key: Tuple[Any, ...]) -> str:
    """Strip label for a panel: values joined by ', ' (missing -> 'NA')."""
    return ', '.join('NA' if _is_missing(v) else str(v) for v in key)


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def calculate_grid_map(fig_data: FigureData, facet: FacetSpec) -> Tuple[int, int, Dict[int, Dict[str, Any]]]:
    """Calculate grid layout from figure data.

    Returns
    -------
    n_rows : int
        Number of rows in grid
    n_cols : int
        Number of columns in grid
    positions : dict
        Map from subplot_index to position info dict with keys:
        {'row': int, 'col': int, 'show_x': bool, 'show_y': bool}
    """
    n_sub = len(fig_data.subplots)

    if not facet.wrap:
        n_cols = 1 if n_sub <= 1 else math.ceil(math.sqrt(n_sub))
    else:
        n_cols = facet.wrap
    n_rows = max(1, math.ceil(n_sub / n_cols))
    if facet.nrow:
        n_rows = max(n_rows, facet.nrow)

    # Wrap mode (1D list -> 2D grid, row-major)
    positions = {}
    for i in range(n_sub):
        r = (i // n_cols) + 1
        c = (i % n_cols) + 1
        positions[i] = {
            'row': r,
            'col': c,
            # x label on the lowest panel of each column
            'show_x': (i + n_cols >= n_sub) if facet.sharex else True,
            'show_y': (c == 1) if facet.sharey else True,
        }

    return n_rows, n_cols, positions


def compute_figure_size(n_rows: int, n_cols: int, style: StyleSpec) -> Tuple[int, int]:
    """Compute (height, width) in pixels from grid dimensions and style."""
    height = max(style.min_height, n_rows * style.height_per_row)
    width = max(style.min_width, n_cols * style.width_per_col)
    return height, width


def expand_limits(limits: Optional[Tuple[float, float]], fraction: float) -> Optional[Tuple[float, float]]:
    """Pad limits by ``fraction`` of their span on each side.

    A zero-width range is widened by 0.5 on each side.
    """
    if limits is None:
        return None
    lo, hi = float(limits[0]), float(limits[1])
    span = hi - lo
    if span == 0:
        return lo - 0.5, hi + 0.5
    return lo - span * fraction, hi + span * fraction
