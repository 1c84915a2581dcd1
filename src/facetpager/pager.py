"""
Facet wrapping over multiple pages.

When a faceted plot has more panels than fit in an ``nrow x ncol`` grid,
the data is split so that each page holds at most ``nrow * ncol`` panels.
Every page is titled with the original title (bold) and an italic
"Page i of n" line.

Usage:
    plot = PlotSpec(diamonds, Aesthetics(x='price', y='carat', color='cut'), title='Diamonds')
    for page in paginate(plot, facets='color', ncol=2, nrow=2):
        show(page.plot)
"""

import itertools
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, Hashable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .errors import InvalidGridShapeError, MissingArgumentError, UnknownFacetColumnError
from .faceting_engine import StyleSpec, facet_groupby, show
from .faceting_engine.build import sorted_levels
from .plot_spec import AXES, FACET_ORDERS, Limits, PageTitle, PlotSpec, ScaleMode

logger = logging.getLogger(__name__)

Facets = Optional[Union[Hashable, Sequence[Hashable]]]


@dataclass(frozen=True)
class Page:
    """One page of a paginated plot (``number`` is 1-based)."""
    number: int
    total: int
    plot: PlotSpec

    @property
    def is_last(self) -> bool:
        return self.number == self.total


# --- Validation ---

def _normalize_facets(facets: Facets) -> Tuple[Hashable, ...]:
    if facets is None:
        return ()
    # a single column label, which need not be a string
    if isinstance(facets, str) or not isinstance(facets, Iterable):
        return (facets,)
    return tuple(dict.fromkeys(facets))


def _check_grid_dim(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
        raise InvalidGridShapeError(name, value)
    return int(value)


def _check_facets(plot: PlotSpec, facets: Tuple[str, ...]) -> None:
    missing = [f for f in facets if f not in plot.data.columns]
    if missing:
        raise UnknownFacetColumnError(missing)


def _check_order(order: str) -> None:
    if order not in FACET_ORDERS:
        raise ValueError(f"order={order!r} is not recognized. Valid options: {list(FACET_ORDERS)}")


# --- Layout arithmetic ---

def count_panels(data: pd.DataFrame, facets: Sequence[str]) -> int:
    """Number of distinct facet keys (missing values count as a key)."""
    if data.empty:
        return 0
    return len(data[list(facets)].drop_duplicates())


def assign_pages(
    data: pd.DataFrame,
    facets: Sequence[str],
    n_layout: int,
    order: str = 'appearance',
) -> pd.Series:
    """Page index (1-based) of every row.

    Facet keys are numbered in ``order`` and bucketed into consecutive
    groups of ``n_layout``: key ordinal k (0-based) goes to page
    ``1 + k // n_layout``.
    """
    if data.empty:
        return pd.Series(np.empty(0, dtype=int), index=data.index, name='page')
    codes = facet_groupby(data, facets, order).ngroup()
    return (codes // n_layout + 1).astype(int).rename('page')


def _is_numeric(values: pd.Series) -> bool:
    return pd.api.types.is_numeric_dtype(values) and not pd.api.types.is_bool_dtype(values)


def fixed_axis_limits(plot: PlotSpec, scales: Union[str, ScaleMode]) -> Dict[str, Limits]:
    """Full-data (min, max) for every axis that must be shared across pages.

    An axis is locked when ``scales`` does not free it, it maps to a numeric
    column, and the plot has no explicit scale for it. Missing values are
    ignored; an all-missing column is left unlocked.
    """
    scales = ScaleMode.coerce(scales)
    limits = {}
    for axis in AXES:
        if scales.is_free(axis) or plot.has_scale(axis):
            continue
        values = plot.column_for(axis)
        if values is None or not _is_numeric(values):
            continue
        lo, hi = values.min(), values.max()
        if pd.isna(lo) or pd.isna(hi):
            continue
        limits[axis] = (float(lo), float(hi))
    return limits


# --- Public API ---

def facet_layout(
    plot: PlotSpec,
    facets: Facets,
    ncol: int = 2,
    nrow: int = 2,
    scales: Union[str, ScaleMode] = 'fixed',
) -> PlotSpec:
    """Facet ``plot`` on a fixed ``nrow x ncol`` grid.

    Unlike a plain facet wrap, the grid keeps ``nrow`` rows even when there
    are fewer panels, so a sparse page has the same panel size as a full one.
    The facet key order of an existing facet directive is kept.
    """
    facets = _normalize_facets(facets)
    _check_facets(plot, facets)
    ncol = _check_grid_dim('ncol', ncol)
    nrow = _check_grid_dim('nrow', nrow)
    order = plot.facet.order if plot.facet is not None else 'appearance'
    return plot.with_facet(facets, ncol=ncol, scales=scales, nrow=nrow, order=order)


def paginate(
    plot: Optional[PlotSpec] = None,
    facets: Facets = None,
    ncol: Optional[int] = 2,
    nrow: Optional[int] = 2,
    scales: Union[str, ScaleMode] = 'fixed',
    *,
    order: str = 'appearance',
) -> Iterator[Page]:
    """Split a faceted plot over as many pages as needed.

    Arguments are validated immediately; pages are built lazily.

    Parameters
    ----------
    plot : PlotSpec
        Plot to paginate.
    facets : str or sequence of str, optional
        Columns to facet by. If omitted, a single page holding the input
        plot (unchanged, same object) is returned.
    ncol, nrow : int, default=2
        Grid shape of one page.
    scales : str, default='fixed'
        'fixed', 'free', 'free_x' or 'free_y'. Fixed axes share limits
        across panels and across pages.
    order : str, default='appearance'
        Facet key order: first appearance in the data, or 'sorted'.

    Returns
    -------
    Iterator[Page]
        Pages in increasing page order.

    Raises
    ------
    MissingArgumentError
        ``plot``, ``ncol`` or ``nrow`` is None.
    UnknownFacetColumnError
        A facet is not a column of ``plot.data``.
    InvalidGridShapeError
        ``ncol`` / ``nrow`` is not a positive integer.
    """
    if plot is None:
        raise MissingArgumentError('Argument "plot" required')
    if not isinstance(plot, PlotSpec):
        raise TypeError(f"plot must be a PlotSpec, got {type(plot).__name__}")

    facets = _normalize_facets(facets)
    if not facets:
        logger.info('Argument "facets" not provided. Plotting single panel')
        return iter([Page(1, 1, plot)])

    _check_facets(plot, facets)

    if ncol is None or nrow is None:
        raise MissingArgumentError('Arguments "ncol" and "nrow" required')
    ncol = _check_grid_dim('ncol', ncol)
    nrow = _check_grid_dim('nrow', nrow)
    scales = ScaleMode.coerce(scales)
    _check_order(order)

    # Layout info
    n_panel_tot = count_panels(plot.data, facets)
    n_layout = ncol * nrow
    n_pages = max(1, math.ceil(n_panel_tot / n_layout))
    faceted = plot.with_facet(facets, ncol=ncol, scales=scales, order=order)
    logger.debug("%d panel(s), %d per page -> %d page(s)", n_panel_tot, n_layout, n_pages)

    if n_pages == 1:
        return iter([Page(1, 1, faceted)])

    limits = fixed_axis_limits(faceted, scales)
    if limits:
        logger.debug("Locking axis limits across pages: %s", limits)
        faceted = faceted.with_coord_limits(**limits)

    # Keep colors stable from page to page
    if faceted.aes.color is not None and faceted.color_order is None:
        faceted = faceted.with_color_order(sorted_levels(faceted.column_for('color')))

    page_index = assign_pages(faceted.data, facets, n_layout, order)
    return _iter_pages(faceted, page_index.to_numpy(), n_pages, ncol, nrow, scales)


def _iter_pages(
    plot: PlotSpec,
    page_index: np.ndarray,
    n_pages: int,
    ncol: int,
    nrow: int,
    scales: ScaleMode,
) -> Iterator[Page]:
    title = plot.plain_title
    for i in range(1, n_pages + 1):
        page_plot = (
            plot.with_data(plot.data.loc[page_index == i])
            .with_title(PageTitle(title, i, n_pages))
        )
        # The last page may be sparse; keep the full grid
        if i == n_pages:
            page_plot = facet_layout(page_plot, plot.facet.facets, ncol=ncol, nrow=nrow, scales=scales)
        yield Page(i, n_pages, page_plot)


def facet_multiple(
    plot: Optional[PlotSpec] = None,
    facets: Facets = None,
    ncol: Optional[int] = 2,
    nrow: Optional[int] = 2,
    scales: Union[str, ScaleMode] = 'fixed',
    *,
    backend: str = 'plotly',
    style: Optional[StyleSpec] = None,
    order: str = 'appearance',
) -> Optional[PlotSpec]:
    """Facet wrap over multiple pages, displaying each page.

    Without facets, or when every panel fits on one page, nothing is
    displayed and the (faceted) plot is returned. Otherwise each page is
    rendered and shown in order, and None is returned.
    """
    pages = paginate(plot, facets, ncol=ncol, nrow=nrow, scales=scales, order=order)
    first = next(pages)
    if first.total == 1:
        return first.plot

    for page in itertools.chain([first], pages):
        show(page.plot, backend=backend, style=style)
    return None
