"""
facetpager - facet wrapping over multiple pages.

Splits a faceted plot whose panels do not fit in one ``nrow x ncol`` grid
into several pages, each titled "Page i of n".

Modules
=======
- plot_spec : Immutable plot description (PlotSpec and its directives)
- pager : Page computation (paginate, facet_multiple, facet_layout)
- faceting_engine : IR, plotly / matplotlib renderers, render / show / save_pages
- cli : Command-line entry point
"""

from .errors import (
    FacetPagerError,
    MissingArgumentError,
    InvalidGridShapeError,
    UnknownFacetColumnError,
)
from .plot_spec import (
    PlotSpec, Aesthetics, AxisScale, CoordLimits, FacetWrap, PageTitle, ScaleMode,
)
from .pager import (
    Page,
    paginate,
    facet_multiple,
    facet_layout,
    count_panels,
    assign_pages,
    fixed_axis_limits,
)
from .faceting_engine import render, show, save_pages, StyleSpec, default_style, paper_style

__version__ = '0.1.0'

__all__ = [
    # Errors
    'FacetPagerError', 'MissingArgumentError', 'InvalidGridShapeError', 'UnknownFacetColumnError',
    # Plot description
    'PlotSpec', 'Aesthetics', 'AxisScale', 'CoordLimits', 'FacetWrap', 'PageTitle', 'ScaleMode',
    # Pagination
    'Page', 'paginate', 'facet_multiple', 'facet_layout',
    'count_panels', 'assign_pages', 'fixed_axis_limits',
    # Rendering
    'render', 'show', 'save_pages', 'StyleSpec', 'default_style', 'paper_style',
]
