"""
Faceting Engine - Generic faceted plotting infrastructure.

Compiles a PlotSpec into a backend-agnostic IR and renders it with plotly
or matplotlib.

Usage:
    from facetpager.faceting_engine import render, show, save_pages
"""

import logging
from pathlib import Path
from typing import Optional, Union, Any, Iterable, List

from ..plot_spec import PlotSpec
from .ir import TraceData, TraceStyle, SubplotData, FigureData, FacetSpec
from .build import compile_figure, facet_spec_for
from .style.defaults import StyleSpec, default_style, paper_style
from .style.colors import STANDARD_PALETTE, normalize_color, create_color_lookup
from .utils import facet_groupby, iter_facet_panels, calculate_grid_map, compute_figure_size

logger = logging.getLogger(__name__)

BACKENDS = ('plotly', 'matplotlib', 'both')


def _check_backend(backend: str, allowed=BACKENDS) -> None:
    if backend not in allowed:
        raise ValueError(f"backend={backend!r} is not recognized. Valid options: {list(allowed)}")


def render(
    plot: PlotSpec,
    backend: str = 'plotly',
    style: Optional[StyleSpec] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> Any:
    """Render a PlotSpec to the specified backend."""
    from .renderers.plotly import render_plotly
    from .renderers.matplotlib import render_matplotlib

    _check_backend(backend)
    style = style or default_style()
    fig_data = compile_figure(plot, style)
    facet = facet_spec_for(plot)

    results = {}

    if backend in ('plotly', 'both'):
        fig_plotly = render_plotly(fig_data, facet, style)
        if output_path and backend == 'plotly':
            fig_plotly.write_html(str(output_path))
        results['plotly'] = fig_plotly

    if backend in ('matplotlib', 'both'):
        fig_mpl = render_matplotlib(fig_data, facet, style)
        if output_path and backend == 'matplotlib':
            fig_mpl.savefig(str(output_path), dpi=150, bbox_inches='tight')
        results['matplotlib'] = fig_mpl

    if backend == 'both' and output_path:
        path = Path(output_path)
        results['plotly'].write_html(str(path.with_suffix('.html')))
        results['matplotlib'].savefig(str(path.with_suffix('.png')), dpi=150, bbox_inches='tight')

    return results if backend == 'both' else results.get(backend)


def show(
    plot: PlotSpec,
    backend: str = 'plotly',
    style: Optional[StyleSpec] = None,
) -> Any:
    """Render ``plot`` and display it on the active output device."""
    _check_backend(backend, ('plotly', 'matplotlib'))
    fig = render(plot, backend=backend, style=style)
    if backend == 'plotly':
        fig.show()
    else:
        import matplotlib.pyplot as plt
        plt.show()
    return fig


def save_pages(
    pages: Iterable[Any],
    output_path: Union[str, Path],
    backend: str = 'matplotlib',
    style: Optional[StyleSpec] = None,
) -> List[Path]:
    """Write a sequence of pages to disk.

    Parameters
    ----------
    pages : iterable of Page or PlotSpec
        Typically the result of ``paginate()``.
    output_path : str or Path
        matplotlib: a single multi-page PDF.
        plotly: one HTML file per page, named ``<stem>_page01.html`` etc.
    backend : str, default='matplotlib'
        'matplotlib' or 'plotly'.
    style : StyleSpec, optional
        Style specification.

    Returns
    -------
    list of Path
        Files written.
    """
    _check_backend(backend, ('plotly', 'matplotlib'))
    output_path = Path(output_path)
    plots = [page if isinstance(page, PlotSpec) else page.plot for page in pages]

    if backend == 'matplotlib':
        import matplotlib.pyplot as plt
        from matplotlib.backends.backend_pdf import PdfPages

        with PdfPages(output_path) as pdf:
            for plot in plots:
                fig = render(plot, backend='matplotlib', style=style)
                pdf.savefig(fig, bbox_inches='tight')
                plt.close(fig)
        logger.info("Wrote %d page(s) to %s", len(plots), output_path)
        return [output_path]

    written = []
    for i, plot in enumerate(plots, start=1):
        path = output_path.with_name(f"{output_path.stem}_page{i:02d}.html")
        render(plot, backend='plotly', style=style, output_path=path)
        logger.info("Wrote %s", path)
        written.append(path)
    return written


__all__ = [
    'TraceData', 'TraceStyle', 'SubplotData', 'FigureData',
    'FacetSpec',
    'StyleSpec', 'default_style', 'paper_style',
    'STANDARD_PALETTE', 'normalize_color', 'create_color_lookup',
    'compile_figure', 'facet_spec_for',
    'facet_groupby', 'iter_facet_panels', 'calculate_grid_map', 'compute_figure_size',
    'render', 'show', 'save_pages',
]
