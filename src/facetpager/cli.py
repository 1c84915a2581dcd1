#!/usr/bin/env python3
"""
Paginate a faceted plot of a CSV file.

Usage:
  facetpager data.csv --x price --y carat --color cut --facets color \
    --nrow 2 --ncol 2 --output diamonds.pdf

matplotlib writes one multi-page PDF; plotly writes one HTML file per page.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .errors import FacetPagerError
from .faceting_engine import save_pages
from .pager import paginate
from .plot_spec import FACET_ORDERS, GEOMS, Aesthetics, PlotSpec, ScaleMode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="facetpager",
        description="Facet a CSV file over multiple pages",
    )
    ap.add_argument("csv", type=Path, help="Input CSV file")
    ap.add_argument("--x", required=True, help="Column mapped to the x axis")
    ap.add_argument("--y", required=True, help="Column mapped to the y axis")
    ap.add_argument("--color", default=None, help="Column mapped to color")
    ap.add_argument("--facets", nargs="+", required=True, help="Column(s) to facet by")
    ap.add_argument("--nrow", type=int, default=2)
    ap.add_argument("--ncol", type=int, default=2)
    ap.add_argument("--scales", default="fixed", choices=[m.value for m in ScaleMode])
    ap.add_argument("--order", default="appearance", choices=list(FACET_ORDERS))
    ap.add_argument("--title", default=None)
    ap.add_argument("--geom", default="point", choices=list(GEOMS))
    ap.add_argument("--backend", default="matplotlib", choices=["matplotlib", "plotly"])
    ap.add_argument("--output", "-o", type=Path, required=True, help="Output PDF (matplotlib) or HTML stem (plotly)")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        df = pd.read_csv(args.csv)
        plot = PlotSpec(
            df,
            Aesthetics(x=args.x, y=args.y, color=args.color),
            title=args.title or args.csv.stem,
            geom=args.geom,
        )
        pages = paginate(plot, args.facets, ncol=args.ncol, nrow=args.nrow,
                         scales=args.scales, order=args.order)
        written = save_pages(pages, args.output, backend=args.backend)
    except (FacetPagerError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 2

    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
