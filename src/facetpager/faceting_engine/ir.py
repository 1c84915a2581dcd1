"""
Intermediate Representation (IR) & Layout Configuration.

Pure dataclasses. No imports beyond numpy and typing.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple, Any, Union


# --- Visual Styling ---

@dataclass
class TraceStyle:
    """Visual style for a trace (separates style from data)."""
    color: str
    alpha: float = 1.0
    width: float = 1.0   # line width, or marker size for points


# --- Data Content ---

@dataclass
class TraceData:
    """Represents a single set of points or a line on a plot."""
    x: np.ndarray
    y: np.ndarray
    style: TraceStyle
    # Legend control
    label: Optional[str] = None
    legend_group: Optional[str] = None
    show_legend: bool = False
    render_as: str = 'point'  # 'point' or 'line'


@dataclass
class SubplotData:
    """A single panel. 'key' is the facet key; engine trusts list order."""
    traces: List[TraceData]
    key: Tuple[Any, ...] = ()
    title: Optional[str] = None
    x_label: Optional[str] = None
    y_label: Optional[str] = None
    xlim: Optional[Tuple[float, float]] = None
    ylim: Optional[Tuple[float, float]] = None


# --- Layout Configuration ---

@dataclass
class FacetSpec:
    """Rules for arranging subplots.

    wrap fixes the number of columns; nrow, when set, pads the grid so it
    always has nrow rows even with fewer subplots.
    """
    wrap: Optional[int] = None
    nrow: Optional[int] = None
    sharex: bool = True
    sharey: bool = True


@dataclass
class FigureData:
    """Represents the complete figure, agnostic of backend.

    title may be a plain string or any object with ``label`` / ``subtitle``
    attributes (a page title); renderers style the two lines differently.
    """
    title: Optional[Union[str, Any]]
    subplots: List[SubplotData]
    legend_title: Optional[str] = None
