"""
Style specification for faceted plots.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class StyleSpec:
    """Backend-agnostic style configuration."""
    # Sizing (per-cell, Plotly pixels)
    height_per_row: int = 350
    width_per_col: int = 400
    min_height: int = 400
    min_width: int = 600

    # Sizing (per-cell, Matplotlib inches)
    mpl_height_per_row: float = 4.5
    mpl_width_per_col: float = 5.0

    # Trace styling
    marker_size: float = 6.0
    line_width: float = 1.5

    # Axis limits are padded by this fraction of their span
    axis_expand: float = 0.05

    # Spacing (fractions)
    vertical_spacing: float = 0.1
    horizontal_spacing: float = 0.06

    # Margins (Plotly)
    margin_left: int = 80
    margin_right: int = 120
    margin_top: int = 100
    margin_bottom: int = 60

    # Fonts
    title_fontsize: int = 14
    subtitle_fontsize: int = 11
    strip_fontsize: int = 11
    axis_label_fontsize: int = 10
    legend_fontsize: int = 12

    # Grid
    show_grid: bool = True
    grid_alpha: float = 0.3

    # Colors (None -> STANDARD_PALETTE)
    palette: Optional[List[str]] = None


def default_style() -> StyleSpec:
    return StyleSpec()


def paper_style() -> StyleSpec:
    return StyleSpec(
        height_per_row=300,
        width_per_col=350,
        mpl_height_per_row=3.0,
        mpl_width_per_col=3.5,
        marker_size=4.0,
        legend_fontsize=10,
        title_fontsize=12,
        subtitle_fontsize=10,
    )
