import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from facetpager import Aesthetics, PlotSpec

# Appearance order (J..A) differs from sorted order (A..J)
LEVELS = list("JIHGFEDCBA")


@pytest.fixture
def panel_df():
    """10 facet levels x 3 rows; x spans 0..92, y spans -9..1."""
    rows = []
    for i, level in enumerate(LEVELS):
        for j in range(3):
            rows.append({
                'group': level,
                'sub': j % 2,
                'x': float(i * 10 + j),
                'y': -i + 0.5 * j,
                'kind': 'a' if j == 0 else 'b',
            })
    return pd.DataFrame(rows)


@pytest.fixture
def plot(panel_df):
    return PlotSpec(panel_df, Aesthetics(x='x', y='y', color='kind'), title='Demo')
