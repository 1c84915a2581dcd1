"""Tests for splitting faceted plots over pages."""

import logging
import math

import numpy as np
import pandas as pd
import pytest

from facetpager import (
    Aesthetics,
    InvalidGridShapeError,
    MissingArgumentError,
    PageTitle,
    PlotSpec,
    UnknownFacetColumnError,
    assign_pages,
    count_panels,
    facet_multiple,
    fixed_axis_limits,
    paginate,
)
import facetpager.pager as pager_module
from facetpager.faceting_engine import compile_figure


def _levels_per_page(pages):
    # panel order as drawn, not row order of the page data
    return [[sub.title for sub in compile_figure(page.plot).subplots] for page in pages]


class TestPageCount:

    def test_ten_levels_on_two_by_two(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2))
        assert len(pages) == 3
        assert [len(levels) for levels in _levels_per_page(pages)] == [4, 4, 2]
        assert [p.number for p in pages] == [1, 2, 3]
        assert all(p.total == 3 for p in pages)

    @pytest.mark.parametrize("nrow,ncol", [(1, 1), (1, 3), (2, 2), (2, 3), (3, 4), (5, 2)])
    def test_page_count_matches_ceiling(self, plot, nrow, ncol):
        pages = list(paginate(plot, 'group', ncol=ncol, nrow=nrow))
        assert len(pages) == math.ceil(10 / (nrow * ncol))
        assert all(page.plot.data['group'].nunique() <= nrow * ncol for page in pages)

    def test_multiple_facet_columns(self, plot):
        # every level has sub values 0 and 1 -> 20 panels
        assert count_panels(plot.data, ['group', 'sub']) == 20
        pages = list(paginate(plot, ['group', 'sub'], ncol=2, nrow=2))
        assert len(pages) == 5
        for page in pages:
            assert len(page.plot.data[['group', 'sub']].drop_duplicates()) == 4

    def test_non_string_column_label(self):
        df = pd.DataFrame({0: list('aabbcc'), 'x': range(6), 'y': range(6)})
        plot = PlotSpec(df, Aesthetics(x='x', y='y'))
        pages = list(paginate(plot, 0, ncol=1, nrow=2))
        assert len(pages) == 2
        assert all(p.plot.facet.facets == (0,) for p in pages)
        assert _levels_per_page(pages) == [['a', 'b'], ['c']]


class TestNoPagination:

    def test_missing_facets_returns_original_plot(self, plot, caplog):
        caplog.set_level(logging.INFO, logger='facetpager.pager')
        pages = list(paginate(plot, None, 2, 2, 'fixed'))
        assert len(pages) == 1
        assert pages[0].plot is plot
        assert pages[0].plot.facet is None
        assert 'facets' in caplog.text

    def test_empty_facets_behave_like_missing(self, plot):
        pages = list(paginate(plot, [], 2, 2))
        assert pages[0].plot is plot

    def test_single_page_is_not_retitled(self, plot):
        pages = list(paginate(plot, 'group', ncol=4, nrow=3))
        assert len(pages) == 1
        page_plot = pages[0].plot
        assert page_plot.title == 'Demo'
        assert 'Page' not in str(page_plot.title)
        assert page_plot.coord.x is None and page_plot.coord.y is None
        assert page_plot.facet.facets == ('group',)
        assert page_plot.facet.ncol == 4
        assert page_plot.facet.nrow is None

    def test_empty_data_gives_one_page(self):
        empty = PlotSpec(pd.DataFrame({'x': [], 'y': [], 'group': []}), Aesthetics(x='x', y='y'))
        pages = list(paginate(empty, 'group'))
        assert len(pages) == 1
        assert pages[0].plot.data.empty


class TestValidation:

    def test_missing_plot(self):
        with pytest.raises(MissingArgumentError, match='plot'):
            paginate(None, 'group')

    def test_not_a_plot(self, panel_df):
        with pytest.raises(TypeError):
            paginate(panel_df, 'group')

    def test_unknown_facet_column(self, plot):
        with pytest.raises(UnknownFacetColumnError, match="'color'") as exc_info:
            paginate(plot, 'color', 2, 2)
        assert exc_info.value.columns == ('color',)

    def test_unknown_facet_columns_are_all_named(self, plot):
        with pytest.raises(UnknownFacetColumnError) as exc_info:
            paginate(plot, ['group', 'nope', 'nada'])
        assert exc_info.value.columns == ('nope', 'nada')

    @pytest.mark.parametrize("kwargs", [{'ncol': None}, {'nrow': None}])
    def test_missing_grid_dimension(self, plot, kwargs):
        with pytest.raises(MissingArgumentError, match='ncol'):
            paginate(plot, 'group', **kwargs)

    @pytest.mark.parametrize("value", [0, -1, 2.5, True, '2'])
    def test_invalid_grid_dimension(self, plot, value):
        with pytest.raises(InvalidGridShapeError):
            paginate(plot, 'group', ncol=value)

    def test_numpy_integers_are_accepted(self, plot):
        pages = list(paginate(plot, 'group', ncol=np.int64(2), nrow=np.int32(2)))
        assert len(pages) == 3

    def test_unknown_scales(self, plot):
        with pytest.raises(ValueError, match='scales'):
            paginate(plot, 'group', scales='loose')

    def test_unknown_order(self, plot):
        with pytest.raises(ValueError, match='order'):
            paginate(plot, 'group', order='random')


class TestPageContents:

    def test_pages_partition_the_data(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2))
        combined = pd.concat([p.plot.data for p in pages])
        assert not combined.index.duplicated().any()
        assert sorted(combined.index) == sorted(plot.data.index)

    def test_appearance_order(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2))
        assert _levels_per_page(pages) == [list('JIHG'), list('FEDC'), list('BA')]

    def test_sorted_order(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2, order='sorted'))
        assert _levels_per_page(pages) == [list('ABCD'), list('EFGH'), list('IJ')]

    def test_page_titles(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2))
        for page in pages:
            title = page.plot.title
            assert isinstance(title, PageTitle)
            assert title.label == 'Demo'
            assert f"Page {page.number} of 3" in str(title)
        assert pages[1].plot.title.to_html() == '<b>Demo</b><br><i>Page 2 of 3</i>'

    def test_only_last_page_fixes_grid_rows(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2))
        assert [p.plot.facet.nrow for p in pages] == [None, None, 2]
        assert [p.is_last for p in pages] == [False, False, True]
        assert all(p.plot.facet.ncol == 2 for p in pages)

    def test_last_page_keeps_order_and_scales(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2, scales='free_y', order='sorted'))
        last = pages[-1].plot.facet
        assert last.order == 'sorted'
        assert last.scales.value == 'free_y'

    def test_input_plot_is_not_modified(self, plot):
        list(paginate(plot, 'group', ncol=2, nrow=2))
        assert plot.facet is None
        assert plot.coord.x is None and plot.coord.y is None
        assert plot.title == 'Demo'
        assert plot.color_order is None

    def test_color_levels_pinned_across_pages(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2))
        assert all(p.plot.color_order == ('a', 'b') for p in pages)

    def test_missing_facet_values_form_a_panel(self):
        df = pd.DataFrame({
            'x': range(6),
            'y': range(6),
            'group': ['a', 'a', None, 'b', None, 'c'],
        })
        plot = PlotSpec(df, Aesthetics(x='x', y='y'))
        assert count_panels(df, ['group']) == 4
        pages = list(paginate(plot, 'group', ncol=1, nrow=1))
        assert len(pages) == 4
        assert sum(len(p.plot.data) for p in pages) == 6
        assert pages[1].plot.data['group'].isna().all()


class TestFixedScales:

    def test_fixed_locks_both_axes(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2, scales='fixed'))
        for page in pages:
            assert page.plot.coord.x == (0.0, 92.0)
            assert page.plot.coord.y == (-9.0, 1.0)

    def test_free_locks_nothing(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2, scales='free'))
        assert all(p.plot.coord.x is None and p.plot.coord.y is None for p in pages)

    def test_free_x_locks_y_only(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2, scales='free_x'))
        assert all(p.plot.coord.x is None for p in pages)
        assert all(p.plot.coord.y == (-9.0, 1.0) for p in pages)

    def test_free_y_locks_x_only(self, plot):
        pages = list(paginate(plot, 'group', ncol=2, nrow=2, scales='free_y'))
        assert all(p.plot.coord.x == (0.0, 92.0) for p in pages)
        assert all(p.plot.coord.y is None for p in pages)

    def test_explicit_scale_is_respected(self, plot):
        scaled = plot.with_scale('x', limits=(0, 50))
        pages = list(paginate(scaled, 'group', ncol=2, nrow=2))
        for page in pages:
            assert page.plot.coord.x is None
            assert page.plot.limits_for('x') == (0, 50)
            assert page.plot.coord.y == (-9.0, 1.0)

    def test_non_numeric_axis_is_not_locked(self, panel_df):
        plot = PlotSpec(panel_df, Aesthetics(x='kind', y='y'))
        assert fixed_axis_limits(plot, 'fixed') == {'y': (-9.0, 1.0)}

    def test_boolean_axis_is_not_locked(self, panel_df):
        df = panel_df.assign(flag=panel_df['sub'] == 1)
        plot = PlotSpec(df, Aesthetics(x='flag', y='y'))
        assert 'x' not in fixed_axis_limits(plot, 'fixed')

    def test_missing_values_are_ignored(self, panel_df):
        df = panel_df.copy()
        df.loc[0, 'x'] = np.nan
        plot = PlotSpec(df, Aesthetics(x='x', y='y'))
        assert fixed_axis_limits(plot, 'fixed')['x'] == (1.0, 92.0)


class TestAssignPages:

    def test_every_row_gets_a_page(self, panel_df):
        pages = assign_pages(panel_df, ['group'], n_layout=4)
        assert pages.index.equals(panel_df.index)
        assert set(pages) == {1, 2, 3}

    def test_keys_map_to_one_page(self, panel_df):
        pages = assign_pages(panel_df, ['group'], n_layout=4)
        assert (panel_df.assign(page=pages).groupby('group')['page'].nunique() == 1).all()

    def test_consecutive_buckets(self, panel_df):
        pages = assign_pages(panel_df, ['group'], n_layout=3)
        first_page = panel_df.assign(page=pages).groupby('group', sort=False)['page'].first()
        assert list(first_page) == [1, 1, 1, 2, 2, 2, 3, 3, 3, 4]


class TestFacetMultiple:

    @pytest.fixture
    def shown(self, monkeypatch):
        calls = []
        monkeypatch.setattr(pager_module, 'show', lambda plot, **kwargs: calls.append((plot, kwargs)))
        return calls

    def test_no_facets_returns_plot_without_showing(self, plot, shown):
        assert facet_multiple(plot) is plot
        assert shown == []

    def test_single_page_returns_faceted_plot(self, plot, shown):
        result = facet_multiple(plot, 'group', ncol=5, nrow=2)
        assert result.facet.facets == ('group',)
        assert shown == []

    def test_pages_are_shown_in_order(self, plot, shown):
        assert facet_multiple(plot, 'group', ncol=2, nrow=2, backend='matplotlib') is None
        assert [p.title.page for p, _ in shown] == [1, 2, 3]
        assert all(kwargs['backend'] == 'matplotlib' for _, kwargs in shown)

    def test_validation_happens_before_showing(self, plot, shown):
        with pytest.raises(UnknownFacetColumnError):
            facet_multiple(plot, 'color')
        assert shown == []
