import math

import pytest

from components.legend import ElevationLegend, legend_html
from services import styling

PALETTE = {bucket.color for bucket in styling.ELEVATION_BUCKETS}


@pytest.mark.parametrize(
    'elevation, expected',
    [
        (199, 'low'),
        (199.999, 'low'),
        (200, 'medium'),
        (350, 'medium'),
        (500, 'medium'),
        (500.001, 'high'),
        (501, 'high'),
        (-30, 'low'),
        (4000, 'high'),
    ],
)
def test_elevation_bucket_boundaries(elevation, expected):
    assert styling.elevation_bucket(elevation).key == expected


@pytest.mark.parametrize('missing', [None, '', '   ', float('nan'), 'n/a'])
def test_missing_elevation_defaults_to_low(missing):
    style = styling.station_style(missing)
    assert style['fill_color'] == styling.elevation_bucket(0).color
    assert styling.elevation_bucket(missing).key == 'low'


def test_numeric_strings_are_accepted():
    assert styling.elevation_bucket('750.0').key == 'high'
    assert styling.elevation_bucket('200').key == 'medium'


def test_style_is_total_and_uses_palette():
    for elevation in [-1e6, -0.5, 0, 199, 200, 500, 501, 1e6, math.inf, -math.inf]:
        style = styling.station_style(elevation)
        assert style['fill_color'] in PALETTE
        assert style['radius'] == 6
        assert style['color'] == '#ffffff'
        assert style['weight'] == 1
        assert style['opacity'] == 1
        assert style['fill_opacity'] == pytest.approx(0.8)


def test_colors_change_only_at_thresholds():
    assert styling.elevation_color(199) != styling.elevation_color(200)
    assert styling.elevation_color(200) == styling.elevation_color(500)
    assert styling.elevation_color(500) != styling.elevation_color(501)


def test_legend_matches_styler_palette():
    entries = styling.legend_entries()

    assert len(entries) == 3
    assert [color for color, _ in entries] == [
        styling.elevation_color(0),
        styling.elevation_color(300),
        styling.elevation_color(1000),
    ]
    assert [label for _, label in entries] == ['Low (<200m)', 'Medium (200-500m)', 'High (>500m)']


def test_legend_html_lists_every_bucket():
    html = legend_html()

    for color, label in styling.legend_entries():
        assert color in html
        assert label.replace('<', '&lt;').replace('>', '&gt;') in html
    assert html.count('<i ') == 3


def test_legend_control_renders_leaflet_control():
    import folium

    fmap = folium.Map(location=[0, 0], zoom_start=2)
    ElevationLegend().add_to(fmap)
    rendered = fmap.get_root().render()

    assert 'L.control' in rendered
    assert 'Medium (200-500m)' in rendered


def test_utils_exports_helpers_in_use():
    import utils

    assert set(utils.__all__) == {'is_nan', 'safe_float', 'is_blank', 'first_present', 'fmt_number'}
    assert not hasattr(utils, 'html_clean')
