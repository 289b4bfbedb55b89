import pytest
import requests

from conftest import FakeResponse
from providers import geojson_provider
from providers.geojson_provider import (
    GeoJsonStationProvider,
    LoadError,
    fetch_station_collection,
    station_from_feature,
    stations_from_collection,
)


def _feature(props, coords=(-79.4, 43.67)):
    return {
        'type': 'Feature',
        'geometry': {'type': 'Point', 'coordinates': list(coords)},
        'properties': props,
    }


def test_station_from_feature_uses_primary_keys():
    station = station_from_feature(
        _feature(
            {
                'STN_ID': 5051,
                'STATION_NAME': 'TORONTO CITY',
                'PROV_STATE_TERR_CODE': 'ON',
                'ELEVATION': '112.5',
                'CLIMATE_IDENTIFIER': '6158355',
            }
        ),
        fallback_key='feature-0',
    )

    assert station.key == '5051'
    assert station.station_id == '5051'
    assert station.name == 'TORONTO CITY'
    assert station.province == 'ON'
    assert station.elevation_m == pytest.approx(112.5)
    assert station.climate_id == '6158355'
    assert (station.lat, station.lon) == (43.67, -79.4)


def test_station_from_feature_falls_back_to_aliases_in_order():
    station = station_from_feature(
        _feature({'stn_id': '', 'id': 'abc', 'name': 'Somewhere', 'province': 'BC', 'elevation': 640}),
        fallback_key='feature-3',
    )

    assert station.station_id == 'abc'
    assert station.name == 'Somewhere'
    assert station.province == 'BC'
    assert station.elevation_m == 640
    assert station.climate_id == ''


def test_missing_fields_are_normalized_not_invented():
    station = station_from_feature(_feature({}), fallback_key='feature-7')

    assert station.key == 'feature-7'
    assert station.station_id == ''
    assert station.name == ''
    assert station.elevation_m is None
    assert station.climate_id == ''


@pytest.mark.parametrize(
    'geometry',
    [
        None,
        {'type': 'LineString', 'coordinates': [[0, 0], [1, 1]]},
        {'type': 'Point', 'coordinates': []},
        {'type': 'Point', 'coordinates': ['x', 'y']},
        {'type': 'Point', 'coordinates': [10, 95]},
    ],
)
def test_invalid_geometries_are_skipped(geometry):
    feature = {'type': 'Feature', 'geometry': geometry, 'properties': {'STN_ID': 1}}
    assert station_from_feature(feature, fallback_key='feature-0') is None


def test_stations_from_collection_keeps_keys_unique():
    collection = {
        'type': 'FeatureCollection',
        'features': [
            _feature({'STN_ID': 1, 'STATION_NAME': 'A'}),
            _feature({'STN_ID': 1, 'STATION_NAME': 'A bis'}),
            {'type': 'Feature', 'geometry': None, 'properties': {}},
            _feature({'STATION_NAME': 'No id'}),
        ],
    }

    stations = stations_from_collection(collection)

    assert [s.key for s in stations] == ['1', '1#1', 'feature-3']


def test_fetch_station_collection_success(monkeypatch):
    payload = {'type': 'FeatureCollection', 'features': [_feature({'STN_ID': 9})]}
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse(payload)

    monkeypatch.setattr(geojson_provider.requests, 'get', fake_get)

    stations = GeoJsonStationProvider('https://example.test/stations.geojson').load_stations()

    assert len(calls) == 1
    assert calls[0][0] == 'https://example.test/stations.geojson'
    assert 'timeout' in calls[0][1]
    assert [s.key for s in stations] == ['9']


@pytest.mark.parametrize(
    'response, kind',
    [
        (FakeResponse(status_code=404), 'http'),
        (FakeResponse(json_error=True), 'invalid_json'),
        (FakeResponse({'type': 'Feature'}), 'not_feature_collection'),
        (FakeResponse({'type': 'FeatureCollection', 'features': None}), 'not_feature_collection'),
    ],
)
def test_fetch_station_collection_failures(monkeypatch, response, kind):
    monkeypatch.setattr(geojson_provider.requests, 'get', lambda url, **kwargs: response)

    with pytest.raises(LoadError) as excinfo:
        fetch_station_collection('https://example.test/stations.geojson')

    assert excinfo.value.kind == kind


def test_fetch_station_collection_network_error(monkeypatch):
    def boom(url, **kwargs):
        raise requests.ConnectionError('unreachable')

    monkeypatch.setattr(geojson_provider.requests, 'get', boom)

    with pytest.raises(LoadError) as excinfo:
        fetch_station_collection('https://example.test/stations.geojson')

    assert excinfo.value.kind == 'network'
    assert excinfo.value.status_code is None


def test_provider_exposes_only_station_loading():
    provider = geojson_provider.GeoJsonStationProvider('https://example.test/stations.geojson')

    assert not hasattr(provider, 'provider_id')
    assert not hasattr(provider, 'provider_name')
    assert callable(provider.load_stations)
