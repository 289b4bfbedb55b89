import pytest

from providers.types import Station


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def make_station():
    def _make(**overrides):
        values = {
            'key': '6158',
            'station_id': '6158',
            'name': 'TORONTO CITY',
            'province': 'ON',
            'elevation_m': 112.5,
            'climate_id': '6158355',
            'lat': 43.6667,
            'lon': -79.4,
        }
        values.update(overrides)
        return Station(**values)

    return _make


def climate_payload(*properties):
    return {
        'type': 'FeatureCollection',
        'features': [{'type': 'Feature', 'properties': props} for props in properties],
    }
