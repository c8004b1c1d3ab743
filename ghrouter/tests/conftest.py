import json

import pytest

from ghrouter import LatLng, Waypoint
from payloads import DUESSELDORF, WUPPERTAL, make_response


@pytest.fixture
def two_waypoints():
    return [Waypoint(LatLng(*WUPPERTAL), "Wuppertal"), Waypoint(LatLng(*DUESSELDORF), "Duesseldorf")]


@pytest.fixture
def named_waypoints():
    def _make(*names):
        return [Waypoint(LatLng(51.0 + i * 0.01, 7.0), name) for i, name in enumerate(names)]
    return _make


@pytest.fixture
def response_body():
    def _make(*paths, errors=None):
        return json.dumps(make_response(*paths, errors=errors))
    return _make
