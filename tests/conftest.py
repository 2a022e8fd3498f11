"""
Shared pytest fixtures for pointgroups tests.
"""
import pytest

from pointgroups.config import SceneSettings
from pointgroups.model.elements import Point
from pointgroups.model.geometry_primitives import CoordsMethod
from pointgroups.model.scene import Scene


@pytest.fixture
def scene():
    # unit 1 px per user unit, origin at screen (0, 0)
    return Scene()


@pytest.fixture
def make_point(scene):
    """Creates a free point at a screen position."""
    def _make(x, y, **attributes):
        return Point(scene, (x, y), attributes, method=CoordsMethod.SCREEN)
    return _make


@pytest.fixture
def three_points(make_point):
    return make_point(0, 0), make_point(10, 10), make_point(20, 0)


@pytest.fixture
def collecting_scene():
    return Scene(scene_id="collect", settings=SceneSettings(property_failure_policy="collect"))
