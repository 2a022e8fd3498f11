import numpy as np
import pytest

from pointgroups.model.elements import Point
from pointgroups.model.errors import PropertyBroadcastError, UnsupportedPropertyError
from pointgroups.model.geometry_primitives import CoordsMethod
from pointgroups.model.group import Group


class PickyPoint(Point):
    """Refuses to change its size."""
    def set_property(self, *args, **kwargs):
        if "size" in kwargs:
            raise UnsupportedPropertyError("size", self.id)
        super().set_property(*args, **kwargs)


def test_style_is_forwarded_to_every_member(scene, three_points):
    group = Group(scene, None, None, list(three_points))

    group.set_property({"fill_color": "green"}, "strokeColor:black", size=6)

    for point in three_points:
        assert point.visual.fill_color == "green"
        assert point.visual.stroke_color == "black"
        assert point.visual.size == 6


def test_locking_members_through_the_group(scene, three_points):
    group = Group(scene, None, None, list(three_points))

    group.set_property(fixed=True)

    assert all(point.locked for point in three_points)


def test_member_locked_after_joining_is_not_dragged_along(scene, make_point):
    a = make_point(0, 0)
    b = make_point(10, 0)
    group = Group(scene, None, None, [a, b])
    b.set_property(fixed=True)

    a.set_position_directly((5, 5))

    np.testing.assert_allclose(a.coords.scr, [5, 5])
    np.testing.assert_allclose(b.coords.scr, [10, 0])
    assert group.pending_offset.is_zero()


def test_first_failure_aborts_the_broadcast(scene):
    first = Point(scene, (0, 0), method=CoordsMethod.SCREEN)
    picky = PickyPoint(scene, (1, 0), method=CoordsMethod.SCREEN)
    last = Point(scene, (2, 0), method=CoordsMethod.SCREEN)
    group = Group(scene, None, None, [first, picky, last])

    with pytest.raises(UnsupportedPropertyError):
        group.set_property(size=8)

    assert first.visual.size == 8
    assert picky.visual.size == 3.0
    # never reached
    assert last.visual.size == 3.0


def test_collect_policy_styles_everyone_and_reports(collecting_scene):
    scene = collecting_scene
    first = Point(scene, (0, 0), method=CoordsMethod.SCREEN)
    picky = PickyPoint(scene, (1, 0), method=CoordsMethod.SCREEN)
    last = Point(scene, (2, 0), method=CoordsMethod.SCREEN)
    group = Group(scene, None, None, [first, picky, last])

    with pytest.raises(PropertyBroadcastError) as info:
        group.set_property(size=8)

    assert first.visual.size == 8
    assert last.visual.size == 8
    assert info.value.group_id == group.id
    assert [element_id for element_id, _ in info.value.failures] == [picky.id]
    assert isinstance(info.value.failures[0][1], UnsupportedPropertyError)


class KeyErrorPoint(Point):
    """Rejects every property with a bare KeyError."""
    def set_property(self, *args, **kwargs):
        raise KeyError(next(iter(kwargs), "?"))


def test_collect_policy_catches_plain_key_errors(collecting_scene):
    scene = collecting_scene
    rejecting = KeyErrorPoint(scene, (0, 0), method=CoordsMethod.SCREEN)
    accepting = Point(scene, (1, 0), method=CoordsMethod.SCREEN)
    group = Group(scene, None, None, [rejecting, accepting])

    with pytest.raises(PropertyBroadcastError) as info:
        group.set_property(size=8)

    assert accepting.visual.size == 8
    assert [element_id for element_id, _ in info.value.failures] == [rejecting.id]
    assert type(info.value.failures[0][1]) is KeyError


def test_collect_policy_without_failures_is_quiet(collecting_scene):
    scene = collecting_scene
    point = Point(scene, (0, 0))
    group = Group(scene, None, None, [point])

    group.set_property(visible=False)

    assert point.visual.visible is False


def test_empty_group_broadcast_is_a_no_op(scene):
    Group(scene, None, None, []).set_property(bogus=1)
