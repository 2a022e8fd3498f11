import numpy as np
import pytest

from pointgroups.model.elements import Circle, ElementKind, Glider, Line, Point
from pointgroups.model.errors import InvalidParentsError, UnsupportedPropertyError
from pointgroups.model.geometry_primitives import CoordsMethod


def test_point_kinds_and_eligibility(scene, make_point):
    point = make_point(0, 0)
    line = Line(scene, point, make_point(1, 1))
    glider = Glider(scene, (0, 0), line)

    assert point.kind == ElementKind.POINT
    assert glider.kind == ElementKind.GLIDER
    assert line.kind == ElementKind.LINE
    assert point.is_point_like and glider.is_point_like
    assert not line.is_point_like


def test_elements_register_with_generated_ids(scene, make_point):
    point = make_point(0, 0)

    assert point.id == f"{scene.id}P0"
    assert scene.elements[point.id] is point
    assert point.name == "A"


def test_set_property_accepts_every_call_form(scene, make_point):
    point = make_point(0, 0)

    point.set_property({"size": 5}, "strokeColor:blue", visible=False)

    assert point.visual.size == 5
    assert point.visual.stroke_color == "blue"
    assert point.visual.visible is False


def test_key_value_strings_are_coerced(scene, make_point):
    point = make_point(0, 0)

    point.set_property("fixed:true", "size: 7")

    assert point.locked is True
    assert point.visual.size == 7.0


def test_locked_is_an_alias_of_fixed(scene, make_point):
    point = make_point(0, 0)
    point.set_property(locked=True)

    assert point.visual.fixed is True
    assert point.locked


def test_unsupported_property_applies_nothing(scene, make_point):
    point = make_point(0, 0)

    with pytest.raises(UnsupportedPropertyError) as info:
        point.set_property(size=9, dash=2)

    assert info.value.key == "dash"
    assert info.value.element_id == point.id
    assert point.visual.size == 3.0
    # still a KeyError for callers that only know the builtin
    assert isinstance(info.value, KeyError)


def test_key_value_string_without_separator_is_rejected(scene, make_point):
    with pytest.raises(UnsupportedPropertyError):
        make_point(0, 0).set_property("bogus")


def test_glider_projects_onto_a_line(scene):
    a = Point(scene, (0, 0))
    b = Point(scene, (10, 10))
    line = Line(scene, a, b)

    glider = Glider(scene, (10, 0), line)

    np.testing.assert_allclose(glider.coords.usr, [5, 5])


def test_glider_projects_onto_a_circle(scene):
    center = Point(scene, (1, 1))
    circle = Circle(scene, center, 2.0)

    glider = Glider(scene, (1, 5), circle)

    np.testing.assert_allclose(glider.coords.usr, [1, 3])


def test_glider_at_circle_center_picks_the_right_hand_point(scene):
    center = Point(scene, (0, 0))
    glider = Glider(scene, (0, 0), Circle(scene, center, 4.0))

    np.testing.assert_allclose(glider.coords.usr, [4, 0])


def test_glider_needs_a_track(scene, make_point):
    with pytest.raises(InvalidParentsError):
        Glider(scene, (0, 0), make_point(1, 1))


def test_circle_rejects_negative_radius(scene, make_point):
    with pytest.raises(InvalidParentsError):
        Circle(scene, make_point(0, 0), -1)


def test_degenerate_line_projects_to_its_first_point(scene):
    a = Point(scene, (2, 3))
    b = Point(scene, (2, 3))

    glider = Glider(scene, (9, 9), Line(scene, a, b))

    np.testing.assert_allclose(glider.coords.usr, [2, 3])


def test_set_position_directly_without_group(scene, make_point):
    point = make_point(1, 1)

    delta = point.set_position_directly((4, -3))

    assert (delta.x, delta.y) == (3, -4)
    np.testing.assert_allclose(point.coords.scr, [4, -3])


def test_registered_creators(scene):
    a = scene.create("point", [0, 0])
    b = scene.create("point", [4, 0], {"name": "B", "size": 4})
    line = scene.create("line", [a, "B"])
    circle = scene.create("circle", [a.id, 2])
    on_line = scene.create("glider", [1, 3, line])
    on_circle = scene.create("glider", [circle])

    assert b.name == "B" and b.visual.size == 4
    assert line.point1 is a and line.point2 is b
    np.testing.assert_allclose(on_line.coords.usr, [1, 0])
    np.testing.assert_allclose(on_circle.coords.usr, [2, 0])


@pytest.mark.parametrize("element_type, parents", [
    ("point", [1]),
    ("line", ["missing", "also-missing"]),
    ("circle", [0]),
    ("glider", [1, 2]),
])
def test_creators_reject_bad_parents(scene, element_type, parents):
    with pytest.raises(InvalidParentsError):
        scene.create(element_type, parents)


def test_screen_method_points(scene):
    point = Point(scene, (3, 4), method=CoordsMethod.SCREEN)

    np.testing.assert_allclose(point.coords.usr, [3, -4])
