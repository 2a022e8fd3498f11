"""
Scene Elements
==============
Defines the element types a scene can hold.

Only point-like elements (free points and gliders) can take part in groups.
Lines and circles exist as tracks for gliders.

Classes:
    ElementKind: Classification of element types.
    VisualProperties: Style/attribute bag behind set_property().
    Element: Base class with the group membership stack.
    Point, Glider, Line, Circle: Concrete elements.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any, Iterable, Mapping, Optional, Sequence, TYPE_CHECKING
import logging

import numpy as np

from pointgroups.model.errors import InvalidParentsError, UnsupportedPropertyError
from pointgroups.model.geometry_primitives import Coords, CoordsMethod, Vector
from pointgroups.model.registry import register_element

if TYPE_CHECKING:
    import numpy.typing as npt
    from pointgroups.model.group import Group
    from pointgroups.model.scene import Scene

logger = logging.getLogger(__name__)


class ElementKind(StrEnum):
    POINT = "point"
    GLIDER = "glider"
    LINE = "line"
    CIRCLE = "circle"


POINT_LIKE_KINDS = frozenset({ElementKind.POINT, ElementKind.GLIDER})

# Prefix used in generated element ids, e.g. "jxgScene1P3"
_ID_PREFIX = {
    ElementKind.POINT: "P",
    ElementKind.GLIDER: "P",
    ElementKind.LINE: "L",
    ElementKind.CIRCLE: "C",
}

_PROPERTY_ALIASES = {
    "locked": "fixed",
    "strokecolor": "stroke_color",
    "fillcolor": "fill_color",
}


@dataclass
class VisualProperties:
    fixed: bool = False
    visible: bool = True
    stroke_color: str = "#ff0000"
    fill_color: str = "#ff0000"
    size: float = 3.0
    label: str = ""

    @classmethod
    def keys(cls) -> set[str]:
        return {f.name for f in fields(cls)}


def _coerce(value: Any) -> Any:
    """Converts the value part of a 'key:value' string."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.lower() in ("true", "false"):
        return text.lower() == "true"
    try:
        return float(text)
    except ValueError:
        return text


class Element:
    """
    Base class of everything that lives in a scene.

    `group_stack` lists the groups this element belongs to in join order.
    The last entry is the active group.
    """
    KIND: ElementKind

    def __init__(self, scene: Scene, attributes: Optional[Mapping[str, Any]] = None) -> None:
        attrs = dict(attributes or {})
        self.scene = scene
        self.visual = VisualProperties()
        self.group_stack: list[Group] = []

        number = scene.next_object_number()
        self.id: str = attrs.pop("id", None) or f"{scene.id}{_ID_PREFIX[self.KIND]}{number}"
        self.name: str = attrs.pop("name", None) or scene.generate_name(self)

        if attrs:
            self.set_property(attrs)

        scene.add_element(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, name={self.name!r})"

    @property
    def kind(self) -> ElementKind:
        return self.KIND

    @property
    def locked(self) -> bool:
        """Locked elements cannot be dragged or grouped."""
        return self.visual.fixed

    @property
    def is_point_like(self) -> bool:
        return self.KIND in POINT_LIKE_KINDS

    @property
    def active_group(self) -> Optional[Group]:
        return self.group_stack[-1] if self.group_stack else None

    def set_property(self, *args: Any, **kwargs: Any) -> None:
        """
        Sets visual properties.

        Accepts any mix of mappings, "key:value" strings and keyword arguments:
            el.set_property({"fixed": True}, "strokeColor:blue", size=5)

        Raises:
            UnsupportedPropertyError: if any key is unknown. Nothing is applied then.
        """
        updates: dict[str, Any] = {}
        for arg in args:
            if isinstance(arg, Mapping):
                updates.update(arg)
            elif isinstance(arg, str):
                key, sep, value = arg.partition(":")
                if not sep:
                    raise UnsupportedPropertyError(arg, self.id)
                updates[key.strip()] = _coerce(value)
            else:
                raise TypeError(f"Cannot read properties from {type(arg).__name__}")
        updates.update(kwargs)

        known = VisualProperties.keys()
        resolved: dict[str, Any] = {}
        for key, value in updates.items():
            name = _PROPERTY_ALIASES.get(key.lower(), key.lower())
            if name not in known:
                raise UnsupportedPropertyError(key, self.id)
            resolved[name] = value

        for name, value in resolved.items():
            setattr(self.visual, name, value)

    def update(self, propagated: bool = False) -> Element:
        """Recomputes derived state. Plain elements have none."""
        return self


class Point(Element):
    """A free point."""
    KIND = ElementKind.POINT

    def __init__(
        self,
        scene: Scene,
        coordinates: Iterable[float],
        attributes: Optional[Mapping[str, Any]] = None,
        method: CoordsMethod = CoordsMethod.USER,
    ) -> None:
        self.coords = Coords(method, coordinates, scene)
        super().__init__(scene, attributes)

    @property
    def x(self) -> float:
        """X user coordinate."""
        return float(self.coords.usr[0])

    @property
    def y(self) -> float:
        """Y user coordinate."""
        return float(self.coords.usr[1])

    def set_position_directly(self, scr: Iterable[float]) -> Vector:
        """
        Moves the point to screen position `scr` as a drag would.

        The screen delta is handed to the active group as its pending offset and
        a primary update is run, which moves the rest of the group.

        Returns:
            The applied screen delta.
        """
        old = self.coords.scr
        self.coords = Coords(CoordsMethod.SCREEN, scr, self.scene)
        delta = Vector.of(self.coords.scr - old)
        logger.debug(f"{self.id} moved by ({delta.x:g}, {delta.y:g}) px")

        group = self.active_group
        if group is not None:
            group.pending_offset = delta
            group.pending_origin = self.id
        self.update()
        return delta

    def update(self, propagated: bool = False) -> Point:
        """
        Re-derives user coordinates and constraints from the screen position.

        Args:
            propagated: True when called by a group on behalf of another member.
                Such updates never start a group update of their own.

        A primary update starts the active group's update only if this point
        is the group's `pending_origin`, so a scene-wide update after a drag
        moves the group relative to the dragged point.
        """
        self.coords = Coords(CoordsMethod.SCREEN, self.coords.scr, self.scene)
        self._update_constraint()

        group = self.active_group
        if (
            not propagated
            and group is not None
            and group.pending_origin == self.id
            and not group.pending_offset.is_zero()
        ):
            group.update(self)
        return self

    def _update_constraint(self) -> None:
        pass


class Glider(Point):
    """A point that stays on a line or circle."""
    KIND = ElementKind.GLIDER

    def __init__(
        self,
        scene: Scene,
        coordinates: Iterable[float],
        slide_object: Line | Circle,
        attributes: Optional[Mapping[str, Any]] = None,
        method: CoordsMethod = CoordsMethod.USER,
    ) -> None:
        if not isinstance(slide_object, (Line, Circle)):
            raise InvalidParentsError(f"A glider needs a line or circle to slide on, got {slide_object!r}")
        self.slide_object = slide_object
        super().__init__(scene, coordinates, attributes, method)
        self._update_constraint()

    def _update_constraint(self) -> None:
        projected = self.slide_object.project(self.coords.usr)
        self.coords = Coords(CoordsMethod.USER, projected, self.scene)


class Line(Element):
    """Infinite straight line through two points."""
    KIND = ElementKind.LINE

    def __init__(
        self,
        scene: Scene,
        point1: Point,
        point2: Point,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.point1 = point1
        self.point2 = point2
        super().__init__(scene, attributes)

    def project(self, usr: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Orthogonal projection of a user position onto the line."""
        p1 = self.point1.coords.usr
        d = self.point2.coords.usr - p1
        dd = float(np.dot(d, d))
        if dd <= self.scene.settings.epsilon:
            return p1
        t = float(np.dot(np.asarray(usr) - p1, d)) / dd
        return p1 + t * d


class Circle(Element):
    """Circle given by a center point and a radius in user units."""
    KIND = ElementKind.CIRCLE

    def __init__(
        self,
        scene: Scene,
        center: Point,
        radius: float,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if radius < 0:
            raise InvalidParentsError(f"Circle radius must be non-negative, got {radius}")
        self.center = center
        self.radius = float(radius)
        super().__init__(scene, attributes)

    def project(self, usr: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Closest point on the circle to a user position."""
        c = self.center.coords.usr
        v = np.asarray(usr, dtype=np.float64) - c
        n = float(np.linalg.norm(v))
        if n <= self.scene.settings.epsilon:
            # Any point is closest; pick the one to the right of the center
            return c + np.array([self.radius, 0.0])
        return c + v * (self.radius / n)


# -------------------------------------------------------------------------------
# Registered creators
# -------------------------------------------------------------------------------

def _resolve_point(scene: Scene, ref: Any) -> Point:
    element = scene.get_element(ref)
    if not isinstance(element, Point):
        raise InvalidParentsError(f"Expected a point, got {ref!r}")
    return element


@register_element("point")
def create_point(scene: Scene, parents: Sequence[Any], attributes: Mapping[str, Any]) -> Point:
    """parents: [x, y] in user coordinates."""
    if len(parents) != 2:
        raise InvalidParentsError(f"A point needs [x, y], got {list(parents)!r}")
    return Point(scene, [float(p) for p in parents], attributes)


@register_element("glider")
def create_glider(scene: Scene, parents: Sequence[Any], attributes: Mapping[str, Any]) -> Glider:
    """parents: [x, y, line or circle] or [line or circle]."""
    if len(parents) == 3:
        x, y, track = parents
    elif len(parents) == 1:
        x, y, track = 0.0, 0.0, parents[0]
    else:
        raise InvalidParentsError(f"A glider needs [x, y, track] or [track], got {list(parents)!r}")
    return Glider(scene, [float(x), float(y)], scene.get_element(track), attributes)


@register_element("line")
def create_line(scene: Scene, parents: Sequence[Any], attributes: Mapping[str, Any]) -> Line:
    if len(parents) != 2:
        raise InvalidParentsError(f"A line needs two points, got {list(parents)!r}")
    return Line(scene, _resolve_point(scene, parents[0]), _resolve_point(scene, parents[1]), attributes)


@register_element("circle")
def create_circle(scene: Scene, parents: Sequence[Any], attributes: Mapping[str, Any]) -> Circle:
    if len(parents) != 2:
        raise InvalidParentsError(f"A circle needs [center, radius], got {list(parents)!r}")
    return Circle(scene, _resolve_point(scene, parents[0]), float(parents[1]), attributes)
