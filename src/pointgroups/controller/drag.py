"""
Drag Handling
=============
This module turns pointer motion on a point into group translations.

Why is this file needed?
------------------------
Hit-testing and input capture belong to the GUI. Once the GUI knows which
point is being dragged and where the pointer is (in screen pixels), this
controller does the bookkeeping: move the point, hand the screen delta to the
point's active group and let the group move the other members.

Classes:
    DragController: One drag gesture at a time on one scene.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, TYPE_CHECKING
import logging

import numpy as np

from pointgroups.model.elements import Point

if TYPE_CHECKING:
    from pointgroups.model.scene import Scene

logger = logging.getLogger(__name__)


class DragController:
    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self._target: Optional[Point] = None

    @property
    def target(self) -> Optional[Point]:
        """The point being dragged, if any."""
        return self._target

    @property
    def dragging(self) -> bool:
        return self._target is not None

    def begin(self, ref: Any) -> bool:
        """
        Starts dragging a point (element, id or name).

        Returns:
            False if the element is unknown, not a point or locked.
        """
        element = self.scene.get_element(ref)
        if not isinstance(element, Point) or element.locked:
            logger.debug(f"Ignoring drag on {ref!r}")
            self._target = None
            return False
        self._target = element
        return True

    def move_to(self, scr: Iterable[float]) -> list[str]:
        """
        Moves the dragged point to a screen position.

        Returns:
            Ids of all elements moved by this step (the point first).
        """
        point = self._target
        if point is None:
            return []

        point.set_position_directly(scr)

        moved = [point.id]
        group = point.active_group
        if group is not None:
            moved.extend(element_id for element_id in group.members if element_id != point.id)
        return moved

    def move_by(self, dx: float, dy: float) -> list[str]:
        """Moves the dragged point by a screen delta."""
        if self._target is None:
            return []
        return self.move_to(self._target.coords.scr + np.array([dx, dy], dtype=np.float64))

    def end(self) -> None:
        self._target = None
