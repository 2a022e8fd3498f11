"""
Scene (Host Model)
==================
This module defines the container that owns elements and groups.

Why is this file needed?
------------------------
1. State Management: It holds the element registry, the group registry and the
   object counter in one place. Nothing here is global; every Scene owns its own.
2. Services: Groups and elements ask the scene for ids, names, element lookup
   and coordinate conversion.

Classes:
    Scene: The host of one interactive drawing.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence, Union, TYPE_CHECKING
import itertools
import logging

import numpy as np

from pointgroups.config import DEFAULT_SCENE_ID, GROUP_NAME_PREFIX, SceneSettings
from pointgroups.model.elements import Element
from pointgroups.model.group import Group
from pointgroups.model.registry import create_element

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class Scene:
    """
    Owns elements, groups and the coordinate system of one drawing.
    Pass this instance to everything that creates elements or groups.
    """
    def __init__(
        self,
        scene_id: str = DEFAULT_SCENE_ID,
        settings: Optional[SceneSettings] = None,
        origin: tuple[float, float] = (0.0, 0.0),
        unit_x: float = 1.0,
        unit_y: float = 1.0,
    ) -> None:
        """
        Args:
            scene_id: Prefix of all generated ids.
            settings: Policies, defaults to SceneSettings().
            origin: Screen position of the user origin in pixels.
            unit_x: Pixels per user unit along x.
            unit_y: Pixels per user unit along y. Screen y grows downwards.
        """
        if unit_x == 0 or unit_y == 0:
            raise ValueError("Scene units must be non-zero.")
        self.id = scene_id
        self.settings = settings or SceneSettings()
        self.origin = np.array(origin, dtype=np.float64)
        self.unit_x = float(unit_x)
        self.unit_y = float(unit_y)

        self.elements: dict[str, Element] = {}
        self.groups: dict[str, Group] = {}
        self.num_objects: int = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, elements={len(self.elements)}, groups={len(self.groups)})"

    # ------------------------------------------------------------------------------
    # Ids & names
    # ------------------------------------------------------------------------------

    def next_object_number(self) -> int:
        """Returns the current object number and advances the counter."""
        number = self.num_objects
        self.num_objects += 1
        return number

    def generate_name(self, obj: Element | Group) -> str:
        """
        Returns an unused name: capital letters for points and groups, small
        letters for everything else, then the same letters with _{1}, _{2}, ...
        Group names are checked with their "group_" prefix.
        """
        if isinstance(obj, Group) or getattr(obj, "is_point_like", False):
            alphabet = self.settings.point_name_alphabet
        else:
            alphabet = self.settings.point_name_alphabet.lower()
        prefix = GROUP_NAME_PREFIX if isinstance(obj, Group) else ""

        taken = {el.name for el in self.elements.values()}
        taken.update(getattr(g, "name", None) for g in self.groups.values())

        for index in itertools.count():
            for letter in alphabet:
                name = letter if index == 0 else f"{letter}_{{{index}}}"
                if prefix + name not in taken:
                    return name

    # ------------------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------------------

    def add_element(self, element: Element) -> None:
        if element.id in self.elements and self.elements[element.id] is not element:
            logger.warning(f"Element id '{element.id}' is already in use, overwriting.")
        self.elements[element.id] = element

    def remove_element(self, ref: Union[Element, str]) -> None:
        """
        Deletes an element from the scene. Groups drop it on their next update.
        Unknown ids are ignored.
        """
        element_id = getattr(ref, "id", ref)
        if self.elements.pop(element_id, None) is not None:
            logger.debug(f"Removed element {element_id}")

    def has_element(self, element_id: str) -> bool:
        return element_id in self.elements

    def get_element(self, ref: Any) -> Optional[Element]:
        """
        Resolves an element, element id or element name.
        Returns None if nothing matches.
        """
        if isinstance(ref, Element):
            return ref
        if not isinstance(ref, str):
            return None
        element = self.elements.get(ref)
        if element is not None:
            return element
        for candidate in self.elements.values():
            if candidate.name == ref:
                return candidate
        return None

    def create(
        self,
        element_type: str,
        parents: Sequence[Any],
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Element | Group:
        """Creates any registered element type, e.g. scene.create("group", [p1, p2])."""
        return create_element(self, element_type, parents, attributes)

    def update(self) -> Scene:
        """Recomputes every element in creation order."""
        for element in list(self.elements.values()):
            element.update()
        return self

    # ------------------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------------------

    def register_group(self, group: Group) -> None:
        current = self.groups.get(group.id)
        if current is not None and current is not group:
            logger.warning(f"Group id '{group.id}' is already in use, overwriting.")
        self.groups[group.id] = group

    def unregister_group(self, group: Group) -> None:
        if self.groups.get(group.id) is group:
            del self.groups[group.id]
            logger.debug(f"Unregistered group {group.id}")

    def get_group(self, group_id: str) -> Optional[Group]:
        return self.groups.get(group_id)

    def remove_group(self, ref: Union[Group, str]) -> None:
        """Releases all members of a group and forgets it."""
        group = ref if isinstance(ref, Group) else self.groups.get(ref)
        if group is None:
            return
        if group.members:
            group.ungroup()
        self.unregister_group(group)

    # ------------------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------------------

    def usr_to_scr(self, usr: Iterable[float]) -> npt.NDArray[np.float64]:
        x, y = list(usr)[:2]
        return np.array([
            self.origin[0] + self.unit_x * x,
            self.origin[1] - self.unit_y * y,
        ], dtype=np.float64)

    def scr_to_usr(self, scr: Iterable[float]) -> npt.NDArray[np.float64]:
        sx, sy = list(scr)[:2]
        return np.array([
            (sx - self.origin[0]) / self.unit_x,
            (self.origin[1] - sy) / self.unit_y,
        ], dtype=np.float64)
