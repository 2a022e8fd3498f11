"""
Point Groups
============
A Group couples point-like elements so that dragging one member translates
all other members by the same screen offset.

Membership is tracked twice:
1. `Group.members` maps element id -> element.
2. Every member keeps `group_stack`, the groups it joined in order. Only the
   last (active) group of an element may release it again (LIFO).

Classes:
    Group: The coupled set of points.

Functions:
    create_group: Registered creator for the "group" element type.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Union, TYPE_CHECKING
import logging

from pointgroups.config import GROUP_ID_INFIX, GROUP_NAME_PREFIX, PropertyFailurePolicy
from pointgroups.model.errors import PropertyBroadcastError
from pointgroups.model.geometry_primitives import Vector
from pointgroups.model.registry import register_element

if TYPE_CHECKING:
    from pointgroups.model.elements import Element
    from pointgroups.model.scene import Scene

logger = logging.getLogger(__name__)

ElementRef = Union["Element", str]


class Group:
    """
    A named set of point-like elements moved together as one rigid unit.
    """
    def __init__(
        self,
        scene: Scene,
        group_id: Optional[str] = None,
        name: Optional[str] = None,
        *objects: ElementRef | Sequence[ElementRef],
    ) -> None:
        """
        Create the group and make it the active group of every member.

        Seeds may be passed as one list or one by one:
            Group(scene, None, None, [p1, p2])
            Group(scene, None, None, p1, p2)

        Seeds that cannot be resolved, are locked or are not point-like are
        skipped. A seed that already has an active group pulls that whole
        group into this one.

        Args:
            scene: Host scene, owns the registries and the object counter.
            group_id: Unique id. Generated as <scene id>Group<number> if empty.
            name: Display name. Generated by the scene if empty.
            objects: Seed elements or element ids.
        """
        self.scene = scene
        self.members: dict[str, Element] = {}
        self.pending_offset = Vector()
        # Id of the member that produced pending_offset; only it may start update()
        self.pending_origin: Optional[str] = None

        # Bookkeeping for the host, filled in by create_group
        self.el_type: str = "group"
        self.parents: list[str] = []

        # Counter is drawn even if registration is later overwritten
        number = scene.next_object_number()
        self.id: str = group_id or f"{scene.id}{GROUP_ID_INFIX}{number}"
        scene.register_group(self)

        self.name: str = name or GROUP_NAME_PREFIX + scene.generate_name(self)

        if len(objects) == 1 and isinstance(objects[0], (list, tuple)):
            seeds: Sequence[ElementRef] = objects[0]
        else:
            seeds = objects

        for ref in seeds:
            element = scene.get_element(ref)
            if element is None or element.locked or not element.is_point_like:
                logger.debug(f"Group {self.id}: skipping seed {ref!r}")
                continue
            if element.group_stack:
                self.add_group(element.group_stack[-1])
            self.add_point(element)

        for element in self.members.values():
            element.group_stack.append(self)

        logger.info(f"Created group {self.id} ({self.name}) with {len(self.members)} member(s).")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, name={self.name!r}, members={list(self.members)})"

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self.members.values()))

    def __contains__(self, item: object) -> bool:
        key = getattr(item, "id", item)
        return key in self.members

    @property
    def pending_offset(self) -> Vector:
        """Screen translation waiting for the next update()."""
        return self._pending_offset

    @pending_offset.setter
    def pending_offset(self, value: Vector | Iterable[float]) -> None:
        self._pending_offset = Vector.of(value)

    def member_ids(self) -> list[str]:
        return list(self.members)

    def is_active_for(self, element: Element) -> bool:
        """True if this group is the top of the element's group stack."""
        return element.active_group is self

    # ------------------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------------------

    def add_point(self, element: Element) -> None:
        """
        Adds one element. Does not touch its group stack.
        Locked and non point-like elements are ignored.
        """
        if element.locked or not element.is_point_like:
            logger.debug(f"Group {self.id}: refusing {element.id}")
            return
        self.members[element.id] = element

    def add_points(self, elements: Mapping[Any, Element] | Iterable[Element]) -> None:
        """Adds several elements, given as a sequence or as a mapping of elements."""
        if isinstance(elements, Mapping):
            elements = elements.values()
        for element in elements:
            self.add_point(element)

    def add_group(self, group: Group) -> None:
        """
        Merges all members of another group into this one.
        The other group and the stacks of its members are left as they are.
        """
        for element in group.members.values():
            self.add_point(element)

    def ungroup(self) -> None:
        """
        Releases all members.

        Members that have this group on top of their stack drop it; members
        for which it is shadowed by a newer group keep their stack. Either way
        the member leaves `members`.
        """
        for element_id in list(self.members):
            element = self.members.pop(element_id)
            if element.active_group is self:
                element.group_stack.pop()

        logger.info(f"Ungrouped {self.id}.")

        if self.scene.settings.purge_empty_groups_on_ungroup:
            self.scene.unregister_group(self)

    # ------------------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------------------

    def update(self, origin: ElementRef) -> Group:
        """
        Applies the pending offset to every member except `origin`, then lets
        every member recompute its own state.

        All members are translated before any of them recomputes, since a
        constrained member may depend on the new position of another one.
        Members the scene no longer knows are dropped. Locked members are
        not translated.

        Args:
            origin: The element (or its id) the host already moved.

        Returns:
            The group itself.
        """
        origin_id = getattr(origin, "id", origin)
        offset = self.pending_offset

        # 1. Translate (members locked since joining stay put)
        for element_id, element in self.members.items():
            if element_id == origin_id:
                continue
            if element.locked:
                logger.debug(f"Group {self.id}: not moving locked member {element_id}")
                continue
            element.coords = element.coords.translated(offset)

        self.pending_offset = Vector()
        self.pending_origin = None

        # 2. Settle & prune
        for element_id in list(self.members):
            if self.scene.has_element(element_id):
                self.members[element_id].update(propagated=True)
            else:
                del self.members[element_id]
                logger.debug(f"Group {self.id}: dropped deleted member {element_id}")

        return self

    # ------------------------------------------------------------------------------
    # Style
    # ------------------------------------------------------------------------------

    def set_property(self, *args: Any, **kwargs: Any) -> None:
        """
        Forwards a set_property call unchanged to every member.

        With PropertyFailurePolicy.ABORT the first failing member raises and
        the remaining members are not touched. With COLLECT every member is
        attempted and a PropertyBroadcastError lists all failures.
        """
        policy = self.scene.settings.property_failure_policy
        failures: list[tuple[str, Exception]] = []

        for element_id, element in list(self.members.items()):
            if policy == PropertyFailurePolicy.ABORT:
                element.set_property(*args, **kwargs)
                continue
            try:
                element.set_property(*args, **kwargs)
            except Exception as e:
                logger.warning(f"Group {self.id}: member {element_id} rejected properties: {e}")
                failures.append((element_id, e))

        if failures:
            raise PropertyBroadcastError(self.id, failures)


@register_element("group")
def create_group(scene: Scene, parents: Sequence[ElementRef], attributes: Mapping[str, Any]) -> Group:
    """
    Groups points.

    Args:
        scene: The scene the points are on.
        parents: Points (or point ids) to group.
        attributes: Recognizes "id" and "name".

    Returns:
        The new Group, tagged with `el_type` and the ids of its `parents`.
    """
    group = Group(scene, attributes.get("id"), attributes.get("name"), list(parents))
    group.parents = [getattr(parent, "id", parent) for parent in parents]
    return group
