from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence, Union, TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from pointgroups.controller.drag import DragController
from pointgroups.model.scene import Scene

if TYPE_CHECKING:
    from pointgroups.model.group import Group


class SceneStore(QObject):
    """Wraps a Scene and emits signals so views can follow group changes."""
    groups_changed = Signal(object)
    elements_moved = Signal(object)

    def __init__(self, scene: Optional[Scene] = None) -> None:
        super().__init__()
        self.scene = scene or Scene()
        self.drag = DragController(self.scene)

    def _emit_groups(self) -> None:
        self.groups_changed.emit(dict(self.scene.groups))

    def create_group(self, parents: Sequence[Any], attributes: Optional[Mapping[str, Any]] = None) -> Group:
        group = self.scene.create("group", parents, attributes)
        self._emit_groups()
        return group

    def ungroup(self, group: Group) -> None:
        group.ungroup()
        self._emit_groups()

    def remove_group(self, ref: Union[Group, str]) -> None:
        self.scene.remove_group(ref)
        self._emit_groups()

    def begin_drag(self, ref: Any) -> bool:
        return self.drag.begin(ref)

    def drag_to(self, scr: Iterable[float]) -> list[str]:
        moved = self.drag.move_to(scr)
        if moved:
            self.elements_moved.emit(moved)
        return moved

    def end_drag(self) -> None:
        self.drag.end()
