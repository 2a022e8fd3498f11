from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, TYPE_CHECKING

from pointgroups.model.errors import UnknownElementTypeError

if TYPE_CHECKING:
    from pointgroups.model.scene import Scene

Creator = Callable[["Scene", Sequence[Any], Mapping[str, Any]], Any]

_REGISTRY: dict[str, Creator] = {}


def register_element(element_type: str) -> Callable[[Creator], Creator]:
    """Decorator to register an element creator under its type name."""
    if not element_type:
        raise ValueError("Element type name must not be empty")

    def decorator(creator: Creator) -> Creator:
        _REGISTRY[element_type.lower()] = creator
        return creator

    return decorator


def create_element(
    scene: Scene,
    element_type: str,
    parents: Sequence[Any],
    attributes: Optional[Mapping[str, Any]] = None,
) -> Any:
    creator = _REGISTRY.get(element_type.lower())
    if not creator:
        raise UnknownElementTypeError(element_type)
    return creator(scene, parents, attributes or {})


def list_element_types() -> list[str]:
    return list(_REGISTRY.keys())
