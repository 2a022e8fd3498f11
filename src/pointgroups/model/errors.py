"""
Custom exceptions for pointgroups.

Silent conditions (unresolvable or ineligible group seeds, members deleted from
the scene) are not represented here: they are skipped and logged, never raised.
"""
from __future__ import annotations


class PointGroupsError(Exception):
    """Base exception for all scene-related errors."""

    pass


class UnsupportedPropertyError(PointGroupsError, KeyError):
    """Raised when an element is asked to set a property it does not know."""

    def __init__(self, key: str, element_id: str | None = None):
        self.key = key
        self.element_id = element_id

        message = f"Unsupported property '{key}'"
        if element_id:
            message = f"{message} (element: {element_id})"

        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message
        return self.args[0]


class PropertyBroadcastError(PointGroupsError):
    """Raised by Group.set_property when members failed under the COLLECT policy."""

    def __init__(self, group_id: str, failures: list[tuple[str, Exception]]):
        """
        Initialize PropertyBroadcastError.

        Args:
            group_id: Id of the group whose broadcast failed.
            failures: (element id, exception) for every member that rejected the call.
        """
        self.group_id = group_id
        self.failures = failures

        ids = ", ".join(element_id for element_id, _ in failures)
        super().__init__(f"Setting properties failed on {len(failures)} member(s) of {group_id}: {ids}")


class UnknownElementTypeError(PointGroupsError, KeyError):
    """Raised when no creator is registered for an element type."""

    def __init__(self, element_type: str):
        self.element_type = element_type
        super().__init__(f"No element registered for type '{element_type}'")

    def __str__(self) -> str:
        return self.args[0]


class InvalidParentsError(PointGroupsError, ValueError):
    """Raised when an element creator receives parents it cannot use."""

    pass
