"""
Geometric Primitives for the scene.

Vector is a plain 2D offset (screen pixels for group translations).
Coords keeps a position in both screen and user coordinates of one scene.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Protocol, TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass
class Vector:
    """
    A vector in 2D space representing a translation.
    """
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def of(cls, value: Vector | Iterable[float]) -> Vector:
        """Accepts a Vector or any (dx, dy) pair."""
        if isinstance(value, Vector):
            return cls(value.x, value.y)
        dx, dy = value
        return cls(float(dx), float(dy))

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def is_zero(self, eps: float = 0.0) -> bool:
        return abs(self.x) <= eps and abs(self.y) <= eps

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)


class CoordsMethod(IntEnum):
    """How the numbers handed to Coords are to be read."""
    USER = 1
    SCREEN = 2


class CoordinateSystem(Protocol):
    """The part of a scene Coords needs for conversions."""
    def usr_to_scr(self, usr: Iterable[float]) -> npt.NDArray[np.float64]: ...
    def scr_to_usr(self, scr: Iterable[float]) -> npt.NDArray[np.float64]: ...


class Coords:
    """
    A position stored in user and screen coordinates at the same time.
    Setting either side recomputes the other through the owning scene.
    """
    def __init__(
        self,
        method: CoordsMethod,
        coordinates: Iterable[float],
        system: CoordinateSystem,
    ) -> None:
        self.system = system
        self._usr: npt.NDArray[np.float64] = np.zeros(2, dtype=np.float64)
        self._scr: npt.NDArray[np.float64] = np.zeros(2, dtype=np.float64)
        if method == CoordsMethod.SCREEN:
            self.scr = coordinates
        else:
            self.usr = coordinates

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(usr={self._usr.tolist()}, scr={self._scr.tolist()})"

    @property
    def usr(self) -> npt.NDArray[np.float64]:
        """User coordinates [x, y]."""
        return self._usr.copy()

    @usr.setter
    def usr(self, value: Iterable[float]) -> None:
        self._usr = np.array(list(value)[:2], dtype=np.float64)
        self._scr = np.asarray(self.system.usr_to_scr(self._usr), dtype=np.float64)

    @property
    def scr(self) -> npt.NDArray[np.float64]:
        """Screen coordinates [x, y] in device pixels."""
        return self._scr.copy()

    @scr.setter
    def scr(self, value: Iterable[float]) -> None:
        self._scr = np.array(list(value)[:2], dtype=np.float64)
        self._usr = np.asarray(self.system.scr_to_usr(self._scr), dtype=np.float64)

    def translated(self, offset: Vector) -> Coords:
        """New Coords moved by `offset` in screen space."""
        return Coords(CoordsMethod.SCREEN, self._scr + offset.to_array(), self.system)
