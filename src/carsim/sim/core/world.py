from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

from .vector import Vector2, distance

if TYPE_CHECKING:
    from .car import Car


@dataclass(frozen=True, slots=True)
class World:
    """Per-frame context handed to one car's update.

    ``actors`` is the roster itself, not a copy: cars updated earlier in the
    same frame are seen at their new positions by later neighbor queries.
    """

    dt: float
    width: float
    height: float
    mouse_pos: Optional[Vector2]
    click_pos: Optional[Vector2]
    current: "Car"
    actors: Sequence["Car"]
    origin: Vector2 = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", self.current.position)

    def neighbors(self, radius: Optional[float] = None) -> List["Car"]:
        others = [car for car in self.actors if car is not self.current]
        if radius is None:
            return others
        return [car for car in others if distance(self.origin, car.position) <= radius]
