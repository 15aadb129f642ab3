from __future__ import annotations

import math
import random
from typing import Optional

from .sim.core.vector import Vector2


class DeterministicRng:
    def __init__(self, seed: Optional[int]):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def random_angle(self) -> float:
        return self._random.uniform(0.0, 2 * math.pi)

    def random_position(self, width: float, height: float) -> Vector2:
        """Uniform point inside an arena of the given size centred on the origin."""
        hw = width / 2.0
        hh = height / 2.0
        return Vector2(self._random.uniform(-hw, hw), self._random.uniform(-hh, hh))
