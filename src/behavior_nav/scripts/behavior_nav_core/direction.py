from __future__ import annotations

import random
from typing import Optional


class DirectionSelector:
    """Picks the side and size of a new turn."""

    def choose_direction(self) -> int:
        raise NotImplementedError

    def choose_turn_angle(self, low: float, high: float) -> float:
        raise NotImplementedError


class RandomDirectionSelector(DirectionSelector):
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def choose_direction(self) -> int:
        return self.rng.choice((-1, 1))

    def choose_turn_angle(self, low: float, high: float) -> float:
        return self.rng.uniform(low, high)


class FixedDirectionSelector(DirectionSelector):
    """Deterministic selector; ``turn_angle`` of None means the lower bound."""

    def __init__(self, direction: int = 1, turn_angle: Optional[float] = None) -> None:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")
        self.direction = direction
        self.turn_angle = turn_angle

    def choose_direction(self) -> int:
        return self.direction

    def choose_turn_angle(self, low: float, high: float) -> float:
        if self.turn_angle is None:
            return low
        return min(max(self.turn_angle, low), high)
