from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


class BehaviorMode(Enum):
    WALL_FOLLOW = "wall_follow"
    CONTROLLED_RANDOM = "controlled_random"
    TOTAL_RANDOM = "total_random"


@dataclass
class ScanSample:
    ranges: Sequence[float]
    angle_min: float
    angle_increment: float
    range_min: float = 0.0
    range_max: float = float("inf")
    stamp: Optional[float] = None


@dataclass(frozen=True)
class PerceptionSnapshot:
    obstacle_ahead: bool
    near_anchor_wall: bool
    front_min: float = float("inf")
    left_min: float = float("inf")
    right_min: float = float("inf")
    stamp: Optional[float] = None
    stale: bool = False

    @classmethod
    def fail_safe(cls, stamp: Optional[float] = None) -> "PerceptionSnapshot":
        """Snapshot used when no recent scan is available: assume blocked."""
        return cls(obstacle_ahead=True, near_anchor_wall=False, stamp=stamp, stale=True)

    def closer_side(self) -> int:
        """Side with the nearer wall (-1 left, +1 right), 0 when neither is seen."""
        if self.left_min == float("inf") and self.right_min == float("inf"):
            return 0
        return -1 if self.left_min < self.right_min else 1


@dataclass(frozen=True)
class TurnState:
    turn_type: int = 0
    is_turning: bool = False
    target_angle: Optional[float] = None
    accumulated_angle: float = 0.0


@dataclass(frozen=True)
class BehaviorFlags:
    can_continue: bool
    is_close_to_wall: bool
    is_following_wall: bool
    is_turning: bool


@dataclass
class TickResult:
    linear_x: float
    angular_z: float
    mode: str = "idle"
    wall_lost: bool = False
    events: list[tuple[str, str]] = field(default_factory=list)
    diagnostics: dict = field(default_factory=dict)
