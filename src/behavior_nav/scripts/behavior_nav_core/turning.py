from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from .state import TurnState

VALID_TURN_TYPES = (-1, 0, 1)


class TurnPhase(Enum):
    STRAIGHT = auto()
    TURNING = auto()


class TurnStateMachine:
    """Owns the turn direction and the progress of the current turn.

    Progress is the accumulated absolute heading change since the turn
    started. A turn without a target angle only ends via ``complete``.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.phase = TurnPhase.STRAIGHT
        self.turn_type = 0
        self.target_angle: Optional[float] = None
        self.accumulated_angle = 0.0

    @property
    def is_turning(self) -> bool:
        return self.phase == TurnPhase.TURNING

    def state(self) -> TurnState:
        return TurnState(
            turn_type=self.turn_type,
            is_turning=self.is_turning,
            target_angle=self.target_angle,
            accumulated_angle=self.accumulated_angle,
        )

    def begin(self, direction: int, target_angle: Optional[float] = None) -> bool:
        if direction not in (-1, 1):
            raise ValueError(f"turn direction must be -1 or 1, got {direction}")
        if self.is_turning:
            return False
        self.phase = TurnPhase.TURNING
        self.turn_type = direction
        self.target_angle = None if target_angle is None else abs(float(target_angle))
        self.accumulated_angle = 0.0
        return True

    def advance(self, delta: float) -> bool:
        if not self.is_turning:
            return False
        self.accumulated_angle += abs(float(delta))
        return self.target_reached()

    def target_reached(self) -> bool:
        if not self.is_turning or self.target_angle is None:
            return False
        return self.accumulated_angle >= self.target_angle

    def complete(self, keep_direction: bool) -> bool:
        if not self.is_turning:
            return False
        self.phase = TurnPhase.STRAIGHT
        self.target_angle = None
        self.accumulated_angle = 0.0
        if not keep_direction:
            self.turn_type = 0
        return True

    def anchor(self, side: int) -> None:
        if side not in (-1, 1):
            raise ValueError(f"anchor side must be -1 or 1, got {side}")
        if not self.is_turning:
            self.turn_type = side

    def set_turn_type(self, turn_type: int) -> None:
        if turn_type not in VALID_TURN_TYPES:
            raise ValueError(f"turn_type must be one of {VALID_TURN_TYPES}, got {turn_type}")
        if turn_type == 0 and self.is_turning:
            raise ValueError("cannot clear turn_type while a turn is in progress")
        self.turn_type = int(turn_type)
