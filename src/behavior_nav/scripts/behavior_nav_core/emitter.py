from __future__ import annotations

import math
from typing import Callable

from .config import ControllerConfig


class ActuationError(RuntimeError):
    """The actuation sink refused or failed to accept a command."""


def _bounded(value: float, magnitude: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return math.copysign(min(abs(value), abs(magnitude)), value) if value != 0.0 else 0.0


class CommandEmitter:
    """Clamps a velocity pair and hands it to the actuation sink.

    The sink is anything with ``send(linear_velocity, angular_velocity)``.
    ``config`` returns the current limits, so setters on the owner apply
    from the next command on.
    """

    def __init__(self, sink, config: Callable[[], ControllerConfig]) -> None:
        self.sink = sink
        self.config = config

    def emit(self, linear: float, angular: float) -> tuple[float, float]:
        cfg = self.config()
        lin = _bounded(linear, cfg.linear_velocity)
        ang = _bounded(angular, cfg.angular_velocity)
        try:
            self.sink.send(lin, ang)
        except Exception as exc:
            raise ActuationError(f"failed to send command ({lin:.3f}, {ang:.3f}): {exc}") from exc
        return (lin, ang)

    def emit_stop(self) -> tuple[float, float]:
        try:
            self.sink.send(0.0, 0.0)
        except Exception as exc:
            raise ActuationError(f"failed to send stop command: {exc}") from exc
        return (0.0, 0.0)
