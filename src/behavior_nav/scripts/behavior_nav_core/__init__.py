"""Reactive wall-following and random-exploration behaviors."""

from .config import ConfigurationError, ControllerConfig
from .controller import NavigationController
from .direction import DirectionSelector, FixedDirectionSelector, RandomDirectionSelector
from .emitter import ActuationError, CommandEmitter
from .state import (
    BehaviorFlags,
    BehaviorMode,
    PerceptionSnapshot,
    ScanSample,
    TickResult,
    TurnState,
)

__all__ = [
    "ActuationError",
    "BehaviorFlags",
    "BehaviorMode",
    "CommandEmitter",
    "ConfigurationError",
    "ControllerConfig",
    "DirectionSelector",
    "FixedDirectionSelector",
    "NavigationController",
    "PerceptionSnapshot",
    "RandomDirectionSelector",
    "ScanSample",
    "TickResult",
    "TurnState",
]
