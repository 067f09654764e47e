from __future__ import annotations

import math
from dataclasses import dataclass, field, fields


class ConfigurationError(ValueError):
    """Raised when a controller setting is out of its valid range."""


@dataclass
class ControllerConfig:
    security_distance: float = 0.5
    wall_follow_distance: float = 0.8
    linear_velocity: float = 0.3
    angular_velocity: float = 0.6
    front_half_angle_deg: float = 30.0
    side_center_angle_deg: float = 90.0
    side_half_angle_deg: float = 30.0
    wall_tolerance: float = 0.1
    controlled_turn_angle_deg: float = 90.0
    min_turn_angle_deg: float = 30.0
    max_turn_angle_deg: float = 180.0
    wall_turn_limit_deg: float = 180.0
    drift_gain: float = 0.5
    staleness_timeout_sec: float = 0.5
    wall_lost_cycles: int = 30
    control_rate: float = 10.0

    front_half: float = field(init=False)
    side_center: float = field(init=False)
    side_half: float = field(init=False)
    controlled_turn_angle: float = field(init=False)
    min_turn_angle: float = field(init=False)
    max_turn_angle: float = field(init=False)
    wall_turn_limit: float = field(init=False)

    def __post_init__(self) -> None:
        _require_positive("security_distance", self.security_distance)
        _require_positive("wall_follow_distance", self.wall_follow_distance)
        _require_non_negative("linear_velocity", self.linear_velocity)
        _require_non_negative("angular_velocity", self.angular_velocity)
        _require_non_negative("wall_tolerance", self.wall_tolerance)
        _require_positive("staleness_timeout_sec", self.staleness_timeout_sec)
        _require_positive("control_rate", self.control_rate)

        if not 0.0 < self.front_half_angle_deg <= 180.0:
            raise ConfigurationError(
                f"front_half_angle_deg must be in (0, 180], got {self.front_half_angle_deg}"
            )
        if not 0.0 < self.side_half_angle_deg <= 90.0:
            raise ConfigurationError(
                f"side_half_angle_deg must be in (0, 90], got {self.side_half_angle_deg}"
            )
        if not 0.0 < self.drift_gain <= 1.0:
            raise ConfigurationError(f"drift_gain must be in (0, 1], got {self.drift_gain}")
        _require_whole_count("wall_lost_cycles", self.wall_lost_cycles)
        for name in ("controlled_turn_angle_deg", "min_turn_angle_deg", "wall_turn_limit_deg"):
            _require_positive(name, getattr(self, name))
        if self.max_turn_angle_deg < self.min_turn_angle_deg:
            raise ConfigurationError(
                "max_turn_angle_deg must not be smaller than min_turn_angle_deg "
                f"({self.max_turn_angle_deg} < {self.min_turn_angle_deg})"
            )

        self.wall_lost_cycles = int(self.wall_lost_cycles)
        self.front_half = math.radians(float(self.front_half_angle_deg))
        self.side_center = math.radians(float(self.side_center_angle_deg))
        self.side_half = math.radians(float(self.side_half_angle_deg))
        self.controlled_turn_angle = math.radians(float(self.controlled_turn_angle_deg))
        self.min_turn_angle = math.radians(float(self.min_turn_angle_deg))
        self.max_turn_angle = math.radians(float(self.max_turn_angle_deg))
        self.wall_turn_limit = math.radians(float(self.wall_turn_limit_deg))

    @property
    def control_period(self) -> float:
        return 1.0 / self.control_rate

    @property
    def wall_distance_below_security(self) -> bool:
        # Allowed, but the robot will keep turning away from its own anchor wall.
        return self.wall_follow_distance < self.security_distance

    @classmethod
    def from_node(cls, node) -> "ControllerConfig":
        defaults = cls()
        names = [f.name for f in fields(cls) if f.init]

        for key in names:
            node.declare_parameter(key, getattr(defaults, key))

        kwargs = {key: node.get_parameter(key).value for key in names}
        for key in names:
            # wall_lost_cycles is checked as a whole count in __post_init__
            if key != "wall_lost_cycles":
                kwargs[key] = float(kwargs[key])

        return cls(**kwargs)


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"{name} must be a positive number, got {value}")


def _require_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0.0:
        raise ConfigurationError(f"{name} must be a non-negative number, got {value}")


def _require_whole_count(name: str, value) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value != int(value)
        or value < 1
    ):
        raise ConfigurationError(f"{name} must be a whole number of at least 1, got {value}")
