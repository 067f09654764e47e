from __future__ import annotations

import math

import numpy as np


def wrap_angle(a: float) -> float:
    while a > math.pi:
        a -= 2.0 * math.pi
    while a < -math.pi:
        a += 2.0 * math.pi
    return a


def wrap_angles(angles: np.ndarray) -> np.ndarray:
    return (angles + np.pi) % (2.0 * np.pi) - np.pi


def scan_angles(angle_min: float, angle_increment: float, count: int) -> np.ndarray:
    return angle_min + np.arange(count) * angle_increment


def sector_mask(angles: np.ndarray, center: float, half_width: float) -> np.ndarray:
    return np.abs(wrap_angles(angles - center)) <= half_width


def steer_toward(side: int, magnitude: float) -> float:
    """Angular rate that turns toward ``side`` (-1 left, +1 right).

    Positive angular z is counter-clockwise, so turning toward the right
    wall needs a negative rate.
    """
    return float(-side * abs(magnitude))


def steer_away(side: int, magnitude: float) -> float:
    return float(side * abs(magnitude))
