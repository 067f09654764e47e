from __future__ import annotations

from typing import Optional

import numpy as np

from .geometry import scan_angles, sector_mask
from .state import PerceptionSnapshot


class ScanAnalyzer:
    """Reduces one planar scan to the flags the behaviors act on.

    Readings that are NaN, infinite or outside ``[range_min, range_max]``
    are dropped, so a sector without valid readings counts as free space.
    Total sensor silence is handled by the controller's staleness check,
    not here.
    """

    def analyze(
        self,
        scan,
        turn_type: int,
        cfg,
        stamp: Optional[float] = None,
    ) -> PerceptionSnapshot:
        ranges = np.asarray(scan.ranges, dtype=float)
        angles = scan_angles(scan.angle_min, scan.angle_increment, ranges.size)

        with np.errstate(invalid="ignore"):
            valid = (
                np.isfinite(ranges)
                & (ranges >= scan.range_min)
                & (ranges <= scan.range_max)
            )

        front_min = self._sector_min(ranges, valid, sector_mask(angles, 0.0, cfg.front_half))
        left_min = self._sector_min(
            ranges, valid, sector_mask(angles, cfg.side_center, cfg.side_half)
        )
        right_min = self._sector_min(
            ranges, valid, sector_mask(angles, -cfg.side_center, cfg.side_half)
        )

        if turn_type > 0:
            lateral_min = right_min
        elif turn_type < 0:
            lateral_min = left_min
        else:
            lateral_min = min(left_min, right_min)

        if stamp is None:
            stamp = getattr(scan, "stamp", None)

        return PerceptionSnapshot(
            obstacle_ahead=front_min < cfg.security_distance,
            near_anchor_wall=lateral_min <= cfg.wall_follow_distance + cfg.wall_tolerance,
            front_min=front_min,
            left_min=left_min,
            right_min=right_min,
            stamp=stamp,
        )

    @staticmethod
    def _sector_min(ranges: np.ndarray, valid: np.ndarray, mask: np.ndarray) -> float:
        selected = ranges[valid & mask]
        if selected.size == 0:
            return float("inf")
        return float(selected.min())
