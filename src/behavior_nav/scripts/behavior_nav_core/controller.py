from __future__ import annotations

import math
import threading
import time
from dataclasses import replace
from typing import Callable, Optional

from .behaviors import controlled_random_step, total_random_step, wall_follow_step
from .config import ControllerConfig
from .direction import DirectionSelector, RandomDirectionSelector
from .emitter import CommandEmitter
from .geometry import wrap_angle
from .perception import ScanAnalyzer
from .state import BehaviorFlags, BehaviorMode, PerceptionSnapshot, TickResult, TurnState
from .turning import TurnStateMachine

_STEPS = {
    BehaviorMode.WALL_FOLLOW: wall_follow_step,
    BehaviorMode.CONTROLLED_RANDOM: controlled_random_step,
    BehaviorMode.TOTAL_RANDOM: total_random_step,
}


class NavigationController:
    """Turns scans into one velocity command per control cycle.

    Usage:
        controller = NavigationController(sink)
        controller.on_scan(scan)          # from the sensor feed
        controller.wall_follow_move()     # from the control timer

    ``sink`` is the actuation port: anything with ``send(linear, angular)``.
    ``clock`` returns seconds and drives both scan staleness and the
    dead-reckoned turn progress used when no heading feed is attached.
    """

    def __init__(
        self,
        sink,
        cfg: Optional[ControllerConfig] = None,
        selector: Optional[DirectionSelector] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cfg = cfg if cfg is not None else ControllerConfig()
        self.selector = selector if selector is not None else RandomDirectionSelector()
        self.clock = clock
        self.scan_analyzer = ScanAnalyzer()
        self.turns = TurnStateMachine()
        self.emitter = CommandEmitter(sink, lambda: self.cfg)
        self._lock = threading.RLock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.turns.reset()
            self._snapshot = PerceptionSnapshot.fail_safe()
            self._last_scan_sec: Optional[float] = None
            self._stale_reported = False
            self._following_wall = False
            self._drift_cycles = 0
            self._wall_lost_reported = False
            self._heading: Optional[float] = None
            self._heading_sec: Optional[float] = None
            self._heading_delta = 0.0
            self._last_cycle_sec: Optional[float] = None
            self._last_command = (0.0, 0.0)

    # === inbound ports =====================================================
    def on_scan(self, scan, stamp: Optional[float] = None) -> PerceptionSnapshot:
        with self._lock:
            snapshot = self.scan_analyzer.analyze(scan, self.turns.turn_type, self.cfg, stamp)
            self._snapshot = snapshot
            self._last_scan_sec = self.clock()
            return snapshot

    def update_heading(self, yaw: float) -> None:
        with self._lock:
            if self._heading is not None:
                self._heading_delta += abs(wrap_angle(yaw - self._heading))
            self._heading = float(yaw)
            self._heading_sec = self.clock()

    # === configuration =====================================================
    def set_config(self, cfg: ControllerConfig) -> None:
        with self._lock:
            self.cfg = cfg

    def _reconfigure(self, **changes) -> None:
        with self._lock:
            # replace() re-runs validation; on error the current config stays.
            self.cfg = replace(self.cfg, **changes)

    def set_security_distance(self, security_distance: float) -> None:
        self._reconfigure(security_distance=security_distance)

    def set_wall_follow_distance(self, wall_follow_distance: float) -> None:
        self._reconfigure(wall_follow_distance=wall_follow_distance)

    def set_linear_velocity(self, linear_velocity: float) -> None:
        self._reconfigure(linear_velocity=linear_velocity)

    def set_angular_velocity(self, angular_velocity: float) -> None:
        self._reconfigure(angular_velocity=angular_velocity)

    def set_turn_type(self, turn_type: int) -> None:
        with self._lock:
            self.turns.set_turn_type(turn_type)

    # === observers =========================================================
    def snapshot(self) -> PerceptionSnapshot:
        return self._snapshot

    def turn_state(self) -> TurnState:
        return self.turns.state()

    def can_continue(self) -> bool:
        return not self._snapshot.obstacle_ahead and not self._is_stale(self.clock())

    def is_close_to_wall(self) -> bool:
        return self._snapshot.near_anchor_wall

    def is_following_wall(self) -> bool:
        return self._following_wall

    def is_turning(self) -> bool:
        return self.turns.is_turning

    def flags(self) -> BehaviorFlags:
        return BehaviorFlags(
            can_continue=self.can_continue(),
            is_close_to_wall=self.is_close_to_wall(),
            is_following_wall=self.is_following_wall(),
            is_turning=self.is_turning(),
        )

    # === behaviors =========================================================
    def wall_follow_move(self) -> TickResult:
        return self.step(BehaviorMode.WALL_FOLLOW)

    def controlled_random_move(self) -> TickResult:
        return self.step(BehaviorMode.CONTROLLED_RANDOM)

    def total_random_move(self) -> TickResult:
        return self.step(BehaviorMode.TOTAL_RANDOM)

    def step(self, mode) -> TickResult:
        mode = BehaviorMode(mode)
        with self._lock:
            now = self.clock()
            events: list[tuple[str, str]] = []
            progress = self._turn_progress(now)

            if self._is_stale(now):
                return self._fail_safe_tick(now, events)
            if self._stale_reported:
                self._stale_reported = False
                events.append(("info", "Scan feed is live; resuming behavior."))

            self.turns.advance(progress)
            decision = _STEPS[mode](self._snapshot, self.turns.state(), self.cfg, self.selector)

            lin, ang = self.emitter.emit(decision.linear_x, decision.angular_z)
            self._last_command = (lin, ang)

            if decision.complete_turn:
                self.turns.complete(keep_direction=decision.keep_direction)
            if decision.anchor_side:
                self.turns.anchor(decision.anchor_side)
                events.append(("info", f"Anchored to the {_side_name(decision.anchor_side)} wall."))
            if decision.begin_turn is not None:
                self.turns.begin(decision.begin_turn, decision.turn_target)
                events.append(
                    (
                        "info",
                        f"Turn started: turn_type={decision.begin_turn} "
                        f"front={self._snapshot.front_min:.2f}m ({mode.value}).",
                    )
                )

            wall_lost = False
            if mode == BehaviorMode.WALL_FOLLOW:
                self._following_wall = decision.following_wall
                wall_lost = self._supervise_anchor(decision.drifting, events)
            else:
                self._following_wall = False
                self._drift_cycles = 0
                self._wall_lost_reported = False

            return TickResult(
                linear_x=lin,
                angular_z=ang,
                mode=decision.mode,
                wall_lost=wall_lost,
                events=events,
                diagnostics=self._diagnostics(mode, decision.mode),
            )

    def stop(self) -> TickResult:
        with self._lock:
            self._last_command = self.emitter.emit_stop()
            self._following_wall = False
            return TickResult(0.0, 0.0, mode="stopped")

    # === helpers ===========================================================
    def _is_stale(self, now: float) -> bool:
        if self._last_scan_sec is None:
            return True
        return (now - self._last_scan_sec) > self.cfg.staleness_timeout_sec

    def _heading_is_live(self, now: float) -> bool:
        if self._heading_sec is None:
            return False
        return (now - self._heading_sec) <= self.cfg.staleness_timeout_sec

    def _turn_progress(self, now: float) -> float:
        if self._heading is not None and not self._heading_is_live(now):
            # Heading feed went silent: drop it and dead-reckon until it is back.
            self._heading = None
            self._heading_sec = None
            self._heading_delta = 0.0

        if self._heading is not None:
            progress = self._heading_delta
            self._heading_delta = 0.0
        elif self._last_cycle_sec is None:
            progress = 0.0
        else:
            dt = max(0.0, now - self._last_cycle_sec)
            progress = abs(self._last_command[1]) * dt
        self._last_cycle_sec = now
        return progress

    def _fail_safe_tick(self, now: float, events: list[tuple[str, str]]) -> TickResult:
        self._snapshot = PerceptionSnapshot.fail_safe(stamp=now)
        self._following_wall = False
        if not self._stale_reported:
            self._stale_reported = True
            if self._last_scan_sec is None:
                events.append(("warn", "No scan received yet; holding still."))
            else:
                events.append(
                    (
                        "warn",
                        f"No scan for {now - self._last_scan_sec:.2f}s; holding still.",
                    )
                )
        lin, ang = self.emitter.emit(0.0, 0.0)
        self._last_command = (lin, ang)
        return TickResult(lin, ang, mode="stale", events=events, diagnostics={"mode": "stale"})

    def _supervise_anchor(self, drifting: bool, events: list[tuple[str, str]]) -> bool:
        if not drifting:
            self._drift_cycles = 0
            self._wall_lost_reported = False
            return False
        self._drift_cycles += 1
        if self._drift_cycles < self.cfg.wall_lost_cycles:
            return False
        if not self._wall_lost_reported:
            self._wall_lost_reported = True
            events.append(
                (
                    "warn",
                    f"Lost the {_side_name(self.turns.turn_type)} wall for "
                    f"{self._drift_cycles} cycles.",
                )
            )
        return True

    def _diagnostics(self, mode: BehaviorMode, decision_mode: str) -> dict:
        snap = self._snapshot
        return {
            "behavior": mode.value,
            "mode": decision_mode,
            "front_min": round(snap.front_min, 2),
            "left_min": round(snap.left_min, 2),
            "right_min": round(snap.right_min, 2),
            "turn_type": self.turns.turn_type,
            "turning": self.turns.is_turning,
            "turned_deg": round(math.degrees(self.turns.accumulated_angle), 1),
            "drift_cycles": self._drift_cycles,
        }


def _side_name(side: int) -> str:
    if side < 0:
        return "left"
    if side > 0:
        return "right"
    return "undetermined"
