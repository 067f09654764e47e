from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .config import ControllerConfig
from .direction import DirectionSelector
from .geometry import steer_away, steer_toward
from .state import PerceptionSnapshot, TurnState


@dataclass
class BehaviorDecision:
    mode: str
    linear_x: float = 0.0
    angular_z: float = 0.0
    begin_turn: Optional[int] = None
    turn_target: Optional[float] = None
    complete_turn: bool = False
    keep_direction: bool = False
    anchor_side: Optional[int] = None
    following_wall: bool = False
    drifting: bool = False


def _target_reached(turn: TurnState) -> bool:
    return (
        turn.is_turning
        and turn.target_angle is not None
        and turn.accumulated_angle >= turn.target_angle
    )


def wall_follow_step(
    snapshot: PerceptionSnapshot,
    turn: TurnState,
    cfg: ControllerConfig,
    selector: DirectionSelector,
) -> BehaviorDecision:
    """One wall-following cycle.

    The robot turns away from the anchor side in place while blocked, and
    only stops turning once the front is clear and the anchor wall is back
    in range (or the turn limit has been used up).
    """
    v = cfg.linear_velocity
    w = cfg.angular_velocity

    if snapshot.obstacle_ahead:
        direction = turn.turn_type or snapshot.closer_side() or selector.choose_direction()
        decision = BehaviorDecision("avoid", 0.0, steer_away(direction, w))
        if not turn.is_turning:
            decision.begin_turn = direction
            decision.turn_target = cfg.wall_turn_limit
        return decision

    if turn.is_turning:
        if snapshot.near_anchor_wall:
            return BehaviorDecision(
                "follow",
                v,
                0.0,
                complete_turn=True,
                keep_direction=True,
                following_wall=True,
            )
        if _target_reached(turn):
            # Same command the drift branch gives once the turn is closed.
            return BehaviorDecision(
                "reacquire",
                v,
                steer_toward(turn.turn_type, w * cfg.drift_gain),
                complete_turn=True,
                keep_direction=True,
                drifting=True,
            )
        return BehaviorDecision("turn_away", 0.0, steer_away(turn.turn_type, w))

    if not snapshot.near_anchor_wall:
        if turn.turn_type == 0:
            return BehaviorDecision("search", v, 0.0)
        return BehaviorDecision(
            "drift",
            v,
            steer_toward(turn.turn_type, w * cfg.drift_gain),
            drifting=True,
        )

    decision = BehaviorDecision("follow", v, 0.0, following_wall=True)
    if turn.turn_type == 0:
        decision.anchor_side = snapshot.closer_side()
    return decision


def _random_step(
    snapshot: PerceptionSnapshot,
    turn: TurnState,
    cfg: ControllerConfig,
    selector: DirectionSelector,
    pick_target: Callable[[], float],
) -> BehaviorDecision:
    decision = BehaviorDecision("cruise", cfg.linear_velocity, 0.0)
    turning = turn.is_turning

    if turning and _target_reached(turn):
        decision.complete_turn = True
        turning = False

    if turning:
        decision.mode = "turn"
        decision.linear_x = 0.0
        decision.angular_z = steer_toward(turn.turn_type, cfg.angular_velocity)
        return decision

    if snapshot.obstacle_ahead:
        direction = selector.choose_direction()
        decision.mode = "turn"
        decision.begin_turn = direction
        decision.turn_target = pick_target()
        decision.linear_x = 0.0
        decision.angular_z = steer_toward(direction, cfg.angular_velocity)
    return decision


def controlled_random_step(
    snapshot: PerceptionSnapshot,
    turn: TurnState,
    cfg: ControllerConfig,
    selector: DirectionSelector,
) -> BehaviorDecision:
    return _random_step(snapshot, turn, cfg, selector, lambda: cfg.controlled_turn_angle)


def total_random_step(
    snapshot: PerceptionSnapshot,
    turn: TurnState,
    cfg: ControllerConfig,
    selector: DirectionSelector,
) -> BehaviorDecision:
    return _random_step(
        snapshot,
        turn,
        cfg,
        selector,
        lambda: selector.choose_turn_angle(cfg.min_turn_angle, cfg.max_turn_angle),
    )
