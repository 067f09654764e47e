import pytest

from behavior_nav_core import ActuationError, CommandEmitter, ControllerConfig

from conftest import FailingSink, RecordingSink


@pytest.fixture
def cfg():
    return ControllerConfig(linear_velocity=0.3, angular_velocity=0.6)


@pytest.mark.parametrize(
    "command,expected",
    [
        ((0.1, 0.2), (0.1, 0.2)),
        ((1.0, -5.0), (0.3, -0.6)),
        ((-1.0, 5.0), (-0.3, 0.6)),
        ((float("nan"), float("inf")), (0.0, 0.0)),
        ((0.0, -0.0), (0.0, 0.0)),
    ],
)
def test_emit_clamps_magnitude_and_keeps_sign(cfg, command, expected):
    sink = RecordingSink()
    sent = CommandEmitter(sink, lambda: cfg).emit(*command)
    assert sent == pytest.approx(expected)
    assert sink.commands == [sent]


def test_emit_stop(cfg):
    sink = RecordingSink()
    assert CommandEmitter(sink, lambda: cfg).emit_stop() == (0.0, 0.0)
    assert sink.commands == [(0.0, 0.0)]


def test_sink_failure_is_wrapped(cfg):
    sink = FailingSink()
    with pytest.raises(ActuationError, match="motor bus offline"):
        CommandEmitter(sink, lambda: cfg).emit(0.1, 0.1)
    with pytest.raises(ActuationError):
        CommandEmitter(sink, lambda: cfg).emit_stop()
    assert sink.calls == 2


def test_limits_follow_config_changes(cfg):
    sink = RecordingSink()
    current = {"cfg": cfg}
    emitter = CommandEmitter(sink, lambda: current["cfg"])
    assert emitter.emit(1.0, 1.0) == pytest.approx((0.3, 0.6))
    current["cfg"] = ControllerConfig(linear_velocity=0.1, angular_velocity=0.2)
    assert emitter.emit(1.0, 1.0) == pytest.approx((0.1, 0.2))
