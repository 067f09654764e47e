import math

import pytest

from behavior_nav_core import ControllerConfig, FixedDirectionSelector, NavigationController, ScanSample

SCAN_POINTS = 720
FAR = 10.0


def make_scan(front=FAR, left=FAR, right=FAR, background=FAR, points=SCAN_POINTS, range_max=12.0):
    """Full 360 degree scan with constant ranges per sector.

    Samples sit half an increment off the sector edges so the default
    30 degree forward cone and the 60..120 degree side cones select whole
    blocks of samples.
    """
    inc = 2.0 * math.pi / points
    angle_min = -math.pi + inc / 2.0
    ranges = []
    for i in range(points):
        deg = math.degrees(angle_min + i * inc)
        if abs(deg) <= 30.0:
            ranges.append(front)
        elif 60.0 <= deg <= 120.0:
            ranges.append(left)
        elif -120.0 <= deg <= -60.0:
            ranges.append(right)
        else:
            ranges.append(background)
    return ScanSample(
        ranges=ranges,
        angle_min=angle_min,
        angle_increment=inc,
        range_min=0.05,
        range_max=range_max,
    )


class RecordingSink:
    def __init__(self):
        self.commands = []

    def send(self, linear_velocity, angular_velocity):
        self.commands.append((linear_velocity, angular_velocity))

    @property
    def last(self):
        return self.commands[-1]


class FailingSink:
    def __init__(self):
        self.calls = 0

    def send(self, linear_velocity, angular_velocity):
        self.calls += 1
        raise OSError("motor bus offline")


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, dt):
        self.now += dt


@pytest.fixture
def cfg():
    return ControllerConfig()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(sink, clock):
    return NavigationController(sink, selector=FixedDirectionSelector(1), clock=clock)
