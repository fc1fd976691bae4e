"""Shared fixtures for the hexdrift tests."""

import random

import pytest

from hexdrift.config import EngineSettings
from hexdrift.surfaces import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Drawing surface that just records the calls it receives."""

    def __init__(self, width=0, height=0, scale=1.0):
        super().__init__()
        self.calls = []
        self.resize(width, height, scale)

    def _allocate(self):
        self.calls.append(("resize", self.width, self.height, self.scale))

    def clear(self, color):
        self.calls.append(("clear", tuple(color)))

    def fill_polygon(self, points, color):
        self.calls.append(("polygon", list(points), tuple(color)))

    def fill_circle(self, center, radius, color):
        self.calls.append(("circle", center, radius, tuple(color)))

    def present(self):
        self.calls.append(("present",))
        return len(self.calls)

    def kinds(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def recording_surface():
    return RecordingSurface()
