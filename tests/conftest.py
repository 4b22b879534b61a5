"""Shared fixtures for the cleaning simulation tests."""

import matplotlib
matplotlib.use('Agg')

import pytest

from robo_cleaner.model.agent import Agent
from robo_cleaner.model.grid import GridMap


class Recorder:
    """Collects agent events so tests can inspect the path taken."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    @property
    def path(self):
        return [(e.x, e.y) for e in self.events if e.kind == "moved"]

    @property
    def cleaned(self):
        return [(e.x, e.y) for e in self.events if e.kind == "cleaned"]


@pytest.fixture
def make_agent():
    """Factory building (agent, grid, recorder) for a small room."""

    def _make(width, height, energy=100, start=(0, 0),
              obstacles=(), dirt=(), **kwargs):
        grid = GridMap(width, height)
        grid.add_dirt_points(dirt)
        grid.add_obstacle_points(obstacles)
        agent = Agent(grid, initial_energy=energy, position=start, **kwargs)
        recorder = Recorder()
        agent.subscribe(recorder)
        return agent, grid, recorder

    return _make
