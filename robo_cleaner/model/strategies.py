"""Traversal strategies that drive a cleaning agent around the grid."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

import numpy as np

from .errors import InvalidArgumentError
from .state import Outcome

if TYPE_CHECKING:
    from .agent import Agent
    from .grid import GridMap


# Unit steps in (dx, dy); y grows downwards
RIGHT = (1, 0)
DOWN = (0, 1)
LEFT = (-1, 0)
UP = (0, -1)
DIRECTIONS: List[Tuple[int, int]] = [RIGHT, DOWN, LEFT, UP]


def _stopped(agent: "Agent") -> Outcome:
    """Outcome for a strategy whose last move was refused."""
    if agent.energy <= 0:
        return Outcome.ENERGY_EXHAUSTED
    return Outcome.OBSTRUCTED


class CleaningStrategy(ABC):
    """
    A traversal algorithm that moves an agent through a grid.

    Strategies only request motion through agent.attempt_move(), which
    enforces energy, bounds and obstacles. A refused move is a normal
    signal that steers the traversal; it is never raised as an error.
    Neither agent nor grid is stored between drive() calls.
    """

    name: str = ""
    label: str = ""

    @abstractmethod
    def drive(self, agent: "Agent", grid: "GridMap") -> Outcome:
        """Move the agent until the strategy finishes or is stopped."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PerimeterHuggerStrategy(CleaningStrategy):
    """
    Run right, down, left, then up, each until a move is refused.

    Starting from a corner on an open grid this traces the outer ring.
    """

    name = "perimeter"
    label = "Perimeter Hugger"

    def drive(self, agent: "Agent", grid: "GridMap") -> Outcome:
        obstructed = False
        for dx, dy in DIRECTIONS:
            while agent.attempt_move(agent.x + dx, agent.y + dy):
                agent.clean_current_cell()

            if agent.energy <= 0:
                return Outcome.ENERGY_EXHAUSTED
            # Refused inside the grid means an obstacle, not the wall
            if grid.is_in_bounds(agent.x + dx, agent.y + dy):
                obstructed = True

        return Outcome.OBSTRUCTED if obstructed else Outcome.COMPLETED


class SPatternStrategy(CleaningStrategy):
    """
    Boustrophedon sweep: columns left to right, alternating up and down.

    A refused move inside a column reverses the sweep on the spot instead
    of skipping to the next column. The row index is nudged once in the
    new direction and then advanced by the regular loop step, so the
    sweep resumes two rows back from the refused cell.
    """

    name = "s_pattern"
    label = "S-Pattern"

    def drive(self, agent: "Agent", grid: "GridMap") -> Outcome:
        direction = 1

        for x in range(grid.width):
            if agent.energy <= 0:
                break
            y = 0 if direction == 1 else grid.height - 1
            end_y = grid.height if direction == 1 else -1

            while y != end_y:
                if agent.energy <= 0:
                    break
                if not grid.is_in_bounds(x, y):
                    break
                if agent.attempt_move(x, y):
                    agent.clean_current_cell()
                else:
                    direction = -direction
                    y += direction
                y += direction

            direction = -direction

        if agent.energy <= 0:
            return Outcome.ENERGY_EXHAUSTED
        return Outcome.COMPLETED


class SpiralStrategy(CleaningStrategy):
    """
    Expanding square spiral around the starting cell.

    Directions cycle right, down, left, up. Segments start one cell long
    and grow by one after every second turn. The first refused move ends
    the whole traversal.
    """

    name = "spiral"
    label = "Spiral"

    def drive(self, agent: "Agent", grid: "GridMap") -> Outcome:
        dir_index = 0
        segment_length = 1
        turns = 0

        while agent.energy > 0:
            dx, dy = DIRECTIONS[dir_index]
            for _ in range(segment_length):
                if not agent.attempt_move(agent.x + dx, agent.y + dy):
                    return _stopped(agent)
                agent.clean_current_cell()

            dir_index = (dir_index + 1) % len(DIRECTIONS)
            turns += 1
            if turns % 2 == 0:
                segment_length += 1

        return Outcome.ENERGY_EXHAUSTED


class RandomWalkStrategy(CleaningStrategy):
    """
    Uniform random unit steps until the battery is empty.

    Refused moves are simply re-sampled. If the agent is boxed in on all
    four sides the walk gives up with OBSTRUCTED.
    """

    name = "random_walk"
    label = "Random Walk"

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def drive(self, agent: "Agent", grid: "GridMap") -> Outcome:
        while agent.energy > 0:
            if not self._has_exit(agent, grid):
                return Outcome.OBSTRUCTED

            dx, dy = DIRECTIONS[int(self.rng.integers(len(DIRECTIONS)))]
            if not agent.attempt_move(agent.x + dx, agent.y + dy):
                continue
            agent.clean_current_cell()

        return Outcome.ENERGY_EXHAUSTED

    @staticmethod
    def _has_exit(agent: "Agent", grid: "GridMap") -> bool:
        """Check if any neighbouring cell can be entered."""
        for dx, dy in DIRECTIONS:
            nx, ny = agent.x + dx, agent.y + dy
            if grid.is_in_bounds(nx, ny) and not grid.is_obstacle(nx, ny):
                return True
        return False


STRATEGIES: Dict[str, type] = {
    cls.name: cls
    for cls in (PerimeterHuggerStrategy, SPatternStrategy,
                SpiralStrategy, RandomWalkStrategy)
}
STRATEGY_NAMES: Tuple[str, ...] = tuple(STRATEGIES)
# Resolved to one of STRATEGY_NAMES by the engine at run time
RANDOM_STRATEGY = "random"
STRATEGY_LABELS: Dict[str, str] = {
    name: cls.label for name, cls in STRATEGIES.items()
}


def create_strategy(name: str,
                    rng: Optional[np.random.Generator] = None) -> CleaningStrategy:
    """Build a fresh strategy instance from its registry name."""
    try:
        cls = STRATEGIES[name]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown strategy '{name}', expected one of "
            f"{', '.join(STRATEGY_NAMES)}") from None
    if cls is RandomWalkStrategy:
        return RandomWalkStrategy(rng)
    return cls()
