"""Cleaning agent: position, battery and the motion rules strategies rely on."""

from typing import Callable, List, Optional, Tuple

from .errors import InvalidArgumentError, OutOfRangeError
from .grid import GridMap
from .state import AgentEvent, Outcome
from .strategies import CleaningStrategy, SPatternStrategy

EventListener = Callable[[AgentEvent], None]


class Agent:
    """
    Battery-powered cleaner bound to one grid and one strategy at a time.

    attempt_move() is the only way to change position. It refuses moves
    when the battery is empty, the target is off the grid, or the target
    is an obstacle, and charges exactly one unit of energy otherwise.

    Every successful move or clean is published to subscribed listeners
    and followed by a pacing delay of `speed` milliseconds. Without a
    sleep function the agent runs headless and never waits.
    """

    def __init__(self, grid: GridMap,
                 initial_energy: int = 200,
                 position: Tuple[int, int] = (0, 0),
                 speed: int = 150,
                 strategy: Optional[CleaningStrategy] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        if initial_energy < 0:
            raise InvalidArgumentError(
                f"Initial energy must be non-negative, got {initial_energy}")
        x, y = position
        if not grid.is_in_bounds(x, y):
            raise OutOfRangeError(x, y, grid.width, grid.height)
        if grid.is_obstacle(x, y):
            raise InvalidArgumentError(f"Cannot start on an obstacle at ({x}, {y})")

        self.grid = grid
        self.x = x
        self.y = y
        self.energy = initial_energy
        self.max_energy = initial_energy
        self.adjust_speed(speed)
        self.strategy: CleaningStrategy = strategy or SPatternStrategy()
        self.last_outcome: Optional[Outcome] = None

        self.moves_made = 0
        self.cells_cleaned = 0
        self.rejected_moves = 0

        self._sleep = sleep
        self._listeners: List[EventListener] = []

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback for moved/cleaned events."""
        self._listeners.append(listener)

    def adjust_speed(self, speed: int) -> None:
        """Set the pacing delay in milliseconds."""
        if speed <= 0:
            raise InvalidArgumentError(
                f"Speed must be greater than zero, got {speed}")
        self.speed = speed

    def recharge(self) -> None:
        self.energy = self.max_energy

    def set_strategy(self, strategy: CleaningStrategy) -> None:
        """Swap the strategy used by the next start_cleaning() call."""
        self.strategy = strategy

    def attempt_move(self, new_x: int, new_y: int) -> bool:
        """
        Move to (new_x, new_y) if the battery, bounds and obstacles allow.

        Returns False and leaves the agent untouched on refusal.
        """
        if (self.energy <= 0
                or not self.grid.is_in_bounds(new_x, new_y)
                or self.grid.is_obstacle(new_x, new_y)):
            self.rejected_moves += 1
            return False

        self.x = new_x
        self.y = new_y
        self.energy -= 1
        self.moves_made += 1
        self._emit("moved")
        return True

    def clean_current_cell(self) -> bool:
        """Clean the cell under the agent; no-op unless it is dirty."""
        if not self.grid.clean(self.x, self.y):
            return False
        self.cells_cleaned += 1
        self._emit("cleaned")
        return True

    def start_cleaning(self) -> Outcome:
        """Let the bound strategy drive until it stops."""
        self.last_outcome = self.strategy.drive(self, self.grid)
        return self.last_outcome

    def _emit(self, kind: str) -> None:
        event = AgentEvent(kind=kind, x=self.x, y=self.y, energy=self.energy)
        for listener in self._listeners:
            listener(event)
        if self._sleep is not None:
            self._sleep(self.speed / 1000.0)

    def __repr__(self) -> str:
        return (f"Agent(pos=({self.x}, {self.y}), energy={self.energy}/"
                f"{self.max_energy}, strategy={self.strategy!r})")
