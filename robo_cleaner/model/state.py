"""Outcome, event and snapshot dataclasses for the cleaning simulation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Tuple

import numpy as np


class Outcome(Enum):
    """Why a strategy stopped driving the agent."""
    COMPLETED = "completed"
    ENERGY_EXHAUSTED = "energy_exhausted"
    OBSTRUCTED = "obstructed"


@dataclass(frozen=True)
class AgentEvent:
    """Something the agent did that an observer may want to redraw."""
    kind: str  # "moved" or "cleaned"
    x: int
    y: int
    energy: int


@dataclass
class SimulationState:
    """Complete snapshot of simulation state after an agent event."""
    step: int
    event: str
    strategy: str
    x: int
    y: int
    energy: int
    cells: np.ndarray           # Copy of the grid cell array
    metrics: Dict[str, float] = field(default_factory=dict)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "step": self.step,
            "event": self.event,
            "strategy": self.strategy,
            "x": self.x,
            "y": self.y,
            "energy": self.energy,
            "dirt_remaining": int(self.metrics.get('dirt_remaining', 0)),
        }


@dataclass(frozen=True)
class RunResult:
    """Result of driving the agent with one strategy."""
    strategy: str
    outcome: Outcome
    moves: int
    cells_cleaned: int
    energy_start: int
    energy_end: int
    path: List[Tuple[int, int]] = field(default_factory=list)
