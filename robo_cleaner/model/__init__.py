"""Model package for the cleaning simulation."""

from .errors import InvalidArgumentError, OutOfRangeError
from .state import AgentEvent, Outcome, RunResult, SimulationState
from .grid import CellType, GridMap
from .strategies import (
    CleaningStrategy,
    PerimeterHuggerStrategy,
    SPatternStrategy,
    SpiralStrategy,
    RandomWalkStrategy,
    STRATEGY_NAMES,
    STRATEGY_LABELS,
    RANDOM_STRATEGY,
    create_strategy,
)
from .agent import Agent
from .engine import SimulationEngine

__all__ = [
    'InvalidArgumentError',
    'OutOfRangeError',
    'AgentEvent',
    'Outcome',
    'RunResult',
    'SimulationState',
    'CellType',
    'GridMap',
    'CleaningStrategy',
    'PerimeterHuggerStrategy',
    'SPatternStrategy',
    'SpiralStrategy',
    'RandomWalkStrategy',
    'STRATEGY_NAMES',
    'STRATEGY_LABELS',
    'RANDOM_STRATEGY',
    'create_strategy',
    'Agent',
    'SimulationEngine',
]
