"""Simulation engine: builds the room, runs strategies, fans out snapshots."""

import numpy as np
from typing import Callable, List, Dict, Tuple, Optional, TYPE_CHECKING

from .grid import GridMap, CellType
from .agent import Agent
from .strategies import RANDOM_STRATEGY, STRATEGY_NAMES, create_strategy
from .state import AgentEvent, RunResult, SimulationState

if TYPE_CHECKING:
    from ..config import SimulationConfig, RegionSpec

Observer = Callable[[SimulationState], None]


class SimulationEngine:
    """
    Scenario driver around a single agent.

    Implements:
    1. Grid initialization from the configured layout
    2. Agent placement and strategy selection
    3. Sequential strategy legs, optionally recharging in between
    4. State snapshot generation after every agent event
    """

    def __init__(self, config: "SimulationConfig",
                 sleep: Optional[Callable[[float], None]] = None):
        self.config = config
        self.current_step = 0
        self.rng = np.random.default_rng(config.seed)

        # Initialize grid
        self.grid = GridMap(config.grid.width, config.grid.height)
        self._setup_layout()

        # Initialize agent
        self.agent = Agent(
            self.grid,
            initial_energy=config.agent.energy,
            position=tuple(config.agent.start),
            speed=config.agent.speed,
            sleep=sleep
        )
        self.agent.subscribe(self._on_agent_event)

        # Coverage tracking
        self.visits = np.zeros((self.grid.height, self.grid.width), dtype=np.int32)
        self.visits[self.agent.y, self.agent.x] = 1
        self.reachable = self.grid.reachable_mask(*self.agent.position)
        self.initial_dirt = self.grid.count(CellType.DIRT)

        self.observers: List[Observer] = []
        self.results: List[RunResult] = []
        self.current_strategy = ""
        self._path: List[Tuple[int, int]] = []

    def _apply_region(self, spec: "RegionSpec", cell_type: CellType) -> None:
        data = spec.data
        if spec.region_type == "points":
            if cell_type == CellType.DIRT:
                self.grid.add_dirt_points(data['coords'])
            else:
                self.grid.add_obstacle_points(data['coords'])
        elif spec.region_type == "rectangle":
            if cell_type == CellType.DIRT:
                self.grid.add_dirt_rectangle(
                    data['x'], data['y'], data['width'], data['height'])
            else:
                self.grid.add_obstacle_rectangle(
                    data['x'], data['y'], data['width'], data['height'])

    def _setup_layout(self) -> None:
        """Place dirt, then obstacles, then random dirt on empty floor."""
        layout = self.config.layout
        for spec in layout.dirt:
            self._apply_region(spec, CellType.DIRT)
        for spec in layout.obstacles:
            self._apply_region(spec, CellType.OBSTACLE)

        start = tuple(self.config.agent.start)
        for spec in layout.dirt:
            if spec.region_type != "random":
                continue
            # Never drop random dirt under the agent's start cell
            free = [c for c in self.grid.empty_cells() if c != start]
            count = min(spec.data['count'], len(free))
            if count <= 0:
                continue
            for idx in self.rng.choice(len(free), size=count, replace=False):
                self.grid.add_dirt(*free[int(idx)])

    def add_observer(self, observer: Observer) -> None:
        """Register a callback receiving a SimulationState per agent event."""
        self.observers.append(observer)

    def resolve_strategy_name(self, name: str) -> str:
        """Map 'random' onto one of the concrete strategies."""
        if name == RANDOM_STRATEGY:
            return str(self.rng.choice(STRATEGY_NAMES))
        return name

    def run_strategy(self, name: str) -> RunResult:
        """Bind a fresh strategy to the agent and run it to completion."""
        name = self.resolve_strategy_name(name)
        strategy = create_strategy(name, self.rng)
        self.agent.set_strategy(strategy)
        self.current_strategy = name
        self._path = [self.agent.position]

        energy_start = self.agent.energy
        moves_before = self.agent.moves_made
        cleaned_before = self.agent.cells_cleaned

        outcome = self.agent.start_cleaning()

        result = RunResult(
            strategy=name,
            outcome=outcome,
            moves=self.agent.moves_made - moves_before,
            cells_cleaned=self.agent.cells_cleaned - cleaned_before,
            energy_start=energy_start,
            energy_end=self.agent.energy,
            path=list(self._path)
        )
        self.results.append(result)
        return result

    def run(self) -> List[RunResult]:
        """Run every configured strategy in order."""
        for i, name in enumerate(self.config.strategies):
            if i > 0 and self.config.recharge_between:
                self.agent.recharge()
            self.run_strategy(name)
        return self.results

    def _on_agent_event(self, event: AgentEvent) -> None:
        self.current_step += 1
        if event.kind == "moved":
            self.visits[event.y, event.x] += 1
            self._path.append((event.x, event.y))

        if not self.observers:
            return
        state = self.snapshot(event.kind)
        for observer in self.observers:
            observer(state)

    def coverage(self) -> float:
        """Fraction of reachable floor the agent has stood on."""
        reachable = int(np.count_nonzero(self.reachable))
        if reachable == 0:
            return 0.0
        visited = int(np.count_nonzero((self.visits > 0) & self.reachable))
        return visited / reachable

    def snapshot(self, event: str = "snapshot") -> SimulationState:
        """Create a snapshot of the current simulation state."""
        dirt_remaining = self.grid.count(CellType.DIRT)
        metrics = {
            'dirt_remaining': dirt_remaining,
            'dirt_cleaned': self.grid.count(CellType.CLEANED),
            'initial_dirt': self.initial_dirt,
            'moves': self.agent.moves_made,
            'rejected_moves': self.agent.rejected_moves,
            'coverage': self.coverage(),
        }

        return SimulationState(
            step=self.current_step,
            event=event,
            strategy=self.current_strategy,
            x=self.agent.x,
            y=self.agent.y,
            energy=self.agent.energy,
            cells=self.grid.copy_cells(),
            metrics=metrics
        )

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.current_step,
            'legs': len(self.results),
            'moves': self.agent.moves_made,
            'rejected_moves': self.agent.rejected_moves,
            'dirt_cleaned': self.grid.count(CellType.CLEANED),
            'dirt_remaining': self.grid.count(CellType.DIRT),
            'energy_left': self.agent.energy,
            'coverage': self.coverage(),
        }
