"""Summary report generation for the cleaning simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

from ..model.state import Outcome
from ..model.strategies import STRATEGY_LABELS

if TYPE_CHECKING:
    from ..model.state import RunResult, SimulationState


OUTCOME_TEXT = {
    Outcome.COMPLETED: "completed",
    Outcome.ENERGY_EXHAUSTED: "stopped: battery depleted",
    Outcome.OBSTRUCTED: "stopped: hit boundary or obstacle",
}


def describe_outcome(result: "RunResult") -> str:
    """One-line description of how a strategy leg ended."""
    label = STRATEGY_LABELS.get(result.strategy, result.strategy)
    return f"{label} {OUTCOME_TEXT[result.outcome]}"


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.events: Dict[str, int] = {'moved': 0, 'cleaned': 0}
        self.first_clean_step: Optional[int] = None
        self.last_clean_step: Optional[int] = None

    def update(self, state: "SimulationState") -> None:
        """Accumulate per-event counters."""
        self.events[state.event] = self.events.get(state.event, 0) + 1
        if state.event == "cleaned":
            if self.first_clean_step is None:
                self.first_clean_step = state.step
            self.last_clean_step = state.step

    def generate_summary(self, results: List["RunResult"],
                         final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        initial_dirt = int(metrics.get('initial_dirt', 0))
        cleaned = int(metrics.get('dirt_cleaned', 0))
        cleaned_pct = (cleaned / initial_dirt * 100) if initial_dirt > 0 else 0
        coverage_pct = metrics.get('coverage', 0) * 100

        lines = [
            "",
            "=" * 80,
            "                    ROBOT CLEANER SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(built-in demo room)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "STRATEGY RUNS",
            "-" * 40,
        ]
        for i, result in enumerate(results, 1):
            lines.append(
                f"{i}. {describe_outcome(result)} | moves: {result.moves} | "
                f"cleaned: {result.cells_cleaned} | "
                f"energy: {result.energy_start} -> {result.energy_end}"
            )

        lines.extend([
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Events:          {final_state.step}",
            f"Logged Events:         {self.events['moved']} moved, "
            f"{self.events['cleaned']} cleaned",
            f"Successful Moves:      {int(metrics.get('moves', 0))}",
            f"Refused Moves:         {int(metrics.get('rejected_moves', 0))}",
            f"Dirt Cleaned:          {cleaned} / {initial_dirt} ({cleaned_pct:.1f}%)",
            f"Floor Coverage:        {coverage_pct:.1f}% of reachable cells",
            f"Energy Remaining:      {final_state.energy}",
            f"First / Last Clean:    {self._fmt_step(self.first_clean_step)} / "
            f"{self._fmt_step(self.last_clean_step)}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ])

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)

    @staticmethod
    def _fmt_step(step: Optional[int]) -> str:
        return f"step {step}" if step is not None else "-"
