"""Text rendering of the room for terminal output."""

import sys
from typing import Dict, List, TextIO, Tuple, TYPE_CHECKING

import numpy as np

from ..model.grid import CellType

if TYPE_CHECKING:
    from ..model.state import SimulationState


SYMBOLS: Dict[int, str] = {
    CellType.EMPTY: '.',
    CellType.DIRT: 'D',
    CellType.OBSTACLE: '#',
    CellType.CLEANED: 'C',
}
AGENT_SYMBOL = 'R'
LEGEND = "Legend: #=Obstacle, D=Dirt, C=Cleaned, R=Robot, .=Empty"

# ANSI: clear screen and move cursor home
CLEAR_SCREEN = "\033[2J\033[H"


def render_grid(cells: np.ndarray, agent_pos: Tuple[int, int]) -> str:
    """
    Draw the cell array as rows of space-separated symbols.

    The agent's own cell always shows R, whatever lies underneath.
    """
    ax, ay = agent_pos
    rows: List[str] = []
    for y in range(cells.shape[0]):
        row = []
        for x in range(cells.shape[1]):
            if x == ax and y == ay:
                row.append(AGENT_SYMBOL)
            else:
                row.append(SYMBOLS.get(int(cells[y, x]), '?'))
        rows.append(' '.join(row))
    return '\n'.join(rows)


class ConsoleRenderer:
    """Redraws the room on a text stream after every state update."""

    def __init__(self, stream: TextIO = None, clear: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.clear = clear
        self.frames_drawn = 0

    def update(self, state: "SimulationState") -> None:
        """Write one frame for the given state."""
        lines = []
        if self.clear:
            lines.append(CLEAR_SCREEN)
        lines.extend([
            "Vacuum cleaner robot simulation",
            "-------------------------------",
            LEGEND,
            "",
            render_grid(state.cells, state.position),
            "",
            f"Step {state.step} | {state.strategy} | pos=({state.x}, {state.y}) "
            f"| energy={state.energy} | dirt left={int(state.metrics.get('dirt_remaining', 0))}",
        ])
        self.stream.write('\n'.join(lines) + '\n')
        self.stream.flush()
        self.frames_drawn += 1
