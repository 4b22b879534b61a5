"""Image and animation export for the cleaning simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING
from PIL import Image
import io

from ..model.grid import CellType

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Draws room states with matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation from buffered frames
    """

    COLORS = {
        CellType.EMPTY: '#ECF0F1',     # Light gray
        CellType.DIRT: '#8E6E53',      # Brown
        CellType.OBSTACLE: '#2C3E50',  # Dark blue-gray
        CellType.CLEANED: '#A9DFBF',   # Pale green
        'agent': '#E74C3C',            # Red
        'trail': '#3498DB',            # Blue
    }

    def __init__(self, grid_width: int, grid_height: int,
                 record_frames: bool = False, frame_every: int = 1):
        self.width = grid_width
        self.height = grid_height
        self.record_frames = record_frames
        self.frame_every = max(1, frame_every)
        self.frames: List[Image.Image] = []
        self.trail: List[Tuple[int, int]] = []

    def _cells_to_rgb(self, cells: np.ndarray) -> np.ndarray:
        base = np.ones((self.height, self.width, 3))
        for cell_type in CellType:
            base[cells == cell_type] = to_rgb(self.COLORS[cell_type])
        return base

    def _create_figure(self, state: "SimulationState",
                       trail: Optional[Sequence[Tuple[int, int]]] = None) -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / self.height
        fig_height = 5
        fig_width = max(5, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Row 0 at the top, matching the text rendering
        ax.imshow(self._cells_to_rgb(state.cells), origin='upper', aspect='equal',
                  extent=[-0.5, self.width - 0.5, self.height - 0.5, -0.5])

        if trail and len(trail) > 1:
            xs, ys = zip(*trail)
            ax.plot(xs, ys, '-', color=self.COLORS['trail'],
                    linewidth=1.5, alpha=0.6)

        ax.plot(state.x, state.y, 'o', color=self.COLORS['agent'],
                markersize=10, markeredgecolor='black', markeredgewidth=0.5)

        ax.set_title(f'Step {state.step} | {state.strategy} | '
                     f'Energy: {state.energy} | '
                     f'Dirt left: {int(state.metrics.get("dirt_remaining", 0))}')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        legend_elements = [
            plt.Line2D([0], [0], marker='s', color='w', label='Dirt',
                       markerfacecolor=self.COLORS[CellType.DIRT], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Cleaned',
                       markerfacecolor=self.COLORS[CellType.CLEANED], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Obstacle',
                       markerfacecolor=self.COLORS[CellType.OBSTACLE], markersize=8),
            plt.Line2D([0], [0], marker='o', color='w', label='Robot',
                       markerfacecolor=self.COLORS['agent'], markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper left',
                  bbox_to_anchor=(1.01, 1.0), fontsize=8)

        plt.tight_layout()
        return fig

    def update(self, state: "SimulationState") -> None:
        """Track the agent's trail and, when recording, buffer every Nth frame."""
        if state.event == "moved":
            self.trail.append(state.position)
        if self.record_frames and state.step % self.frame_every == 0:
            self.buffer_frame(state)

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state, self.trail)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state, self.trail)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
