"""I/O package for the cleaning simulation."""

from .console import ConsoleRenderer, render_grid
from .csv_writer import CSVWriter
from .visualizer import Visualizer
from .reporter import Reporter, describe_outcome

__all__ = [
    'ConsoleRenderer',
    'render_grid',
    'CSVWriter',
    'Visualizer',
    'Reporter',
    'describe_outcome',
]
