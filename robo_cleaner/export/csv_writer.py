"""CSV export of agent events."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState


FIELDNAMES = ['step', 'event', 'strategy', 'x', 'y', 'energy', 'dirt_remaining']


class CSVWriter:
    """
    Event log for a cleaning run: a row for every move or clean.

    Columns follow FIELDNAMES, e.g. a first move of an S-pattern leg:
        step,event,strategy,x,y,energy,dirt_remaining
        1,moved,s_pattern,0,0,199,4
    The log opens lazily on the first event when not used as a context
    manager.
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    def open(self) -> None:
        """Create the log (and its directory) with the column header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, state: "SimulationState") -> None:
        """Log the agent event carried by a snapshot."""
        if not self._is_open:
            self.open()
        self.writer.writerow(state.to_csv_row())

    def close(self) -> None:
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
