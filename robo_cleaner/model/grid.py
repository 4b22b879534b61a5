"""Grid map management for the cleaning simulation."""

from enum import IntEnum
from typing import Iterable, List, Tuple

import numpy as np
from scipy.ndimage import label

from .errors import InvalidArgumentError, OutOfRangeError


class CellType(IntEnum):
    """Possible contents of a grid cell."""
    EMPTY = 0
    DIRT = 1
    OBSTACLE = 2
    CLEANED = 3


# von Neumann neighbourhood used by the reachability labelling
_FOUR_CONNECTED = np.array([[0, 1, 0],
                            [1, 1, 1],
                            [0, 1, 0]])


class GridMap:
    """
    Bounded 2D room holding one CellType per cell.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    Only clean() changes cells once a run has started; the add_* mutators
    are meant for scenario setup.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise InvalidArgumentError(
                f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells = np.full((height, width), CellType.EMPTY, dtype=np.int8)

    def is_in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.is_in_bounds(x, y):
            raise OutOfRangeError(x, y, self.width, self.height)

    def cell_at(self, x: int, y: int) -> CellType:
        """Return the cell type at (x, y)."""
        self._check(x, y)
        return CellType(int(self.cells[y, x]))

    def is_dirt(self, x: int, y: int) -> bool:
        return self.cell_at(x, y) == CellType.DIRT

    def is_obstacle(self, x: int, y: int) -> bool:
        return self.cell_at(x, y) == CellType.OBSTACLE

    def add_dirt(self, x: int, y: int) -> None:
        """Mark a cell as dirty, overwriting whatever was there."""
        self._check(x, y)
        self.cells[y, x] = CellType.DIRT

    def add_obstacle(self, x: int, y: int) -> None:
        """Mark a cell as an obstacle, overwriting whatever was there."""
        self._check(x, y)
        self.cells[y, x] = CellType.OBSTACLE

    def add_dirt_points(self, coords: Iterable[Tuple[int, int]]) -> None:
        """Mark specific cells as dirty."""
        for x, y in coords:
            self.add_dirt(x, y)

    def add_obstacle_points(self, coords: Iterable[Tuple[int, int]]) -> None:
        """Mark specific cells as obstacles."""
        for x, y in coords:
            self.add_obstacle(x, y)

    def add_obstacle_rectangle(self, x: int, y: int, w: int, h: int) -> None:
        """Mark rectangular region as obstacle."""
        # Clamp to grid boundaries
        x_end = min(x + w, self.width)
        y_end = min(y + h, self.height)
        x = max(0, x)
        y = max(0, y)
        self.cells[y:y_end, x:x_end] = CellType.OBSTACLE

    def add_dirt_rectangle(self, x: int, y: int, w: int, h: int) -> None:
        """Mark rectangular region as dirty."""
        x_end = min(x + w, self.width)
        y_end = min(y + h, self.height)
        x = max(0, x)
        y = max(0, y)
        self.cells[y:y_end, x:x_end] = CellType.DIRT

    def clean(self, x: int, y: int) -> bool:
        """
        Turn a dirty cell into a cleaned one.

        Any other cell is left untouched. Returns True only when a
        transition happened, so repeated calls are harmless.
        """
        if not self.is_dirt(x, y):
            return False
        self.cells[y, x] = CellType.CLEANED
        return True

    def count(self, cell_type: CellType) -> int:
        """Number of cells currently holding cell_type."""
        return int(np.count_nonzero(self.cells == cell_type))

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Return (x, y) of every EMPTY cell in row-major order."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def reachable_mask(self, x: int, y: int) -> np.ndarray:
        """
        Boolean [y, x] mask of free cells 4-connected to (x, y).

        Obstacles split the room into regions; the region holding (x, y)
        is what any strategy could possibly cover from there. An obstacle
        start yields an all-False mask.
        """
        self._check(x, y)
        free = self.cells != CellType.OBSTACLE
        labels, _ = label(free, structure=_FOUR_CONNECTED)
        region = labels[y, x]
        if region == 0:
            return np.zeros_like(free)
        return labels == region

    def copy_cells(self) -> np.ndarray:
        """Return a copy of the cell array for snapshots."""
        return self.cells.copy()
