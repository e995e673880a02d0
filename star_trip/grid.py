"""
Grid addressing for the galaxy.

The galaxy is a 10x10 grid of systems, each a 10x10 grid of sectors. Every
cell lives in one flat array addressed by

    index(x, y, X, Y) = x + S * (y + S * (X + S * Y))

where (x, y) is the sector and (X, Y) the system. This module is the only
place that formula is written down; everything else addresses the galaxy
through `Position`.
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional

from .constants import GALAXY_SIZE, SECTORS, SYSTEM_SIZE, SYSTEMS

if TYPE_CHECKING:
    from .entity import Entity


# =============================================================================
# INDEXER
# =============================================================================

def index(x: int, y: int, system_x: int, system_y: int) -> int:
    """
    Flatten a sector/system coordinate into a galaxy array index.

    Args:
        x: Sector column within the system (0-9).
        y: Sector row within the system (0-9).
        system_x: System column within the galaxy (0-9).
        system_y: System row within the galaxy (0-9).

    Returns:
        Linear index in [0, GALAXY_SIZE).

    Raises:
        ValueError: If any coordinate is outside its grid.
    """
    if not (0 <= x < SECTORS and 0 <= y < SECTORS):
        raise ValueError(f"Sector ({x}, {y}) outside the {SECTORS}x{SECTORS} system grid")
    if not (0 <= system_x < SYSTEMS and 0 <= system_y < SYSTEMS):
        raise ValueError(f"System ({system_x}, {system_y}) outside the {SYSTEMS}x{SYSTEMS} galaxy")
    return x + SECTORS * (y + SECTORS * (system_x + SYSTEMS * system_y))


def position_of(flat_index: int) -> Position:
    """
    Inverse of `index`.

    Raises:
        IndexError: If the index is outside the galaxy array.
    """
    if not 0 <= flat_index < GALAXY_SIZE:
        raise IndexError(f"Galaxy index {flat_index} out of range")
    rest, x = divmod(flat_index, SECTORS)
    rest, y = divmod(rest, SECTORS)
    system_y, system_x = divmod(rest, SYSTEMS)
    return Position(x, y, system_x, system_y)


class Position(NamedTuple):
    """A cell in the galaxy: sector (x, y) inside system (system_x, system_y)."""
    x: int
    y: int
    system_x: int
    system_y: int

    @property
    def index(self) -> int:
        """Flat galaxy index of this position."""
        return index(self.x, self.y, self.system_x, self.system_y)

    @property
    def sector(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def system(self) -> tuple[int, int]:
        return (self.system_x, self.system_y)

    def with_sector(self, x: int, y: int) -> Position:
        """Same system, different sector."""
        return Position(x, y, self.system_x, self.system_y)

    def sector_distance(self, x: int, y: int) -> float:
        """Euclidean distance to sector (x, y) of the same system."""
        return sector_distance(self.x, self.y, x, y)


def sector_distance(x0: int, y0: int, x1: int, y1: int) -> float:
    """Euclidean distance between two sectors."""
    return math.hypot(x1 - x0, y1 - y0)


def is_sector(x: int, y: int) -> bool:
    """Check that (x, y) names a sector inside a system."""
    return 0 <= x < SECTORS and 0 <= y < SECTORS


def is_system(system_x: int, system_y: int) -> bool:
    """Check that (system_x, system_y) names a system inside the galaxy."""
    return 0 <= system_x < SYSTEMS and 0 <= system_y < SYSTEMS


def adjacent(x: int, y: int) -> list[tuple[int, int]]:
    """
    Sectors surrounding (x, y), clipped at the system edges.

    Neighbours are generated column by column (x outer, y inner) and
    returned last-generated-first, so (x+1, y+1) comes first and
    (x-1, y-1) last. Callers that stop at the first match rely on this
    order for tie-breaks.

    Args:
        x: Sector column.
        y: Sector row.

    Returns:
        Up to 8 (x, y) pairs, never including (x, y) itself.
    """
    coords = []
    for i in range(max(x - 1, 0), min(x + 1, SECTORS - 1) + 1):
        for j in range(max(y - 1, 0), min(y + 1, SECTORS - 1) + 1):
            if (i, j) != (x, y):
                coords.append((i, j))
    coords.reverse()
    return coords


# =============================================================================
# GALAXY
# =============================================================================

class Galaxy:
    """
    Fixed-size flat container of galaxy cells.

    Each cell holds at most one `Entity` or None. Cells are read and written
    through `Position` only; the flat index stays internal.
    """

    def __init__(self) -> None:
        self._cells: list[Optional[Entity]] = [None] * GALAXY_SIZE

    def __len__(self) -> int:
        return GALAXY_SIZE

    def __getitem__(self, position: Position) -> Optional[Entity]:
        return self._cells[position.index]

    def __setitem__(self, position: Position, entity: Optional[Entity]) -> None:
        self._cells[position.index] = entity

    def clear(self, position: Position) -> None:
        """Empty the cell at `position`."""
        self._cells[position.index] = None

    def is_empty(self, position: Position) -> bool:
        return self._cells[position.index] is None

    def system_cells(self, system_x: int, system_y: int) -> list[Optional[Entity]]:
        """Copy of the 100 cells of a system in row-major sector order."""
        start = index(0, 0, system_x, system_y)
        return self._cells[start:start + SYSTEM_SIZE]

    def shuffle_system(self, system_x: int, system_y: int, rng: random.Random) -> None:
        """Uniformly permute the cells of one system in place."""
        start = index(0, 0, system_x, system_y)
        block = self._cells[start:start + SYSTEM_SIZE]
        rng.shuffle(block)
        self._cells[start:start + SYSTEM_SIZE] = block

    def occupied(self, system_x: int, system_y: int) -> Iterator[tuple[Position, Entity]]:
        """Yield (position, entity) for every non-empty cell of a system, row-major."""
        for y in range(SECTORS):
            for x in range(SECTORS):
                position = Position(x, y, system_x, system_y)
                entity = self[position]
                if entity is not None:
                    yield position, entity

    def count(self) -> int:
        """Number of occupied cells in the whole galaxy."""
        return sum(1 for cell in self._cells if cell is not None)
