import typing

import numpy as np

from simpson2d.domain.grid import Grid


Indices = tuple[int, int]


class FunctionMap:
    """Function values cached on the points of a grid.

    Values are keyed by integer grid indices. Refining the grid moves every
    cached value to the index of the same physical point in the denser grid,
    so nothing is ever evaluated twice within one integration.
    """

    grid: Grid

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self._values = np.zeros(grid.nb_points, dtype=float)
        self._is_set = np.zeros(grid.nb_points, dtype=bool)

    def _check_indices(self, indices: typing.Sequence[int]) -> Indices:
        indices = tuple(indices)
        nb_points = self.grid.nb_points
        if len(indices) != len(nb_points) or not all(0 <= i < n for [i, n] in zip(indices, nb_points)):
            raise IndexError(f"Grid point {indices} is outside of the {nb_points} grid")
        return indices

    def value_is_set(self, indices: typing.Sequence[int]) -> bool:
        return bool(self._is_set[self._check_indices(indices)])

    def value(self, indices: typing.Sequence[int]) -> float:
        indices = self._check_indices(indices)
        if not self._is_set[indices]:
            raise KeyError(f"No value at grid point {indices}")
        return float(self._values[indices])

    def set_value(self, value: float, indices: typing.Sequence[int]):
        indices = self._check_indices(indices)
        self._values[indices] = value
        self._is_set[indices] = True

    @property
    def nb_values_set(self) -> int:
        return int(np.count_nonzero(self._is_set))

    @property
    def values(self) -> np.ndarray:
        """All values on the grid, once every point has been set."""
        if not np.all(self._is_set):
            nb_missing = self._is_set.size - self.nb_values_set
            raise ValueError(f"{nb_missing} grid point(s) of {self.grid} have no value")
        values = self._values.view()
        values.flags.writeable = False
        return values

    def increase_grid_density(self, nb_points: int, idim: int | None = None):
        """Switch to a denser grid with `nb_points` along all axes, or only along axis `idim`.

        Old points are a subset of the new ones: point i of a coarse axis is point
        i * stride of the fine axis. Cached values are carried over at those indices,
        all the other points start unset.
        """
        finer = self.grid.refine(nb_points, idim)
        strides = self.grid.strides_to(finer)
        if all(stride == 1 for stride in strides):
            return

        old_positions = tuple(slice(None, None, stride) for stride in strides)
        values = np.zeros(finer.nb_points, dtype=float)
        is_set = np.zeros(finer.nb_points, dtype=bool)
        values[old_positions] = self._values
        is_set[old_positions] = self._is_set

        self.grid = finer
        self._values = values
        self._is_set = is_set
