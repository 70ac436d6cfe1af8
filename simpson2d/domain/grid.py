import enum
import math
import typing

import numpy as np


class Spacing(enum.Enum):
    """How sample points are distributed along an axis."""

    LINEAR = "linear"
    LOGE = "loge"
    """Uniform in ln(x)."""


def is_simpson_count(nb_points: int) -> bool:
    """Check the point count is 2**k + 1 with k >= 1."""
    nb_intervals = nb_points - 1
    return nb_intervals >= 2 and (nb_intervals & (nb_intervals - 1)) == 0


def simpson_count(power: int) -> int:
    """Number of points per axis at refinement generation `power`."""
    assert power >= 1, f"Expect at least 3 points, got power={power}"
    return 2**power + 1


class Axis:
    """One dimension of a uniform sampling grid."""

    lower: float
    upper: float
    nb_points: int
    spacing: Spacing

    def __init__(self, lower: float, upper: float, nb_points: int, spacing: Spacing = Spacing.LINEAR) -> None:
        assert is_simpson_count(nb_points), f"Expect 2**k+1 points, got {nb_points}"
        if not lower < upper:
            raise ValueError(f"Axis bounds must satisfy lower < upper, got [{lower}, {upper}]")
        if spacing is Spacing.LOGE and lower <= 0:
            raise ValueError(f"Log spacing requires positive bounds, got [{lower}, {upper}]")
        self.lower = lower
        self.upper = upper
        self.nb_points = nb_points
        self.spacing = spacing

        # bounds in the sampling variable, i.e. x or ln(x)
        if spacing is Spacing.LOGE:
            self._umin, self._umax = math.log(lower), math.log(upper)
        else:
            self._umin, self._umax = lower, upper

    @property
    def step(self) -> float:
        return (self._umax - self._umin) / (self.nb_points - 1)

    def coordinate(self, index: int) -> float:
        u = self._umin + index * self.step
        if self.spacing is Spacing.LOGE:
            return math.exp(u)
        return u

    def coordinates(self) -> np.ndarray:
        u = self._umin + np.arange(self.nb_points) * self.step
        if self.spacing is Spacing.LOGE:
            return np.exp(u)
        return u

    def refine(self, nb_points: int) -> "Axis":
        """A denser axis whose points are a superset of the current ones."""
        assert is_simpson_count(nb_points), f"Expect 2**k+1 points, got {nb_points}"
        assert nb_points >= self.nb_points, f"Cannot coarsen from {self.nb_points} to {nb_points} points"
        return Axis(self.lower, self.upper, nb_points, self.spacing)

    def stride_to(self, finer: "Axis") -> int:
        """Index multiplier mapping a point of this axis onto the finer axis."""
        stride, remainder = divmod(finer.nb_points - 1, self.nb_points - 1)
        assert remainder == 0 and stride >= 1
        return stride

    def __eq__(self, other):
        if not isinstance(other, Axis):
            return NotImplemented
        return (self.lower, self.upper, self.nb_points, self.spacing) == \
            (other.lower, other.upper, other.nb_points, other.spacing)

    def __repr__(self):
        return f"Axis({self.lower}, {self.upper}, {self.nb_points}, {self.spacing})"

    def __str__(self):
        return f"[{self.lower:g}, {self.upper:g}] x {self.nb_points} ({self.spacing.value})"


class Grid:
    """A uniform sampling grid in 2D, one Axis per dimension."""

    nb_spatial_dims = 2
    axes: tuple[Axis, Axis]

    def __init__(self, axes: typing.Sequence[Axis]) -> None:
        assert len(axes) == self.nb_spatial_dims, f"Expect {self.nb_spatial_dims} axes, got {len(axes)}"
        self.axes = tuple(axes)

    @classmethod
    def from_limits(cls, limits: typing.Sequence[typing.Sequence[float]], nb_points: int,
                    spacing: Spacing = Spacing.LINEAR) -> "Grid":
        if len(limits) != cls.nb_spatial_dims:
            raise ValueError(f"Expect limits for {cls.nb_spatial_dims} dimensions, got {len(limits)}")
        return cls([Axis(lower, upper, nb_points, spacing) for [lower, upper] in limits])

    def __getitem__(self, idim: int) -> Axis:
        return self.axes[idim]

    @property
    def nb_points(self) -> tuple[int, ...]:
        return tuple(axis.nb_points for axis in self.axes)

    @property
    def steps(self) -> tuple[float, ...]:
        return tuple(axis.step for axis in self.axes)

    def coordinate(self, idim: int, index: int) -> float:
        return self.axes[idim].coordinate(index)

    def refine(self, nb_points: int, idim: int | None = None) -> "Grid":
        """Refine all axes, or only the axis `idim`."""
        if idim is None:
            return Grid([axis.refine(nb_points) for axis in self.axes])
        axes = list(self.axes)
        axes[idim] = axes[idim].refine(nb_points)
        return Grid(axes)

    def strides_to(self, finer: "Grid") -> tuple[int, ...]:
        return tuple(coarse.stride_to(fine) for [coarse, fine] in zip(self.axes, finer.axes))

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.axes == other.axes

    def __str__(self):
        return " x ".join(f"{{{axis}}}" for axis in self.axes)
