"""One- and three-dimensional spatial grids and direction deflection.

A grid along one axis is a list of monotonically increasing points
``x_0 = 0 < x_1 < ... < x_{N-1} = w`` dividing ``[0, w)`` into ``N - 1``
cells. A 3D grid combines three such axes into rectangular cells.
Positions and directions are given as 3-element sequences and returned as
tuples of floats; cell indices are 3-tuples of ints.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Sequence

Vector = tuple[float, float, float]
Index = tuple[int, int, int]


class Grid1D:
    """A 1D partition of ``[0, w)`` into cells, optionally periodic."""

    def __init__(self):
        self._points: list[float] = []
        self._w = 0.0
        self._dx = 0.0
        self._equispaced = False
        self.periodic = False

    @property
    def points(self) -> tuple[float, ...]:
        return tuple(self._points)

    @property
    def w(self) -> float:
        """Total width of the grid."""
        return self._w

    @property
    def dx(self) -> float:
        """Cell width for an equispaced grid, 0 otherwise."""
        return self._dx

    @property
    def equispaced(self) -> bool:
        return self._equispaced

    @property
    def ncells(self) -> int:
        return max(len(self._points) - 1, 0)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, i: int) -> float:
        return self._points[i]

    def set_points(self, x: Sequence[float]) -> None:
        """Set the grid to the points x, shifted so that the first is 0."""
        pts = [float(v) for v in x]
        if len(pts) < 2:
            raise ValueError("a grid needs at least two points")
        if any(b <= a for a, b in zip(pts, pts[1:])):
            raise ValueError("grid points must be strictly increasing")
        x0 = pts[0]
        self._w = pts[-1] - x0
        self._points = [p - x0 for p in pts]
        self._points[0] = 0.0
        self._points[-1] = self._w
        self._dx = 0.0
        self._equispaced = False

    def set_uniform(self, w: float, n: int) -> None:
        """Divide ``[0, w)`` into n equal cells."""
        if n < 1:
            raise ValueError("the number of cells must be at least 1")
        if w <= 0:
            raise ValueError("the grid width must be positive")
        w = float(w)
        self._w = w
        self._dx = w / n
        self._points = [i * self._dx for i in range(n)] + [w]
        self._equispaced = True

    def contains(self, x: float) -> bool:
        """True if x lies within ``[0, w)``."""
        return 0.0 <= x < self._w

    def _check_cell(self, i: int) -> None:
        if not 0 <= i < self.ncells:
            raise IndexError(f"cell index {i} outside [0, {self.ncells})")

    def contains_cell(self, i: int, x: float) -> bool:
        """True if x lies in the i-th cell, ``x_i <= x < x_{i+1}``."""
        self._check_cell(i)
        return self._points[i] <= x < self._points[i + 1]

    def _fold(self, x: float) -> float:
        x = x % self._w
        if x >= self._w:
            x = math.nextafter(self._w, -math.inf)
        return x

    def wrap(self, x: float) -> float | None:
        """Bring x into the grid under the boundary conditions.

        Returns the (possibly shifted) position, or None when x is outside
        a non-periodic grid.
        """
        if self.contains(x):
            return x
        if self.periodic:
            return self._fold(x)
        return None

    def apply_bc(self, x: float) -> float:
        """Return x folded into the grid if periodic, unchanged otherwise."""
        if self.periodic and not self.contains(x):
            return self._fold(x)
        return x

    def pos2cell(self, x: float) -> int:
        """Return the index of the cell containing x."""
        if not self.contains(x):
            raise ValueError(f"position {x} is outside the grid [0, {self._w})")
        n = self.ncells
        if n == 1:
            return 0
        if self._equispaced:
            i = math.floor(x / self._dx)
            if x < i * self._dx:
                i -= 1
            i = min(max(i, 0), n - 1)
            while x < self._points[i]:
                i -= 1
            while x >= self._points[i + 1]:
                i += 1
            return i
        return bisect_right(self._points, x) - 1

    def cell_range(self, lo: float, hi: float) -> tuple[int, int]:
        """Return the first and last cell whose centers lie in ``[lo, hi]``."""
        p = self._points

        def inside(i: int) -> bool:
            return lo <= 0.5 * (p[i] + p[i + 1]) <= hi

        i1, i2 = 0, self.ncells - 1
        while i1 < i2 and not inside(i1):
            i1 += 1
        while i2 > i1 and not inside(i2):
            i2 -= 1
        return i1, i2

    def distance2boundary(self, i: int, x: float, direction: float) -> float:
        """Path length to the boundary of cell i along a direction cosine."""
        self._check_cell(i)
        if direction > 0.0:
            return (self._points[i + 1] - x) / direction
        if direction < 0.0:
            return (self._points[i] - x) / direction
        return math.inf

    def boundary(self, i: int, direction: float) -> float:
        """Position just past the boundary of cell i in the given direction."""
        self._check_cell(i)
        if direction > 0.0:
            return math.nextafter(self._points[i + 1], math.inf)
        return math.nextafter(self._points[i], -math.inf)

    def distance(self, x1: float, x2: float) -> float:
        """Distance between two positions, minimum image if periodic."""
        d = abs(x1 - x2)
        if self.periodic and d > self._w / 2:
            d1 = abs(x1 - self._w - x2)
            if d1 < d:
                return d1
            d1 = abs(x1 + self._w - x2)
            if d1 < d:
                return d1
        return d


class Grid3D:
    """A rectangular 3D grid made of three Grid1D axes."""

    def __init__(self):
        self._axes = (Grid1D(), Grid1D(), Grid1D())
        for axis in self._axes:
            axis.set_uniform(1.0, 2)

    @property
    def x(self) -> Grid1D:
        return self._axes[0]

    @property
    def y(self) -> Grid1D:
        return self._axes[1]

    @property
    def z(self) -> Grid1D:
        return self._axes[2]

    def _set(self, k: int, w: float, n: int, periodic: bool) -> None:
        self._axes[k].set_uniform(w, n)
        self._axes[k].periodic = bool(periodic)

    def set_x(self, w: float, n: int, periodic: bool) -> None:
        self._set(0, w, n, periodic)

    def set_y(self, w: float, n: int, periodic: bool) -> None:
        self._set(1, w, n, periodic)

    def set_z(self, w: float, n: int, periodic: bool) -> None:
        self._set(2, w, n, periodic)

    def box(self) -> tuple[Vector, Vector]:
        """Return the (min, max) corners of the whole grid."""
        return (0.0, 0.0, 0.0), tuple(a.w for a in self._axes)

    def cell_box(self, i: Sequence[int]) -> tuple[Vector, Vector]:
        """Return the (min, max) corners of cell i."""
        lo = tuple(a[k] for a, k in zip(self._axes, i))
        hi = tuple(a[k + 1] for a, k in zip(self._axes, i))
        return lo, hi

    def contains(self, v: Sequence[float]) -> bool:
        return all(a.contains(c) for a, c in zip(self._axes, v))

    def wrap(self, v: Sequence[float]) -> Vector | None:
        """Bring v into the grid, or return None if it lies outside."""
        out = []
        for a, c in zip(self._axes, v):
            w = a.wrap(c)
            if w is None:
                return None
            out.append(w)
        return tuple(out)

    def contains_cell(self, i: Sequence[int], v: Sequence[float]) -> bool:
        return all(a.contains_cell(k, c) for a, k, c in zip(self._axes, i, v))

    def distance2boundary(
        self, i: Sequence[int], pos: Sequence[float], direction: Sequence[float]
    ) -> tuple[float, int]:
        """Return the path length to the cell boundary and the axis it hits."""
        if not self.contains_cell(i, pos):
            raise ValueError("position is not inside the given cell")
        d = self._axes[0].distance2boundary(i[0], pos[0], direction[0])
        axis = 0
        for k in (1, 2):
            if direction[k] != 0.0:
                d1 = self._axes[k].distance2boundary(i[k], pos[k], direction[k])
                if d1 < d:
                    d, axis = d1, k
        return d, axis

    def bring2boundary(
        self, i: Sequence[int], pos: Sequence[float], direction: Sequence[float]
    ) -> tuple[float, Vector]:
        """Move a particle just past its cell boundary.

        Returns the distance travelled and the new position.
        """
        d, axis = self.distance2boundary(i, pos, direction)
        new = [p + n * d for p, n in zip(pos, direction)]
        new[axis] = self._axes[axis].boundary(i[axis], direction[axis])
        return d, tuple(new)

    def pos2cell(self, v: Sequence[float]) -> Index:
        if not self.contains(v):
            raise ValueError("position is outside the grid")
        return tuple(a.pos2cell(c) for a, c in zip(self._axes, v))

    def apply_bc(self, v: Sequence[float]) -> Vector:
        return tuple(a.apply_bc(c) for a, c in zip(self._axes, v))

    def cellid(self, i: Sequence[int]) -> int:
        """Return the linear id of cell i (row-major order)."""
        return (i[0] * self.y.ncells + i[1]) * self.z.ncells + i[2]

    @staticmethod
    def is_null(i: Sequence[int]) -> bool:
        return any(k < 0 for k in i)

    @staticmethod
    def nullcell() -> Index:
        return (-1, -1, -1)

    def ncells(self) -> int:
        return self.x.ncells * self.y.ncells * self.z.ncells

    def volume(self) -> float:
        return self.x.w * self.y.w * self.z.w

    def distance(self, x1: Sequence[float], x2: Sequence[float]) -> float:
        """Euclidean distance, minimum image along periodic axes."""
        return math.hypot(*(a.distance(p, q) for a, p, q in zip(self._axes, x1, x2)))


def deflect_vector(m: Sequence[float], n: Sequence[float]) -> Vector:
    """Rotate direction m by the scattering angles encoded in n.

    n is ``(cos(phi) sin(theta), sin(phi) sin(theta), cos(theta))``.
    Returns the new normalized direction.
    """
    mx, my, mz = (float(c) for c in m)
    nx, ny, nz = (float(c) for c in n)
    smz = 1.0 - mz * mz
    if smz <= 0.0:
        return (nx, ny, nz)
    smz = math.sqrt(smz)
    rx = mx * nz + (mx * mz * nx - my * ny) / smz
    ry = my * nz + (my * mz * nx + mx * ny) / smz
    rz = mz * nz - nx * smz
    norm = math.hypot(rx, ry, rz)
    return (rx / norm, ry / norm, rz / norm)