"""Hex-grid coordinate engine.

Converts axial tile positions into Cartesian hex centres, corners and sides.

Layout
------
Tiles are pointy-topped hexagons of circumradius ``size``.  Tile centres sit
on a row-offset grid::

    x = col * size * sqrt(3)
    y = row * size * 1.5

Neighbours in the same row are one column apart; neighbours in adjacent rows
are half a column apart, which is why narrower rows carry a .5 column offset.

Corner i of a hex sits at angle ``i * 60° - 90°`` from its centre, so corner
0 points straight up and the corners run clockwise on screen (y grows
downwards).  Side i joins corner i to corner (i + 1) % 6::

            0
         5 / \\ 1        side 0: 0 → 1   side 3: 3 → 4
          |   |          side 1: 1 → 2   side 4: 4 → 5
         4 \\ / 2        side 2: 2 → 3   side 5: 5 → 0
            3

Two adjacent tiles compute their shared corners independently, and the
results differ by floating-point noise, so corner identity always goes
through :func:`points_equal` (or a :class:`PointIndex`) with a tolerance.
"""

from __future__ import annotations

import collections
import math

from . import settings
from .models.board import Edge, Point

_SQRT3 = math.sqrt(3.0)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def hex_center(col: float, row: float, size: float) -> Point:
    """Return the Cartesian centre of the tile at axial (*col*, *row*)."""
    return Point(x=col * size * _SQRT3, y=row * size * 1.5)


def hex_vertices(size: float) -> list[Point]:
    """Return the six corners of a hex of circumradius *size* at the origin."""
    corners: list[Point] = []
    for i in range(6):
        angle = math.pi / 3 * i - math.pi / 2
        corners.append(Point(x=size * math.cos(angle), y=size * math.sin(angle)))
    return corners


def hex_edges(vertices: list[Point]) -> list[Edge]:
    """Return the sides of the polygon with *vertices* as its corners in order."""
    count = len(vertices)
    return [
        Edge(start=vertices[i], end=vertices[(i + 1) % count]) for i in range(count)
    ]


def tile_vertices(col: float, row: float, size: float) -> list[Point]:
    """Return the six corners of the tile at (*col*, *row*) in board space."""
    center = hex_center(col, row, size)
    return [
        Point(x=center.x + v.x, y=center.y + v.y) for v in hex_vertices(size)
    ]


def tile_edges(col: float, row: float, size: float) -> list[Edge]:
    """Return the six sides of the tile at (*col*, *row*) in board space."""
    return hex_edges(tile_vertices(col, row, size))


def points_equal(
    a: Point, b: Point, epsilon: float = settings.VERTEX_TOLERANCE
) -> bool:
    """Return True if *a* and *b* lie within *epsilon* on both axes."""
    return abs(a.x - b.x) <= epsilon and abs(a.y - b.y) <= epsilon


def edges_equal(a: Edge, b: Edge, epsilon: float = settings.VERTEX_TOLERANCE) -> bool:
    """Return True if *a* and *b* join the same two points, in either order."""
    if points_equal(a.start, b.start, epsilon) and points_equal(a.end, b.end, epsilon):
        return True
    return points_equal(a.start, b.end, epsilon) and points_equal(
        a.end, b.start, epsilon
    )


def edge_midpoint(edge: Edge) -> Point:
    """Return the midpoint of *edge*."""
    return Point(
        x=(edge.start.x + edge.end.x) / 2,
        y=(edge.start.y + edge.end.y) / 2,
    )


class PointIndex:
    """Tolerance-aware point registry backed by a spatial hash.

    Each point is filed in the grid bucket obtained by flooring its
    coordinates to multiples of ``epsilon``.  Any point within ``epsilon`` of
    a query lands in the query's bucket or one of its eight neighbours, so a
    lookup inspects at most nine buckets instead of every stored point.
    """

    def __init__(self, epsilon: float = settings.VERTEX_TOLERANCE) -> None:
        if epsilon <= 0:
            raise ValueError('epsilon must be positive')
        self.epsilon = epsilon
        self.points: list[Point] = []
        self._buckets: dict[tuple[int, int], list[int]] = collections.defaultdict(
            list
        )

    def __len__(self) -> int:
        return len(self.points)

    def find(self, point: Point) -> int | None:
        """Return the id of a stored point equal to *point*, or None."""
        bx, by = self._bucket(point)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for point_id in self._buckets.get((bx + dx, by + dy), ()):
                    if points_equal(self.points[point_id], point, self.epsilon):
                        return point_id
        return None

    def add(self, point: Point) -> int:
        """Return the id of *point*, registering it first if it is new.

        The first point registered for a location becomes the canonical
        coordinate for every later point that matches it.
        """
        existing = self.find(point)
        if existing is not None:
            return existing
        point_id = len(self.points)
        self.points.append(point)
        self._buckets[self._bucket(point)].append(point_id)
        return point_id

    def _bucket(self, point: Point) -> tuple[int, int]:
        return (
            math.floor(point.x / self.epsilon),
            math.floor(point.y / self.epsilon),
        )
