"""Derived board topology models.

A Topology is recomputed from the tile list whenever it is needed and is never
persisted.  Vertex and edge ids are list indices into ``Topology.vertices``
and ``Topology.edges``.
"""

from __future__ import annotations

import pydantic

from .. import geometry
from .board import Edge, HexTile, OceanSide, Point


class TopologyVertex(pydantic.BaseModel):
    """A deduplicated board corner where settlements and cities can stand.

    Shared by up to three tiles and joined by edges to up to three other
    vertices.
    """

    vertex_id: int
    point: Point
    adjacent_vertex_ids: list[int]  # vertices one edge away (distance rule)
    adjacent_edge_ids: list[int]
    adjacent_tile_indices: list[int]  # indices into Topology.tiles


class TopologyEdge(pydantic.BaseModel):
    """A deduplicated tile side where a road can be placed.

    Borders one tile on the outline of the board and two tiles inside it.
    """

    edge_id: int
    vertex_ids: tuple[int, int]
    adjacent_tile_indices: list[int]  # indices into Topology.tiles


class HarborSite(pydantic.BaseModel):
    """An edge that separates exactly one ocean tile from one land tile."""

    edge_id: int
    edge: Edge
    ocean_tile_index: int
    land_tile_index: int
    ocean_side: OceanSide


class Topology(pydantic.BaseModel):
    """Vertex/edge adjacency structure derived from a tile layout."""

    size: float
    epsilon: float
    tiles: list[HexTile]
    vertices: list[TopologyVertex]
    edges: list[TopologyEdge]
    tile_vertex_ids: list[list[int]]  # per tile, corner ids in corner order 0–5
    tile_edge_ids: list[list[int]]  # per tile, side ids in side order 0–5

    _point_index: geometry.PointIndex | None = pydantic.PrivateAttr(default=None)
    _edge_lookup: dict[frozenset[int], int] | None = pydantic.PrivateAttr(
        default=None
    )

    def __eq__(self, other: object) -> bool:
        # Lookup caches are private and built lazily; only fields count.
        if not isinstance(other, Topology):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name)
            for name in type(self).model_fields
        )

    def find_vertex(self, point: Point) -> int | None:
        """Return the id of the vertex at *point* (within tolerance), or None."""
        if self._point_index is None:
            index = geometry.PointIndex(self.epsilon)
            for vertex in self.vertices:
                index.add(vertex.point)
            self._point_index = index
        return self._point_index.find(point)

    def find_edge(self, edge: Edge) -> int | None:
        """Return the id of the edge joining *edge*'s endpoints, or None."""
        a = self.find_vertex(edge.start)
        b = self.find_vertex(edge.end)
        if a is None or b is None or a == b:
            return None
        if self._edge_lookup is None:
            self._edge_lookup = {
                frozenset(e.vertex_ids): e.edge_id for e in self.edges
            }
        return self._edge_lookup.get(frozenset((a, b)))

    def vertex_point(self, vertex_id: int) -> Point:
        """Return the canonical coordinate of *vertex_id*."""
        return self.vertices[vertex_id].point

    def edge_geometry(self, edge_id: int) -> Edge:
        """Return *edge_id* as an Edge between its canonical endpoints."""
        a, b = self.edges[edge_id].vertex_ids
        return Edge(start=self.vertices[a].point, end=self.vertices[b].point)

    def tile_index(self, tile_id: str) -> int | None:
        """Return the index of the tile with *tile_id*, or None."""
        return next(
            (i for i, t in enumerate(self.tiles) if t.tile_id == tile_id), None
        )

    def vertex_touches_land(self, vertex_id: int) -> bool:
        """Return True if any tile around *vertex_id* is a land tile."""
        return any(
            self.tiles[i].is_land
            for i in self.vertices[vertex_id].adjacent_tile_indices
        )

    def edge_touches_land(self, edge_id: int) -> bool:
        """Return True if any tile along *edge_id* is a land tile."""
        return any(
            self.tiles[i].is_land for i in self.edges[edge_id].adjacent_tile_indices
        )
