"""Board topology builder.

Derives the deduplicated vertex and edge graph of a tile layout, the
vertex/edge ↔ tile incidence, and the harbor sites along the coast.

Vertex identification
---------------------
Each tile contributes its six corners (see :mod:`catan_tracker.geometry`).
Corners computed for neighbouring tiles coincide only up to floating-point
noise, so they are merged through a :class:`~catan_tracker.geometry.PointIndex`:
the first corner registered at a location becomes the vertex, and every later
corner within tolerance reuses its id.  On a hex grid most inner vertices are
shared by three tiles and must collapse into a single node.

Edge identification
-------------------
Side i of a tile joins its corners i and (i + 1) % 6.  After vertex merging an
edge is keyed by the unordered pair of its vertex ids, so a side shared by two
tiles becomes one edge.  The edge keeps the orientation of the first tile that
produced it.

A single tile has 6 vertices and 6 edges, two neighbouring tiles have 10 and
11, and the 19-tile standard island has **54 vertices** and **72 edges**.

Harbor sites and ocean side
---------------------------
An edge is a harbor site when it borders exactly one ocean tile and one land
tile.  The ocean side is found by taking the edge direction ``d = end -
start``, its normal ``n = (-d.y, d.x)``, and the sign of ``n · (c - m)`` where
``c`` is the ocean tile centre and ``m`` the edge midpoint.  In screen space
(y down) ``n`` points to the right of the direction of travel, so a positive
product means the water lies on the right.
"""

from __future__ import annotations

import collections
import logging

from . import geometry, settings
from .models.board import Edge, HexTile, OceanSide, Point
from .models.topology import HarborSite, Topology, TopologyEdge, TopologyVertex

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_topology(
    tiles: list[HexTile],
    size: float = settings.HEX_SIZE,
    epsilon: float = settings.VERTEX_TOLERANCE,
) -> Topology:
    """Compute the vertex/edge graph of *tiles* laid out with hex radius *size*.

    Ids are assigned in tile order, so equal tile lists always yield equal
    topologies.
    """
    index = geometry.PointIndex(epsilon)
    edge_key_to_id: dict[frozenset[int], int] = {}
    e_vertex_ids: list[tuple[int, int]] = []
    tile_vertex_ids: list[list[int]] = []
    tile_edge_ids: list[list[int]] = []

    # ------------------------------------------------------------------
    # First pass: merge corners into vertices and sides into edges.
    # ------------------------------------------------------------------
    for tile in tiles:
        corners = geometry.tile_vertices(tile.position.col, tile.position.row, size)
        vids = [index.add(corner) for corner in corners]
        tile_vertex_ids.append(vids)

        eids: list[int] = []
        for i in range(6):
            a, b = vids[i], vids[(i + 1) % 6]
            key = frozenset((a, b))
            if key not in edge_key_to_id:
                edge_key_to_id[key] = len(e_vertex_ids)
                e_vertex_ids.append((a, b))
            eids.append(edge_key_to_id[key])
        tile_edge_ids.append(eids)

    # ------------------------------------------------------------------
    # Second pass: populate adjacency structures.
    # ------------------------------------------------------------------
    v_adj_vertices: dict[int, list[int]] = collections.defaultdict(list)
    v_adj_edges: dict[int, list[int]] = collections.defaultdict(list)
    v_adj_tiles: dict[int, list[int]] = collections.defaultdict(list)
    e_adj_tiles: dict[int, list[int]] = collections.defaultdict(list)

    for tile_idx, (vids, eids) in enumerate(
        zip(tile_vertex_ids, tile_edge_ids, strict=True)
    ):
        for vid in vids:
            if tile_idx not in v_adj_tiles[vid]:
                v_adj_tiles[vid].append(tile_idx)
        for eid in eids:
            if tile_idx not in e_adj_tiles[eid]:
                e_adj_tiles[eid].append(tile_idx)
            vid0, vid1 = e_vertex_ids[eid]
            # Neighbours along this tile's outline; the union over every tile
            # sharing a vertex gives its full neighbourhood.
            if vid1 not in v_adj_vertices[vid0]:
                v_adj_vertices[vid0].append(vid1)
            if vid0 not in v_adj_vertices[vid1]:
                v_adj_vertices[vid1].append(vid0)
            if eid not in v_adj_edges[vid0]:
                v_adj_edges[vid0].append(eid)
            if eid not in v_adj_edges[vid1]:
                v_adj_edges[vid1].append(eid)

    vertices = [
        TopologyVertex(
            vertex_id=vid,
            point=point,
            adjacent_vertex_ids=v_adj_vertices[vid],
            adjacent_edge_ids=v_adj_edges[vid],
            adjacent_tile_indices=v_adj_tiles[vid],
        )
        for vid, point in enumerate(index.points)
    ]
    edges = [
        TopologyEdge(
            edge_id=eid,
            vertex_ids=pair,
            adjacent_tile_indices=e_adj_tiles[eid],
        )
        for eid, pair in enumerate(e_vertex_ids)
    ]

    logger.debug(
        'Computed topology: %d tiles, %d vertices, %d edges',
        len(tiles),
        len(vertices),
        len(edges),
    )
    return Topology(
        size=size,
        epsilon=epsilon,
        tiles=list(tiles),
        vertices=vertices,
        edges=edges,
        tile_vertex_ids=tile_vertex_ids,
        tile_edge_ids=tile_edge_ids,
    )


def compute_ocean_side(edge: Edge, ocean_center: Point) -> OceanSide:
    """Return which side of *edge* (travelling start → end) *ocean_center* is on."""
    dx = edge.end.x - edge.start.x
    dy = edge.end.y - edge.start.y
    mid = geometry.edge_midpoint(edge)
    dot = -dy * (ocean_center.x - mid.x) + dx * (ocean_center.y - mid.y)
    return OceanSide.RIGHT if dot > 0 else OceanSide.LEFT


def harbor_site(topology: Topology, edge: Edge) -> HarborSite | None:
    """Return the harbor site at *edge*, or None if it cannot host a harbor.

    The edge must be on the board and border exactly one ocean tile and one
    land tile.
    """
    edge_id = topology.find_edge(edge)
    if edge_id is None:
        return None
    return _site_for_edge(topology, edge_id)


def harbor_sites(topology: Topology) -> list[HarborSite]:
    """Return every edge that can host a harbor, in edge-id order."""
    sites: list[HarborSite] = []
    for topo_edge in topology.edges:
        site = _site_for_edge(topology, topo_edge.edge_id)
        if site is not None:
            sites.append(site)
    return sites


def vertices_for_tile(topology: Topology, tile_id: str) -> list[Point]:
    """Return the six canonical corners of *tile_id*, or [] if it is unknown."""
    tile_idx = topology.tile_index(tile_id)
    if tile_idx is None:
        return []
    return [topology.vertex_point(vid) for vid in topology.tile_vertex_ids[tile_idx]]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _site_for_edge(topology: Topology, edge_id: int) -> HarborSite | None:
    tile_indices = topology.edges[edge_id].adjacent_tile_indices
    if len(tile_indices) != 2:
        return None
    ocean = [i for i in tile_indices if not topology.tiles[i].is_land]
    land = [i for i in tile_indices if topology.tiles[i].is_land]
    if len(ocean) != 1 or len(land) != 1:
        return None

    edge = topology.edge_geometry(edge_id)
    ocean_tile = topology.tiles[ocean[0]]
    center = geometry.hex_center(
        ocean_tile.position.col, ocean_tile.position.row, topology.size
    )
    return HarborSite(
        edge_id=edge_id,
        edge=edge,
        ocean_tile_index=ocean[0],
        land_tile_index=land[0],
        ocean_side=compute_ocean_side(edge, center),
    )
