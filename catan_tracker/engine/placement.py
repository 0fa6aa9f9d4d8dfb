"""Placement validator.

Computes the legal-placement sets for settlements, cities, and roads from a
topology and the current buildings and roads.  Every function is pure and
total: pieces whose coordinates do not land on the topology are ignored, and
an impossible query simply yields an empty set.
"""

from __future__ import annotations

from ..models import board, topology

# A player past the free initial placement (two settlements) must connect new
# settlements to their own road network.
_FREE_PLACEMENT_BUILDINGS = 2

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def legal_settlement_vertices(
    topo: topology.Topology,
    buildings: list[board.Building],
    roads: list[board.Road],
    player_id: str,
) -> set[board.Point]:
    """Return the vertices where *player_id* may place a settlement.

    A vertex qualifies when it is empty, none of its neighbours holds a
    building (distance rule), it touches at least one land tile, and, once the
    player owns two or more buildings, one of the player's roads ends there.
    """
    occupied = _occupied_vertex_ids(topo, buildings)
    owned_count = sum(1 for b in buildings if b.player_id == player_id)
    needs_road = owned_count >= _FREE_PLACEMENT_BUILDINGS
    road_ends = _road_vertex_ids(topo, roads, player_id) if needs_road else set()

    result: set[board.Point] = set()
    for vertex in topo.vertices:
        if _settlement_ok(topo, vertex, occupied, needs_road, road_ends):
            result.add(vertex.point)
    return result


def legal_city_vertices(
    topo: topology.Topology,
    buildings: list[board.Building],
    player_id: str,
) -> set[board.Point]:
    """Return the vertices holding a settlement of *player_id* (upgradable)."""
    result: set[board.Point] = set()
    for b in buildings:
        if b.player_id != player_id or b.building_type != board.BuildingType.SETTLEMENT:
            continue
        vid = topo.find_vertex(b.position)
        if vid is not None:
            result.add(topo.vertex_point(vid))
    return result


def legal_road_edges(
    topo: topology.Topology,
    buildings: list[board.Building],
    roads: list[board.Road],
    player_id: str,
) -> set[board.Edge]:
    """Return the edges where *player_id* may place a road.

    The player needs at least one building.  An edge qualifies when it is
    free, borders at least one land tile, and one of its endpoints holds a
    building of the player or is the end of another road of the player.
    """
    own_buildings = [b for b in buildings if b.player_id == player_id]
    if not own_buildings:
        return set()

    taken = _road_edge_ids(topo, roads)
    connectors = _occupied_vertex_ids(topo, own_buildings)
    connectors |= _road_vertex_ids(topo, roads, player_id)

    result: set[board.Edge] = set()
    for edge in topo.edges:
        if edge.edge_id in taken or not topo.edge_touches_land(edge.edge_id):
            continue
        if any(vid in connectors for vid in edge.vertex_ids):
            result.add(topo.edge_geometry(edge.edge_id))
    return result


def is_legal_settlement(
    topo: topology.Topology,
    buildings: list[board.Building],
    roads: list[board.Road],
    player_id: str,
    position: board.Point,
) -> bool:
    """Return True if *player_id* may place a settlement at *position*."""
    vid = topo.find_vertex(position)
    if vid is None:
        return False
    return topo.vertex_point(vid) in legal_settlement_vertices(
        topo, buildings, roads, player_id
    )


def is_legal_road(
    topo: topology.Topology,
    buildings: list[board.Building],
    roads: list[board.Road],
    player_id: str,
    edge: board.Edge,
) -> bool:
    """Return True if *player_id* may place a road on *edge*."""
    eid = topo.find_edge(edge)
    if eid is None:
        return False
    return topo.edge_geometry(eid) in legal_road_edges(
        topo, buildings, roads, player_id
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _settlement_ok(
    topo: topology.Topology,
    vertex: topology.TopologyVertex,
    occupied: set[int],
    needs_road: bool,
    road_ends: set[int],
) -> bool:
    if vertex.vertex_id in occupied:
        return False
    # Distance rule: no building one edge away.
    if any(adj in occupied for adj in vertex.adjacent_vertex_ids):
        return False
    if not topo.vertex_touches_land(vertex.vertex_id):
        return False
    return not needs_road or vertex.vertex_id in road_ends


def _occupied_vertex_ids(
    topo: topology.Topology, buildings: list[board.Building]
) -> set[int]:
    occupied: set[int] = set()
    for b in buildings:
        vid = topo.find_vertex(b.position)
        if vid is not None:
            occupied.add(vid)
    return occupied


def _road_edge_ids(topo: topology.Topology, roads: list[board.Road]) -> set[int]:
    taken: set[int] = set()
    for road in roads:
        eid = topo.find_edge(road.edge)
        if eid is not None:
            taken.add(eid)
    return taken


def _road_vertex_ids(
    topo: topology.Topology, roads: list[board.Road], player_id: str
) -> set[int]:
    """Return the vertex ids at either end of *player_id*'s roads."""
    ends: set[int] = set()
    for road in roads:
        if road.player_id != player_id:
            continue
        eid = topo.find_edge(road.edge)
        if eid is not None:
            ends.update(topo.edges[eid].vertex_ids)
    return ends
