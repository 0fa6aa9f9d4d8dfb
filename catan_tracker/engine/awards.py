"""Largest Army and Longest Road awards, and victory point totals.

Ties never move an award away from its current holder.  When the lead is
shared only by challengers, nobody new claims it.
"""

from __future__ import annotations

from ..models import board, player, topology

_LARGEST_ARMY_MINIMUM = 3  # knights played
_LONGEST_ROAD_MINIMUM = 5  # road segments
_AWARD_POINTS = 2
_BUILDING_POINTS = {
    board.BuildingType.SETTLEMENT: 1,
    board.BuildingType.CITY: 2,
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def largest_army_holder(
    players: list[player.GamePlayer], current_holder: str | None = None
) -> str | None:
    """Return the player_id that holds Largest Army after the latest knight."""
    counts = {p.player_id: p.knights_played for p in players}
    return _award_holder(counts, current_holder, _LARGEST_ARMY_MINIMUM)


def longest_road_holder(
    lengths: dict[str, int], current_holder: str | None = None
) -> str | None:
    """Return the player_id that holds Longest Road given each player's length."""
    return _award_holder(lengths, current_holder, _LONGEST_ROAD_MINIMUM)


def victory_points(
    game_player: player.GamePlayer, buildings: list[board.Building]
) -> int:
    """Return the victory points *game_player* currently holds.

    Settlements score 1 and cities 2; every victory point card in hand scores
    1, played or not; Longest Road and Largest Army score 2 each.
    """
    points = sum(
        _BUILDING_POINTS[b.building_type]
        for b in buildings
        if b.player_id == game_player.player_id
    )
    points += sum(
        1
        for card in game_player.development_cards
        if card.card_type == player.DevelopmentCardType.VICTORY_POINT
    )
    if game_player.has_longest_road:
        points += _AWARD_POINTS
    if game_player.has_largest_army:
        points += _AWARD_POINTS
    return points


def longest_road_length(
    topo: topology.Topology,
    buildings: list[board.Building],
    roads: list[board.Road],
    player_id: str,
) -> int:
    """Return the length of *player_id*'s longest continuous road.

    Uses DFS with backtracking over the player's road network.  A path cannot
    continue through a vertex occupied by an opponent's building.
    """
    own_edges: set[int] = set()
    for road in roads:
        if road.player_id != player_id:
            continue
        eid = topo.find_edge(road.edge)
        if eid is not None:
            own_edges.add(eid)
    if not own_edges:
        return 0

    blocked: set[int] = set()
    for b in buildings:
        if b.player_id == player_id:
            continue
        vid = topo.find_vertex(b.position)
        if vid is not None:
            blocked.add(vid)

    max_length = 0
    for start in own_edges:
        for vid in topo.edges[start].vertex_ids:
            # Walk away from one end at a time so paths are simple.
            length = _dfs_road(topo, own_edges, blocked, start, vid, {start})
            max_length = max(max_length, length)
    return max_length


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _award_holder(
    values: dict[str, int], current_holder: str | None, minimum: int
) -> str | None:
    best = max(values.values(), default=0)
    if best < minimum:
        return None
    if current_holder is not None and values.get(current_holder) == best:
        return current_holder
    leaders = [pid for pid, value in values.items() if value == best]
    if len(leaders) == 1:
        return leaders[0]
    return None


def _dfs_road(
    topo: topology.Topology,
    own_edges: set[int],
    blocked: set[int],
    edge_id: int,
    toward: int,
    visited: set[int],
) -> int:
    """Return the longest path starting with *edge_id* and heading to *toward*."""
    max_len = 1
    if toward in blocked:
        return max_len
    for adj_eid in topo.vertices[toward].adjacent_edge_ids:
        if adj_eid in visited or adj_eid not in own_edges:
            continue
        a, b = topo.edges[adj_eid].vertex_ids
        nxt = b if a == toward else a
        visited.add(adj_eid)
        length = 1 + _dfs_road(topo, own_edges, blocked, adj_eid, nxt, visited)
        visited.remove(adj_eid)
        max_len = max(max_len, length)
    return max_len
