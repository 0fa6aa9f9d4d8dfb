"""Board mutation API.

Applies placements and editor changes to a BoardSetup snapshot and returns a
new snapshot; the input board is never modified.  None of these functions
checks gameplay legality (see placement.py for that): the editor allows
free-form scenario construction, and a second write to the same vertex or
edge replaces the first.
"""

from __future__ import annotations

import logging

from .. import geometry, settings, topology
from ..models import board

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Buildings and roads
# ---------------------------------------------------------------------------


def place_building(
    brd: board.BoardSetup,
    building: board.Building,
    epsilon: float = settings.VERTEX_TOLERANCE,
) -> board.BoardSetup:
    """Return *brd* with *building* placed, replacing any building on its vertex."""
    kept = [
        b
        for b in brd.buildings
        if not geometry.points_equal(b.position, building.position, epsilon)
    ]
    if len(kept) != len(brd.buildings):
        logger.debug(
            'Replacing building at (%.2f, %.2f)',
            building.position.x,
            building.position.y,
        )
    return brd.model_copy(update={'buildings': [*kept, building]})


def remove_building(
    brd: board.BoardSetup,
    position: board.Point,
    epsilon: float = settings.VERTEX_TOLERANCE,
) -> board.BoardSetup:
    """Return *brd* without any building at *position*."""
    kept = [
        b
        for b in brd.buildings
        if not geometry.points_equal(b.position, position, epsilon)
    ]
    return brd.model_copy(update={'buildings': kept})


def place_road(
    brd: board.BoardSetup,
    road: board.Road,
    epsilon: float = settings.VERTEX_TOLERANCE,
) -> board.BoardSetup:
    """Return *brd* with *road* placed, replacing any road on the same edge."""
    kept = [
        r for r in brd.roads if not geometry.edges_equal(r.edge, road.edge, epsilon)
    ]
    return brd.model_copy(update={'roads': [*kept, road]})


def remove_road(
    brd: board.BoardSetup,
    edge: board.Edge,
    epsilon: float = settings.VERTEX_TOLERANCE,
) -> board.BoardSetup:
    """Return *brd* without any road on *edge* (in either direction)."""
    kept = [r for r in brd.roads if not geometry.edges_equal(r.edge, edge, epsilon)]
    return brd.model_copy(update={'roads': kept})


# ---------------------------------------------------------------------------
# Harbors
# ---------------------------------------------------------------------------


def toggle_harbor(
    brd: board.BoardSetup,
    edge: board.Edge,
    trade_type: board.HarborType,
    size: float = settings.HEX_SIZE,
    epsilon: float = settings.VERTEX_TOLERANCE,
) -> board.HarborToggleResult:
    """Add or remove a harbor of *trade_type* on *edge*.

    The edge must separate exactly one ocean tile from one land tile.  If a
    harbor already sits there it is removed; otherwise a new one is added on
    the topology's canonical edge with its computed ocean side.  An invalid
    site leaves the board unchanged and reports ``success=False``.
    """
    topo = topology.compute_topology(brd.tiles, size, epsilon)
    site = topology.harbor_site(topo, edge)
    if site is None:
        logger.info('Rejected harbor toggle: edge is not between ocean and land')
        return board.HarborToggleResult(
            success=False,
            error_message='Harbors must sit between one ocean tile and one land tile',
            board=brd,
        )

    kept = [
        h for h in brd.harbors if not geometry.edges_equal(h.edge, site.edge, epsilon)
    ]
    if len(kept) != len(brd.harbors):
        return board.HarborToggleResult(
            success=True,
            board=brd.model_copy(update={'harbors': kept}),
            removed=True,
        )

    harbor = board.Harbor(
        trade_type=trade_type, edge=site.edge, ocean_side=site.ocean_side
    )
    return board.HarborToggleResult(
        success=True,
        board=brd.model_copy(update={'harbors': [*kept, harbor]}),
    )


# ---------------------------------------------------------------------------
# Tiles and robber
# ---------------------------------------------------------------------------


def move_robber(
    brd: board.BoardSetup, position: board.TilePosition
) -> board.BoardSetup:
    """Return *brd* with the robber moved onto the tile at *position*."""
    return brd.model_copy(update={'robber_position': position})


def set_tile_resource(
    brd: board.BoardSetup,
    tile_id: str,
    resource: board.ResourceType,
    number_token: int | None = None,
) -> board.BoardSetup:
    """Return *brd* with tile *tile_id* switched to *resource*.

    Switching to desert or ocean drops the tile's number token.  A producing
    tile keeps its token unless *number_token* replaces it; a desert or ocean
    tile turned into a producing one needs *number_token*, and without a valid
    one the edit is ignored.  An unknown tile id leaves the board unchanged.
    """
    if number_token is not None and number_token not in board.NUMBER_TOKEN_VALUES:
        logger.warning(
            'Ignoring invalid number token %d for tile %s', number_token, tile_id
        )
        return brd

    tiles: list[board.HexTile] = []
    for tile in brd.tiles:
        if tile.tile_id == tile_id:
            if resource in board.UNNUMBERED_TYPES:
                number = None
            else:
                number = tile.number_token if number_token is None else number_token
                if number is None:
                    logger.warning(
                        'Ignoring switch of tile %s to %s without a number token',
                        tile_id,
                        resource,
                    )
                    return brd
            tile = tile.model_copy(
                update={'resource': resource, 'number_token': number}
            )
        tiles.append(tile)
    return brd.model_copy(update={'tiles': tiles})


def set_tile_number(
    brd: board.BoardSetup, tile_id: str, number: int
) -> board.BoardSetup:
    """Return *brd* with *number* as the token of tile *tile_id*.

    Desert and ocean tiles keep no token, so the edit is ignored for them, as
    it is for an unknown tile id or a value that is not a valid token.
    """
    if number not in board.NUMBER_TOKEN_VALUES:
        logger.warning('Ignoring invalid number token %d for tile %s', number, tile_id)
        return brd
    tiles: list[board.HexTile] = []
    for tile in brd.tiles:
        if tile.tile_id == tile_id and tile.resource not in board.UNNUMBERED_TYPES:
            tile = tile.model_copy(update={'number_token': number})
        tiles.append(tile)
    return brd.model_copy(update={'tiles': tiles})
