"""Board templates.

Supplies the initial tile layouts the editor and game setup start from:

* ``generate_default_board`` lays out a preset for each game type as rows of
  tiles framed by ocean, with the desert in the middle.
* ``classic_board`` is the fixed 19-tile island (rows 3, 4, 5, 4, 3) without
  an ocean frame.
* ``randomize_board`` reshuffles the land tiles of any board.
* ``place_default_harbors`` puts the nine standard harbors on coastal edges.

Rows are centred on the widest row, so a row one tile narrower than its
neighbour is shifted half a column (see :mod:`catan_tracker.geometry`).
"""

from __future__ import annotations

import enum
import logging
import random
import typing

from . import settings, topology
from .models.board import (
    PRODUCING_TYPES,
    UNNUMBERED_TYPES,
    BoardSetup,
    Harbor,
    HarborType,
    HexTile,
    ResourceType,
    TilePosition,
)
from .models.topology import HarborSite

logger = logging.getLogger(__name__)

T = typing.TypeVar('T')


class GameType(enum.StrEnum):
    """Game-type presets with their own default layout."""

    STANDARD = 'standard'
    SEAFARERS = 'seafarers'
    CITIES = 'cities'
    TRADERS = 'traders'
    AMERICA = 'america'


# ---------------------------------------------------------------------------
# Board constants
# ---------------------------------------------------------------------------

# Tiles per row, top to bottom.
_STANDARD_ROWS = [4, 5, 6, 7, 6, 5, 4]

# Ocean frame for the seven-row layout: the first and last rows plus the two
# ends of every row in between.
_STANDARD_OCEAN = frozenset(
    {0, 1, 2, 3, 4, 8, 9, 14, 15, 21, 22, 27, 28, 32, 33, 34, 35, 36}
)

_LAYOUTS: dict[GameType, tuple[list[int], frozenset[int]]] = {
    GameType.STANDARD: (_STANDARD_ROWS, _STANDARD_OCEAN),
    GameType.CITIES: (_STANDARD_ROWS, _STANDARD_OCEAN),
    GameType.TRADERS: (_STANDARD_ROWS, _STANDARD_OCEAN),
    GameType.SEAFARERS: (
        [5, 6, 7, 8, 9, 8, 7, 6, 5],
        frozenset(
            {0, 1, 2, 3, 4, 5, 11, 12, 18, 19, 26, 27, 34, 35}
            | {41, 42, 43, 44, 45, 46, 47}
        ),
    ),
    GameType.AMERICA: (
        [3, 4, 5, 6, 5, 4, 3],
        frozenset({0, 1, 2, 3, 7, 8, 12, 13, 18, 19, 23, 24, 25, 26, 27}),
    ),
}

# Standard number-token distribution (18 tokens for 18 producing tiles).
_NUMBER_TOKENS: list[int] = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]

# Standard producing-tile distribution (18 tiles; the desert is added apart).
_RESOURCE_DISTRIBUTION: list[ResourceType] = (
    [ResourceType.WOOD] * 4
    + [ResourceType.SHEEP] * 4
    + [ResourceType.WHEAT] * 4
    + [ResourceType.BRICK] * 3
    + [ResourceType.ORE] * 3
)

# Standard harbor distribution (4 generic 3:1 + one 2:1 per resource = 9 total).
_HARBOR_DISTRIBUTION: list[HarborType] = [
    HarborType.ANY,
    HarborType.ANY,
    HarborType.ANY,
    HarborType.ANY,
    HarborType.WOOD,
    HarborType.BRICK,
    HarborType.WHEAT,
    HarborType.SHEEP,
    HarborType.ORE,
]

# Fixed classic island, row by row: (resource, number token).
_CLASSIC_ROWS: list[list[tuple[ResourceType, int | None]]] = [
    [(ResourceType.ORE, 10), (ResourceType.SHEEP, 2), (ResourceType.WOOD, 9)],
    [
        (ResourceType.WHEAT, 12),
        (ResourceType.BRICK, 6),
        (ResourceType.SHEEP, 4),
        (ResourceType.BRICK, 10),
    ],
    [
        (ResourceType.WHEAT, 9),
        (ResourceType.WOOD, 11),
        (ResourceType.DESERT, None),
        (ResourceType.WOOD, 3),
        (ResourceType.ORE, 8),
    ],
    [
        (ResourceType.WOOD, 8),
        (ResourceType.ORE, 3),
        (ResourceType.WHEAT, 4),
        (ResourceType.SHEEP, 5),
    ],
    [(ResourceType.BRICK, 5), (ResourceType.WHEAT, 6), (ResourceType.SHEEP, 11)],
]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_default_board(game_type: GameType = GameType.STANDARD) -> BoardSetup:
    """Return the default layout for *game_type*.

    Tiles outside the ocean frame cycle through the five producing resources
    and the standard number tokens by tile index; the middle tile is the
    desert and starts with the robber.
    """
    rows, ocean = _LAYOUTS[game_type]
    desert_index = sum(rows) // 2

    tiles: list[HexTile] = []
    positions = _row_positions(rows)
    for hex_id, position in enumerate(positions):
        if hex_id in ocean:
            resource = ResourceType.OCEAN
        elif hex_id == desert_index:
            resource = ResourceType.DESERT
        else:
            resource = PRODUCING_TYPES[hex_id % len(PRODUCING_TYPES)]
        number = None
        if resource not in UNNUMBERED_TYPES:
            number = _NUMBER_TOKENS[hex_id % len(_NUMBER_TOKENS)]
        tiles.append(
            HexTile(
                tile_id=f'hex-{hex_id}',
                resource=resource,
                number_token=number,
                position=position,
            )
        )

    return BoardSetup(
        name=f'{game_type.value.title()} default',
        tiles=tiles,
        robber_position=_desert_position(tiles),
    )


def classic_board() -> BoardSetup:
    """Return the fixed 19-tile classic island without an ocean frame."""
    positions = _row_positions([len(row) for row in _CLASSIC_ROWS])
    cells = [cell for row in _CLASSIC_ROWS for cell in row]
    tiles = [
        HexTile(
            tile_id=f'hex-{i}',
            resource=resource,
            number_token=number,
            position=position,
        )
        for i, ((resource, number), position) in enumerate(
            zip(cells, positions, strict=True)
        )
    ]
    return BoardSetup(
        name='Classic', tiles=tiles, robber_position=_desert_position(tiles)
    )


def randomize_board(brd: BoardSetup, seed: int | None = None) -> BoardSetup:
    """Return *brd* with its land tiles reshuffled.

    Land tiles receive exactly one desert plus the standard producing-tile
    distribution, cycled to fit the number of land tiles, and the producing
    tiles receive shuffled number tokens.  Ocean tiles, harbors and pieces
    are kept; the robber moves onto the new desert.

    Args:
        brd: The board to reshuffle; it is not modified.
        seed: Optional integer seed for reproducible boards.
    """
    rng = random.Random(seed)
    land = [i for i, t in enumerate(brd.tiles) if t.is_land]
    if not land:
        return brd

    producing = len(land) - 1
    resources = [ResourceType.DESERT] + _cycled(_RESOURCE_DISTRIBUTION, producing)
    rng.shuffle(resources)
    numbers = _cycled(_NUMBER_TOKENS, producing)
    rng.shuffle(numbers)
    number_iter = iter(numbers)

    tiles = list(brd.tiles)
    for tile_idx, resource in zip(land, resources, strict=True):
        number = None if resource == ResourceType.DESERT else next(number_iter)
        tiles[tile_idx] = tiles[tile_idx].model_copy(
            update={'resource': resource, 'number_token': number}
        )

    return brd.model_copy(
        update={'tiles': tiles, 'robber_position': _desert_position(tiles)}
    )


def place_default_harbors(
    brd: BoardSetup,
    seed: int | None = None,
    size: float = settings.HEX_SIZE,
) -> BoardSetup:
    """Return *brd* with the nine standard harbors placed on coastal edges.

    Harbor sites are edges between one ocean and one land tile.  Sites are
    picked at random so that no vertex touches two harbors; a board with too
    little coastline gets fewer than nine.
    """
    rng = random.Random(seed)
    topo = topology.compute_topology(brd.tiles, size)
    sites = topology.harbor_sites(topo)
    rng.shuffle(sites)

    used_vertices: set[int] = set()
    selected: list[HarborSite] = []
    for site in sites:
        v0, v1 = topo.edges[site.edge_id].vertex_ids
        if v0 not in used_vertices and v1 not in used_vertices:
            selected.append(site)
            used_vertices.add(v0)
            used_vertices.add(v1)
        if len(selected) == len(_HARBOR_DISTRIBUTION):
            break

    if len(selected) < len(_HARBOR_DISTRIBUTION):
        logger.warning(
            'Only %d harbor sites available, placing %d of %d harbors',
            len(sites),
            len(selected),
            len(_HARBOR_DISTRIBUTION),
        )

    harbor_types = _HARBOR_DISTRIBUTION.copy()
    rng.shuffle(harbor_types)
    harbors = [
        Harbor(trade_type=ht, edge=site.edge, ocean_side=site.ocean_side)
        for ht, site in zip(harbor_types, selected)
    ]
    return brd.model_copy(update={'harbors': harbors})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _row_positions(rows: list[int]) -> list[TilePosition]:
    """Return tile positions row by row, centring each row on the widest."""
    widest = max(rows)
    positions: list[TilePosition] = []
    for row_index, row_size in enumerate(rows):
        offset = (widest - row_size) / 2
        for col in range(row_size):
            positions.append(TilePosition(col=col + offset, row=row_index))
    return positions


def _desert_position(tiles: list[HexTile]) -> TilePosition | None:
    return next(
        (t.position for t in tiles if t.resource == ResourceType.DESERT), None
    )


def _cycled(values: list[T], count: int) -> list[T]:
    """Return *count* items taken from *values* in order, wrapping around."""
    return [values[i % len(values)] for i in range(count)]
