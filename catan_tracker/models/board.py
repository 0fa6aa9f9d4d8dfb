"""Catan board data models.

Defines tile positions, Cartesian points and edges, hex tiles, harbors,
buildings, roads, and the persisted BoardSetup snapshot.  Points live in
screen space: x grows to the right and y grows downwards.
"""

from __future__ import annotations

import enum

import pydantic

# Current BoardSetup record layout.  Version 1 is the legacy camelCase export;
# see serializers.migrate_board_record.
BOARD_SCHEMA_VERSION = 2


class ResourceType(enum.StrEnum):
    """Terrain types a hex tile can carry."""

    WOOD = 'wood'
    BRICK = 'brick'
    SHEEP = 'sheep'
    WHEAT = 'wheat'
    ORE = 'ore'
    DESERT = 'desert'  # produces nothing, starts with the robber
    OCEAN = 'ocean'  # water frame; never numbered, never built on


# Values printed on number tokens (7 is the robber roll).
NUMBER_TOKEN_VALUES: frozenset[int] = frozenset({2, 3, 4, 5, 6, 8, 9, 10, 11, 12})

# Tile types that never carry a number token.
UNNUMBERED_TYPES: frozenset[ResourceType] = frozenset(
    {ResourceType.DESERT, ResourceType.OCEAN}
)

# The five producing resources, in display order.
PRODUCING_TYPES: list[ResourceType] = [
    ResourceType.WOOD,
    ResourceType.BRICK,
    ResourceType.SHEEP,
    ResourceType.WHEAT,
    ResourceType.ORE,
]


class HarborType(enum.StrEnum):
    """Harbor trade types: generic 3:1 or a specific resource at 2:1."""

    WOOD = 'wood'
    BRICK = 'brick'
    SHEEP = 'sheep'
    WHEAT = 'wheat'
    ORE = 'ore'
    ANY = 'any'


class OceanSide(enum.StrEnum):
    """Side of a directed edge (start → end) on which the ocean tile lies."""

    LEFT = 'left'
    RIGHT = 'right'


class BuildingType(enum.StrEnum):
    """Settlement or upgraded city."""

    SETTLEMENT = 'settlement'
    CITY = 'city'


class TilePosition(pydantic.BaseModel):
    """Axial (col, row) address of a tile in a row-offset layout.

    Rows narrower than the widest row are shifted by half a column, so
    ``col`` may carry a .5 step.  This is not a Cartesian position; see
    geometry.hex_center.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    col: float
    row: int


class Point(pydantic.BaseModel):
    """A Cartesian point on the board plane (vertex or hex centre)."""

    model_config = pydantic.ConfigDict(frozen=True)

    x: float
    y: float


class Edge(pydantic.BaseModel):
    """A hex side joining two vertices.

    Stored with an orientation (start → end) because harbor ocean sides are
    expressed relative to it; identity comparisons should go through
    geometry.edges_equal, which ignores orientation.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    start: Point
    end: Point


class HexTile(pydantic.BaseModel):
    """A single hex tile on the board."""

    tile_id: str
    resource: ResourceType
    # None exactly for desert and ocean; otherwise 2–12 excluding 7
    number_token: int | None = None
    position: TilePosition

    @pydantic.field_validator('number_token')
    @classmethod
    def _check_token_range(cls, value: int | None) -> int | None:
        if value is not None and value not in NUMBER_TOKEN_VALUES:
            raise ValueError(f'number token must be 2-12 excluding 7, got {value}')
        return value

    @pydantic.model_validator(mode='after')
    def _check_token_presence(self) -> HexTile:
        if self.resource in UNNUMBERED_TYPES and self.number_token is not None:
            raise ValueError(f'{self.resource} tiles cannot carry a number token')
        if self.resource not in UNNUMBERED_TYPES and self.number_token is None:
            raise ValueError(f'{self.resource} tiles need a number token')
        return self

    @property
    def is_land(self) -> bool:
        """True for every tile type except ocean."""
        return self.resource != ResourceType.OCEAN


class Harbor(pydantic.BaseModel):
    """A trading harbor on an edge between one ocean tile and one land tile."""

    trade_type: HarborType
    edge: Edge
    ocean_side: OceanSide


class Building(pydantic.BaseModel):
    """A settlement or city placed on a vertex."""

    building_type: BuildingType = BuildingType.SETTLEMENT
    position: Point
    player_id: str


class Road(pydantic.BaseModel):
    """A road placed on an edge."""

    edge: Edge
    player_id: str


class BoardSetup(pydantic.BaseModel):
    """The complete persisted board: tiles, harbors, robber, and pieces."""

    schema_version: int = BOARD_SCHEMA_VERSION
    name: str | None = None
    tiles: list[HexTile]
    harbors: list[Harbor] = pydantic.Field(default_factory=list)
    robber_position: TilePosition | None = None  # position of the robber's tile
    buildings: list[Building] = pydantic.Field(default_factory=list)
    roads: list[Road] = pydantic.Field(default_factory=list)

    def tile_by_id(self, tile_id: str) -> HexTile | None:
        """Return the tile with *tile_id*, or None."""
        return next((t for t in self.tiles if t.tile_id == tile_id), None)


class HarborToggleResult(pydantic.BaseModel):
    """Outcome of toggling a harbor on an edge in the board editor."""

    success: bool
    error_message: str | None = None
    # Board after the toggle; the unchanged input board on failure.
    board: BoardSetup
    # True when an existing harbor was removed rather than a new one added.
    removed: bool = False
