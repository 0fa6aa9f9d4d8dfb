"""Catan player data models.

The per-game player record grew fields over time (resources, development
cards); older records are upgraded by serializers.migrate_player_record
before validation.
"""

from __future__ import annotations

import enum

import pydantic

# Current GamePlayer record layout.
PLAYER_SCHEMA_VERSION = 2


class PlayerColor(enum.StrEnum):
    """Piece colours available to players."""

    RED = 'red'
    BLUE = 'blue'
    WHITE = 'white'
    ORANGE = 'orange'
    GREEN = 'green'
    BROWN = 'brown'


class DevelopmentCardType(enum.StrEnum):
    """Development card types."""

    KNIGHT = 'knight'
    VICTORY_POINT = 'victory_point'
    ROAD_BUILDING = 'road_building'
    YEAR_OF_PLENTY = 'year_of_plenty'
    MONOPOLY = 'monopoly'


class ResourceCount(pydantic.BaseModel):
    """Resource cards held by a player."""

    wood: int = 0
    brick: int = 0
    sheep: int = 0
    wheat: int = 0
    ore: int = 0

    def total(self) -> int:
        """Return the total number of resource cards."""
        return self.wood + self.brick + self.sheep + self.wheat + self.ore


class DevelopmentCard(pydantic.BaseModel):
    """A development card in a player's hand."""

    card_id: str
    card_type: DevelopmentCardType
    is_played: bool = False


class GamePlayer(pydantic.BaseModel):
    """A player's state within one game session."""

    schema_version: int = PLAYER_SCHEMA_VERSION
    player_id: str
    name: str
    color: PlayerColor
    knights_played: int = 0
    longest_road_length: int = 0
    has_longest_road: bool = False
    has_largest_army: bool = False
    resources: ResourceCount = pydantic.Field(default_factory=ResourceCount)
    development_cards: list[DevelopmentCard] = pydantic.Field(default_factory=list)
