"""JSON serialization helpers for board and player records.

Thin wrappers around Pydantic's built-in serialization so that host
persistence layers can store and load records without depending on Pydantic
internals.  Records are versioned: loading runs a migration step that
upgrades older layouts before validation.

Version 1 is the legacy camelCase export, e.g.::

    {"hexTiles": [{"id": "hex-0", "type": "ore", "number": 10,
                   "position": {"x": 1, "y": 0}}],
     "harbors": [{"type": "any", "edge": {"from": {...}, "to": {...}},
                  "oceanSide": "right"}],
     "robberPosition": {"x": 2, "y": 2},
     "buildings": [{"type": "settlement", "position": {...}, "playerId": "p1"}],
     "roads": [{"position": {"from": {...}, "to": {...}}, "playerId": "p1"}]}
"""

from __future__ import annotations

import json
import logging
import typing

import pydantic

from .board import BOARD_SCHEMA_VERSION, UNNUMBERED_TYPES, BoardSetup, HarborType
from .player import PLAYER_SCHEMA_VERSION, GamePlayer

logger = logging.getLogger(__name__)

_HARBOR_TYPES = {t.value for t in HarborType}

# ---------------------------------------------------------------------------
# Generic helpers
# ---------------------------------------------------------------------------


def serialize_model(model: pydantic.BaseModel) -> dict[str, typing.Any]:
    """Return a JSON-serializable dict representation of any Pydantic model."""
    return model.model_dump(mode='json')


def serialize_to_json(model: pydantic.BaseModel) -> str:
    """Serialize any Pydantic model to a compact JSON string."""
    return model.model_dump_json()


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------


def deserialize_board(data: dict[str, typing.Any]) -> BoardSetup:
    """Migrate and validate a plain dict into a BoardSetup instance."""
    return BoardSetup.model_validate(migrate_board_record(data))


def board_to_json(brd: BoardSetup) -> str:
    """Convert a BoardSetup to a JSON string."""
    return serialize_to_json(brd)


def board_from_json(json_str: str) -> BoardSetup:
    """Parse a JSON string back into a BoardSetup instance."""
    return deserialize_board(json.loads(json_str))


def migrate_board_record(data: dict[str, typing.Any]) -> dict[str, typing.Any]:
    """Return *data* upgraded to the current BoardSetup layout.

    Records that already carry a ``schema_version`` are returned unchanged.
    """
    if 'schema_version' in data:
        return data
    if 'hexTiles' not in data:
        return {**data, 'schema_version': BOARD_SCHEMA_VERSION}

    logger.info('Migrating version 1 board record %r', data.get('name'))
    robber = data.get('robberPosition')
    return {
        'schema_version': BOARD_SCHEMA_VERSION,
        'name': data.get('name'),
        'tiles': [_migrate_tile(t) for t in data['hexTiles']],
        'harbors': [
            h for h in (_migrate_harbor(h) for h in data.get('harbors', [])) if h
        ],
        'robber_position': _migrate_position(robber) if robber else None,
        'buildings': [
            {
                'building_type': b.get('type'),
                'position': b.get('position'),
                'player_id': b.get('playerId'),
            }
            for b in data.get('buildings', [])
        ],
        'roads': [
            {'edge': _migrate_edge(r.get('position')), 'player_id': r.get('playerId')}
            for r in data.get('roads', [])
        ],
    }


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------


def deserialize_player(data: dict[str, typing.Any]) -> GamePlayer:
    """Migrate and validate a plain dict into a GamePlayer instance."""
    return GamePlayer.model_validate(migrate_player_record(data))


def migrate_player_record(data: dict[str, typing.Any]) -> dict[str, typing.Any]:
    """Return *data* upgraded to the current GamePlayer layout.

    Fields added after a record was written are left to the model defaults.
    """
    if 'schema_version' in data:
        return data
    if 'playerId' not in data and 'knightsPlayed' not in data:
        return {**data, 'schema_version': PLAYER_SCHEMA_VERSION}

    migrated: dict[str, typing.Any] = {
        'schema_version': PLAYER_SCHEMA_VERSION,
        'player_id': data.get('playerId', data.get('id')),
        'name': data.get('name'),
        'color': data.get('color'),
        'knights_played': data.get('knightsPlayed', 0),
        'longest_road_length': data.get('longestRoadLength', 0),
        'has_longest_road': data.get('hasLongestRoad', False),
        'has_largest_army': data.get('hasLargestArmy', False),
    }
    if 'resources' in data:
        migrated['resources'] = data['resources']
    if 'developmentCards' in data:
        migrated['development_cards'] = [
            {
                'card_id': c.get('id'),
                'card_type': c.get('type'),
                'is_played': c.get('isPlayed', False),
            }
            for c in data['developmentCards']
        ]
    return migrated


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _migrate_position(position: typing.Any) -> typing.Any:
    # Anything but an {x, y} mapping is passed through for validation to reject.
    if not isinstance(position, dict):
        return position
    return {'col': position.get('x'), 'row': position.get('y')}


def _migrate_edge(edge: typing.Any) -> typing.Any:
    if not isinstance(edge, dict):
        return edge
    return {'start': edge.get('from'), 'end': edge.get('to')}


def _migrate_tile(tile: dict[str, typing.Any]) -> dict[str, typing.Any]:
    number = tile.get('number')
    if tile.get('type') in UNNUMBERED_TYPES:
        number = None
    return {
        'tile_id': tile.get('id'),
        'resource': tile.get('type'),
        'number_token': number,
        'position': _migrate_position(tile.get('position')),
    }


def _migrate_harbor(harbor: dict[str, typing.Any]) -> dict[str, typing.Any] | None:
    # Early exports stored harbors as bare positions without an edge, and the
    # editor offered 'none'/'ocean' placeholders; neither locates a harbor.
    if harbor.get('type') not in _HARBOR_TYPES:
        return None
    if 'edge' not in harbor or 'oceanSide' not in harbor:
        logger.warning('Dropping %s harbor without an edge', harbor['type'])
        return None
    return {
        'trade_type': harbor['type'],
        'edge': _migrate_edge(harbor['edge']),
        'ocean_side': harbor['oceanSide'],
    }
