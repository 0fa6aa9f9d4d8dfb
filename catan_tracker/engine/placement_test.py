"""Unit tests for settlement, city and road legality."""

from __future__ import annotations

import unittest

from catan_tracker import board_templates, topology
from catan_tracker.engine import placement
from catan_tracker.models.board import (
    Building,
    BuildingType,
    Edge,
    Point,
    Road,
)
from catan_tracker.models.topology import Topology

_SIZE = 50.0


def _classic_topology() -> Topology:
    return topology.compute_topology(board_templates.classic_board().tiles, _SIZE)


def _interior_vertex(topo: Topology) -> int:
    return next(v.vertex_id for v in topo.vertices if len(v.adjacent_vertex_ids) == 3)


def _farthest_vertex(topo: Topology, vid: int) -> int:
    origin = topo.vertex_point(vid)
    return max(
        topo.vertices,
        key=lambda v: (v.point.x - origin.x) ** 2 + (v.point.y - origin.y) ** 2,
    ).vertex_id


def _edge_between(topo: Topology, a: int, b: int) -> Edge:
    eid = topo.find_edge(Edge(start=topo.vertex_point(a), end=topo.vertex_point(b)))
    assert eid is not None
    return topo.edge_geometry(eid)


def _incident_edges(topo: Topology, vid: int) -> set[Edge]:
    return {topo.edge_geometry(eid) for eid in topo.vertices[vid].adjacent_edge_ids}


class TestLegalSettlements(unittest.TestCase):
    """Tests for legal_settlement_vertices."""

    def setUp(self) -> None:
        self.topo = _classic_topology()

    def test_empty_board_allows_every_vertex(self) -> None:
        legal = placement.legal_settlement_vertices(self.topo, [], [], 'p1')
        self.assertEqual(len(legal), 54)
        self.assertEqual(legal, {v.point for v in self.topo.vertices})

    def test_framed_board_allows_only_land_vertices(self) -> None:
        board = board_templates.generate_default_board()
        topo = topology.compute_topology(board.tiles, _SIZE)
        legal = placement.legal_settlement_vertices(topo, [], [], 'p1')
        expected = {
            v.point for v in topo.vertices if topo.vertex_touches_land(v.vertex_id)
        }
        self.assertEqual(legal, expected)
        self.assertEqual(len(legal), 54)
        self.assertLess(len(legal), len(topo.vertices))

    def test_distance_rule_applies_to_all_players(self) -> None:
        vid = _interior_vertex(self.topo)
        buildings = [Building(position=self.topo.vertex_point(vid), player_id='p1')]
        blocked = {self.topo.vertex_point(vid)} | {
            self.topo.vertex_point(adj)
            for adj in self.topo.vertices[vid].adjacent_vertex_ids
        }
        for player_id in ('p1', 'p2'):
            legal = placement.legal_settlement_vertices(
                self.topo, buildings, [], player_id
            )
            self.assertEqual(len(legal), 54 - 4)
            self.assertFalse(legal & blocked)

    def test_third_settlement_needs_a_road(self) -> None:
        a = _interior_vertex(self.topo)
        far = _farthest_vertex(self.topo, a)
        buildings = [
            Building(position=self.topo.vertex_point(a), player_id='p1'),
            Building(position=self.topo.vertex_point(far), player_id='p1'),
        ]
        legal = placement.legal_settlement_vertices(self.topo, buildings, [], 'p1')
        self.assertEqual(legal, set())
        # The other player is still in free placement.
        self.assertTrue(
            placement.legal_settlement_vertices(self.topo, buildings, [], 'p2')
        )

    def test_road_end_two_edges_away_is_legal(self) -> None:
        a = _interior_vertex(self.topo)
        b = self.topo.vertices[a].adjacent_vertex_ids[0]
        c = next(v for v in self.topo.vertices[b].adjacent_vertex_ids if v != a)
        far = _farthest_vertex(self.topo, a)
        buildings = [
            Building(position=self.topo.vertex_point(a), player_id='p1'),
            Building(position=self.topo.vertex_point(far), player_id='p1'),
        ]
        roads = [
            Road(edge=_edge_between(self.topo, a, b), player_id='p1'),
            Road(edge=_edge_between(self.topo, b, c), player_id='p1'),
        ]
        legal = placement.legal_settlement_vertices(self.topo, buildings, roads, 'p1')
        self.assertEqual(legal, {self.topo.vertex_point(c)})

    def test_opponent_roads_do_not_connect(self) -> None:
        a = _interior_vertex(self.topo)
        b = self.topo.vertices[a].adjacent_vertex_ids[0]
        c = next(v for v in self.topo.vertices[b].adjacent_vertex_ids if v != a)
        far = _farthest_vertex(self.topo, a)
        buildings = [
            Building(position=self.topo.vertex_point(a), player_id='p1'),
            Building(position=self.topo.vertex_point(far), player_id='p1'),
        ]
        roads = [
            Road(edge=_edge_between(self.topo, a, b), player_id='p2'),
            Road(edge=_edge_between(self.topo, b, c), player_id='p2'),
        ]
        legal = placement.legal_settlement_vertices(self.topo, buildings, roads, 'p1')
        self.assertEqual(legal, set())

    def test_buildings_off_the_board_are_ignored(self) -> None:
        buildings = [Building(position=Point(x=-9999.0, y=-9999.0), player_id='p2')]
        legal = placement.legal_settlement_vertices(self.topo, buildings, [], 'p1')
        self.assertEqual(len(legal), 54)

    def test_inputs_are_not_modified(self) -> None:
        vid = _interior_vertex(self.topo)
        buildings = [Building(position=self.topo.vertex_point(vid), player_id='p1')]
        first_edge = self.topo.vertices[vid].adjacent_edge_ids[0]
        roads = [Road(edge=self.topo.edge_geometry(first_edge), player_id='p1')]
        before = (list(buildings), list(roads))
        placement.legal_settlement_vertices(self.topo, buildings, roads, 'p1')
        placement.legal_road_edges(self.topo, buildings, roads, 'p1')
        self.assertEqual((buildings, roads), before)


class TestLegalCities(unittest.TestCase):
    """Tests for legal_city_vertices."""

    def test_only_own_settlements_upgrade(self) -> None:
        topo = _classic_topology()
        own = topo.vertex_point(0)
        city = topo.vertex_point(10)
        other = topo.vertex_point(20)
        buildings = [
            Building(position=own, player_id='p1'),
            Building(building_type=BuildingType.CITY, position=city, player_id='p1'),
            Building(position=other, player_id='p2'),
        ]
        self.assertEqual(placement.legal_city_vertices(topo, buildings, 'p1'), {own})
        self.assertEqual(placement.legal_city_vertices(topo, buildings, 'p2'), {other})
        self.assertEqual(placement.legal_city_vertices(topo, buildings, 'p3'), set())


class TestLegalRoads(unittest.TestCase):
    """Tests for legal_road_edges."""

    def setUp(self) -> None:
        self.topo = _classic_topology()
        self.vid = _interior_vertex(self.topo)
        self.building = Building(
            position=self.topo.vertex_point(self.vid), player_id='p1'
        )

    def test_no_buildings_no_roads(self) -> None:
        self.assertEqual(placement.legal_road_edges(self.topo, [], [], 'p1'), set())

    def test_edges_around_a_building(self) -> None:
        legal = placement.legal_road_edges(self.topo, [self.building], [], 'p1')
        self.assertEqual(legal, _incident_edges(self.topo, self.vid))

    def test_other_player_cannot_use_the_building(self) -> None:
        legal = placement.legal_road_edges(self.topo, [self.building], [], 'p2')
        self.assertEqual(legal, set())

    def test_road_extends_the_network(self) -> None:
        b = self.topo.vertices[self.vid].adjacent_vertex_ids[0]
        road_edge = _edge_between(self.topo, self.vid, b)
        roads = [Road(edge=road_edge, player_id='p1')]
        legal = placement.legal_road_edges(self.topo, [self.building], roads, 'p1')
        expected = (
            _incident_edges(self.topo, self.vid) | _incident_edges(self.topo, b)
        ) - {road_edge}
        self.assertEqual(legal, expected)

    def test_reversed_road_still_occupies_its_edge(self) -> None:
        b = self.topo.vertices[self.vid].adjacent_vertex_ids[0]
        road_edge = _edge_between(self.topo, self.vid, b)
        reverse = Edge(start=road_edge.end, end=road_edge.start)
        roads = [Road(edge=reverse, player_id='p2')]
        legal = placement.legal_road_edges(self.topo, [self.building], roads, 'p1')
        self.assertNotIn(road_edge, legal)
        self.assertEqual(len(legal), 2)

    def test_every_legal_edge_touches_the_network(self) -> None:
        b = self.topo.vertices[self.vid].adjacent_vertex_ids[0]
        roads = [Road(edge=_edge_between(self.topo, self.vid, b), player_id='p1')]
        connectors = {self.topo.vertex_point(self.vid), self.topo.vertex_point(b)}
        legal = placement.legal_road_edges(self.topo, [self.building], roads, 'p1')
        for edge in legal:
            self.assertTrue({edge.start, edge.end} & connectors)

    def test_ocean_only_edges_are_excluded(self) -> None:
        board = board_templates.generate_default_board()
        topo = topology.compute_topology(board.tiles, _SIZE)
        coastal = next(
            v
            for v in topo.vertices
            if len(v.adjacent_vertex_ids) == 3
            and sum(1 for i in v.adjacent_tile_indices if topo.tiles[i].is_land) == 1
        )
        building = Building(position=coastal.point, player_id='p1')
        legal = placement.legal_road_edges(topo, [building], [], 'p1')
        self.assertEqual(len(legal), 2)


class TestLegalityHelpers(unittest.TestCase):
    """Tests for is_legal_settlement and is_legal_road."""

    def setUp(self) -> None:
        self.topo = _classic_topology()

    def test_settlement_tolerates_noise(self) -> None:
        point = self.topo.vertex_point(3)
        noisy = Point(x=point.x + 1e-4, y=point.y)
        self.assertTrue(placement.is_legal_settlement(self.topo, [], [], 'p1', noisy))

    def test_settlement_off_board(self) -> None:
        self.assertFalse(
            placement.is_legal_settlement(
                self.topo, [], [], 'p1', Point(x=5000.0, y=5000.0)
            )
        )

    def test_road_in_either_direction(self) -> None:
        vid = _interior_vertex(self.topo)
        buildings = [Building(position=self.topo.vertex_point(vid), player_id='p1')]
        edge = self.topo.edge_geometry(self.topo.vertices[vid].adjacent_edge_ids[0])
        reverse = Edge(start=edge.end, end=edge.start)
        self.assertTrue(placement.is_legal_road(self.topo, buildings, [], 'p1', edge))
        self.assertTrue(
            placement.is_legal_road(self.topo, buildings, [], 'p1', reverse)
        )

    def test_road_off_board(self) -> None:
        vid = _interior_vertex(self.topo)
        buildings = [Building(position=self.topo.vertex_point(vid), player_id='p1')]
        edge = Edge(start=Point(x=5000.0, y=0.0), end=Point(x=5050.0, y=0.0))
        self.assertFalse(placement.is_legal_road(self.topo, buildings, [], 'p1', edge))


if __name__ == '__main__':
    unittest.main()
