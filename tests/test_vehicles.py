#!/usr/bin/env python3
"""
Vehicle state machine, stop line, turn and translation tests.
"""

from __future__ import annotations

import unittest

import pygame

from junction_sim.model.geometry import DEFAULT_GEOMETRY
from junction_sim.model.vehicles import Direction, Turn, Vehicle, VehicleState


def make_vehicle(direction: Direction, turn: Turn = Turn.STRAIGHT, rect=None) -> Vehicle:
    if rect is None:
        rect = DEFAULT_GEOMETRY.spawn_rect(direction)
    return Vehicle(id=0, rect=pygame.Rect(rect), direction=direction, turn=turn, speed=5)


class DirectionTests(unittest.TestCase):
    def test_rotation_table(self) -> None:
        self.assertIs(Direction.NORTH.turned(Turn.RIGHT), Direction.EAST)
        self.assertIs(Direction.EAST.turned(Turn.RIGHT), Direction.SOUTH)
        self.assertIs(Direction.SOUTH.turned(Turn.RIGHT), Direction.WEST)
        self.assertIs(Direction.WEST.turned(Turn.RIGHT), Direction.NORTH)

        self.assertIs(Direction.NORTH.turned(Turn.LEFT), Direction.WEST)
        self.assertIs(Direction.WEST.turned(Turn.LEFT), Direction.SOUTH)
        self.assertIs(Direction.SOUTH.turned(Turn.LEFT), Direction.EAST)
        self.assertIs(Direction.EAST.turned(Turn.LEFT), Direction.NORTH)

        for d in Direction:
            self.assertIs(d.turned(Turn.STRAIGHT), d)

    def test_opposite_and_parse(self) -> None:
        self.assertIs(Direction.NORTH.opposite, Direction.SOUTH)
        self.assertIs(Direction.EAST.opposite, Direction.WEST)
        self.assertIs(Direction.parse("n"), Direction.NORTH)
        self.assertIs(Direction.parse(" west "), Direction.WEST)
        with self.assertRaises(ValueError):
            Direction.parse("up")


class VehicleAdvanceTests(unittest.TestCase):
    def test_stops_at_red_light(self) -> None:
        v = make_vehicle(Direction.NORTH, rect=(415, 450, 20, 40))
        before = v.rect.copy()

        v.advance(False, DEFAULT_GEOMETRY)

        self.assertEqual(v.rect, before)
        self.assertFalse(v.in_intersection)
        self.assertFalse(v.has_turned)

    def test_stop_line_for_every_direction(self) -> None:
        at_stop_line = {
            Direction.NORTH: (415, 450, 20, 40),
            Direction.SOUTH: (365, 310, 20, 40),
            Direction.EAST: (310, 415, 40, 20),
            Direction.WEST: (450, 365, 40, 20),
        }
        for d, rect in at_stop_line.items():
            with self.subTest(direction=d):
                v = make_vehicle(d, rect=rect)
                v.advance(False, DEFAULT_GEOMETRY)
                self.assertEqual(v.rect, pygame.Rect(rect))

    def test_green_light_enters_intersection(self) -> None:
        v = make_vehicle(Direction.NORTH, rect=(415, 450, 20, 40))

        v.advance(True, DEFAULT_GEOMETRY)

        self.assertTrue(v.in_intersection)
        self.assertEqual(v.state, VehicleState.IN_INTERSECTION)
        self.assertEqual(v.rect.topleft, (415, 445))

    def test_red_light_far_from_stop_line_keeps_moving(self) -> None:
        v = make_vehicle(Direction.EAST)
        v.advance(False, DEFAULT_GEOMETRY)
        self.assertEqual(v.rect.topleft, (-35, 415))

    def test_inside_intersection_ignores_red(self) -> None:
        v = make_vehicle(Direction.SOUTH, rect=(365, 320, 20, 40))
        v.state = VehicleState.IN_INTERSECTION

        v.advance(False, DEFAULT_GEOMETRY)

        self.assertEqual(v.rect.topleft, (365, 325))

    def test_right_turn_rotates_in_place(self) -> None:
        v = make_vehicle(Direction.NORTH, Turn.RIGHT, rect=(415, 405, 20, 40))
        center_before = v.rect.center

        v.apply_turn()

        self.assertIs(v.direction, Direction.EAST)
        self.assertEqual(v.rect.size, (40, 20))
        self.assertLessEqual(abs(v.rect.centerx - center_before[0]), 1)
        self.assertLessEqual(abs(v.rect.centery - center_before[1]), 1)
        self.assertTrue(v.has_turned)

    def test_turn_during_advance_does_not_displace(self) -> None:
        v = make_vehicle(Direction.WEST, Turn.LEFT, rect=(355, 365, 40, 20))
        v.state = VehicleState.IN_INTERSECTION
        cx, cy = v.rect.center

        v.advance(True, DEFAULT_GEOMETRY)

        # rotated around the old centre, then one step south
        self.assertIs(v.direction, Direction.SOUTH)
        self.assertEqual(v.rect.size, (20, 40))
        self.assertEqual(v.rect.center, (cx, cy + v.speed))

    def test_straight_keeps_heading_and_size(self) -> None:
        v = make_vehicle(Direction.NORTH, Turn.STRAIGHT, rect=(415, 400, 20, 40))
        v.state = VehicleState.IN_INTERSECTION

        v.advance(True, DEFAULT_GEOMETRY)

        self.assertTrue(v.has_turned)
        self.assertIs(v.direction, Direction.NORTH)
        self.assertEqual(v.rect, pygame.Rect(415, 395, 20, 40))

    def test_clone_is_independent(self) -> None:
        v = make_vehicle(Direction.SOUTH)
        c = v.clone()
        c.advance(True, DEFAULT_GEOMETRY)

        self.assertEqual(v.rect, DEFAULT_GEOMETRY.spawn_rect(Direction.SOUTH))
        self.assertNotEqual(c.rect, v.rect)

    def test_gap_to_vehicle_ahead(self) -> None:
        leader = make_vehicle(Direction.NORTH, rect=(415, 450, 20, 40))
        follower = make_vehicle(Direction.NORTH, rect=(415, 540, 20, 40))

        self.assertEqual(follower.gap_to(leader), 50)
        self.assertLess(leader.gap_to(follower), 0)

    def test_flags_are_monotone(self) -> None:
        for d in Direction:
            for turn in Turn:
                with self.subTest(direction=d, turn=turn):
                    v = make_vehicle(d, turn)
                    seen_entered = seen_turned = False
                    for frame in range(400):
                        v.advance(frame % 7 != 0, DEFAULT_GEOMETRY)
                        if seen_entered:
                            self.assertTrue(v.in_intersection)
                        if seen_turned:
                            self.assertTrue(v.has_turned)
                        seen_entered = seen_entered or v.in_intersection
                        seen_turned = seen_turned or v.has_turned
                    self.assertTrue(seen_entered)
                    self.assertTrue(seen_turned)

    def test_every_maneuver_reaches_its_trigger_before_leaving(self) -> None:
        for d in Direction:
            for turn in Turn:
                with self.subTest(direction=d, turn=turn):
                    v = make_vehicle(d, turn)
                    for _ in range(400):
                        if DEFAULT_GEOMETRY.is_off_board(v.direction, v.rect):
                            break
                        v.advance(True, DEFAULT_GEOMETRY)
                    self.assertTrue(DEFAULT_GEOMETRY.is_off_board(v.direction, v.rect))
                    self.assertTrue(v.has_turned)
                    self.assertIs(v.direction, d.turned(turn))
                    self.assertEqual(v.rect.height > v.rect.width, v.direction.is_vertical)

    def test_mark_retired(self) -> None:
        v = make_vehicle(Direction.EAST)
        v.mark_retired(120)
        self.assertTrue(v.retired)
        self.assertTrue(v.in_intersection)
        self.assertEqual(v.retire_frame, 120)


if __name__ == "__main__":
    unittest.main()
