#!/usr/bin/env python3
"""
Spawn admission tests: per-lane cooldown and spacing at the spawn point.
"""

from __future__ import annotations

import random
import unittest

import pygame

from junction_sim.model.geometry import DEFAULT_GEOMETRY
from junction_sim.model.spawner import Spawner
from junction_sim.model.vehicles import Direction, Turn, Vehicle, TURN_COLORS


def vehicle_at(direction: Direction, rect) -> Vehicle:
    return Vehicle(id=99, rect=pygame.Rect(rect), direction=direction, turn=Turn.STRAIGHT, speed=5)


class SpawnerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.spawner = Spawner(DEFAULT_GEOMETRY, random.Random(3))

    def test_empty_lane_accepts(self) -> None:
        for d in Direction:
            self.assertTrue(self.spawner.can_spawn(d, [], None, 1))

    def test_cooldown_rejects_until_elapsed(self) -> None:
        cooldown = DEFAULT_GEOMETRY.spawn_cooldown
        self.assertEqual(cooldown, 25)

        self.assertFalse(self.spawner.can_spawn(Direction.EAST, [], 10, 10 + cooldown - 1))
        self.assertTrue(self.spawner.can_spawn(Direction.EAST, [], 10, 10 + cooldown))

    def test_vehicle_near_spawn_point_blocks_lane(self) -> None:
        # leading edge 20 px past the north spawn coordinate
        blocker = vehicle_at(Direction.NORTH, (415, 740, 20, 40))
        self.assertFalse(self.spawner.can_spawn(Direction.NORTH, [blocker], None, 100))

        # far enough up the lane
        clear = vehicle_at(Direction.NORTH, (415, 700, 20, 40))
        self.assertTrue(self.spawner.can_spawn(Direction.NORTH, [clear], None, 100))

    def test_vehicle_behind_spawn_point_blocks_lane(self) -> None:
        # still partly off the board, has not reached the spawn coordinate
        stuck = vehicle_at(Direction.SOUTH, (365, -20, 20, 40))
        self.assertFalse(self.spawner.can_spawn(Direction.SOUTH, [stuck], None, 100))

    def test_other_lanes_do_not_block(self) -> None:
        blocker = vehicle_at(Direction.NORTH, (415, 790, 20, 40))
        self.assertTrue(self.spawner.can_spawn(Direction.WEST, [blocker], None, 100))

    def test_try_spawn_records_frame_and_builds_vehicle(self) -> None:
        v = self.spawner.try_spawn(Direction.WEST, [], 7)

        self.assertIsNotNone(v)
        self.assertEqual(self.spawner.last_spawn_frame[Direction.WEST], 7)
        self.assertEqual(v.rect, pygame.Rect(800, 365, 40, 20))
        self.assertIs(v.direction, Direction.WEST)
        self.assertEqual(v.color, TURN_COLORS[v.turn])
        self.assertEqual(v.spawn_frame, 7)
        self.assertFalse(v.in_intersection)

        # same lane, next frame
        self.assertIsNone(self.spawner.try_spawn(Direction.WEST, [v], 8))
        self.assertEqual(self.spawner.last_spawn_frame[Direction.WEST], 7)

    def test_random_direction(self) -> None:
        v = self.spawner.try_spawn(None, [], 1)
        self.assertIn(v.direction, list(Direction))

    def test_all_turns_are_drawn(self) -> None:
        turns = {self.spawner.create_vehicle(Direction.SOUTH, 0).turn for _ in range(60)}
        self.assertEqual(turns, set(Turn))

    def test_vehicle_ids_are_unique(self) -> None:
        ids = [self.spawner.create_vehicle(d, 0).id for d in Direction]
        self.assertEqual(len(set(ids)), len(ids))


if __name__ == "__main__":
    unittest.main()
