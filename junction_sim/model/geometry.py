from dataclasses import dataclass, field
from typing import Dict, Tuple

import pygame

from .vehicles import Direction, Turn


Point = Tuple[int, int]
RectSpec = Tuple[int, int, int, int]   # x, y, width, height


def _default_turn_triggers() -> Dict[Tuple[Direction, Turn], Point]:
    return {
        # left turns
        (Direction.WEST, Turn.LEFT): (355, 375),
        (Direction.NORTH, Turn.LEFT): (425, 355),
        (Direction.SOUTH, Turn.LEFT): (375, 445),
        (Direction.EAST, Turn.LEFT): (445, 425),
        # right turns
        (Direction.WEST, Turn.RIGHT): (405, 375),
        (Direction.NORTH, Turn.RIGHT): (420, 405),
        (Direction.SOUTH, Turn.RIGHT): (365, 395),
        (Direction.EAST, Turn.RIGHT): (395, 415),
        # straight: centre line of the junction, on the vehicle's own lane
        (Direction.WEST, Turn.STRAIGHT): (400, 375),
        (Direction.EAST, Turn.STRAIGHT): (400, 425),
        (Direction.NORTH, Turn.STRAIGHT): (425, 400),
        (Direction.SOUTH, Turn.STRAIGHT): (375, 400),
    }


def _default_spawn_rects() -> Dict[Direction, RectSpec]:
    return {
        Direction.NORTH: (415, 800, 20, 40),
        Direction.SOUTH: (365, -40, 20, 40),
        Direction.EAST: (-40, 415, 40, 20),
        Direction.WEST: (800, 365, 40, 20),
    }


def _default_spawn_coords() -> Dict[Direction, int]:
    return {
        Direction.NORTH: 760,
        Direction.SOUTH: 80,
        Direction.EAST: 80,
        Direction.WEST: 760,
    }


@dataclass(frozen=True)
class IntersectionGeometry:
    """
    Static layout of the junction (all values in pixels / frames).

    The board is `board_size` x `board_size` with (0, 0) in the top-left
    corner. The intersection zone is the square [zone_min, zone_max]^2.
    """

    board_size: int = 800
    zone_min: int = 350
    zone_max: int = 450

    safe_distance: int = 50       # minimum following / spawn gap [px]
    lane_length: int = 350        # approach segment from board edge to zone [px]
    vehicle_length: int = 40      # [px]
    vehicle_width: int = 20       # [px]
    vehicle_speed: int = 5        # [px/frame]
    offscreen_margin: int = 50    # distance past the board edge before retiring [px]

    turn_triggers: Dict[Tuple[Direction, Turn], Point] = field(default_factory=_default_turn_triggers)
    spawn_rects: Dict[Direction, RectSpec] = field(default_factory=_default_spawn_rects)
    spawn_coords: Dict[Direction, int] = field(default_factory=_default_spawn_coords)

    @property
    def spawn_cooldown(self) -> int:
        """Minimum number of frames between two spawns on the same lane."""
        return self.safe_distance // 2

    @property
    def lane_capacity(self) -> int:
        """How many queued vehicles one approach segment discharges at once."""
        return max(1, self.lane_length // (self.vehicle_length + self.safe_distance))

    @property
    def zone(self) -> pygame.Rect:
        size = self.zone_max - self.zone_min
        return pygame.Rect(self.zone_min, self.zone_min, size, size)

    def turn_trigger(self, direction: Direction, turn: Turn) -> pygame.Rect:
        """Single-pixel region where a vehicle with this maneuver turns."""
        x, y = self.turn_triggers[(direction, turn)]
        return pygame.Rect(x, y, 1, 1)

    def spawn_rect(self, direction: Direction) -> pygame.Rect:
        return pygame.Rect(*self.spawn_rects[direction])

    def in_stop_band(self, direction: Direction, rect: pygame.Rect) -> bool:
        """True when the front edge sits on the stop line band in front of the zone."""
        lo, hi = self.zone_min, self.zone_max
        if direction is Direction.NORTH:
            return lo < rect.top <= hi
        if direction is Direction.SOUTH:
            return lo <= rect.bottom < hi
        if direction is Direction.EAST:
            return lo <= rect.right < hi
        return lo < rect.left <= hi

    def has_entered(self, direction: Direction, rect: pygame.Rect) -> bool:
        """True once the leading edge crossed the near boundary of the zone."""
        if direction is Direction.NORTH:
            return rect.top <= self.zone_max
        if direction is Direction.SOUTH:
            return rect.bottom >= self.zone_min
        if direction is Direction.EAST:
            return rect.right >= self.zone_min
        return rect.left <= self.zone_max

    def is_off_board(self, direction: Direction, rect: pygame.Rect) -> bool:
        """True when the vehicle is past the margin in its direction of travel."""
        far = self.board_size + self.offscreen_margin
        if direction is Direction.NORTH:
            return rect.top <= -self.offscreen_margin
        if direction is Direction.SOUTH:
            return rect.top >= far
        if direction is Direction.EAST:
            return rect.left >= far
        return rect.left <= -self.offscreen_margin

    def spawn_progress(self, direction: Direction, rect: pygame.Rect) -> int:
        """
        How far the leading edge has travelled past the lane's spawn coordinate.
        Negative while the vehicle has not reached it yet.
        """
        coord = self.spawn_coords[direction]
        if direction is Direction.NORTH:
            return coord - rect.top
        if direction is Direction.SOUTH:
            return rect.bottom - coord
        if direction is Direction.EAST:
            return rect.right - coord
        return coord - rect.left


DEFAULT_GEOMETRY = IntersectionGeometry()
