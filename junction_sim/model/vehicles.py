from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Tuple

import pygame

if TYPE_CHECKING:
    from .geometry import IntersectionGeometry


class Direction(IntEnum):
    """Compass heading a vehicle is currently travelling in."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.NORTH, Direction.SOUTH)

    def turned(self, turn: "Turn") -> "Direction":
        """Heading after executing `turn` (right = clockwise)."""
        if turn is Turn.RIGHT:
            return Direction((self + 1) % 4)
        if turn is Turn.LEFT:
            return Direction((self - 1) % 4)
        return self

    @classmethod
    def parse(cls, name: str) -> "Direction":
        key = name.strip().upper()
        aliases = {"N": "NORTH", "S": "SOUTH", "E": "EAST", "W": "WEST"}
        key = aliases.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Unknown direction '{name}'. Available: "
                f"{', '.join(d.name.lower() for d in cls)}"
            )


class Turn(Enum):
    STRAIGHT = "straight"
    RIGHT = "right"
    LEFT = "left"


class VehicleState(IntEnum):
    """
    Lifecycle of a vehicle. The value only ever increases:
    APPROACHING -> IN_INTERSECTION -> TURNED -> RETIRED
    """

    APPROACHING = 0
    IN_INTERSECTION = 1
    TURNED = 2
    RETIRED = 3


# cosmetic colour per maneuver
TURN_COLORS = {
    Turn.STRAIGHT: (180, 180, 200),
    Turn.RIGHT: (200, 60, 60),
    Turn.LEFT: (60, 100, 180),
}


@dataclass
class Vehicle:
    id: int
    rect: pygame.Rect            # position + size, the only moving state
    direction: Direction         # current heading, changes once on turn
    turn: Turn                   # maneuver chosen at spawn
    speed: int                   # [px/frame]
    spawn_frame: int = 0

    color: Tuple[int, int, int] = (180, 180, 200)
    state: VehicleState = VehicleState.APPROACHING
    retire_frame: int | None = None

    @property
    def in_intersection(self) -> bool:
        return self.state >= VehicleState.IN_INTERSECTION

    @property
    def has_turned(self) -> bool:
        return self.state >= VehicleState.TURNED

    @property
    def retired(self) -> bool:
        return self.state is VehicleState.RETIRED

    def clone(self) -> "Vehicle":
        """Independent copy for the tentative buffer (the rect is copied too)."""
        return Vehicle(
            id=self.id,
            rect=self.rect.copy(),
            direction=self.direction,
            turn=self.turn,
            speed=self.speed,
            spawn_frame=self.spawn_frame,
            color=self.color,
            state=self.state,
            retire_frame=self.retire_frame,
        )

    def leading_edge(self) -> int:
        """Coordinate of the front bumper along the travel axis."""
        r = self.rect
        if self.direction is Direction.NORTH:
            return r.top
        if self.direction is Direction.SOUTH:
            return r.bottom
        if self.direction is Direction.EAST:
            return r.right
        return r.left

    def trailing_edge(self) -> int:
        r = self.rect
        if self.direction is Direction.NORTH:
            return r.bottom
        if self.direction is Direction.SOUTH:
            return r.top
        if self.direction is Direction.EAST:
            return r.left
        return r.right

    def gap_to(self, other: "Vehicle") -> int:
        """
        Signed distance from this vehicle's leading edge to the trailing edge
        of `other` (same direction). Positive means `other` is ahead.
        """
        if self.direction in (Direction.NORTH, Direction.WEST):
            return self.leading_edge() - other.trailing_edge()
        return other.trailing_edge() - self.leading_edge()

    # ------------------------ STATE MACHINE ------------------------

    def _advance_state(self, new_state: VehicleState) -> None:
        if new_state > self.state:
            self.state = new_state

    def should_stop(self, is_green: bool, geometry: "IntersectionGeometry") -> bool:
        if self.state is not VehicleState.APPROACHING:
            return False
        if is_green:
            return False
        return geometry.in_stop_band(self.direction, self.rect)

    def advance(self, is_green: bool, geometry: "IntersectionGeometry") -> None:
        """
        One frame of movement: stop check, intersection entry, turn, translation.

        :param is_green: state of the light governing the current direction
        :param geometry: zone bounds and turn trigger table

        Only called on a clone made for the tentative buffer.
        """
        if self.should_stop(is_green, geometry):
            return

        if self.state is VehicleState.APPROACHING:
            if geometry.has_entered(self.direction, self.rect):
                self._advance_state(VehicleState.IN_INTERSECTION)

        if not self.has_turned:
            trigger = geometry.turn_trigger(self.direction, self.turn)
            if self.rect.colliderect(trigger):
                self.apply_turn()

        dx, dy = _STEP[self.direction]
        self.rect.move_ip(dx * self.speed, dy * self.speed)

    def apply_turn(self) -> None:
        """Take the new heading and rotate the body in place when the axis changes."""
        old_vertical = self.direction.is_vertical
        self.direction = self.direction.turned(self.turn)
        self._advance_state(VehicleState.TURNED)

        if self.direction.is_vertical != old_vertical:
            center = self.rect.center
            self.rect = pygame.Rect(0, 0, self.rect.height, self.rect.width)
            self.rect.center = center

    def mark_retired(self, frame: int) -> None:
        self._advance_state(VehicleState.RETIRED)
        self.retire_frame = frame


# unit step per direction, (0, 0) is the top-left corner of the board
_STEP = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}
