from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple

import pygame

from .geometry import IntersectionGeometry
from .vehicles import Direction, Vehicle, VehicleState
from junction_sim.io.logging_utils import logger


class LightState(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class TrafficLightConfig:
    green_scale: float = 150.0     # frames of green per unit of green duration
    vehicle_weight: float = 1.55   # time cost of one queued vehicle


# phase index -> direction of the traffic that gets the green
PHASE_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.SOUTH,
    Direction.WEST,
    Direction.NORTH,
    Direction.EAST,
)

# where each light is drawn; keyed by the side it is mounted on
LIGHT_RECTS: Dict[Direction, Tuple[int, int, int, int]] = {
    Direction.NORTH: (320, 320, 20, 20),
    Direction.SOUTH: (460, 460, 20, 20),
    Direction.EAST: (460, 320, 20, 20),
    Direction.WEST: (320, 460, 20, 20),
}


class TrafficLight:
    def __init__(self, rect: pygame.Rect, state: LightState = LightState.RED) -> None:
        self.rect = rect
        self.state = state

    @property
    def is_green(self) -> bool:
        return self.state is LightState.GREEN

    def set_state(self, is_green: bool) -> None:
        self.state = LightState.GREEN if is_green else LightState.RED

    def __repr__(self) -> str:
        return f"TrafficLight({self.state.value})"


def create_lights(initial_green: Direction = Direction.NORTH) -> Dict[Direction, TrafficLight]:
    """Four lights keyed by mounting side, exactly one of them green."""
    return {
        side: TrafficLight(
            pygame.Rect(*LIGHT_RECTS[side]),
            LightState.GREEN if side is initial_green else LightState.RED,
        )
        for side in Direction
    }


def governing_side(direction: Direction) -> Direction:
    """
    Side of the light that controls vehicles heading in `direction`
    (the south light controls northbound traffic, and so on).
    """
    return direction.opposite


def count_queued(vehicles: Iterable[Vehicle], direction: Direction) -> int:
    """Vehicles of `direction` that have neither entered the zone nor turned."""
    return sum(
        1 for v in vehicles
        if v.direction is direction and v.state is VehicleState.APPROACHING
    )


class PhaseScheduler:
    """
    Round-robin controller over the four approaches:
    SOUTH -> WEST -> NORTH -> EAST -> ...

    The green time of a phase is proportional to the number of vehicles queued
    on that approach when the phase starts. A phase with nobody waiting is
    skipped with all lights red.
    """

    def __init__(
        self,
        lights: Dict[Direction, TrafficLight],
        geometry: IntersectionGeometry,
        config: TrafficLightConfig | None = None,
    ) -> None:
        self.lights = lights
        self.geometry = geometry
        self.config = config or TrafficLightConfig()

        self.current_phase: int = 1
        self.n: int = 0
        self.green_duration: float = 0.0

        self.phase_changes: int = 0
        self.skipped_phases: int = 0

    @property
    def phase_direction(self) -> Direction:
        """Direction whose phase starts at the next switch."""
        return PHASE_DIRECTIONS[self.current_phase]

    def compute_green_duration(self, vehicles: Iterable[Vehicle], direction: Direction) -> float:
        queued = count_queued(vehicles, direction)
        return queued * self.config.vehicle_weight / self.geometry.lane_capacity

    def update(self, vehicles: Iterable[Vehicle]) -> bool:
        """
        Advance the phase timer by one frame.

        :return: True when the lights were switched this frame
        """
        self.n += 1
        if self.n <= self.green_duration * self.config.green_scale:
            return False

        self.n = 0
        direction = self.phase_direction
        self.green_duration = self.compute_green_duration(vehicles, direction)

        for light in self.lights.values():
            light.set_state(False)

        if self.green_duration != 0:
            self.lights[governing_side(direction)].set_state(True)
            logger.debug(
                f"Phase {self.current_phase}: green for {direction.name} "
                f"({self.green_duration:.2f} units)"
            )
        else:
            self.skipped_phases += 1
            logger.debug(f"Phase {self.current_phase}: no queue for {direction.name}, skipped")

        self.phase_changes += 1
        self.current_phase = (self.current_phase + 1) % len(PHASE_DIRECTIONS)
        return True

    def green_count(self) -> int:
        return sum(1 for light in self.lights.values() if light.is_green)
