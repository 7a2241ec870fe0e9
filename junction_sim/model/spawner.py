import random
from typing import Dict, Iterable, Optional

from .geometry import IntersectionGeometry
from .vehicles import Direction, Turn, Vehicle, TURN_COLORS
from junction_sim.io.logging_utils import logger


class Spawner:
    """
    Admission control for new vehicles.
    A lane accepts a vehicle only if the per-lane cooldown has elapsed and no
    vehicle of that lane is still close to the spawn point.
    """

    def __init__(self, geometry: IntersectionGeometry, rng: random.Random | None = None) -> None:
        self.geometry = geometry
        self.rng = rng or random.Random()
        self.last_spawn_frame: Dict[Direction, Optional[int]] = {d: None for d in Direction}
        self._next_vehicle_id = 0

    def can_spawn(
        self,
        direction: Direction,
        vehicles: Iterable[Vehicle],
        last_spawn_frame: Optional[int],
        current_frame: int,
    ) -> bool:
        geom = self.geometry

        if last_spawn_frame is not None and current_frame - last_spawn_frame < geom.spawn_cooldown:
            return False

        for v in vehicles:
            if v.direction is not direction:
                continue
            if geom.spawn_progress(direction, v.rect) < geom.safe_distance:
                return False

        return True

    def random_direction(self) -> Direction:
        return self.rng.choice(list(Direction))

    def try_spawn(
        self,
        direction: Direction | None,
        vehicles: Iterable[Vehicle],
        current_frame: int,
    ) -> Vehicle | None:
        """
        Create a vehicle on `direction` (random lane when None) if the lane
        admits it. Records the spawn frame on success.
        """
        if direction is None:
            direction = self.random_direction()

        if not self.can_spawn(direction, vehicles, self.last_spawn_frame[direction], current_frame):
            return None

        self.last_spawn_frame[direction] = current_frame
        return self.create_vehicle(direction, current_frame)

    def create_vehicle(self, direction: Direction, current_frame: int, turn: Turn | None = None) -> Vehicle:
        """Vehicle at the off-board spawn rectangle with a random maneuver."""
        if turn is None:
            turn = self.rng.choice(list(Turn))

        vid = self._next_vehicle_id
        self._next_vehicle_id += 1

        logger.debug(f"Spawn #{vid} {direction.name} {turn.value} at frame {current_frame}")

        return Vehicle(
            id=vid,
            rect=self.geometry.spawn_rect(direction),
            direction=direction,
            turn=turn,
            speed=self.geometry.vehicle_speed,
            spawn_frame=current_frame,
            color=TURN_COLORS[turn],
        )
