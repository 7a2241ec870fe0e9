from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from .geometry import IntersectionGeometry, DEFAULT_GEOMETRY
from .spawner import Spawner
from .traffic_lights import (
    LightState,
    PhaseScheduler,
    TrafficLight,
    TrafficLightConfig,
    count_queued,
    create_lights,
    governing_side,
)
from .vehicles import Vehicle, Direction
from junction_sim.io.logging_utils import logger


@dataclass
class SimulationMetricsRaw:
    travel_frames: List[int] = field(default_factory=list)
    retired_count: int = 0

    total_spawned: int = 0
    spawn_rejected: int = 0

    # tentative updates thrown away by the safety checks
    blocked_following: int = 0
    blocked_collision: int = 0

    max_queue: Dict[str, int] = field(default_factory=lambda: {d.name: 0 for d in Direction})

    def record_spawn(self, accepted: bool) -> None:
        if accepted:
            self.total_spawned += 1
        else:
            self.spawn_rejected += 1

    def record_retired(self, v: Vehicle) -> None:
        """Store metrics for a vehicle that left the board."""
        if v.retire_frame is None:
            return
        self.retired_count += 1
        self.travel_frames.append(v.retire_frame - v.spawn_frame)

    def record_queues(self, queues: Dict[Direction, int]) -> None:
        for d, q in queues.items():
            if q > self.max_queue[d.name]:
                self.max_queue[d.name] = q

    def compute_summary(self, total_frames: int) -> Tuple[int, float, float, float]:
        """
        Compute derived statistics:
        - vehicles retired
        - average travel time [frames]
        - 95th percentile travel time [frames]
        - throughput [vehicles / 1000 frames]
        """
        if self.retired_count == 0 or total_frames <= 0:
            return 0, 0.0, 0.0, 0.0

        travel = np.asarray(self.travel_frames, dtype=np.float64)
        throughput = self.retired_count / (total_frames / 1000.0)

        return (
            self.retired_count,
            float(travel.mean()),
            float(np.percentile(travel, 95)),
            throughput,
        )


class WorldState:
    """
    Full state of the junction:
    - vehicles (owned here, mutated only by `step`)
    - the four lights and their scheduler
    - spawn admission
    - the per-frame tentative update / validate / commit cycle
    """

    def __init__(
        self,
        geometry: IntersectionGeometry = DEFAULT_GEOMETRY,
        light_config: TrafficLightConfig | None = None,
        random_seed: int | None = 42,
    ) -> None:
        self.geometry = geometry
        self.rng = random.Random(random_seed)

        self.lights: Dict[Direction, TrafficLight] = create_lights(Direction.NORTH)
        self.scheduler = PhaseScheduler(self.lights, geometry, light_config)
        self.spawner = Spawner(geometry, self.rng)

        self.frame: int = 0
        self.vehicles: List[Vehicle] = []
        self._pending_spawns: List[Direction | None] = []

        self.metrics_raw = SimulationMetricsRaw()

    # ------------------------ PUBLIC API ------------------------

    def request_spawn(self, direction: Direction | None = None) -> None:
        """Queue a spawn request (None = random lane) for the next frame."""
        self._pending_spawns.append(direction)

    def step(self) -> None:
        """
        One frame:
        1) handle spawn requests
        2) update the light phase
        3) move vehicles (tentative update, safety checks, commit)
        4) remove vehicles that left the board
        """
        self.frame += 1

        self._handle_spawn_requests()
        self.scheduler.update(self.vehicles)
        self._update_vehicles()
        self.retire_offscreen()

        self.metrics_raw.record_queues(self.queue_lengths())

    def is_green(self, direction: Direction) -> bool:
        """State of the light governing vehicles heading in `direction`."""
        return self.lights[governing_side(direction)].is_green

    def light_states(self) -> Dict[Direction, LightState]:
        """Light state keyed by mounting side."""
        return {side: light.state for side, light in self.lights.items()}

    def queue_lengths(self) -> Dict[Direction, int]:
        return {d: count_queued(self.vehicles, d) for d in Direction}

    def get_metrics_summary(self) -> Tuple[int, float, float, float]:
        return self.metrics_raw.compute_summary(self.frame)

    def get_debug_stats(self) -> Dict[str, object]:
        m = self.metrics_raw
        return {
            "total_spawned": m.total_spawned,
            "spawn_rejected": m.spawn_rejected,
            "vehicles_in_world_end": len(self.vehicles),
            "blocked_following": m.blocked_following,
            "blocked_collision": m.blocked_collision,
            "phase_changes": self.scheduler.phase_changes,
            "skipped_phases": self.scheduler.skipped_phases,
            "max_queue": dict(m.max_queue),
        }

    # ------------------------ INTERNAL LOGIC ------------------------

    def _handle_spawn_requests(self) -> None:
        pending, self._pending_spawns = self._pending_spawns, []
        for direction in pending:
            v = self.spawner.try_spawn(direction, self.vehicles, self.frame)
            self.metrics_raw.record_spawn(v is not None)
            if v is not None:
                self.vehicles.append(v)

    def _propose(self) -> List[Vehicle]:
        """Advanced clones of all vehicles, computed from the frame-start snapshot."""
        tentatives: List[Vehicle] = []
        for v in self.vehicles:
            t = v.clone()
            t.advance(self.is_green(v.direction), self.geometry)
            tentatives.append(t)
        return tentatives

    def _following_check(self, tentatives: List[Vehicle]) -> List[bool]:
        """safe[i] is False when tentative i ends up too close to the vehicle ahead."""
        safe_distance = self.geometry.safe_distance
        safe = [True] * len(tentatives)

        for i, current in enumerate(tentatives):
            closest_ahead: int | None = None
            for j, other in enumerate(tentatives):
                if j == i or other.direction is not current.direction:
                    continue
                gap = current.gap_to(other)
                if gap >= 0 and (closest_ahead is None or gap < closest_ahead):
                    closest_ahead = gap

            if closest_ahead is not None and closest_ahead < safe_distance:
                safe[i] = False

        return safe

    def _collision_check(self, tentatives: List[Vehicle]) -> List[bool]:
        """
        collided[i] is True when tentative i overlaps another tentative.
        Pairs where one vehicle is inside the junction and neither has taken its
        new heading yet are not checked.
        """
        n = len(tentatives)
        collided = [False] * n

        for i in range(n):
            a = tentatives[i]
            for j in range(i + 1, n):
                b = tentatives[j]
                if (a.in_intersection or b.in_intersection) and not a.has_turned and not b.has_turned:
                    continue
                if a.rect.colliderect(b.rect):
                    collided[i] = True
                    collided[j] = True

        return collided

    def _update_vehicles(self) -> None:
        tentatives = self._propose()
        safe = self._following_check(tentatives)
        collided = self._collision_check(tentatives)
        accepted = [s and not c for s, c in zip(safe, collided)]

        # a rejected vehicle stays where it was, so its followers are checked
        # again against that position until no more moves get rejected
        changed = not all(accepted)
        while changed:
            candidates = [
                t if ok else o
                for t, o, ok in zip(tentatives, self.vehicles, accepted)
            ]
            safe_now = self._following_check(candidates)
            changed = False
            for i, ok in enumerate(accepted):
                if ok and not safe_now[i]:
                    accepted[i] = False
                    safe[i] = False
                    changed = True

        committed: List[Vehicle] = []
        for i, original in enumerate(self.vehicles):
            if accepted[i]:
                committed.append(tentatives[i])
                continue

            if not safe[i]:
                self.metrics_raw.blocked_following += 1
            if collided[i]:
                self.metrics_raw.blocked_collision += 1
            committed.append(original)

        self.vehicles = committed

    def retire_offscreen(self) -> None:
        """Drop vehicles that are past the off-board margin in their direction."""
        remaining: List[Vehicle] = []

        for v in self.vehicles:
            if self.geometry.is_off_board(v.direction, v.rect):
                v.mark_retired(self.frame)
                self.metrics_raw.record_retired(v)
                logger.debug(f"Retired #{v.id} heading {v.direction.name} at frame {self.frame}")
            else:
                remaining.append(v)

        self.vehicles = remaining
