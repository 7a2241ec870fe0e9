from abc import ABC, abstractmethod
from dataclasses import asdict

from junction_sim.config import SimulationConfig
from junction_sim.metrics.types import SimulationResult
from junction_sim.model.world_state import WorldState


class SimulationBackend(ABC):
    """
    Abstract base for the ways of driving a WorldState (headless, pygame).
    """

    name: str = "base"

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.world = WorldState(random_seed=config.random_seed)

    @abstractmethod
    def run(self) -> SimulationResult:
        """
        Runs the simulation and returns its results.
        """
        raise NotImplementedError

    def _build_result(self, wall_time: float) -> SimulationResult:
        retired, avg_travel, p95_travel, throughput = self.world.get_metrics_summary()

        return SimulationResult(
            backend=self.name,
            config=asdict(self.config),
            wall_time_seconds=wall_time,
            frames_simulated=self.world.frame,
            vehicles_retired=retired,
            avg_travel_frames=avg_travel,
            p95_travel_frames=p95_travel,
            throughput_per_1000_frames=throughput,
            extra_stats=self.world.get_debug_stats(),
        )
