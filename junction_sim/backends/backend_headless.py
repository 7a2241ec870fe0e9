import random

from junction_sim.backends.base_backend import SimulationBackend
from junction_sim.config import SimulationConfig
from junction_sim.io.logging_utils import logger
from junction_sim.metrics.types import SimulationResult
from junction_sim.metrics.timers import Timer
from junction_sim.model.vehicles import Direction


class HeadlessBackend(SimulationBackend):
    """
    Runs the junction without a window. Spawn requests are generated at
    random: every frame each lane requests a vehicle with probability
    `spawn_rate`.
    """

    name = "headless"

    def __init__(self, config: SimulationConfig):
        super().__init__(config)
        # traffic generator, separate from the world's own rng
        self.traffic_rng = random.Random(config.random_seed + 1)

    def _generate_requests(self) -> None:
        for d in Direction:
            if self.traffic_rng.random() < self.config.spawn_rate:
                self.world.request_spawn(d)

    def run(self) -> SimulationResult:
        cfg: SimulationConfig = self.config

        with Timer() as t:
            for _ in range(cfg.total_frames):
                self._generate_requests()
                self.world.step()

        logger.debug(f"Headless run: {t.frames_per_second(self.world.frame):.0f} frames/s")
        return self._build_result(t.elapsed)
