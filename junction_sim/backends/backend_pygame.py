from typing import Dict

import pygame

from junction_sim.backends.base_backend import SimulationBackend
from junction_sim.config import SimulationConfig
from junction_sim.io.logging_utils import logger
from junction_sim.io.pygame_view import draw_world
from junction_sim.metrics.types import SimulationResult
from junction_sim.metrics.timers import Timer
from junction_sim.model.vehicles import Direction


# key -> spawn lane; None means a random lane
SPAWN_KEYS: Dict[int, Direction | None] = {
    pygame.K_UP: Direction.NORTH,
    pygame.K_DOWN: Direction.SOUTH,
    pygame.K_LEFT: Direction.WEST,
    pygame.K_RIGHT: Direction.EAST,
    pygame.K_r: None,
}


class PygameBackend(SimulationBackend):
    """
    Interactive window on top of the simulation.
    Arrow keys spawn a vehicle on that approach, R on a random one,
    Esc or closing the window ends the run.
    """

    name = "pygame"

    def __init__(self, config: SimulationConfig):
        super().__init__(config)
        self.running = False

    def _open_window(self) -> pygame.Surface:
        size = self.world.geometry.board_size
        try:
            pygame.init()
            screen = pygame.display.set_mode((size, size))
        except pygame.error as e:
            logger.error(f"Could not open the simulation window: {e}")
            pygame.quit()
            raise RuntimeError(f"window creation failed: {e}") from e

        pygame.display.set_caption("Road Intersection")
        return screen

    def handle_event(self, event: pygame.event.Event) -> None:
        """Translate one input event into at most one spawn request."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key in SPAWN_KEYS:
                self.world.request_spawn(SPAWN_KEYS[event.key])

    def run(self) -> SimulationResult:
        cfg: SimulationConfig = self.config
        screen = self._open_window()
        clock = pygame.time.Clock()

        self.running = True
        with Timer() as t:
            try:
                while self.running and self.world.frame < cfg.total_frames:
                    for event in pygame.event.get():
                        self.handle_event(event)

                    self.world.step()
                    draw_world(screen, self.world)
                    pygame.display.flip()
                    clock.tick(cfg.fps)
            finally:
                pygame.quit()

        logger.info(f"Window closed after {self.world.frame} frames")
        return self._build_result(t.elapsed)
