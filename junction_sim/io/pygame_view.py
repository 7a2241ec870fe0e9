import pygame

from junction_sim.model.traffic_lights import LightState
from junction_sim.model.vehicles import Direction
from junction_sim.model.world_state import WorldState


BACKGROUND_COLOR = (20, 40, 20)
ROAD_COLOR = (35, 35, 40)
ZONE_COLOR = (45, 45, 50)
CENTER_LINE_COLOR = (255, 255, 100)
STRIPE_COLOR = (220, 220, 220)
HOUSING_COLOR = (20, 20, 20)
LIGHT_COLORS = {
    LightState.RED: (220, 20, 20),
    LightState.GREEN: (20, 180, 20),
}


def _draw_roads(screen: pygame.Surface, world: WorldState) -> None:
    g = world.geometry
    width = g.zone_max - g.zone_min
    mid = g.zone_min + width // 2

    pygame.draw.rect(screen, ROAD_COLOR, (g.zone_min, 0, width, g.board_size))
    pygame.draw.rect(screen, ROAD_COLOR, (0, g.zone_min, g.board_size, width))
    pygame.draw.rect(screen, CENTER_LINE_COLOR, (mid - 2, 0, 4, g.board_size))
    pygame.draw.rect(screen, CENTER_LINE_COLOR, (0, mid - 2, g.board_size, 4))

    pygame.draw.rect(screen, ZONE_COLOR, g.zone)

    # crosswalk stripes on the four edges of the zone
    for i in range(5):
        offset = g.zone_min + 5 + i * 18
        pygame.draw.rect(screen, STRIPE_COLOR, (offset, g.zone_min - 5, 12, 10))
        pygame.draw.rect(screen, STRIPE_COLOR, (offset, g.zone_max - 5, 12, 10))
        pygame.draw.rect(screen, STRIPE_COLOR, (g.zone_min - 5, offset, 10, 12))
        pygame.draw.rect(screen, STRIPE_COLOR, (g.zone_max - 5, offset, 10, 12))


def _draw_lights(screen: pygame.Surface, world: WorldState) -> None:
    for light in world.lights.values():
        pygame.draw.rect(screen, HOUSING_COLOR, light.rect.inflate(4, 4))
        pygame.draw.rect(screen, LIGHT_COLORS[light.state], light.rect)


def _draw_vehicles(screen: pygame.Surface, world: WorldState) -> None:
    for v in world.vehicles:
        pygame.draw.rect(screen, (0, 0, 0), v.rect.inflate(2, 2))
        pygame.draw.rect(screen, v.color, v.rect)

        # windshield on the front side
        r = v.rect
        windshield = {
            Direction.NORTH: (r.x + 2, r.y + 2, r.width - 4, 8),
            Direction.SOUTH: (r.x + 2, r.bottom - 10, r.width - 4, 8),
            Direction.EAST: (r.right - 10, r.y + 2, 8, r.height - 4),
            Direction.WEST: (r.x + 2, r.y + 2, 8, r.height - 4),
        }[v.direction]
        lighter = tuple(min(255, int(c * 1.3)) for c in v.color)
        pygame.draw.rect(screen, lighter, windshield)


def draw_world(screen: pygame.Surface, world: WorldState) -> None:
    """Render the committed state of `world`; reads only, never mutates."""
    screen.fill(BACKGROUND_COLOR)
    _draw_roads(screen, world)
    _draw_lights(screen, world)
    _draw_vehicles(screen, world)
