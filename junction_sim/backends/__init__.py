from typing import Dict, Type

from junction_sim.backends.base_backend import SimulationBackend
from junction_sim.backends.backend_headless import HeadlessBackend
from junction_sim.backends.backend_pygame import PygameBackend


BACKENDS: Dict[str, Type[SimulationBackend]] = {
    HeadlessBackend.name: HeadlessBackend,
    PygameBackend.name: PygameBackend,
}


def get_backend(name: str) -> Type[SimulationBackend]:
    try:
        return BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown backend '{name}'. Available: {', '.join(BACKENDS.keys())}"
        )
