from typing import Iterable, List

from junction_sim.backends import get_backend
from junction_sim.config import SimulationConfig
from junction_sim.io.logging_utils import logger
from junction_sim.metrics.types import SimulationResult


def run_single(config: SimulationConfig) -> SimulationResult:
    BackendCls = get_backend(config.backend)
    backend = BackendCls(config)
    return backend.run()


def run_sweep(
    base_config: SimulationConfig,
    param_name: str,
    values: Iterable[int | float]
) -> List[SimulationResult]:
    """
    Helper: changes one config parameter (e.g. spawn_rate) and runs each value.

    :param base_config: config shared by all runs
    :param param_name: name of the SimulationConfig field to vary
    :param values: values to assign to that field
    :return: one result per value, in order
    """
    cfg_dict = base_config.to_dict()
    if param_name not in cfg_dict:
        raise ValueError(f"Unknown config parameter '{param_name}'")

    results: List[SimulationResult] = []
    for v in values:
        cfg_dict[param_name] = v
        cfg = SimulationConfig(**cfg_dict)  # type: ignore[arg-type]
        logger.info(f"Sweep {param_name}={v}")
        results.append(run_single(cfg))
    return results
