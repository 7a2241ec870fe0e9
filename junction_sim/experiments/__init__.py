from junction_sim.config import SimulationConfig
from junction_sim.experiments.runner import run_single, run_sweep


__all__ = ["SimulationConfig", "run_single", "run_sweep"]
