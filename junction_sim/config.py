from dataclasses import dataclass, asdict
from typing import Literal, Optional


BackendName = Literal["headless", "pygame"]


@dataclass
class SimulationConfig:
    # number of frames to simulate (upper bound for the interactive backend)
    total_frames: int = 3000
    # probability of a spawn request per frame per direction (headless only)
    spawn_rate: float = 0.05
    random_seed: int = 42

    backend: BackendName = "headless"

    # pygame
    fps: int = 60

    output_dir: str = "results"
    # scenario desc
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if self.total_frames <= 0:
            raise ValueError(f"total_frames must be positive, got {self.total_frames}")
        if not 0.0 <= self.spawn_rate <= 1.0:
            raise ValueError(f"spawn_rate must be in [0, 1], got {self.spawn_rate}")

    def to_dict(self) -> dict:
        return asdict(self)
