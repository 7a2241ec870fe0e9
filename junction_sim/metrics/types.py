from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class SimulationResult:
    backend: str
    config: Dict[str, Any]

    wall_time_seconds: float
    frames_simulated: int

    # traffic stats
    vehicles_retired: int
    avg_travel_frames: float
    p95_travel_frames: float
    # [veh / 1000 frames]
    throughput_per_1000_frames: float

    # spawn / safety counters, max queues
    extra_stats: Dict[str, Any] = field(default_factory=dict)
