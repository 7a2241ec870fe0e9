import time


class Timer:
    """
    Wall-clock timer for a run; also reports achieved frame rate.
    """

    def __init__(self):
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        self.elapsed = 0.0
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start

    def frames_per_second(self, frames: int) -> float:
        if self.elapsed <= 0.0:
            return 0.0
        return frames / self.elapsed
