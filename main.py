import argparse
import logging

from junction_sim.backends import BACKENDS
from junction_sim.config import SimulationConfig
from junction_sim.experiments.runner import run_single
from junction_sim.io.logging_utils import setup_logging, logger
from junction_sim.io.results_writer import save_result_as_json


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Single four-way intersection simulation")
    ap.add_argument("--backend", choices=list(BACKENDS.keys()), default="headless")
    ap.add_argument("--frames", type=int, default=3000, help="frames to simulate")
    ap.add_argument("--spawn-rate", type=float, default=0.05,
                    help="spawn request probability per frame per lane (headless)")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--fps", type=int, default=60)
    ap.add_argument("--output-dir", default="results")
    ap.add_argument("--label", default=None)
    ap.add_argument("--log-level", default="INFO")
    ap.add_argument("--log-file", default=None)
    ap.add_argument("--no-save", action="store_true", help="do not write the JSON result")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO), args.log_file)

    cfg = SimulationConfig(
        backend=args.backend,
        total_frames=args.frames,
        spawn_rate=args.spawn_rate,
        random_seed=args.seed,
        fps=args.fps,
        output_dir=args.output_dir,
        label=args.label,
    )

    logger.info(f"Running simulation with backend='{cfg.backend}'")
    result = run_single(cfg)

    logger.info("Simulation finished.")
    logger.info(f"Wall time: {result.wall_time_seconds:.4f} s")
    logger.info(f"Frames: {result.frames_simulated}")
    logger.info(f"Vehicles retired: {result.vehicles_retired}")
    logger.info(f"Avg travel time: {result.avg_travel_frames:.1f} frames")
    logger.info(f"P95 travel time: {result.p95_travel_frames:.1f} frames")
    logger.info(f"Throughput: {result.throughput_per_1000_frames:.2f} veh/1000 frames")
    logger.info(f"Spawned: {result.extra_stats['total_spawned']}, "
                f"rejected: {result.extra_stats['spawn_rejected']}")

    if not args.no_save:
        path = save_result_as_json(result, cfg.output_dir)
        logger.info(f"Results saved to {path}")


if __name__ == "__main__":
    main()
