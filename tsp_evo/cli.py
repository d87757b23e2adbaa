import argparse
import json
import time
from dataclasses import replace
from pathlib import Path
from typing import Tuple

from tsp_evo.controller import RunController
from tsp_evo.data import load_instance
from tsp_evo.evolutionary import ConfigError, GAConfig, Snapshot


CHECKPOINT_PATH = Path("checkpoints/run_state.json")


def save_checkpoint(controller: RunController, path: Path = CHECKPOINT_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(controller.to_state(), indent=2))


def load_checkpoint(path: Path = CHECKPOINT_PATH) -> RunController:
    state = json.loads(path.read_text())
    return RunController.from_state(state)


def build_controller(args, cfg: GAConfig, checkpoint: Path) -> RunController:
    if args.resume and checkpoint.exists():
        log(f"Resuming from {checkpoint}")
        return load_checkpoint(checkpoint)
    points = None
    if args.instance:
        instance = load_instance(Path(args.instance))
        opt = "unknown" if instance.optimum is None else f"{instance.optimum:.2f}"
        log(f"loaded instance {instance.name}: {len(instance.points)} points, optimum={opt}")
        points = instance.points
        cfg = replace(cfg, city_count=len(points))
    log("Starting new run")
    return RunController(cfg, points=points)


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def describe(snap: Snapshot) -> Tuple[str, str]:
    stats = snap.stats
    header = (
        f"generation={snap.generation}, best_ever={snap.best_ever_length:.2f}, "
        f"current_best={snap.current_population_best_length:.2f}"
    )
    details = (
        f"population={stats.size} mean={stats.mean_length:.2f} "
        f"worst={stats.worst_length:.2f} std={stats.std_length:.2f}\n"
        f"best_tour={' '.join(str(p.id) for p in snap.best_ever_tour)}"
    )
    return header, details


def _config_from_args(args) -> GAConfig:
    return GAConfig(
        city_count=args.city_count,
        population_size=args.population_size,
        mutation_rate=args.mutation_rate,
        crossover_rate=args.crossover_rate,
        generations=args.generations,
        max_generations=args.max_generations,
        random_seed=args.seed,
    )


def run(args) -> None:
    checkpoint = Path(args.checkpoint)
    try:
        controller = build_controller(args, _config_from_args(args), checkpoint)
    except ConfigError as exc:
        raise SystemExit(f"invalid configuration: {exc}")

    header, _ = describe(controller.snapshot())
    log(f"initial {header}")
    if not controller.start():
        log("generation ceiling already reached; nothing to do.")
        return

    log("running; Ctrl+C to stop.")
    try:
        while controller.running:
            t0 = time.perf_counter()
            applied = controller.tick()
            header, _ = describe(controller.snapshot())
            log(f"+{applied} gens in {time.perf_counter() - t0:.3f}s: {header}")
            save_checkpoint(controller, checkpoint)
            if args.interval > 0:
                time.sleep(args.interval)
    except KeyboardInterrupt:
        controller.pause()
        save_checkpoint(controller, checkpoint)
        print("Interrupted. Checkpoint saved.")
        return

    header, body = describe(controller.snapshot())
    log(f"finished {header}")
    print(body)


def data(args) -> None:
    checkpoint = Path(args.checkpoint)
    if not checkpoint.exists():
        print("No checkpoint found; run `tsp-evo run` first.")
        return
    controller = load_checkpoint(checkpoint)
    header, body = describe(controller.snapshot())
    print(header)
    print(body)


def main():
    defaults = GAConfig()
    parser = argparse.ArgumentParser(description="TSP genetic search CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run / resume a genetic search until the generation ceiling")
    run_parser.add_argument("--city-count", type=int, default=defaults.city_count)
    run_parser.add_argument("--population-size", type=int, default=defaults.population_size)
    run_parser.add_argument("--mutation-rate", type=float, default=defaults.mutation_rate)
    run_parser.add_argument("--crossover-rate", type=float, default=defaults.crossover_rate)
    run_parser.add_argument(
        "--generations", type=int, default=defaults.generations, help="generations per tick"
    )
    run_parser.add_argument("--max-generations", type=int, default=defaults.max_generations)
    run_parser.add_argument("--seed", type=int, default=defaults.random_seed)
    run_parser.add_argument("--instance", help="TSPLIB .tsp file with node coordinates")
    run_parser.add_argument("--interval", type=float, default=0.0, help="seconds to wait between ticks")
    run_parser.add_argument("--resume", action="store_true")
    run_parser.add_argument("--checkpoint", default=str(CHECKPOINT_PATH))
    run_parser.set_defaults(func=run)

    data_parser = subparsers.add_parser("data", help="Inspect current checkpoint")
    data_parser.add_argument("--checkpoint", default=str(CHECKPOINT_PATH))
    data_parser.set_defaults(func=data)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
