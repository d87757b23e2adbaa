import random
from pathlib import Path

from tsp_evo.controller import RunController
from tsp_evo.data import load_instance
from tsp_evo.evolutionary import GAConfig


def main():
    data_root = Path("data/tsplib")
    instance_path = data_root / "berlin52.tsp"

    cfg = GAConfig(
        city_count=12,
        population_size=30,
        mutation_rate=0.1,
        crossover_rate=0.8,
        generations=25,
        max_generations=200,
    )
    points = None
    if instance_path.exists():
        instance = load_instance(instance_path)
        points = instance.points
        cfg.city_count = len(points)
    model = RunController(cfg, points=points, rng=random.Random(7))
    model.start()
    while model.running:
        model.tick()
        snap = model.snapshot()
        print(
            f"gen {snap.generation}: best={snap.best_ever_length:.2f} "
            f"mean={snap.stats.mean_length:.2f}"
        )


if __name__ == "__main__":
    main()
