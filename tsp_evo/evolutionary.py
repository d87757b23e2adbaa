import random
from dataclasses import asdict, dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .data import generate_points
from .evaluation import PopulationStats, summarize_population
from .operators.base import Point, Tour, is_permutation
from .operators.chromosome import Individual
from .operators.variation import order_crossover, select, swap_mutation


class ConfigError(ValueError):
    """Raised when a GAConfig or a supplied point set cannot start a run."""


@dataclass
class GAConfig:
    city_count: int = 20
    population_size: int = 50
    mutation_rate: float = 0.05
    crossover_rate: float = 0.8
    # Generations applied per controller tick.
    generations: int = 20
    max_generations: int = 1000
    width: float = 800.0
    height: float = 600.0
    margin: float = 20.0
    random_seed: Optional[int] = 123


def configure(config: GAConfig) -> GAConfig:
    if config.city_count < 2:
        raise ConfigError(f"city_count must be >= 2, got {config.city_count}")
    if config.population_size < 1:
        raise ConfigError(f"population_size must be >= 1, got {config.population_size}")
    for name in ("mutation_rate", "crossover_rate"):
        rate = getattr(config, name)
        if not 0.0 <= rate <= 1.0:
            raise ConfigError(f"{name} must be within [0, 1], got {rate}")
    if config.generations < 1:
        raise ConfigError(f"generations must be >= 1, got {config.generations}")
    if config.max_generations < 0:
        raise ConfigError(f"max_generations must be >= 0, got {config.max_generations}")
    if config.width - 2 * config.margin <= 0 or config.height - 2 * config.margin <= 0:
        raise ConfigError(
            f"canvas {config.width}x{config.height} leaves no room inside margin {config.margin}"
        )
    return config


@dataclass(frozen=True)
class RunState:
    generation: int
    running: bool
    points: Tuple[Point, ...]
    population: Tuple[Individual, ...]
    best_ever: Individual
    current_best: Individual
    config: GAConfig


@dataclass(frozen=True)
class Snapshot:
    generation: int
    running: bool
    current_population_best_length: float
    current_best_tour: Tour
    best_ever_tour: Tour
    best_ever_length: float
    stats: PopulationStats


def best_of(population: Sequence[Individual]) -> Individual:
    # min() keeps the earliest individual among equal lengths.
    return min(population, key=lambda ind: ind.length)


def init_population(points: Sequence[Point], size: int, rng: random.Random) -> Tuple[Individual, ...]:
    return tuple(Individual.random(points, rng) for _ in range(size))


def _check_points(points: Sequence[Point], config: GAConfig) -> Tuple[Point, ...]:
    points = tuple(points)
    if len(points) < 2:
        raise ConfigError(f"need at least 2 points, got {len(points)}")
    if len({p.id for p in points}) != len(points):
        raise ConfigError("point ids must be unique")
    if len(points) != config.city_count:
        raise ConfigError(
            f"city_count is {config.city_count} but {len(points)} points were supplied"
        )
    return points


def reset(
    config: GAConfig,
    rng: Optional[random.Random] = None,
    points: Optional[Sequence[Point]] = None,
) -> RunState:
    configure(config)
    rng = rng or random.Random(config.random_seed)
    if points is None:
        points = generate_points(config.city_count, config.width, config.height, config.margin, rng)
    points = _check_points(points, config)
    population = init_population(points, config.population_size, rng)
    best = best_of(population)
    return RunState(
        generation=0,
        running=False,
        points=points,
        population=population,
        best_ever=best,
        current_best=best,
        config=config,
    )


def step_generation(state: RunState, rng: Optional[random.Random] = None) -> RunState:
    """Advance the run by one generation and return the new state.

    The elite of the current population survives unchanged; the rest of the
    next population is bred by roulette selection, order crossover and swap
    mutation from the current population only. ``state`` itself is left
    untouched. At the generation ceiling the run is stopped instead.
    """
    cfg = state.config
    if state.generation >= cfg.max_generations:
        return replace(state, running=False)
    if rng is None:
        # Offset by generation so successive unseeded calls draw different streams.
        seed = None if cfg.random_seed is None else cfg.random_seed + state.generation
        rng = random.Random(seed)

    population = state.population
    new_pop: List[Individual] = [best_of(population)]
    while len(new_pop) < cfg.population_size:
        parent1 = select(population, rng)
        parent2 = select(population, rng)
        child = order_crossover(parent1.tour, parent2.tour, cfg.crossover_rate, rng)
        child = swap_mutation(child, cfg.mutation_rate, rng)
        new_pop.append(Individual.from_tour(child))

    new_population = tuple(new_pop)
    current_best = best_of(new_population)
    best_ever = state.best_ever
    if current_best.length < best_ever.length:
        best_ever = current_best
    generation = state.generation + 1
    return replace(
        state,
        generation=generation,
        running=state.running and generation < cfg.max_generations,
        population=new_population,
        best_ever=best_ever,
        current_best=current_best,
    )


def is_finished(state: RunState) -> bool:
    return state.generation >= state.config.max_generations


def get_snapshot(state: RunState) -> Snapshot:
    return Snapshot(
        generation=state.generation,
        running=state.running,
        current_population_best_length=state.current_best.length,
        current_best_tour=state.current_best.tour,
        best_ever_tour=state.best_ever.tour,
        best_ever_length=state.best_ever.length,
        stats=summarize_population(state.population),
    )


def to_state(state: RunState) -> Dict:
    return {
        "cfg": asdict(state.config),
        "generation": state.generation,
        "points": [[p.id, p.x, p.y] for p in state.points],
        "population": [[p.id for p in ind.tour] for ind in state.population],
        "best_ever": [p.id for p in state.best_ever.tour],
    }


def from_state(state: Dict) -> RunState:
    cfg = configure(GAConfig(**state["cfg"]))
    points = tuple(Point(id=int(pid), x=float(x), y=float(y)) for pid, x, y in state["points"])
    points = _check_points(points, cfg)
    by_id = {p.id: p for p in points}

    def _tour(ids) -> Tour:
        try:
            tour = tuple(by_id[int(i)] for i in ids)
        except KeyError as exc:
            raise ValueError(f"checkpoint tour references unknown point {exc}") from None
        if not is_permutation(tour, points):
            raise ValueError("checkpoint tour is not a permutation of its points")
        return tour

    population = tuple(Individual.from_tour(_tour(ids)) for ids in state["population"])
    if len(population) != cfg.population_size:
        raise ValueError(
            f"checkpoint holds {len(population)} individuals, expected {cfg.population_size}"
        )
    best_ever = Individual.from_tour(_tour(state["best_ever"]))
    return RunState(
        generation=int(state.get("generation", 0)),
        running=False,
        points=points,
        population=population,
        best_ever=best_ever,
        current_best=best_of(population),
        config=cfg,
    )
