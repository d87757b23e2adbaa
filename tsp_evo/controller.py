import random
import threading
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from . import evolutionary
from .evolutionary import GAConfig, RunState, Snapshot
from .operators.base import Point


def _rng_to_state(rng: random.Random) -> List:
    version, internal, gauss_next = rng.getstate()
    return [version, list(internal), gauss_next]


def _rng_from_state(data: List) -> random.Random:
    version, internal, gauss_next = data
    rng = random.Random()
    rng.setstate((version, tuple(internal), gauss_next))
    return rng


class RunController:
    """Owns one run for a driver (a timer loop, a UI, the CLI).

    ``tick`` is meant to be called on the driver's schedule; the controller
    never loops on its own. ``reset`` and the stepping methods share a lock so
    a reset cannot interleave with a generation in flight.
    """

    def __init__(
        self,
        cfg: Optional[GAConfig] = None,
        points: Optional[Sequence[Point]] = None,
        rng: Optional[random.Random] = None,
        _state: Optional[RunState] = None,
    ):
        self.cfg = evolutionary.configure(cfg or GAConfig())
        self.rng = rng or random.Random(self.cfg.random_seed)
        self.fixed_points = tuple(points) if points is not None else None
        self._lock = threading.Lock()
        if _state is None:
            _state = evolutionary.reset(self.cfg, rng=self.rng, points=self.fixed_points)
        self.state: RunState = _state

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def finished(self) -> bool:
        return evolutionary.is_finished(self.state)

    def reset(self, cfg: Optional[GAConfig] = None) -> RunState:
        with self._lock:
            new_cfg = evolutionary.configure(cfg) if cfg is not None else self.cfg
            state = evolutionary.reset(new_cfg, rng=self.rng, points=self.fixed_points)
            self.cfg = new_cfg
            self.state = state
            return state

    def _start(self) -> bool:
        self.state = replace(self.state, running=not evolutionary.is_finished(self.state))
        return self.state.running

    def start(self) -> bool:
        with self._lock:
            return self._start()

    def pause(self) -> None:
        with self._lock:
            self.state = replace(self.state, running=False)

    def toggle(self) -> bool:
        with self._lock:
            if self.state.running:
                self.state = replace(self.state, running=False)
                return False
            return self._start()

    def step(self) -> RunState:
        with self._lock:
            self.state = evolutionary.step_generation(self.state, self.rng)
            return self.state

    def tick(self) -> int:
        """Advance up to ``cfg.generations`` generations while running.

        Returns the number of generations applied; 0 when paused or finished.
        """
        applied = 0
        with self._lock:
            while self.state.running and applied < self.state.config.generations:
                if evolutionary.is_finished(self.state):
                    self.state = replace(self.state, running=False)
                    break
                self.state = evolutionary.step_generation(self.state, self.rng)
                applied += 1
        return applied

    def snapshot(self) -> Snapshot:
        return evolutionary.get_snapshot(self.state)

    def to_state(self) -> Dict:
        with self._lock:
            state = evolutionary.to_state(self.state)
            state["fixed_points"] = self.fixed_points is not None
            state["rng_state"] = _rng_to_state(self.rng)
        return state

    @classmethod
    def from_state(cls, state: Dict, rng: Optional[random.Random] = None) -> "RunController":
        run = evolutionary.from_state(state)
        if rng is None and state.get("rng_state"):
            rng = _rng_from_state(state["rng_state"])
        # Loaded instances keep their points across resets; generated ones are redrawn.
        points = run.points if state.get("fixed_points") else None
        return cls(run.config, points=points, rng=rng, _state=run)
