import argparse
import json

import pytest

from tsp_evo import cli
from tsp_evo.controller import RunController
from tsp_evo.evolutionary import GAConfig


def _run_args(checkpoint, **overrides):
    values = dict(
        city_count=8,
        population_size=10,
        mutation_rate=0.05,
        crossover_rate=0.8,
        generations=4,
        max_generations=6,
        seed=5,
        instance=None,
        interval=0.0,
        resume=False,
        checkpoint=str(checkpoint),
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def test_checkpoint_files_round_trip(tmp_path):
    controller = RunController(GAConfig(city_count=6, population_size=5))
    controller.step()
    path = tmp_path / "nested" / "state.json"
    cli.save_checkpoint(controller, path)
    restored = cli.load_checkpoint(path)
    assert restored.generation == 1
    assert restored.snapshot().best_ever_length == controller.snapshot().best_ever_length


def test_run_stops_at_ceiling_and_saves(tmp_path, capsys):
    checkpoint = tmp_path / "run.json"
    cli.run(_run_args(checkpoint))
    out = capsys.readouterr().out
    assert "Starting new run" in out
    assert "finished generation=6" in out
    assert "best_tour=" in out
    state = json.loads(checkpoint.read_text())
    assert state["generation"] == 6
    assert state["fixed_points"] is False


def test_resume_of_finished_run_has_nothing_to_do(tmp_path, capsys):
    checkpoint = tmp_path / "run.json"
    cli.run(_run_args(checkpoint))
    capsys.readouterr()
    cli.run(_run_args(checkpoint, resume=True))
    out = capsys.readouterr().out
    assert f"Resuming from {checkpoint}" in out
    assert "nothing to do" in out
    assert json.loads(checkpoint.read_text())["generation"] == 6


def test_run_on_tsplib_instance(tmp_path, square_tsp, capsys):
    checkpoint = tmp_path / "run.json"
    cli.run(_run_args(checkpoint, instance=str(square_tsp), max_generations=20))
    out = capsys.readouterr().out
    assert "loaded instance square4: 4 points" in out
    state = json.loads(checkpoint.read_text())
    assert state["cfg"]["city_count"] == 4
    assert state["fixed_points"] is True
    assert sorted(state["best_ever"]) == [1, 2, 3, 4]


def test_invalid_configuration_exits(tmp_path):
    with pytest.raises(SystemExit, match="invalid configuration"):
        cli.run(_run_args(tmp_path / "run.json", mutation_rate=2.0))


def test_interrupt_saves_checkpoint(tmp_path, capsys, monkeypatch):
    def interrupted(self):
        raise KeyboardInterrupt

    monkeypatch.setattr(RunController, "tick", interrupted)
    checkpoint = tmp_path / "run.json"
    cli.run(_run_args(checkpoint))
    assert "Interrupted. Checkpoint saved." in capsys.readouterr().out
    assert json.loads(checkpoint.read_text())["generation"] == 0


def test_data_reports_missing_checkpoint(tmp_path, capsys):
    cli.data(argparse.Namespace(checkpoint=str(tmp_path / "absent.json")))
    assert "No checkpoint found" in capsys.readouterr().out


def test_data_describes_checkpoint(tmp_path, capsys):
    checkpoint = tmp_path / "run.json"
    cli.run(_run_args(checkpoint))
    capsys.readouterr()
    cli.data(argparse.Namespace(checkpoint=str(checkpoint)))
    out = capsys.readouterr().out
    assert out.startswith("generation=6, best_ever=")
    assert "population=10 mean=" in out
