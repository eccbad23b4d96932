import json

import numpy as np
import pytest
from pydantic import ValidationError

from Net_Games.config import SimulatorConfig
from Net_Games.engine.logging import (
    StateTraceFrame,
    TraceWriter,
    WindowTraceFrame,
    read_trace,
    to_jsonable,
)
from Net_Games.engine.simulator import Simulator
from Net_Games.games import BestResponseProcess, InitialAction, MatrixGame
from Net_Games.graph.model import Network


def _coordination():
    game = MatrixGame([[1.0, 0.0], [0.0, 1.0]], InitialAction.const(0))
    return BestResponseProcess(game, 1.0)


def test_simulation_trace_cadence(tmp_path):
    path = tmp_path / "trace" / "run.jsonl"
    cfg = SimulatorConfig(
        bootstrap_steps=10,
        window_steps=5,
        max_windows=6,
        termination_threshold=0.01,
        trace_path=path,
        state_interval=5,
    )
    sim = Simulator(cfg, Network.line(3), _coordination())
    sim.run()

    frames = read_trace(path)
    states = [f for f in frames if isinstance(f, StateTraceFrame)]
    windows = [f for f in frames if isinstance(f, WindowTraceFrame)]
    assert [f.step for f in states] == [0, 5, 10, 15, 20, 25, 30, 35]
    assert [f.step for f in windows] == [10, 15, 20, 25, 30, 35]
    assert states[0].states == [{"action": 0}] * 3
    assert windows[0].actions == 2
    assert windows[0].counts == [10, 0, 10, 0, 10, 0]
    assert windows[-1].counts == [5, 0, 5, 0, 5, 0]


def test_no_state_frames_without_interval(tmp_path):
    path = tmp_path / "run.jsonl"
    cfg = SimulatorConfig(
        bootstrap_steps=2, window_steps=2, max_windows=1, trace_path=path
    )
    Simulator(cfg, Network.line(2), _coordination()).run()
    frames = read_trace(path)
    assert all(f.evt == "Window" for f in frames)
    assert len(frames) == 2


def test_trace_writer_lines_are_json(tmp_path):
    path = tmp_path / "t.jsonl"
    with TraceWriter(path) as writer:
        writer.write_state(0, [1, 2])
        writer.write_window(4, np.array([[1, 3], [4, 0]]))
    assert writer.closed
    lines = [json.loads(l) for l in path.read_text().splitlines()]
    assert lines[0] == {"evt": "State", "step": 0, "states": [1, 2]}
    assert lines[1] == {
        "evt": "Window",
        "step": 4,
        "actions": 2,
        "counts": [1, 3, 4, 0],
    }


def test_read_trace_rejects_unknown_event(tmp_path):
    path = tmp_path / "t.jsonl"
    path.write_text(json.dumps({"evt": "Tick", "step": 1}) + "\n")
    with pytest.raises(ValidationError):
        read_trace(path)


def test_to_jsonable_converts_numpy():
    value = {"a": np.int64(3), "b": (np.array([0.5, 1.0]),)}
    assert to_jsonable(value) == {"a": 3, "b": [[0.5, 1.0]]}
