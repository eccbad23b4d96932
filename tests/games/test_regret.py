import numpy as np
import pytest

from Net_Games.config import SimulatorConfig
from Net_Games.engine.simulator import Simulator
from Net_Games.games.chooser import BestResponseEpsilonError, DirectChooser
from Net_Games.games.game import InitialAction, MatrixGame
from Net_Games.games.regret import RegretMatchingProcess, RegretState
from Net_Games.graph.model import Network

RPS = [[0, -1, 1], [1, 0, -1], [-1, 1, 0]]


def test_regret_accumulates_against_last_action():
    proc = RegretMatchingProcess(MatrixGame(RPS), BestResponseEpsilonError(0.0))
    rng = np.random.default_rng(0)
    start = RegretState(0, np.zeros(3))
    state, action = proc.node_step(rng, start, [RegretState(0, np.zeros(3))], None)
    # against rock: payoffs [0, 1, -1], regret relative to rock
    assert state.regret_sum.tolist() == [0.0, 1.0, -1.0]
    assert action == 1
    assert start.regret_sum.tolist() == [0.0, 0.0, 0.0]


def test_no_positive_regret_plays_uniformly():
    proc = RegretMatchingProcess(MatrixGame(RPS))
    rng = np.random.default_rng(1)
    start = RegretState(1, np.array([-5.0, 0.0, -2.0]))
    actions = [
        proc.node_step(rng, start, [RegretState(1, np.zeros(3))], None)[1]
        for _ in range(600)
    ]
    assert np.bincount(actions, minlength=3).min() > 150


def test_default_chooser_is_direct():
    proc = RegretMatchingProcess(MatrixGame(RPS))
    assert isinstance(proc.action_chooser, DirectChooser)
    assert proc.configuration()["chooser"] == {"kind": "direct"}
    assert proc.configuration()["game"] == "rm"


def test_state_to_json():
    proc = RegretMatchingProcess(MatrixGame(RPS))
    assert proc.state_to_json(RegretState(2, np.array([0.5, 0.0, 1.0]))) == {
        "action": 2,
        "regret_sum": [0.5, 0.0, 1.0],
    }


@pytest.mark.parametrize(
    "network,threshold",
    [(Network.line(2), 0.05), (Network.grid(3, 3), 0.1)],
    ids=["line", "grid"],
)
def test_rock_paper_scissors_converges_to_uniform_policy(network, threshold):
    cfg = SimulatorConfig(
        bootstrap_steps=5000,
        window_steps=5000,
        max_windows=20,
        termination_threshold=threshold,
        seed=3,
    )
    proc = RegretMatchingProcess(
        MatrixGame(RPS, InitialAction.const(0)), DirectChooser()
    )
    sim = Simulator(cfg, network, proc)
    assert sim.run() is True
    report = sim.report()
    assert report.converged
    assert report.drift < threshold
    assert len(report.avg_policy) == network.node_count()
    for row in report.avg_policy:
        assert sum(row) == pytest.approx(1.0)
    for p in report.mean_policy():
        assert p == pytest.approx(1 / 3, abs=0.1)
