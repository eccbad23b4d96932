"""Build processes from configuration mappings."""

from __future__ import annotations

from typing import Any, Mapping

from ..engine.process import Process
from .bestresp import BestResponseProcess
from .chooser import BestResponseEpsilonError, chooser_from_spec
from .counting import ActionCountingProcess
from .game import InitialAction, MatrixGame
from .regret import RegretMatchingProcess


def initial_action_from_spec(spec: Any) -> InitialAction:
    """Interpret ``uniform``, an action index or a list of probabilities."""

    if spec is None or spec == "uniform":
        return InitialAction.uniform()
    if isinstance(spec, bool):
        raise ValueError(f"invalid initial action: {spec!r}")
    if isinstance(spec, int):
        return InitialAction.const(spec)
    if isinstance(spec, (list, tuple)):
        return InitialAction.distribution(spec)
    raise ValueError(f"invalid initial action: {spec!r}")


def build_process(spec: Mapping[str, Any]) -> Process:
    """Return the process described by ``spec``.

    Example::

        {"game": "rm", "payoffs": [[0, -1, 1], [1, 0, -1], [-1, 1, 0]],
         "init": 0, "chooser": {"kind": "softmax", "temperature": 0.5}}

    ``game`` selects ``br`` (best response, requires ``prob``), ``rm``
    (regret matching) or ``count`` (neighbour action counting).
    """

    if "payoffs" not in spec:
        raise KeyError("process specification missing 'payoffs'")
    game = MatrixGame(spec["payoffs"], initial_action_from_spec(spec.get("init")))
    kind = spec.get("game")
    if kind == "br":
        return BestResponseProcess(game, float(spec.get("prob", 1.0)))
    if kind == "rm":
        return RegretMatchingProcess(game, chooser_from_spec(spec.get("chooser")))
    if kind == "count":
        chooser = spec.get("chooser")
        return ActionCountingProcess(
            game,
            chooser_from_spec(chooser) if chooser else BestResponseEpsilonError(0.0),
        )
    raise ValueError(f"unknown game kind: {kind!r}")
