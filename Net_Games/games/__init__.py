"""Matrix-game dynamics implementing the process contract."""

from .bestresp import BestResponseProcess, PlayerState
from .chooser import (
    ActionChooser,
    BestResponseEpsilonError,
    DirectChooser,
    EpsilonError,
    SoftmaxSample,
    chooser_from_spec,
)
from .counting import ActionCountingProcess, CountingState
from .factory import build_process, initial_action_from_spec
from .game import InitialAction, MatrixGame
from .regret import RegretMatchingProcess, RegretState

__all__ = [
    "ActionChooser",
    "ActionCountingProcess",
    "BestResponseEpsilonError",
    "BestResponseProcess",
    "CountingState",
    "DirectChooser",
    "EpsilonError",
    "InitialAction",
    "MatrixGame",
    "PlayerState",
    "RegretMatchingProcess",
    "RegretState",
    "SoftmaxSample",
    "build_process",
    "chooser_from_spec",
    "initial_action_from_spec",
]
