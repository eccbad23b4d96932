"""Net_Games package initialization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .config import SimulatorConfig
    from .engine.simulator import Simulator
    from .graph.model import Network

__all__ = ["Network", "Simulator", "SimulatorConfig"]


def __getattr__(name: str) -> Any:  # pragma: no cover - attribute access
    """Lazily expose the main entry points."""

    if name == "Simulator":
        from .engine.simulator import Simulator as _Simulator

        return _Simulator
    if name == "SimulatorConfig":
        from .config import SimulatorConfig as _SimulatorConfig

        return _SimulatorConfig
    if name == "Network":
        from .graph.model import Network as _Network

        return _Network
    raise AttributeError(name)
