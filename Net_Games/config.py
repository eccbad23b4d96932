# config.py

"""Simulator configuration."""

from __future__ import annotations

import dataclasses
import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

#: Seed used when neither a seed nor an external generator is supplied.
DEFAULT_SEED = 0b1110110001110101011000111101

_INT_FIELDS = (
    "bootstrap_steps",
    "window_steps",
    "max_windows",
    "state_interval",
    "suffix_size",
    "seed",
)


@dataclass(frozen=True)
class SimulatorConfig:
    """Immutable run parameters for :class:`~Net_Games.engine.simulator.Simulator`.

    Attributes
    ----------
    bootstrap_steps:
        Steps executed before the first window; their tallies are discarded.
    window_steps:
        Steps per window.  Every window produces one average-policy snapshot.
    max_windows:
        Upper bound on the number of windows; the run stops unconverged after
        this many.
    termination_threshold:
        The run converges once the drift metric drops below this value.
    trace_path:
        Optional JSON lines file receiving state and window trace records.
    state_interval:
        Full node states are traced at every step divisible by this value.
        ``0`` disables periodic state records.
    suffix_size:
        Number of preceding snapshots averaged by the drift metric.
    seed:
        Seed of the run's random generator when no external generator is
        supplied.
    """

    bootstrap_steps: int = 5000
    window_steps: int = 200
    max_windows: int = 1000
    termination_threshold: float = 0.001
    trace_path: Path | None = None
    state_interval: int = 0
    suffix_size: int = 4
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        if self.bootstrap_steps < 0:
            raise ValueError("bootstrap_steps must be non-negative")
        if self.window_steps < 1:
            raise ValueError("window_steps must be positive")
        if self.max_windows < 1:
            raise ValueError("max_windows must be positive")
        if not self.termination_threshold >= 0.0:
            raise ValueError("termination_threshold must be non-negative")
        if self.state_interval < 0:
            raise ValueError("state_interval must be non-negative")
        if self.suffix_size < 1:
            raise ValueError("suffix_size must be at least 1")
        if self.trace_path is not None and not isinstance(self.trace_path, Path):
            object.__setattr__(self, "trace_path", Path(self.trace_path))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulatorConfig":
        """Construct a :class:`SimulatorConfig` from a generic mapping.

        Raises
        ------
        ValueError
            If ``data`` contains keys that are not configuration fields.
        """

        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"Unknown simulator configuration keys: {', '.join(sorted(unknown))}"
            )
        values = dict(data)
        for key in _INT_FIELDS:
            if key in values:
                values[key] = int(values[key])
        if "termination_threshold" in values:
            values["termination_threshold"] = float(values["termination_threshold"])
        return cls(**values)

    def replace(self, **changes: Any) -> "SimulatorConfig":
        """Return a copy with ``changes`` applied."""

        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["trace_path"] = str(self.trace_path) if self.trace_path else None
        return data


def read_mapping(path: str | Path) -> dict[str, Any]:
    """Read a YAML, TOML or JSON file into a mapping."""

    path = Path(path)
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(path.read_text())
    elif path.suffix == ".toml":
        data = tomllib.loads(path.read_text())
    elif path.suffix == ".json":
        data = json.loads(path.read_text())
    else:
        raise ValueError(f"Unsupported config extension: {path.suffix}")
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return data


def load_config(path: str | Path) -> SimulatorConfig:
    """Load a :class:`SimulatorConfig` from ``path``.

    The file may either hold the configuration fields directly or nest them
    under a ``simulator`` section.
    """

    data = read_mapping(path)
    section = data.get("simulator", data)
    return SimulatorConfig.from_mapping(section)
