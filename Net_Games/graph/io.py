"""File IO helpers for :mod:`Net_Games.graph`."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from .model import Network
from .types import EdgeList, NetworkSpec


def load_edge_list(path: str | Path) -> Network:
    """Load an undirected edge list from ``path`` and return a :class:`Network`.

    The file holds a JSON array of ``[a, b]`` integer pairs.  The network is
    named after the file path.
    """
    with open(path) as f:
        data = json.load(f)
    _validate_edges(data)
    return Network.from_edges(((a, b) for a, b in data), name=str(path))


def save_edge_list(path: str | Path, network: Network) -> None:
    """Write the edges of ``network`` to ``path`` in JSON format."""
    with open(path, "w") as f:
        data: EdgeList = [list(e) for e in network.edges()]
        json.dump(data, f)


def network_from_spec(spec: NetworkSpec, rng: np.random.Generator) -> Network:
    """Build a network from a configuration mapping.

    Supported ``kind`` values are ``line`` (``size``), ``grid`` (``x``,
    ``y``), ``random`` (``nodes``, ``p``) and ``file`` (``path``).  ``rng`` is
    only consumed by random graphs.
    """
    kind = spec.get("kind")
    try:
        if kind == "line":
            return Network.line(int(spec["size"]))
        if kind == "grid":
            return Network.grid(int(spec["x"]), int(spec["y"]))
        if kind == "random":
            return Network.random(rng, int(spec["nodes"]), float(spec["p"]))
        if kind == "file":
            return load_edge_list(spec["path"])
    except KeyError as exc:
        raise ValueError(f"network '{kind}' missing parameter {exc}") from None
    raise ValueError(f"unknown network kind: {kind!r}")


def _validate_edges(data: Any) -> None:
    if not isinstance(data, list):
        raise ValueError("edge list file must contain a JSON array")
    for edge in data:
        if not isinstance(edge, list) or len(edge) != 2:
            raise ValueError("edge entries must be 2-element arrays")
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in edge):
            raise ValueError("edge endpoints must be integers")
