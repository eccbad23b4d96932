from __future__ import annotations

import string
from typing import Any, Dict, Iterable, Tuple

import networkx as nx
import numpy as np

from .types import Edge, NetworkDescription

_UID_ALPHABET = string.ascii_letters + string.digits
UID_LENGTH = 7


class Network:
    """Static undirected topology on which the players are placed.

    Nodes are always labelled ``0..N-1``.  The adjacency is precomputed into a
    tuple of tuples when the network is created so neighbour enumeration is
    cheap and deterministic during a run.  The underlying
    :class:`networkx.Graph` is frozen; a network never changes once built.
    """

    def __init__(
        self,
        graph: nx.Graph,
        name: str,
        conf: Dict[str, Any] | None = None,
    ) -> None:
        if set(graph.nodes) != set(range(graph.number_of_nodes())):
            raise ValueError("network nodes must be labelled 0..N-1")
        if nx.number_of_selfloops(graph):
            raise ValueError("self-loops are not supported")
        self._graph = nx.freeze(graph)
        self._name = name
        self._conf = dict(conf or {})
        self._adjacency: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(graph.neighbors(n)) for n in range(graph.number_of_nodes())
        )

    # ---- generators ----

    @classmethod
    def line(cls, size: int) -> "Network":
        """Return a path of ``size`` nodes."""
        return cls(nx.path_graph(size), "line", {})

    @classmethod
    def grid(cls, size_x: int, size_y: int) -> "Network":
        """Return a ``size_x`` by ``size_y`` lattice without wraparound.

        Nodes are numbered row by row: node ``y * size_x + x`` sits in column
        ``x`` of row ``y`` and is linked to its four axis neighbours.
        """
        lattice = nx.grid_2d_graph(size_y, size_x)
        graph = nx.convert_node_labels_to_integers(lattice, ordering="sorted")
        return cls(graph, "grid", {"x": size_x, "y": size_y})

    @classmethod
    def random(cls, rng: np.random.Generator, n_nodes: int, prob: float) -> "Network":
        """Return an Erdős–Rényi graph with edge probability ``prob``.

        A short random ``uid`` is stored in the metadata so replications on
        distinct random graphs can be told apart in the results.
        """
        if not 0.0 <= prob <= 1.0:
            raise ValueError("edge probability must be in [0, 1]")
        seed = int(rng.integers(2**32))
        graph = nx.gnp_random_graph(n_nodes, prob, seed=seed)
        uid = "".join(rng.choice(list(_UID_ALPHABET), size=UID_LENGTH))
        return cls(graph, "rnd", {"p": prob, "uid": uid})

    @classmethod
    def from_edges(cls, edges: Iterable[Edge], name: str = "edges") -> "Network":
        """Build a network from undirected ``edges`` between arbitrary ids.

        Node ids are renumbered in the order they are first seen.  Repeated
        edges collapse into one.
        """
        ids: Dict[int, int] = {}
        graph = nx.Graph()
        for a, b in edges:
            for raw in (a, b):
                if raw not in ids:
                    ids[raw] = len(ids)
                    graph.add_node(ids[raw])
            if ids[a] == ids[b]:
                raise ValueError(f"self-loop on node {a} is not supported")
            graph.add_edge(ids[a], ids[b])
        return cls(graph, name, {})

    # ---- queries ----

    @property
    def graph(self) -> nx.Graph:
        """Read-only view of the underlying :mod:`networkx` graph."""
        return self._graph

    @property
    def name(self) -> str:
        return self._name

    def node_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def neighbors(self, node: int) -> Tuple[int, ...]:
        """Return the ids adjacent to ``node``."""
        return self._adjacency[node]

    def edges(self) -> list[Edge]:
        """Return all edges as ``(low, high)`` id pairs."""
        return sorted((min(a, b), max(a, b)) for a, b in self._graph.edges())

    def description(self) -> NetworkDescription:
        """Serializable summary used in run reports."""
        return {
            "name": self._name,
            "nodes": self.node_count(),
            "edges": self.edge_count(),
            **self._conf,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return (
            f"Network(name={self._name!r}, nodes={self.node_count()}, "
            f"edges={self.edge_count()})"
        )
