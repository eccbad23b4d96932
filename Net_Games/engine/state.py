"""Node-state container for the simulator.

The container holds one opaque state value per node, index-aligned with the
network's node ids.  It is immutable: each simulation step builds a complete
new :class:`State` and swaps it in, so every node update reads the previous
step's values only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Tuple

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..graph.model import Network


class State:
    """Ordered, read-only sequence of per-node states."""

    __slots__ = ("_node_states",)

    def __init__(self, node_states: Iterable[Any]) -> None:
        self._node_states: Tuple[Any, ...] = tuple(node_states)

    @classmethod
    def new_by(cls, network: "Network", init_fn: Callable[[], Any]) -> "State":
        """Return a state built by calling ``init_fn`` once per node.

        Calls happen in node id order, so a seeded ``init_fn`` yields the same
        initial state on every run.
        """

        return cls(init_fn() for _ in range(network.node_count()))

    @property
    def node_states(self) -> Tuple[Any, ...]:
        return self._node_states

    @property
    def node_count(self) -> int:
        return len(self._node_states)

    def __len__(self) -> int:
        return len(self._node_states)

    def __getitem__(self, index: int) -> Any:
        return self._node_states[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._node_states)
