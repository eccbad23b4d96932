from __future__ import annotations

from typing import Any, Dict, List, Tuple, TypedDict

# Reusable typed mappings for topology descriptions and edge-list files

Edge = Tuple[int, int]
EdgeList = List[List[int]]


class NetworkDescription(TypedDict, total=False):
    """Descriptive metadata reported alongside simulation results."""

    name: str
    nodes: int
    edges: int
    x: int
    y: int
    p: float
    uid: str


NetworkSpec = Dict[str, Any]
