"""Network topologies used by the simulator."""

from .model import Network
from .io import load_edge_list, network_from_spec, save_edge_list

__all__ = ["Network", "load_edge_list", "network_from_spec", "save_edge_list"]
