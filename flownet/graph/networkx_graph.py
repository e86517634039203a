import networkx as nx
from networkx.algorithms.flow import edmonds_karp
import time
from typing import List, Tuple, Dict, Any, Optional, Set, Callable
import logging

# Configure logging for the module
logger = logging.getLogger(__name__)

class NetworkXGraph:
    """Reference max-flow and min-cut computations backed by networkx."""

    def __init__(self, capacities: List[List[int]]):
        self.g_nx = self._create_graph(capacities)
        self.logger = logging.getLogger(__name__)

    def _create_graph(self, capacities: List[List[int]]) -> nx.DiGraph:
        """Create NetworkX graph with a 'capacity' attribute on every positive edge."""
        g = nx.DiGraph()
        g.add_nodes_from(range(len(capacities)))

        edge_data = [
            (u, v, {'capacity': int(capacity)})
            for u, row in enumerate(capacities)
            for v, capacity in enumerate(row)
            if capacity > 0
        ]
        g.add_edges_from(edge_data)

        return g

    def compute_flow(self, source: int, sink: int,
                     flow_func: Optional[Callable] = None) -> Tuple[int, Dict[int, Dict[int, int]]]:
        """Compute maximum flow between source and sink nodes."""
        if flow_func is None:
            flow_func = edmonds_karp

        if self.g_nx.in_degree(sink) == 0:
            self.logger.debug("Sink has no incoming edges. No flow is possible.")
            return 0, {}

        start = time.time()
        flow_value, flow_dict = nx.maximum_flow(self.g_nx, source, sink, flow_func=flow_func)
        self.logger.debug(f"Solver Time: {time.time() - start}")

        # Convert values to integers and remove zero flows
        flow_dict = {
            u: {v: int(f) for v, f in flows.items() if f > 0}
            for u, flows in flow_dict.items()
        }
        flow_dict = {u: flows for u, flows in flow_dict.items() if flows}
        return int(flow_value), flow_dict

    def minimum_cut(self, source: int, sink: int) -> Tuple[int, Tuple[Set[int], Set[int]]]:
        """Compute the minimum source-sink cut value and partition."""
        cut_value, (source_side, sink_side) = nx.minimum_cut(self.g_nx, source, sink)
        return int(cut_value), (set(source_side), set(sink_side))

    def num_vertices(self) -> int:
        return self.g_nx.number_of_nodes()

    def num_edges(self) -> int:
        return self.g_nx.number_of_edges()

    def has_edge(self, u: int, v: int) -> bool:
        return self.g_nx.has_edge(u, v)

    def get_edge_data(self, u: int, v: int) -> Dict[str, Any]:
        return self.g_nx.get_edge_data(u, v) or {}

    def get_edge_capacity(self, u: int, v: int) -> Optional[int]:
        if self.has_edge(u, v):
            return self.g_nx[u][v].get('capacity')
        return None
