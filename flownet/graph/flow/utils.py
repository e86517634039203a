from typing import Dict, List, Set, Tuple
from collections import deque

def residual_capacity_matrix(graph: List[List], vertices: int) -> List[List[int]]:
    """Sum residual edge capacities per (u, v) pair into a dense matrix."""
    residual = [[0] * vertices for _ in range(vertices)]
    for u, adjacency in enumerate(graph):
        for edge in adjacency:
            residual[u][edge.to] += edge.capacity
    return residual

def compute_edge_flows(capacities: List[List[int]], residual: List[List[int]]) -> Dict[int, Dict[int, int]]:
    """
    Recover the flow on original edges from a residual capacity matrix.

    The net flow u -> v is the original capacity minus what remains; only
    positive values are kept, so antiparallel flows cancel out.
    """
    flow_dict = {}
    for u, row in enumerate(capacities):
        for v, capacity in enumerate(row):
            flow = capacity - residual[u][v]
            if flow > 0:
                flow_dict.setdefault(u, {})[v] = flow
    return flow_dict

def verify_flow_conservation(flow_dict: Dict[int, Dict[int, int]], source: int, sink: int) -> bool:
    """Verify flow conservation at intermediate nodes."""
    nodes = set(flow_dict)
    for flows in flow_dict.values():
        nodes.update(flows)

    for node in nodes:
        if node not in (source, sink):
            in_flow = sum(flows.get(node, 0) for flows in flow_dict.values())
            out_flow = sum(flow_dict.get(node, {}).values())
            if in_flow != out_flow:
                return False
    return True

def verify_capacity_constraints(flow_dict: Dict[int, Dict[int, int]], capacities: List[List[int]]) -> bool:
    """Verify every edge flow lies within [0, capacity]."""
    for u, flows in flow_dict.items():
        for v, flow in flows.items():
            if flow < 0 or flow > capacities[u][v]:
                return False
    return True

def flow_value(flow_dict: Dict[int, Dict[int, int]], source: int) -> int:
    """Net flow leaving the source."""
    out_flow = sum(flow_dict.get(source, {}).values())
    in_flow = sum(flows.get(source, 0) for flows in flow_dict.values())
    return out_flow - in_flow

def find_min_cut(graph: List[List], start: int,
                 capacities: List[List[int]]) -> Tuple[Set[int], Set[int], List[Tuple[int, int]], int]:
    """
    Split nodes by reachability from start in the residual graph.

    Stored residual edges always carry positive capacity, so every edge is
    traversable. Returns (source side, sink side, cut edges, cut capacity).
    """
    reachable = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for edge in graph[node]:
            if edge.to not in reachable:
                reachable.add(edge.to)
                queue.append(edge.to)

    unreachable = set(range(len(capacities))) - reachable
    cut_edges = [
        (u, v)
        for u in sorted(reachable)
        for v in sorted(unreachable)
        if capacities[u][v] > 0
    ]
    cut_value = sum(capacities[u][v] for u, v in cut_edges)
    return reachable, unreachable, cut_edges, cut_value

def calculate_flow_metrics(paths: List[Tuple[List[int], int]],
                         edge_flows: Dict[Tuple[int, int], int]) -> Dict[str, float]:
    """Calculate flow metrics."""
    if not paths:
        return {
            'total_flow': 0,
            'num_paths': 0,
            'average_path_flow': 0,
            'max_path_flow': 0,
            'min_path_flow': 0,
            'unique_edges': 0,
            'average_edge_flow': 0,
        }

    flows = [flow for _, flow in paths]
    total_flow = sum(flows)

    metrics = {
        'total_flow': total_flow,
        'num_paths': len(paths),
        'average_path_flow': total_flow / len(paths),
        'max_path_flow': max(flows),
        'min_path_flow': min(flows),
        'unique_edges': len(edge_flows),
        'average_edge_flow': sum(edge_flows.values()) / len(edge_flows) if edge_flows else 0,
    }

    # Path lengths counted in edges
    path_lengths = [len(path) - 1 for path, _ in paths]
    metrics.update({
        'average_path_length': sum(path_lengths) / len(path_lengths),
        'max_path_length': max(path_lengths),
        'min_path_length': min(path_lengths),
    })

    return metrics
