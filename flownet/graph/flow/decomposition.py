from typing import Dict, List, Tuple

def find_flow_path(flow_dict: Dict[int, Dict[int, int]], source: int, sink: int) -> List[int]:
    """Find a path with positive flow using iterative DFS."""
    visited = {source}
    path = [source]
    stack = [(source, iter(flow_dict.get(source, {}).items()))]

    while stack:
        current, edges = stack[-1]
        try:
            next_node, flow = next(edges)
            if flow > 0 and next_node not in visited:
                if next_node == sink:
                    path.append(next_node)
                    return path
                visited.add(next_node)
                path.append(next_node)
                stack.append((next_node, iter(flow_dict.get(next_node, {}).items())))
        except StopIteration:
            stack.pop()
            if path:
                path.pop()

    return []

def subtract_path_flow(residual_flow: Dict[int, Dict[int, int]], path: List[int],
                       path_flow: int) -> None:
    """Remove a path's flow from a flow dictionary, dropping emptied entries."""
    for u, v in zip(path[:-1], path[1:]):
        residual_flow[u][v] -= path_flow
        if residual_flow[u][v] == 0:
            del residual_flow[u][v]
        if not residual_flow[u]:
            del residual_flow[u]

def decompose_flow(flow_dict: Dict[int, Dict[int, int]], source: int,
                   sink: int) -> Tuple[List[Tuple[List[int], int]], Dict[Tuple[int, int], int]]:
    """
    Decompose a flow into source-sink paths.

    Circulations that never touch a source-sink path are left out.

    Returns:
        Tuple of ([(path, amount), ...], {(u, v): flow carried by the paths})
    """
    paths = []
    edge_flows = {}

    # Work on a copy so the caller's flow stays intact
    remaining = {u: dict(flows) for u, flows in flow_dict.items()}

    while True:
        path = find_flow_path(remaining, source, sink)
        if not path:
            break

        path_flow = min(remaining[u][v] for u, v in zip(path[:-1], path[1:]))

        for u, v in zip(path[:-1], path[1:]):
            edge_flows[(u, v)] = edge_flows.get((u, v), 0) + path_flow

        subtract_path_flow(remaining, path, path_flow)
        paths.append((path, path_flow))

    return paths, edge_flows


__all__ = ['decompose_flow', 'find_flow_path', 'subtract_path_flow']
