import logging
import numbers
from collections import deque
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

from ..exceptions import InvalidNetworkError, ResidualGraphError
from .flow.utils import compute_edge_flows, find_min_cut, residual_capacity_matrix

# Configure logging for the module
logger = logging.getLogger(__name__)


class Edge:
    """
    Directed residual edge.

    The tail of the edge is implied by the adjacency list that owns it, so only
    the head (``to``) and the remaining capacity are stored.
    """

    __slots__ = ('to', 'capacity')

    def __init__(self, to: int, capacity: int):
        self.to = to
        self.capacity = capacity

    def __repr__(self) -> str:
        return f"Edge(to={self.to}, capacity={self.capacity})"


class FlowNetwork:
    """
    Flow network with integer capacities solved by Edmonds-Karp.

    The residual graph is a list of adjacency lists indexed by node. Each call
    to ``find_path`` runs one breadth-first search from ``start`` and, when the
    sink is reachable, pushes the bottleneck of the shortest path found through
    the residual graph. Calling it until it returns ``False`` leaves the
    maximum flow in ``max_flow``.

    Instances are not safe for concurrent use.
    """

    def __init__(self, start: int, sink: int, capacities: Sequence[Sequence[int]]):
        """
        Build the residual graph from a square capacity matrix.

        Args:
            start: Index of the source node
            sink: Index of the sink node
            capacities: Square matrix where ``capacities[i][j]`` is the capacity
                of the directed edge i -> j (0 means no edge)

        Raises:
            InvalidNetworkError: If the matrix or the terminal indices are malformed
        """
        self.logger = logging.getLogger(__name__)
        self._capacities = self._validate_capacities(capacities)
        self.vertices = len(self._capacities)
        self.start = self._validate_node(start, 'start')
        self.sink = self._validate_node(sink, 'sink')
        if self.start == self.sink:
            raise InvalidNetworkError(f"start and sink must differ (both are {self.start})")

        self.max_flow = 0
        self._paths: List[Tuple[List[int], int]] = []
        self.graph: List[List[Edge]] = self._create_graph(self._capacities)

    @classmethod
    def from_edges(cls, vertices: int, edges: Iterable[Tuple[int, int, int]],
                   start: int, sink: int) -> 'FlowNetwork':
        """Build a network from ``(u, v, capacity)`` triples; parallel edges are summed."""
        if not isinstance(vertices, numbers.Integral) or isinstance(vertices, bool) or vertices <= 0:
            raise InvalidNetworkError(f"vertices must be a positive integer, got {vertices!r}")

        matrix = [[0] * vertices for _ in range(vertices)]
        for edge in edges:
            try:
                u, v, capacity = edge
            except (TypeError, ValueError):
                raise InvalidNetworkError(f"Edge must be a (u, v, capacity) triple, got {edge!r}")
            for endpoint in (u, v):
                if (not isinstance(endpoint, numbers.Integral) or isinstance(endpoint, bool)
                        or not 0 <= endpoint < vertices):
                    raise InvalidNetworkError(f"Edge endpoint {endpoint!r} out of range [0, {vertices})")
            if not isinstance(capacity, numbers.Integral) or isinstance(capacity, bool) or capacity < 0:
                raise InvalidNetworkError(f"Capacity of edge {u} -> {v} must be a non-negative integer, got {capacity!r}")
            matrix[u][v] += int(capacity)

        return cls(start, sink, matrix)

    def _validate_capacities(self, capacities) -> List[List[int]]:
        """Check the matrix is square with non-negative integer entries and copy it."""
        if hasattr(capacities, 'to_numpy'):
            capacities = capacities.to_numpy()

        try:
            rows = [list(row) for row in capacities]
        except TypeError:
            raise InvalidNetworkError("Capacities must be a square matrix of integers")

        vertices = len(rows)
        if vertices == 0:
            raise InvalidNetworkError("Capacity matrix is empty")

        matrix = []
        for i, row in enumerate(rows):
            if len(row) != vertices:
                raise InvalidNetworkError(
                    f"Capacity matrix is not square: row {i} has {len(row)} entries, expected {vertices}"
                )
            for j, value in enumerate(row):
                if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                    raise InvalidNetworkError(f"Capacity [{i}][{j}] is not an integer: {value!r}")
                if value < 0:
                    raise InvalidNetworkError(f"Capacity [{i}][{j}] is negative: {value}")
            matrix.append([int(value) for value in row])
        return matrix

    def _validate_node(self, node: int, name: str) -> int:
        if not isinstance(node, numbers.Integral) or isinstance(node, bool):
            raise InvalidNetworkError(f"{name} must be an integer node index, got {node!r}")
        if not 0 <= node < self.vertices:
            raise InvalidNetworkError(f"{name} index {node} out of range [0, {self.vertices})")
        return int(node)

    def _create_graph(self, capacities: List[List[int]]) -> List[List[Edge]]:
        """Create one adjacency list per node holding only positive-capacity edges."""
        graph = [[] for _ in range(self.vertices)]
        for i, row in enumerate(capacities):
            for j, capacity in enumerate(row):
                if capacity != 0:
                    graph[i].append(Edge(j, capacity))
        return graph

    def find_path(self) -> bool:
        """
        Find one shortest augmenting path and apply it to the residual graph.

        Meant to be called as a loop condition until it returns ``False``, at
        which point ``max_flow`` holds the maximum flow.

        Returns:
            True if a path was found and applied, False if the sink is unreachable
        """
        parent = [-1] * self.vertices
        visited = [False] * self.vertices
        queue = deque([self.start])
        visited[self.start] = True

        while queue:
            if visited[self.sink]:
                break
            node = queue[0]
            for edge in self.graph[node]:
                if visited[edge.to]:
                    continue
                parent[edge.to] = node
                visited[edge.to] = True
                if edge.to == self.sink:
                    break
                queue.append(edge.to)
            queue.popleft()

        if visited[self.sink]:
            self._update_residual_graph(parent)
            return True

        return False

    def _update_residual_graph(self, parent: List[int]):
        """Push the bottleneck of the path encoded in ``parent`` through the residual graph."""
        # Collect the path edges and the bottleneck before touching anything
        path_edges = []
        bottleneck = None
        node = self.sink
        while node != self.start:
            node_parent = parent[node]
            edge = self._find_edge(node_parent, node)
            if bottleneck is None or edge.capacity < bottleneck:
                bottleneck = edge.capacity
            path_edges.append((node_parent, node, edge))
            node = node_parent

        for node_parent, node, edge in path_edges:
            edge.capacity -= bottleneck
            if edge.capacity == 0:
                self.graph[node_parent].remove(edge)
            self.graph[node].append(Edge(node_parent, bottleneck))

        path = [self.start] + [node for _, node, _ in reversed(path_edges)]
        self._paths.append((path, bottleneck))
        self.max_flow += bottleneck
        self.logger.debug(f"Augmenting path {path} carries {bottleneck}; total flow {self.max_flow}")

    def _find_edge(self, from_node: int, to_node: int) -> Edge:
        """Return the first residual edge from ``from_node`` to ``to_node``."""
        for edge in self.graph[from_node]:
            if edge.to == to_node:
                return edge
        raise ResidualGraphError(f"No residual edge {from_node} -> {to_node} on augmenting path")

    def solve(self) -> int:
        """Augment until no path remains and return the maximum flow."""
        augmentations = 0
        while self.find_path():
            augmentations += 1
        self.logger.info(f"Max flow {self.start} -> {self.sink}: {self.max_flow} "
                         f"after {augmentations} augmentations")
        return self.max_flow

    def get_max_flow(self) -> int:
        return self.max_flow

    @property
    def capacities(self) -> List[List[int]]:
        """Copy of the original capacity matrix."""
        return [list(row) for row in self._capacities]

    @property
    def paths(self) -> List[Tuple[List[int], int]]:
        """Augmenting paths applied so far, as ``(nodes, bottleneck)`` in order."""
        return [(list(path), flow) for path, flow in self._paths]

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Iterate over residual edges as ``(u, v, capacity)``."""
        for u, adjacency in enumerate(self.graph):
            for edge in adjacency:
                yield u, edge.to, edge.capacity

    def residual_capacity(self, u: int, v: int) -> int:
        """Total remaining capacity over every residual edge u -> v."""
        return sum(edge.capacity for edge in self.graph[u] if edge.to == v)

    def flow_dict(self) -> Dict[int, Dict[int, int]]:
        """Positive net flow on every original edge, keyed ``flow[u][v]``."""
        residual = residual_capacity_matrix(self.graph, self.vertices)
        return compute_edge_flows(self._capacities, residual)

    def min_cut(self) -> Tuple[Set[int], Set[int], List[Tuple[int, int]], int]:
        """
        Minimum start-sink cut of the current residual graph.

        Only a minimum cut once ``find_path`` has returned ``False``.

        Returns:
            Tuple of (source side, sink side, cut edges, cut capacity)
        """
        return find_min_cut(self.graph, self.start, self._capacities)

    def __repr__(self) -> str:
        return (f"FlowNetwork(vertices={self.vertices}, start={self.start}, "
                f"sink={self.sink}, max_flow={self.max_flow})")
