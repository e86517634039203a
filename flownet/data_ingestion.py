import pandas as pd
import numpy as np
from typing import Any, Dict, Hashable, List, Optional
import logging

from .exceptions import InvalidNetworkError

logger = logging.getLogger(__name__)

EDGE_COLUMNS = ['from', 'to', 'capacity']

class DataIngestion:
    def __init__(self, df_edges: pd.DataFrame):
        """
        Map labelled edges onto dense node ids and build the capacity matrix.

        Args:
            df_edges: Edge list with 'from', 'to' and 'capacity' columns. Node
                labels may be any hashable value; ids are assigned in order of
                first appearance, reading 'from' before 'to' on each row.
        """
        missing = [column for column in EDGE_COLUMNS if column not in df_edges.columns]
        if missing:
            raise InvalidNetworkError(f"Edge list is missing columns: {', '.join(missing)}")

        edges = df_edges[EDGE_COLUMNS].copy()
        edges['capacity'] = self._convert_capacities(edges['capacity'])

        # Interleave endpoints so ids follow row order
        labels = pd.Series(edges[['from', 'to']].to_numpy().ravel()).drop_duplicates()
        self._set_labels(list(labels))

        # Zero capacity means no edge
        edges = edges[edges['capacity'] > 0].copy()
        edges['from_id'] = edges['from'].map(self.node_to_id)
        edges['to_id'] = edges['to'].map(self.node_to_id)

        grouped = edges.groupby(['from_id', 'to_id'], sort=False)['capacity'].sum()

        size = len(self.id_to_node)
        self.capacity_matrix = [[0] * size for _ in range(size)]
        for (u, v), capacity in grouped.items():
            self.capacity_matrix[int(u)][int(v)] = int(capacity)

        logger.info(f"Ingested {len(edges)} edges over {size} nodes")

    @classmethod
    def from_matrix(cls, matrix: Any) -> 'DataIngestion':
        """
        Build an ingestion from a square capacity matrix.

        DataFrame column labels become node labels; otherwise nodes are labelled
        by their index.
        """
        if isinstance(matrix, pd.DataFrame):
            labels = list(matrix.columns)
            values = matrix.to_numpy()
        else:
            try:
                values = np.asarray(matrix)
            except ValueError:
                raise InvalidNetworkError("Capacity matrix must be square and non-empty")
            labels = list(range(len(values))) if values.ndim == 2 else []

        if values.ndim != 2 or values.shape[0] != values.shape[1] or values.shape[0] == 0:
            raise InvalidNetworkError(f"Capacity matrix must be square and non-empty, got shape {values.shape}")

        rows, cols = np.nonzero(values)
        df_edges = pd.DataFrame({
            'from': [labels[i] for i in rows],
            'to': [labels[j] for j in cols],
            'capacity': values[rows, cols],
        })
        ingestion = cls(df_edges)

        # Keep every labelled node, even those without edges, in matrix order
        ingestion._set_labels(labels)
        size = len(labels)
        ingestion.capacity_matrix = [[0] * size for _ in range(size)]
        for i, j in zip(rows, cols):
            ingestion.capacity_matrix[int(i)][int(j)] = int(values[i, j])
        return ingestion

    def _set_labels(self, labels: List[Hashable]):
        self.node_to_id = {label: idx for idx, label in enumerate(labels)}
        self.id_to_node = {idx: label for idx, label in enumerate(labels)}

    def _convert_capacities(self, capacities: pd.Series) -> pd.Series:
        """Check capacities are non-negative integers and return them as int64."""
        if capacities.isna().any():
            raise InvalidNetworkError("Edge list contains missing capacities")

        if pd.api.types.is_bool_dtype(capacities):
            raise InvalidNetworkError("Edge capacities must be integers")

        numeric = pd.to_numeric(capacities, errors='coerce')
        if numeric.isna().any():
            raise InvalidNetworkError("Edge capacities must be integers")
        if (numeric != np.floor(numeric)).any():
            raise InvalidNetworkError("Edge capacities must be integers")
        if (numeric < 0).any():
            raise InvalidNetworkError("Edge capacities must be non-negative")
        return numeric.astype('int64')

    def get_id_for_node(self, label: Hashable) -> Optional[int]:
        return self.node_to_id.get(label)

    def get_node_for_id(self, node_id: int) -> Optional[Hashable]:
        return self.id_to_node.get(node_id)

    def label_path(self, path: List[int]) -> List[Hashable]:
        return [self.id_to_node[node] for node in path]

    def label_edge_flows(self, edge_flows: Dict[tuple, int]) -> Dict[tuple, int]:
        return {
            (self.id_to_node[u], self.id_to_node[v]): flow
            for (u, v), flow in edge_flows.items()
        }


def load_edge_list(path: str) -> DataIngestion:
    """Read a 'from,to,capacity' CSV edge list."""
    df_edges = pd.read_csv(path)
    return DataIngestion(df_edges)


def load_capacity_matrix(path: str, header: bool = False) -> DataIngestion:
    """Read a square CSV capacity matrix; with ``header`` the first row names the nodes."""
    df_matrix = pd.read_csv(path, header=0 if header else None)
    return DataIngestion.from_matrix(df_matrix if header else df_matrix.to_numpy())
