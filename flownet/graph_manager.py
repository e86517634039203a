import pandas as pd
from typing import Any, Dict, Hashable, List, Tuple, Union
import logging

from .data_ingestion import DataIngestion
from .graph import FlowNetwork, NetworkFlowAnalysis

logger = logging.getLogger(__name__)

class GraphManager:
    def __init__(self, data_source: Union[pd.DataFrame, str, DataIngestion]):
        """
        Initialize the GraphManager from an edge list.

        Args:
            data_source: Either:
                - pd.DataFrame: edge list with 'from', 'to', 'capacity' columns
                - str: path to a CSV edge list with the same columns
                - DataIngestion: an already ingested network
        """
        self.data_ingestion = self._initialize_data_ingestion(data_source)

    def _initialize_data_ingestion(self, data_source) -> DataIngestion:
        """
        Initialize the appropriate data ingestion based on the data source type.
        """
        if isinstance(data_source, DataIngestion):
            return data_source

        if isinstance(data_source, pd.DataFrame):
            return DataIngestion(data_source)

        if isinstance(data_source, str):
            try:
                df_edges = pd.read_csv(data_source)
            except Exception as e:
                raise ValueError(f"Error reading CSV file: {str(e)}")
            return DataIngestion(df_edges)

        raise ValueError("Invalid data source format")

    def create_network(self, source: Hashable, sink: Hashable) -> FlowNetwork:
        """Build a fresh flow network between two labelled nodes."""
        source_id = self.data_ingestion.get_id_for_node(source)
        sink_id = self.data_ingestion.get_id_for_node(sink)

        if source_id is None or sink_id is None:
            raise ValueError(f"Source node '{source}' or sink node '{sink}' not found in the graph.")

        return FlowNetwork(source_id, sink_id, self.data_ingestion.capacity_matrix)

    def analyze_flow(self, source: Hashable, sink: Hashable,
                     verify: bool = False) -> Tuple[int, List[Tuple[List[Hashable], int]],
                                                    Dict[Tuple[Hashable, Hashable], int], Dict[str, Any]]:
        """Compute the max flow between two labelled nodes, with labelled paths and edge flows."""
        network = self.create_network(source, sink)
        flow_value, paths, edge_flows, metrics = NetworkFlowAnalysis(network).analyze_flow(verify)

        labelled_paths = [
            (self.data_ingestion.label_path(path), flow)
            for path, flow in paths
        ]
        return flow_value, labelled_paths, self.data_ingestion.label_edge_flows(edge_flows), metrics

    def get_node_info(self) -> str:
        """Get information about nodes in the graph."""
        nodes = list(self.data_ingestion.node_to_id)
        edge_count = sum(
            1 for row in self.data_ingestion.capacity_matrix for capacity in row if capacity > 0
        )
        sample = ', '.join(str(node) for node in nodes[:5])
        return f"Total nodes: {len(nodes)}\nTotal edges: {edge_count}\nSample nodes: {sample}"
