from typing import List, Optional
import argparse
import logging

from .config import configure_logging, load_settings
from .data_ingestion import DataIngestion, load_capacity_matrix, load_edge_list
from .exceptions import FlowNetError
from .graph import FlowNetwork, NetworkFlowAnalysis

logger = logging.getLogger(__name__)

# Six-node network used when no input is given
REFERENCE_CAPACITIES = [
    [0, 7, 5, 0, 0, 0],
    [0, 0, 5, 4, 0, 0],
    [0, 0, 0, 6, 4, 0],
    [0, 0, 0, 0, 2, 5],
    [0, 0, 0, 0, 0, 6],
    [0, 0, 0, 0, 0, 0],
]
REFERENCE_START = 0
REFERENCE_SINK = 5

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='flownet',
        description='Compute the maximum flow of a network with the Edmonds-Karp algorithm.'
    )
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument('--edges', help='CSV edge list with from,to,capacity columns')
    source_group.add_argument('--matrix', help='CSV square capacity matrix')
    parser.add_argument('--header', action='store_true',
                        help='First row of the matrix CSV holds node labels')
    parser.add_argument('--source', help='Source node label (default: first node)')
    parser.add_argument('--sink', help='Sink node label (default: last node)')
    parser.add_argument('--verify', action='store_true', default=None,
                        help='Cross-check the result against the min cut and networkx')
    parser.add_argument('--log-level', help='Logging level (default: FLOWNET_LOG_LEVEL or WARNING)')
    return parser.parse_args(argv)

def resolve_node(data_ingestion: DataIngestion, label: Optional[str], default_id: int) -> int:
    """Translate a command-line label to a node id, comparing labels as strings."""
    if label is None:
        return default_id

    for node, node_id in data_ingestion.node_to_id.items():
        if str(node) == label:
            return node_id
    raise ValueError(f"Node '{label}' not found in the graph.")

def load_network(args: argparse.Namespace):
    """Build the flow network described by the arguments."""
    if args.edges:
        data_ingestion = load_edge_list(args.edges)
    elif args.matrix:
        data_ingestion = load_capacity_matrix(args.matrix, header=args.header)
    else:
        data_ingestion = DataIngestion.from_matrix(REFERENCE_CAPACITIES)
        if args.source is None and args.sink is None:
            network = FlowNetwork(REFERENCE_START, REFERENCE_SINK, data_ingestion.capacity_matrix)
            return network, data_ingestion

    last_id = len(data_ingestion.id_to_node) - 1
    source_id = resolve_node(data_ingestion, args.source, 0)
    sink_id = resolve_node(data_ingestion, args.sink, last_id)
    return FlowNetwork(source_id, sink_id, data_ingestion.capacity_matrix), data_ingestion

def format_cut(cut_edges: List[tuple], labels) -> str:
    return ', '.join(f"{labels[u]}->{labels[v]}" for u, v in cut_edges)

def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = parse_args(argv)
    verify = settings['verify'] if args.verify is None else args.verify

    try:
        configure_logging(args.log_level, settings)

        network, data_ingestion = load_network(args)
        logger.info(f"Loaded {network}")

        max_flow, paths, _, metrics = NetworkFlowAnalysis(network).analyze_flow(verify=verify)
        logger.info(f"Found {len(paths)} augmenting paths")
        logger.info(f"Flow metrics: {metrics}")

        print(f"Max flow: {max_flow}")
        if verify:
            _, _, cut_edges, cut_value = network.min_cut()
            print(f"Min cut: {cut_value} [{format_cut(cut_edges, data_ingestion.id_to_node)}]")

    except (FlowNetError, ValueError, OSError) as e:
        logger.error(f"Flow computation failed: {str(e)}", exc_info=True)
        print(f"Error: {str(e)}")
        return 1

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
