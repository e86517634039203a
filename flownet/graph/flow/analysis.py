from typing import List, Tuple, Dict, Any
import logging

from ...exceptions import FlowVerificationError
from ..network import FlowNetwork
from ..networkx_graph import NetworkXGraph
from .decomposition import decompose_flow
from .utils import (
    calculate_flow_metrics,
    flow_value,
    verify_capacity_constraints,
    verify_flow_conservation,
)

# Configure logging for the module
logger = logging.getLogger(__name__)

class NetworkFlowAnalysis:
    """Solve a flow network and check and summarize the resulting flow."""

    def __init__(self, network: FlowNetwork):
        self.network = network
        self.logger = logging.getLogger(__name__)

    def analyze_flow(self, verify: bool = False) -> Tuple[int, List[Tuple[List[int], int]],
                                                          Dict[Tuple[int, int], int], Dict[str, Any]]:
        """
        Run the network to exhaustion and analyze the result.

        Args:
            verify: Also cross-check the value against networkx and the min cut

        Returns:
            Tuple containing:
            - Max flow value
            - Augmenting paths applied, as (nodes, bottleneck)
            - Flow on each original edge, keyed (u, v)
            - Metrics of the path decomposition of the final flow

        Raises:
            FlowVerificationError: If the flow is inconsistent
        """
        max_flow = self.network.solve()
        flow_dict = self.network.flow_dict()

        self._check_flow(flow_dict, max_flow)
        if verify:
            self.cross_check(max_flow)

        paths, _ = decompose_flow(flow_dict, self.network.start, self.network.sink)
        edge_flows = {
            (u, v): flow
            for u, flows in flow_dict.items()
            for v, flow in flows.items()
        }
        metrics = calculate_flow_metrics(paths, edge_flows)
        metrics['augmentations'] = len(self.network.paths)

        return max_flow, self.network.paths, edge_flows, metrics

    def _check_flow(self, flow_dict: Dict[int, Dict[int, int]], max_flow: int):
        """Check conservation, capacities and the net source outflow."""
        source, sink = self.network.start, self.network.sink

        if not verify_flow_conservation(flow_dict, source, sink):
            self.logger.error("Flow conservation violated")
            raise FlowVerificationError("Flow conservation violated at an intermediate node")

        if not verify_capacity_constraints(flow_dict, self.network.capacities):
            self.logger.error("Capacity constraint violated")
            raise FlowVerificationError("Edge flow exceeds its capacity")

        out_flow = flow_value(flow_dict, source)
        if out_flow != max_flow:
            self.logger.error(f"Source outflow {out_flow} does not match max flow {max_flow}")
            raise FlowVerificationError(f"Source outflow {out_flow} does not match max flow {max_flow}")

    def cross_check(self, max_flow: int):
        """Compare a max flow value with the residual min cut and with networkx."""
        _, _, _, cut_value = self.network.min_cut()
        if cut_value != max_flow:
            self.logger.error(f"Min cut {cut_value} differs from max flow {max_flow}")
            raise FlowVerificationError(f"Min cut {cut_value} differs from max flow {max_flow}")

        reference = NetworkXGraph(self.network.capacities)
        reference_value, _ = reference.compute_flow(self.network.start, self.network.sink)
        if reference_value != max_flow:
            self.logger.error(f"networkx max flow {reference_value} differs from {max_flow}")
            raise FlowVerificationError(f"networkx max flow {reference_value} differs from {max_flow}")

        self.logger.info(f"Verified max flow {max_flow} against min cut and networkx")
