from .network import Edge, FlowNetwork
from .networkx_graph import NetworkXGraph
from .flow.analysis import NetworkFlowAnalysis

__all__ = [
    'Edge',
    'FlowNetwork',
    'NetworkXGraph',
    'NetworkFlowAnalysis'
]
