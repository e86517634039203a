from .exceptions import FlowNetError, InvalidNetworkError, ResidualGraphError, FlowVerificationError
from .graph import FlowNetwork, NetworkXGraph, NetworkFlowAnalysis
from .data_ingestion import DataIngestion
from .graph_manager import GraphManager

__all__ = [
    'FlowNetwork',
    'NetworkXGraph',
    'NetworkFlowAnalysis',
    'DataIngestion',
    'GraphManager',
    'FlowNetError',
    'InvalidNetworkError',
    'ResidualGraphError',
    'FlowVerificationError'
]
