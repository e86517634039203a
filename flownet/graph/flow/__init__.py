from .decomposition import decompose_flow, find_flow_path
from .utils import (
    residual_capacity_matrix,
    compute_edge_flows,
    verify_flow_conservation,
    verify_capacity_constraints,
    find_min_cut,
    calculate_flow_metrics
)

__all__ = [
    'decompose_flow',
    'find_flow_path',
    'residual_capacity_matrix',
    'compute_edge_flows',
    'verify_flow_conservation',
    'verify_capacity_constraints',
    'find_min_cut',
    'calculate_flow_metrics',
]
