class FlowNetError(Exception):
    """Base class for all flownet errors."""


class InvalidNetworkError(FlowNetError, ValueError):
    """Raised when a flow network is constructed from malformed input."""


class ResidualGraphError(FlowNetError, RuntimeError):
    """Raised when an edge expected on an augmenting path is missing from the residual graph."""


class FlowVerificationError(FlowNetError, AssertionError):
    """Raised when a computed flow fails a consistency check."""
