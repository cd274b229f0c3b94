"""Exceptions raised by the neuron/layer engine."""


class SynapticError(Exception):
    """Base class for all engine errors."""


class InputSizeMismatchError(SynapticError, ValueError):
    def __init__(self, message="Input size and Layer size must be the same to activate"):
        super().__init__(message)


class TargetSizeMismatchError(SynapticError, ValueError):
    def __init__(self, message="Target size and Layer size must be the same to propagate"):
        super().__init__(message)


class ConnectionSizeMismatchError(SynapticError, ValueError):
    """A connection or gate pattern needs layers of matching size."""


class GraphInvariantError(SynapticError):
    """
    The neuron graph is malformed.

    Raised when wiring would break an invariant of the graph (a synapse gated
    by two neurons) or when trace bookkeeping is found to be incomplete. This
    signals a construction bug; the engine never repairs the graph.
    """
