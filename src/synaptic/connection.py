import logging
from typing import Dict, List, Optional, Tuple

from .errors import ConnectionSizeMismatchError
from .synapse import Synapse
from .types import ConnectionType, GateType
from .util import DEFAULT_ALLOCATOR, IdAllocator

logger = logging.getLogger(__name__)


class LayerConnection:
    """
    Connection pattern between the neurons of two layers.

    Builds the synapses for the requested pattern on construction and records
    itself in the source layer's ``connected_to`` list, so a layer never
    connects to the same target twice.

    Parameters
    ----------
    from_layer, to_layer : Layer
        Source and target layers (may be the same layer).
    kind : ConnectionType, optional
        Pattern to build. Default ONE_TO_ONE for a layer onto itself,
        ALL_TO_ALL otherwise.
    weights : float, optional
        Weight for every created synapse. Random if None.
    allocator : IdAllocator, optional
        Id source for the connection id.

    Attributes
    ----------
    connections : dict
        Synapse id -> synapse for every synapse of the pattern.
    list : list
        The same synapses in creation order.
    gated_from : list
        (layer, GateType) pairs of the layers gating this connection.
    """

    def __init__(
        self,
        from_layer,
        to_layer,
        kind: Optional[ConnectionType] = None,
        weights: Optional[float] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        self.id = (allocator or DEFAULT_ALLOCATOR).next_connection_id()
        self.from_layer = from_layer
        self.to_layer = to_layer
        self.self_connection = from_layer is to_layer

        if kind is None:
            kind = (
                ConnectionType.ONE_TO_ONE
                if self.self_connection
                else ConnectionType.ALL_TO_ALL
            )
        self.kind = ConnectionType(kind)

        self.connections: Dict[int, Synapse] = {}
        self.list: List[Synapse] = []
        self.gated_from: List[Tuple[object, GateType]] = []

        if self.kind is ConnectionType.ONE_TO_ONE:
            if from_layer.size != to_layer.size:
                raise ConnectionSizeMismatchError(
                    f"ONE_TO_ONE needs layers of the same size "
                    f"({from_layer.size} != {to_layer.size})."
                )
            for source, target in zip(from_layer.neurons, to_layer.neurons):
                self._add(source.project(target, weights))
        else:
            skip_same_index = self.kind is ConnectionType.ALL_TO_ELSE
            for i, source in enumerate(from_layer.neurons):
                for j, target in enumerate(to_layer.neurons):
                    if skip_same_index and i == j:
                        continue
                    self._add(source.project(target, weights))

        from_layer.connected_to.append(self)
        logger.debug(
            "Layer connection %d: %s %d -> %d neurons, %d synapses",
            self.id,
            self.kind.name,
            from_layer.size,
            to_layer.size,
            self.size,
        )

    @property
    def size(self) -> int:
        return len(self.list)

    def _add(self, synapse: Synapse):
        if synapse.id not in self.connections:
            self.connections[synapse.id] = synapse
            self.list.append(synapse)
