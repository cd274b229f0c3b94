"""
Layer: an ordered group of neurons with bulk activation and propagation.

Positions are stable for the lifetime of the layer, so the i-th input or
target always goes to the i-th neuron and the i-th activation comes from it.
"""

import logging
from typing import List, Optional, Sequence

from .connection import LayerConnection
from .errors import (
    ConnectionSizeMismatchError,
    InputSizeMismatchError,
    TargetSizeMismatchError,
)
from .hyperparameters import BaseConfig
from .neuron import Neuron
from .squash import Squash
from .types import ConnectionType, GateType
from .util import DEFAULT_ALLOCATOR, IdAllocator

logger = logging.getLogger(__name__)


class Layer:
    """
    Fixed-size, ordered group of neurons.

    Parameters
    ----------
    size : int
        Number of neurons.
    cfg : BaseConfig, optional
        Squash, initial bias, generator, default learning rate and default
        projection weight. Default ``BaseConfig(seed=None)`` (global RNG).
    allocator : IdAllocator, optional
        Id source for the neurons, their synapses and layer connections.

    Attributes
    ----------
    neurons : list of Neuron
        Neurons in positional order.
    connected_to : list of LayerConnection
        Patterns already projected from this layer.
    """

    def __init__(
        self,
        size: int,
        cfg: Optional[BaseConfig] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        if size < 1:
            raise ValueError("A layer needs at least one neuron.")

        self.size = int(size)
        self.cfg = cfg if cfg is not None else BaseConfig(seed=None)
        self.allocator = allocator or DEFAULT_ALLOCATOR
        self.connected_to: List[LayerConnection] = []
        self.neurons: List[Neuron] = [
            Neuron(
                squash=self.cfg.squash,
                allocator=self.allocator,
                generator=self.cfg.generator,
                bias=self.cfg.bias,
            )
            for _ in range(self.size)
        ]

    def activate(self, inputs: Optional[Sequence[float]] = None) -> List[float]:
        """
        Activate every neuron, in order.

        Parameters
        ----------
        inputs : sequence of float, optional
            One external value per neuron (input layer). When omitted each
            neuron computes its activation from its connections.

        Returns
        -------
        list of float
            Activations in neuron order.

        Raises
        ------
        InputSizeMismatchError
            If ``inputs`` does not have exactly ``size`` values.
        """
        if inputs is None:
            return [neuron.activate() for neuron in self.neurons]

        if len(inputs) != self.size:
            raise InputSizeMismatchError()

        return [
            neuron.activate(float(value))
            for neuron, value in zip(self.neurons, inputs)
        ]

    def propagate(
        self,
        learning_rate: Optional[float] = None,
        targets: Optional[Sequence[float]] = None,
    ):
        """
        Propagate the error of every neuron, in order.

        Parameters
        ----------
        learning_rate : float, optional
            Step size. Default ``cfg.learning_rate``.
        targets : sequence of float, optional
            One target per neuron (output layer).

        Raises
        ------
        TargetSizeMismatchError
            If ``targets`` does not have exactly ``size`` values.
        """
        if learning_rate is None:
            learning_rate = self.cfg.learning_rate

        if targets is None:
            for neuron in self.neurons:
                neuron.propagate(learning_rate)
            return

        if len(targets) != self.size:
            raise TargetSizeMismatchError()

        for neuron, target in zip(self.neurons, targets):
            neuron.propagate(learning_rate, float(target))

    def project(
        self,
        target,
        kind: Optional[ConnectionType] = None,
        weights: Optional[float] = None,
    ) -> Optional[LayerConnection]:
        """
        Build a connection pattern from this layer to ``target``.

        ``target`` is a Layer or a network assembler exposing ``input_layer``.
        Returns None without creating anything if this layer is already
        connected to the target.
        """
        if not isinstance(target, Layer):
            target = target.input_layer

        if self.connected(target) is not None:
            logger.debug("Layer already connected to target, skipping projection")
            return None

        if weights is None:
            weights = self.cfg.weight

        return LayerConnection(
            self, target, kind=kind, weights=weights, allocator=self.allocator
        )

    def gate(self, connection: LayerConnection, gate_type: GateType):
        """
        Gate the synapses of ``connection`` with the neurons of this layer.

        INPUT: neuron i gates every synapse of the connection ending at the
        i-th neuron of the target layer. OUTPUT: neuron i gates every synapse
        of the connection leaving the i-th neuron of the source layer.
        ONE_TO_ONE: neuron i gates the i-th synapse of the connection.
        """
        gate_type = GateType(gate_type)

        if gate_type is GateType.INPUT:
            if connection.to_layer.size != self.size:
                raise ConnectionSizeMismatchError(
                    "GATER layer and CONNECTION.TO layer must be the same size"
                )
            for gater, neuron in zip(self.neurons, connection.to_layer.neurons):
                for synapse in list(neuron.connections.inputs.values()):
                    if synapse.id in connection.connections:
                        gater.gate(synapse)

        elif gate_type is GateType.OUTPUT:
            if connection.from_layer.size != self.size:
                raise ConnectionSizeMismatchError(
                    "GATER layer and CONNECTION.FROM layer must be the same size"
                )
            for gater, neuron in zip(self.neurons, connection.from_layer.neurons):
                for synapse in list(neuron.connections.projected.values()):
                    if synapse.id in connection.connections:
                        gater.gate(synapse)

        else:
            if connection.size != self.size:
                raise ConnectionSizeMismatchError(
                    "The number of GATER UNITS must be the same as the number "
                    "of CONNECTIONS to gate"
                )
            for gater, synapse in zip(self.neurons, connection.list):
                gater.gate(synapse)

        connection.gated_from.append((self, gate_type))
        logger.debug(
            "Layer of %d neurons gates connection %d (%s)",
            self.size,
            connection.id,
            gate_type.name,
        )

    def connected(self, layer: "Layer") -> Optional[ConnectionType]:
        """Kind of the pattern already projected to ``layer``, or None."""
        for connection in self.connected_to:
            if connection.to_layer is layer:
                return connection.kind
        return None

    def self_connected(self) -> bool:
        return all(neuron.self_connected() for neuron in self.neurons)

    def set(self, squash=None, bias: Optional[float] = None):
        """Assign a squash function and/or a bias to every neuron."""
        if squash is not None:
            squash = Squash.resolve(squash)
        for neuron in self.neurons:
            if squash is not None:
                neuron.squash = squash
            if bias is not None:
                neuron.bias = float(bias)

    def clear(self):
        for neuron in self.neurons:
            neuron.clear()

    def reset(self):
        for neuron in self.neurons:
            neuron.reset()
