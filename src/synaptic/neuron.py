"""
Graph neuron with online learning through eligibility traces.

A neuron is a vertex of the network graph. It keeps its activation state, a
bias, a squash function and three disjoint connection sets (inputs, projected,
gated). Learning is local: every activation updates an eligibility trace per
inbound synapse, and an extended eligibility trace per (gated neuron, inbound
synapse) pair, so that connections gated by this neuron can be trained without
unrolling time.

Per time step the caller must activate neurons in feed-forward order and
propagate them in reverse order. The engine does not enforce this ordering;
violating it silently reads stale activations or responsibilities.
"""

from typing import Dict, Optional

import torch

from .const import DEFAULT_LEARNING_RATE, SELF_CONNECTION_WEIGHT
from .errors import GraphInvariantError
from .squash import Squash
from .synapse import Synapse
from .types import Connection, ConnectionKind, ConnectionSets, ErrorTerms, Trace
from .util import DEFAULT_ALLOCATOR, IdAllocator, _uniform


class Neuron:
    """
    Trainable vertex of a gated recurrent network.

    Parameters
    ----------
    squash : Squash or str, optional
        Activation function. Default logistic.
    allocator : IdAllocator, optional
        Id source for this neuron and every synapse it creates.
        Default ``DEFAULT_ALLOCATOR``.
    generator : torch.Generator, optional
        RNG for random weights and biases. Default: global torch RNG.
    bias : float, optional
        Initial bias. Drawn uniformly from [-1, 1) if None.

    Attributes
    ----------
    id : int
        Unique, never reused.
    state, old : float
        Pre-activation state of the current and of the previous step.
    activation, derivative : float
        Squashed state and squash derivative at ``state``.
    bias : float
        Additive bias, adapted by ``propagate``.
    self_connection : Synapse
        Recurrent synapse from this neuron to itself. Weight 0 means inactive.
    connections : ConnectionSets
        Inputs, projected and gated synapses keyed by synapse id.
    neighbors : dict
        Neuron id -> neuron for projected targets and gated neurons.
    error : ErrorTerms
        Responsibilities computed by the last propagation.
    trace : Trace
        Eligibility, extended eligibility and gating influences.
    """

    def __init__(
        self,
        squash=Squash.LOGISTIC,
        allocator: Optional[IdAllocator] = None,
        generator: Optional[torch.Generator] = None,
        bias: Optional[float] = None,
    ):
        self.allocator = allocator or DEFAULT_ALLOCATOR
        self.generator = generator
        self.id = self.allocator.next_neuron_id()

        self.squash = Squash.resolve(squash)
        self.state = 0.0
        self.old = 0.0
        self.activation = 0.0
        self.derivative = 0.0
        self.bias = _uniform(generator) if bias is None else float(bias)

        self.connections = ConnectionSets()
        self.neighbors: Dict[int, "Neuron"] = {}
        self.error = ErrorTerms()
        self.trace = Trace()

        # weight 0.0 -> not self-connected
        self.self_connection = Synapse(
            self, self, 0.0, allocator=self.allocator, generator=generator
        )

    def __repr__(self):
        return (
            f"Neuron(id={self.id}, squash={self.squash.name}, "
            f"activation={self.activation:.4f}, bias={self.bias:.4f})"
        )

    def activate(self, input: Optional[float] = None) -> float:
        """
        Compute this neuron's activation for the current step.

        Parameters
        ----------
        input : float, optional
            External value for an input unit. When given, the activation is
            clamped to it, derivative and bias are zeroed and no traces or
            gains are touched.

        Returns
        -------
        float
            The new activation.
        """
        if input is not None:
            self.activation = float(input)
            self.derivative = 0.0
            self.bias = 0.0
            return self.activation

        self.old = self.state

        self_conn = self.self_connection
        state = self_conn.gain * self_conn.weight * self.state + self.bias
        for synapse in self.connections.inputs.values():
            state += synapse.from_neuron.activation * synapse.weight * synapse.gain
        self.state = state

        self.activation = self.squash.value(state)
        self.derivative = self.squash.derivative(state)

        # Influence of this unit on every neuron it gates, from this step's activations.
        influences = {
            neuron_id: self._influence(self.neighbors[neuron_id])
            for neuron_id in self.trace.extended
        }

        eligibility = self.trace.eligibility
        decay = self_conn.gain * self_conn.weight
        for synapse in self.connections.inputs.values():
            eligibility[synapse.id] = (
                decay * eligibility[synapse.id]
                + synapse.gain * synapse.from_neuron.activation
            )

            for neuron_id, xtrace in self.trace.extended.items():
                if synapse.id not in xtrace:
                    raise GraphInvariantError(
                        f"Neuron {self.id} has no extended trace for synapse "
                        f"{synapse.id} towards neuron {neuron_id}."
                    )
                gated_self = self.neighbors[neuron_id].self_connection
                xtrace[synapse.id] = (
                    gated_self.gain * gated_self.weight * xtrace[synapse.id]
                    + self.derivative * eligibility[synapse.id] * influences[neuron_id]
                )

        # Gated connections see this activation on the next step.
        for synapse in self.connections.gated.values():
            synapse.gain = self.activation

        return self.activation

    def propagate(
        self, learning_rate: float = DEFAULT_LEARNING_RATE, target: Optional[float] = None
    ) -> float:
        """
        Back-propagate the error and adapt inbound weights and bias.

        Output units (``target`` given) take ``target - activation`` as both
        their responsibility and their projected error. Other units gather the
        responsibilities of the neurons they project to and of the neurons they
        gate. Every inbound weight then moves along its eligibility (and, for
        gated neurons, extended eligibility) scaled by the learning rate.

        Parameters
        ----------
        learning_rate : float
            Step size. Default 0.1.
        target : float, optional
            Desired activation for an output unit.

        Returns
        -------
        float
            The updated bias.
        """
        error = self.error

        if target is not None:
            error.responsibility = error.projected = float(target) - self.activation
        else:
            projected_error = 0.0
            for synapse in self.connections.projected.values():
                projected_error += (
                    synapse.to_neuron.error.responsibility * synapse.gain * synapse.weight
                )
            error.projected = self.derivative * projected_error

            gated_error = 0.0
            for neuron_id in self.trace.extended:
                neuron = self.neighbors[neuron_id]
                gated_error += neuron.error.responsibility * self._influence(neuron)
            error.gated = self.derivative * gated_error

            error.responsibility = error.projected + error.gated

        eligibility = self.trace.eligibility
        for synapse in self.connections.inputs.values():
            gradient = error.projected * eligibility[synapse.id]
            for neuron_id, xtrace in self.trace.extended.items():
                neuron = self.neighbors[neuron_id]
                gradient += neuron.error.responsibility * xtrace[synapse.id]
            synapse.weight += learning_rate * gradient

        self.bias += learning_rate * error.responsibility
        return self.bias

    def project(self, neuron: "Neuron", weight: Optional[float] = None) -> Synapse:
        """
        Connect this neuron to ``neuron`` and return the synapse.

        Projecting onto itself activates the self-connection (weight 1 unless
        given). Projecting onto a neuron this one already projects to reuses
        the existing synapse, overwriting its weight if one is given. Otherwise
        a new synapse is created and the target's traces are seeded for it.
        """
        if neuron is self:
            self.self_connection.weight = (
                SELF_CONNECTION_WEIGHT if weight is None else float(weight)
            )
            return self.self_connection

        existing = self._projection_to(neuron)
        if existing is not None:
            if weight is not None:
                existing.weight = float(weight)
            return existing

        synapse = Synapse(
            self, neuron, weight, allocator=self.allocator, generator=self.generator
        )
        self.connections.projected[synapse.id] = synapse
        self.neighbors[neuron.id] = neuron
        neuron._add_input(synapse)
        return synapse

    def gate(self, connection: Synapse):
        """
        Make this neuron the gater of ``connection``.

        From then on every activation of this neuron sets the synapse's gain,
        and the neuron keeps an extended eligibility trace towards the
        synapse's target.
        """
        if connection.gater is not None and connection.gater is not self:
            raise GraphInvariantError(
                f"Synapse {connection.id} is already gated by neuron {connection.gater.id}."
            )

        self.connections.gated[connection.id] = connection

        neuron = connection.to_neuron
        if neuron.id not in self.trace.extended:
            self.neighbors[neuron.id] = neuron
            self.trace.extended[neuron.id] = {
                synapse_id: 0.0 for synapse_id in self.connections.inputs
            }

        influences = self.trace.influences.setdefault(neuron.id, [])
        if connection not in influences:
            influences.append(connection)

        connection.gater = self

    def self_connected(self) -> bool:
        return self.self_connection.weight != 0.0

    def connected_to(self, neuron: "Neuron") -> Optional[Connection]:
        """
        Find a connection linking this neuron and ``neuron``.

        Looks in the inputs, projected and gated sets in that order and only
        reports a synapse that has ``neuron`` as one of its endpoints. For
        ``neuron is self`` the self-connection is reported when active.

        Returns
        -------
        Connection or None
            None when the neurons are not connected.
        """
        if neuron is self:
            if self.self_connected():
                return Connection(ConnectionKind.SELF, self.self_connection)
            return None

        for kind, synapses in self.connections.items():
            for synapse in synapses.values():
                if synapse.to_neuron is neuron or synapse.from_neuron is neuron:
                    return Connection(kind, synapse)

        return None

    def clear(self):
        """Forget the context: zero traces and errors, keep weights and bias."""
        eligibility = self.trace.eligibility
        for synapse_id in eligibility:
            eligibility[synapse_id] = 0.0

        for xtrace in self.trace.extended.values():
            for synapse_id in xtrace:
                xtrace[synapse_id] = 0.0

        self.error.zero()

    def reset(self):
        """Clear, then randomize every connection weight and the bias."""
        self.clear()

        for _, synapses in self.connections.items():
            for synapse in synapses.values():
                synapse.weight = _uniform(self.generator)

        self.bias = _uniform(self.generator)
        self.old = self.state = self.activation = self.derivative = 0.0

    @staticmethod
    def quantity(allocator: Optional[IdAllocator] = None) -> Dict[str, int]:
        """Neurons and synapses created so far by ``allocator``."""
        return (allocator or DEFAULT_ALLOCATOR).quantity()

    def _influence(self, neuron: "Neuron") -> float:
        # If the gated neuron's self-connection is gated by this unit, its old
        # state is part of the influence.
        if neuron.self_connection.gater is self:
            influence = neuron.old
        else:
            influence = 0.0

        for synapse in self.trace.influences.get(neuron.id, ()):
            influence += synapse.weight * synapse.from_neuron.activation

        return influence

    def _projection_to(self, neuron: "Neuron") -> Optional[Synapse]:
        for synapse in self.connections.projected.values():
            if synapse.to_neuron is neuron:
                return synapse
        return None

    def _add_input(self, synapse: Synapse):
        self.connections.inputs[synapse.id] = synapse
        self.trace.eligibility[synapse.id] = 0.0
        for xtrace in self.trace.extended.values():
            xtrace[synapse.id] = 0.0
