from typing import Optional

import torch

from .const import DEFAULT_GAIN
from .util import DEFAULT_ALLOCATOR, IdAllocator, _uniform


class Synapse:
    """
    Directed, weighted edge between two neurons.

    A plain mutable record: neurons read and write its fields, the synapse
    itself has no behavior.

    Parameters
    ----------
    from_neuron : Neuron
        Presynaptic neuron (not owned).
    to_neuron : Neuron
        Postsynaptic neuron (not owned).
    weight : float, optional
        Initial weight. Drawn uniformly from [-1, 1) if None.
    allocator : IdAllocator, optional
        Id source. Default ``DEFAULT_ALLOCATOR``.
    generator : torch.Generator, optional
        RNG used for the random weight.

    Attributes
    ----------
    id : int
        Unique, never reused.
    gain : float
        Multiplier written by the gating neuron each step. Default 1.0.
    gater : Neuron or None
        Neuron gating this synapse; None when ungated.
    """

    __slots__ = ("id", "from_neuron", "to_neuron", "weight", "gain", "gater")

    def __init__(
        self,
        from_neuron,
        to_neuron,
        weight: Optional[float] = None,
        allocator: Optional[IdAllocator] = None,
        generator: Optional[torch.Generator] = None,
    ):
        allocator = allocator or DEFAULT_ALLOCATOR
        self.id = allocator.next_synapse_id()
        self.from_neuron = from_neuron
        self.to_neuron = to_neuron
        self.weight = _uniform(generator) if weight is None else float(weight)
        self.gain = DEFAULT_GAIN
        self.gater = None

    def __repr__(self):
        return (
            f"Synapse(id={self.id}, from={self.from_neuron.id}, "
            f"to={self.to_neuron.id}, weight={self.weight:.4f}, gain={self.gain:.4f})"
        )
