from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from .synapse import Synapse


class ConnectionKind(Enum):
    """Which of a neuron's connection sets a lookup result came from."""

    SELF = "self_connection"
    INPUTS = "inputs"
    PROJECTED = "projected"
    GATED = "gated"


class ConnectionType(Enum):
    """Connection patterns a layer can build towards another layer."""

    ALL_TO_ALL = "all_to_all"
    ONE_TO_ONE = "one_to_one"
    ALL_TO_ELSE = "all_to_else"


class GateType(Enum):
    """Which side of a layer connection a gating layer controls."""

    INPUT = "input"
    OUTPUT = "output"
    ONE_TO_ONE = "one_to_one"


@dataclass(frozen=True)
class Connection:
    """
    Result of a successful connectivity lookup between two neurons.

    A lookup that finds nothing returns ``None`` instead of an instance, so the
    three outcomes are: ``Connection(SELF, ...)``, ``Connection(kind, ...)``
    for one of the connection sets, and ``None``.

    Attributes
    ----------
    kind : ConnectionKind
        Connection set the synapse was found in.
    synapse : Synapse
        The synapse linking the two neurons.
    """

    kind: ConnectionKind
    synapse: "Synapse"


@dataclass
class ConnectionSets:
    """
    The three disjoint connection sets of a neuron, keyed by synapse id.

    Attributes
    ----------
    inputs : dict
        Synapses ending at the neuron.
    projected : dict
        Synapses starting at the neuron.
    gated : dict
        Synapses whose gain is driven by the neuron's activation.
    """

    inputs: Dict[int, "Synapse"] = field(default_factory=dict)
    projected: Dict[int, "Synapse"] = field(default_factory=dict)
    gated: Dict[int, "Synapse"] = field(default_factory=dict)

    def items(self):
        return (
            (ConnectionKind.INPUTS, self.inputs),
            (ConnectionKind.PROJECTED, self.projected),
            (ConnectionKind.GATED, self.gated),
        )


@dataclass
class ErrorTerms:
    """Error responsibilities computed by the last propagation."""

    responsibility: float = 0.0
    projected: float = 0.0
    gated: float = 0.0

    def zero(self):
        self.responsibility = self.projected = self.gated = 0.0


@dataclass
class Trace:
    """
    Learning traces of a neuron.

    Attributes
    ----------
    eligibility : dict
        Synapse id -> eligibility of that inbound synapse.
    extended : dict
        Gated neuron id -> (inbound synapse id -> extended eligibility).
        One map per neuron this neuron gates at least one connection into.
    influences : dict
        Gated neuron id -> synapses gated by this neuron that feed it, in the
        order they were gated.
    """

    eligibility: Dict[int, float] = field(default_factory=dict)
    extended: Dict[int, Dict[int, float]] = field(default_factory=dict)
    influences: Dict[int, List["Synapse"]] = field(default_factory=dict)
