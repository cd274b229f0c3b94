from .connection import LayerConnection
from .const import DEFAULT_LEARNING_RATE, WEIGHT_HIGH, WEIGHT_LOW
from .errors import (
    ConnectionSizeMismatchError,
    GraphInvariantError,
    InputSizeMismatchError,
    SynapticError,
    TargetSizeMismatchError,
)
from .hyperparameters import BaseConfig, load_config
from .layer import Layer
from .neuron import Neuron
from .squash import SQUASH, Squash
from .synapse import Synapse
from .types import (
    Connection,
    ConnectionKind,
    ConnectionSets,
    ConnectionType,
    ErrorTerms,
    GateType,
    Trace,
)
from .util import DEFAULT_ALLOCATOR, IdAllocator, config_to_dict, print_config

__all__ = [
    "LayerConnection",
    "DEFAULT_LEARNING_RATE",
    "WEIGHT_HIGH",
    "WEIGHT_LOW",
    "ConnectionSizeMismatchError",
    "GraphInvariantError",
    "InputSizeMismatchError",
    "SynapticError",
    "TargetSizeMismatchError",
    "BaseConfig",
    "load_config",
    "Layer",
    "Neuron",
    "SQUASH",
    "Squash",
    "Synapse",
    "Connection",
    "ConnectionKind",
    "ConnectionSets",
    "ConnectionType",
    "ErrorTerms",
    "GateType",
    "Trace",
    "DEFAULT_ALLOCATOR",
    "IdAllocator",
    "config_to_dict",
    "print_config",
]
