"""
Utility functions for id allocation, random initialization, and configuration.

This module provides the id allocator shared by neurons, synapses and layer
connections, the uniform draw used for every random initial value, and the
helpers that serialize a configuration to YAML.
"""

import dataclasses
from typing import Dict, Optional

import torch
import yaml

from .const import WEIGHT_HIGH, WEIGHT_LOW
from .squash import Squash


class IdAllocator:
    """
    Monotonic id source for neurons, synapses and layer connections.

    Ids start at 1 and are never reused. Each network assembler may own its
    own allocator to keep id namespaces apart; constructors that are not given
    one fall back to ``DEFAULT_ALLOCATOR``.
    """

    def __init__(self):
        self.neurons = 0
        self.synapses = 0
        self.connections = 0

    def next_neuron_id(self) -> int:
        self.neurons += 1
        return self.neurons

    def next_synapse_id(self) -> int:
        self.synapses += 1
        return self.synapses

    def next_connection_id(self) -> int:
        self.connections += 1
        return self.connections

    def quantity(self) -> Dict[str, int]:
        return {"neurons": self.neurons, "connections": self.synapses}


DEFAULT_ALLOCATOR = IdAllocator()


def _uniform(
    generator: Optional[torch.Generator] = None,
    low: float = WEIGHT_LOW,
    high: float = WEIGHT_HIGH,
) -> float:
    """
    Draw one value uniformly from [low, high).

    Uses torch's RNG so that ``torch.manual_seed`` (or a seeded generator)
    makes network construction reproducible.
    """
    u = torch.rand((), generator=generator, dtype=torch.float64).item()
    return low + (high - low) * u


def config_to_dict(cfg) -> dict:
    """Convert a config dataclass to a plain dictionary of YAML-safe values."""
    out = {}
    for f in dataclasses.fields(cfg):
        if not f.repr:
            continue
        value = getattr(cfg, f.name)
        if isinstance(value, Squash):
            value = value.name
        out[f.name] = value
    return out


def print_config(cfg):
    print(yaml.safe_dump(config_to_dict(cfg), sort_keys=False), end="")
