"""
Global constants for the synaptic engine.

Defaults for online learning and the interval used for every random
initial value (synapse weights and neuron biases).
"""

DEFAULT_LEARNING_RATE = 0.1
WEIGHT_LOW = -1.0
WEIGHT_HIGH = 1.0
DEFAULT_GAIN = 1.0
SELF_CONNECTION_WEIGHT = 1.0
