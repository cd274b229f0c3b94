from typing import Optional

import numpy as np

from synaptic import BaseConfig, ConnectionType, Layer, Neuron

XOR_INPUTS = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
XOR_TARGETS = np.array([[0.0], [1.0], [1.0], [0.0]])


class Perceptron:
    """Minimal feed-forward assembler: input -> hidden -> output, fully connected."""

    def __init__(self, input_size, hidden_size, output_size, cfg: Optional[BaseConfig] = None):
        self.input_layer = Layer(input_size, cfg=cfg)
        self.hidden_layer = Layer(hidden_size, cfg=cfg)
        self.output_layer = Layer(output_size, cfg=cfg)
        self.input_layer.project(self.hidden_layer, ConnectionType.ALL_TO_ALL)
        self.hidden_layer.project(self.output_layer, ConnectionType.ALL_TO_ALL)

    def activate(self, inputs):
        self.input_layer.activate(inputs)
        self.hidden_layer.activate()
        return self.output_layer.activate()

    def propagate(self, learning_rate, targets):
        self.output_layer.propagate(learning_rate, targets)
        self.hidden_layer.propagate(learning_rate)


def mean_squared_error(network, inputs=XOR_INPUTS, targets=XOR_TARGETS) -> float:
    errors = []
    for x, y in zip(inputs, targets):
        output = np.asarray(network.activate(x))
        errors.append(np.mean((y - output) ** 2))
    return float(np.mean(errors))


def train_epoch(network, learning_rate, inputs=XOR_INPUTS, targets=XOR_TARGETS):
    for x, y in zip(inputs, targets):
        network.activate(x)
        network.propagate(learning_rate, y)


def wire(weight_ab: float, bias: float = 0.0):
    """Input neuron ``a`` projecting onto ``b`` with a fixed weight and bias."""
    a = Neuron()
    b = Neuron(bias=bias)
    synapse = a.project(b, weight_ab)
    return a, b, synapse


def logistic(x: float) -> float:
    return float(1.0 / (1.0 + np.exp(-x)))
