import pytest

from synaptic import (
    BaseConfig,
    ConnectionSizeMismatchError,
    ConnectionType,
    GateType,
    InputSizeMismatchError,
    Layer,
    LayerConnection,
    Squash,
    TargetSizeMismatchError,
)


class FakeNetwork:
    """Stand-in for a topology assembler exposing its input layer."""

    def __init__(self, size):
        self.input_layer = Layer(size)


def test_activate_with_inputs_is_positional():
    layer = Layer(3)
    activations = layer.activate([0.1, 0.2, 0.3])
    assert activations == [0.1, 0.2, 0.3]
    for neuron, value in zip(layer.neurons, [0.1, 0.2, 0.3]):
        assert neuron.activation == value
        assert neuron.bias == 0.0


def test_activate_without_inputs_uses_connections():
    source = Layer(2)
    target = Layer(2, cfg=BaseConfig(seed=None, bias=0.0, squash="identity"))
    source.project(target, ConnectionType.ONE_TO_ONE, 0.5)
    source.activate([1.0, -2.0])
    assert target.activate() == pytest.approx([0.5, -1.0])


def test_activate_rejects_wrong_input_size():
    layer = Layer(3)
    with pytest.raises(InputSizeMismatchError):
        layer.activate([1.0, 2.0])
    with pytest.raises(ValueError):
        layer.activate([1.0, 2.0, 3.0, 4.0])


def test_propagate_with_targets_is_positional():
    source = Layer(1)
    output = Layer(2)
    source.project(output)
    source.activate([1.0])
    activations = output.activate()

    output.propagate(0.1, [1.0, 0.0])

    assert output.neurons[0].error.responsibility == 1.0 - activations[0]
    assert output.neurons[1].error.responsibility == 0.0 - activations[1]


def test_propagate_rejects_wrong_target_size():
    layer = Layer(2)
    layer.activate([0.0, 1.0])
    with pytest.raises(TargetSizeMismatchError):
        layer.propagate(0.1, [1.0])


def test_propagate_defaults_to_config_learning_rate():
    cfg = BaseConfig(seed=3, learning_rate=0.5, bias=0.0)
    output = Layer(1, cfg=cfg)
    output.activate()
    activation = output.neurons[0].activation
    output.propagate(targets=[1.0])
    assert output.neurons[0].bias == pytest.approx(0.5 * (1.0 - activation))


def test_all_to_all_connects_every_pair():
    source, target = Layer(2), Layer(3)
    connection = source.project(target, ConnectionType.ALL_TO_ALL, 0.25)

    assert isinstance(connection, LayerConnection)
    assert connection.size == 6
    assert all(s.weight == 0.25 for s in connection.list)
    for neuron in target.neurons:
        assert len(neuron.connections.inputs) == 2
    for neuron in source.neurons:
        assert len(neuron.connections.projected) == 3
    assert source.connected(target) is ConnectionType.ALL_TO_ALL


def test_one_to_one_pairs_by_index():
    source, target = Layer(3), Layer(3)
    connection = source.project(target, ConnectionType.ONE_TO_ONE)
    assert connection.size == 3
    for i, synapse in enumerate(connection.list):
        assert synapse.from_neuron is source.neurons[i]
        assert synapse.to_neuron is target.neurons[i]


def test_one_to_one_requires_equal_sizes():
    with pytest.raises(ConnectionSizeMismatchError):
        Layer(2).project(Layer(3), ConnectionType.ONE_TO_ONE)


def test_all_to_else_skips_same_index():
    layer = Layer(3)
    connection = layer.project(layer, ConnectionType.ALL_TO_ELSE)
    assert connection.size == 6
    for neuron in layer.neurons:
        assert not neuron.self_connected()
        assert len(neuron.connections.inputs) == 2


def test_default_self_projection_is_one_to_one_self_connections():
    layer = Layer(3)
    connection = layer.project(layer)
    assert connection.kind is ConnectionType.ONE_TO_ONE
    assert connection.self_connection
    assert layer.self_connected()
    assert [s.weight for s in connection.list] == [1.0, 1.0, 1.0]


def test_project_twice_is_a_noop():
    source, target = Layer(2), Layer(2)
    assert source.project(target) is not None
    assert source.project(target, ConnectionType.ONE_TO_ONE) is None
    assert len(source.connected_to) == 1
    for neuron in target.neurons:
        assert len(neuron.connections.inputs) == 2


def test_project_resolves_network_to_its_input_layer():
    network = FakeNetwork(2)
    source = Layer(2)
    connection = source.project(network)
    assert connection.to_layer is network.input_layer
    assert source.project(network) is None


def test_gate_input_gates_inbound_synapses_per_target_neuron():
    source, target, gater = Layer(2), Layer(3), Layer(3)
    connection = source.project(target)

    gater.gate(connection, GateType.INPUT)

    for g, neuron in zip(gater.neurons, target.neurons):
        assert set(g.connections.gated) == set(neuron.connections.inputs)
        assert all(s.gater is g for s in neuron.connections.inputs.values())
    assert connection.gated_from == [(gater, GateType.INPUT)]


def test_gate_output_gates_outbound_synapses_per_source_neuron():
    source, target, gater = Layer(2), Layer(3), Layer(2)
    connection = source.project(target)

    gater.gate(connection, GateType.OUTPUT)

    for g, neuron in zip(gater.neurons, source.neurons):
        assert set(g.connections.gated) == set(neuron.connections.projected)
        assert len(g.trace.extended) == 3


def test_gate_one_to_one_pairs_gaters_with_synapses():
    source, target, gater = Layer(3), Layer(3), Layer(3)
    connection = source.project(target, ConnectionType.ONE_TO_ONE)

    gater.gate(connection, GateType.ONE_TO_ONE)

    for g, synapse in zip(gater.neurons, connection.list):
        assert synapse.gater is g
        assert list(g.connections.gated.values()) == [synapse]


def test_gate_rejects_size_mismatch():
    source, target = Layer(2), Layer(3)
    connection = source.project(target)
    with pytest.raises(ConnectionSizeMismatchError):
        Layer(2).gate(connection, GateType.INPUT)
    with pytest.raises(ConnectionSizeMismatchError):
        Layer(3).gate(connection, GateType.OUTPUT)
    with pytest.raises(ConnectionSizeMismatchError):
        Layer(2).gate(connection, GateType.ONE_TO_ONE)


def test_set_assigns_squash_and_bias():
    layer = Layer(2)
    layer.set(squash="tanh", bias=0.3)
    assert all(n.squash is Squash.TANH for n in layer.neurons)
    assert all(n.bias == 0.3 for n in layer.neurons)


def test_config_controls_new_neurons():
    layer = Layer(2, cfg=BaseConfig(seed=1, squash="relu", bias=0.25))
    assert all(n.squash is Squash.RELU for n in layer.neurons)
    assert all(n.bias == 0.25 for n in layer.neurons)


def test_seeded_config_reproduces_weights():
    def build():
        cfg = BaseConfig(seed=7)
        source, target = Layer(2, cfg=cfg), Layer(2, cfg=cfg)
        connection = source.project(target)
        return [s.weight for s in connection.list], [n.bias for n in target.neurons]

    assert build() == build()


def test_clear_and_reset_apply_to_every_neuron():
    source, target = Layer(2), Layer(2)
    connection = source.project(target, weights=0.5)
    source.activate([1.0, 1.0])
    target.activate()
    target.propagate(0.1, [1.0, 0.0])

    target.clear()
    assert all(n.error.responsibility == 0.0 for n in target.neurons)
    assert all(
        value == 0.0 for n in target.neurons for value in n.trace.eligibility.values()
    )

    target.reset()
    assert all(n.activation == 0.0 for n in target.neurons)
    assert all(-1.0 <= s.weight < 1.0 for s in connection.list)
