import math

import numpy as np
import pytest
import torch

from cellsim.nn import NeuralNetwork, sigmoid
from cellsim.rng import RandomSource


def iterated_sigmoid(times, start=0.0):
    value = start
    for _ in range(times):
        value = 1.0 / (1.0 + math.exp(value))
    return value


def test_rejects_topology_with_fewer_than_two_layers(rng):
    with pytest.raises(ValueError):
        NeuralNetwork([8], rng)
    with pytest.raises(ValueError):
        NeuralNetwork([], rng)


def test_layer_shapes_follow_topology(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    shapes = [(tuple(layer.nodes.shape), tuple(layer.weights.shape)) for layer in network.layers]
    assert shapes == [((8,), (8, 12)), ((12,), (12, 8)), ((8,), (8, 2)), ((2,), (2, 0))]
    assert network.calculate_genome_length() == 8 + 96 + 12 + 96 + 8 + 16 + 2


def test_initial_values_within_ranges(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    for layer in network.layers:
        assert torch.all(layer.nodes.abs() <= 20.0)
        assert torch.all(layer.weights.abs() <= 2.0)


def test_same_seed_builds_same_network():
    first = NeuralNetwork([8, 12, 8, 2], RandomSource(7))
    second = NeuralNetwork([8, 12, 8, 2], RandomSource(7))
    assert np.array_equal(first.get_genome(), second.get_genome())


def test_sigmoid_is_mirrored_logistic():
    assert sigmoid(torch.tensor(0.0, dtype=torch.float64)).item() == 0.5
    assert sigmoid(torch.tensor(2.0, dtype=torch.float64)).item() == pytest.approx(1.0 / (1.0 + math.e ** 2))


def test_zero_network_single_contribution_gives_sigmoid_of_zero(rng):
    network = NeuralNetwork([1, 3], rng)
    network.set_genome(np.zeros(network.calculate_genome_length()))
    assert network.evaluate([0.0]).tolist() == [0.5, 0.5, 0.5]


def test_zero_network_applies_activation_per_input(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    network.set_genome(np.zeros(network.calculate_genome_length()))
    # Each layer squashes its outputs once per incoming node
    expected = iterated_sigmoid(8)
    outputs = network.evaluate([0.0] * 8)
    assert outputs.shape == (2,)
    assert outputs.tolist() == pytest.approx([expected, expected])


def test_cascading_activation_differs_from_single_activation(rng):
    network = NeuralNetwork([2, 1], rng)
    w0, w1, bias = 0.7, -1.3, 0.4
    network.set_genome([0.0, 0.0, w0, w1, bias])
    inputs = [1.0, 0.5]

    cascaded = 1.0 / (1.0 + math.exp(1.0 / (1.0 + math.exp(bias + inputs[0] * w0)) + inputs[1] * w1))
    single = 1.0 / (1.0 + math.exp(bias + inputs[0] * w0 + inputs[1] * w1))

    result = network.evaluate(inputs).item()
    assert result == pytest.approx(cascaded)
    assert result != pytest.approx(single)


def test_evaluate_rejects_wrong_input_length(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    with pytest.raises(ValueError):
        network.evaluate([0.0] * 7)


def test_mutate_with_zero_rates_is_bit_exact(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    before = network.get_genome().copy()
    network.mutate(rng, bias_rate=0.0, weight_rate=0.0)
    assert np.array_equal(network.get_genome(), before)


def test_mutate_only_touches_selected_values(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    weights_before = [layer.weights.clone() for layer in network.layers]
    nodes_before = [layer.nodes.clone() for layer in network.layers]

    network.mutate(rng, bias_rate=1.0, weight_rate=0.0)

    for layer, weights, nodes in zip(network.layers, weights_before, nodes_before):
        assert torch.equal(layer.weights, weights)
        assert torch.all((layer.nodes - nodes).abs() <= 10.0)
        assert not torch.equal(layer.nodes, nodes)


def test_mutate_with_default_rates_changes_genome(rng):
    network = NeuralNetwork([8, 12, 8, 2], rng)
    before = network.get_genome().copy()
    network.mutate(rng)
    after = network.get_genome()
    assert after.shape == before.shape
    assert not np.array_equal(after, before)


def test_inherit_copies_without_aliasing(rng):
    parent = NeuralNetwork([8, 12, 8, 2], rng)
    child = NeuralNetwork.inherit(parent, rng, bias_rate=0.0, weight_rate=0.0)
    assert child is not parent
    assert np.array_equal(child.get_genome(), parent.get_genome())

    parent.set_genome(np.zeros(parent.calculate_genome_length()))
    assert np.any(child.get_genome() != 0.0)


def test_set_genome_rejects_wrong_length(rng):
    network = NeuralNetwork([2, 1], rng)
    with pytest.raises(ValueError):
        network.set_genome([0.0, 0.0])
