# cellsim/nn.py
import copy

import numpy as np
import torch
import torch.nn as nn

import config


DTYPE = torch.float64


def sigmoid(x):
    # Mirrored logistic: 1 / (1 + e^x), not 1 / (1 + e^-x).
    return 1.0 / (1.0 + torch.exp(x))


def apply_layer(input_values, weights, nodes):
    """
    Feeds one layer's values into the next.

    The activation is applied after every single input contribution, so each
    output is squashed len(input_values) times.
    """
    output_values = nodes.clone()
    for value, row in zip(input_values, weights):
        output_values = sigmoid(output_values + value * row)
    return output_values


class Layer(nn.Module):
    def __init__(self, nodes, next_nodes, rng):
        super().__init__()
        node_values = rng.next_uniform(*config.BIAS_INIT_RANGE, size=nodes)
        weight_values = rng.next_uniform(*config.WEIGHT_INIT_RANGE, size=(nodes, next_nodes))
        self.nodes = nn.Parameter(torch.from_numpy(node_values).to(DTYPE), requires_grad=False)
        self.weights = nn.Parameter(torch.from_numpy(weight_values).to(DTYPE), requires_grad=False)


def _perturb(values, rate, value_range, rng):
    """Adds a uniform offset to each element with probability `rate`."""
    shape = tuple(values.shape)
    mask = torch.from_numpy(rng.next_random(shape) < rate)
    offsets = torch.from_numpy(rng.next_uniform(*value_range, size=shape)).to(DTYPE)
    return torch.where(mask, values + offsets, values)


class NeuralNetwork(nn.Module):
    """Fixed-topology feed-forward controller. Only scalar values ever change."""

    def __init__(self, layer_sizes, rng):
        super().__init__()
        if len(layer_sizes) < 2:
            raise ValueError(f"Invalid network size: need at least 2 layers, got {list(layer_sizes)}")
        self.layer_sizes = list(layer_sizes)
        self.layers = nn.ModuleList()
        for i, size in enumerate(self.layer_sizes):
            # The output layer keeps its node values but has no outgoing weights
            next_size = self.layer_sizes[i + 1] if i < len(self.layer_sizes) - 1 else 0
            self.layers.append(Layer(size, next_size, rng))

    @torch.no_grad()
    def forward(self, inputs):
        x = torch.as_tensor(inputs, dtype=DTYPE)
        if x.shape != (self.layer_sizes[0],):
            raise ValueError(f"Expected {self.layer_sizes[0]} inputs, got {tuple(x.shape)}")
        for prev_layer, layer in zip(self.layers[:-1], self.layers[1:]):
            x = apply_layer(x, prev_layer.weights, layer.nodes)
        return x

    def evaluate(self, inputs):
        return self(inputs)

    @torch.no_grad()
    def mutate(self, rng, bias_rate=None, weight_rate=None):
        bias_rate = config.BIAS_MUTATION_RATE if bias_rate is None else bias_rate
        weight_rate = config.WEIGHT_MUTATION_RATE if weight_rate is None else weight_rate
        for layer in self.layers:
            layer.nodes.copy_(_perturb(layer.nodes, bias_rate, config.BIAS_MUTATION_RANGE, rng))
            layer.weights.copy_(_perturb(layer.weights, weight_rate, config.WEIGHT_MUTATION_RANGE, rng))

    @classmethod
    def inherit(cls, parent, rng, **mutation_rates):
        """Returns an independent mutated copy of `parent`."""
        child = copy.deepcopy(parent)
        child.mutate(rng, **mutation_rates)
        return child

    def get_genome(self):
        genome = []
        for param in self.parameters():
            genome.append(param.data.detach().cpu().numpy().flatten())
        return np.concatenate(genome)

    def set_genome(self, genome):
        """
        Sets every node value and weight from a 1D genome, in parameter order
        (nodes then weights, layer by layer).
        """
        if not isinstance(genome, np.ndarray):
            genome = np.array(genome, dtype=np.float64)
        if len(genome) != self.calculate_genome_length():
            raise ValueError(f"Genome length {len(genome)} does not match network ({self.calculate_genome_length()})")

        pointer = 0
        with torch.no_grad():
            for param in self.parameters():
                num_elements = param.numel()
                chunk = genome[pointer : pointer + num_elements]
                param.copy_(torch.from_numpy(np.ascontiguousarray(chunk)).reshape(param.shape).to(DTYPE))
                pointer += num_elements

    def calculate_genome_length(self):
        return sum(p.numel() for p in self.parameters())
