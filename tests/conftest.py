import numpy as np
import pytest

from cellsim.rng import RandomSource


@pytest.fixture
def rng():
    return RandomSource(1234)


@pytest.fixture
def steer():
    """
    Rewires a network so its moves no longer depend on its inputs.

    Every value is zeroed, then the weights into each output are set so the
    output settles near 0 (direction -1), near 1 (direction +1) or near
    0.40 (direction 0, inside the movement dead zone).
    """
    def _steer(network, x_direction, y_direction):
        network.set_genome(np.zeros(network.calculate_genome_length()))
        last_weights = network.layers[-2].weights
        for column, direction in enumerate((x_direction, y_direction)):
            last_weights.data[:, column] = -10.0 * direction
        return network

    return _steer
