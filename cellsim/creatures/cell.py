# cellsim/creatures/cell.py
import pygame

import config
from cellsim.nn import NeuralNetwork


def random_color(rng):
    return tuple(rng.next_int(0, 255) for _ in range(3))


def mutate_color(color, rng, rate=None):
    """Nudges each channel by +/- COLOR_MUTATION_VAL with probability `rate`."""
    rate = config.COLOR_MUTATION_RATE if rate is None else rate
    channels = []
    for channel in color:
        if rng.chance(rate):
            change = config.COLOR_MUTATION_VAL if rng.next_int(0, 2) else -config.COLOR_MUTATION_VAL
            channel = abs(channel + change) % 256
        channels.append(channel)
    return tuple(channels)


def step_axis(position, signal, bound, threshold=config.MOVE_THRESHOLD):
    """
    Moves one step along an axis when |signal| exceeds the threshold.

    Decreasing motion wraps 0 -> bound - 1. Increasing motion only wraps once
    the position has reached `bound` itself, so bound - 1 steps onto bound.
    """
    if abs(signal) <= threshold:
        return position
    if signal < 0:
        return position - 1 if position > 0 else bound - 1
    return position + 1 if position < bound else 0


class Cell:
    def __init__(self, x, y, rng, network=None, color=None, alive=True):
        self.x = x
        self.y = y
        self.hunger = 0  # Ticks since food was last eaten
        self.alive = alive
        self.color = color if color is not None else random_color(rng)
        self.nn = network if network is not None else NeuralNetwork(config.NN_LAYER_SIZES, rng)
        self.nn_inputs = []
        self.nn_outputs = []

    @property
    def position(self):
        return self.x, self.y

    def sense(self, world):
        """Casts the sensor rays into the food index, one input per direction."""
        self.nn_inputs = [
            world.food.cast_ray(self.position, direction, config.SENSOR_RANGE)
            for direction in config.SENSOR_DIRECTIONS
        ]

    def think(self):
        output_tensor = self.nn.evaluate(self.nn_inputs)
        self.nn_outputs = output_tensor.detach().cpu().numpy()

    def act(self, world):
        """Turns the two outputs into [-1, 1] movement signals and moves."""
        x_movement = self.nn_outputs[0] * 2.0 - 1.0
        y_movement = self.nn_outputs[1] * 2.0 - 1.0
        self.x = step_axis(self.x, x_movement, world.columns)
        self.y = step_axis(self.y, y_movement, world.rows)

    def update(self, world):
        self.sense(world)
        self.think()
        self.act(world)

    def is_starving(self):
        return self.hunger > config.MAX_HUNGER

    def inherit_from(self, x, y, rng):
        """Creates an offspring at (x, y) with a mutated copy of this cell's brain."""
        return Cell(
            x,
            y,
            rng,
            network=NeuralNetwork.inherit(self.nn, rng),
            color=mutate_color(self.color, rng),
            alive=True,
        )

    def draw(self, screen, cell_width, cell_height):
        if not self.alive:
            return
        rect = pygame.Rect(int(cell_width * self.x), int(cell_height * self.y), int(cell_width), int(cell_height))
        pygame.draw.rect(screen, self.color, rect)
