# cellsim/food.py
from collections import Counter

import pygame

import config


class Food:
    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.color = config.FOOD_COLOR

    def draw(self, screen, cell_width, cell_height):
        """Draws the food marker as a filled grid square."""
        rect = pygame.Rect(int(cell_width * self.x), int(cell_height * self.y), int(cell_width), int(cell_height))
        pygame.draw.rect(screen, self.color, rect)


class FoodIndex:
    """
    Exact-point index of food markers on a bounded grid.

    Several markers may share one position; each is consumed separately.
    """

    def __init__(self, columns, rows):
        self.columns = columns
        self.rows = rows
        self._markers = Counter()

    def __len__(self):
        return sum(self._markers.values())

    def __iter__(self):
        for (x, y), count in self._markers.items():
            for _ in range(count):
                yield Food(x, y)

    def insert(self, point):
        self._markers[tuple(point)] += 1

    def remove_one_at(self, point):
        point = tuple(point)
        if self._markers[point] > 1:
            self._markers[point] -= 1
        else:
            # Absent points are a no-op
            self._markers.pop(point, None)

    def present_at(self, point):
        return self._markers.get(tuple(point), 0) > 0

    def count_at(self, point):
        return self._markers.get(tuple(point), 0)

    def in_bounds(self, x, y):
        return 0 <= x < self.columns and 0 <= y < self.rows

    def cast_ray(self, origin, direction, max_steps=config.SENSOR_RANGE):
        """
        Walks from `origin` along `direction` and scores the nearest food.

        Returns 1/k for food first found k steps away, and 0 when the ray
        leaves the grid or nothing is found within `max_steps`.
        """
        x, y = origin
        dx, dy = direction
        for step in range(1, max_steps + 1):
            x += dx
            y += dy
            if not self.in_bounds(x, y):
                return 0.0
            if self.present_at((x, y)):
                return 1.0 / step
        return 0.0
