# cellsim/world.py
import pygame

import config
from cellsim.food import FoodIndex


class World:
    def __init__(self, columns, rows):
        if columns <= 0 or rows <= 0:
            raise ValueError(f"World needs positive dimensions, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self.cells = []
        self.food = FoodIndex(columns, rows)

    def add_cell(self, cell):
        self.cells.append(cell)

    def add_food(self, x, y):
        self.food.insert((x, y))

    def remove_cells(self, indices):
        """
        Removes cells by their index in the list as it was before any removal.

        Each deletion shifts later cells down by one, so every index is
        compensated by the number of deletions already applied.
        """
        for removed, index in enumerate(sorted(indices)):
            del self.cells[index - removed]

    def random_position(self, rng):
        return rng.next_int(0, self.columns), rng.next_int(0, self.rows)

    def draw(self, screen):
        """Draws cells, food and grid lines scaled to the screen."""
        width, height = screen.get_size()
        cell_width = width / self.columns
        cell_height = height / self.rows
        for cell in self.cells:
            cell.draw(screen, cell_width, cell_height)
        for food_item in self.food:
            food_item.draw(screen, cell_width, cell_height)
        for i in range(self.columns):
            x = int(cell_width * i)
            pygame.draw.line(screen, config.GRID_LINE_COLOR, (x, 0), (x, height))
        for i in range(self.rows):
            y = int(cell_height * i)
            pygame.draw.line(screen, config.GRID_LINE_COLOR, (0, y), (width, y))
