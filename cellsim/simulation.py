# cellsim/simulation.py
import logging

import pygame
import pygame_gui

import config
from cellsim.creatures.cell import Cell
from cellsim.rng import RandomSource
from cellsim.world import World

logger = logging.getLogger(__name__)


def initialize(columns, rows, rng):
    """
    Builds a world by rolling once per grid cell.

    A low roll spawns a cell, a high roll spawns food, so no grid cell starts
    with both.
    """
    world = World(columns, rows)
    for x in range(columns):
        for y in range(rows):
            roll = rng.next_random()
            if roll < config.CELL_SPAWN_CHANCE:
                world.add_cell(Cell(x, y, rng))
            elif roll > config.FOOD_SPAWN_ROLL:
                world.add_food(x, y)
    logger.info("Initialized %dx%d world with %d cells and %d food", columns, rows, len(world.cells), len(world.food))
    return world


def tick(world, rng):
    """
    Advances the world by one step.

    Cells are visited from a snapshot of the population; deaths and births
    are queued and applied after the pass, so newborns wait for the next tick.
    The food index is updated immediately.
    """
    dead_cells = []
    newborns = []

    for i, cell in enumerate(list(world.cells)):
        if not cell.alive:
            continue

        prev_x, prev_y = cell.x, cell.y
        cell.hunger += 1
        cell.update(world)

        if world.food.present_at(cell.position):
            cell.hunger = 0
            world.food.remove_one_at(cell.position)
            newborns.append(cell.inherit_from(prev_x, prev_y, rng))

        if cell.is_starving():
            cell.alive = False
            dead_cells.append(i)
            # Replacement food lands anywhere, not where the cell died
            world.add_food(*world.random_position(rng))

    world.remove_cells(dead_cells)
    # Newborns join last-created first
    world.cells.extend(reversed(newborns))
    logger.debug("Tick: %d births, %d deaths, %d alive", len(newborns), len(dead_cells), len(world.cells))


class Simulation:
    def __init__(self, columns, rows, seed=None):
        self.rng = RandomSource(seed)
        logger.info("Starting simulation with seed %s", self.rng.seed)
        self.world = initialize(columns, rows, self.rng)
        self.tick_counter = 0
        self.population_data = {"cells": [], "food": []}
        self.is_running = False

    def log_population_data(self):
        for key, value in (("cells", len(self.world.cells)), ("food", len(self.world.food))):
            history = self.population_data[key]
            history.append(value)
            if len(history) > config.GRAPH_MAX_POINTS:
                history.pop(0)

    def update(self):
        tick(self.world, self.rng)
        self.tick_counter += 1
        self.log_population_data()
        if self.tick_counter % config.LOG_INTERVAL == 0:
            logger.info("Tick %d: %d cells, %d food", self.tick_counter, len(self.world.cells), len(self.world.food))

    def is_extinct(self):
        return not self.world.cells

    def run_headless(self, ticks):
        """Runs up to `ticks` steps without a display, stopping on extinction."""
        for _ in range(ticks):
            self.update()
            if self.is_extinct():
                logger.info("Population extinct at tick %d", self.tick_counter)
                break
        return self.tick_counter

    def run(self, screen):
        width, height = screen.get_size()
        self.clock = pygame.time.Clock()
        self.target_tick_rate = config.FPS
        self.gui_manager = pygame_gui.UIManager((width, height))
        self.hud_font = pygame.font.SysFont("Arial", 18)
        self.graph_rect = pygame.Rect(config.GRAPH_X, config.GRAPH_Y, config.GRAPH_WIDTH, config.GRAPH_HEIGHT)

        slider_rect = pygame.Rect((10, 10), (200, 20))
        self.tick_rate_slider = pygame_gui.elements.UIHorizontalSlider(
            relative_rect=slider_rect, start_value=self.target_tick_rate,
            value_range=(1, 120), manager=self.gui_manager)
        label_rect = pygame.Rect((220, 10), (150, 20))
        self.tick_rate_label = pygame_gui.elements.UILabel(
            relative_rect=label_rect, text=f"Tick Rate: {self.target_tick_rate}",
            manager=self.gui_manager)

        self.is_running = True
        while self.is_running:
            time_delta = self.clock.tick(self.target_tick_rate) / 1000.0
            self.handle_events()
            if not self.is_running:
                break
            self.gui_manager.update(time_delta)
            self.update()
            self.draw(screen)

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.is_running = False
            self.gui_manager.process_events(event)
            if event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED and event.ui_element == self.tick_rate_slider:
                self.target_tick_rate = int(event.value)
                self.tick_rate_label.set_text(f"Tick Rate: {self.target_tick_rate}")

    def draw_population_graph(self, screen):
        pygame.draw.rect(screen, config.GRAPH_BG_COLOR, self.graph_rect)
        pygame.draw.rect(screen, config.GRAPH_AXIS_COLOR, self.graph_rect, 1)
        peak = max(max(history, default=0) for history in self.population_data.values())
        if peak == 0:
            return
        point_spacing = self.graph_rect.width / (config.GRAPH_MAX_POINTS - 1) if config.GRAPH_MAX_POINTS > 1 else 0
        colors = {"cells": config.GRAPH_CELL_COLOR, "food": config.GRAPH_FOOD_COLOR}
        for key, history in self.population_data.items():
            if len(history) < 2:
                continue
            points = [
                (self.graph_rect.x + i * point_spacing, self.graph_rect.bottom - (value / peak) * self.graph_rect.height)
                for i, value in enumerate(history)
            ]
            pygame.draw.lines(screen, colors[key], False, points, 2)

    def draw(self, screen):
        screen.fill(config.COLOR_BG)
        self.world.draw(screen)
        self.draw_population_graph(screen)
        self.gui_manager.draw_ui(screen)
        hud_text = f"Tick {self.tick_counter}  Cells {len(self.world.cells)}  Food {len(self.world.food)}"
        hud_surface = self.hud_font.render(hud_text, True, config.GRAPH_AXIS_COLOR)
        screen.blit(hud_surface, (10, 35))
        pygame.display.flip()
