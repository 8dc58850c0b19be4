# config.py

# --- Global Simulation Settings ---
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 800
FPS = 10
COLOR_BG = (255, 255, 255)
GRID_LINE_COLOR = (0, 0, 0)
COLUMNS = 32
ROWS = 32

# --- Initial Scatter ---
# One roll per grid cell: below CELL_SPAWN_CHANCE spawns a cell,
# above FOOD_SPAWN_ROLL spawns food instead.
CELL_SPAWN_CHANCE = 0.15
FOOD_SPAWN_ROLL = 0.90

# --- Food Settings ---
FOOD_COLOR = (0, 255, 0)

# --- Cell Settings ---
MAX_HUNGER = 10  # Ticks without food before a cell dies
COLOR_MUTATION_RATE = 0.05  # Per channel
COLOR_MUTATION_VAL = 10

# --- Sensing & Movement ---
SENSOR_RANGE = 9
SENSOR_DIRECTIONS = [
    (1, 0),
    (-1, 0),
    (1, 0),
    (-1, 0),
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
]
MOVE_THRESHOLD = 0.25

# --- Neural Network ---
NN_LAYER_SIZES = [8, 12, 8, 2]
BIAS_INIT_RANGE = (-20.0, 20.0)
WEIGHT_INIT_RANGE = (-2.0, 2.0)
BIAS_MUTATION_RATE = 0.2
WEIGHT_MUTATION_RATE = 0.2
BIAS_MUTATION_RANGE = (-10.0, 10.0)
WEIGHT_MUTATION_RANGE = (-0.5, 0.5)

# --- Logging ---
LOG_INTERVAL = 100  # Ticks between population reports

# --- Graph Settings ---
GRAPH_MAX_POINTS = 500
GRAPH_WIDTH = 250
GRAPH_HEIGHT = 120
GRAPH_X = SCREEN_WIDTH - GRAPH_WIDTH - 10
GRAPH_Y = SCREEN_HEIGHT - GRAPH_HEIGHT - 10
GRAPH_BG_COLOR = (40, 40, 50)
GRAPH_AXIS_COLOR = (150, 150, 150)
GRAPH_CELL_COLOR = (200, 50, 50)
GRAPH_FOOD_COLOR = (100, 220, 100)
