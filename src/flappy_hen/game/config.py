# --- Display ---
FIELD_WIDTH = 400
FIELD_HEIGHT = 600
FPS = 60

# --- Hen (falling entity) ---
ENTITY_X = 60               # hen's fixed x (world scrolls left)
ENTITY_SIZE = 30
START_Y = FIELD_HEIGHT / 2 - ENTITY_SIZE / 2

# --- Physics (per tick, one tick per frame) ---
GRAVITY = 0.4               # added to velocity every tick
JUMP_IMPULSE = 7.0          # a jump SETS velocity to -JUMP_IMPULSE

# --- Trees (obstacles) ---
OBSTACLE_WIDTH = 60
GAP_HEIGHT = 160
SCROLL_SPEED = 2.0          # px per tick
OBSTACLE_SPACING = 200      # distance between the two active trees
FIRST_OBSTACLE_X = FIELD_WIDTH + 100
GAP_MARGIN_TOP = 60
GAP_MARGIN_BOTTOM = 60
SEED_DEFAULT = None         # None -> random layout every launch

# --- Logging ---
DEBUG_TICK_LOGS = False     # print the session state twice per second

# --- Restart button (centered on the field) ---
BUTTON_W = 160
BUTTON_H = 48

# --- Colors (RGB) ---
COLOR_SKY = (191, 219, 254)
COLOR_FG = (30, 58, 138)
COLOR_HEN = (250, 204, 21)
COLOR_HEN_DEAD = (202, 138, 4)
COLOR_TRUNK = (120, 53, 15)
COLOR_LEAVES = (22, 163, 74)
COLOR_OVERLAY = (0, 0, 0, 140)
COLOR_BUTTON = (250, 204, 21)
COLOR_BUTTON_TXT = (113, 63, 18)
