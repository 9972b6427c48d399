# Island & Maze Grid Style Definitions

# Cell States
COLOR_FREE = (235, 235, 235)
COLOR_OCCUPIED = (20, 20, 20)   # Wall / land
COLOR_PATH = (60, 180, 75)      # Solved path

# Lines and Outlines
COLOR_GRID_LINES = (70, 70, 70)
COLOR_EDITOR_HIGHLIGHT = (20, 120, 220)  # Blue outline for the last toggled cell
COLOR_ISOLATED_HIGHLIGHT = (255, 255, 0)   # Yellow outline for isolated islands

# Text
COLOR_TEXT_DEBUG = (90, 90, 90)  # For path step numbers

# Console
ANSI_PATH = "\033[0;32m"
ANSI_RESET = "\033[0m"

# Application
COLOR_BG = (30, 30, 30)
