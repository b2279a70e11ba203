GRID_SIZE = 8
KINDS_COUNT = 6

# Fixed rules of the puzzle; not configurable.
MATCH_LENGTH = 3
AREA_BLAST_RADIUS = 1  # Chebyshev distance around the detonating token

# Redraw budget when populating a cell without completing a run.
MAX_SPAWN_ATTEMPTS = 20

# ============================================================================
# ANIMATION TIMING (seconds)
# ============================================================================
SWAP_DURATION = 0.2
FALL_DURATION = 1 / 15
DISAPPEAR_DURATION = 1 / 6

# ============================================================================
# INPUT
# ============================================================================
# Gesture thresholds as a fraction of the cell size. Release uses the smaller
# one so quick flicks register while held drags need a full cell.
DRAG_THRESHOLD = 1.0
RELEASE_THRESHOLD = 0.25

# Share of the shorter window side the board may consume.
BOARD_FILL_PCT = 0.96
