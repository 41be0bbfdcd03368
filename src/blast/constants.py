# ============================================================================
# BOARD GEOMETRY
# ============================================================================
GRID_ROWS = 8
GRID_COLS = 8
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 10

# ============================================================================
# COLORS
# ============================================================================
COLOR_COUNT = 4
MIN_COLOR_COUNT = 1
MAX_COLOR_COUNT = 6

# Smallest run of same-colored neighbours that counts as a match. Fixed.
MIN_RUN = 2

# ============================================================================
# MATCH TIERS
# ============================================================================
# A component strictly larger than a threshold earns that tier.
THRESHOLD_A = 4
THRESHOLD_B = 7
THRESHOLD_C = 9

# ============================================================================
# PHASE TIMINGS (seconds)
# ============================================================================
REMOVE_DURATION = 0.2
DROP_WAIT_DURATION = 0.3
REFILL_WAIT_DURATION = 0.4
EVALUATE_SETTLE_DURATION = 0.5
RECREATE_WAIT_DURATION = 0.6

# Presentation hints carried on tile events.
DROP_SPEED = 12.0          # cells per second
CREATION_DURATION = 0.25
