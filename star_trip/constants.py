"""
Game constants for the Star Trip galaxy simulation.

Grid geometry, difficulty, victory threshold, display geometry and the
single-byte display codes used by the scan chart. Values here are defaults;
`GameConfig` may override the tunable ones per game.
"""

# =============================================================================
# GRID GEOMETRY
# =============================================================================

# Number of systems on a side in the galaxy
SYSTEMS = 10

# Number of sectors on a side in a system
SECTORS = 10

# Total number of cells in the flat galaxy array
GALAXY_SIZE = SYSTEMS * SYSTEMS * SECTORS * SECTORS

# Cells in a single system block
SYSTEM_SIZE = SECTORS * SECTORS


# =============================================================================
# GAME BALANCE
# =============================================================================

# Game difficulty (higher is harder)
DIFFICULTY = 100

# Destroyed enemies needed for victory
MISSION = 10

# Probability that a cell is considered for an entity during generation
SPAWN_CHANCE = 1.0 / 5.0

# Inter-system travel costs this many times the intra-system energy
INTER_SYSTEM_COST = 10

# Beam energy delivered per enemy torpedo
ENEMY_TORPEDO_BEAM = 50

# Nominal damage of one player torpedo before the difficulty penalty
TORPEDO_DAMAGE = 100

# Distance below which a movement target counts as reached
ARRIVAL_EPSILON = 1e-2

# Ceiling of every ship stat (unsigned byte)
STAT_MAX = 255

# Player ship at the start of a game
PLAYER_ENERGY = 255
PLAYER_SHIELDS = 255
PLAYER_TORPEDOES = 5
PLAYER_RANGE = 7


# =============================================================================
# DISPLAY GEOMETRY
# =============================================================================

# Width of "terminal" display in tiles
WIDTH = 50

# Height of "terminal" display in tiles
HEIGHT = 25

# Newlines allowed on a single logbook page (fits the display with a header)
LOG_PAGE_LINES = HEIGHT - 4

# Logbook "last entry" before anything has been recorded
NO_ENTRY = b"COMPUTER ERROR: NO ENTRY AVAILABLE"


# =============================================================================
# DISPLAY CODES (code page 437)
# =============================================================================

CODE_PLAYER = 0x01
CODE_PLAYER_DAMAGED = 0x02
CODE_EMPTY = 0xFA

# Player energy above this is drawn with the healthy ship glyph
HEALTHY_ENERGY = 127
