"""Star Trip: a turn-based space exploration and combat simulation."""

__version__ = "0.1.0"

from .combat import (
    CombatResolver,
    fire,
    torpedo_beam,
)

from .config import GameConfig

from .dispatcher import (
    COMMANDS,
    Status,
    numeric_arguments,
    process_command,
)

from .display import (
    Display,
    TextDisplay,
)

from .entity import (
    # Classes
    Entity,
    EntityKind,
    Ship,
    # Saturating arithmetic
    clamp_byte,
    saturating_add,
    saturating_sub,
)

from .events import (
    GameEvent,
    GameEventType,
)

from .generation import (
    generate_galaxy,
    random_position,
    spawn,
)

from .grid import (
    Galaxy,
    Position,
    adjacent,
    index,
    position_of,
)

from .logbook import Logbook
from .score import score
from .state import GameState

__all__ = [
    "__version__",
    # Combat
    "CombatResolver",
    "fire",
    "torpedo_beam",
    # Config
    "GameConfig",
    # Dispatcher
    "COMMANDS",
    "Status",
    "numeric_arguments",
    "process_command",
    # Display
    "Display",
    "TextDisplay",
    # Entities
    "Entity",
    "EntityKind",
    "Ship",
    "clamp_byte",
    "saturating_add",
    "saturating_sub",
    # Events
    "GameEvent",
    "GameEventType",
    # Generation
    "generate_galaxy",
    "random_position",
    "spawn",
    # Grid
    "Galaxy",
    "Position",
    "adjacent",
    "index",
    "position_of",
    # Logbook, score, state
    "Logbook",
    "score",
    "GameState",
]
