from enum import Enum, IntEnum, auto


class DoorLabel(IntEnum):
    """What is hidden behind a door in a game assignment."""

    GOAT = 0
    CAR = 1


class Strategy(Enum):
    """Contestant's policy for the final pick, once the host has opened a goat door."""

    STAY = "stay"  # Keep the initial pick
    SWITCH = "switch"  # Move to the only remaining unopened door


class Outcome(Enum):
    """Result of a final pick."""

    WIN = "WIN"
    LOSE = "LOSE"


class DoorState(IntEnum):
    """State of each door in the observation vector."""

    CLOSED = 0  # Unopened & unchosen
    GOAT = 1  # Opened and reveals a goat
    CAR = 2  # Opened and reveals a car (a win)
    CHOSEN = 3  # Still closed but currently selected by the player


class Phase(Enum):
    """Progress phase of an episode."""

    AWAITING_FIRST_PICK = auto()
    AFTER_REVEAL = auto()
    DONE = auto()
