"""Contract violations raised by the Monty Hall game logic and the batch runner."""


class InvalidDoorPosition(ValueError):
    """A door position outside ``{0, 1, 2}`` reached the game logic."""

    def __init__(self, door, message: str | None = None) -> None:
        self.door = door
        super().__init__(message or f"Invalid door position {door!r}, expected one of 0, 1, 2.")


class InvalidTrialCount(ValueError):
    """The batch runner was asked for a non-positive or non-integer number of trials."""

    def __init__(self, n) -> None:
        self.n = n
        super().__init__(f"Invalid trial count {n!r}, expected a positive integer.")
