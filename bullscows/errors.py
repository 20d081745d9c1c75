"""
Error taxonomy shared by the engine, the solver and the drivers.

- ValidationError: bad guess/secret/score input. Drivers reject it and ask again.
- ExhaustedCandidatesError: no candidate left; the feedback upstream was contradictory.
- AlreadySolvedError: the game/solver is finished; a reset is required.
"""


class BullsCowsError(Exception):
    """Base class for every error this package raises on purpose."""


class ValidationError(BullsCowsError, ValueError):
    pass


class ExhaustedCandidatesError(BullsCowsError):
    def __init__(self, message: str = "No candidates left: the feedback given so far is contradictory.") -> None:
        super().__init__(message)


class AlreadySolvedError(BullsCowsError):
    def __init__(self, message: str = "This game has already been solved. Reset it first.") -> None:
        super().__init__(message)
