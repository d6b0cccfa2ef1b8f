"""Exception taxonomy for the matching engine.

Only input-shape errors are raised. Missing optional data is never an error:
each scoring factor falls back to a documented neutral credit instead.
"""


class GrantMatchingError(Exception):
    """Base class for matching engine errors."""


class DimensionMismatchError(GrantMatchingError, ValueError):
    """Embedding vectors of different lengths were compared.

    Signals a data-integrity bug upstream (e.g. vectors produced by two
    different embedding models) and is never absorbed by the engine.
    """

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Embedding dimensions differ: {left} != {right}")
