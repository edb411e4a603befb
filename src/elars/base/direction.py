from abc import ABC, abstractmethod

import numpy as np


class DirectionSolver(ABC):
    """Solves the (ridge-augmented) Gram system of the active predictors.

    Implementations keep their internal state aligned with the ordering of
    the `ActiveSet`: position `k` of the solver corresponds to position `k`
    of the active set at all times.
    """

    def __init__(self, lambda2: float = 0.0, tolerance: float = 1e-10):
        self.lambda2 = lambda2
        self.tolerance = tolerance

    @property
    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    def update_add(self, gram_column: np.ndarray, squared_norm: float) -> None:
        pass

    @abstractmethod
    def update_remove(self, position: int) -> None:
        pass

    @abstractmethod
    def solve(self, rhs: np.ndarray) -> np.ndarray:
        pass

    def _is_degenerate(self, residual: float, diagonal: float) -> bool:
        return not residual > self.tolerance * diagonal
