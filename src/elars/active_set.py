import numpy as np

from .error import InvariantViolationError


class ActiveSet:
    """Ordered set of the active predictors and their signs.

    The ordering is the insertion order and is identical to the row / column
    ordering of the factor kept by the direction solver. Members are stored in
    plain arrays with an index-to-position map, such that membership tests
    and position lookups are constant time.

    Predictors can additionally be ignored, i.e. excluded from the set of
    candidates without being active, if they turned out to be collinear with
    the active set.
    """

    def __init__(self, n_features: int):
        self.n_features = n_features
        self._indices = np.empty(n_features, dtype=np.int64)
        self._signs = np.empty(n_features)
        self._position = np.full(n_features, -1, dtype=np.int64)
        self._ignored = np.zeros(n_features, dtype=bool)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, j) -> bool:
        return bool(self._position[j] >= 0)

    @property
    def indices(self) -> np.ndarray:
        """Active column indices in active-set order."""
        return self._indices[: self._size].copy()

    @property
    def signs(self) -> np.ndarray:
        """Signs of the active predictors, aligned with `indices`."""
        return self._signs[: self._size].copy()

    @property
    def eligible(self) -> np.ndarray:
        """Boolean mask of the predictors that may still enter."""
        return (self._position < 0) & ~self._ignored

    def add(self, j: int, sign: float) -> int:
        """Append predictor `j` with its sign and return its position."""
        if j in self:
            raise InvariantViolationError(f"Predictor {j} is already active.")
        if sign not in (-1.0, 1.0):
            raise InvariantViolationError(
                f"Sign of predictor {j} must be -1 or 1, got {sign}."
            )
        position = self._size
        self._indices[position] = j
        self._signs[position] = sign
        self._position[j] = position
        self._ignored[j] = False
        self._size += 1
        return position

    def remove(self, j: int) -> int:
        """Remove predictor `j` and return the position it had.

        The relative order of the remaining members is kept, all members
        behind `j` move up by one position.
        """
        if j not in self:
            raise InvariantViolationError(f"Predictor {j} is not active.")
        position = int(self._position[j])
        tail = slice(position + 1, self._size)
        self._indices[position : self._size - 1] = self._indices[tail]
        self._signs[position : self._size - 1] = self._signs[tail]
        self._position[self._indices[position : self._size - 1]] -= 1
        self._position[j] = -1
        self._size -= 1
        return position

    def ignore(self, j: int) -> None:
        if j in self:
            raise InvariantViolationError(f"Cannot ignore the active predictor {j}.")
        self._ignored[j] = True

    def clear_ignored(self) -> None:
        self._ignored[:] = False
