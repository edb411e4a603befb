import numba as nb
import numpy as np
from scipy.linalg import LinAlgError, solve

from .base import DirectionSolver
from .error import NumericalDegeneracyError


@nb.njit()
def init_gram(X: np.ndarray) -> np.ndarray:
    """Initialise the Gramian Matrix.

    The Gramian Matrix is defined as
    $$
    G = X^T X
    $$
    where $X$ is the design matrix. The ridge penalty is added by the direction
    solvers on the diagonal of the active block.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        X (np.ndarray): Design matrix $X$

    Returns:
        np.ndarray: Gramian Matrix.
    """
    return X.T @ X


@nb.njit()
def init_y_gram(X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Initialise the y-Gramian.

    The y-Gramian is defined as $$ H = X^T y $$ where $X$ is the design matrix and
    $y$ the response variable, i.e. the correlations at $\\beta = 0$.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        X (np.ndarray): Design matrix $X$
        y (np.ndarray): Response variable $Y$

    Returns:
        np.ndarray: y-Gramian vector.
    """
    return X.T @ y


class GramPathSolver(DirectionSolver):
    """Solve the active Gram system directly instead of through a Cholesky factor.

    The solver keeps the block $X_A^TX_A + \\lambda_2 I$ of the active predictors
    and solves it with a dense symmetric positive definite solve whenever a
    direction is required. Results agree with the `CholeskyPathUpdater` up to
    solver tolerance.
    """

    def __init__(self, lambda2: float = 0.0, tolerance: float = 1e-10):
        super().__init__(lambda2=lambda2, tolerance=tolerance)
        self.gram = np.zeros((0, 0))

    @property
    def size(self) -> int:
        return self.gram.shape[0]

    def update_add(self, gram_column: np.ndarray, squared_norm: float) -> None:
        """Border the active Gram block by one column.

        Collinearity is detected by the Schur complement
        $d - g^T G_A^{-1} g$ of the new column.

        Raises:
            NumericalDegeneracyError: If the Schur complement is not positive.
        """
        gram_column = np.asarray(gram_column, dtype=np.float64)
        k = self.size
        if gram_column.shape[0] != k:
            raise ValueError(f"Expected {k} cross-products, got {gram_column.shape[0]}.")
        diagonal = float(squared_norm) + self.lambda2
        if k > 0:
            schur = diagonal - gram_column @ self.solve(gram_column)
        else:
            schur = diagonal
        if self._is_degenerate(schur, diagonal):
            raise NumericalDegeneracyError(
                f"Schur complement {schur:.3e} of the new column is not positive "
                f"(diagonal {diagonal:.3e})."
            )
        gram = np.empty((k + 1, k + 1))
        gram[:k, :k] = self.gram
        gram[:k, k] = gram_column
        gram[k, :k] = gram_column
        gram[k, k] = diagonal
        self.gram = gram

    def update_remove(self, position: int) -> None:
        if not 0 <= position < self.size:
            raise IndexError(
                f"Position {position} out of range for a Gram block of size {self.size}."
            )
        self.gram = np.delete(np.delete(self.gram, position, axis=0), position, axis=1)

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        try:
            return solve(self.gram, rhs, assume_a="pos", check_finite=False)
        except LinAlgError as error:
            raise NumericalDegeneracyError(
                f"Active Gram matrix is singular: {error}"
            ) from error
