import numba as nb
import numpy as np
from scipy.linalg import solve_triangular

from .base import DirectionSolver
from .error import NumericalDegeneracyError


@nb.njit()
def cholesky_insert(R: np.ndarray, gram_column: np.ndarray, diagonal: float):
    """Border the upper triangular factor with one new row and column.

    For $R^TR = G$ and a new column with cross-products $g$ and diagonal
    entry $d$, the new factor is
    $$
    \\begin{pmatrix} R & r \\\\ 0 & \\rho \\end{pmatrix},
    \\quad R^T r = g, \\quad \\rho^2 = d - r^Tr.
    $$
    The kernel solves $R^T r = g$ by forward substitution and returns the
    squared residual $\\rho^2$ without taking the square root, such that the
    caller can decide on degeneracy.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        R (np.ndarray): Current upper triangular factor of shape k x k.
        gram_column (np.ndarray): Cross-products of the new column with the active columns.
        diagonal (float): Squared norm of the new column (plus the ridge penalty).

    Returns:
        Tuple[np.ndarray, float]: Bordered factor of shape (k + 1) x (k + 1) with a zero in
            the new diagonal entry and the squared residual $\\rho^2$.
    """
    k = R.shape[0]
    out = np.zeros((k + 1, k + 1))
    r = np.zeros(k)
    for i in range(k):
        acc = gram_column[i]
        for j in range(i):
            acc -= R[j, i] * r[j]
        r[i] = acc / R[i, i]
    squared_residual = diagonal
    for i in range(k):
        squared_residual -= r[i] * r[i]
        out[i, k] = r[i]
        for j in range(i, k):
            out[i, j] = R[i, j]
    return out, squared_residual


@nb.njit()
def cholesky_delete(R: np.ndarray, position: int) -> np.ndarray:
    """Remove one row and column from the Gram matrix behind an upper triangular factor.

    Deleting column `position` of $R$ leaves an upper Hessenberg block below the
    diagonal. A sequence of Givens rotations on the adjacent rows $(i, i + 1)$
    annihilates the subdiagonal, after which the last row is zero and dropped.
    The rotations are orthogonal, hence $R^TR$ changes only by the removed
    row and column. The cost is quadratic in the size of the factor.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        R (np.ndarray): Upper triangular factor of shape k x k.
        position (int): Position of the row / column to remove.

    Returns:
        np.ndarray: Upper triangular factor of shape (k - 1) x (k - 1).
    """
    k = R.shape[0]
    H = np.zeros((k, k - 1))
    for i in range(k):
        c = 0
        for j in range(k):
            if j != position:
                H[i, c] = R[i, j]
                c += 1

    for i in range(position, k - 1):
        a = H[i, i]
        b = H[i + 1, i]
        if b == 0.0:
            continue
        rho = np.hypot(a, b)
        cos = a / rho
        sin = b / rho
        H[i, i] = rho
        H[i + 1, i] = 0.0
        for j in range(i + 1, k - 1):
            upper = H[i, j]
            lower = H[i + 1, j]
            H[i, j] = cos * upper + sin * lower
            H[i + 1, j] = cos * lower - sin * upper

    out = np.zeros((k - 1, k - 1))
    for i in range(k - 1):
        for j in range(i, k - 1):
            out[i, j] = H[i, j]
    return out


class CholeskyPathUpdater(DirectionSolver):
    """Incrementally maintained Cholesky factor of the active Gram matrix.

    Keeps an upper triangular $R$ such that
    $$
    R^TR = X_A^TX_A + \\lambda_2 I,
    $$
    where $A$ is the current active set. Adding a predictor borders $R$ by one
    row and column, removing one re-triangularizes the trailing block with
    Givens rotations. The factor is never recomputed from the Gram matrix.
    """

    def __init__(self, lambda2: float = 0.0, tolerance: float = 1e-10):
        """
        Args:
            lambda2 (float, optional): Ridge penalty added to the diagonal. Defaults to 0.
            tolerance (float, optional): Relative threshold for the residual diagonal term below
                which a new column is considered collinear. Defaults to 1e-10.
        """
        super().__init__(lambda2=lambda2, tolerance=tolerance)
        self.R = np.zeros((0, 0))

    @property
    def size(self) -> int:
        return self.R.shape[0]

    def update_add(self, gram_column: np.ndarray, squared_norm: float) -> None:
        """Add a column to the factor.

        Args:
            gram_column (np.ndarray): Cross-products $X_A^Tx$ of the new column with the active columns.
            squared_norm (float): Squared norm $x^Tx$ of the new column.

        Raises:
            NumericalDegeneracyError: If the residual diagonal term is not positive.
        """
        gram_column = np.ascontiguousarray(gram_column, dtype=np.float64)
        if gram_column.shape[0] != self.size:
            raise ValueError(
                f"Expected {self.size} cross-products, got {gram_column.shape[0]}."
            )
        diagonal = float(squared_norm) + self.lambda2
        R, squared_residual = cholesky_insert(self.R, gram_column, diagonal)
        if self._is_degenerate(squared_residual, diagonal):
            raise NumericalDegeneracyError(
                f"Residual diagonal term {squared_residual:.3e} of the new column is not "
                f"positive (diagonal {diagonal:.3e})."
            )
        R[-1, -1] = np.sqrt(squared_residual)
        self.R = R

    def update_remove(self, position: int) -> None:
        """Remove the column at `position` from the factor."""
        if not 0 <= position < self.size:
            raise IndexError(
                f"Position {position} out of range for a factor of size {self.size}."
            )
        if position == self.size - 1:
            self.R = np.ascontiguousarray(self.R[:-1, :-1])
        else:
            self.R = cholesky_delete(self.R, position)

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        """Solve $R^TRw = b$ by two triangular solves."""
        z = solve_triangular(self.R, rhs, trans="T", lower=False, check_finite=False)
        return solve_triangular(self.R, z, lower=False, check_finite=False)
