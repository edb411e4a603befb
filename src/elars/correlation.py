from typing import Tuple

import numpy as np


class CorrelationTracker:
    """Correlations of all predictors with the current residual.

    For the elastic net, the path is traced on the augmented problem
    $X^* = (X^T, \\sqrt{\\lambda_2} I)^T$, $y^* = (y^T, 0)^T$, whose correlations are
    $$
    c = X^T (y - X\\beta) - \\lambda_2 \\beta.
    $$
    For $\\lambda_2 = 0$ these are the plain correlations $X^T r$.
    """

    def __init__(self, X: np.ndarray, lambda2: float = 0.0, tolerance: float = 1e-10):
        self.X = X
        self.lambda2 = lambda2
        self.tolerance = tolerance

    def correlations(self, residual: np.ndarray, beta: np.ndarray) -> np.ndarray:
        correlations = self.X.T @ residual
        if self.lambda2 > 0:
            correlations -= self.lambda2 * beta
        return correlations

    def maximum(
        self, correlations: np.ndarray, eligible: np.ndarray
    ) -> Tuple[float, np.ndarray]:
        """Maximum absolute correlation among the eligible predictors.

        All eligible predictors within `tolerance * C` of the maximum $C$ are
        considered tied and returned in ascending order of their index.

        Args:
            correlations (np.ndarray): Current correlations.
            eligible (np.ndarray): Boolean mask of the candidate predictors.

        Returns:
            Tuple[float, np.ndarray]: The maximum $C$ and the tied indices. If no
                predictor is eligible, $C = 0$ and the indices are empty.
        """
        candidates = np.flatnonzero(eligible)
        if candidates.size == 0:
            return 0.0, candidates
        magnitude = np.abs(correlations[candidates])
        max_correlation = float(np.max(magnitude))
        tied = candidates[magnitude >= max_correlation * (1 - self.tolerance)]
        return max_correlation, tied
