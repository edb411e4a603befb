from typing import Optional

import numpy as np

from ..base import EstimationMethod
from ..least_angle import lars_path
from ..types import PathResult
from ..validation import check_penalties


class ElasticNetPath(EstimationMethod):
    """
    Path-based elastic net estimation with the LARS-EN algorithm.

    The elastic net method traces the exact, piecewise linear solution path of
    $$
    \\frac{1}{2} \\lVert y - X\\beta \\rVert_2^2 + \\lambda_1 \\lVert \\beta \\rVert_1
    + \\frac{\\lambda_2}{2} \\lVert \\beta \\rVert_2^2
    $$
    from the fully regularized solution $\\beta = 0$ down to `lambda1`. The path is
    computed as the lasso path of the data augmented by $\\sqrt{\\lambda_2} I$, hence
    with $\\lambda_2 > 0$ all predictors can become active, even if there are more
    predictors than observations.

    The breakpoints of the path are the values of $\\lambda_1$ at which a predictor
    enters or leaves the active set. A coefficient that would cross zero leaves the
    active set.

    We allow to choose whether the direction of the path is computed from an
    incrementally updated Cholesky factor of the active Gram matrix or by solving
    the active Gram system directly. Both give the same path up to solver tolerance.
    """

    def __init__(
        self,
        lambda1: float = 0.0,
        lambda2: float = 1.0,
        use_cholesky: bool = True,
        tolerance: float = 1e-10,
        max_iterations: Optional[int] = None,
    ):
        """
        Initializes the elastic net method with the specified parameters.

        Args:
            lambda1 (float): L1 penalty at which the path ends. Zero traces the full path. Default is 0.
            lambda2 (float): L2 penalty. Default is 1.
            use_cholesky (bool): Use the incremental Cholesky factorization. Default is True.
            tolerance (float): Relative numerical tolerance of the path algorithm. Default is 1e-10.
            max_iterations (Optional[int]): Maximum number of steps. Default is None, i.e. 8 times the number of features.
        """
        super().__init__(_method="lasso")
        self.lambda1 = lambda1
        self.lambda2 = lambda2
        self.use_cholesky = use_cholesky
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def fit_beta_path(self, X: np.ndarray, y: np.ndarray, verbose: int = 0) -> PathResult:
        check_penalties(self.lambda1, self.lambda2)
        return lars_path(
            X,
            y,
            lambda1=self.lambda1,
            lambda2=self.lambda2,
            use_cholesky=self.use_cholesky,
            method=self._method,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
            verbose=verbose,
        )
