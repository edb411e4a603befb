from typing import Optional

from .elasticnet import ElasticNetPath


class LassoPath(ElasticNetPath):
    """
    Path-based lasso estimation with the LARS algorithm.

    The lasso modification of LARS traces the exact solution path of
    $$
    \\frac{1}{2} \\lVert y - X\\beta \\rVert_2^2 + \\lambda_1 \\lVert \\beta \\rVert_1
    $$
    from $\\beta = 0$ down to `lambda1`. Whenever an active coefficient would change its
    sign, it is set to zero and the predictor leaves the active set. With `lambda1 = 0`
    the path ends in the least squares solution (if it is unique).
    """

    def __init__(
        self,
        lambda1: float = 0.0,
        use_cholesky: bool = True,
        tolerance: float = 1e-10,
        max_iterations: Optional[int] = None,
    ):
        """
        Initializes the lasso method with the specified parameters.

        Args:
            lambda1 (float): L1 penalty at which the path ends. Zero traces the full path. Default is 0.
            use_cholesky (bool): Use the incremental Cholesky factorization. Default is True.
            tolerance (float): Relative numerical tolerance of the path algorithm. Default is 1e-10.
            max_iterations (Optional[int]): Maximum number of steps. Default is None, i.e. 8 times the number of features.
        """
        super().__init__(
            lambda1=lambda1,
            lambda2=0.0,
            use_cholesky=use_cholesky,
            tolerance=tolerance,
            max_iterations=max_iterations,
        )
