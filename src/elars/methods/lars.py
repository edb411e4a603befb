from typing import Optional

from .elasticnet import ElasticNetPath


class LarsPath(ElasticNetPath):
    """Plain least angle regression. Predictors only enter, they never leave the active set."""

    def __init__(
        self,
        use_cholesky: bool = True,
        tolerance: float = 1e-10,
        max_iterations: Optional[int] = None,
    ):
        super().__init__(
            lambda1=0.0,
            lambda2=0.0,
            use_cholesky=use_cholesky,
            tolerance=tolerance,
            max_iterations=max_iterations,
        )
        self._method = "lar"
