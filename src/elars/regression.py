from typing import Tuple

import numpy as np
from sklearn.utils import check_array

from .least_angle import lars_path
from .prediction import predict
from .validation import check_penalties, check_response_length, orient_response


def train(
    X: np.ndarray,
    y: np.ndarray,
    lambda1: float = 0.0,
    lambda2: float = 0.0,
    use_cholesky: bool = False,
    **kwargs,
) -> Tuple[np.ndarray, np.ndarray]:
    """Run a LARS, lasso or elastic net regression.

    Both penalties equal to zero correspond to LARS (and its endpoint, the OLS
    solution), `lambda1 > 0` with `lambda2 == 0` to the lasso and `lambda1 > 0`
    with `lambda2 > 0` to the elastic net.

    Args:
        X (np.ndarray): Matrix of explanatory variables with the observations in the rows.
        y (np.ndarray): Target variable. A single row is reoriented to a column.
        lambda1 (float, optional): L1 penalty. Defaults to 0.
        lambda2 (float, optional): L2 penalty. Defaults to 0.
        use_cholesky (bool, optional): Use the incremental Cholesky factorization instead of
            solving the full Gram system. Defaults to False.
        **kwargs: Passed on to `lars_path`, e.g. `tolerance`, `max_iterations` or `verbose`.

    Raises:
        DimensionMismatchError: If the number of responses differs from the rows of `X`.
        ValueError: If a penalty is negative or not finite.

    Returns:
        Tuple[np.ndarray, np.ndarray]: The coefficient path of shape k x p and the final coefficients.
    """
    check_penalties(lambda1, lambda2)
    X = check_array(X, dtype=np.float64)
    y = orient_response(y)
    check_response_length(X.shape[0], y)

    result = lars_path(
        X,
        y,
        lambda1=lambda1,
        lambda2=lambda2,
        use_cholesky=use_cholesky,
        **kwargs,
    )
    return result.beta_path, result.beta_path[-1].copy()


def lars_regression(
    X: np.ndarray,
    y: np.ndarray,
    test_points: np.ndarray,
    lambda1: float = 0.0,
    lambda2: float = 0.0,
    use_cholesky: bool = False,
) -> np.ndarray:
    """Train on `(X, y)` and predict for the rows of `test_points`.

    Only the predictions of the final model are returned, the path is discarded.

    Raises:
        DimensionMismatchError: If `y` does not match `X` or `test_points` does not have as
            many columns as `X`.

    Returns:
        np.ndarray: The predictions for the test points.
    """
    _, beta = train(X, y, lambda1=lambda1, lambda2=lambda2, use_cholesky=use_cholesky)
    return predict(test_points, beta)
