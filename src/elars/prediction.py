import numpy as np
from sklearn.utils import check_array

from .validation import check_model_dimension


def predict(T: np.ndarray, beta: np.ndarray) -> np.ndarray:
    """Predict for the observations in the rows of `T`.

    Args:
        T (np.ndarray): Test matrix of shape m x p. Observations are expected as rows,
            no reorientation takes place.
        beta (np.ndarray): Coefficient vector of length p.

    Raises:
        DimensionMismatchError: If `T` does not have `len(beta)` columns.

    Returns:
        np.ndarray: The predictions $T\\beta$ of length m.
    """
    T = check_array(T, dtype=np.float64, ensure_min_samples=0)
    beta = np.asarray(beta, dtype=np.float64)
    check_model_dimension(T.shape[1], beta.shape[0])
    return T @ beta


def predict_path(T: np.ndarray, beta_path: np.ndarray) -> np.ndarray:
    """Predict for every entry of the coefficient path.

    Returns:
        np.ndarray: Predictions of shape m x k for a path with k entries.
    """
    T = check_array(T, dtype=np.float64, ensure_min_samples=0)
    beta_path = np.atleast_2d(np.asarray(beta_path, dtype=np.float64))
    check_model_dimension(T.shape[1], beta_path.shape[1])
    return T @ beta_path.T


def select_beta(
    beta_path: np.ndarray, lambda_path: np.ndarray, lambda1: float
) -> np.ndarray:
    """Select the coefficients for a target penalty from the path.

    Between two breakpoints the lasso and elastic net paths are linear in
    $\\lambda$, hence the coefficients for a penalty between two breakpoints are
    obtained by linear interpolation. Penalties above the first breakpoint give
    the first entry, penalties below the last breakpoint the last entry.

    Args:
        beta_path (np.ndarray): Coefficient path of shape k x p.
        lambda_path (np.ndarray): Non-increasing penalties of the k breakpoints.
        lambda1 (float): Target penalty.

    Returns:
        np.ndarray: Coefficient vector of length p.
    """
    beta_path = np.atleast_2d(np.asarray(beta_path, dtype=np.float64))
    lambda_path = np.asarray(lambda_path, dtype=np.float64)
    if beta_path.shape[0] != lambda_path.shape[0]:
        raise ValueError(
            f"Coefficient path has {beta_path.shape[0]} entries, "
            f"but the lambda path has {lambda_path.shape[0]}."
        )
    if lambda1 >= lambda_path[0]:
        return beta_path[0].copy()
    if lambda1 <= lambda_path[-1]:
        return beta_path[-1].copy()

    # First breakpoint strictly below the target
    upper = int(np.argmax(lambda_path < lambda1))
    lower = upper - 1
    weight = (lambda_path[lower] - lambda1) / (lambda_path[lower] - lambda_path[upper])
    return (1 - weight) * beta_path[lower] + weight * beta_path[upper]


def compute_error(X: np.ndarray, y: np.ndarray, beta: np.ndarray) -> float:
    """Mean squared residual of the coefficients on the data."""
    residuals = np.asarray(y, dtype=np.float64) - predict(X, beta)
    return float(np.mean(residuals**2))
