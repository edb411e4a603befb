import numbers

import numpy as np

from .error import DimensionMismatchError


def orient_response(y) -> np.ndarray:
    """Bring the response variable into the shape of a single column.

    A response given as a single row `1 x n` is transposed, a single column
    `n x 1` is flattened.

    Args:
        y (array-like): The response variable.

    Raises:
        ValueError: If `y` has more than one row and more than one column.

    Returns:
        np.ndarray: The response as a 1-dimensional `float64` array.
    """
    y = np.asarray(y, dtype=np.float64)
    if y.ndim == 0:
        return y.reshape(1)
    if y.ndim == 2:
        if y.shape[0] == 1:
            y = y.T
        if y.shape[1] != 1:
            raise ValueError(
                "Only one column or row allowed in the response. "
                f"Got a response of shape {y.shape}."
            )
        return y[:, 0]
    if y.ndim > 2:
        raise ValueError(
            f"The response must be a vector. Got {y.ndim} dimensions instead."
        )
    return y


def check_response_length(n_rows: int, y: np.ndarray) -> None:
    """Validates that there is one response for each row of the design matrix.

    Args:
        n_rows (int): Number of rows of the design matrix $X$.
        y (np.ndarray): The (oriented) response variable.

    Raises:
        DimensionMismatchError: If `len(y) != n_rows`.
    """
    if y.shape[0] != n_rows:
        raise DimensionMismatchError(
            f"Number of responses ({y.shape[0]}) must be equal to "
            f"number of rows of X ({n_rows})."
        )


def check_model_dimension(n_columns: int, n_features: int) -> None:
    """Validates that a test matrix has as many columns as the model has coefficients.

    Args:
        n_columns (int): Number of columns of the test matrix.
        n_features (int): Dimensionality of the model.

    Raises:
        DimensionMismatchError: If the two dimensions differ.
    """
    if n_columns != n_features:
        raise DimensionMismatchError(
            f"Dimensionality of test set ({n_columns}) is not equal to "
            f"the dimensionality of the model ({n_features})."
        )


def check_penalties(lambda1: float, lambda2: float) -> None:
    for name, value in (("lambda1", lambda1), ("lambda2", lambda2)):
        if not isinstance(value, numbers.Real) or not np.isfinite(value):
            raise ValueError(f"{name} must be a finite real number. Got {value}.")
        if value < 0:
            raise ValueError(f"{name} must be non-negative. Got {value}.")
