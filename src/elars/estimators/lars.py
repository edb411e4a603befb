import numbers
from typing import Literal, Optional

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin, _fit_context
from sklearn.utils._param_validation import Interval, StrOptions
from sklearn.utils.validation import _num_samples, check_is_fitted, validate_data

from ..base import ElarsEstimatorMixin, EstimationMethod
from ..methods import ElasticNetPath, LassoPath, get_estimation_method
from ..prediction import compute_error, predict, predict_path, select_beta
from ..scaler import Scaler
from ..validation import check_model_dimension, check_response_length, orient_response


class LarsRegression(ElarsEstimatorMixin, RegressorMixin, BaseEstimator):
    "Linear regression fitted along the least angle regression path."

    _parameter_constraints = {
        "method": [EstimationMethod, StrOptions({"lars", "lasso", "elasticnet"})],
        "fit_intercept": [bool],
        "scale_inputs": [bool],
        "verbose": [Interval(numbers.Integral, 0, None, closed="left")],
    }

    def __init__(
        self,
        method: EstimationMethod | Literal["lars", "lasso", "elasticnet"] = "lars",
        fit_intercept: bool = True,
        scale_inputs: bool = False,
        verbose: int = 0,
    ):
        """The linear model for LARS, lasso and elastic net paths.

        The estimator object provides the methods ``estimator.fit(X, y)``, ``estimator.predict(X)``
        and ``estimator.predict_path(X)``. The final coefficients ``coef_`` are the last entry of
        the coefficient path ``coef_path_``.

        Args:
            method (EstimationMethod | str, optional): The estimation method. Can be a string or `EstimationMethod` class. Defaults to "lars".
            fit_intercept (bool, optional): Whether to add an (unpenalized) intercept. The data are centered before tracing the path. Defaults to True.
            scale_inputs (bool, optional): Whether to standardize the columns of $X$ before tracing the path. The coefficients are reported in the original units. Defaults to False.
            verbose (int, optional): Verbosity level. 0 = silent, 1 = summary, 2 = every add / drop event. Defaults to 0.
        """
        self.method = method
        self.fit_intercept = fit_intercept
        self.scale_inputs = scale_inputs
        self.verbose = verbose

    def _prepare_fit(self):
        self._method = get_estimation_method(self.method)
        self._scaler = Scaler(with_mean=self.fit_intercept, to_scale=self.scale_inputs)

    def _validate_test_points(self, X: np.ndarray) -> np.ndarray:
        check_is_fitted(self)
        if np.ndim(X) == 2:
            check_model_dimension(np.shape(X)[1], self.n_features_in_)
        return validate_data(self, X=X, reset=False, dtype=[np.float64, np.float32])

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X: np.ndarray, y: np.ndarray) -> "LarsRegression":
        """Fit the coefficient path.

        Args:
            X (np.ndarray): The design matrix $X$.
            y (np.ndarray): The response vector $y$. A single row is reoriented to a column.

        Raises:
            DimensionMismatchError: If the number of responses differs from the rows of `X`.
        """
        self._prepare_fit()
        y = orient_response(y)
        check_response_length(_num_samples(X), y)
        X, y = validate_data(
            self, X=X, y=y, reset=True, y_numeric=True, dtype=[np.float64, np.float32]
        )

        X_scaled = self._scaler.fit_transform(X)
        self._x_offset = self._scaler.mean_
        self._y_offset = np.mean(y) if self.fit_intercept else 0.0

        self._print_message(
            f"Tracing the {self._method._method} path for {X.shape[0]} observations "
            f"and {X.shape[1]} features.",
            level=1,
        )
        result = self._method.fit_beta_path(
            X_scaled, y - self._y_offset, verbose=self.verbose
        )

        self.coef_path_ = result.beta_path / self._scaler.scale_
        self.intercept_path_ = self._y_offset - self.coef_path_ @ self._x_offset
        self.lambda_path_ = result.lambda_path
        self.active_ = result.active
        self.status_ = result.status
        self.n_iter_ = result.n_iterations

        self.coef_ = self.coef_path_[-1]
        self.intercept_ = float(self.intercept_path_[-1])
        self.training_error_ = compute_error(X, y - self.intercept_, self.coef_)
        self._print_message(
            f"Path with {self.coef_path_.shape[0]} entries, status {self.status_.name}, "
            f"training error {self.training_error_:.6g}.",
            level=1,
        )
        return self

    def coef_at(self, lambda1: float) -> np.ndarray:
        """Coefficients at an arbitrary L1 penalty, interpolated along the path.

        The penalty refers to the (centered and scaled) problem the path was traced
        on, i.e. to the units of `lambda_path_`.

        Args:
            lambda1 (float): The L1 penalty.

        Returns:
            np.ndarray: The coefficients in the original units.
        """
        check_is_fitted(self)
        return select_beta(self.coef_path_, self.lambda_path_, lambda1)

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict using the final coefficients of the path.

        Args:
            X (np.ndarray): The design matrix $X$.

        Raises:
            DimensionMismatchError: If `X` does not have `n_features_in_` columns.

        Returns:
            np.ndarray: The predictions.
        """
        X = self._validate_test_points(X)
        return predict(X, self.coef_) + self.intercept_

    def predict_at(self, X: np.ndarray, lambda1: float) -> np.ndarray:
        """Predict using the coefficients at the L1 penalty `lambda1`."""
        X = self._validate_test_points(X)
        coef = self.coef_at(lambda1)
        return predict(X, coef) + self._y_offset - coef @ self._x_offset

    def predict_path(self, X: np.ndarray) -> np.ndarray:
        """Predict the full regularization path.

        Args:
            X (np.ndarray): The design matrix $X$.

        Returns:
            np.ndarray: The predictions for the full path, one column per path entry.
        """
        X = self._validate_test_points(X)
        return predict_path(X, self.coef_path_) + self.intercept_path_


class LassoLars(LarsRegression):

    _parameter_constraints = {
        "lambda1": [Interval(numbers.Real, 0.0, None, closed="left")],
        "lambda2": [Interval(numbers.Real, 0.0, None, closed="left")],
        "use_cholesky": [bool],
        "fit_intercept": [bool],
        "scale_inputs": [bool],
        "tolerance": [Interval(numbers.Real, 0.0, None, closed="neither")],
        "max_iterations": [Interval(numbers.Integral, 1, None, closed="left"), None],
        "verbose": [Interval(numbers.Integral, 0, None, closed="left")],
    }

    def __init__(
        self,
        lambda1: float = 1.0,
        lambda2: float = 0.0,
        use_cholesky: bool = True,
        fit_intercept: bool = True,
        scale_inputs: bool = False,
        tolerance: float = 1e-10,
        max_iterations: Optional[int] = None,
        verbose: int = 0,
    ):
        """Lasso and elastic net estimator class.

        This class fits the lasso (`lambda2 == 0`) or the elastic net (`lambda2 > 0`) for a
        single L1 penalty by tracing the LARS path down to `lambda1`. The path is kept and
        can be used for predictions at larger penalties.

        Args:
            lambda1 (float, optional): The L1 penalty. Defaults to 1.
            lambda2 (float, optional): The L2 penalty. Defaults to 0.
            use_cholesky (bool, optional): Use the incremental Cholesky factorization instead of solving the full Gram system. Defaults to True.
            fit_intercept (bool, optional): Whether to add an (unpenalized) intercept. Defaults to True.
            scale_inputs (bool, optional): Whether to standardize the columns of $X$. Defaults to False.
            tolerance (float, optional): Relative numerical tolerance of the path algorithm. Defaults to 1e-10.
            max_iterations (Optional[int], optional): Maximum number of steps. Defaults to None, i.e. 8 times the number of features.
            verbose (int, optional): Verbosity level. Defaults to 0.
        """
        self.lambda1 = lambda1
        self.lambda2 = lambda2
        self.use_cholesky = use_cholesky
        self.fit_intercept = fit_intercept
        self.scale_inputs = scale_inputs
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.verbose = verbose

    def _prepare_fit(self):
        if self.lambda2 > 0:
            self._method = ElasticNetPath(
                lambda1=self.lambda1,
                lambda2=self.lambda2,
                use_cholesky=self.use_cholesky,
                tolerance=self.tolerance,
                max_iterations=self.max_iterations,
            )
        else:
            self._method = LassoPath(
                lambda1=self.lambda1,
                use_cholesky=self.use_cholesky,
                tolerance=self.tolerance,
                max_iterations=self.max_iterations,
            )
        self._scaler = Scaler(with_mean=self.fit_intercept, to_scale=self.scale_inputs)
