import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin, _fit_context
from sklearn.utils.validation import check_is_fitted, validate_data


class Scaler(TransformerMixin, BaseEstimator):

    _parameter_constraints = {
        "with_mean": [bool],
        "to_scale": [bool, np.ndarray],
    }

    def __init__(
        self,
        with_mean: bool = True,
        to_scale: bool | np.ndarray = True,
    ):
        """The scaler centers and standardizes the columns of a design matrix.

        The least angle regression penalizes all coefficients alike, hence the scale of the
        covariates matters. Columns without variation are left unscaled.

        Args:
            with_mean (bool, optional): Whether to center the columns. Defaults to True.
            to_scale (bool | np.ndarray, optional): The variables to scale.
                `True` implies all variables will be scaled.
                `False` implies no variables will be scaled.
                An `np.ndarray` of type `bool` or `int` implies that the columns `X[:, to_scale]` will be scaled, all other columns will not be scaled.
                Defaults to True.
        """
        self.with_mean = with_mean
        self.to_scale = to_scale

    def _prepare_estimator(self, X: np.ndarray):
        """Add derived attributes to estimator"""
        if isinstance(self.to_scale, np.ndarray):
            self._selection = self.to_scale
        elif self.to_scale:
            self._selection = np.arange(X.shape[1])
        else:
            self._selection = np.array([], dtype=int)

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X: np.ndarray, y: None = None) -> "Scaler":
        """Estimate the column means and standard deviations.

        Args:
            X (np.ndarray): Matrix of covariates X.
            y (None, optional): Not used, present for compatibility with sklearn API. Defaults to None.
        """
        X = validate_data(self, X=X, y=None, reset=True, dtype=[np.float64, np.float32])
        self._prepare_estimator(X)

        if self.with_mean:
            self.mean_ = np.mean(X, axis=0)
        else:
            self.mean_ = np.zeros(X.shape[1])

        self.scale_ = np.ones(X.shape[1])
        std = np.std(X[:, self._selection], axis=0)
        # Constant columns keep their scale
        std[np.isclose(std, 0)] = 1.0
        self.scale_[self._selection] = std
        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Transform X to a centered and scaled matrix.

        Args:
            X (np.ndarray): X matrix for covariates.

        Returns:
            np.ndarray: Scaled X matrix.
        """
        check_is_fitted(self, ["mean_", "scale_"])
        X = validate_data(self, X=X, reset=False, dtype=[np.float64, np.float32])
        return (X - self.mean_) / self.scale_

    def inverse_transform(self, X: np.ndarray) -> np.ndarray:
        """Back-transform a scaled X matrix to the original domain.

        Args:
            X (np.ndarray): Scaled X matrix.

        Returns:
            np.ndarray: Scaled back to the original scale.
        """
        check_is_fitted(self, ["mean_", "scale_"])
        X = validate_data(self, X=X, reset=False, dtype=[np.float64, np.float32])
        return X * self.scale_ + self.mean_
