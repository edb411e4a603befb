from abc import ABC

from sklearn.utils.validation import check_is_fitted


class ElarsEstimatorMixin(ABC):

    @property
    def is_fitted(self) -> bool:
        """Has the estimator been fitted."""
        return hasattr(self, "coef_path_")

    @property
    def beta(self):
        check_is_fitted(self)
        return self.coef_

    @property
    def beta_path(self):
        check_is_fitted(self)
        return self.coef_path_

    def _print_message(self, message, level=1):
        if level <= self.verbose:
            print(f"[{self.__class__.__name__}]", message)
