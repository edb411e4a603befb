import copy

from ..base import EstimationMethod
from .elasticnet import ElasticNetPath
from .lars import LarsPath
from .lasso_path import LassoPath

_METHODS = {
    "lars": LarsPath,
    "lasso": LassoPath,
    "elasticnet": ElasticNetPath,
}


def get_estimation_method(method: EstimationMethod | str) -> EstimationMethod:
    """Resolve a method name or copy a method object.

    Strings create the method with its default parameters. An `EstimationMethod`
    object is copied, such that fitting an estimator never alters the object passed
    by the user.

    Raises:
        ValueError: If the method is neither a known name nor an `EstimationMethod`.
    """
    if isinstance(method, str):
        if method not in _METHODS:
            raise ValueError(
                f"Did not recognize method {method}. Please provide {list(_METHODS)}."
            )
        return _METHODS[method]()
    if isinstance(method, EstimationMethod):
        return copy.copy(method)
    raise ValueError("Method not recognized")
