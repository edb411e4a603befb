from .factory import get_estimation_method
from .elasticnet import ElasticNetPath
from .lars import LarsPath
from .lasso_path import LassoPath

__all__ = [
    "get_estimation_method",
    "ElasticNetPath",
    "LarsPath",
    "LassoPath",
]
