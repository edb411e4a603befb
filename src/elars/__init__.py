from .active_set import ActiveSet
from .cholesky import CholeskyPathUpdater, cholesky_delete, cholesky_insert
from .correlation import CorrelationTracker
from .error import (
    DimensionMismatchError,
    InvariantViolationError,
    NumericalDegeneracyError,
)
from .estimators import LarsRegression, LassoLars
from .gram import GramPathSolver, init_gram, init_y_gram
from .least_angle import lars_path
from .methods import ElasticNetPath, LarsPath, LassoPath
from .prediction import compute_error, predict, predict_path, select_beta
from .regression import lars_regression, train
from .scaler import Scaler
from .types import PathResult, PathStatus

try:
    from importlib.metadata import version

    __version__ = version("elars")
except Exception:
    __version__ = "dev"

__all__ = [
    "ActiveSet",
    "CholeskyPathUpdater",
    "CorrelationTracker",
    "GramPathSolver",
    "DimensionMismatchError",
    "InvariantViolationError",
    "NumericalDegeneracyError",
    "LarsRegression",
    "LassoLars",
    "ElasticNetPath",
    "LarsPath",
    "LassoPath",
    "PathResult",
    "PathStatus",
    "Scaler",
    "cholesky_delete",
    "cholesky_insert",
    "init_gram",
    "init_y_gram",
    "lars_path",
    "lars_regression",
    "train",
    "predict",
    "predict_path",
    "select_beta",
    "compute_error",
]
