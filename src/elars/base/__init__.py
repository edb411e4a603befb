from .direction import DirectionSolver
from .estimation_method import EstimationMethod
from .estimator import ElarsEstimatorMixin

__all__ = [
    "DirectionSolver",
    "EstimationMethod",
    "ElarsEstimatorMixin",
]
