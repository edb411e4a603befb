from enum import Enum
from typing import NamedTuple

import numpy as np


class PathStatus(Enum):
    CONVERGED = "The correlations vanished or no candidate predictor remains."
    LAMBDA1_REACHED = "The path has been traced down to the target lambda1."
    FULL_SET = "All min(n, p) predictors are active and the fit is exact."
    MAX_ITERATIONS = "The maximum number of iterations has been reached."


class PathResult(NamedTuple):
    beta_path: np.ndarray
    lambda_path: np.ndarray
    active: np.ndarray
    status: PathStatus
    n_iterations: int
