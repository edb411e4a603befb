import warnings
from typing import Literal, Optional, Tuple

import numba as nb
import numpy as np
from sklearn.exceptions import ConvergenceWarning

from .active_set import ActiveSet
from .base import DirectionSolver
from .cholesky import CholeskyPathUpdater
from .correlation import CorrelationTracker
from .error import DimensionMismatchError, NumericalDegeneracyError
from .gram import GramPathSolver, init_gram, init_y_gram
from .types import PathResult, PathStatus
from .validation import check_response_length, orient_response


@nb.njit()
def entry_step(
    max_correlation: float,
    normalization: float,
    correlations: np.ndarray,
    direction_correlations: np.ndarray,
    threshold: float,
) -> Tuple[float, int]:
    """Step length until the next inactive predictor ties with the active ones.

    Along the equiangular direction the active correlations decrease as
    $C - \\gamma A$ while an inactive correlation moves as $c_j - \\gamma a_j$.
    Both meet in absolute value at
    $$
    \\gamma_j = \\min^+ \\left\\{ \\frac{C - c_j}{A - a_j}, \\frac{C + c_j}{A + a_j} \\right\\}.
    $$

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        max_correlation (float): Common absolute correlation $C$ of the active predictors.
        normalization (float): Normalization $A$ of the equiangular direction.
        correlations (np.ndarray): Correlations $c_j$ of the candidate predictors.
        direction_correlations (np.ndarray): Correlations $a_j$ of the candidates with the direction.
        threshold (float): Candidate step lengths must be strictly larger than this value.

    Returns:
        Tuple[float, int]: The smallest step length and the position of the candidate
            within `correlations`. Ties go to the smallest position. Returns `(inf, -1)`
            if no candidate qualifies.
    """
    gamma = np.inf
    index = -1
    for j in range(correlations.shape[0]):
        c = correlations[j]
        a = direction_correlations[j]
        if normalization != a:
            value = (max_correlation - c) / (normalization - a)
            if value > threshold and value < gamma:
                gamma = value
                index = j
        if normalization != -a:
            value = (max_correlation + c) / (normalization + a)
            if value > threshold and value < gamma:
                gamma = value
                index = j
    return gamma, index


@nb.njit()
def drop_step(
    beta_active: np.ndarray, direction: np.ndarray, threshold: float
) -> Tuple[float, int]:
    """Step length until the first active coefficient crosses zero.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        beta_active (np.ndarray): Coefficients of the active predictors in active-set order.
        direction (np.ndarray): Equiangular direction in active-set order.
        threshold (float): Candidate step lengths must be strictly larger than this value.

    Returns:
        Tuple[float, int]: The smallest step length $-\\beta_j / w_j$ and the active-set
            position of the crossing coefficient. Returns `(inf, -1)` if no coefficient crosses.
    """
    gamma = np.inf
    position = -1
    for k in range(beta_active.shape[0]):
        if direction[k] != 0.0:
            value = -beta_active[k] / direction[k]
            if value > threshold and value < gamma:
                gamma = value
                position = k
    return gamma, position


def _print_message(message: str, level: int, verbose: int) -> None:
    if level <= verbose:
        print("[lars_path]", message)


def _enter_predictors(
    active: ActiveSet,
    solver: DirectionSolver,
    tracker: CorrelationTracker,
    correlations: np.ndarray,
    x_gram: np.ndarray,
    max_active: int,
    next_entry: np.ndarray,
    verbose: int,
) -> None:
    """Add all eligible predictors tied at the maximal correlation.

    Collinear candidates are ignored. As long as the active set is empty and
    candidates remain, the next best predictors are selected.
    """
    while len(active) < max_active:
        entry_correlation, tied = tracker.maximum(correlations, active.eligible)
        next_entry = next_entry[active.eligible[next_entry]]
        candidates = np.union1d(tied, next_entry)
        if candidates.size == 0 or entry_correlation == 0:
            return
        for j in candidates:
            if len(active) >= max_active:
                break
            if correlations[j] == 0:
                continue
            try:
                solver.update_add(x_gram[active.indices, j], x_gram[j, j])
            except NumericalDegeneracyError as error:
                active.ignore(j)
                _print_message(f"Ignoring predictor {j}: {error}", 2, verbose)
                continue
            active.add(j, float(np.sign(correlations[j])))
            _print_message(f"Added predictor {j}, {len(active)} active.", 2, verbose)
        if len(active) > 0:
            return
        next_entry = np.empty(0, dtype=np.int64)


def lars_path(
    X: np.ndarray,
    y: np.ndarray,
    lambda1: float = 0.0,
    lambda2: float = 0.0,
    use_cholesky: bool = False,
    method: Optional[Literal["lar", "lasso"]] = None,
    gram: Optional[np.ndarray] = None,
    tolerance: float = 1e-10,
    max_iterations: Optional[int] = None,
    verbose: int = 0,
) -> PathResult:
    """Trace the LARS, lasso or elastic net coefficient path.

    The objective for `method="lasso"` is
    $$
    \\frac{1}{2} \\lVert y - X\\beta \\rVert_2^2 + \\lambda_1 \\lVert \\beta \\rVert_1
    + \\frac{\\lambda_2}{2} \\lVert \\beta \\rVert_2^2.
    $$
    Starting at $\\beta = 0$, the predictors enter the active set in order of their
    correlation with the residual. Between two breakpoints, the coefficients move
    along the equiangular direction, such that all active predictors keep the same
    absolute correlation $C$, which is the regularization strength $\\lambda$ of the
    current breakpoint. For the lasso, a coefficient that would cross zero leaves the
    active set. If `lambda1 > 0`, the path stops exactly at $C = \\lambda_1$.

    The elastic net is traced as the lasso of the augmented data
    $X^* = (X^T, \\sqrt{\\lambda_2} I)^T$, $y^* = (y^T, 0)^T$, without forming $X^*$.

    The tolerance is relative: predictors whose absolute correlation is within
    `tolerance * C` of the maximum enter together, step lengths below
    `tolerance * C / A` are discarded, and a new column whose residual diagonal term
    in the factorization is below `tolerance` times its squared norm is considered
    collinear and ignored.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector of length n. A single row or column is flattened.
        lambda1 (float, optional): L1 penalty, the target of the path. Defaults to 0.
        lambda2 (float, optional): L2 penalty. Defaults to 0.
        use_cholesky (bool, optional): Maintain an incremental Cholesky factor of the active
            Gram matrix. Otherwise, solve the active Gram system directly. Defaults to False.
        method (Optional[Literal["lar", "lasso"]], optional): Plain least angle regression or
            the lasso modification. `None` selects the lasso iff `lambda1 > 0`. Defaults to None.
        gram (Optional[np.ndarray], optional): Precomputed Gram matrix $X^TX$. Defaults to None.
        tolerance (float, optional): Relative numerical tolerance. Defaults to 1e-10.
        max_iterations (Optional[int], optional): Maximum number of steps. Defaults to `8 * p`.
        verbose (int, optional): Verbosity level. 1 prints a summary, 2 every add / drop event.
            Defaults to 0.

    Raises:
        DimensionMismatchError: If `y` or `gram` do not match the shape of `X`.
        ValueError: If the method is not recognized.

    Returns:
        PathResult: The coefficient path (one row per breakpoint, starting at zero), the
            lambda path, the final active set, the terminal status and the number of steps.
    """
    X = np.ascontiguousarray(X, dtype=np.float64)
    y = np.ascontiguousarray(orient_response(y))
    n_observations, n_features = X.shape
    check_response_length(n_observations, y)

    if method is None:
        method = "lasso" if lambda1 > 0 else "lar"
    if method not in ("lar", "lasso"):
        raise ValueError(f"Did not recognize method {method}. Please provide ['lar', 'lasso'].")
    lasso = method == "lasso"

    if max_iterations is None:
        max_iterations = 8 * max(n_features, 1)
    max_active = n_features if lambda2 > 0 else min(n_observations, n_features)

    if gram is None:
        x_gram = init_gram(X)
    else:
        x_gram = np.asarray(gram, dtype=np.float64)
        if x_gram.shape != (n_features, n_features):
            raise DimensionMismatchError(
                f"Gram matrix of shape {x_gram.shape} does not match "
                f"the {n_features} columns of X."
            )

    tracker = CorrelationTracker(X, lambda2=lambda2, tolerance=tolerance)
    active = ActiveSet(n_features)
    if use_cholesky:
        solver = CholeskyPathUpdater(lambda2=lambda2, tolerance=tolerance)
    else:
        solver = GramPathSolver(lambda2=lambda2, tolerance=tolerance)

    beta = np.zeros(n_features)
    residual = y.copy()
    correlations = init_y_gram(X, y)
    max_correlation, _ = tracker.maximum(correlations, active.eligible)

    beta_path = [beta.copy()]
    lambda_path = [max_correlation]

    status = None
    if max_correlation == 0:
        status = PathStatus.CONVERGED
    elif max_correlation <= lambda1:
        lambda_path[0] = lambda1
        status = PathStatus.LAMBDA1_REACHED

    iteration = 0
    entering = True
    next_entry = np.empty(0, dtype=np.int64)

    while status is None:
        if iteration >= max_iterations:
            status = PathStatus.MAX_ITERATIONS
            warnings.warn(
                f"lars_path stopped after the maximum of {max_iterations} iterations "
                f"at lambda {max_correlation:.6g}. Check for (nearly) collinear predictors.",
                ConvergenceWarning,
                stacklevel=2,
            )
            break

        if entering:
            _enter_predictors(
                active=active,
                solver=solver,
                tracker=tracker,
                correlations=correlations,
                x_gram=x_gram,
                max_active=max_active,
                next_entry=next_entry,
                verbose=verbose,
            )
            if len(active) == 0:
                status = PathStatus.CONVERGED
                break
            max_correlation = min(
                max_correlation, float(np.mean(np.abs(correlations[active.indices])))
            )

        iteration += 1
        indices = active.indices
        signs = active.signs

        unnormalized = solver.solve(signs)
        normalization = 1.0 / np.sqrt(signs @ unnormalized)
        direction = normalization * unnormalized
        direction_output = X[:, indices] @ direction

        # Full step: all active correlations reach zero.
        gamma = max_correlation / normalization
        threshold = tolerance * gamma
        event = "full"

        eligible = active.eligible
        if len(active) < max_active and np.any(eligible):
            candidates = np.flatnonzero(eligible)
            gamma_add, k = entry_step(
                max_correlation,
                normalization,
                correlations[candidates],
                X[:, candidates].T @ direction_output,
                threshold,
            )
            if gamma_add < gamma:
                gamma = gamma_add
                event = "add"
                next_entry = candidates[[k]]

        if lasso:
            gamma_drop, position = drop_step(beta[indices], direction, threshold)
            if gamma_drop < gamma:
                gamma = gamma_drop
                event = "drop"
                leaving = indices[position]

        if lambda1 > 0:
            gamma_lambda = (max_correlation - lambda1) / normalization
            if gamma_lambda <= gamma:
                gamma = gamma_lambda
                event = "lambda1"

        beta[indices] += gamma * direction
        residual -= gamma * direction_output
        if event == "drop":
            beta[leaving] = 0.0
        beta_path.append(beta.copy())

        if event == "drop":
            position = active.remove(leaving)
            solver.update_remove(position)
            active.clear_ignored()
            _print_message(
                f"Dropped predictor {leaving}, {len(active)} active.", 2, verbose
            )

        correlations = tracker.correlations(residual, beta)
        if event == "lambda1":
            max_correlation = lambda1
            status = PathStatus.LAMBDA1_REACHED
        elif event == "full":
            max_correlation = 0.0
            if lambda2 == 0 and len(active) == min(n_observations, n_features):
                status = PathStatus.FULL_SET
            else:
                status = PathStatus.CONVERGED
        elif len(active) > 0:
            max_correlation = min(
                max_correlation, float(np.mean(np.abs(correlations[active.indices])))
            )
        else:
            max_correlation = min(
                max_correlation, tracker.maximum(correlations, active.eligible)[0]
            )
        lambda_path.append(max_correlation)

        if status is None and max_correlation <= tolerance * lambda_path[0]:
            status = PathStatus.CONVERGED
        entering = event == "add"
        if not entering:
            next_entry = np.empty(0, dtype=np.int64)

    _print_message(
        f"Finished after {iteration} steps with status {status.name}, "
        f"{len(active)} active predictors, lambda {lambda_path[-1]:.6g}.",
        1,
        verbose,
    )
    return PathResult(
        beta_path=np.array(beta_path),
        lambda_path=np.array(lambda_path),
        active=active.indices,
        status=status,
        n_iterations=iteration,
    )
