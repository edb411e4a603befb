import numpy as np
import pytest
from sklearn.datasets import load_diabetes
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LassoLars as SklearnLassoLars
from sklearn.linear_model import lars_path as sklearn_lars_path

from elars.error import DimensionMismatchError
from elars.least_angle import drop_step, entry_step, lars_path
from elars.prediction import select_beta
from elars.types import PathStatus


def load_data():
    X, y = load_diabetes(return_X_y=True)
    X /= X.std(axis=0)
    return X, y


def soft_threshold(z, lambda1):
    return np.sign(z) * np.maximum(np.abs(z) - lambda1, 0)


def make_orthogonal(seed=1):
    rng = np.random.default_rng(seed)
    Q, _ = np.linalg.qr(rng.normal(size=(50, 5)))
    y = Q @ np.array([4.0, -3.0, 2.5, -1.0, 0.5]) + 0.1 * rng.normal(size=50)
    return Q, y


def check_kkt(X, y, beta, lambda1, lambda2=0.0):
    correlations = X.T @ (y - X @ beta) - lambda2 * beta
    nonzero = beta != 0
    assert np.allclose(
        correlations[nonzero], lambda1 * np.sign(beta[nonzero]), rtol=1e-6, atol=0
    ), "Active correlations are not equal to the penalty"
    assert np.all(
        np.abs(correlations[~nonzero]) <= lambda1 * (1 + 1e-6)
    ), "Inactive correlations exceed the penalty"


USE_CHOLESKY = [True, False]


@pytest.mark.parametrize("use_cholesky", USE_CHOLESKY, ids=lambda x: f"cholesky_{x}")
def test_least_squares_endpoint(use_cholesky):
    X, y = load_data()
    result = lars_path(X, y, use_cholesky=use_cholesky)
    expected = np.linalg.lstsq(X, y, rcond=None)[0]

    assert result.status == PathStatus.FULL_SET
    assert np.allclose(result.beta_path[-1], expected), "Path does not end in OLS"
    assert np.allclose(result.beta_path[0], 0)
    assert result.lambda_path[-1] == 0
    assert result.beta_path.shape == (result.lambda_path.shape[0], X.shape[1])


@pytest.mark.parametrize("method", ["lar", "lasso"])
@pytest.mark.parametrize("use_cholesky", USE_CHOLESKY, ids=lambda x: f"cholesky_{x}")
def test_lambda_path_non_increasing(method, use_cholesky):
    X, y = load_data()
    result = lars_path(X, y, method=method, use_cholesky=use_cholesky)
    assert np.all(np.diff(result.lambda_path) <= 0), "Lambda path increases"
    assert np.isclose(result.lambda_path[0], np.max(np.abs(X.T @ y)))


@pytest.mark.parametrize("method", ["lar", "lasso"])
def test_path_equal_to_sklearn(method):
    X, y = load_data()
    result = lars_path(X, y, method=method, use_cholesky=True)
    _, _, coefs = sklearn_lars_path(X, y, method=method)

    assert result.beta_path.shape == coefs.T.shape
    assert np.allclose(result.beta_path, coefs.T), "Path differs from sklearn"


def test_orthogonal_design_soft_thresholding():
    X, y = make_orthogonal()
    z = X.T @ y
    result = lars_path(X, y, use_cholesky=True)

    assert np.array_equal(result.active, np.argsort(-np.abs(z))), "Wrong entry order"
    assert np.allclose(result.lambda_path[:-1], np.sort(np.abs(z))[::-1])
    for beta, lambda1 in zip(result.beta_path, result.lambda_path):
        assert np.allclose(beta, soft_threshold(z, lambda1))


@pytest.mark.parametrize("lambda2", [0.0, 0.5, 3.0], ids=lambda x: f"lambda2_{x}")
def test_orthogonal_design_elastic_net(lambda2):
    X, y = make_orthogonal()
    z = X.T @ y
    lambda1 = 0.5 * (np.sort(np.abs(z))[2] + np.sort(np.abs(z))[3])
    result = lars_path(X, y, lambda1=lambda1, lambda2=lambda2)

    assert result.status == PathStatus.LAMBDA1_REACHED
    assert np.allclose(result.beta_path[-1], soft_threshold(z, lambda1) / (1 + lambda2))


def test_tied_predictors_enter_together():
    X = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    y = np.array([1.0, 1.0, 2.0])
    result = lars_path(X, y, use_cholesky=True)

    assert result.n_iterations == 1
    assert result.status == PathStatus.FULL_SET
    assert np.allclose(result.beta_path[-1], [1.0, 1.0])
    assert np.array_equal(result.lambda_path, [3.0, 0.0])


@pytest.mark.parametrize("lambda2", [0.0, 10.0], ids=lambda x: f"lambda2_{x}")
def test_cholesky_and_gram_paths_agree(lambda2):
    X, y = load_data()
    cholesky = lars_path(X, y, lambda2=lambda2, method="lasso", use_cholesky=True)
    direct = lars_path(X, y, lambda2=lambda2, method="lasso", use_cholesky=False)

    assert cholesky.beta_path.shape == direct.beta_path.shape
    assert np.allclose(cholesky.beta_path, direct.beta_path)
    assert np.allclose(cholesky.lambda_path, direct.lambda_path)
    assert np.array_equal(cholesky.active, direct.active)


@pytest.mark.parametrize("fraction", [0.5, 0.1, 0.01], ids=lambda x: f"fraction_{x}")
@pytest.mark.parametrize("lambda2", [0.0, 10.0], ids=lambda x: f"lambda2_{x}")
def test_kkt_conditions(fraction, lambda2):
    X, y = load_data()
    lambda1 = fraction * np.max(np.abs(X.T @ y))
    result = lars_path(X, y, lambda1=lambda1, lambda2=lambda2, use_cholesky=True)

    assert result.status == PathStatus.LAMBDA1_REACHED
    assert result.lambda_path[-1] == lambda1
    check_kkt(X, y, result.beta_path[-1], lambda1, lambda2)


@pytest.mark.parametrize("alpha", [0.1, 1.0, 10.0], ids=lambda x: f"alpha_{x}")
def test_lasso_equal_to_sklearn(alpha):
    X, y = load_data()
    result = lars_path(X, y, lambda1=alpha * X.shape[0], use_cholesky=True)
    sklearn = SklearnLassoLars(alpha=alpha, fit_intercept=False).fit(X, y)

    assert np.allclose(result.beta_path[-1], sklearn.coef_), "Lasso differs from sklearn"


def test_select_beta_matches_direct_solution():
    X, y = load_data()
    path = lars_path(X, y, method="lasso")
    for k in [1, 3, 6]:
        lambda1 = 0.3 * path.lambda_path[k] + 0.7 * path.lambda_path[k + 1]
        direct = lars_path(X, y, lambda1=lambda1)
        interpolated = select_beta(path.beta_path, path.lambda_path, lambda1)
        assert np.allclose(interpolated, direct.beta_path[-1])


@pytest.mark.parametrize("use_cholesky", USE_CHOLESKY, ids=lambda x: f"cholesky_{x}")
def test_collinear_column_is_ignored(use_cholesky):
    X, y = load_data()
    X_dup = np.hstack((X, X[:, [2]]))
    result = lars_path(X_dup, y, use_cholesky=use_cholesky)
    expected = np.linalg.lstsq(X, y, rcond=None)[0]

    beta = result.beta_path[-1]
    assert np.count_nonzero(beta[[2, 10]]) == 1, "Both copies of the column are active"
    assert not (2 in result.active and 10 in result.active)
    assert np.allclose(X_dup @ beta, X @ expected)


@pytest.mark.parametrize("use_cholesky", USE_CHOLESKY, ids=lambda x: f"cholesky_{x}")
def test_duplicate_column_converges_below_full_set(use_cholesky):
    X = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
    y = np.array([1.0, 2.0, 2.0])
    result = lars_path(X, y, use_cholesky=use_cholesky)

    assert result.status == PathStatus.CONVERGED
    assert np.array_equal(result.active, [0])
    assert result.beta_path[-1][1] == 0
    assert np.isclose(result.beta_path[-1][0], 11 / 14)


@pytest.mark.parametrize("use_cholesky", USE_CHOLESKY, ids=lambda x: f"cholesky_{x}")
def test_rank_deficient_design_converges(use_cholesky):
    X, y = load_data()
    X_dup = np.hstack((X, X[:, :3]))
    result = lars_path(X_dup, y, method="lar", use_cholesky=use_cholesky)
    expected = np.linalg.lstsq(X, y, rcond=None)[0]

    assert result.status == PathStatus.CONVERGED
    assert result.active.size == X.shape[1]
    assert np.allclose(X_dup @ result.beta_path[-1], X @ expected)


def test_large_lambda1_gives_zero_path():
    X, y = load_data()
    lambda1 = 2 * np.max(np.abs(X.T @ y))
    result = lars_path(X, y, lambda1=lambda1)

    assert result.status == PathStatus.LAMBDA1_REACHED
    assert result.n_iterations == 0
    assert np.array_equal(result.beta_path, np.zeros((1, X.shape[1])))
    assert np.array_equal(result.lambda_path, [lambda1])


def test_zero_response_converges_immediately():
    X, _ = load_data()
    result = lars_path(X, np.zeros(X.shape[0]))

    assert result.status == PathStatus.CONVERGED
    assert result.beta_path.shape == (1, X.shape[1])
    assert result.active.size == 0


def test_max_iterations_warns():
    X, y = load_data()
    with pytest.warns(ConvergenceWarning):
        result = lars_path(X, y, max_iterations=2)

    assert result.status == PathStatus.MAX_ITERATIONS
    assert result.n_iterations == 2
    assert result.beta_path.shape[0] == 3


def test_more_features_than_observations():
    rng = np.random.default_rng(7)
    X = rng.normal(size=(5, 10))
    y = rng.normal(size=5)
    result = lars_path(X, y, method="lar", use_cholesky=True)

    assert result.status == PathStatus.FULL_SET
    assert result.active.size == 5
    assert np.allclose(X @ result.beta_path[-1], y), "Fit is not exact"


@pytest.mark.parametrize("use_cholesky", USE_CHOLESKY, ids=lambda x: f"cholesky_{x}")
def test_ridge_endpoint_with_more_features_than_observations(use_cholesky):
    rng = np.random.default_rng(7)
    X = rng.normal(size=(5, 10))
    y = rng.normal(size=5)
    result = lars_path(X, y, lambda2=0.5, use_cholesky=use_cholesky)
    expected = np.linalg.solve(X.T @ X + 0.5 * np.eye(10), X.T @ y)

    assert result.status == PathStatus.CONVERGED
    assert result.active.size == 10
    assert np.allclose(result.beta_path[-1], expected)


def test_precomputed_gram():
    X, y = load_data()
    result = lars_path(X, y, lambda1=100.0, gram=X.T @ X)
    expected = lars_path(X, y, lambda1=100.0)
    assert np.allclose(result.beta_path, expected.beta_path)

    with pytest.raises(DimensionMismatchError):
        lars_path(X, y, gram=np.eye(3))


@pytest.mark.parametrize("lambda1", [0.0, 50.0], ids=lambda x: f"lambda1_{x}")
def test_response_orientation(lambda1):
    X, y = load_data()
    result = lars_path(X, y, lambda1=lambda1)
    for y_oriented in (y.reshape(-1, 1), y.reshape(1, -1), y.tolist()):
        oriented = lars_path(X, y_oriented, lambda1=lambda1)
        assert np.array_equal(oriented.beta_path, result.beta_path)
        assert np.array_equal(oriented.lambda_path, result.lambda_path)
        assert oriented.status == result.status


def test_small_design_with_column_response():
    result = lars_path([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]], [[1.0], [1.0], [2.0]])
    assert result.status == PathStatus.FULL_SET
    assert np.allclose(result.beta_path[-1], [1.0, 1.0])


def test_invalid_input():
    X, y = load_data()
    with pytest.raises(DimensionMismatchError):
        lars_path(X, y[:-1])
    with pytest.raises(DimensionMismatchError):
        lars_path(X, y[:-1].reshape(1, -1))
    with pytest.raises(ValueError):
        lars_path(X, np.column_stack((y, y)))
    with pytest.raises(ValueError, match="method"):
        lars_path(X, y, method="forward")


def test_step_kernels():
    gamma, index = entry_step(
        2.0, 1.0, np.array([1.0, -1.5, 0.5]), np.array([0.0, 0.0, 0.5]), 0.0
    )
    assert index == 1
    assert np.isclose(gamma, 0.5)

    gamma, position = drop_step(np.array([1.0, -2.0]), np.array([-4.0, 1.0]), 0.0)
    assert position == 0
    assert gamma == 0.25

    gamma, position = drop_step(np.array([1.0]), np.array([1.0]), 0.0)
    assert position == -1
    assert np.isinf(gamma)
