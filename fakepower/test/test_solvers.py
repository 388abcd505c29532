
import numpy as np
import numpy.testing as npt
import pytest
import scipy.sparse

from fakepower.solvers import solve_constrained, solve_cg, SingularSystemError, SolverError


def laplacian_1d(n):
    """Path graph laplacian"""
    main = np.full(n, 2.)
    main[[0, -1]] = 1
    return scipy.sparse.diags([main, -np.ones(n - 1), -np.ones(n - 1)], [0, 1, -1]).tocsr()


def test_constrained_linear():
    A = laplacian_1d(11)
    x = solve_constrained(A, np.zeros(11), [0, 10], [1., 0.])
    npt.assert_allclose(x, np.linspace(1, 0, 11))


def test_constrained_all_fixed():
    A = laplacian_1d(3)
    npt.assert_allclose(solve_constrained(A, np.zeros(3), [0, 1, 2], [1, 2, 3]), [1, 2, 3])


def test_constrained_singular():
    A = scipy.sparse.block_diag([laplacian_1d(3), laplacian_1d(3)]).tocsr()
    with pytest.raises(SingularSystemError):
        solve_constrained(A, np.zeros(6), [0], [1.])


def test_cg():
    A = laplacian_1d(21)
    fixed = [0, 20]
    x0 = np.zeros(21)
    x0[fixed] = [2., 0.]
    rhs = -A.dot(x0)

    def deflate(y):
        y[fixed] = 0

    deflate(rhs)
    x = solve_cg(deflate, A.dot, rhs) + x0
    npt.assert_allclose(x, np.linspace(2, 0, 21), atol=1e-8)


def test_cg_zero_rhs():
    A = laplacian_1d(5)
    npt.assert_array_equal(solve_cg(lambda y: None, A.dot, np.zeros(5)), 0)


def test_cg_not_converged():
    A = laplacian_1d(50)

    def deflate(y):
        y[0] = 0

    rhs = np.ones(50)
    deflate(rhs)
    with pytest.raises(SolverError):
        solve_cg(deflate, A.dot, rhs, max_iter=2)
