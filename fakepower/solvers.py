"""Some sparse linear solvers useful in this context"""

import logging

import numpy as np
import scipy.sparse
import scipy.sparse.linalg

logger = logging.getLogger(__name__)


class SolverError(Exception):
    pass


class SingularSystemError(SolverError):
    pass


def solve_constrained(A, rhs, fixed, values):
    """Solve A x = rhs, for x with prescribed values at a subset of its entries

    The rows of the fixed entries are dropped, and their columns moved to the right hand side

    Parameters
    ----------
    A : sparse matrix, [n, n]
    rhs : ndarray, [n], float
    fixed : ndarray, [n_fixed], int
        indices of the prescribed entries
    values : ndarray, [n_fixed], float

    Returns
    -------
    x : ndarray, [n], float

    Raises
    ------
    SingularSystemError
        if the reduced system has no unique solution
    """
    A = scipy.sparse.csr_matrix(A)
    n = A.shape[0]
    x = np.zeros(n)
    x[fixed] = values
    free = np.ones(n, dtype=bool)
    free[fixed] = False
    if not np.any(free):
        return x

    b = (rhs - A.dot(x))[free]
    A_ff = A[free][:, free].tocsc()
    with np.errstate(all='ignore'):
        try:
            solution = scipy.sparse.linalg.spsolve(A_ff, b)
        except RuntimeError as e:
            raise SingularSystemError('Direct solve failed: {}'.format(e))
    if not np.all(np.isfinite(solution)):
        raise SingularSystemError('Direct solve produced non-finite values; the system is singular')
    x[free] = solution
    return x


def solve_cg(deflate, operator, rhs, x0=None, eps=1e-20, max_iter=10000):
    """
    solve operator(x) = rhs using conjugate gradient iteration
    operator must be symmetric

    The deflate argument allows constraints to be imposed

    Parameters
    ----------
    deflate : callable that will project its argument to a subspace, in place
    operator : callable that will apply the operator to be inverted
    rhs : ndarray, [n], float
    x0 : ndarray, [n], float, optional
    eps : float
        relative tolerance on the squared residual norm
    max_iter : int

    Returns
    -------
    x : ndarray, [n], float
        solution to the constrained system

    Raises
    ------
    SolverError
        if the iteration does not converge within max_iter iterations
    """
    if x0 is None:
        x0 = np.zeros_like(rhs)

    def dot(x, y):
        return np.dot(np.ravel(x), np.ravel(y))

    x = np.array(x0, dtype=np.float64)
    deflate(x)
    r = rhs - operator(x)
    deflate(r)

    d = np.copy(r)
    delta_new = dot(r, r)
    delta_0 = dot(rhs, rhs)
    if delta_0 == 0:
        return x

    for i in range(max_iter):
        if delta_new / delta_0 < eps:
            logger.debug('cg converged in %d iterations', i)
            return x
        q = operator(d)
        deflate(q)

        dq = dot(d, q)
        if dq <= 0:
            raise SingularSystemError('Operator is not positive definite on the constrained subspace')

        alpha = delta_new / dq
        x += alpha * d
        if i % 50 == 49:
            r = rhs - operator(x)
            deflate(r)
        else:
            r -= alpha * q

        delta_old = delta_new
        delta_new = dot(r, r)
        beta = delta_new / delta_old
        d = r + beta * d

    raise SolverError('cg did not converge in {} iterations'.format(max_iter))
