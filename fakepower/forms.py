"""Weighted laplacian in variational form

    find u in P1, with u = g on the labeled dirichlet boundaries, such that
    int weight * grad(u) . grad(v) = 0 for all v in P1 vanishing on those boundaries

The weight is a positive piecewise constant field, such as an electric conductivity.
Unlabeled and non-dirichlet boundaries carry the natural, zero normal flux, condition.
"""

import logging
from collections import OrderedDict

import numpy as np
import scipy.sparse
import scipy.sparse.csgraph

from fakepower.space import Field, P1
from fakepower.solvers import solve_constrained, solve_cg, SingularSystemError

logger = logging.getLogger(__name__)


def as_weight(space, weight):
    """Per-triangle values of a weight given as a scalar, array or field"""
    mesh = space.mesh
    if isinstance(weight, Field):
        if weight.mesh is not mesh:
            raise ValueError('Weight is defined on a different mesh')
        w = weight.per_triangle()
    else:
        w = np.broadcast_to(np.asarray(weight, dtype=np.float64), (mesh.n_triangles,))
    if not np.all(w > 0):
        raise ValueError('Weights must be strictly positive')
    return w


def stiffness(space, weight=1.0):
    """Assemble the weighted gradient-gradient bilinear form

    Parameters
    ----------
    space : FunctionSpace
        a P1 space
    weight : float or ndarray or Field
        piecewise constant weight

    Returns
    -------
    sparse matrix, [n_vertices, n_vertices]
        symmetric positive semi-definite
    """
    if space.kind != P1:
        raise ValueError('Stiffness matrix requires a P1 space')
    mesh = space.mesh
    w = as_weight(space, weight)
    G = mesh.basis_gradients
    local = np.einsum('tid,tjd->tij', G, G) * (w * mesh.areas)[:, None, None]

    T = mesh.triangles
    rows = np.repeat(T, 3, axis=1).flatten()
    cols = np.tile(T, (1, 3)).flatten()
    n = space.n_dofs
    # duplicate entries are summed upon conversion
    return scipy.sparse.coo_matrix((local.flatten(), (rows, cols)), shape=(n, n)).tocsr()


class DirichletCondition(object):
    """Prescribed values on labeled boundaries

    Parameters
    ----------
    values : dict of (int, float)
        fixed value per label. Where labels share a vertex, the label listed last wins

    """

    def __init__(self, values):
        self.values = OrderedDict((int(k), float(v)) for k, v in dict(values).items())

    def __repr__(self):
        return 'DirichletCondition({})'.format(dict(self.values))

    @property
    def labels(self):
        return list(self.values)

    def constraints(self, mesh):
        """Constrained vertices and their values

        Returns
        -------
        fixed : ndarray, [n_fixed], int
        values : ndarray, [n_fixed], float

        Raises
        ------
        KeyError
            if a label does not occur on the mesh
        """
        value = np.full(mesh.n_vertices, np.nan)
        for label, v in self.values.items():
            value[mesh.vertices_with_label(label)] = v
        fixed = np.flatnonzero(np.isfinite(value))
        return fixed, value[fixed]


def check_constrained(A, fixed):
    """Verify that every connected set of degrees of freedom contains a constraint

    Raises
    ------
    SingularSystemError
    """
    if len(fixed) == 0:
        raise SingularSystemError('No dirichlet constraints; the potential is only determined up to a constant')
    n_components, labels = scipy.sparse.csgraph.connected_components(A, directed=False)
    anchored = np.zeros(n_components, dtype=bool)
    anchored[labels[fixed]] = True
    if not np.all(anchored):
        raise SingularSystemError(
            '{} of {} connected parts of the mesh carry no dirichlet constraint'.format(
                np.count_nonzero(~anchored), n_components))


def solve(space, weight, dirichlet, method='direct'):
    """Solve the weighted laplace problem

    Parameters
    ----------
    space : FunctionSpace
        P1 space of the unknown
    weight : float or ndarray or Field
        positive piecewise constant weight
    dirichlet : DirichletCondition or dict of (int, float)
        fixed values per boundary label
    method : {'direct', 'cg'}

    Returns
    -------
    Field
        the solution, in the given space

    Raises
    ------
    SingularSystemError
        if the constraints do not determine a unique solution
    """
    if not isinstance(dirichlet, DirichletCondition):
        dirichlet = DirichletCondition(dirichlet)
    mesh = space.mesh
    A = stiffness(space, weight)
    fixed, values = dirichlet.constraints(mesh)
    check_constrained(A, fixed)
    rhs = np.zeros(space.n_dofs)

    if method == 'direct':
        x = solve_constrained(A, rhs, fixed, values)
    elif method == 'cg':
        x0 = np.zeros(space.n_dofs)
        x0[fixed] = values
        lifted = rhs - A.dot(x0)

        def deflate(y):
            y[fixed] = 0

        deflate(lifted)
        x = solve_cg(deflate, A.dot, lifted) + x0
    else:
        raise ValueError('Unknown solution method {}'.format(method))

    logger.debug('solved %s with %d fixed and %d free dofs, range [%g, %g]',
                 dirichlet, len(fixed), space.n_dofs - len(fixed), x.min(), x.max())
    return Field(space, x)
