"""Electric fields and current densities derived from a potential

    E = -grad(u)
    J = sigma * E

For a P1 potential and a P0 conductivity, both are constant on each triangle.
"""

import numpy as np

from fakepower.space import Field, P0


def electric_field(potential):
    """Electric field of a potential

    Parameters
    ----------
    potential : Field
        P1 field

    Returns
    -------
    ndarray, [n_triangles, 2], float
    """
    return -potential.gradient()


def current_density(potential, conductivity):
    """Current density driven by a potential

    Parameters
    ----------
    potential : Field
        P1 field
    conductivity : Field or ndarray or float
        piecewise constant conductivity

    Returns
    -------
    ndarray, [n_triangles, 2], float
    """
    if isinstance(conductivity, Field):
        conductivity = conductivity.per_triangle()
    sigma = np.broadcast_to(np.asarray(conductivity, dtype=np.float64), (potential.mesh.n_triangles,))
    return sigma[:, None] * electric_field(potential)


def magnitude(vectors, space=None):
    """Pointwise norm of a piecewise constant vector field

    Parameters
    ----------
    vectors : ndarray, [n_triangles, 2], float
    space : FunctionSpace, optional
        P0 space; if given, the result is wrapped in a Field

    Returns
    -------
    ndarray, [n_triangles], float, or Field
    """
    m = np.linalg.norm(vectors, axis=-1)
    if space is None:
        return m
    if space.kind != P0:
        raise ValueError('Magnitude of a piecewise constant vector field lives in a P0 space')
    return Field(space, m)
