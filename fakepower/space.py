"""Finite element spaces on a triangle mesh

Two spaces are supported; piecewise linear fields with a degree of freedom per vertex (P1),
and piecewise constant fields with a degree of freedom per triangle (P0).
"""

import numpy as np

P0 = 'P0'
P1 = 'P1'


class FunctionSpace(object):
    """Set of basis functions over a mesh

    Parameters
    ----------
    mesh : Mesh
    kind : {'P0', 'P1'}
    """

    def __init__(self, mesh, kind=P1):
        if kind not in (P0, P1):
            raise ValueError('Unsupported element kind {}; expected P0 or P1'.format(kind))
        self.mesh = mesh
        self.kind = kind

    def __repr__(self):
        return 'FunctionSpace({}, {} dofs)'.format(self.kind, self.n_dofs)

    def __eq__(self, other):
        return isinstance(other, FunctionSpace) and self.mesh is other.mesh and self.kind == other.kind

    def __ne__(self, other):
        return not self == other

    __hash__ = object.__hash__

    @property
    def n_dofs(self):
        return self.mesh.n_vertices if self.kind == P1 else self.mesh.n_triangles

    @property
    def points(self):
        """Position associated with each degree of freedom"""
        return self.mesh.vertices if self.kind == P1 else self.mesh.centroids

    def field(self, values=None):
        if values is None:
            values = np.zeros(self.n_dofs)
        return Field(self, values)

    def constant(self, value):
        return Field(self, np.full(self.n_dofs, float(value)))

    def interpolate(self, function):
        """Field taking the values of a function of (x, y) at the degrees of freedom"""
        x, y = self.points.T
        values = np.broadcast_to(np.asarray(function(x, y), dtype=np.float64), (self.n_dofs,))
        return Field(self, values.copy())

    def random(self, rng=None, low=0.1, high=1.0):
        """Field with independent uniformly distributed values at each degree of freedom

        Parameters
        ----------
        rng : numpy.random.Generator or int, optional
        low : float
        high : float
        """
        rng = np.random.default_rng(rng)
        return Field(self, rng.uniform(low, high, self.n_dofs))


class Field(object):
    """Coefficient vector over a function space

    Parameters
    ----------
    space : FunctionSpace
    values : ndarray, [n_dofs], float
    """

    def __init__(self, space, values):
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (space.n_dofs,):
            raise ValueError('Expected {} coefficients for {}, got shape {}'.format(space.n_dofs, space, values.shape))
        self.space = space
        self.values = values

    def __repr__(self):
        return 'Field({}, range=[{:.6g}, {:.6g}])'.format(self.space.kind, self.values.min(), self.values.max())

    @property
    def mesh(self):
        return self.space.mesh

    def per_triangle(self):
        """Value on each triangle; the mean over its corners for a P1 field"""
        if self.space.kind == P0:
            return self.values
        return self.values[self.mesh.triangles].mean(axis=1)

    def gradient(self):
        """Gradient of a P1 field, which is constant on each triangle

        Returns
        -------
        ndarray, [n_triangles, 2], float
        """
        if self.space.kind != P1:
            raise ValueError('Gradients are only defined for P1 fields')
        return np.einsum('tcd,tc->td', self.mesh.basis_gradients, self.values[self.mesh.triangles])

    def plot(self, ax=None, title=None, **kwargs):
        if self.space.kind == P1:
            return self.mesh.plot_p1(self.values, ax=ax, title=title, **kwargs)
        return self.mesh.plot_p0(self.values, ax=ax, title=title, **kwargs)
