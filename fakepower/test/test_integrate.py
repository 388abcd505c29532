
import numpy as np
import numpy.testing as npt
import pytest

from fakepower.boundary import Border
from fakepower.fields import electric_field, current_density, magnitude
from fakepower.integrate import integrate_area, integrate_boundary, boundary_flux
from fakepower.mesher import build_mesh
from fakepower.space import FunctionSpace, P0, P1
from fakepower.synthetic import segment, rectangle


@pytest.fixture(scope='module')
def mesh():
    """2 by 1 rectangle with an interior interface labeled 10"""
    return build_mesh(rectangle(width=2, n=8) + Border(segment((1, 0), (1, 1)), 0, 1, 10, n=8))


def test_area(mesh):
    npt.assert_allclose(integrate_area(mesh, np.ones(mesh.n_triangles)), 2)
    # linear integrands are integrated exactly
    x = FunctionSpace(mesh, P1).interpolate(lambda x, y: x)
    npt.assert_allclose(integrate_area(mesh, x), 2)
    with pytest.raises(ValueError):
        integrate_area(mesh, np.ones(3))


def test_boundary_length(mesh):
    npt.assert_allclose(integrate_boundary(mesh, 2), 2)
    npt.assert_allclose(integrate_boundary(mesh, 1), 1)
    y = FunctionSpace(mesh, P1).interpolate(lambda x, y: y)
    npt.assert_allclose(integrate_boundary(mesh, 1, y), 0.5)
    c = FunctionSpace(mesh, P0).constant(3.)
    npt.assert_allclose(integrate_boundary(mesh, 3, c), 3)


def test_interior_label(mesh):
    with pytest.raises(ValueError):
        integrate_boundary(mesh, 10)
    with pytest.raises(ValueError):
        boundary_flux(mesh, 10, np.zeros((mesh.n_triangles, 2)))


def test_unknown_label(mesh):
    with pytest.raises(KeyError):
        integrate_boundary(mesh, 42)


def test_constant_flux(mesh):
    """A uniform field has outward flux equal to its normal component times the side length"""
    v = np.broadcast_to([2., 1.], (mesh.n_triangles, 2))
    npt.assert_allclose(boundary_flux(mesh, 1, v), -2)
    npt.assert_allclose(boundary_flux(mesh, 3, v), 2)
    npt.assert_allclose(boundary_flux(mesh, 2, v), -2)
    npt.assert_allclose(boundary_flux(mesh, 4, v), 2)
    npt.assert_allclose(sum(boundary_flux(mesh, l, v) for l in [1, 2, 3, 4]), 0, atol=1e-12)


def test_fields(mesh):
    u = FunctionSpace(mesh, P1).interpolate(lambda x, y: 4 - 2 * x)
    E = electric_field(u)
    npt.assert_allclose(E, np.broadcast_to([2, 0], E.shape), atol=1e-10)

    sigma = FunctionSpace(mesh, P0).interpolate(lambda x, y: np.where(x < 1, 1., 3.))
    J = current_density(u, sigma)
    npt.assert_allclose(J[:, 0], 2 * sigma.values, atol=1e-10)
    npt.assert_allclose(current_density(u, 0.5), E / 2)

    m = magnitude(J, FunctionSpace(mesh, P0))
    npt.assert_allclose(m.values, 2 * sigma.values, atol=1e-10)
    npt.assert_allclose(magnitude([[3, 4]]), [5])
    with pytest.raises(ValueError):
        magnitude(J, FunctionSpace(mesh, P1))
