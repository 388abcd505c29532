
import numpy as np
import numpy.testing as npt

from fakepower.geometry import euclidian


def test_signed_area():
    p = [[0, 0], [1, 0], [0, 1]]
    npt.assert_allclose(euclidian.signed_area(p), 0.5)
    npt.assert_allclose(euclidian.signed_area(p[::-1]), -0.5)
    npt.assert_allclose(euclidian.unsigned_area(p[::-1]), 0.5)


def test_basis_gradients():
    """Basis functions should be a partition of unity, and one at their own vertex only"""
    p = np.array([[0.1, 0.2], [2.0, -0.3], [0.7, 1.5]])
    g = euclidian.basis_gradients(p)
    npt.assert_allclose(g.sum(axis=0), 0, atol=1e-12)
    # the gradient of the ith basis function, applied to the edge to vertex j, gives delta_ij - delta_i0
    npt.assert_allclose(np.dot(g, (p - p[0]).T), np.eye(3) - np.eye(3)[:, :1], atol=1e-12)


def test_basis_gradients_orientation():
    """Gradients should not depend on the winding order"""
    p = np.array([[0, 0], [1, 0], [0, 1]], dtype=float)
    g = euclidian.basis_gradients(p)
    npt.assert_allclose(g, [[-1, -1], [1, 0], [0, 1]], atol=1e-12)
    r = euclidian.basis_gradients(p[::-1])
    npt.assert_allclose(r, g[::-1], atol=1e-12)


def test_edge_lengths():
    e = [[[0, 0], [3, 4]], [[1, 1], [1, 2]]]
    npt.assert_allclose(euclidian.edge_lengths(e), [5, 1])


def test_outward_normals():
    edge = [[[0, 0], [1, 0]], [[1, 0], [0, 0]]]
    opposite = [[0.3, 1], [0.3, 1]]
    npt.assert_allclose(euclidian.outward_normals(edge, opposite), [[0, -1], [0, -1]], atol=1e-12)
    npt.assert_allclose(euclidian.outward_normals(edge, [[0.3, -1], [0.3, -1]]), [[0, 1], [0, 1]], atol=1e-12)


def test_barycentric():
    tris = np.array([[[0, 0], [1, 0], [0, 1]], [[1, 0], [1, 1], [0, 1]]], dtype=float)
    points = [[0.25, 0.25], [0.75, 0.75], [0, 0]]
    l = euclidian.barycentric(tris, points)
    npt.assert_allclose(l.sum(axis=-1), 1)
    npt.assert_allclose(l[0, 0], [0.5, 0.25, 0.25])
    npt.assert_allclose(l[2, 0], [1, 0, 0], atol=1e-12)


def test_locate():
    tris = np.array([[[0, 0], [1, 0], [0, 1]], [[1, 0], [1, 1], [0, 1]]], dtype=float)
    found = euclidian.locate(tris, [[0.25, 0.25], [0.75, 0.75], [2, 2]])
    npt.assert_array_equal(found, [0, 1, -1])
