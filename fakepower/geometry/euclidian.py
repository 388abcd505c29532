"""Some routines for geometric calculations on triangles in the euclidian plane

All functions are vectorized over leading axes
"""

import numpy as np

from fakepower.math import linalg


def signed_area(pts):
    """Signed area of triangles in the plane

    Parameters
    ----------
    pts : ndarray, [..., 3, 2], float
        corners of the triangles

    Returns
    -------
    ndarray, [...], float
        positive for counter-clockwise triangles
    """
    pts = np.asarray(pts)
    e = pts[..., 1:, :] - pts[..., :1, :]
    return linalg.cross2(e[..., 0, :], e[..., 1, :]) / 2


def unsigned_area(pts):
    """Unsigned area of triangles in the plane

    Parameters
    ----------
    pts : ndarray, [..., 3, 2], float

    Returns
    -------
    ndarray, [...], float
    """
    return np.abs(signed_area(pts))


def basis_gradients(pts):
    """Gradients of the linear lagrange basis functions of each triangle

    The ith basis function is one at the ith corner and zero at the others

    Parameters
    ----------
    pts : ndarray, [..., 3, 2], float

    Returns
    -------
    ndarray, [..., 3, 2], float
        gradient of each of the three basis functions
    """
    pts = np.asarray(pts, dtype=np.float64)
    # edge opposite each corner, rotated by a quarter turn
    opposite = np.roll(pts, -2, axis=-2) - np.roll(pts, -1, axis=-2)
    normal = np.stack([-opposite[..., 1], opposite[..., 0]], axis=-1)
    return normal / (2 * signed_area(pts)[..., None, None])


def edge_lengths(pts):
    """Length of edges

    Parameters
    ----------
    pts : ndarray, [..., 2, 2], float

    Returns
    -------
    ndarray, [...], float
    """
    pts = np.asarray(pts)
    return np.linalg.norm(pts[..., 1, :] - pts[..., 0, :], axis=-1)


def outward_normals(edge_pts, opposite_pts):
    """Unit normals of edges, pointing away from the opposing vertex of their triangle

    Parameters
    ----------
    edge_pts : ndarray, [..., 2, 2], float
    opposite_pts : ndarray, [..., 2], float

    Returns
    -------
    ndarray, [..., 2], float
    """
    edge_pts = np.asarray(edge_pts)
    t = edge_pts[..., 1, :] - edge_pts[..., 0, :]
    n = linalg.normalized(np.stack([t[..., 1], -t[..., 0]], axis=-1))
    inward = linalg.dot(np.asarray(opposite_pts) - edge_pts[..., 0, :], n) > 0
    return np.where(inward[..., None], -n, n)


def barycentric(pts, points):
    """Barycentric coordinates of a set of points relative to a set of triangles

    Parameters
    ----------
    pts : ndarray, [n_triangles, 3, 2], float
    points : ndarray, [n_points, 2], float

    Returns
    -------
    ndarray, [n_points, n_triangles, 3], float
    """
    pts = np.asarray(pts, dtype=np.float64)
    points = np.asarray(points, dtype=np.float64)
    grad = basis_gradients(pts)
    # each basis function is affine, and at the second corner only the second one is nonzero
    rel = points[:, None, :] - pts[None, :, 1, :]
    l = np.einsum('tcd,ptd->ptc', grad, rel)
    l[..., 1] += 1
    return l


def locate(pts, points, tol=1e-12):
    """Find the triangle containing each point

    Parameters
    ----------
    pts : ndarray, [n_triangles, 3, 2], float
    points : ndarray, [n_points, 2], float
    tol : float
        tolerance on the barycentric coordinates

    Returns
    -------
    ndarray, [n_points], int
        index of the first containing triangle, or -1 if the point lies outside all triangles

    Notes
    -----
    This is a brute force search; it is intended for a handful of query points
    """
    l = barycentric(pts, points)
    inside = np.all(l >= -tol, axis=-1)
    found = np.any(inside, axis=1)
    return np.where(found, np.argmax(inside, axis=1), -1)
