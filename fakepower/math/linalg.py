"""Small vectorized helpers over arrays of 2d vectors"""

import numpy as np


def dot(a, b):
    """Dot products over the last axis

    Parameters
    ----------
    a : ndarray, [..., n], float
    b : ndarray, [..., n], float

    Returns
    -------
    ndarray, [...], float
    """
    return np.einsum('...i,...i->...', a, b)


def cross2(a, b):
    """Scalar cross product of planar vectors; the z-component of their 3d cross product"""
    a = np.asarray(a)
    b = np.asarray(b)
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


def normalized(vectors):
    """Vectors scaled to unit euclidian length

    Parameters
    ----------
    vectors : ndarray, [..., n], float
        no vector may be zero

    Returns
    -------
    ndarray, [..., n], float
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    return vectors / np.linalg.norm(vectors, axis=-1, keepdims=True)
