"""Integrals over the mesh and over labeled boundaries

Integrands are either constant per triangle or per edge, or linear per triangle;
in all these cases the midpoint-type rules used here are exact.
"""

import numpy as np

from fakepower.math import linalg
from fakepower.space import Field, P1


def integrate_area(mesh, integrand):
    """Integral over the whole mesh

    Parameters
    ----------
    mesh : Mesh
    integrand : Field or ndarray
        a Field, or an array of per-triangle values, [n_triangles]

    Returns
    -------
    float
    """
    if isinstance(integrand, Field):
        if integrand.mesh is not mesh:
            raise ValueError('Integrand is defined on a different mesh')
        values = integrand.per_triangle()
    else:
        values = np.asarray(integrand, dtype=np.float64)
        if values.shape != (mesh.n_triangles,):
            raise ValueError('Expected one value per triangle')
    return float(np.dot(mesh.areas, values))


def boundary_edges(mesh, label):
    """Edges carrying a label, which must all lie on the outer boundary

    Raises
    ------
    KeyError
        if the label does not occur on the mesh
    ValueError
        if some of the edges are interior edges
    """
    edges = mesh.edges_with_label(label)
    if np.any(mesh.topology.edge_degree[edges] != 1):
        raise ValueError('Label {} does not lie on the outer boundary'.format(label))
    return edges


def integrate_boundary(mesh, label, integrand=1.0):
    """Line integral over the edges carrying a label

    Parameters
    ----------
    mesh : Mesh
    label : int
    integrand : float or Field or ndarray
        a constant, a P1 field, or an array of values per labeled edge

    Returns
    -------
    float
    """
    edges = boundary_edges(mesh, label)
    lengths = mesh.edge_lengths[edges]
    if isinstance(integrand, Field):
        if integrand.space.kind == P1:
            values = integrand.values[mesh.edges[edges]].mean(axis=1)
        else:
            values = integrand.values[mesh.topology.edge_triangles[edges, 0]]
    else:
        values = np.broadcast_to(np.asarray(integrand, dtype=np.float64), lengths.shape)
    return float(np.dot(lengths, values))


def boundary_flux(mesh, label, vectors):
    """Flux of a piecewise constant vector field through the edges carrying a label

    Parameters
    ----------
    mesh : Mesh
    label : int
    vectors : ndarray, [n_triangles, 2], float

    Returns
    -------
    float
        integral of the vector field dotted with the outward unit normal
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    if vectors.shape != (mesh.n_triangles, 2):
        raise ValueError('Expected one vector per triangle')
    edges = boundary_edges(mesh, label)
    normals = mesh.outward_normals(edges)
    inside = vectors[mesh.topology.edge_triangles[edges, 0]]
    return float(np.dot(mesh.edge_lengths[edges], linalg.dot(inside, normals)))
