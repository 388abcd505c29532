"""Construction of triangle meshes from labeled borders

The enclosed area is triangulated by a constrained, quality-conforming Delaunay triangulation,
with the boundary discretization driving the mesh density.

Region ids are not declared by the user; the mesher assigns them,
by grouping triangles into sets that are connected without crossing a labeled edge.
Which id ends up on which region depends on the numbering of the triangulation,
and should not be relied upon; see fakepower.regions for a stable alternative.
"""

import logging

import numpy as np
import triangle

from fakepower.boundary import BorderSet, Border
from fakepower.mesh import Mesh
from fakepower.topology import index_dtype, label_dtype, MeshError
from fakepower.topology.triangular import TopologyTriangular

logger = logging.getLogger(__name__)


def triangulate(vertices, segments, labels, quality=30., max_area=None):
    """Constrained triangulation of a planar straight line graph

    Parameters
    ----------
    vertices : ndarray, [n_vertices, 2], float
    segments : ndarray, [n_segments, 2], int
    labels : ndarray, [n_segments], int
        positive label of each segment
    quality : float
        minimum angle in degrees; zero disables quality refinement
    max_area : float, optional
        maximum triangle area

    Returns
    -------
    vertices : ndarray, [n_vertices, 2], float
    triangles : ndarray, [n_triangles, 3], index_dtype
    segments : ndarray, [n_segments, 2], index_dtype
        subdivided input segments
    labels : ndarray, [n_segments], label_dtype
    """
    opts = 'pQ'
    if quality:
        opts += 'q{:.6f}'.format(quality)
    if max_area is not None:
        if not max_area > 0:
            raise ValueError('Maximum triangle area should be positive')
        opts += 'a{:.12f}'.format(max_area)

    data = dict(
        vertices=np.asarray(vertices, dtype=np.float64),
        segments=np.asarray(segments, dtype=np.int32),
        segment_markers=np.asarray(labels, dtype=np.int32).reshape(-1, 1),
    )
    out = triangle.triangulate(data, opts)
    if 'triangles' not in out or len(out['triangles']) == 0:
        raise MeshError('Triangulation of the borders produced no triangles')

    return (
        np.asarray(out['vertices'], dtype=np.float64),
        np.asarray(out['triangles'], dtype=index_dtype),
        np.asarray(out['segments'], dtype=index_dtype),
        np.asarray(out['segment_markers'], dtype=label_dtype).flatten(),
    )


def build_mesh(borders, refinement=1, quality=30., max_area=None):
    """Build a mesh of the regions enclosed by a set of borders

    Parameters
    ----------
    borders : BorderSet or Border
    refinement : int
        multiplier applied to the segment count of every border
    quality : float
        minimum angle in degrees
    max_area : float, optional
        maximum triangle area; by default, the area of an equilateral triangle
        with the mean length of the boundary segments

    Returns
    -------
    Mesh
        with a region id per triangle, and the border labels on the edges

    Raises
    ------
    MeshError
        if the borders do not describe a meshable domain
    """
    if isinstance(borders, Border):
        borders = BorderSet([borders])
    vertices, segments, labels = borders.scaled(refinement).discretize()

    if max_area is None:
        h = np.linalg.norm(np.diff(vertices[segments], axis=1)[:, 0], axis=1).mean()
        max_area = np.sqrt(3) / 4 * h ** 2

    vertices, triangles, segments, labels = triangulate(vertices, segments, labels, quality=quality, max_area=max_area)

    topology = TopologyTriangular.from_triangles(triangles)
    if not topology.is_manifold:
        raise MeshError('Triangulation is not a manifold')

    edge_labels = np.zeros(topology.n_edges, dtype=label_dtype)
    edge_labels[topology.edge_indices(segments)] = labels

    n_regions, regions = topology.components(blocked=edge_labels != 0)

    mesh = Mesh(vertices=vertices, topology=topology, regions=regions, edge_labels=edge_labels)
    if np.any(mesh.areas <= 0):
        raise MeshError('Triangulation contains degenerate triangles')

    logger.info('built mesh at refinement %d: %d vertices, %d triangles, %d regions',
                refinement, mesh.n_vertices, mesh.n_triangles, n_regions)
    return mesh
