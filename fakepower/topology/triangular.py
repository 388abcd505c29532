
import numpy as np
import numpy_indexed as npi
import scipy.sparse
import scipy.sparse.csgraph
from cached_property import cached_property

from fakepower.topology import index_dtype, MeshError


def generate_triangle_boundary(triangles):
    """Generate the three boundary edges of each triangle

    Parameters
    ----------
    triangles : ndarray, [n_triangles, 3], index_dtype

    Returns
    -------
    boundary : ndarray, [n_triangles, 3, 2], index_dtype
        the ith edge of each triangle is the edge opposite to its ith vertex

    """
    triangles = np.asarray(triangles)
    b = np.empty(triangles.shape + (2,), dtype=triangles.dtype)
    for c in range(3):
        b[:, c] = np.roll(triangles, -c, axis=-1)[:, 1:]
    return b


class TopologyTriangular(object):
    """Connectivity of a triangle mesh in terms of vertices, edges and triangles

    Edges are stored with sorted vertex indices; orientation is not tracked here,
    since nothing downstream needs a consistently oriented edge set

    """

    def __init__(self, triangles, edges, incidence):
        self.triangles = triangles
        self.edges = edges
        self.incidence = incidence

    @classmethod
    def from_triangles(cls, triangles):
        """Construct topology from triangle description

        Parameters
        ----------
        triangles : ndarray, [n_triangles, 3], int
            triangles given in terms of their vertex indices

        Returns
        -------
        TopologyTriangular
        """
        triangles = np.asarray(triangles, dtype=index_dtype)
        if triangles.ndim != 2 or triangles.shape[1] != 3:
            raise MeshError('Triangles should be given as an [n, 3] array')
        if len(triangles) == 0:
            raise MeshError('Topology requires at least one triangle')

        boundary = np.sort(generate_triangle_boundary(triangles), axis=-1)
        index = npi.as_index(boundary.reshape(-1, 2))
        # identical sorted corners are a single edge
        edges = index.unique.astype(index_dtype)
        incidence = index.inverse.reshape(-1, 3).astype(index_dtype)
        return cls(triangles=triangles, edges=edges, incidence=incidence)

    @property
    def n_vertices(self):
        return int(self.triangles.max()) + 1

    @property
    def n_edges(self):
        return len(self.edges)

    @property
    def n_triangles(self):
        return len(self.triangles)

    @cached_property
    def edge_degree(self):
        """Number of triangles incident to each edge"""
        return np.bincount(self.incidence.flatten(), minlength=self.n_edges)

    @cached_property
    def is_manifold(self):
        return bool(np.all(self.edge_degree <= 2))

    @cached_property
    def boundary_edges(self):
        """Indices of edges with a single incident triangle"""
        return np.flatnonzero(self.edge_degree == 1).astype(index_dtype)

    @cached_property
    def boundary_vertices(self):
        return np.unique(self.edges[self.boundary_edges])

    @cached_property
    def edge_triangles(self):
        """Incident triangles of each edge

        Returns
        -------
        ndarray, [n_edges, 2], index_dtype
            the second column is -1 for boundary edges
        """
        if not self.is_manifold:
            raise MeshError('Edge with more than two incident triangles')
        T = self.incidence.flatten()
        triangle = np.repeat(np.arange(self.n_triangles, dtype=index_dtype), 3)
        order = np.argsort(T, kind='stable')
        T, triangle = T[order], triangle[order]
        et = -np.ones((self.n_edges, 2), dtype=index_dtype)
        start = np.searchsorted(T, np.arange(self.n_edges))
        et[:, 0] = triangle[start]
        second = start + 1
        interior = self.edge_degree == 2
        et[interior, 1] = triangle[second[interior]]
        return et

    @cached_property
    def edge_opposite_vertex(self):
        """For each edge, the vertex of its first incident triangle that is not on the edge"""
        t = self.edge_triangles[:, 0]
        # position of the edge within the triangle equals the position of the opposing vertex
        local = np.argmax(self.incidence[t] == np.arange(self.n_edges)[:, None], axis=1)
        return self.triangles[t, local]

    def components(self, blocked=None):
        """Label connected sets of triangles

        Parameters
        ----------
        blocked : ndarray, [n_edges], bool, optional
            edges that separate the triangles on either side

        Returns
        -------
        n_components : int
        labels : ndarray, [n_triangles], index_dtype
            component index of each triangle, in order of discovery
        """
        et = self.edge_triangles
        connects = et[:, 1] >= 0
        if blocked is not None:
            connects = np.logical_and(connects, np.logical_not(blocked))
        a, b = et[connects].T
        n = self.n_triangles
        graph = scipy.sparse.coo_matrix((np.ones(len(a)), (a, b)), shape=(n, n))
        n_components, labels = scipy.sparse.csgraph.connected_components(graph, directed=False)
        return n_components, labels.astype(index_dtype)

    def edge_indices(self, pairs):
        """Look up the edge index of unordered vertex pairs

        Parameters
        ----------
        pairs : ndarray, [n, 2], int

        Returns
        -------
        ndarray, [n], index_dtype

        Raises
        ------
        KeyError
            if a pair is not an edge of this topology
        """
        pairs = np.sort(np.asarray(pairs, dtype=index_dtype), axis=1)
        return npi.indices(self.edges, pairs).astype(index_dtype)
