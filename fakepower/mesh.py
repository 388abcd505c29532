
import numpy as np
from cached_property import cached_property

from fakepower.geometry import euclidian
from fakepower.topology import index_dtype, label_dtype, MeshError
from fakepower.topology.triangular import TopologyTriangular


class Mesh(object):
    """Triangle mesh in the euclidian plane, with material regions and boundary labels

    Parameters
    ----------
    vertices : ndarray, [n_vertices, 2], float
    triangles : ndarray, [n_triangles, 3], int, optional
    topology : TopologyTriangular, optional
        if not given, it is constructed from triangles
    regions : ndarray, [n_triangles], int, optional
        region id of each triangle; a single region by default
    edge_labels : ndarray, [n_edges], int, optional
        label of each edge, zero for unlabeled edges

    Notes
    -----
    A mesh is not modified after construction; all derived quantities are cached
    """

    def __init__(self, vertices, triangles=None, topology=None, regions=None, edge_labels=None):
        self.vertices = np.asarray(vertices, dtype=np.float64)
        if topology is None:
            topology = TopologyTriangular.from_triangles(triangles)
        self.topology = topology
        if topology.n_vertices > len(self.vertices):
            raise MeshError('Triangles refer to nonexistent vertices')

        if regions is None:
            regions = np.zeros(topology.n_triangles)
        self.regions = np.asarray(regions, dtype=index_dtype)
        if edge_labels is None:
            edge_labels = np.zeros(topology.n_edges)
        self.edge_labels = np.asarray(edge_labels, dtype=label_dtype)

        if self.regions.shape != (topology.n_triangles,):
            raise ValueError('Expected one region id per triangle')
        if self.edge_labels.shape != (topology.n_edges,):
            raise ValueError('Expected one label per edge')

    def __repr__(self):
        return 'Mesh({} vertices, {} triangles, regions {}, labels {})'.format(
            self.n_vertices, self.n_triangles, self.region_ids.tolist(), self.labels)

    def copy(self, **kwargs):
        c = dict(vertices=self.vertices, topology=self.topology, regions=self.regions, edge_labels=self.edge_labels)
        c.update(kwargs)
        return type(self)(**c)

    @property
    def triangles(self):
        return self.topology.triangles

    @property
    def edges(self):
        return self.topology.edges

    @property
    def n_vertices(self):
        return len(self.vertices)

    @property
    def n_triangles(self):
        return self.topology.n_triangles

    @cached_property
    def corners(self):
        """Corner positions of each triangle, [n_triangles, 3, 2]"""
        return self.vertices[self.triangles]

    @cached_property
    def areas(self):
        return euclidian.unsigned_area(self.corners)

    @cached_property
    def centroids(self):
        return self.corners.mean(axis=1)

    @cached_property
    def basis_gradients(self):
        """Gradients of the P1 basis functions, [n_triangles, 3, 2]"""
        if np.any(self.areas <= 0):
            raise MeshError('Mesh contains degenerate triangles')
        return euclidian.basis_gradients(self.corners)

    @cached_property
    def edge_lengths(self):
        return euclidian.edge_lengths(self.vertices[self.edges])

    @cached_property
    def region_ids(self):
        return np.unique(self.regions)

    @cached_property
    def labels(self):
        """Sorted list of the labels present on the edges of the mesh"""
        return [int(l) for l in np.unique(self.edge_labels) if l != 0]

    @cached_property
    def boundary_labels(self):
        """Sorted list of labels that occur on the outer boundary"""
        labels = self.edge_labels[self.topology.boundary_edges]
        return [int(l) for l in np.unique(labels) if l != 0]

    def edges_with_label(self, label):
        """Indices of the edges carrying a label

        Raises
        ------
        KeyError
            if no edge carries the label
        """
        idx = np.flatnonzero(self.edge_labels == label)
        if len(idx) == 0:
            raise KeyError('No edges with label {}; known labels are {}'.format(label, self.labels))
        return idx.astype(index_dtype)

    def vertices_with_label(self, label):
        return np.unique(self.edges[self.edges_with_label(label)])

    def outward_normals(self, edges):
        """Outward unit normals of boundary edges

        Parameters
        ----------
        edges : ndarray, [n], int
            indices of boundary edges

        Returns
        -------
        ndarray, [n, 2], float
        """
        edges = np.asarray(edges)
        if np.any(self.topology.edge_degree[edges] != 1):
            raise ValueError('Outward normals are only defined on the outer boundary')
        return euclidian.outward_normals(
            self.vertices[self.edges[edges]],
            self.vertices[self.topology.edge_opposite_vertex[edges]]
        )

    def locate(self, points):
        """Index of the triangle containing each point, or -1"""
        points = np.atleast_2d(np.asarray(points, dtype=np.float64))
        return euclidian.locate(self.corners, points)

    def region_at(self, points):
        """Region id at each point

        Parameters
        ----------
        points : ndarray, [n_points, 2], float

        Returns
        -------
        ndarray, [n_points], int
            region id, or -1 for points outside the mesh
        """
        t = self.locate(points)
        return np.where(t >= 0, self.regions[t], -1)

    def plot(self, ax=None, title=None, plot_labels=True, plot_regions=False, color='b'):
        """Plot the triangulation, with labeled edges highlighted"""
        import matplotlib.pyplot as plt
        import matplotlib.collections

        if ax is None:
            fig, ax = plt.subplots(1, 1)

        if plot_regions:
            self.plot_p0(self.regions, ax=ax, cmap='Pastel1')

        e = self.vertices[self.edges]
        lc = matplotlib.collections.LineCollection(e, color=color, alpha=0.3, linewidths=0.5)
        ax.add_collection(lc)

        if plot_labels:
            cmap = plt.get_cmap('tab10')
            for i, label in enumerate(self.labels):
                segments = self.vertices[self.edges[self.edges_with_label(label)]]
                lc = matplotlib.collections.LineCollection(segments, color=cmap(i % 10), linewidths=2, label=str(label))
                ax.add_collection(lc)
            ax.legend(title='label', loc='upper right', fontsize='small')

        if title:
            ax.set_title(title)
        ax.autoscale()
        ax.axis('equal')
        return ax

    def plot_p1(self, values, ax=None, title=None, plot_contour=True, cmap='viridis', levels=20):
        """Plot a piecewise linear field

        Parameters
        ----------
        values : ndarray, [n_vertices], float

        """
        import matplotlib.pyplot as plt
        import matplotlib.tri as tri

        triang = tri.Triangulation(*self.vertices.T, triangles=self.triangles)

        if ax is None:
            fig, ax = plt.subplots(1, 1)

        if plot_contour:
            levels = np.linspace(values.min() - 1e-6, values.max() + 1e-6, levels, endpoint=True)
            if cmap:
                ax.tricontourf(triang, values, cmap=cmap, levels=levels)
            ax.tricontour(triang, values, colors='k', levels=levels, linewidths=0.5)
        else:
            ax.tripcolor(triang, values, cmap=cmap, shading='gouraud')

        if title:
            ax.set_title(title)
        ax.axis('equal')
        return ax

    def plot_p0(self, values, ax=None, title=None, cmap='jet'):
        """Plot a piecewise constant field

        Parameters
        ----------
        values : ndarray, [n_triangles], float

        """
        import matplotlib.pyplot as plt
        from matplotlib.collections import PolyCollection

        if ax is None:
            fig, ax = plt.subplots(1, 1)

        pc = PolyCollection(self.corners, array=np.asarray(values), cmap=cmap, edgecolors='face')
        ax.add_collection(pc)
        ax.figure.colorbar(pc, ax=ax)

        if title:
            ax.set_title(title)
        ax.autoscale()
        ax.axis('equal')
        return ax

    def plot_vectors(self, vectors, ax=None, title=None, stride=1):
        """Plot a piecewise constant vector field as arrows at the triangle centroids

        Parameters
        ----------
        vectors : ndarray, [n_triangles, 2], float
        stride : int
            plot only every stride-th arrow

        """
        import matplotlib.pyplot as plt

        if ax is None:
            fig, ax = plt.subplots(1, 1)

        c = self.centroids[::stride]
        v = np.asarray(vectors)[::stride]
        ax.quiver(c[:, 0], c[:, 1], v[:, 0], v[:, 1], np.linalg.norm(v, axis=1), cmap='viridis')

        if title:
            ax.set_title(title)
        ax.axis('equal')
        return ax
