"""Labeled parametric boundary curves

A border is a closure over a curve parameter t, mapping it to a point in the plane,
together with an integer label. Borders are discretized into straight segments,
and a set of borders is merged into a planar straight line graph for the mesher.

Following the convention of boundary-driven meshers, a negative segment count
traverses the border in reverse.
"""

import logging

import numpy as np
import numpy_indexed as npi
import scipy.sparse
import scipy.sparse.csgraph
import scipy.spatial

from fakepower.topology import index_dtype, label_dtype, MeshError

logger = logging.getLogger(__name__)


class Border(object):
    """Parametric curve segment with a boundary label

    Parameters
    ----------
    function : callable
        maps an ndarray of parameter values to a pair of coordinate arrays (x, y)
    t0 : float
        start of the parameter interval
    t1 : float
        end of the parameter interval
    label : int
        positive integer used to select boundary conditions and integrals
    n : int
        default number of segments
    name : str, optional
    """

    def __init__(self, function, t0, t1, label, n=10, name=None):
        if not callable(function):
            raise TypeError('Border function should be callable')
        label = int(label)
        if label <= 0:
            raise ValueError('Border labels must be positive; 0 is reserved for unlabeled edges')
        self.function = function
        self.t0 = float(t0)
        self.t1 = float(t1)
        self.label = label
        self.n = int(n)
        self.name = name

    def __repr__(self):
        return 'Border({}, label={}, n={})'.format(self.name, self.label, self.n)

    def __call__(self, n):
        """Return a copy of this border with a different segment count"""
        return Border(self.function, self.t0, self.t1, self.label, n=n, name=self.name)

    def __add__(self, other):
        return BorderSet([self]) + other

    def discretize(self, n=None):
        """Sample the border at n + 1 points

        Parameters
        ----------
        n : int, optional
            number of segments; defaults to the count of this border.
            if negative, the points are returned in reverse order

        Returns
        -------
        ndarray, [abs(n) + 1, 2], float
        """
        n = self.n if n is None else int(n)
        if n == 0:
            raise ValueError('Border {} needs a nonzero number of segments'.format(self.name))
        t = np.linspace(self.t0, self.t1, abs(n) + 1)
        x, y = self.function(t)
        points = np.empty((len(t), 2))
        points[:, 0] = x
        points[:, 1] = y
        if not np.all(np.isfinite(points)):
            raise ValueError('Border {} evaluates to non-finite coordinates'.format(self.name))
        return points[::-1] if n < 0 else points


class BorderSet(object):
    """Ordered collection of borders, each with its own segment count"""

    def __init__(self, borders):
        self.borders = list(borders)

    def __add__(self, other):
        if isinstance(other, Border):
            return BorderSet(self.borders + [other])
        if isinstance(other, BorderSet):
            return BorderSet(self.borders + other.borders)
        return NotImplemented

    def __iter__(self):
        return iter(self.borders)

    def __len__(self):
        return len(self.borders)

    @property
    def labels(self):
        return sorted(set(b.label for b in self.borders))

    def scaled(self, refinement):
        """Multiply the segment count of every border by an integer refinement level"""
        refinement = int(refinement)
        if refinement < 1:
            raise ValueError('Refinement level should be a positive integer')
        return BorderSet([b(b.n * refinement) for b in self.borders])

    def discretize(self, tol=1e-9):
        """Merge the discretized borders into a planar straight line graph

        Parameters
        ----------
        tol : float
            relative tolerance, with respect to the bounding box, at which points are merged

        Returns
        -------
        vertices : ndarray, [n_vertices, 2], float
        segments : ndarray, [n_segments, 2], index_dtype
        labels : ndarray, [n_segments], label_dtype

        Raises
        ------
        MeshError
            if the segments do not form closed curves
        """
        if not self.borders:
            raise MeshError('Cannot discretize an empty set of borders')
        chains = [b.discretize() for b in self.borders]
        points = np.concatenate(chains, axis=0)

        offsets = np.cumsum([0] + [len(c) for c in chains])
        segments = np.concatenate([
            np.arange(o, o + len(c) - 1)[:, None] + [0, 1]
            for o, c in zip(offsets, chains)
        ], axis=0)
        labels = np.concatenate([
            np.full(len(c) - 1, b.label, dtype=label_dtype)
            for b, c in zip(self.borders, chains)
        ])

        # merge clusters of coincident points, such as the shared endpoints of consecutive borders
        scale = np.ptp(points, axis=0).max()
        if scale == 0:
            raise MeshError('Borders are degenerate; all points coincide')
        pairs = scipy.spatial.cKDTree(points).query_pairs(scale * tol, output_type='ndarray')
        n = len(points)
        graph = scipy.sparse.coo_matrix((np.ones(len(pairs)), (pairs[:, 0], pairs[:, 1])), shape=(n, n))
        _, cluster = scipy.sparse.csgraph.connected_components(graph, directed=False)
        _, first = npi.unique(cluster, return_index=True)
        vertices = points[first]
        segments = cluster[segments].astype(index_dtype)

        # drop segments that collapsed onto a single point
        valid = segments[:, 0] != segments[:, 1]
        segments, labels = segments[valid], labels[valid]
        # and duplicated segments shared between borders
        _, unique = npi.unique(np.sort(segments, axis=1), return_index=True)
        unique = np.sort(unique)
        segments, labels = segments[unique], labels[unique]

        # internal interfaces meet the outer boundary in T-junctions, so only dangling ends are an error
        degree = np.bincount(segments.flatten(), minlength=len(vertices))
        if np.any(degree < 2):
            open_points = vertices[degree < 2]
            raise MeshError('Borders do not form closed curves; open ends at {}'.format(open_points[:4].tolist()))
        if len(vertices) < 3:
            raise MeshError('Borders enclose no area')

        logger.debug('discretized %d borders into %d vertices and %d segments',
                     len(self.borders), len(vertices), len(segments))
        return vertices, segments, labels
