"""Named regions

The mesher numbers regions in an order that depends on the triangulation.
Instead of looking up those numbers once and writing them into material definitions,
regions are named by a point known to lie inside them, and the names are resolved
against the mesh after construction.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class RegionError(Exception):
    pass


class RegionMap(object):
    """Mapping from region names to the region ids assigned by the mesher

    Parameters
    ----------
    mesh : Mesh
    ids : dict of (str, int)
    seeds : dict of (str, tuple of float), optional
        the sample points the ids were resolved from
    """

    def __init__(self, mesh, ids, seeds=None):
        self.mesh = mesh
        self.ids = dict(ids)
        self.seeds = dict(seeds or {})

    @classmethod
    def resolve(cls, mesh, seeds):
        """Look up the region id at a sample point for each named region

        Parameters
        ----------
        mesh : Mesh
        seeds : dict of (str, tuple of float)
            a point inside each named region

        Returns
        -------
        RegionMap

        Raises
        ------
        RegionError
            if a point lies outside the mesh, or two names resolve to the same region
        """
        names = list(seeds)
        points = np.array([seeds[n] for n in names], dtype=np.float64).reshape(-1, 2)
        found = mesh.region_at(points)

        outside = [n for n, r in zip(names, found) if r < 0]
        if outside:
            raise RegionError('Sample points of regions {} lie outside the mesh'.format(outside))

        ids = dict(zip(names, (int(r) for r in found)))
        if len(set(ids.values())) != len(ids):
            raise RegionError('Sample points do not identify distinct regions: {}'.format(ids))

        logger.debug('resolved regions %s', ids)
        return cls(mesh, ids, seeds)

    def __getitem__(self, name):
        return self.ids[name]

    def __iter__(self):
        return iter(self.ids)

    def __len__(self):
        return len(self.ids)

    def __repr__(self):
        return 'RegionMap({})'.format(self.ids)

    def mask(self, name):
        """Boolean mask over the triangles of a named region"""
        return self.mesh.regions == self[name]

    def piecewise(self, values):
        """Per-triangle array taking a constant value on each named region

        Parameters
        ----------
        values : dict of (str, float)

        Returns
        -------
        ndarray, [n_triangles], float

        Raises
        ------
        KeyError
            if a value is given for an unknown region name
        RegionError
            if triangles remain that lie in a region without a value
        """
        unknown = set(values) - set(self.ids)
        if unknown:
            raise KeyError('Unknown regions {}; known regions are {}'.format(sorted(unknown), sorted(self.ids)))
        result = np.full(self.mesh.n_triangles, np.nan)
        for name, value in values.items():
            result[self.mask(name)] = value
        if np.any(np.isnan(result)):
            missing = np.unique(self.mesh.regions[np.isnan(result)])
            raise RegionError('No value given for regions with ids {}'.format(missing.tolist()))
        return result
