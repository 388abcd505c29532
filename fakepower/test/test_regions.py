
import numpy as np
import numpy.testing as npt
import pytest

from fakepower.boundary import Border
from fakepower.mesher import build_mesh
from fakepower.regions import RegionMap, RegionError
from fakepower.synthetic import segment, rectangle


@pytest.fixture(scope='module')
def split_square():
    """Unit square split in two halves by a vertical interface"""
    borders = rectangle(n=8) + Border(segment((0.5, 0), (0.5, 1)), 0, 1, 10, n=8)
    return build_mesh(borders)


def test_resolve(split_square):
    regions = RegionMap.resolve(split_square, {'west': (0.25, 0.5), 'east': (0.75, 0.5)})
    assert len(regions) == 2
    assert regions['west'] != regions['east']
    assert set(regions) == {'west', 'east'}
    npt.assert_allclose(split_square.areas[regions.mask('west')].sum(), 0.5)


def test_same_region(split_square):
    with pytest.raises(RegionError):
        RegionMap.resolve(split_square, {'a': (0.1, 0.5), 'b': (0.4, 0.5)})


def test_outside(split_square):
    with pytest.raises(RegionError):
        RegionMap.resolve(split_square, {'a': (0.1, 0.5), 'b': (1.5, 0.5)})


def test_piecewise(split_square):
    regions = RegionMap.resolve(split_square, {'west': (0.25, 0.5), 'east': (0.75, 0.5)})
    values = regions.piecewise({'west': 1., 'east': 3.})
    x = split_square.centroids[:, 0]
    npt.assert_array_equal(values, np.where(x < 0.5, 1., 3.))

    with pytest.raises(KeyError):
        regions.piecewise({'west': 1., 'north': 3.})
    with pytest.raises(RegionError):
        regions.piecewise({'west': 1.})
