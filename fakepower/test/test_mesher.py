
import numpy as np
import numpy.testing as npt
import pytest

from fakepower.boundary import Border
from fakepower.mesher import build_mesh, triangulate
from fakepower.topology import MeshError
from fakepower.synthetic import segment, rectangle, circle


def test_square(show_plot):
    mesh = build_mesh(rectangle(n=6))
    npt.assert_allclose(mesh.areas.sum(), 1)
    assert np.all(mesh.areas > 0)
    assert mesh.labels == [1, 2, 3, 4]
    assert mesh.boundary_labels == [1, 2, 3, 4]
    assert len(mesh.region_ids) == 1
    # every boundary edge carries a label, and no interior edge does
    boundary = np.zeros(len(mesh.edges), dtype=bool)
    boundary[mesh.topology.boundary_edges] = True
    npt.assert_array_equal(mesh.edge_labels != 0, boundary)

    mesh.plot(title='square')
    show_plot()


def test_label_lengths():
    """Labeled edges should exactly cover their border"""
    mesh = build_mesh(rectangle(width=2, n=5))
    for label, length in zip([1, 2, 3, 4], [1, 2, 1, 2]):
        npt.assert_allclose(mesh.edge_lengths[mesh.edges_with_label(label)].sum(), length)


def test_refinement():
    coarse = build_mesh(rectangle(n=4), refinement=1)
    fine = build_mesh(rectangle(n=4), refinement=3)
    assert fine.n_triangles > 4 * coarse.n_triangles
    npt.assert_allclose(fine.areas.sum(), 1)


def test_max_area():
    mesh = build_mesh(rectangle(n=4), max_area=0.001)
    assert mesh.areas.max() <= 0.001 * (1 + 1e-9)
    with pytest.raises(ValueError):
        build_mesh(rectangle(n=4), max_area=-1)


def test_regions():
    """An inner circle and an interface should split the square into three regions"""
    borders = rectangle(n=10) + \
        Border(segment((0.3, 0), (0.3, 1)), 0, 1, 10, n=10) + \
        circle((0.65, 0.5), 0.2, 30, n=20)
    mesh = build_mesh(borders)
    assert len(mesh.region_ids) == 3
    assert sorted(mesh.labels) == [1, 2, 3, 4, 10, 30]
    assert mesh.boundary_labels == [1, 2, 3, 4]

    ids = mesh.region_at([[0.1, 0.5], [0.9, 0.9], [0.65, 0.5]])
    assert len(set(ids.tolist())) == 3

    areas = [mesh.areas[mesh.regions == r].sum() for r in ids]
    # the polygonal circle is slightly smaller than the true one
    npt.assert_allclose(areas[0], 0.3)
    npt.assert_allclose(areas[2], np.pi * 0.2 ** 2, rtol=0.05)
    npt.assert_allclose(sum(areas), 1)


def test_single_border():
    """A single closed border is a valid domain"""
    mesh = build_mesh(circle((0, 0), 1, 5, n=24))
    assert mesh.labels == [5]
    npt.assert_allclose(mesh.areas.sum(), np.pi, rtol=0.05)


def test_region_at_outside():
    mesh = build_mesh(rectangle(n=4))
    npt.assert_array_equal(mesh.region_at([[2, 2], [-1, 0.5]]), [-1, -1])


def test_open_borders():
    borders = Border(segment((0, 0), (1, 0)), 0, 1, 1, n=3) + Border(segment((1, 0), (0, 1)), 0, 1, 2, n=3)
    with pytest.raises(MeshError):
        build_mesh(borders)


def test_triangulate_markers():
    """Subdivided segments should inherit the label of their parent segment"""
    vertices = [[0, 0], [1, 0], [1, 1], [0, 1]]
    segments = [[0, 1], [1, 2], [2, 3], [3, 0]]
    labels = [5, 6, 7, 8]
    v, t, s, l = triangulate(vertices, segments, labels, max_area=0.01)
    assert len(s) > 4
    assert set(l.tolist()) == {5, 6, 7, 8}
    mid = v[s].mean(axis=1)
    npt.assert_allclose(mid[l == 5][:, 1], 0)
    npt.assert_allclose(mid[l == 7][:, 1], 1)
