"""Generation of some simple labeled borders"""

import numpy as np

from fakepower.boundary import Border


def segment(a, b):
    """Straight line from a to b, parametrized over [0, 1]"""
    a, b = np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)
    return lambda t: (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def rectangle(width=1., height=1., n=8, labels=(1, 2, 3, 4)):
    """Axis aligned rectangle with its lower left corner at the origin

    Parameters
    ----------
    width : float
    height : float
    n : int
        number of segments per side
    labels : tuple of int
        labels of the left, bottom, right and top sides, in that order

    Returns
    -------
    BorderSet
        traversed counter-clockwise
    """
    w, h = width, height
    left, bottom, right, top = labels
    return (
        Border(segment((0, h), (0, 0)), 0, 1, left, n=n, name='left') +
        Border(segment((0, 0), (w, 0)), 0, 1, bottom, n=n, name='bottom') +
        Border(segment((w, 0), (w, h)), 0, 1, right, n=n, name='right') +
        Border(segment((w, h), (0, h)), 0, 1, top, n=n, name='top')
    )


def circle(center, radius, label, n=16):
    cx, cy = center
    return Border(lambda t: (cx + radius * np.cos(t), cy + radius * np.sin(t)), 0, 2 * np.pi, label, n=n, name='circle')
