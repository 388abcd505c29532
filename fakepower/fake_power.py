"""Fake power theorem

Consider a conductor with two electrodes. The true potential u solves

    div(sigma grad u) = 0,  u = V1 on the first electrode, u = V0 on the second

and drives a current density J = -sigma grad u. Now take any test potential v that is one on the
first electrode and zero on the second, with test field E' = -grad v. Since J is divergence free,
and has no normal component on the insulating boundaries,

    int J . E' dA = -int_1 J . n ds = I

That is, the power J dissipates against an arbitrary, 'fake', field with a unit voltage drop
equals the current I entering through the first electrode. Here the test potential is the solution
of the same problem with a random conductivity; any other choice would do.

The geometry is a rectangular conductor split by a wavy interface into two halves of equal conductivity,
with a nearly insulating circular inclusion in the right half. The high voltage electrode is
the left side (label 1), the ground electrode the right side (label 20).

On the discrete level, the fake power equals the reaction current of the finite element solution,
regardless of the test conductivity. The boundary flux of the piecewise constant current density
agrees with it closely at every refinement level for this geometry, since the potential is nearly
linear along the electrode; both approach the exact current as the mesh is refined.
"""

import logging
from collections import namedtuple, OrderedDict

import numpy as np

from fakepower.boundary import Border
from fakepower.fields import electric_field, current_density, magnitude
from fakepower.forms import solve
from fakepower.integrate import integrate_area, boundary_flux
from fakepower.math import linalg
from fakepower.mesher import build_mesh
from fakepower.regions import RegionMap
from fakepower.synthetic import segment
from fakepower.space import FunctionSpace, P0, P1

logger = logging.getLogger(__name__)

HIGH = 1        # label of the high voltage electrode
GROUND = 20     # label of the ground electrode
BOTTOM = 2
TOP = 3
INTERFACE = 10
INCLUSION = 30
INSULATING = (BOTTOM, TOP)

HIGH_VOLTAGE = 5.
LOW_VOLTAGE = 0.

# a point inside each named region
SEEDS = OrderedDict([
    ('left', (0.5, 0.5)),
    ('right', (2.8, 0.5)),
    ('inclusion', (2.25, 0.5)),
])

# conductivity of the true problem
SIGMA = OrderedDict([
    ('left', 1e1),
    ('right', 1e1),
    ('inclusion', 1e-6),
])

# range of the random conductivity of the test problem
TEST_SIGMA_RANGE = (0.1, 1.0)


Result = namedtuple('Result', [
    'mesh', 'regions',
    'test_conductivity', 'test_potential', 'test_field',
    'true_conductivity', 'true_potential', 'current_density', 'current_magnitude',
    'fake_power', 'current',
])


def borders():
    """Boundary curves of the conductor, with their segment counts at unit refinement

    Returns
    -------
    BorderSet
    """
    r, c = 0.25, (2.25, 0.5)
    return (
        Border(segment((0, 1), (0, 0)), 0, 1, HIGH, n=10, name='high') +
        Border(segment((0, 0), (1.5, 0)), 0, 1, BOTTOM, n=15, name='bottom_left') +
        Border(segment((1.5, 0), (3, 0)), 0, 1, BOTTOM, n=15, name='bottom_right') +
        Border(segment((3, 0), (3, 1)), 0, 1, GROUND, n=10, name='ground') +
        Border(segment((3, 1), (1.5, 1)), 0, 1, TOP, n=15, name='top_right') +
        Border(segment((1.5, 1), (0, 1)), 0, 1, TOP, n=15, name='top_left') +
        Border(lambda t: (1.5 + 0.2 * np.sin(2 * np.pi * t), t), 0, 1, INTERFACE, n=12, name='interface') +
        Border(lambda t: (c[0] + r * np.cos(t), c[1] + r * np.sin(t)), 0, 2 * np.pi, INCLUSION, n=16, name='inclusion')
    )


def build_domain(refinement=1, seeds=SEEDS):
    """Mesh the conductor and resolve its named regions

    Parameters
    ----------
    refinement : int
    seeds : dict of (str, tuple of float)

    Returns
    -------
    mesh : Mesh
    regions : RegionMap
    """
    mesh = build_mesh(borders(), refinement=refinement)
    regions = RegionMap.resolve(mesh, seeds)
    logger.info('region ids: %s', regions.ids)
    return mesh, regions


def solve_test_problem(mesh, rng=None, sigma_range=TEST_SIGMA_RANGE):
    """Test potential with a unit voltage drop, under a random per-triangle conductivity

    Parameters
    ----------
    mesh : Mesh
    rng : numpy.random.Generator or int, optional
    sigma_range : tuple of float

    Returns
    -------
    conductivity : Field
        P0
    potential : Field
        P1
    """
    low, high = sigma_range
    conductivity = FunctionSpace(mesh, P0).random(rng, low=low, high=high)
    potential = solve(FunctionSpace(mesh, P1), conductivity, {HIGH: 1., GROUND: 0.})
    return conductivity, potential


def true_conductivity(regions, sigma=SIGMA):
    """Piecewise constant conductivity by named region

    Returns
    -------
    Field
        P0
    """
    return FunctionSpace(regions.mesh, P0).field(regions.piecewise(sigma))


def solve_true_problem(regions, sigma=SIGMA, high_voltage=HIGH_VOLTAGE, low_voltage=LOW_VOLTAGE):
    """Potential under the physical conductivity and applied voltages

    Returns
    -------
    conductivity : Field
        P0
    potential : Field
        P1
    """
    conductivity = true_conductivity(regions, sigma)
    potential = solve(FunctionSpace(regions.mesh, P1), conductivity, {HIGH: high_voltage, GROUND: low_voltage})
    return conductivity, potential


def fake_power(mesh, current, test_field):
    """Area integral of the true current density dotted with the test electric field

    Parameters
    ----------
    mesh : Mesh
    current : ndarray, [n_triangles, 2], float
    test_field : ndarray, [n_triangles, 2], float

    Returns
    -------
    float
    """
    return integrate_area(mesh, linalg.dot(current, test_field))


def electrode_current(mesh, current, label=HIGH):
    """Current entering the conductor through a labeled electrode

    Returns
    -------
    float
        minus the outward flux of the current density
    """
    return -boundary_flux(mesh, label, current)


def run(refinement=1, seed=None, high_voltage=HIGH_VOLTAGE, low_voltage=LOW_VOLTAGE, sigma=SIGMA, plot=False):
    """Compute the electrode current in two ways

    Parameters
    ----------
    refinement : int
        mesh density multiplier
    seed : int or numpy.random.Generator, optional
        for the random test conductivity
    high_voltage : float
        potential of the electrode labeled 1
    low_voltage : float
        potential of the electrode labeled 20
    sigma : dict of (str, float)
        conductivity per named region
    plot : bool
        if True, figures of each stage are drawn with matplotlib

    Returns
    -------
    Result
    """
    mesh, regions = build_domain(refinement)

    test_sigma, test_potential = solve_test_problem(mesh, rng=seed)
    test_field = electric_field(test_potential)

    true_sigma, true_potential = solve_true_problem(regions, sigma, high_voltage, low_voltage)
    J = current_density(true_potential, true_sigma)
    J_magnitude = magnitude(J, FunctionSpace(mesh, P0))

    result = Result(
        mesh=mesh, regions=regions,
        test_conductivity=test_sigma, test_potential=test_potential, test_field=test_field,
        true_conductivity=true_sigma, true_potential=true_potential,
        current_density=J, current_magnitude=J_magnitude,
        fake_power=fake_power(mesh, J, test_field),
        current=electrode_current(mesh, J, HIGH),
    )
    logger.info('fake power %.10g, current %.10g', result.fake_power, result.current)

    if plot:
        plot_result(result)
    return result


def plot_result(result):
    """Draw the stages of a run; the caller decides whether to show or close the figures"""
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(2, 3, figsize=(15, 7))
    axes = axes.flatten()
    result.mesh.plot(ax=axes[0], title='mesh, regions and labels', plot_regions=True)
    result.test_conductivity.plot(ax=axes[1], title='test conductivity')
    result.test_potential.plot(ax=axes[2], title='test potential')
    result.true_conductivity.mesh.plot_p0(np.log10(result.true_conductivity.values), ax=axes[3], title='log10 true conductivity')
    result.true_potential.plot(ax=axes[4], title='true potential')
    result.mesh.plot_vectors(result.current_density, ax=axes[5], title='true current density')
    fig.tight_layout()
    return fig
