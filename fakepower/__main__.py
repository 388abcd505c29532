"""Command line entry point

    python -m fakepower --refinement 2

Prints the region ids found at the sample points, followed by the electrode current
as computed from the fake power and from the boundary flux.
"""

import argparse
import logging
import sys

from fakepower import fake_power
from fakepower.regions import RegionError
from fakepower.solvers import SolverError
from fakepower.topology import MeshError

logger = logging.getLogger('fakepower')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='fakepower',
        description='Compute the current through a conductor by the fake power theorem and by boundary flux')
    parser.add_argument('--refinement', type=int, default=1,
                        help='mesh density multiplier (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed of the random test conductivity')
    parser.add_argument('--high-voltage', type=float, default=fake_power.HIGH_VOLTAGE,
                        help='potential of the electrode labeled {} (default: %(default)s)'.format(fake_power.HIGH))
    parser.add_argument('--low-voltage', type=float, default=fake_power.LOW_VOLTAGE,
                        help='potential of the electrode labeled {} (default: %(default)s)'.format(fake_power.GROUND))
    parser.add_argument('--plot', action='store_true',
                        help='show figures of the mesh and fields')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='log progress and solver details')
    args = parser.parse_args(argv)
    if args.refinement < 1:
        parser.error('refinement should be a positive integer')
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(name)s: %(message)s',
    )

    try:
        result = fake_power.run(
            refinement=args.refinement,
            seed=args.seed,
            high_voltage=args.high_voltage,
            low_voltage=args.low_voltage,
            plot=args.plot,
        )
    except (MeshError, RegionError, SolverError) as e:
        logger.error('%s: %s', type(e).__name__, e)
        return 1

    regions = result.regions
    print('Region points = ' + ' '.join('{}={}'.format(n, tuple(regions.seeds[n])) for n in regions))
    print('Region ids    = ' + ' '.join('{}={}'.format(n, regions[n]) for n in regions))
    print('Fake energy = {}'.format(result.fake_power))
    print('Current     = {}'.format(result.current))

    if args.plot:
        import matplotlib.pyplot as plt
        plt.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
