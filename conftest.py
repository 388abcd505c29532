import os

import pytest


def pytest_addoption(parser):
    parser.addoption("--show_plot", action="store", default=os.environ.get('SHOW_PLOT', 'False'),
        help="show plots: True or False")


def pytest_configure(config):
    if config.getoption("--show_plot") != 'True':
        # headless runs should never need a display
        import matplotlib
        matplotlib.use('Agg')


@pytest.fixture
def show_plot(request):
    """This callable fixture allows us to either show plots when running test for visual inspection,
    or close them and at least test the absence of exceptions when running test automated"""
    import matplotlib.pyplot as plt
    if request.config.getoption("--show_plot") == 'True':
        return plt.show
    else:
        return lambda: plt.close('all')
