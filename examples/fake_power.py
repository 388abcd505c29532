"""Tutorial: the fake power theorem on a conductor with an interface and an insulating inclusion

The current through the left electrode is computed twice; by dotting the true current density
with the electric field of an unrelated test problem, and by integrating the current density
over the electrode. Refining the mesh brings the two together.
"""

import numpy as np
import matplotlib.pyplot as plt

from fakepower import fake_power
from fakepower.integrate import boundary_flux


if __name__ == "__main__":
    for refinement in [1, 2, 4]:
        result = fake_power.run(refinement=refinement, seed=refinement)
        print(refinement, result.mesh.n_triangles, result.fake_power, result.current)

    # the insulating boundaries should see next to no current
    for label in fake_power.INSULATING:
        print('leak through', label, boundary_flux(result.mesh, label, result.current_density))

    # a different test field gives the same fake power
    other = fake_power.solve_test_problem(result.mesh, rng=np.random.default_rng(42), sigma_range=(1, 100))[1]
    print(fake_power.fake_power(result.mesh, result.current_density, -other.gradient()))

    fake_power.plot_result(result)
    plt.show()
