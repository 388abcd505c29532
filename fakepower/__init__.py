"""
Fake power theorem in python

A small two-dimensional finite-element toolkit, built around a single demonstration:
the total current through a conductor can be computed either as a boundary flux of the
current density through an electrode, or as the area integral of the current density
dotted with any test electric field that has a unit voltage drop between the same electrodes.

The toolkit covers what that demonstration needs; labeled parametric boundaries,
constrained triangulation into material regions, piecewise linear and piecewise constant
function spaces, a weighted laplacian solver with dirichlet conditions, and area and boundary integrals.
All operations are vectorized over the elements of the mesh.

"""
