"""Discrete topology module

"""
import numpy as np

# dtypes enforced for indices referring to elements;
# 16 bits is too few for many applications, but 32 should suffice for almost all
# these types are used globally throughout the package; changing them here should change them everywhere
index_dtype = np.int32
label_dtype = np.int32


class MeshError(Exception):
    pass
