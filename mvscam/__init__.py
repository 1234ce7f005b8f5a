"""
A small python toolbox for managing calibrated camera views in multi-view stereo reconstructions.

-----------

Each view is represented by a `mvscam.project.CameraImage`, which stores the intrinsic (K) and extrinsic (R, T)
calibration of a camera together with an (optional) `mvscam.Bitmap` containing its pixels. From these the
camera image derives:

- the 4x4 projection matrix (the 3x4 matrix K[R|T] augmented with an extra row) and its inverse,
- the projection center (camera position in world coordinates),
- the depth of 3D points,
- calibrations consistent with rotating the image by multiples of 90 degrees,
- calibrations consistent with rescaling or downsizing the image.

All calibration is stored and computed in double precision, but (to match the GPU kernels that consume them) most
accessors return single precision copies. Matrices are stored and returned as flat, row-major arrays, such that
K[0] = fx, K[2] = cx, K[4] = fy and K[5] = cy.

-------

# Documentation

Most modules, classes and functions in *mvscam* have docstrings. These can be viewed in a notebook or
python console using the help(...) function or by typing "?" after a class or function name.
"""

# disable numpy multithreading
import os
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"
os.environ["VECLIB_MAXIMUM_THREADS"] = "1"
os.environ["NUMEXPR_NUM_THREADS"] = "1"

import numpy as np

###########################################
## Package settings
###########################################
condition_scale = 10.0
"""
Largest coefficient of projection matrices (and their inverses) after conditioning. Each matrix is multiplied by
condition_scale / max(matrix) before (and after) inversion to improve numerical stability.
"""

default_last_row = (0., 0., 0., 1.)
"""Row appended to K[R|T] such that the homogeneous divide (third over fourth coordinate) of a projected point gives its depth."""

float_type = np.float32
"""Reduced precision type returned by the low-precision accessors of CameraImage."""

#import basic data classes
from .bitmap import Bitmap
from .project import CameraImage
