"""
Project points between 3D world coordinates and calibrated camera views, and transform the calibration of views
when their images are rotated or rescaled.
"""

from .basic import *
from .camera import CameraImage
