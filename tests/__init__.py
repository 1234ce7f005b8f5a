import numpy as np
from scipy.spatial.transform import Rotation
import mvscam
from mvscam import CameraImage, Bitmap

# functions for creating test datasets
def genCamera( width=1000, height=1000, K=None, R=None, T=None, last_row=mvscam.default_last_row ):
    if K is None:
        K = [1000., 0., 500., 0., 1000., 500., 0., 0., 1.]
    if R is None:
        R = np.eye(3)
    if T is None:
        T = [0., 0., 5.]
    cam = CameraImage("image.png", width, height, K, R, T)
    if last_row is not None:
        cam.set_last_row(last_row)
    return cam

def genRandomCamera( width=640, height=480 ):
    R = Rotation.random().as_matrix()
    C = np.random.rand(3) * 10 - 5
    T = -np.dot(R, C)
    K = [500. + 100 * np.random.rand(), 0., 0.5 * width, 0., 500. + 100 * np.random.rand(), 0.5 * height, 0., 0., 1.]
    return genCamera(width, height, K, R, T)

def genBitmap( width=40, height=30, nbands=3 ):
    return Bitmap( np.random.rand(width, height, nbands) )
