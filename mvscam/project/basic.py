import numpy as np

import mvscam

ROT90 = np.array([[0., 1., 0.],
                  [-1., 0., 0.],
                  [0., 0., 1.]])
"""In-plane rotation applied to camera coordinates when an image is rotated by 90 degrees."""

def to_float( arr ):
    """
    Convert an array to the reduced precision used for output (see mvscam.float_type). Values are cast element-wise
    rather than rounded to any number of decimals.
    """
    return np.asarray(arr).astype(mvscam.float_type)

def compute_projection_matrix( K, R, T, last_row ):
    """
    Compute the 4x4 projection matrix of a camera and its inverse. The 3x4 matrix K[R|T] is augmented with last_row
    to make it square. To improve numerical stability the matrix is multiplied by condition_scale / max(P) before
    it is inverted, and the inverse is then (independently) multiplied by condition_scale / max(inv_P).

    N.B. max(...) is the signed (not absolute) maximum coefficient. Singular matrices are not checked for, so
    degenerate calibrations give meaningless results (or a numpy LinAlgError).

    *Arguments*:
     - K = the 3x3 intrinsic matrix (flat row-major array of length 9 or 3x3 array).
     - R = the 3x3 rotation matrix (world to camera).
     - T = the translation vector (length 3).
     - last_row = the 4th row of the projection matrix (length 4).
    *Returns*:
     - P, inv_P = flat (row-major) arrays of length 16 containing the conditioned projection matrix
                  and its conditioned inverse (double precision).
    """

    K = np.asarray(K, dtype=np.float64).reshape(3, 3)
    R = np.asarray(R, dtype=np.float64).reshape(3, 3)
    T = np.asarray(T, dtype=np.float64).reshape(3, 1)

    # 4 by 4 projection matrix
    P = np.vstack([np.dot(K, np.hstack([R, T])),
                   np.asarray(last_row, dtype=np.float64).reshape(1, 4)])

    # scale all the numbers to lie in [0, condition_scale]
    P = P * (mvscam.condition_scale / np.max(P))
    inv_P = np.linalg.inv(P)
    inv_P = inv_P * (mvscam.condition_scale / np.max(inv_P))

    return P.ravel(), inv_P.ravel()

def compute_unconditioned_projection_matrix( K, R, T, last_row ):
    """
    Compute the raw 4x4 projection matrix [K[R|T]; last_row] without any conditioning. Returns a 4x4 array.
    """
    P_3by4 = np.zeros((3, 4))
    P_3by4[:, :3] = np.asarray(R, dtype=np.float64).reshape(3, 3)
    P_3by4[:, 3] = np.asarray(T, dtype=np.float64).ravel()
    P_3by4 = np.dot(np.asarray(K, dtype=np.float64).reshape(3, 3), P_3by4)

    P = np.zeros((4, 4))
    P[:3, :] = P_3by4
    P[3, :] = np.asarray(last_row, dtype=np.float64).ravel()
    return P

def compute_projection_center( R, T ):
    """
    Compute the projection center (camera position in world coordinates), C = -R^T T.

    *Arguments*:
     - R = the 3x3 rotation matrix (world to camera).
     - T = the translation vector (length 3).
    *Returns*:
     - a double precision array of length 3.
    """
    R = np.asarray(R, dtype=np.float64).reshape(3, 3)
    T = np.asarray(T, dtype=np.float64).ravel()
    return -np.dot(R.T, T)

def rotate_intrinsics( K, width, height, cnt ):
    """
    Remap an intrinsic matrix such that it describes the image after rotating it by cnt * 90 degrees.

    N.B. K[8] is always set to 1.0 and all off-diagonal terms (e.g. skew) are dropped, so rotating
    a camera with skew or a non-unit K[8] does not give a geometrically exact result.

    *Arguments*:
     - K = the intrinsic matrix (flat row-major array of length 9).
     - width = the width of the un-rotated image (pixels).
     - height = the height of the un-rotated image (pixels).
     - cnt = the number of 90 degree rotations. Must be 1, 2 or 3.
    *Returns*:
     - a new flat intrinsic matrix (double precision).
    """
    K = np.asarray(K, dtype=np.float64).ravel()
    fx, cx, fy, cy = K[0], K[2], K[4], K[5]

    K_new = np.zeros(9)
    if cnt == 1:
        K_new[0] = fy
        K_new[2] = cy
        K_new[4] = fx
        K_new[5] = -cx + width - 1
    elif cnt == 2:
        K_new[0] = fx
        K_new[2] = -cx + width - 1
        K_new[4] = fy
        K_new[5] = -cy + height - 1
    elif cnt == 3:
        K_new[0] = fy
        K_new[2] = -cy + height - 1
        K_new[4] = fx
        K_new[5] = cx
    else:
        assert False, "Error - rotation count must be 1, 2 or 3, not %s." % cnt
    K_new[8] = 1.0

    return K_new

def rotate_extrinsics( R, T, cnt ):
    """
    Rotate the camera coordinate system of a pose by cnt * 90 degrees around the view axis.

    *Returns*:
     - R, T = flat arrays (lengths 9 and 3) containing ROT90^cnt R and ROT90^cnt T.
    """
    rot = np.linalg.matrix_power(ROT90, cnt)
    R = np.dot(rot, np.asarray(R, dtype=np.float64).reshape(3, 3))
    T = np.dot(rot, np.asarray(T, dtype=np.float64).ravel())
    return R.ravel(), T

def compute_relative_pose( R1, T1, R2, T2 ):
    """
    Compute the pose of camera 2 relative to camera 1, such that x2 = R x1 + T maps
    camera 1 coordinates to camera 2 coordinates. This is computed in reduced precision and is only intended for
    estimating (plane induced) homographies between views.

    *Arguments*:
     - R1, T1 = the rotation (length 9) and translation (length 3) of the first camera.
     - R2, T2 = the rotation (length 9) and translation (length 3) of the second camera.
    *Returns*:
     - R, T = flat reduced-precision arrays with R = R2 R1^T and T = T2 - R T1.
    """
    R1 = to_float(R1).reshape(3, 3)
    R2 = to_float(R2).reshape(3, 3)
    T1 = to_float(T1).ravel()
    T2 = to_float(T2).ravel()

    R = np.dot(R2, R1.T)
    T = T2 - np.dot(R, T1)
    return R.ravel(), T
