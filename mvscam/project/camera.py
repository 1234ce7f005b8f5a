import numpy as np

from mvscam.project.basic import to_float, compute_projection_matrix, compute_unconditioned_projection_matrix, \
    compute_projection_center, rotate_intrinsics, rotate_extrinsics

class CameraImage( object ):
    """
    A calibrated camera view. This stores the intrinsics (K) and extrinsics (R, T) of a camera, the row used to
    augment K[R|T] into an invertible 4x4 projection matrix and (optionally) the pixels of the image itself.

    Calibration is stored in double precision as flat row-major arrays. Accessors return single precision copies
    unless their name ends with _double.

    N.B. instances are not thread safe. Many threads can query the same camera image, but modifications (set_bitmap,
    set_K, set_last_row, rescale, downsize) must not happen while it is being read.
    """

    def __init__(self, path, width, height, K, R, T):
        """
        Creates a new camera image.

        *Arguments*:
         - path = the path (or other identifier) of the image. This cannot be changed later.
         - width = the width of the image (pixels).
         - height = the height of the image (pixels).
         - K = the 3x3 intrinsic matrix, as a flat row-major array of length 9 or a 3x3 array.
         - R = the 3x3 rotation matrix (world to camera coordinates).
         - T = the translation vector (length 3).
        """

        assert width > 0 and height > 0, "Error - image dimensions must be positive, not %s x %s." % (width, height)
        self._path = path
        self._width = int(width)
        self._height = int(height)

        self._K = self._copy(K, 9, 'K')
        self._R = self._copy(R, 9, 'R')
        self._T = self._copy(T, 3, 'T')
        self._last_row = None
        self._bitmap = None

    @classmethod
    def _copy(cls, arr, n, name):
        arr = np.array(arr, dtype=np.float64).ravel()
        assert arr.shape[0] == n, "Error - %s must have %d entries, not %d." % (name, n, arr.shape[0])
        return arr

    def clone(self):
        """
        Create a deep copy of this camera image (including its bitmap).
        """
        out = CameraImage(self._path, self._width, self._height, self._K, self._R, self._T)
        if self._last_row is not None:
            out.set_last_row(self._last_row)
        if self._bitmap is not None:
            out.set_bitmap(self._bitmap.copy())
        return out

    #####################################
    ## Accessors
    #####################################
    def get_path(self):
        return self._path

    def get_width(self):
        return self._width

    def get_height(self):
        return self._height

    def get_bitmap(self):
        """
        Return the bitmap associated with this image, or None if it has not been set.
        """
        return self._bitmap

    def set_bitmap(self, bitmap):
        """
        Associate pixel data with this image.

        *Arguments*:
         - bitmap = the pixel buffer. Its width() and height() must match the image dimensions.
        """
        self._check_bitmap(bitmap)
        self._bitmap = bitmap

    def _check_bitmap(self, bitmap):
        assert self._width == bitmap.width(), \
            "Error - bitmap width (%d) does not match image width (%d)." % (bitmap.width(), self._width)
        assert self._height == bitmap.height(), \
            "Error - bitmap height (%d) does not match image height (%d)." % (bitmap.height(), self._height)

    def set_K(self, K):
        """
        Replace the intrinsic matrix (flat row-major array of length 9 or 3x3 array).
        """
        self._K = self._copy(K, 9, 'K')

    def set_last_row(self, last_row):
        """
        Set the row appended to K[R|T] to form the 4x4 projection matrix. Typically this is [0, 0, 0, 1] (see
        mvscam.default_last_row), such that the homogeneous divide of a projected point gives its depth. This must be
        set before depths or projection matrices can be computed.
        """
        self._last_row = self._copy(last_row, 4, 'last_row')

    def get_last_row(self):
        """
        Return a (double precision) copy of the last row of the projection matrix, or None if it has not been set.
        """
        if self._last_row is None:
            return None
        return self._last_row.copy()

    def _check_last_row(self):
        assert self._last_row is not None, \
            "Error - last row of the projection matrix is not set for %s. Call set_last_row(...) first." % self._path

    def get_K(self):
        return to_float(self._K)

    def get_K_double(self):
        return self._K.copy()

    def get_RT(self):
        """
        Return the (reduced precision) rotation matrix (flat, length 9) and translation vector (length 3).
        """
        return to_float(self._R), to_float(self._T)

    def get_C(self):
        """
        Return the (reduced precision) projection center of this camera, in world coordinates.
        """
        return to_float(compute_projection_center(self._R, self._T))

    def get_C_double(self):
        return compute_projection_center(self._R, self._T)

    def get_P_inv_P(self):
        """
        Return the conditioned 4x4 projection matrix and its inverse as flat reduced precision arrays. See
        mvscam.project.compute_projection_matrix(...) for details.
        """
        P, inv_P = self.get_P_inv_P_double()
        return to_float(P), to_float(inv_P)

    def get_P_inv_P_double(self):
        self._check_last_row()
        return compute_projection_matrix(self._K, self._R, self._T, self._last_row)

    def get_depth(self, x, y, z):
        """
        Compute the depth of a 3D point in this camera.

        *Arguments*:
         - x, y, z = the world coordinates of the point.
        *Returns*:
         - the (reduced precision) depth, given by the third over the fourth coordinate of the projected point. This
           is inf or nan if the fourth coordinate is zero.
        """
        self._check_last_row()
        P = compute_unconditioned_projection_matrix(self._K, self._R, self._T, self._last_row)
        result = np.dot(P, np.array([x, y, z, 1.0], dtype=np.float64))
        return to_float(result[2] / result[3])[()]

    #####################################
    ## Rotation
    #####################################
    def original(self):
        """
        Return the (un-rotated) calibration of this image.

        *Returns*:
         - K, R, T, P, inv_P, C = flat reduced precision arrays.
        """
        P, inv_P = self.get_P_inv_P_double()
        C = compute_projection_center(self._R, self._T)
        return (to_float(self._K), to_float(self._R), to_float(self._T),
                to_float(P), to_float(inv_P), to_float(C))

    def _rotate(self, cnt):
        self._check_last_row()

        K = rotate_intrinsics(self._K, self._width, self._height, cnt)
        R, T = rotate_extrinsics(self._R, self._T, cnt)
        P, inv_P = compute_projection_matrix(K, R, T, self._last_row)
        C = compute_projection_center(R, T)

        return to_float(K), to_float(R), to_float(T), to_float(P), to_float(inv_P), to_float(C)

    def rotate90(self):
        """
        Return the calibration of this image after rotating it by 90 degrees, such that pixel (u, v) moves
        to (v, width - 1 - u). This camera image is not changed.

        N.B. the rotated intrinsic matrix only keeps fx, fy, cx and cy, and has K[8] = 1.

        *Returns*:
         - K, R, T, P, inv_P, C = flat reduced precision arrays.
        """
        return self._rotate(1)

    def rotate180(self):
        """
        Return the calibration of this image after rotating it by 180 degrees. See rotate90(...).
        """
        return self._rotate(2)

    def rotate270(self):
        """
        Return the calibration of this image after rotating it by 270 degrees. See rotate90(...).
        """
        return self._rotate(3)

    def rotate90_multi(self, cnt):
        """
        Return the calibration of this image after rotating it by cnt * 90 degrees.

        *Arguments*:
         - cnt = the number of 90 degree rotations. Negative and values > 3 wrap around (cnt % 4).
        *Returns*:
         - K, R, T, P, inv_P, C = flat reduced precision arrays.
        """
        cnt = cnt % 4
        if cnt == 0:
            return self.original()
        elif cnt == 1:
            return self.rotate90()
        elif cnt == 2:
            return self.rotate180()
        return self.rotate270()

    def print_rotation(self, cnt):
        """
        Print the original and rotated calibration of this image. Useful for checking rotations by eye.

        *Arguments*:
         - cnt = the number of 90 degree rotations.
        """
        K, R, T, P, inv_P, C = self.rotate90_multi(cnt)
        with np.printoptions(precision=4, suppress=True):
            print("rot=0, K: %s" % to_float(self._K).reshape(3, 3))
            print("width, height: %d, %d" % (self._width, self._height))
            print("rot=%d, K: %s" % (cnt, K.reshape(3, 3)))
            print("rot=0, R: %s" % to_float(self._R).reshape(3, 3))
            print("rot=%d, R: %s" % (cnt, R.reshape(3, 3)))
            print("rot=0, T: %s" % to_float(self._T))
            print("rot=%d, T: %s" % (cnt, T))
            print("last row: %s" % to_float(self._last_row))
            print("rot=%d, P: %s" % (cnt, P.reshape(4, 4)))
            print("rot=%d, inv_P: %s" % (cnt, inv_P.reshape(4, 4)))

    def rotated(self, cnt):
        """
        Create a new camera image containing a copy of this one rotated by cnt * 90 degrees. Unlike rotate90_multi(...)
        this returns a full camera image (double precision calibration, swapped dimensions for odd cnt and a rotated
        copy of the bitmap, if one is set).

        *Arguments*:
         - cnt = the number of 90 degree rotations.
        *Returns*:
         - a new CameraImage instance.
        """
        self._check_last_row()
        cnt = cnt % 4
        if cnt == 0:
            return self.clone()

        K = rotate_intrinsics(self._K, self._width, self._height, cnt)
        R, T = rotate_extrinsics(self._R, self._T, cnt)
        if cnt % 2 == 1:
            width, height = self._height, self._width
        else:
            width, height = self._width, self._height

        out = CameraImage(self._path, width, height, K, R, T)
        out.set_last_row(self._last_row)
        if self._bitmap is not None:
            bitmap = self._bitmap.copy()
            bitmap.rotate90(cnt)
            out.set_bitmap(bitmap)
        return out

    #####################################
    ## Rescaling
    #####################################
    def rescale(self, factor_x, factor_y=None, vb=False):
        """
        Rescale this image (and its bitmap, if set) and update the intrinsics accordingly. The new dimensions are
        rounded half up and the intrinsics scaled by the actual (rounded) change in size. Both are computed in double
        precision, so products lying exactly on a .5 boundary in single precision may round differently than in
        single precision implementations.

        *Arguments*:
         - factor_x = the scale factor to apply in x.
         - factor_y = the scale factor to apply in y. Default is None (use factor_x).
         - vb = True if the change in dimensions should be printed. Default is False.
        """
        if factor_y is None:
            factor_y = factor_x

        new_width = int(np.floor(self._width * factor_x + 0.5))
        new_height = int(np.floor(self._height * factor_y + 0.5))
        assert new_width > 0 and new_height > 0, "Error - cannot rescale %s from %d x %d to %d x %d pixels." % (
            self._path, self._width, self._height, new_width, new_height)

        if self._bitmap is not None:
            self._bitmap.rescale(new_width, new_height)

        # actual scale (after rounding dimensions)
        scale_x = new_width / float(self._width)
        scale_y = new_height / float(self._height)
        self._K[0] *= scale_x
        self._K[2] *= scale_x
        self._K[4] *= scale_y
        self._K[5] *= scale_y

        if vb:
            print("Rescaled %s from %d x %d to %d x %d pixels." % (self._path, self._width, self._height,
                                                                   new_width, new_height))
        self._width = new_width
        self._height = new_height
        if self._bitmap is not None:
            self._check_bitmap(self._bitmap)

    def downsize(self, max_width, max_height, vb=False):
        """
        Shrink this image (preserving its aspect ratio) such that it fits within max_width x max_height pixels.
        Images that already fit are left unchanged (never upscaled).

        *Arguments*:
         - max_width = the maximum width (pixels).
         - max_height = the maximum height (pixels).
         - vb = True if the change in dimensions should be printed. Default is False.
        """
        if self._width <= max_width and self._height <= max_height:
            return
        factor_x = max_width / float(self._width)
        factor_y = max_height / float(self._height)
        self.rescale(min(factor_x, factor_y), vb=vb)
