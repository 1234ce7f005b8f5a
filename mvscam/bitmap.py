"""
Store and resample the pixels associated with a camera view.
"""

import numpy as np
import cv2


class Bitmap( object ):
    """
    A class for image pixel data. The pixels are stored in a numpy array such that data[x][y][band] gives each pixel
    value, so that width (x) is the first and height (y) the second dimension of the data array.
    """

    def __init__(self, data):
        """
        Args:
            data (ndarray): a numpy array such that data[x][y][band] gives each pixel value. Two dimensional arrays
                            are treated as single band images.
        """

        assert isinstance(data, np.ndarray), "Error - bitmap data must be a numpy array, not %s." % type(data)
        if len(data.shape) == 2:
            data = data[:, :, None] # single band image
        assert len(data.shape) == 3, "Error - bitmap data must have shape (width, height, bands), not %s." % str(data.shape)
        self.data = data

    def copy(self):
        """
        Make a deep copy of this bitmap instance.

        Returns:
            a new Bitmap instance.
        """
        return Bitmap( self.data.copy() )

    def width(self):
        """
        Return number of pixels in x (first dimension of data array)
        """
        return self.data.shape[0]

    def height(self):
        """
        Return number of pixels in y (second dimension of data array)
        """
        return self.data.shape[1]

    def band_count(self):
        """
        Return the number of bands (channels) in this bitmap.
        """
        return self.data.shape[2]

    def rescale(self, new_width, new_height, interpolation=cv2.INTER_LINEAR):
        """
        Resample this bitmap to the specified dimensions with opencv.

        Args:
            new_width (int): the new number of pixels in x.
            new_height (int): the new number of pixels in y.
            interpolation (int): opencv interpolation method. Default is cv2.INTER_LINEAR.
        """

        assert new_width > 0 and new_height > 0, "Error - cannot rescale bitmap to %d x %d pixels." % (new_width, new_height)
        data = cv2.resize(np.ascontiguousarray(self.data), (int(new_height), int(new_width)), interpolation=interpolation)
        if len(data.shape) == 2:
            data = data[:, :, None] # opencv drops the band axis of single band images
        self.data = data

    def rotate90(self, cnt=1):
        """
        Rotate this bitmap by a multiple of 90 degrees. This matches the rotation applied to the calibration by
        CameraImage.rotate90(...), such that pixel (u, v) moves to (v, width - 1 - u).

        Args:
            cnt (int): the number of 90 degree rotations to apply. Default is 1.
        """
        for i in range(cnt % 4):
            self.data = np.transpose( np.flip(self.data, axis=0), (1, 0, 2) ).copy()
