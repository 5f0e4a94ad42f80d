import numpy as np
import pyopencl as cl

from cltrace.resources import ResourceError, color_dtype
from cltrace.scene import vec_array


class Collector:
    def __init__(self, width, height):
        self.width = width
        self.height = height
        # The only host-side image buffer of a run
        self.output = np.zeros(width * height, dtype=color_dtype)

    def readback(self, queue, output_buf):
        try:
            cl.enqueue_copy(queue, self.output, output_buf, is_blocking=True)
        except cl.Error as e:
            raise ResourceError(
                "Cannot read {}x{} image back from device".format(self.width, self.height)
            ) from e
        return self.output

    def pixels(self):
        return vec_array(self.output)

    def release(self):
        self.output = None
