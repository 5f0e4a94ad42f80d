import os
import shutil

import numpy as np


def remove_content(location, names):
    removed = []
    for item in sorted(os.listdir(location)):
        if item in names:
            path = os.path.join(location, item)
            if os.path.isdir(path):
                shutil.rmtree(path)
            else:
                os.remove(path)
            removed.append(path)
    return removed


def preview(pixels, width, height, step=(32, 16)):
    """Low-resolution text rendering of an image, one character per block."""
    image = np.asarray(pixels).reshape(height, width, 3)
    lines = []
    for row in np.mean(image[::step[0], ::step[1]], axis=2):
        lines.append("".join(["@" if x > 1e-4 else "." for x in row]))
    return lines
