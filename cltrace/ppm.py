import numpy as np

from cltrace.config import MAX_CHANNEL


def to_int(x, maxval=MAX_CHANNEL):
    # Clamp to [0, 1] then round to the nearest level, no gamma
    return (np.clip(np.asarray(x, dtype=np.float64), 0.0, 1.0) * maxval + 0.5).astype(np.int64)


def write_ppm(path, pixels, width, height, maxval=MAX_CHANNEL):
    pixels = np.asarray(pixels).reshape(-1, 3)
    if len(pixels) != width * height:
        raise ValueError("Expected {} pixels for a {}x{} image, got {}".format(
            width * height, width, height, len(pixels)
        ))
    levels = to_int(pixels, maxval)
    with open(path, "w") as f:
        f.write("P3\n{} {}\n{}\n".format(width, height, maxval))
        for r, g, b in levels:
            f.write("{} {} {}\n".format(r, g, b))


def read_ppm(path):
    with open(path, "r") as f:
        tokens = f.read().split()
    if not tokens or tokens[0] != "P3":
        raise ValueError("Not a plain PPM file: '{}'".format(path))
    width, height, maxval = [int(t) for t in tokens[1:4]]
    values = np.array([int(t) for t in tokens[4:]], dtype=np.int64)
    if len(values) != 3 * width * height:
        raise ValueError("Truncated PPM file: '{}'".format(path))
    return width, height, maxval, values.reshape(-1, 3)
