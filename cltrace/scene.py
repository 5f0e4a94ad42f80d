import numpy as np
from pyopencl import cltypes


# OpenCL stores float3 as float4, the fourth lane (`padding0`) is never read
LANES = ("s0", "s1", "s2")

# Mirrors the kernel-side struct. The three floats after the radius align
# `position` to 16 bytes exactly as the device compiler does.
sphere_dtype = np.dtype([
    ("radius", cltypes.float),
    ("padding", cltypes.float, (3,)),
    ("position", cltypes.float3),
    ("color", cltypes.float3),
    ("emission", cltypes.float3),
])

VECTORS = ("position", "color", "emission")


def set_vec(field, index, value):
    for lane, x in zip(LANES, value):
        field[lane][index] = x

def get_vec(field, index):
    return tuple(float(field[lane][index]) for lane in LANES)

def vec_array(field):
    return np.stack([field[lane] for lane in LANES], axis=-1)


def make_scene(spheres):
    records = np.zeros(len(spheres), dtype=sphere_dtype)
    for i, (radius, position, color, emission) in enumerate(spheres):
        records["radius"][i] = radius
        for key, value in zip(VECTORS, (position, color, emission)):
            set_vec(records[key], i, value)
    return records

def unpack_scene(records):
    return [
        (float(records["radius"][i]),) + tuple(
            get_vec(records[key], i) for key in VECTORS
        )
        for i in range(len(records))
    ]


def reference_scene():
    wall = (0.9, 0.8, 0.7)
    black = (0.0, 0.0, 0.0)
    return make_scene([
        (200.0, (-200.6, 0.0, 0.0), (0.75, 0.25, 0.25), black), # left wall
        (200.0, (200.6, 0.0, 0.0), (0.25, 0.25, 0.75), black), # right wall
        (200.0, (0.0, -200.4, 0.0), wall, black), # floor
        (200.0, (0.0, 200.4, 0.0), wall, black), # ceiling
        (200.0, (0.0, 0.0, -200.4), wall, black), # back wall
        (200.0, (0.0, 0.0, 202.0), wall, black), # front wall
        (0.16, (-0.25, -0.24, -0.1), wall, black), # left sphere
        (0.16, (0.25, -0.24, 0.1), wall, black), # right sphere
        (1.0, (0.0, 1.36, 0.0), black, (9.0, 8.0, 6.0)), # light source
    ])
