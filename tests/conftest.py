import os

import pytest
import pyopencl as cl

from cltrace.context import ComputeContext


ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
KERNEL_PATH = os.path.join(ROOT, "opencl_kernel.cl")

BROKEN_KERNEL = """
__kernel void render_kernel(__global const float *spheres, const int width,
                            const int height, const int count,
                            __global float *output) {
    output[get_global_id(0)] = spheres[0] +
}
"""


def first_device():
    try:
        platforms = cl.get_platforms()
    except cl.Error:
        return None
    for p in platforms:
        try:
            devices = p.get_devices()
        except cl.Error:
            continue
        if devices:
            return devices[0]
    return None


@pytest.fixture(scope="session")
def device():
    d = first_device()
    if d is None:
        pytest.skip("no OpenCL device available")
    return d

@pytest.fixture
def ctx(device):
    with ComputeContext(device) as c:
        yield c

@pytest.fixture
def broken_kernel(tmp_path):
    path = tmp_path / "broken.cl"
    path.write_text(BROKEN_KERNEL)
    return str(path)

@pytest.fixture
def always_first():
    return lambda prompt: "1"

# Same signature as `render_kernel`, writes back what it was given
ECHO_KERNEL = """
typedef struct Sphere {
    float radius;
    float pad1, pad2, pad3;
    float3 pos;
    float3 color;
    float3 emission;
} Sphere;

__kernel void render_kernel(__global const Sphere *spheres, const int width,
                            const int height, const int sphere_count,
                            __global float3 *output) {
    int id = get_global_id(0);
    if (id >= width * height) return;
    const __global Sphere *last = &spheres[sphere_count - 1];
    if (id == 0)
        output[id] = (float3)((float)width, (float)height, (float)sphere_count);
    else
        output[id] = (float3)(last->radius, last->pos.y, last->emission.z);
}
"""

# Valid OpenCL, but not the `render_kernel` argument list
WRONG_SIGNATURE_KERNEL = """
__kernel void render_kernel(__global float *output, const int width) {
    output[get_global_id(0)] = (float)width;
}
"""


@pytest.fixture
def echo_kernel(tmp_path):
    path = tmp_path / "echo.cl"
    path.write_text(ECHO_KERNEL)
    return str(path)

@pytest.fixture
def wrong_signature_kernel(tmp_path):
    path = tmp_path / "wrong.cl"
    path.write_text(WRONG_SIGNATURE_KERNEL)
    return str(path)
