import pyopencl as cl
from pyopencl import cltypes

from cltrace.scene import sphere_dtype


class ResourceError(Exception):
    def __init__(self, message):
        super().__init__(message)


color_dtype = cltypes.float3

mf = cl.mem_flags


def allocate(ctx, flags, size, what):
    try:
        return cl.Buffer(ctx.context, flags, size=size)
    except cl.Error as e:
        raise ResourceError(
            "Cannot allocate {} buffer of {} bytes".format(what, size)
        ) from e

def allocate_output_buffer(ctx, width, height):
    size = width * height * color_dtype.itemsize
    return allocate(ctx, mf.WRITE_ONLY, size, "output")

def allocate_scene_buffer(ctx, count):
    size = count * sphere_dtype.itemsize
    return allocate(ctx, mf.READ_ONLY, size, "scene")


def upload(queue, buffer, scene):
    if scene.dtype != sphere_dtype:
        raise ResourceError(
            "Scene records must be of the sphere layout, got {}".format(scene.dtype)
        )
    try:
        cl.enqueue_copy(queue, buffer, scene, is_blocking=True)
    except cl.Error as e:
        raise ResourceError(
            "Cannot upload {} scene records".format(len(scene))
        ) from e


# Positions are fixed by the `render_kernel` signature
ARG_SCENE, ARG_WIDTH, ARG_HEIGHT, ARG_COUNT, ARG_OUTPUT = range(5)

def bind_arguments(kernel, scene_buf, width, height, count, output_buf):
    try:
        kernel.set_arg(ARG_SCENE, scene_buf)
        kernel.set_arg(ARG_WIDTH, cltypes.int(width))
        kernel.set_arg(ARG_HEIGHT, cltypes.int(height))
        kernel.set_arg(ARG_COUNT, cltypes.int(count))
        kernel.set_arg(ARG_OUTPUT, output_buf)
    except cl.Error as e:
        raise ResourceError(
            "Kernel '{}' does not take (scene, width, height, count, output)".format(
                kernel.function_name
            )
        ) from e
