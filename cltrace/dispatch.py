import pyopencl as cl


class DispatchError(Exception):
    def __init__(self, message):
        super().__init__(message)


def preferred_group_size(kernel, device):
    try:
        return kernel.get_work_group_info(
            cl.kernel_work_group_info.WORK_GROUP_SIZE, device
        )
    except cl.Error as e:
        raise DispatchError("Cannot query kernel work group size") from e

def compute_work_sizing(width, height, local):
    """One work item per pixel, padded up to a whole number of groups.

    Work items past `width*height` must be ignored by the kernel itself.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Image size must be positive, got {}x{}".format(width, height))
    if local <= 0:
        raise ValueError("Work group size must be positive, got {}".format(local))
    total = width * height
    if total % local != 0:
        total = (total // local + 1) * local
    return total, local


def enqueue(queue, kernel, global_size, local_size):
    try:
        return cl.enqueue_nd_range_kernel(
            queue, kernel, (global_size,), (local_size,)
        )
    except cl.Error as e:
        raise DispatchError(
            "Cannot enqueue kernel with global size {} and local size {}".format(
                global_size, local_size
            )
        ) from e

def wait(queue, event):
    try:
        event.wait()
        queue.finish()
    except cl.Error as e:
        raise DispatchError("Kernel execution failed") from e
