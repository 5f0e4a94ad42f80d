import pyopencl as cl

from cltrace.catalog import name


class ContextError(Exception):
    def __init__(self, message):
        super().__init__(message)


class ComputeContext:
    """Context and command queue bound to a single device.

    Buffers, programs and kernels made for this pipeline are all created
    against `self.context` and run on `self.queue`, never mixed with
    another context.
    """

    def __init__(self, device):
        self.device = device
        try:
            self.context = cl.Context(devices=[device])
            self.queue = cl.CommandQueue(self.context, device)
        except cl.Error as e:
            raise ContextError(
                "Cannot create context on device '{}'".format(name(device))
            ) from e

    def finish(self):
        self.queue.finish()

    def release(self):
        if self.queue is not None:
            self.finish()
        self.queue = None
        self.context = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.release()
