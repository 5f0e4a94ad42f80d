from cltrace import config
from cltrace.catalog import (
    list_platforms, list_devices, describe_platforms, describe_devices,
    describe_device, select_platform, select_device, name,
)
from cltrace.context import ComputeContext
from cltrace.program import (
    BuildError, load_source, compile_program, report_build_failure,
    resolve_entry_point,
)
from cltrace.resources import (
    allocate_output_buffer, allocate_scene_buffer, upload, bind_arguments,
)
from cltrace.dispatch import preferred_group_size, compute_work_sizing, enqueue, wait
from cltrace.collector import Collector
from cltrace.ppm import write_ppm
from cltrace.report import Report


class Pipeline:
    """Owns every OpenCL handle of a single render.

    Stages run strictly in order: `setup` (device and context), `build`
    (program and entry point), `render` (buffers, dispatch, readback) and
    `save`. Leaving the `with` block releases whatever was acquired, also
    when a stage exits early.
    """

    def __init__(
        self, width=config.WIDTH, height=config.HEIGHT,
        kernel_path=config.KERNEL_PATH, entry=config.ENTRY_POINT,
        log_path=config.ERROR_LOG_PATH, report=None,
    ):
        self.width = width
        self.height = height
        self.kernel_path = kernel_path
        self.entry = entry
        self.log_path = log_path
        self.report = report or Report()

        self.ctx = None
        self.program = None
        self.kernel = None
        self.scene_buf = None
        self.output_buf = None
        self.collector = None

    def setup(self, read=input):
        info = self.report.info

        platforms = list_platforms()
        describe_platforms(platforms, write=info)
        platform = select_platform(platforms, read=read)
        info("\nUsing OpenCL platform: \t{}".format(name(platform)))

        devices = list_devices(platform)
        describe_devices(devices, write=info)
        device = select_device(devices, read=read)
        info("\nUsing OpenCL device: \t{}".format(name(device)))
        for line in describe_device(device, indent="\t\t\t"):
            info(line)

        self.ctx = ComputeContext(device)
        return self.ctx

    def build(self):
        source = load_source(self.kernel_path)
        try:
            self.program = compile_program(self.ctx, source)
        except BuildError as e:
            self.program = e.program
            self.report.fail(str(e))
            report_build_failure(e.program, self.log_path, self.report)
        self.kernel = resolve_entry_point(self.program, self.entry)
        return self.kernel

    def render(self, scene):
        ctx = self.ctx
        count = len(scene)

        self.collector = Collector(self.width, self.height)
        self.output_buf = allocate_output_buffer(ctx, self.width, self.height)
        self.scene_buf = allocate_scene_buffer(ctx, count)
        upload(ctx.queue, self.scene_buf, scene)

        bind_arguments(
            self.kernel, self.scene_buf,
            self.width, self.height, count,
            self.output_buf,
        )

        local = preferred_group_size(self.kernel, ctx.device)
        self.report.info("Kernel work group size: {}".format(local))
        global_size, local = compute_work_sizing(self.width, self.height, local)

        self.report.info("Rendering started...")
        event = enqueue(ctx.queue, self.kernel, global_size, local)
        wait(ctx.queue, event)
        self.report.ok("Rendering done")

        self.report.info("Copying output from device to host")
        self.collector.readback(ctx.queue, self.output_buf)
        return self.collector.pixels()

    def save(self, path=config.OUTPUT_PATH):
        write_ppm(path, self.collector.pixels(), self.width, self.height)
        self.report.ok("Saved image to '{}'".format(path))

    def release(self):
        for buf in (self.scene_buf, self.output_buf):
            if buf is not None:
                buf.release()
        self.scene_buf = None
        self.output_buf = None
        if self.collector is not None:
            self.collector.release()
            self.collector = None
        self.kernel = None
        self.program = None
        if self.ctx is not None:
            self.ctx.release()
            self.ctx = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.release()
