# Image size of the reference render
WIDTH = 1280
HEIGHT = 720

# Artifacts, relative to the working directory
KERNEL_PATH = "opencl_kernel.cl"
OUTPUT_PATH = "opencl_raytracer.ppm"
ERROR_LOG_PATH = "errorlog.txt"

ENTRY_POINT = "render_kernel"

MAX_CHANNEL = 255
