#!/usr/bin/env python3

import sys
import argparse

from cltrace import config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="cltrace",
        description="Render a sphere scene with an OpenCL path tracing kernel."
    )
    parser.add_argument(
        "--width", metavar="PIXELS", type=int, default=config.WIDTH,
        help="Image width. `{}` by default.".format(config.WIDTH)
    )
    parser.add_argument(
        "--height", metavar="PIXELS", type=int, default=config.HEIGHT,
        help="Image height. `{}` by default.".format(config.HEIGHT)
    )
    parser.add_argument(
        "-k", "--kernel", metavar="PATH", type=str, default=config.KERNEL_PATH,
        help="OpenCL kernel source. `{}` by default.".format(config.KERNEL_PATH)
    )
    parser.add_argument(
        "-o", "--output", metavar="PATH", type=str, default=config.OUTPUT_PATH,
        help="Output PPM image. `{}` by default.".format(config.OUTPUT_PATH)
    )
    parser.add_argument(
        "-l", "--log", metavar="PATH", type=str, default=config.ERROR_LOG_PATH,
        help="Where to save the build log if compilation fails."
    )
    parser.add_argument(
        "-p", "--preview", action="store_true",
        help="Print a low-resolution preview of the image in terminal."
    )
    parser.add_argument(
        "-c", "--clean", action="store_true",
        help="Remove the output image and build log."
    )
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("image size must be positive")

    return args


if __name__ == "__main__":
    from cltrace import run
    sys.exit(run(parse_args()))
