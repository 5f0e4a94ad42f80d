import os
import sys
import atexit

import colorama

from cltrace.catalog import EnumerationError, SelectionError
from cltrace.context import ContextError
from cltrace.program import SourceNotFoundError, BuildError, EntryPointError
from cltrace.resources import ResourceError
from cltrace.dispatch import DispatchError
from cltrace.misc import remove_content, preview
from cltrace.pipeline import Pipeline
from cltrace.report import Report
from cltrace.scene import reference_scene


FATAL = (
    EnumerationError, SelectionError, ContextError,
    SourceNotFoundError, BuildError, EntryPointError, ResourceError,
    DispatchError,
)


def run(args, read=input, report=None):
    colorama.init()
    atexit.register(lambda: colorama.deinit())

    report = report or Report()

    if args.clean:
        clean(args, report)
        return 0

    try:
        render(args, read, report)
    except FATAL as e:
        report.fail(str(e))
        report.info("Exiting...")
        return 1
    return 0


def render(args, read, report):
    pipeline = Pipeline(
        width=args.width, height=args.height,
        kernel_path=args.kernel, log_path=args.log,
        report=report,
    )
    with pipeline:
        pipeline.setup(read=read)
        pipeline.build()
        pixels = pipeline.render(reference_scene())
        pipeline.save(args.output)
        if args.preview:
            for line in preview(pixels, args.width, args.height):
                report.info(line)


def clean(args, report):
    for path in (args.output, args.log):
        location, item = os.path.split(os.path.abspath(path))
        if not os.path.isdir(location):
            continue
        for removed in remove_content(location, [item]):
            report.ok("Removed '{}'".format(removed))


def main(argv=None):
    from cltrace.__main__ import parse_args
    sys.exit(run(parse_args(argv)))
