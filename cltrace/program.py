import sys
import warnings

import pyopencl as cl

from cltrace.catalog import name


UNBUILT = "unbuilt"
BUILT = "built"
FAILED = "failed"


class SourceNotFoundError(Exception):
    def __init__(self, message):
        super().__init__(message)

class BuildError(Exception):
    def __init__(self, message, program=None):
        super().__init__(message)
        self.program = program

class EntryPointError(Exception):
    def __init__(self, message):
        super().__init__(message)


def load_source(path):
    try:
        with open(path, "r") as f:
            return f.read()
    except FileNotFoundError as e:
        raise SourceNotFoundError("No OpenCL file found: '{}'".format(path)) from e


class CompiledProgram:
    def __init__(self, program, device):
        self.program = program
        self.device = device
        self.state = UNBUILT
        self.error = None

    def build(self, options=None):
        if self.state != UNBUILT:
            raise BuildError(
                "OpenCL program is already {}".format(self.state), program=self
            )
        try:
            self.program.build(options=options or [], devices=[self.device])
        except cl.Error as e:
            self.state = FAILED
            self.error = e
            raise BuildError(
                "Error during compilation of OpenCL code for '{}'".format(
                    name(self.device)
                ),
                program=self,
            ) from e
        self.state = BUILT
        return self

    def build_log(self):
        log = ""
        try:
            with warnings.catch_warnings():
                # pyopencl warns when a failed cached build is queried
                warnings.simplefilter("ignore")
                log = self.program.get_build_info(
                    self.device, cl.program_build_info.LOG
                )
        except cl.Error:
            # No driver-side log for this program, the compiler error text
            # below is the only diagnostic left.
            log = ""
        if not log.strip() and self.error is not None:
            log = str(self.error)
        return log


def compile_program(ctx, source, options=None):
    program = CompiledProgram(cl.Program(ctx.context, source), ctx.device)
    return program.build(options)


def report_build_failure(program, log_path, report):
    """Persist and echo the build log, then stop the process.

    Nothing can be rendered with a program that failed to build, so this
    never returns.
    """
    log = program.build_log()
    with open(log_path, "w") as f:
        f.write(log)
    report.raw_error("Build log:\n{}".format(log))
    report.fail("Error log saved in '{}'".format(log_path))
    sys.exit(1)


def resolve_entry_point(program, entry="render_kernel"):
    if program.state != BUILT:
        raise EntryPointError(
            "Cannot take '{}' from a {} program".format(entry, program.state)
        )
    try:
        return cl.Kernel(program.program, entry)
    except cl.Error as e:
        raise EntryPointError(
            "No entry point '{}' in OpenCL program".format(entry)
        ) from e
