import io

import pytest

from cltrace.program import (
    BUILT, FAILED, UNBUILT, BuildError, CompiledProgram, EntryPointError,
    SourceNotFoundError, compile_program, load_source, report_build_failure,
    resolve_entry_point,
)
from cltrace.report import Report

from tests.conftest import KERNEL_PATH


class FailedBuild:
    def __init__(self, log):
        self.log = log

    def get_build_info(self, device, param):
        return self.log


def failed_program(log, error=None):
    program = CompiledProgram(FailedBuild(log), device=None)
    program.state = FAILED
    program.error = error
    return program

def quiet_report():
    return Report(out=io.StringIO(), err=io.StringIO())


def test_load_source():
    assert "render_kernel" in load_source(KERNEL_PATH)

def test_missing_source(tmp_path):
    with pytest.raises(SourceNotFoundError):
        load_source(str(tmp_path / "absent.cl"))

def test_build_failure_is_persisted_echoed_and_fatal(tmp_path):
    log = "<source>:5:1: error: expected expression\n}\n^\n"
    log_path = tmp_path / "errorlog.txt"
    report = quiet_report()
    with pytest.raises(SystemExit) as e:
        report_build_failure(failed_program(log), str(log_path), report)
    assert e.value.code == 1
    assert log_path.read_text() == log
    err = report.err.getvalue()
    assert "Build log:" in err
    assert log in err
    assert str(log_path) in err

def test_blank_driver_log_falls_back_to_compiler_message():
    program = failed_program("  \n", error=Exception("clBuildProgram failed"))
    assert program.build_log() == "clBuildProgram failed"

def test_entry_point_needs_a_built_program():
    program = CompiledProgram(FailedBuild(""), device=None)
    assert program.state == UNBUILT
    with pytest.raises(EntryPointError):
        resolve_entry_point(program)


def test_compile_reference_kernel(ctx):
    program = compile_program(ctx, load_source(KERNEL_PATH))
    assert program.state == BUILT
    kernel = resolve_entry_point(program, "render_kernel")
    assert kernel.function_name == "render_kernel"

def test_compile_syntax_error(ctx, broken_kernel):
    with pytest.raises(BuildError) as e:
        compile_program(ctx, load_source(broken_kernel))
    program = e.value.program
    assert program.state == FAILED
    assert program.build_log().strip()

def test_absent_entry_point(ctx):
    program = compile_program(ctx, load_source(KERNEL_PATH))
    with pytest.raises(EntryPointError):
        resolve_entry_point(program, "no_such_kernel")


class Builds:
    def build(self, options=None, devices=None):
        pass


def test_program_is_built_once():
    program = CompiledProgram(Builds(), device=None)
    assert program.build().state == BUILT
    with pytest.raises(BuildError):
        program.build()
    assert program.state == BUILT
