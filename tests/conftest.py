import io
import os

import pytest

from setup_ruby.environment.accumulator import EnvironmentAccumulator


@pytest.fixture
def environ():
    """Isolated process environment with a POSIX PATH"""
    return {"PATH": "/usr/local/bin:/usr/bin:/bin", "HOME": "/home/runner"}


@pytest.fixture
def accumulator(environ) -> EnvironmentAccumulator:
    """Accumulator over the isolated environment"""
    return EnvironmentAccumulator(environ, path_var="PATH", path_sep=":")


@pytest.fixture
def windows_accumulator() -> EnvironmentAccumulator:
    """Accumulator with Windows PATH conventions"""
    environ = {"Path": r"X;Y", "GITHUB_WORKSPACE": r"D:\a\project\project"}
    return EnvironmentAccumulator(environ, path_var="Path", path_sep=";")


@pytest.fixture
def stream():
    """Captured runner stdout"""
    return io.StringIO()


@pytest.fixture
def shell_environ():
    """Real environment subset that lets /bin/sh find core utilities"""
    return {"PATH": os.environ.get("PATH", "/usr/bin:/bin")}


@pytest.fixture
def protocol_lines(stream):
    """Lines written to the captured stdout that start with a given command"""
    def lines(prefix: str) -> list[str]:
        return [line for line in stream.getvalue().splitlines() if line.startswith(prefix)]
    return lines
