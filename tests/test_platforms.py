"""Tests for runner platform detection and inputs."""
from pathlib import Path

import pytest

from setup_ruby.config import get_input, load_inputs, log_level
from setup_ruby.errors import UnsupportedPlatformError
from setup_ruby.platforms import (
    find_ubuntu_version,
    get_platform_info,
    get_virtual_environment_name,
)


def test_find_ubuntu_version(tmp_path):
    """Test the release is read from lsb-release"""
    lsb = tmp_path / "lsb-release"
    lsb.write_text(
        "DISTRIB_ID=Ubuntu\nDISTRIB_RELEASE=20.04\n"
        "DISTRIB_CODENAME=focal\nDISTRIB_DESCRIPTION=\"Ubuntu 20.04.1 LTS\"\n"
    )
    assert find_ubuntu_version(lsb) == "20.04"


def test_find_ubuntu_version_missing(tmp_path):
    """Test unreadable or unexpected files fail"""
    with pytest.raises(UnsupportedPlatformError):
        find_ubuntu_version(tmp_path / "absent")

    lsb = tmp_path / "lsb-release"
    lsb.write_text("DISTRIB_ID=Debian\n")
    with pytest.raises(UnsupportedPlatformError, match="Could not find Ubuntu version"):
        find_ubuntu_version(lsb)


def test_virtual_environment_name():
    """Test runner image names for non-Linux systems"""
    assert get_virtual_environment_name("Darwin") == "macos-latest"
    assert get_virtual_environment_name("Windows") == "windows-latest"
    with pytest.raises(UnsupportedPlatformError, match="Unknown platform FreeBSD"):
        get_virtual_environment_name("FreeBSD")


def test_platform_info():
    """Test PATH conventions per system"""
    windows = get_platform_info("Windows")
    assert windows.is_windows
    assert (windows.path_var, windows.path_sep, windows.dump_env_cmd) == ("Path", ";", "set")

    linux = get_platform_info("Linux")
    assert not linux.is_windows
    assert (linux.path_var, linux.path_sep) == ("PATH", ":")


def test_load_inputs_defaults():
    """Test empty inputs fall back to defaults"""
    inputs = load_inputs({"INPUT_RUBY-VERSION": "  ", "INPUT_BUNDLER": ""})
    assert inputs.ruby_version == "default"
    assert inputs.bundler == "default"
    assert inputs.working_directory == Path(".")


def test_load_inputs_values():
    """Test inputs are read from INPUT_ variables"""
    environ = {
        "INPUT_RUBY-VERSION": "truffleruby-20.2.0",
        "INPUT_BUNDLER": "none",
        "INPUT_WORKING-DIRECTORY": "sub/dir",
    }
    inputs = load_inputs(environ)
    assert inputs.ruby_version == "truffleruby-20.2.0"
    assert inputs.bundler == "none"
    assert inputs.working_directory == Path("sub/dir")
    assert get_input(environ, "ruby-version") == "truffleruby-20.2.0"


def test_log_level():
    """Test debug logging follows the runner debug flag"""
    assert log_level({"RUNNER_DEBUG": "1"}) == "DEBUG"
    assert log_level({}) == "INFO"
