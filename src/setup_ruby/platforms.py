"""Runner platform detection and mapping."""
import os
import platform
import re
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from setup_ruby.errors import UnsupportedPlatformError

LSB_RELEASE = Path("/etc/lsb-release")
WINDOWS = "windows-latest"
MACOS = "macos-latest"


class PlatformMapping(NamedTuple):
    """Platform-specific values."""
    path_var: str
    path_sep: str
    dump_env_cmd: str


PLATFORM_MAPPINGS = {
    "Linux": PlatformMapping(path_var="PATH", path_sep=":", dump_env_cmd="env"),
    "Darwin": PlatformMapping(path_var="PATH", path_sep=":", dump_env_cmd="env"),
    "Windows": PlatformMapping(path_var="Path", path_sep=";", dump_env_cmd="set"),
}


@dataclass(frozen=True)
class PlatformInfo:
    """Platform information."""
    os_name: str
    path_var: str
    path_sep: str
    dump_env_cmd: str

    @property
    def is_windows(self) -> bool:
        return self.os_name == "windows"


def get_platform_info(system: str = None) -> PlatformInfo:
    """Get current platform information."""
    if system is None:
        system = platform.system()

    if system not in PLATFORM_MAPPINGS:
        raise UnsupportedPlatformError(f"Unknown platform {system}")

    mapping = PLATFORM_MAPPINGS[system]
    return PlatformInfo(
        os_name=system.lower(),
        path_var=mapping.path_var,
        path_sep=mapping.path_sep,
        dump_env_cmd=mapping.dump_env_cmd,
    )


def find_ubuntu_version(lsb_release: Path = LSB_RELEASE) -> str:
    """Read the Ubuntu release number from lsb-release."""
    try:
        contents = lsb_release.read_text()
    except OSError as e:
        raise UnsupportedPlatformError(f"Could not read {lsb_release}: {e}") from e

    match = re.search(r"^DISTRIB_RELEASE=(\d+\.\d+)$", contents, re.MULTILINE)
    if not match:
        raise UnsupportedPlatformError("Could not find Ubuntu version")
    return match.group(1)


def get_virtual_environment_name(system: str = None) -> str:
    """Name the hosted runner image, as used in download URLs and catalogs."""
    if system is None:
        system = platform.system()

    match system:
        case "Linux":
            return f"ubuntu-{find_ubuntu_version()}"
        case "Darwin":
            return MACOS
        case "Windows":
            return WINDOWS
        case _:
            raise UnsupportedPlatformError(f"Unknown platform {system}")


def home_dir() -> Path:
    return Path(os.path.expanduser("~"))
