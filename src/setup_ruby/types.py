"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from setup_ruby.environment.accumulator import EnvironmentAccumulator

InstallerKind = Enum("InstallerKind", ["RUBY_BUILDER", "WINDOWS"])

DEFAULT_ENGINE = "ruby"
HEAD_VERSIONS = ("head", "debug", "mingw", "mswin")

# (prefix, new PATH entries in front-to-back order)
InstallResult = tuple[str, list[str]]


def is_head_version(version: str) -> bool:
    """Check whether a version names a moving build rather than a release."""
    return version in HEAD_VERSIONS


@dataclass(frozen=True)
class EngineVersion:
    """Ruby engine and requested version; empty version means newest"""

    engine: str
    version: str

    def __str__(self) -> str:
        return f"{self.engine}-{self.version}" if self.version else self.engine


@dataclass(frozen=True)
class Inputs:
    """Action inputs"""

    ruby_version: str = "default"
    bundler: str = "default"
    working_directory: Path = Path(".")


@dataclass(frozen=True)
class Installer:
    """Platform/engine installation backend"""

    kind: InstallerKind
    get_available_versions: Callable[[str, str], Optional[list[str]]]
    install: Callable[
        [str, str, str, "EnvironmentAccumulator", Optional[TextIO]],
        Awaitable[InstallResult],
    ]
