"""setup-ruby package."""

from setup_ruby.types import EngineVersion, Inputs, Installer, InstallerKind
from setup_ruby.environment import EnvironmentAccumulator, Propagator
from setup_ruby.versions import parse_specifier, resolve_version
from setup_ruby.errors import (
    SetupRubyError,
    InputResolutionError,
    UnknownEngine,
    UnknownVersion,
    SubprocessFailure,
    DiffParseFailure,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "EngineVersion",
    "Inputs",
    "Installer",
    "InstallerKind",

    # Engines
    "EnvironmentAccumulator",
    "Propagator",
    "parse_specifier",
    "resolve_version",

    # Errors
    "SetupRubyError",
    "InputResolutionError",
    "UnknownEngine",
    "UnknownVersion",
    "SubprocessFailure",
    "DiffParseFailure",
]
