"""Parsing of ruby-version specifiers."""
import re
from pathlib import Path
from typing import Optional

from setup_ruby.types import DEFAULT_ENGINE, EngineVersion, is_head_version
from setup_ruby.versions.files import (
    RUBY_VERSION_FILE,
    TOOL_VERSIONS_FILE,
    find_version_file,
    read_version_file,
)


def split_specifier(specifier: str) -> EngineVersion:
    """Split a concrete specifier into engine and version.

    ``3.0.0`` and head-like tags name the default engine, a bare name asks
    for that engine's newest version, anything else splits at the first
    hyphen so pre-release suffixes stay in the version.
    """
    if re.match(r"^\d", specifier) or is_head_version(specifier):
        return EngineVersion(DEFAULT_ENGINE, specifier)
    if "-" not in specifier:
        return EngineVersion(specifier, "")
    engine, version = specifier.split("-", 1)
    return EngineVersion(engine, version)


def parse_specifier(raw: str, work_dir: Optional[Path] = None) -> EngineVersion:
    """Resolve version files and parse the resulting specifier.

    Raises:
        InputResolutionError: If ``default`` is given and no version file exists
    """
    work_dir = work_dir or Path.cwd()
    specifier = raw.strip()

    if specifier == "default":
        specifier = find_version_file(work_dir)
    if specifier in (RUBY_VERSION_FILE, TOOL_VERSIONS_FILE):
        specifier = read_version_file(work_dir, specifier)

    return split_specifier(specifier)
