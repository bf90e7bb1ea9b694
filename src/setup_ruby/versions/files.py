"""Version files checked into projects."""
import re
from pathlib import Path
from typing import Optional

from setup_ruby.errors import InputResolutionError
from setup_ruby.logging import get_logger

logger = get_logger(__name__)

RUBY_VERSION_FILE = ".ruby-version"
TOOL_VERSIONS_FILE = ".tool-versions"
GEMFILE_LOCK = "Gemfile.lock"
TOOL_NAME = "ruby"


def find_version_file(work_dir: Path) -> str:
    """Pick the version file standing in for a ``default`` specifier."""
    for name in (RUBY_VERSION_FILE, TOOL_VERSIONS_FILE):
        if (work_dir / name).exists():
            return name
    raise InputResolutionError(
        f"input ruby-version needs to be specified if no {RUBY_VERSION_FILE} "
        f"or {TOOL_VERSIONS_FILE} file exists",
        details={"work_dir": str(work_dir)},
    )


def read_ruby_version_file(path: Path) -> str:
    return path.read_text(encoding="utf-8").strip()


def read_tool_versions_file(path: Path, tool: str = TOOL_NAME) -> str:
    """Version of `tool` from a ``tool version`` per line manifest."""
    for line in path.read_text(encoding="utf-8").strip().splitlines():
        fields = line.split()
        if len(fields) >= 2 and fields[0] == tool:
            return fields[1]
    raise InputResolutionError(
        f"No {tool} entry found in {path.name}",
        details={"file": str(path), "tool": tool},
    )


def read_version_file(work_dir: Path, name: str) -> str:
    """Read the specifier held by a version file."""
    path = work_dir / name
    try:
        if name == RUBY_VERSION_FILE:
            version = read_ruby_version_file(path)
        else:
            version = read_tool_versions_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise InputResolutionError(
            f"Could not read {name}: {e}", details={"file": str(path)}
        ) from e
    if not version:
        raise InputResolutionError(f"{name} is empty", details={"file": str(path)})

    logger.info({"event": "version_from_file", "file": name, "version": version})
    return version


def read_bundled_with(work_dir: Path) -> Optional[str]:
    """Major Bundler version from the lockfile ``BUNDLED WITH`` section."""
    path = work_dir / GEMFILE_LOCK
    if not path.exists():
        return None

    lines = path.read_text(encoding="utf-8").splitlines()
    for index, line in enumerate(lines):
        if line.strip() != "BUNDLED WITH":
            continue
        if index + 1 >= len(lines):
            return None
        bundler_version = lines[index + 1].strip()
        match = re.match(r"^\d+", bundler_version)
        if not match:
            return None
        logger.info({
            "event": "bundler_from_lockfile",
            "major": match.group(0),
            "bundled_with": bundler_version,
        })
        return match.group(0)
    return None
