"""Bundler version selection and installation."""
import re
from pathlib import Path
from typing import Optional

from setup_ruby.commands import run_command
from setup_ruby.errors import InputResolutionError
from setup_ruby.logging import get_logger
from setup_ruby.types import is_head_version
from setup_ruby.versions.files import read_bundled_with

logger = get_logger(__name__)

LATEST_BUNDLER = "2"

# Ruby version prefix -> (Bundler major to use instead, reason)
BUNDLER_DOWNGRADES: dict[str, tuple[str, str]] = {
    "2.2": ("1", "Bundler 2 requires Ruby 2.3+, using Bundler 1 on Ruby 2.2"),
    "2.3": (
        "1",
        "Ruby 2.3 has a bug with Bundler 2 (https://github.com/rubygems/rubygems/issues/3570), "
        "using Bundler 1 instead on Ruby 2.3",
    ),
}


def select_bundler_version(bundler_input: str, ruby_version: str, work_dir: Path) -> str:
    """Major Bundler version to install for an input and Ruby version.

    Raises:
        InputResolutionError: If the input is not a version number
    """
    bundler_version: Optional[str] = bundler_input
    if bundler_version in ("default", "Gemfile.lock"):
        bundler_version = read_bundled_with(work_dir) or "latest"

    if bundler_version == "latest":
        bundler_version = LATEST_BUNDLER

    if not re.match(r"^\d+", bundler_version):
        raise InputResolutionError(
            f"Cannot parse bundler input: {bundler_version}",
            details={"bundler": bundler_input},
        )

    for prefix, (downgrade, reason) in BUNDLER_DOWNGRADES.items():
        if ruby_version.startswith(prefix):
            logger.info({"event": "bundler_downgraded", "reason": reason, "bundler": downgrade})
            return downgrade

    return bundler_version


def shipped_bundler_reason(engine: str, ruby_version: str, bundler_version: str) -> Optional[str]:
    """Why the Ruby's bundled Bundler is used as is, or None to install one."""
    if engine == "ruby" and is_head_version(ruby_version) and bundler_version == "2":
        return f"Using Bundler 2 shipped with {engine}-{ruby_version}"
    if engine == "truffleruby" and bundler_version == "1":
        return f"Using Bundler 1 shipped with {engine}"
    if engine == "rubinius":
        return "Rubinius only supports the version of Bundler shipped with it"
    return None


async def install_bundler(
    bundler_input: str,
    ruby_prefix: str,
    engine: str,
    ruby_version: str,
    work_dir: Optional[Path] = None,
) -> Optional[str]:
    """Install Bundler into the new Ruby. Returns the requested major version."""
    work_dir = work_dir or Path.cwd()
    bundler_version = select_bundler_version(bundler_input, ruby_version, work_dir)

    reason = shipped_bundler_reason(engine, ruby_version, bundler_version)
    if reason:
        logger.info({"event": "bundler_install_skipped", "reason": reason})
        return bundler_version

    # Through the shell so Windows resolves gem.cmd
    gem = str(Path(ruby_prefix) / "bin" / "gem")
    await run_command(f'"{gem}" install bundler -v "~> {bundler_version}" --no-document')
    logger.info({"event": "bundler_installed", "bundler": bundler_version})
    return bundler_version
