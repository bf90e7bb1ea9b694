"""Action entry point: install Ruby and hand its environment to later steps."""
import asyncio
import os
import sys
from pathlib import Path
from typing import MutableMapping, Optional, TextIO

from setup_ruby.bundler import install_bundler
from setup_ruby.config import load_inputs, log_level
from setup_ruby.environment import EnvironmentAccumulator, Propagator, clean_path
from setup_ruby.errors import log_error
from setup_ruby.installers import select_installer
from setup_ruby.logging import configure_logging, get_logger, measure
from setup_ruby.platforms import WINDOWS, get_virtual_environment_name, home_dir
from setup_ruby.types import Inputs
from setup_ruby.versions import parse_specifier, resolve_version
from setup_ruby.workflow import error_command

logger = get_logger(__name__)

MSYS2_PATH_ENTRIES = [r"C:\msys64\mingw64\bin", r"C:\msys64\usr\bin"]


def create_gemrc(home: Optional[Path] = None) -> None:
    """Skip gem docs by default unless the user already has a .gemrc."""
    gemrc = (home or home_dir()) / ".gemrc"
    if not gemrc.exists():
        gemrc.write_text("gem: --no-document\n")


def env_pre_install(accumulator: EnvironmentAccumulator, platform: str) -> None:
    """Environment the Windows toolchain expects before Ruby is installed."""
    if platform != WINDOWS:
        return

    environ = accumulator.environ
    # Ruby's temp folder on the runner SSD
    accumulator.add_assignment("TMPDIR", environ.get("RUNNER_TEMP", ""))
    # Make bash's HOME match native Windows
    accumulator.add_assignment("HOME", environ.get("HOMEDRIVE", "") + environ.get("HOMEPATH", ""))
    # Keep the Windows Path in bash
    accumulator.add_assignment("MSYS2_PATH_TYPE", "inherit")
    # MSYS2 for the bash shell and the RubyInstaller2 devkit
    accumulator.add_path_entries(MSYS2_PATH_ENTRIES)


def env_post_install(
    accumulator: EnvironmentAccumulator, new_path_entries: list[str], stream: TextIO
) -> None:
    """Drop conflicting Rubies from PATH, then put the new Ruby in front."""
    clean_path(accumulator, "ruby", stream)
    accumulator.add_path_entries(new_path_entries)


async def setup_ruby(
    inputs: Inputs,
    accumulator: EnvironmentAccumulator,
    propagator: Propagator,
    system: Optional[str] = None,
) -> str:
    """Install the requested Ruby and propagate its environment.

    Returns:
        The Ruby install prefix
    """
    os.chdir(inputs.working_directory)
    work_dir = Path.cwd()

    platform = get_virtual_environment_name(system)
    requested = parse_specifier(inputs.ruby_version, work_dir)

    installer = select_installer(platform, requested.engine)
    catalog = installer.get_available_versions(platform, requested.engine)
    version = resolve_version(catalog, requested, platform)

    logger.info({
        "event": "installing_ruby",
        "platform": platform,
        "engine": requested.engine,
        "version": version,
        "installer": installer.kind.name,
    })

    create_gemrc()
    env_pre_install(accumulator, platform)

    ruby_prefix, new_path_entries = await installer.install(
        platform, requested.engine, version, accumulator, propagator.stream
    )

    env_post_install(accumulator, new_path_entries, propagator.stream)

    if inputs.bundler != "none":
        async with measure("Installing Bundler", propagator.stream):
            await install_bundler(inputs.bundler, ruby_prefix, requested.engine, version, work_dir)

    propagator.propagate({"ruby-prefix": ruby_prefix})
    return ruby_prefix


def run(
    environ: Optional[MutableMapping[str, str]] = None,
    stream: Optional[TextIO] = None,
    system: Optional[str] = None,
) -> int:
    """Run the action once. Returns the process exit status."""
    environ = os.environ if environ is None else environ
    stream = stream or sys.stdout
    configure_logging(log_level(environ))

    propagator: Optional[Propagator] = None
    try:
        accumulator = EnvironmentAccumulator(environ)
        propagator = Propagator(accumulator, stream)
        asyncio.run(setup_ruby(load_inputs(environ), accumulator, propagator, system))
        return 0
    except Exception as e:
        log_error(e)
        if propagator is not None:
            propagator.fail(str(e))
        else:
            stream.write(error_command(str(e)) + "\n")
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
