"""Environment effects of native toolchain initializer scripts.

An initializer such as ``vcvars64.bat`` only changes the environment of the
shell that runs it. To carry those changes into later steps, the script runs
in a child shell followed by an environment dump in the same transcript; the
dump is then diffed against the baseline environment.
"""
import re
from typing import Mapping, Optional

from setup_ruby.commands import run_command
from setup_ruby.environment.accumulator import EnvironmentAccumulator
from setup_ruby.errors import DiffParseFailure
from setup_ruby.logging import get_logger
from setup_ruby.platforms import get_platform_info

logger = get_logger(__name__)

ENV_LINE = re.compile(r"\S=\S")
PATH_KEY = re.compile(r"^path$", re.IGNORECASE)


def parse_environment_dump(transcript: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines into a snapshot.

    Raises:
        DiffParseFailure: If the transcript holds no such lines
    """
    snapshot: dict[str, str] = {}
    for line in transcript.strip().splitlines():
        if not ENV_LINE.search(line):
            continue
        key, value = line.split("=", 1)
        snapshot[key] = value

    if not snapshot:
        raise DiffParseFailure(
            "Could not find environment variables in initializer output",
            details={"transcript": transcript[-2000:]},
        )
    return snapshot


def added_path_entries(captured: str, baseline: str, path_sep: str) -> list[str]:
    """Entries the captured PATH carries in front of the baseline PATH."""
    if baseline and captured == baseline:
        return []
    if baseline and captured.endswith(f"{path_sep}{baseline}"):
        captured = captured[: -len(baseline) - len(path_sep)]
    return [entry for entry in captured.split(path_sep) if entry]


def diff_environment(
    accumulator: EnvironmentAccumulator,
    snapshot: Mapping[str, str],
    baseline: Mapping[str, str],
) -> list[str]:
    """Record changed variables and return new PATH entries in order.

    PATH itself is never recorded as an assignment; the caller adds the
    returned entries to the accumulator.
    """
    # Windows shells print mixed-case names for case-insensitive variables
    folded = {k.upper(): v for k, v in baseline.items()}

    def lookup(key: str) -> Optional[str]:
        return baseline[key] if key in baseline else folded.get(key.upper())

    new_path_entries: list[str] = []
    for key, value in snapshot.items():
        previous = lookup(key)
        if previous == value:
            continue
        if PATH_KEY.match(key):
            new_path_entries = added_path_entries(
                value, previous or "", accumulator.path_sep
            )
        else:
            accumulator.add_assignment(key, value)

    logger.debug({"event": "environment_diffed", "new_path_entries": new_path_entries})
    return new_path_entries


async def diff_initializer_environment(
    accumulator: EnvironmentAccumulator,
    initializer: str,
    system: Optional[str] = None,
) -> list[str]:
    """Run an initializer script and diff its resulting environment.

    Args:
        accumulator: Receives changed non-PATH variables
        initializer: Script invocation, quoted as needed
        system: Platform whose shell and environment dump command are used

    Returns:
        New PATH entries, frontmost first

    Raises:
        SubprocessFailure: If the initializer or dump exits non-zero
        DiffParseFailure: If the transcript holds no environment dump
    """
    info = get_platform_info(system)
    cmd = f"{initializer} && {info.dump_env_cmd}"
    if info.is_windows:
        # Batch initializers only affect the cmd.exe that runs them
        cmd = f'cmd.exe /c "{cmd}"'

    logger.info({"event": "running_initializer", "cmd": cmd})
    baseline = dict(accumulator.environ)
    stdout, _ = await run_command(cmd, env_vars=baseline)

    snapshot = parse_environment_dump(stdout)
    return diff_environment(accumulator, snapshot, baseline)
