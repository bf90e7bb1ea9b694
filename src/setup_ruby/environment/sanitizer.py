"""Removal of PATH entries that would shadow a newly installed Ruby."""
import re
import sys
from typing import TextIO

from setup_ruby.environment.accumulator import EnvironmentAccumulator
from setup_ruby.logging import get_logger

logger = get_logger(__name__)


def conflicting_entries(entries: list[str], engine: str = "ruby") -> list[str]:
    """Entries naming the engine as a whole word, ignoring case.

    Word edges are letters only, so ``C:\\Ruby27\\bin`` and ``my-ruby-tools``
    match while ``containruby`` does not.
    """
    pattern = re.compile(rf"(?<![a-z]){re.escape(engine)}(?![a-z])", re.IGNORECASE)
    return [entry for entry in entries if pattern.search(entry)]


def clean_path(
    accumulator: EnvironmentAccumulator, engine: str = "ruby", stream: TextIO = None
) -> list[str]:
    """Drop conflicting entries from the live PATH and return them.

    Must run before installer-provided entries are added.
    """
    stream = stream or sys.stdout
    original = accumulator.live_path.split(accumulator.path_sep)
    removed = conflicting_entries(original, engine)
    if not removed:
        return []

    kept = [entry for entry in original if entry not in removed]

    stream.write("::group::Cleaning PATH\n")
    stream.write(f"Entries removed from PATH to avoid conflicts with {engine.capitalize()}:\n")
    for entry in removed:
        stream.write(f"  {entry}\n")
    stream.write("::endgroup::\n")
    stream.flush()

    logger.info({"event": "path_cleaned", "removed": removed})
    accumulator.set_live_path(accumulator.path_sep.join(kept))
    return removed
