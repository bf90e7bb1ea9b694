"""Run-scoped record of environment changes for later steps.

The accumulator keeps two views of the same changes:

- a deferred record of variable assignments and PATH prepends, written out
  once by ``flush`` for the steps that run after this one;
- the live PATH of the wrapped environment, updated immediately by every
  PATH prepend so subprocesses spawned later in this run see the new
  entries.

Assignments never touch the live environment.
"""
import os
from typing import MutableMapping, Optional, Sequence, TextIO

from setup_ruby.errors import AlreadyFlushedError
from setup_ruby.logging import get_logger
from setup_ruby.platforms import get_platform_info
from setup_ruby.workflow import set_env_command

logger = get_logger(__name__)


class EnvironmentAccumulator:
    """Ordered assignments and PATH entries for one run."""

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        path_var: Optional[str] = None,
        path_sep: Optional[str] = None,
    ):
        if path_var is None or path_sep is None:
            info = get_platform_info()
            path_var = path_var or info.path_var
            path_sep = path_sep or info.path_sep

        self.environ = os.environ if environ is None else environ
        self.path_var = path_var
        self.path_sep = path_sep
        self._assignments: list[tuple[str, str]] = []
        self._path_entries: list[str] = []
        self._flushed = False

    @property
    def assignments(self) -> list[tuple[str, str]]:
        return list(self._assignments)

    @property
    def path_entries(self) -> list[str]:
        """Recorded entries, frontmost first."""
        return list(self._path_entries)

    @property
    def flushed(self) -> bool:
        return self._flushed

    @property
    def live_path(self) -> str:
        return self.environ.get(self.path_var, "")

    def set_live_path(self, value: str) -> None:
        """Rewrite the live PATH in place, outside the deferred record."""
        self.environ[self.path_var] = value

    def add_assignment(self, key: str, value: str) -> None:
        self._assignments.append((key, value))
        logger.debug({"event": "assignment_recorded", "key": key, "value": value})

    def add_path_entry(self, entry: str) -> None:
        """Prepend an entry to the record and to the live PATH."""
        self._path_entries.insert(0, entry)
        current = self.live_path
        self.set_live_path(f"{entry}{self.path_sep}{current}" if current else entry)
        logger.debug({"event": "path_entry_added", "entry": entry})

    def add_path_entries(self, entries: Sequence[str]) -> None:
        """Prepend a group of entries, keeping the group's own order."""
        entries = [e for e in entries if e]
        if entries:
            self.add_path_entry(self.path_sep.join(entries))

    def serialize_assignments(self) -> list[str]:
        return [set_env_command(key, value) for key, value in self._assignments]

    def serialize_path(self) -> str:
        return set_env_command(self.path_var, self.live_path)

    def flush(self, stream: TextIO) -> None:
        """Write every recorded change to the runner. Allowed once per run.

        Raises:
            AlreadyFlushedError: On a second call
        """
        if self._flushed:
            raise AlreadyFlushedError("Environment was already propagated for this run")
        self._flushed = True

        lines = self.serialize_assignments() + [self.serialize_path()]
        stream.write("".join(f"{line}\n" for line in lines))
        stream.flush()

        logger.info({
            "event": "environment_flushed",
            "assignments": len(self._assignments),
            "path_entries": len(self._path_entries),
        })
