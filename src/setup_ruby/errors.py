"""Error handling for setup-ruby."""
from typing import Any, Dict, Optional

from setup_ruby.logging import get_logger

logger = get_logger(__name__)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an error with context."""
    error_info: Dict[str, Any] = {
        "event": "run_failed",
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, SetupRubyError) and error.details:
        error_info["details"] = error.details

    logger.error(error_info)


class SetupRubyError(Exception):
    """Base error class for setup-ruby."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class InputResolutionError(SetupRubyError):
    """No usable version specifier or version file."""


class UnknownEngine(SetupRubyError):
    """No version catalog for an engine on a platform."""

    def __init__(self, engine: str, platform: str):
        super().__init__(
            f"Unknown engine {engine} on {platform}",
            details={"engine": engine, "platform": platform},
        )


class UnknownVersion(SetupRubyError):
    """Requested version matches no catalog entry, even by prefix."""

    def __init__(self, engine: str, version: str, platform: str, catalog: list[str]):
        super().__init__(
            f"Unknown version {version} for {engine} on {platform}\n"
            f"  available versions for {engine} on {platform}: {', '.join(catalog)}\n"
            "  File an issue at https://github.com/ruby/setup-ruby/issues "
            "if you would like support for a new version",
            details={
                "engine": engine,
                "version": version,
                "platform": platform,
                "available_versions": list(catalog),
            },
        )


class SubprocessFailure(SetupRubyError):
    """External process exited non-zero."""

    def __init__(self, cmd: str, returncode: int, stdout: str = "", stderr: str = ""):
        super().__init__(
            f"Command failed with code {returncode}: {cmd}",
            details={
                "cmd": cmd,
                "returncode": returncode,
                "stdout": stdout,
                "stderr": stderr,
            },
        )
        self.returncode = returncode


class DiffParseFailure(SetupRubyError):
    """Initializer transcript lacks the environment dump."""


class DownloadError(SetupRubyError):
    """Archive download failed."""


class UnsupportedPlatformError(SetupRubyError):
    """Runner platform cannot be identified."""


class AlreadyFlushedError(SetupRubyError):
    """Accumulated environment was already written out for this run."""


class FailureReportedError(SetupRubyError):
    """A terminal failure was already reported for this run."""
