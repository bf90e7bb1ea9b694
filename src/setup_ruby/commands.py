"""External command execution."""
import asyncio
from pathlib import Path
from typing import Mapping, Optional, Sequence

from setup_ruby.errors import SubprocessFailure
from setup_ruby.logging import get_logger

logger = get_logger(__name__)


async def run_command(
    cmd: str | Sequence[str],
    cwd: Optional[Path] = None,
    env_vars: Optional[Mapping[str, str]] = None,
) -> tuple[str, str]:
    """Run a command and return its decoded (stdout, stderr).

    A string runs through the shell, a sequence runs directly. The child
    sees `env_vars` or, when omitted, the live process environment at the
    time of the call.

    Raises:
        SubprocessFailure: If the command exits non-zero
    """
    display = cmd if isinstance(cmd, str) else " ".join(cmd)
    logger.debug({"event": "cmd_exec", "cmd": display, "cwd": str(cwd) if cwd else None})

    env = dict(env_vars) if env_vars is not None else None
    if isinstance(cmd, str):
        process = await asyncio.create_subprocess_shell(
            cmd,
            cwd=cwd,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    else:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

    stdout, stderr = await process.communicate()
    out = stdout.decode(errors="replace") if stdout else ""
    err = stderr.decode(errors="replace") if stderr else ""

    if out:
        logger.debug({"event": "cmd_stdout", "cmd": display, "output": out})
    if err:
        logger.debug({"event": "cmd_stderr", "cmd": display, "output": err})

    logger.debug({"event": "cmd_complete", "cmd": display, "returncode": process.returncode})

    if process.returncode != 0:
        logger.error({
            "event": "cmd_failed",
            "cmd": display,
            "returncode": process.returncode,
            "stderr": err,
        })
        raise SubprocessFailure(display, process.returncode, out, err)

    return out, err
