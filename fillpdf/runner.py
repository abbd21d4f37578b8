from __future__ import annotations
import logging
import subprocess
import time
from typing import Optional

from .errors import CommandError
from .logging_utils import log_command_call

logger = logging.getLogger(__name__)


def run_command(name: str, *args: str, cwd: Optional[str] = None, stdin: Optional[bytes] = None) -> bytes:
    """Run an external program to completion and return its stdout.

    Input and output are fully buffered. A non-zero exit raises CommandError
    with the captured stderr; failures to start the program (missing binary,
    bad cwd) propagate as the original OSError.
    """
    cmd = [name, *args]
    logger.debug("Running %s in %s (stdin=%d bytes)", cmd, cwd, len(stdin) if stdin else 0)
    started = time.time()
    proc = subprocess.run(
        cmd,
        cwd=cwd,
        input=stdin if stdin is not None else b"",
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    log_command_call(cmd, cwd, len(stdin or b""), proc.returncode, len(proc.stdout), started)
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace")
        logger.debug("%s exited with %d: %s", name, proc.returncode, stderr.strip())
        raise CommandError(cmd, proc.returncode, stderr)
    return proc.stdout
