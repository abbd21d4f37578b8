import json, time, threading, logging
from typing import Optional, Sequence

from . import config

_LOG_LOCK = threading.Lock()
logger = logging.getLogger("fillpdf")


def configure_logging(level: int = logging.INFO, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """Attach a formatted handler to the package logger (idempotent)."""
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    # Keep package records out of the root logger once configured
    logger.propagate = False
    return logger


def log_command_call(command: Sequence[str], cwd: Optional[str], stdin_len: int,
                     returncode: Optional[int], stdout_len: int, started_ts: float,
                     log_file: Optional[str] = None):
    log_file = log_file or config.COMMAND_LOG_FILE
    if not log_file:
        return
    rec = {
        "ts": time.time(),
        "duration_ms": round((time.time() - started_ts) * 1000, 2),
        "command": list(command),
        "cwd": cwd,
        "stdin_bytes": stdin_len,
        "returncode": returncode,
        "stdout_bytes": stdout_len,
    }
    line = json.dumps(rec, ensure_ascii=False)
    try:
        with _LOG_LOCK:
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")
    except OSError as e:
        logger.warning("cannot write command log %s: %s", log_file, e)
