"""
Opt-in logging for driftpatch.

Every logger handed out lives under the "driftpatch" hierarchy
("driftpatch.commit.patch", "driftpatch.conflict.resolver", ...), so one call
on the package logger controls all of them:

    import logging
    from driftpatch._logging import enable_debug_logging

    enable_debug_logging()                 # stderr, DEBUG, driftpatch.* only
    resolver = ConflictResolver(store, log=True)

Library functions take `logger=None, log=False` and resolve them with
`resolve_logger`. Nothing is emitted unless the caller passes a logger or sets
`log=True`, and importing the package never touches the root logger.
"""
from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "driftpatch"
_CONSOLE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def qualified_name(name: str | None) -> str:
    """Place `name` under the driftpatch hierarchy; None means the package logger."""
    if not name or name == ROOT_LOGGER_NAME:
        return ROOT_LOGGER_NAME
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return a usable logger according to the opt-in policy.

    - If `logger` is provided, use it as is.
    - Else if `enabled` is True, get the driftpatch child logger for `name` at
      `level`. It propagates, so pytest's caplog and application handlers see it.
    - Else return a NoopLogger that ignores calls.
    """
    if logger is not None:
        return logger
    if not enabled:
        return NoopLogger()
    lg = logging.getLogger(qualified_name(name))
    lg.setLevel(level)
    lg.propagate = True
    return lg


def enable_debug_logging(level: int = logging.DEBUG, stream=None) -> logging.Handler:
    """
    Attach a console handler to the driftpatch package logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking a second one. Returns the installed handler.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, "_driftpatch_console", False):
            root.removeHandler(existing)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handler._driftpatch_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return handler
