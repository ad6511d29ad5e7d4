"""Exception types raised by the materialization pipeline."""

from typing import Optional


class EnvInjectError(Exception):
    """Base class for all envinject failures."""


class ConfigError(EnvInjectError, ValueError):
    """Invalid parameters or configuration, raised before any file I/O."""


class TargetIOError(EnvInjectError, IOError):
    """A matched target file could not be read, written or renamed into place."""

    def __init__(self, path, message: str, cause: Optional[BaseException] = None):
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{message} '{self.path}'{detail}")

    def __str__(self) -> str:
        return self.args[0]


class HandoffError(EnvInjectError):
    """The static file server could not be started."""
