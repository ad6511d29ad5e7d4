"""Hand control over to the static file server."""

import os
from typing import Mapping, Sequence

from .exceptions import ConfigError, HandoffError
from ..utils.helpers import is_tool_available

DEFAULT_SERVER_COMMAND = ("nginx", "-g", "daemon off;")


def exec_server(command: Sequence[str], env: Mapping[str, str]) -> None:
    """Replace the current process with ``command``.

    The server keeps this process's PID, so signals sent by the container
    runtime reach it directly. Only returns by raising.

    Args:
        command: Server executable followed by its arguments.
        env: Environment the server inherits.

    Raises:
        ConfigError: If ``command`` is empty.
        HandoffError: If the executable cannot be found or executed.
    """
    argv = [str(arg) for arg in command]
    if not argv or not argv[0]:
        raise ConfigError("No server command configured")

    if not is_tool_available(argv[0]):
        raise HandoffError(f"Server executable not found: {argv[0]}")

    try:
        os.execvpe(argv[0], argv, dict(env))
    except OSError as e:
        raise HandoffError(f"Failed to start {argv[0]}: {e}") from e
