"""Helper utility functions for envinject."""

import os
import shutil
import stat
import tempfile
from pathlib import Path


def is_tool_available(tool_name):
    """Check if a command-line tool can be executed.

    Args:
        tool_name (str): Name of the tool, or a path to an executable.

    Returns:
        bool: True if the tool is available, False otherwise.
    """
    if os.sep in tool_name or (os.altsep and os.altsep in tool_name):
        return os.path.isfile(tool_name) and os.access(tool_name, os.X_OK)
    return shutil.which(tool_name) is not None


def atomic_write_text(path: Path, data: str, encoding: str = "utf-8") -> None:
    """Atomically replace ``path`` with ``data``.

    The content is written to a temporary file in the same directory and then
    renamed over the original, so readers only ever see the old or the new
    content. The original file's permission bits are carried over. A symlink
    is followed so the file it points to is replaced and the link survives.

    Raises:
        OSError: If the temporary file cannot be written or renamed into place.
    """
    path = Path(os.path.realpath(path))
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = None

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".envinject", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(data)
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
