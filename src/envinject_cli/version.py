"""Version lookup for envinject."""

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Set by release builds; development checkouts fall back to pyproject.toml
__BUILD_VERSION__ = None

_VERSION_RE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """
    Get the current version.

    Tries the build-time constant, then installed package metadata, then
    pyproject.toml of a source checkout.

    Returns:
        str: Version string, "unknown" if none could be determined
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    try:
        return version("envinject")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    try:
        match = _VERSION_RE.search(pyproject_path.read_text(encoding='utf-8'))
    except OSError:
        match = None
    if match:
        return match.group(1)

    return "unknown"


__version__ = get_version()
