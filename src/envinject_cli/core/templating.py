"""Build-stage helper that turns a JSON config into a placeholder template.

``{"ENV": "development"}`` becomes ``{"ENV": "$ENV"}`` so the bundle built
from it can be materialized at container start.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigError
from .placeholders import is_valid_name
from ..utils.helpers import atomic_write_text


def templatize(data: Dict[str, Any], _names: Optional[List[str]] = None) -> Dict[str, Any]:
    """Replace every scalar leaf of ``data`` with ``"$KEY"`` for its own key.

    Nested objects are walked recursively (the leaf key is used, not a path);
    lists are kept as they are.

    Raises:
        ConfigError: If a leaf key is not a valid variable name.
    """
    if not isinstance(data, dict):
        raise ConfigError("Config template root must be a JSON object")

    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = templatize(value, _names)
        elif isinstance(value, list):
            result[key] = value
        else:
            if not is_valid_name(key):
                raise ConfigError(f"Config key '{key}' is not a valid environment variable name")
            result[key] = f"${key}"
            if _names is not None and key not in _names:
                _names.append(key)
    return result


def templatize_file(source: Path, output: Optional[Path] = None) -> List[str]:
    """Templatize a JSON file, in place unless ``output`` is given.

    Returns:
        List of placeholder names written, in document order.

    Raises:
        ConfigError: If the source is not valid JSON or has unusable keys.
        OSError: If the source cannot be read or the output written.
    """
    source = Path(source)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {source}: {e}") from e

    names: List[str] = []
    templated = templatize(data, names)
    atomic_write_text(Path(output) if output else source, json.dumps(templated, indent=2) + "\n")
    return names
