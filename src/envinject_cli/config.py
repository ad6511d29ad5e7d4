"""Configuration management for envinject.

Values are layered, lowest precedence first:

1. built-in defaults
2. the ``materialize:`` section of ``envinject.yml``
3. ``ENVINJECT_*`` environment variables
4. command-line flags
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

import yaml

from .core.exceptions import ConfigError
from .core.handoff import DEFAULT_SERVER_COMMAND

CONFIG_FILE = "envinject.yml"
DEFAULT_TARGET = "/usr/share/nginx/html/**/*.js"

ENV_CONFIG = "ENVINJECT_CONFIG"
ENV_TARGET = "ENVINJECT_TARGET"
ENV_ALLOW = "ENVINJECT_ALLOW"
ENV_PREFIX = "ENVINJECT_PREFIX"


@dataclass
class MaterializeConfig:
    """Settings for a materialization pass and the server handoff."""
    target: str = DEFAULT_TARGET
    allow: Optional[List[str]] = None
    prefix: Optional[str] = None
    server: List[str] = field(default_factory=lambda: list(DEFAULT_SERVER_COMMAND))

    @classmethod
    def load(cls, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
             **overrides) -> 'MaterializeConfig':
        """Create configuration from file, environment and command-line overrides.

        Args:
            config_path: Explicit YAML file. A missing explicit file is an error,
                a missing default ``envinject.yml`` is not.
            environ: Environment to read ``ENVINJECT_*`` from (defaults to os.environ).
            **overrides: Command-line values; ``None`` means "not given".

        Returns:
            MaterializeConfig: Fully resolved configuration.

        Raises:
            ConfigError: If the file is missing, malformed or has wrong types.
        """
        if environ is None:
            environ = os.environ

        config = cls()

        explicit = config_path or environ.get(ENV_CONFIG)
        path = Path(explicit) if explicit else Path(CONFIG_FILE)
        if path.exists():
            config._apply_file(path)
        elif explicit:
            raise ConfigError(f"Config file not found: {path}")

        config._apply_environ(environ)

        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(config, key):
                raise ConfigError(f"Unknown configuration option: {key}")
            # Empty tuples from repeatable click options mean "not given"
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                value = list(value)
            setattr(config, key, value)

        return config

    def _apply_file(self, path: Path) -> None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")

        section = data.get('materialize') or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'materialize' section in {path} must be a mapping")

        if 'target' in section:
            self.target = _expect_str(section['target'], 'target', path)
        if 'allow' in section and section['allow'] is not None:
            self.allow = _expect_str_list(section['allow'], 'allow', path)
        if 'prefix' in section and section['prefix'] is not None:
            self.prefix = _expect_str(section['prefix'], 'prefix', path)
        if 'server' in section:
            server = section['server']
            if isinstance(server, str):
                server = server.split()
            self.server = _expect_str_list(server, 'server', path)

    def _apply_environ(self, environ: Mapping[str, str]) -> None:
        if environ.get(ENV_TARGET):
            self.target = environ[ENV_TARGET]
        if environ.get(ENV_ALLOW):
            self.allow = [name.strip() for name in environ[ENV_ALLOW].split(',') if name.strip()]
        if environ.get(ENV_PREFIX):
            self.prefix = environ[ENV_PREFIX]


def _expect_str(value, key: str, path: Path) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in {path} must be a string")
    return value


def _expect_str_list(value, key: str, path: Path) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' in {path} must be a list of strings")
    return list(value)
