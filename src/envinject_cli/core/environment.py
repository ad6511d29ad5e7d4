"""Immutable environment snapshot used as the substitution source.

The snapshot is taken once per process start and injected into the
materializer, so the rewrite pass never reads ``os.environ`` itself.

Restriction options:
- allow: explicit allow-list of variable names (recommended for bundles that
  are served publicly, so unrelated secrets can never leak into them)
- prefix: only variables whose name starts with the prefix are visible
"""

import os
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .exceptions import ConfigError
from .placeholders import is_valid_name


class EnvironmentSnapshot(Mapping[str, str]):
    """Read-only name -> value mapping filtered to shell identifiers."""

    def __init__(self, values: Mapping[str, str], allow: Optional[Iterable[str]] = None,
                 prefix: Optional[str] = None):
        """Build a snapshot from ``values``.

        Args:
            values: Source mapping, typically a copy of ``os.environ``.
            allow: Optional allow-list; when given, only these names are visible.
            prefix: Optional name prefix; when given, only matching names are visible.

        Raises:
            ConfigError: If ``allow`` contains a name that is not a valid identifier.
        """
        allowed = None
        if allow is not None:
            allowed = frozenset(allow)
            invalid = sorted(name for name in allowed if not is_valid_name(name))
            if invalid:
                raise ConfigError(f"Invalid variable name(s) in allow-list: {', '.join(invalid)}")

        self._allow = allowed
        self._prefix = prefix or None
        self._values: Dict[str, str] = {
            name: str(value)
            for name, value in values.items()
            if is_valid_name(name)
            and (allowed is None or name in allowed)
            and (self._prefix is None or name.startswith(self._prefix))
        }

    @classmethod
    def capture(cls, environ: Optional[Mapping[str, str]] = None, allow: Optional[Iterable[str]] = None,
                prefix: Optional[str] = None) -> 'EnvironmentSnapshot':
        """Capture the current process environment (or ``environ`` if given)."""
        if environ is None:
            environ = os.environ.copy()
        return cls(environ, allow=allow, prefix=prefix)

    def restricted(self, allow: Optional[Iterable[str]] = None,
                   prefix: Optional[str] = None) -> 'EnvironmentSnapshot':
        """Return a narrower snapshot; existing restrictions still apply.

        Allow-lists are intersected and the longer of two compatible prefixes
        is kept, so ``allow`` and ``prefix`` describe the combined restriction.

        Raises:
            ConfigError: If ``prefix`` and the existing prefix exclude each other.
        """
        if allow is not None and self._allow is not None:
            allow = list(allow)
            invalid = sorted(name for name in allow if not is_valid_name(name))
            if invalid:
                raise ConfigError(f"Invalid variable name(s) in allow-list: {', '.join(invalid)}")
            allow = self._allow.intersection(allow)
        elif allow is None:
            allow = self._allow

        prefix = prefix or None
        if prefix is None:
            prefix = self._prefix
        elif self._prefix is not None:
            if self._prefix.startswith(prefix):
                prefix = self._prefix
            elif not prefix.startswith(self._prefix):
                raise ConfigError(f"Prefix '{prefix}' conflicts with existing prefix '{self._prefix}'")

        return EnvironmentSnapshot(self._values, allow=allow, prefix=prefix)

    def names(self) -> Tuple[str, ...]:
        """Sorted names visible in this snapshot."""
        return tuple(sorted(self._values))

    @property
    def allow(self) -> Optional[frozenset]:
        return self._allow

    @property
    def prefix(self) -> Optional[str]:
        return self._prefix

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        # Names only, values may be secrets.
        return f"EnvironmentSnapshot(names={list(self.names())!r})"
