"""Config materialization: rewrite placeholder tokens in built bundle files.

Runs once at container start, before the static file server is started:

    capture environment -> rewrite target files -> exec the file server

A failure on any file aborts the whole pass. A partially configured bundle
is worse than a container that refuses to start.
"""

import glob
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping

from .exceptions import ConfigError, TargetIOError
from .placeholders import substitute
from ..utils.helpers import atomic_write_text


@dataclass
class FileResult:
    """Outcome of rewriting a single target file."""
    path: Path
    substitutions: int = 0
    unresolved: List[str] = field(default_factory=list)
    changed: bool = False


@dataclass
class MaterializationSummary:
    """Summary of one materialization pass."""
    target_glob: str
    files: List[FileResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def files_processed(self) -> int:
        return len(self.files)

    @property
    def files_changed(self) -> int:
        return sum(1 for result in self.files if result.changed)

    @property
    def substitutions(self) -> int:
        """Total number of tokens replaced across all files."""
        return sum(result.substitutions for result in self.files)

    @property
    def unresolved(self) -> List[str]:
        """Distinct names left verbatim, in first-seen order across files."""
        seen = {}
        for result in self.files:
            for name in result.unresolved:
                seen.setdefault(name, None)
        return list(seen)

    @property
    def matched_nothing(self) -> bool:
        """True when the target glob matched no files at all."""
        return not self.files


def validate_target_glob(target_glob: str) -> None:
    """Reject empty or malformed glob patterns.

    An unclosed ``[`` is not malformed: glob matches it as a literal character.

    Raises:
        ConfigError: If the pattern cannot be used.
    """
    if not isinstance(target_glob, str) or not target_glob.strip():
        raise ConfigError("Target glob must be a non-empty string")
    if "\x00" in target_glob:
        raise ConfigError("Target glob must not contain NUL bytes")


def find_target_files(target_glob: str) -> List[Path]:
    """Enumerate regular files matching ``target_glob`` in lexicographic order."""
    validate_target_glob(target_glob)
    matches = glob.glob(target_glob, recursive=True)
    return [Path(match) for match in sorted(matches) if Path(match).is_file()]


class ConfigMaterializer:
    """Rewrites placeholder tokens in target files against an environment snapshot."""

    def __init__(self, env: Mapping[str, str], encoding: str = "utf-8"):
        """Initialize the materializer.

        Args:
            env: Substitution source, never re-read during the pass.
            encoding: Text encoding of the target files.
        """
        self.env = env
        self.encoding = encoding

    def materialize(self, target_glob: str, dry_run: bool = False) -> MaterializationSummary:
        """Rewrite every file matching ``target_glob``.

        Args:
            target_glob: Shell-style glob (``**`` is recursive).
            dry_run: Compute the summary without writing anything.

        Returns:
            MaterializationSummary for the pass.

        Raises:
            ConfigError: If the glob is empty or malformed.
            TargetIOError: If a matched file cannot be read or replaced.
        """
        summary = MaterializationSummary(target_glob=target_glob, dry_run=dry_run)
        for path in find_target_files(target_glob):
            summary.files.append(self.materialize_file(path, dry_run=dry_run))
        return summary

    def materialize_file(self, path: Path, dry_run: bool = False) -> FileResult:
        """Rewrite a single file in place."""
        try:
            with open(path, "r", encoding=self.encoding, newline="") as fh:
                original = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TargetIOError(path, "Cannot read target file", e) from e

        content, count, unresolved = substitute(original, self.env)
        result = FileResult(path=path, substitutions=count, unresolved=unresolved,
                            changed=content != original)

        if result.changed and not dry_run:
            try:
                atomic_write_text(path, content, encoding=self.encoding)
            except OSError as e:
                raise TargetIOError(path, "Cannot replace target file", e) from e

        return result


def materialize(target_glob: str, env: Mapping[str, str], *, dry_run: bool = False) -> MaterializationSummary:
    """Resolve placeholders in all files matching ``target_glob`` against ``env``.

    Unknown names are left verbatim; zero matching files is a successful no-op
    (``summary.matched_nothing`` tells the two apart for diagnostics).
    """
    return ConfigMaterializer(env).materialize(target_glob, dry_run=dry_run)
