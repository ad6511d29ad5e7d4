"""Placeholder token scanning and literal substitution.

Recognizes the two shell parameter-expansion forms ``$NAME`` and ``${NAME}``.
Anything else starting with ``$`` (``$$``, ``$1``, ``${}``, ``${A-B}``, an
unterminated ``${``) is ordinary text and passes through untouched.
"""

import re
from dataclasses import dataclass
from typing import List, Mapping, Tuple

NAME_PATTERN = r'[A-Za-z_][A-Za-z0-9_]*'

# Braced alternative first so ``${NAME}`` wins at its position.
_TOKEN_RE = re.compile(r'\$(?:\{(?P<braced>' + NAME_PATTERN + r')\}|(?P<bare>' + NAME_PATTERN + r'))')
_NAME_RE = re.compile(NAME_PATTERN)


@dataclass(frozen=True)
class Placeholder:
    """A single ``$NAME`` or ``${NAME}`` occurrence in a text."""
    name: str
    start: int
    end: int
    braced: bool

    @property
    def text(self) -> str:
        """The raw token as it appears in the source text."""
        return f"${{{self.name}}}" if self.braced else f"${self.name}"


def is_valid_name(name: str) -> bool:
    """Check whether ``name`` is a legal shell identifier."""
    return isinstance(name, str) and _NAME_RE.fullmatch(name) is not None


def find_placeholders(text: str) -> List[Placeholder]:
    """Find all placeholder tokens in ``text``, left to right.

    Args:
        text: Text to scan.

    Returns:
        List of placeholders in order of appearance.
    """
    placeholders = []
    for match in _TOKEN_RE.finditer(text):
        braced = match.group('braced')
        placeholders.append(Placeholder(
            name=braced if braced is not None else match.group('bare'),
            start=match.start(),
            end=match.end(),
            braced=braced is not None,
        ))
    return placeholders


def referenced_names(text: str) -> List[str]:
    """Get the distinct placeholder names in ``text`` in first-seen order."""
    seen = {}
    for placeholder in find_placeholders(text):
        seen.setdefault(placeholder.name, None)
    return list(seen)


def substitute(text: str, env: Mapping[str, str]) -> Tuple[str, int, List[str]]:
    """Replace every placeholder whose name is a key of ``env``.

    Values are inserted literally; substituted text is never scanned again.
    Placeholders for unknown names are kept verbatim, braces included.

    Args:
        text: Text containing placeholder tokens.
        env: Substitution source.

    Returns:
        Tuple of (new_text, substituted_count, unresolved_names) where
        unresolved_names is de-duplicated in first-seen order.
    """
    parts = []
    substituted = 0
    unresolved = {}
    position = 0

    for placeholder in find_placeholders(text):
        parts.append(text[position:placeholder.start])
        if placeholder.name in env:
            parts.append(str(env[placeholder.name]))
            substituted += 1
        else:
            parts.append(text[placeholder.start:placeholder.end])
            unresolved.setdefault(placeholder.name, None)
        position = placeholder.end

    parts.append(text[position:])
    return ''.join(parts), substituted, list(unresolved)
