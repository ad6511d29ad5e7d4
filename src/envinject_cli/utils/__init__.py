"""Utility modules for envinject."""

from .console import (
    _rich_success,
    _rich_error,
    _rich_warning,
    _rich_info,
    _rich_echo,
    _rich_lines,
    _get_console,
    STATUS_SYMBOLS
)
from .helpers import atomic_write_text, is_tool_available

__all__ = [
    '_rich_success',
    '_rich_error',
    '_rich_warning',
    '_rich_info',
    '_rich_echo',
    '_rich_lines',
    '_get_console',
    'STATUS_SYMBOLS',
    'atomic_write_text',
    'is_tool_available'
]
