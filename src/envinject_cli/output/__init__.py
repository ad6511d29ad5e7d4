"""Output formatting for envinject reports."""

from .formatters import MaterializationFormatter

__all__ = ['MaterializationFormatter']
