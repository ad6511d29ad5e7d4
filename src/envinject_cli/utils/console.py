"""Console utility functions for formatting and output."""

import click
from typing import Optional

from colorama import Fore, Style, init
from rich.console import Console

init(autoreset=True)


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✨',
    'warning': '⚠️',
    'error': '❌',
}

_COLORAMA_COLORS = {
    'red': Fore.RED,
    'green': Fore.GREEN,
    'yellow': Fore.YELLOW,
    'blue': Fore.BLUE,
    'cyan': Fore.CYAN,
    'white': Fore.WHITE,
}


def _get_console(stderr: bool = False) -> Optional[Console]:
    """Get a Rich console, or None when the terminal cannot be driven by Rich."""
    try:
        return Console(stderr=stderr)
    except Exception:
        return None


def _rich_echo(message: str, color: str = "white", bold: bool = False, symbol: str = None, err: bool = False):
    """Echo message with Rich formatting, colorama when Rich cannot render."""
    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    console = _get_console(stderr=err)
    if console:
        style = f"bold {color}" if bold else color
        console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)
        return

    style_code = Style.BRIGHT if bold else ""
    click.echo(f"{_COLORAMA_COLORS.get(color, Fore.WHITE)}{style_code}{message}{Style.RESET_ALL}", err=err)


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color on stderr."""
    _rich_echo(message, color="red", symbol=symbol, err=True)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _rich_lines(lines):
    """Print pre-formatted lines, e.g. from an output formatter."""
    for line in lines:
        click.echo(line)
