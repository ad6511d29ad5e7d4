"""Command-line interface for envinject."""

import os
import sys
import click
from colorama import init, Fore, Style
from pathlib import Path

from envinject_cli.version import get_version
from envinject_cli.config import MaterializeConfig
from envinject_cli.core.environment import EnvironmentSnapshot
from envinject_cli.core.exceptions import EnvInjectError
from envinject_cli.core.handoff import exec_server
from envinject_cli.core.materializer import materialize as materialize_files
from envinject_cli.core.templating import templatize_file
from envinject_cli.output.formatters import MaterializationFormatter
from envinject_cli.utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _rich_lines, _get_console
)

# Initialize colorama for the top-level error handler
init(autoreset=True)

ERROR = f"{Fore.RED}{Style.BRIGHT}"
RESET = Style.RESET_ALL


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    console = _get_console()
    if console:
        from rich.text import Text
        version_text = Text()
        version_text.append("envinject", style="bold cyan")
        version_text.append(f" version {get_version()}", style="white")
        console.print(version_text)
    else:
        click.echo(f"envinject version {get_version()}")
    ctx.exit()


def materialize_options(f):
    """Options shared by every command that runs a materialization pass."""
    f = click.option('--config', 'config_path', type=click.Path(dir_okay=False),
                     help="Path to envinject.yml")(f)
    f = click.option('--prefix', default=None,
                     help="Only substitute variables whose name starts with this prefix")(f)
    f = click.option('--allow', '-a', multiple=True,
                     help="Only substitute this variable (repeatable)")(f)
    f = click.option('--target', '-t', default=None,
                     help="Glob of files to rewrite (supports **)")(f)
    return f


def _load_config(config_path, target, allow, prefix):
    return MaterializeConfig.load(config_path=config_path, target=target, allow=allow, prefix=prefix)


def _snapshot(config, environ=None):
    return EnvironmentSnapshot.capture(environ, allow=config.allow, prefix=config.prefix)


def _use_color():
    return sys.stdout.isatty()


@click.group(help="Inject runtime environment variables into static SPA bundles")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
def cli():
    """Main entry point for the envinject CLI."""


@cli.command(help="Replace $VAR placeholders in the target files")
@materialize_options
@click.option('--dry-run', is_flag=True, help="Report what would change without writing files")
@click.option('--verbose', '-v', is_flag=True, help="Show one line per processed file")
def materialize(target, allow, prefix, config_path, dry_run, verbose):
    """Run a single materialization pass."""
    try:
        config = _load_config(config_path, target, allow, prefix)
        summary = materialize_files(config.target, _snapshot(config), dry_run=dry_run)
    except EnvInjectError as e:
        _rich_error(f"Materialization failed: {e}", symbol="error")
        sys.exit(1)

    formatter = MaterializationFormatter(use_color=_use_color())
    _rich_lines(formatter.format_summary(summary, verbose=verbose))


@cli.command(help="List placeholders per file and report unresolved variables")
@materialize_options
@click.option('--strict', is_flag=True, help="Exit with status 1 if any placeholder is unresolved")
def check(target, allow, prefix, config_path, strict):
    """Dry-run report of placeholder resolution."""
    try:
        config = _load_config(config_path, target, allow, prefix)
        summary = materialize_files(config.target, _snapshot(config), dry_run=True)
    except EnvInjectError as e:
        _rich_error(f"Check failed: {e}", symbol="error")
        sys.exit(1)

    formatter = MaterializationFormatter(use_color=_use_color())
    _rich_lines(formatter.format_check_report(summary))

    if strict and summary.unresolved:
        sys.exit(1)


@cli.command(
    help="Materialize the target files, then exec the server COMMAND",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@materialize_options
@click.option('--quiet', '-q', is_flag=True, help="Only print errors")
@click.argument('command', nargs=-1, type=click.UNPROCESSED)
def run(target, allow, prefix, config_path, quiet, command):
    """Container entrypoint: materialize, then replace this process with the server."""
    environ = os.environ.copy()
    try:
        config = _load_config(config_path, target, allow, prefix)
        summary = materialize_files(config.target, _snapshot(config, environ), dry_run=False)
    except EnvInjectError as e:
        _rich_error(f"Materialization failed, not starting server: {e}", symbol="error")
        sys.exit(1)

    server_command = list(command) or config.server
    if not quiet:
        formatter = MaterializationFormatter(use_color=_use_color())
        _rich_lines(formatter.format_summary(summary))
        _rich_lines(formatter.format_handoff(server_command))
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        # The server gets the full environment, not just the substitution source
        exec_server(server_command, environ)
    except EnvInjectError as e:
        _rich_error(str(e), symbol="error")
        sys.exit(1)


@cli.command(help="Turn a JSON config into a $KEY placeholder template (build stage)")
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False), help="Write here instead of in place")
def templatize(source, output):
    """Rewrite every leaf value of SOURCE to "$KEY"."""
    try:
        names = templatize_file(Path(source), Path(output) if output else None)
    except (EnvInjectError, OSError) as e:
        _rich_error(f"Templating failed: {e}", symbol="error")
        sys.exit(1)

    destination = output or source
    if names:
        _rich_success(f"Wrote {len(names)} placeholder(s) to {destination}", symbol="success")
        _rich_info(", ".join(names))
    else:
        _rich_warning(f"No scalar values found in {source}", symbol="warning")


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except Exception as e:
        click.echo(f"{ERROR}Error: {e}{RESET}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
