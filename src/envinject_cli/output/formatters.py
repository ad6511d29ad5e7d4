"""CLI output formatters for materialization and placeholder check reports."""

from typing import List, Sequence

from rich.console import Console
from rich.text import Text

from ..core.materializer import FileResult, MaterializationSummary


class MaterializationFormatter:
    """Formats materialization results as lists of printable lines."""

    def __init__(self, use_color: bool = True):
        """Initialize formatter.

        Args:
            use_color: Whether to use colors and rich formatting.
        """
        self.use_color = use_color
        self.console = Console(force_terminal=True) if use_color else None

    def format_summary(self, summary: MaterializationSummary, verbose: bool = False) -> List[str]:
        """Format the result of a materialization pass.

        Args:
            summary: Result of the pass.
            verbose: Include one line per processed file.

        Returns:
            List of formatted lines
        """
        lines = []

        if summary.matched_nothing:
            lines.append(self._styled(f"⚠️  No files matched {summary.target_glob}", "yellow"))
            return lines

        verb = "Would materialize" if summary.dry_run else "Materialized"
        header = (f"{verb} {summary.files_processed} file(s), "
                  f"{summary.substitutions} placeholder(s) substituted")
        lines.append(self._styled(header, "green bold"))

        if verbose:
            lines.extend(self._format_file_tree(summary.files))

        if summary.unresolved:
            lines.append(self._styled(
                f"Left unresolved (variable not set): {', '.join(summary.unresolved)}", "yellow"))

        return lines

    def format_check_report(self, summary: MaterializationSummary) -> List[str]:
        """Format a per-file placeholder report for ``envinject check``."""
        if summary.matched_nothing:
            return [self._styled(f"⚠️  No files matched {summary.target_glob}", "yellow")]

        lines = [self._styled(f"Checked {summary.files_processed} file(s) matching {summary.target_glob}", "cyan")]
        lines.extend(self._format_file_tree(summary.files))

        if summary.unresolved:
            lines.append(self._styled(f"✗ Unresolved: {', '.join(summary.unresolved)}", "red bold"))
        else:
            lines.append(self._styled("✅ All placeholders resolve", "green bold"))
        return lines

    def format_handoff(self, command: Sequence[str]) -> List[str]:
        """Format the line shown right before exec'ing the server."""
        display = " ".join(f'"{arg}"' if " " in arg else arg for arg in command)
        return [self._styled(f"Starting server: {display}", "cyan")]

    def _format_file_tree(self, files: List[FileResult]) -> List[str]:
        lines = []
        for result in files:
            line = f"├─ {result.path}: {result.substitutions} substituted"
            if result.unresolved:
                line += f", unresolved {', '.join(result.unresolved)}"
            lines.append(self._styled(line, "dim"))

        # Change last ├─ to └─
        if lines:
            lines[-1] = lines[-1].replace("├─", "└─")
        return lines

    def _styled(self, text: str, style: str) -> str:
        """Apply styling to text, plain when color is disabled."""
        if self.use_color and self.console:
            styled_text = Text(text)
            styled_text.style = style
            with self.console.capture() as capture:
                self.console.print(styled_text, end="")
            return capture.get()
        return text
