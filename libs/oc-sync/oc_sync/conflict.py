"""Interactive conflict prompt for the sync engine."""

import difflib
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from oc_sync.decision import ConflictDecision

# Menu number -> decision
CHOICES = {
    "1": ConflictDecision.OVERWRITE,
    "2": ConflictDecision.SKIP,
    "3": ConflictDecision.OVERWRITE_ALL,
    "4": ConflictDecision.SKIP_ALL,
    "5": ConflictDecision.ABORT,
}

MAX_PREVIEW_ROWS = 40


def _read_text(path: Path | None) -> str | None:
    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _norm_lines(s: str) -> list[str]:
    return s.replace("\r\n", "\n").replace("\r", "\n").splitlines()


def render_side_by_side(local: str, template: str) -> Table:
    """
    Side-by-side line diff: LOCAL (project) on the left, TEMPLATE on the right.
    Only changed spans are shown, capped at MAX_PREVIEW_ROWS rows.
    """
    a_lines = _norm_lines(local)
    b_lines = _norm_lines(template)
    sm = difflib.SequenceMatcher(None, a_lines, b_lines, autojunk=False)

    table = Table.grid(expand=True)
    table.add_column("LOCAL", ratio=1)
    table.add_column("TEMPLATE", ratio=1)

    rows = 0
    for tag, i1, i2, j1, j2 in sm.get_opcodes():
        if tag == "equal":
            continue
        span = max(i2 - i1, j2 - j1)
        for k in range(span):
            if rows >= MAX_PREVIEW_ROWS:
                table.add_row(Text("...", style="dim"), Text("...", style="dim"))
                return table
            left = Text(a_lines[i1 + k] if (i1 + k) < i2 else "")
            right = Text(b_lines[j1 + k] if (j1 + k) < j2 else "")
            if tag in ("replace", "delete"):
                left.stylize("bold red")
            if tag in ("replace", "insert"):
                right.stylize("bold green")
            table.add_row(left, right)
            rows += 1
    return table


class RichConflictPrompt:
    """Ask on the terminal what to do with a file that differs from the template."""

    def __init__(self, console: Console | None = None, show_diff: bool = True):
        self.console = console or Console()
        self.show_diff = show_diff

    def _preview(self, source: Path | None, target: Path | None) -> None:
        template_text = _read_text(source)
        local_text = _read_text(target)
        if template_text is None or local_text is None:
            self.console.print("[dim](binary or unreadable file, no preview)[/dim]")
            return
        self.console.print(
            Panel(
                render_side_by_side(local_text, template_text),
                title="[red]LOCAL[/red] vs [green]TEMPLATE[/green]",
                expand=True,
            )
        )

    def ask(
        self, display_path: str, source: Path | None = None, target: Path | None = None
    ) -> ConflictDecision | None:
        self.console.rule(f"[bold red]Conflict[/bold red] {display_path}")
        if self.show_diff:
            self._preview(source, target)

        self.console.print(
            "Options:\n"
            "  1. Overwrite this file\n"
            "  2. Skip this file\n"
            "  3. Overwrite all remaining\n"
            "  4. Skip all remaining\n"
            "  5. Abort"
        )
        try:
            choice = Prompt.ask(
                "Your choice", choices=list(CHOICES), default="2", console=self.console
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None
        return CHOICES.get(choice)
