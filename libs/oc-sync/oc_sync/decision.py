"""Overwrite decisions for a single sync run.

A SyncSession carries the run-wide overwrite strategy. Every conflicting file
goes through `SyncSession.resolve`, which only blocks on the prompt while the
strategy is still ASK; "overwrite all", "skip all" and "abort" answers stick
for the rest of the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class OverwriteStrategy(Enum):
    """Run-wide policy for conflicting files."""

    ASK = "ask"
    OVERWRITE_ALL = "overwrite_all"
    SKIP_ALL = "skip_all"
    ABORT = "abort"


class ConflictDecision(Enum):
    """Answer to one conflict prompt."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    OVERWRITE_ALL = "overwrite_all"
    SKIP_ALL = "skip_all"
    ABORT = "abort"


class ConflictPrompt(Protocol):
    def ask(
        self, display_path: str, source: Path | None = None, target: Path | None = None
    ) -> ConflictDecision | None:
        """Return the user's decision, or None if the prompt was cancelled."""
        ...


@dataclass
class SyncReport:
    created: list[str] = field(default_factory=list)
    overwritten: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    aborted: bool = False

    @property
    def changed(self) -> int:
        return len(self.created) + len(self.overwritten)


@dataclass
class SyncSession:
    """State shared by every reconcile/merge call of one sync run."""

    prompt: ConflictPrompt
    console: Console = field(default_factory=Console)
    strategy: OverwriteStrategy = OverwriteStrategy.ASK
    dry_run: bool = False
    report: SyncReport = field(default_factory=SyncReport)

    @property
    def aborted(self) -> bool:
        return self.strategy is OverwriteStrategy.ABORT

    def warn(self, message: str) -> None:
        self.report.warnings.append(message)
        self.console.print(f"[yellow][WARN][/yellow] {escape(message)}")

    def _skipped(self, display_path: str) -> None:
        self.console.print(f"[yellow]Skipped[/yellow] {display_path}")

    def abort(self) -> None:
        if self.aborted:
            return
        self.strategy = OverwriteStrategy.ABORT
        self.report.aborted = True
        self.console.print("[yellow]Sync aborted; remaining files left untouched[/yellow]")

    def resolve(
        self, display_path: str, source: Path | None = None, target: Path | None = None
    ) -> bool:
        """Decide whether a conflicting file gets overwritten (True) or kept (False)."""
        if self.strategy is OverwriteStrategy.ABORT:
            return False
        if self.strategy is OverwriteStrategy.SKIP_ALL:
            self._skipped(display_path)
            return False
        if self.strategy is OverwriteStrategy.OVERWRITE_ALL:
            return True

        decision = self.prompt.ask(display_path, source, target)
        logger.debug(f"Conflict decision for {display_path}: {decision}")

        if decision is ConflictDecision.OVERWRITE:
            return True
        if decision is ConflictDecision.SKIP:
            self._skipped(display_path)
            return False
        if decision is ConflictDecision.OVERWRITE_ALL:
            self.strategy = OverwriteStrategy.OVERWRITE_ALL
            return True
        if decision is ConflictDecision.SKIP_ALL:
            self.strategy = OverwriteStrategy.SKIP_ALL
            self._skipped(display_path)
            return False

        # Explicit abort or a cancelled prompt
        self.abort()
        return False
