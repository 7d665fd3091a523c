"""Additive tree reconciliation from a template source into a project target."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from oc_core.digest import files_identical

from oc_sync.decision import SyncSession

logger = logging.getLogger(__name__)


def _join_display(display_path: str, name: str) -> str:
    return f"{display_path}/{name}" if display_path else name


def _copy_file(src: Path, dest: Path) -> None:
    """Copy bytes and mode to dest via a temp sibling, replacing dest atomically."""
    tmp = dest.parent / f".{dest.name}.octmp"
    try:
        shutil.copy2(src, tmp)
        tmp.replace(dest)
    finally:
        tmp.unlink(missing_ok=True)


def reconcile(session: SyncSession, source: Path, target: Path, display_path: str) -> None:
    """
    Make target contain every file under source.

    Missing files are created, identical files are left alone silently and
    differing files are overwritten only if the session says so. Nothing is
    ever deleted from target. Filesystem errors while creating or copying
    propagate to the caller.

    Args:
        session: Run state (overwrite strategy, prompt, report)
        source: Template file or directory
        target: Corresponding path in the project
        display_path: Project-relative label used in prompts and the report
    """
    if session.aborted:
        return

    if source.is_dir():
        if not session.dry_run:
            target.mkdir(parents=True, exist_ok=True)
        for child in sorted(source.iterdir(), key=lambda p: p.name):
            if session.aborted:
                return
            reconcile(session, child, target / child.name, _join_display(display_path, child.name))
        return

    report = session.report
    if not target.exists():
        logger.info(f"Creating {display_path}")
        if not session.dry_run:
            target.parent.mkdir(parents=True, exist_ok=True)
            _copy_file(source, target)
        report.created.append(display_path)
        return

    if files_identical(source, target):
        report.unchanged.append(display_path)
        return

    if session.resolve(display_path, source, target):
        logger.info(f"Overwriting {display_path}")
        if not session.dry_run:
            _copy_file(source, target)
        report.overwritten.append(display_path)
    else:
        report.skipped.append(display_path)
