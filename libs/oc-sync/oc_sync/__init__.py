"""oc sync - template reconciliation, conflict decisions and dependency merging."""

from oc_sync.conflict import RichConflictPrompt
from oc_sync.decision import (
    ConflictDecision,
    ConflictPrompt,
    OverwriteStrategy,
    SyncReport,
    SyncSession,
)
from oc_sync.deps import merge_deps
from oc_sync.reconcile import reconcile
from oc_sync.workspace import Workspace, find_project_root, init_project

__all__ = [
    "ConflictDecision",
    "ConflictPrompt",
    "OverwriteStrategy",
    "RichConflictPrompt",
    "SyncReport",
    "SyncSession",
    "Workspace",
    "find_project_root",
    "init_project",
    "merge_deps",
    "reconcile",
]

__version__ = "0.1.0"
