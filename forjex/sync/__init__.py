"""Repository Sync Package"""

from forjex.sync.orchestrator import ExistingRepositoryError, RepositorySync, SyncPhase, SyncResult, SyncState, MISSING_REMOTE_REF
from forjex.sync.scaffold import GITIGNORE_TEMPLATES, ScaffoldOptions, write_project_files

__all__ = [
    "ExistingRepositoryError",
    "RepositorySync",
    "SyncPhase",
    "SyncResult",
    "SyncState",
    "MISSING_REMOTE_REF",
    "GITIGNORE_TEMPLATES",
    "ScaffoldOptions",
    "write_project_files",
]
