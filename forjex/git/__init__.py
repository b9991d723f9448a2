"""Git Operations Package"""

from forjex.git.backend import GitBackend, GitError
from forjex.git.diff_parser import (
    ChangeToken,
    DiffParser,
    FileChangeSet,
    FileStatusEntry,
    StatusKind,
    TokenKind,
)

__all__ = [
    "GitBackend",
    "GitError",
    "DiffParser",
    "ChangeToken",
    "FileChangeSet",
    "FileStatusEntry",
    "StatusKind",
    "TokenKind",
]
