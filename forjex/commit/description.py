"""Description Builder - Turn classified changes into a commit subject."""

from dataclasses import dataclass
from pathlib import PurePosixPath

from forjex.commit.classifier import ClassificationResult, touched_paths
from forjex.git.diff_parser import FileChangeSet, FileStatusEntry, StatusKind, TokenKind

DEFAULT_DESCRIPTION = "update code"

# (token kind, singular noun, plural noun), checked in order
TOKEN_CLAUSES = [
    (TokenKind.COMPONENT, 'component', 'components'),
    (TokenKind.CLASS, 'class', 'classes'),
    (TokenKind.FUNCTION, 'function', 'functions'),
    (TokenKind.IMPORT, 'import', 'imports'),
]

STATUS_VERBS = [
    (StatusKind.ADDED, 'add'),
    (StatusKind.MODIFIED, 'update'),
    (StatusKind.DELETED, 'remove'),
]


@dataclass(frozen=True)
class CommitMessage:
    type: str
    description: str
    scope: str | None = None

    def __str__(self) -> str:
        if self.scope:
            return f"{self.type}({self.scope}): {self.description}"
        return f"{self.type}: {self.description}"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def _file_stem(path: str) -> str:
    return PurePosixPath(path).stem or path


class DescriptionBuilder:
    """Builds a lower-case, imperative, period-free description.

    Identifier names are kept as written in the diff.
    """

    def __init__(self, max_names: int = 2):
        self.max_names = max_names

    def build(self, entries: list[FileStatusEntry], change_sets: list[FileChangeSet]) -> str:
        paths = touched_paths(entries, change_sets)
        primary = self._token_clause(change_sets, paths) or self._file_clause(entries, paths)
        removed = self._removed_clause(change_sets)

        if primary and removed:
            return f"{primary} and {removed}"
        return primary or removed or DEFAULT_DESCRIPTION

    def message(self, classification: ClassificationResult, entries: list[FileStatusEntry],
                change_sets: list[FileChangeSet]) -> CommitMessage:
        return CommitMessage(
            type=classification.commit_type,
            scope=classification.scope,
            description=self.build(entries, change_sets),
        )

    def _token_clause(self, change_sets: list[FileChangeSet], paths: list[str]) -> str | None:
        for kind, singular, plural in TOKEN_CLAUSES:
            names = _distinct_names(change_sets, kind, removed=False)
            if not names:
                continue
            clause = f"add {self._join_names(names)} {_plural(len(names), singular, plural)}"
            if len(paths) == 1:
                clause += f" to {_file_stem(paths[0])}"
            return clause
        return None

    def _file_clause(self, entries: list[FileStatusEntry], paths: list[str]) -> str | None:
        if not paths:
            return None
        status_by_path = {e.path: e.status for e in entries}
        statuses = [status_by_path.get(p, StatusKind.MODIFIED) for p in paths]

        if len(paths) == 1:
            verb = dict(STATUS_VERBS)[statuses[0]]
            return f"{verb} {_file_stem(paths[0])}"

        parts = []
        for status, verb in STATUS_VERBS:
            count = statuses.count(status)
            if count:
                parts.append(f"{verb} {count} {_plural(count, 'file', 'files')}")
        return ' and '.join(parts)

    def _removed_clause(self, change_sets: list[FileChangeSet]) -> str | None:
        count = len(_distinct_names(change_sets, TokenKind.FUNCTION, removed=True))
        if not count:
            return None
        return f"remove {count} {_plural(count, 'function', 'functions')}"

    def _join_names(self, names: list[str]) -> str:
        shown = names[:self.max_names]
        text = ' and '.join(shown)
        hidden = len(names) - len(shown)
        if hidden:
            text = f"{', '.join(shown)} and {hidden} more"
        return text


def _distinct_names(change_sets: list[FileChangeSet], kind: TokenKind, removed: bool) -> list[str]:
    names = []
    for change in change_sets:
        tokens = change.removed_tokens if removed else change.added_tokens
        for token in tokens:
            if token.kind is kind and token.name and token.name not in names:
                names.append(token.name)
    return names
