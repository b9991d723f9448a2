"""Change Classifier - Pick a conventional commit type and scope."""

from collections import Counter
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable
import re

from forjex.git.diff_parser import FileChangeSet, FileStatusEntry, StatusKind, TokenKind


@dataclass(frozen=True)
class ClassificationResult:
    commit_type: str
    scope: str | None = None


@dataclass
class ChangeSummary:
    """Inputs every type rule can look at, computed once per classification."""
    entries: list[FileStatusEntry]
    change_sets: list[FileChangeSet]
    paths: list[str]

    @property
    def added_lines(self) -> int:
        return sum(c.added_lines for c in self.change_sets)

    @property
    def removed_lines(self) -> int:
        return sum(c.removed_lines for c in self.change_sets)

    def any_path(self, *needles: str) -> bool:
        return any(needle in path for path in self.paths for needle in needles)


FEATURE_TOKENS = {TokenKind.FUNCTION, TokenKind.CLASS, TokenKind.COMPONENT}
_FIX_PATH_RE = re.compile(r'fix|bug', re.IGNORECASE)


def _adds_feature(s: ChangeSummary) -> bool:
    if any(e.status is StatusKind.ADDED for e in s.entries):
        return True
    return any(t.kind in FEATURE_TOKENS for c in s.change_sets for t in c.added_tokens)


def _looks_like_fix(s: ChangeSummary) -> bool:
    if any(_FIX_PATH_RE.search(p) for p in s.paths):
        return True
    return s.added_lines > 0 and s.removed_lines > s.added_lines


# Ordered: the first predicate that holds decides the type.
TYPE_RULES: list[tuple[str, Callable[[ChangeSummary], bool]]] = [
    ('docs', lambda s: s.any_path('README', '.md')),
    ('test', lambda s: s.any_path('test', '.spec.', '.test.')),
    ('style', lambda s: s.any_path('.css', '.scss', 'style')),
    ('chore', lambda s: s.any_path('package.json', 'config')),
    ('feat', _adds_feature),
    ('fix', _looks_like_fix),
    ('refactor', lambda s: s.removed_lines > 2 * s.added_lines),
]

DEFAULT_TYPE = 'chore'


def touched_paths(entries: list[FileStatusEntry], change_sets: list[FileChangeSet]) -> list[str]:
    """Status paths first, then diff-only paths, each once, in first-seen order."""
    paths = [e.path for e in entries]
    seen = set(paths)
    for change in change_sets:
        if change.path not in seen:
            seen.add(change.path)
            paths.append(change.path)
    return paths


class ChangeClassifier:
    """Maps structured changes to a commit type and optional scope.

    Stateless: the same input always yields the same result.
    """

    def classify(self, entries: list[FileStatusEntry], change_sets: list[FileChangeSet]) -> ClassificationResult:
        paths = touched_paths(entries, change_sets)
        summary = ChangeSummary(entries=entries, change_sets=change_sets, paths=paths)
        return ClassificationResult(commit_type=self.commit_type(summary), scope=self.scope(paths))

    def commit_type(self, summary: ChangeSummary) -> str:
        for commit_type, predicate in TYPE_RULES:
            if predicate(summary):
                return commit_type
        return DEFAULT_TYPE

    def scope(self, paths: list[str]) -> str | None:
        """Most common parent directory if it covers at least half the files.

        Root-level files count toward the total but never become the scope.
        Ties go to the directory seen first.
        """
        if not paths:
            return None
        directories = [PurePosixPath(p).parent.name for p in paths]
        counts = Counter(d for d in directories if d)
        if not counts:
            return None
        # Counter preserves insertion order, max() keeps the first of equals
        directory, count = max(counts.items(), key=lambda item: item[1])
        if count * 2 >= len(paths):
            return directory
        return None
