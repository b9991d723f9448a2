"""Diff Parser - Turn raw diff and name-status text into change records.

Token extraction is a best-effort, text-level heuristic. It looks at one
line at a time and never tries to understand the code. Names it extracts
may be wrong; that is acceptable for a commit-message hint.
"""

from dataclasses import dataclass, field
from enum import Enum
import re


class StatusKind(Enum):
    ADDED = 'A'
    MODIFIED = 'M'
    DELETED = 'D'


class TokenKind(Enum):
    FUNCTION = 'function'
    CLASS = 'class'
    COMPONENT = 'component'
    IMPORT = 'import'
    EXPORT = 'export'
    GENERIC = 'generic'


@dataclass(frozen=True)
class FileStatusEntry:
    """One line of a name-status listing."""
    path: str
    status: StatusKind


@dataclass(frozen=True)
class ChangeToken:
    """Something recognisable on a single added or removed line."""
    kind: TokenKind
    name: str | None = None


@dataclass
class FileChangeSet:
    """Everything one diff section did to a single file."""
    path: str
    added_tokens: list[ChangeToken] = field(default_factory=list)
    removed_tokens: list[ChangeToken] = field(default_factory=list)
    added_lines: int = 0
    removed_lines: int = 0

    def add_token(self, token: ChangeToken) -> None:
        if token not in self.added_tokens:
            self.added_tokens.append(token)

    def remove_token(self, token: ChangeToken) -> None:
        if token not in self.removed_tokens:
            self.removed_tokens.append(token)


# Ordered: first matching pattern wins, at most one token per line.
# Group 'name' holds the extracted identifier.
ADDED_LINE_RULES: list[tuple[re.Pattern, TokenKind]] = [
    (re.compile(r'^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.FUNCTION),
    (re.compile(r'^(?:export\s+)?(?:const|let|var)\s+(?P<name>[A-Za-z_$][\w$]*)\s*(?::[^=]+)?=\s*(?:async\s+)?(?:\([^)]*\)|[A-Za-z_$][\w$]*)\s*(?::[^=]+)?=>'), TokenKind.FUNCTION),
    (re.compile(r'^(?:async\s+)?def\s+(?P<name>\w+)\s*\('), TokenKind.FUNCTION),
    (re.compile(r'^(?:export\s+)?(?:default\s+)?(?:abstract\s+)?(?:class|interface)\s+(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.CLASS),
    (re.compile(r'''^import\s+(?:type\s+)?.+?\s+from\s+['"](?P<name>[^'"]+)['"]'''), TokenKind.IMPORT),
    (re.compile(r'^from\s+(?P<name>[\w.]+)\s+import\s+'), TokenKind.IMPORT),
    (re.compile(r'^import\s+(?P<name>[\w.]+)\s*$'), TokenKind.IMPORT),
    (re.compile(r'^export\s+(?:default\s+)?(?:const|let|var|type|enum)\s+(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.EXPORT),
    (re.compile(r'^export\s+\{\s*(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.EXPORT),
    (re.compile(r'^export\s+default\s+(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.EXPORT),
    (re.compile(r'<(?P<name>[A-Z][\w.]*)'), TokenKind.COMPONENT),
    (re.compile(r'\b(?P<name>use(?:State|Effect|LayoutEffect|Reducer))\s*\('), TokenKind.FUNCTION),
]

REMOVED_LINE_RULES: list[tuple[re.Pattern, TokenKind]] = [
    (re.compile(r'^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.FUNCTION),
    (re.compile(r'^(?:export\s+)?const\s+(?P<name>[A-Za-z_$][\w$]*)'), TokenKind.FUNCTION),
    (re.compile(r'^(?:async\s+)?def\s+(?P<name>\w+)\s*\('), TokenKind.FUNCTION),
]

COMMENT_PREFIXES = ('//', '#', '/*', '*', '<!--', '"""', "'''")

_FILE_HEADER_RE = re.compile(r'^\+\+\+ b/(.+)$')
_OLD_HEADER_RE = re.compile(r'^--- a/(.+)$')
_HUNK_RE = re.compile(r'^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@')


class DiffParser:
    """Parses a unified diff and a name-status listing."""

    def __init__(self, min_content_length: int = 10):
        self.min_content_length = min_content_length

    def parse(self, diff: str, name_status: str) -> tuple[list[FileStatusEntry], list[FileChangeSet]]:
        """Main entry point: raw text -> (status entries, change sets)."""
        return self.parse_name_status(name_status), self.parse_diff(diff)

    def parse_name_status(self, text: str) -> list[FileStatusEntry]:
        entries = []
        seen = set()
        for line in text.splitlines():
            if '\t' not in line:
                continue
            status, *rest = line.split('\t')
            path = '\t'.join(rest)
            kind = _status_kind(status)
            if kind is None or not path or path in seen:
                continue
            seen.add(path)
            entries.append(FileStatusEntry(path=path, status=kind))
        return entries

    def parse_diff(self, diff: str) -> list[FileChangeSet]:
        """Scan a unified diff into one FileChangeSet per file.

        Inside a hunk the '@@' line counts decide where content ends, so a
        removed '---' line is content, not an old-file header.
        """
        change_sets: dict[str, FileChangeSet] = {}
        current = None
        old_path = None
        old_left = new_left = 0

        for line in diff.split('\n'):
            if current is not None and (old_left > 0 or new_left > 0):
                if line.startswith('\\'):
                    continue  # "\ No newline at end of file"
                if line.startswith('+'):
                    new_left -= 1
                elif line.startswith('-'):
                    old_left -= 1
                else:
                    old_left -= 1
                    new_left -= 1
                self._scan_line(current, line)
                continue

            if line.startswith('diff --git'):
                current = old_path = None
                old_left = new_left = 0
                continue
            if line.startswith('@@'):
                match = _HUNK_RE.match(line)
                if match:
                    old_left = int(match.group(1) or 1)
                    new_left = int(match.group(2) or 1)
                continue
            if line.startswith('+++'):
                match = _FILE_HEADER_RE.match(line)
                if match:
                    current = change_sets.setdefault(match.group(1), FileChangeSet(path=match.group(1)))
                elif old_path:
                    # Deleted file: '+++ /dev/null', attribute to the old path
                    current = change_sets.setdefault(old_path, FileChangeSet(path=old_path))
                else:
                    current = None
                continue
            if line.startswith('---'):
                match = _OLD_HEADER_RE.match(line)
                old_path = match.group(1) if match else None
                continue
            if current is not None:
                self._scan_line(current, line)

        return list(change_sets.values())

    def _scan_line(self, current: FileChangeSet, line: str) -> None:
        if line.startswith('+'):
            current.added_lines += 1
            token = self.extract_added(line[1:])
            if token:
                current.add_token(token)
        elif line.startswith('-'):
            current.removed_lines += 1
            token = self.extract_removed(line[1:])
            if token:
                current.remove_token(token)

    def extract_added(self, content: str) -> ChangeToken | None:
        return self._extract(content, ADDED_LINE_RULES)

    def extract_removed(self, content: str) -> ChangeToken | None:
        return self._extract(content, REMOVED_LINE_RULES)

    def _extract(self, content: str, rules: list[tuple[re.Pattern, TokenKind]]) -> ChangeToken | None:
        stripped = content.strip()
        if not stripped:
            return None
        for pattern, kind in rules:
            match = pattern.search(stripped)
            if match:
                return ChangeToken(kind=kind, name=match.group('name'))
        if len(stripped) > self.min_content_length and not stripped.startswith(COMMENT_PREFIXES):
            return ChangeToken(kind=TokenKind.GENERIC)
        return None


def _status_kind(status: str) -> StatusKind | None:
    letter = status.strip()[:1].upper()
    try:
        return StatusKind(letter)
    except ValueError:
        return None
