"""Terminal Output and Progress Reporting Package"""

import os
import re
import sys
import threading
from typing import Protocol


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'
    MAGENTA = '\033[35m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except Exception:
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
ARROW = '→' if UNICODE_ENABLED else '->'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


def print_info(message: str) -> None:
    print(f"{info(ARROW)} {message}")


COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'fix': Colors.RED,
    'refactor': Colors.YELLOW,
    'docs': Colors.CYAN,
    'test': Colors.MAGENTA,
    'chore': Colors.DIM,
    'style': Colors.DIM,
}


def colorize_commit_type(message: str) -> str:
    """Color the commit type prefix on the first line of a commit message."""
    if not COLORS_ENABLED:
        return message
    lines = message.split('\n')
    match = re.match(r'^(\w+)(\([^)]*\))?(!?:)', lines[0])
    if match:
        color = COMMIT_TYPE_COLORS.get(match.group(1))
        if color:
            prefix = match.group(0)
            lines[0] = _colorize(prefix, Colors.BOLD, color) + lines[0][len(prefix):]
    return '\n'.join(lines)


class Reporter(Protocol):
    """Progress indicator driven by long-running operations."""

    def start(self, text: str) -> None: ...

    def update(self, text: str) -> None: ...

    def succeed(self, text: str) -> None: ...

    def fail(self, text: str) -> None: ...

    def warn(self, text: str) -> None: ...

    def stop(self) -> None: ...


class NullReporter:
    """Reporter that does nothing. Used when output is not wanted."""

    def start(self, text: str) -> None:
        pass

    def update(self, text: str) -> None:
        pass

    def succeed(self, text: str) -> None:
        pass

    def fail(self, text: str) -> None:
        pass

    def warn(self, text: str) -> None:
        pass

    def stop(self) -> None:
        pass


class Spinner:
    """Animated spinner with a status line.

    Usable as a context manager or driven through the Reporter methods.
    Animation only runs on a TTY; otherwise final states are still printed.
    """
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self, text: str = ""):
        self.text = text
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{frame} {self.text}', end='', flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def start(self, text: str | None = None) -> None:
        if text is not None:
            self.text = text
        if self._thread is None and sys.stdout.isatty():
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()

    def update(self, text: str) -> None:
        self.text = text

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
        if sys.stdout.isatty():
            print('\r\033[K', end='', flush=True)

    def succeed(self, text: str) -> None:
        self.stop()
        print_success(text)

    def fail(self, text: str) -> None:
        self.stop()
        print_error(text)

    def warn(self, text: str) -> None:
        self.stop()
        print_warning(text)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.stop()


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "WARN", "ARROW",
    "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error", "print_warning", "print_info",
    "colorize_commit_type", "COMMIT_TYPE_COLORS",
    "Reporter", "NullReporter", "Spinner",
]
