"""Git Backend - Run git commands against a working tree."""

import subprocess
from pathlib import Path


class GitError(Exception):
    """Raised when git operations fail. The message carries git's stderr."""
    pass


class GitBackend:
    """Source-control backend for one working directory.

    Every call runs to completion before returning. Nothing is cached, so
    state questions (has_git_dir, list_remotes) always reflect the disk.
    """

    def __init__(self, workdir: str | Path | None = None, timeout: float | None = None):
        self.workdir = Path(workdir) if workdir else Path.cwd()
        self.timeout = timeout

    def _run_git(self, *args: str) -> str:
        """Run a git command in the working directory and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.workdir,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except subprocess.TimeoutExpired:
            raise GitError(f"Git command timed out after {self.timeout}s: git {' '.join(args)}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    # -- state ---------------------------------------------------------------

    def has_git_dir(self) -> bool:
        """True when the working directory itself holds git metadata."""
        return (self.workdir / '.git').exists()

    def is_git_repository(self) -> bool:
        """True when the working directory is anywhere inside a repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
            return True
        except GitError:
            return False

    def list_remotes(self) -> list[str]:
        output = self._run_git('remote')
        return [line.strip() for line in output.splitlines() if line.strip()]

    # -- reading changes -----------------------------------------------------

    def read_raw_diff(self, staged: bool) -> str:
        args = ['diff', '--staged'] if staged else ['diff']
        return self._run_git(*args)

    def read_name_status(self, staged: bool) -> str:
        args = ['diff', '--name-status', '--no-renames']
        if staged:
            args.insert(1, '--staged')
        return self._run_git(*args)

    # -- mutations -----------------------------------------------------------

    def init(self) -> None:
        self._run_git('init')

    def checkout_new_branch(self, name: str) -> None:
        self._run_git('checkout', '-b', name)

    def add_all(self) -> None:
        self._run_git('add', '.')

    def commit(self, message: str) -> None:
        self._run_git('commit', '-m', message)

    def add_remote(self, name: str, url: str) -> None:
        self._run_git('remote', 'add', name, url)

    def remove_remote(self, name: str) -> None:
        self._run_git('remote', 'remove', name)

    def pull(self, remote: str, branch: str, rebase: bool = False,
             allow_unrelated_histories: bool = False) -> None:
        args = ['pull', remote, branch]
        if rebase:
            args.append('--rebase')
        if allow_unrelated_histories:
            args.append('--allow-unrelated-histories')
        self._run_git(*args)

    def push(self, remote: str, branch: str, set_upstream: bool = False) -> None:
        args = ['push']
        if set_upstream:
            args.append('--set-upstream')
        args.extend([remote, branch])
        self._run_git(*args)
