"""Repository Sync - Get the working tree onto a remote branch.

Two paths:

  new repository       [stop if already under git] init -> commit "Initial commit from Forjex" -> add origin -> push
  existing repository  [init] -> (re)point origin -> commit -> rebase-pull -> push

Every git call finishes before the next one starts. A commit made before a
later step fails is not rolled back, so a retry may add a second commit.

Known risk: on the existing-repository path a pull failure other than
"remote branch missing" only produces a warning and the push is still
attempted. That keeps the flow moving but can leave the histories diverged
and in need of manual resolution.
"""

from dataclasses import dataclass, field
from enum import Enum

from forjex.commit.synthesizer import CommitMessageSynthesizer
from forjex.config import Config
from forjex.git.backend import GitBackend, GitError
from forjex.output import NullReporter, Reporter
from forjex.sync.scaffold import ScaffoldOptions, write_project_files

# git prints this when the remote has no such branch yet (fresh remote)
MISSING_REMOTE_REF = "couldn't find remote ref"


class ExistingRepositoryError(GitError):
    """The new-repository path was asked to run inside an existing repository."""
    pass


class SyncPhase(Enum):
    START = 'start'
    INIT_LOCAL = 'init_local'
    REMOTE_SETUP = 'remote_setup'
    STAGE_AND_COMMIT = 'stage_and_commit'
    RECONCILE = 'reconcile'
    ADD_REMOTE = 'add_remote'
    PUSH = 'push'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class SyncState:
    """Snapshot of the working tree, taken fresh for every run."""
    existing_repo: bool
    has_git_dir: bool
    has_origin: bool
    branch: str = "main"


@dataclass
class SyncResult:
    phases: list[SyncPhase] = field(default_factory=list)
    commit_message: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return bool(self.phases) and self.phases[-1] is SyncPhase.DONE


class RepositorySync:
    """Drives init/remote/commit/reconcile/push for one invocation."""

    def __init__(
        self,
        backend: GitBackend,
        synthesizer: CommitMessageSynthesizer | None = None,
        reporter: Reporter | None = None,
        config: Config | None = None,
    ):
        self.backend = backend
        self.reporter = reporter or NullReporter()
        self.config = config or Config()
        self.synthesizer = synthesizer or CommitMessageSynthesizer.from_config(
            backend, self.config, reporter=self.reporter,
        )
        self.last_result: SyncResult | None = None

    def read_state(self, existing_repo: bool) -> SyncState:
        has_git_dir = self.backend.has_git_dir()
        has_origin = has_git_dir and self.config.remote in self.backend.list_remotes()
        return SyncState(
            existing_repo=existing_repo,
            has_git_dir=has_git_dir,
            has_origin=has_origin,
            branch=self.config.branch,
        )

    def run(self, remote_url: str, existing_repo: bool,
            scaffold: ScaffoldOptions | None = None) -> SyncResult:
        """Sync the working tree to remote_url.

        Raises whatever git error stopped the run, after reporting it.
        """
        result = self.last_result = SyncResult(phases=[SyncPhase.START])
        try:
            if not existing_repo:
                self._refuse_existing_repository()
            state = self.read_state(existing_repo)
            if scaffold:
                write_project_files(self.backend.workdir, scaffold)
            if existing_repo:
                self._sync_existing(state, remote_url, result)
            else:
                self._sync_new(state, remote_url, result)
        except Exception:
            result.phases.append(SyncPhase.FAILED)
            self.reporter.fail("Failed to push to remote")
            raise

        result.phases.append(SyncPhase.DONE)
        self.reporter.succeed("Code pushed successfully!")
        return result

    def _refuse_existing_repository(self) -> None:
        """Stop before touching anything when the directory is already under git."""
        if not self.backend.is_git_repository():
            return
        self.reporter.warn("Directory is already a git repository")
        raise ExistingRepositoryError(
            f"{self.backend.workdir} is already a git repository. "
            "Push it with --existing, or remove .git to start over."
        )

    def _sync_new(self, state: SyncState, remote_url: str, result: SyncResult) -> None:
        self._init_local(state, result)
        self._stage_and_commit(result, self.config.initial_message)

        result.phases.append(SyncPhase.ADD_REMOTE)
        self.reporter.update("Adding remote...")
        self.backend.add_remote(self.config.remote, remote_url)

        self._push(state, result)

    def _sync_existing(self, state: SyncState, remote_url: str, result: SyncResult) -> None:
        if not state.has_git_dir:
            self._init_local(state, result)

        result.phases.append(SyncPhase.REMOTE_SETUP)
        self.reporter.start("Configuring remote...")
        if state.has_origin:
            self.backend.remove_remote(self.config.remote)
        self.backend.add_remote(self.config.remote, remote_url)

        self._stage_and_commit(result)
        self._reconcile(state, result)
        self._push(state, result)

    def _init_local(self, state: SyncState, result: SyncResult) -> None:
        result.phases.append(SyncPhase.INIT_LOCAL)
        self.reporter.start("Initializing git repository...")
        self.backend.init()
        self.backend.checkout_new_branch(state.branch)

    def _stage_and_commit(self, result: SyncResult, message: str | None = None) -> None:
        """Stage everything and commit; the synthesizer writes the message if none is given."""
        result.phases.append(SyncPhase.STAGE_AND_COMMIT)
        self.reporter.start("Adding files...")
        self.backend.add_all()
        if message is None:
            message = self.synthesizer.generate()
        # The synthesizer may have stopped the shared spinner
        self.reporter.start("Creating commit...")
        self.backend.commit(message)
        result.commit_message = message

    def _reconcile(self, state: SyncState, result: SyncResult) -> None:
        result.phases.append(SyncPhase.RECONCILE)
        self.reporter.update("Pulling remote changes...")
        try:
            self.backend.pull(
                self.config.remote, state.branch,
                rebase=True, allow_unrelated_histories=True,
            )
        except GitError as e:
            if MISSING_REMOTE_REF in str(e):
                return
            warning = f"Pull failed, pushing anyway (history may diverge): {e}"
            result.warnings.append(warning)
            self.reporter.warn(warning)
            self.reporter.start("Pushing...")

    def _push(self, state: SyncState, result: SyncResult) -> None:
        result.phases.append(SyncPhase.PUSH)
        self.reporter.update("Pushing to remote...")
        self.backend.push(self.config.remote, state.branch, set_upstream=True)
