"""
Tests for CLI output and the forjex entry point.

Shows sample output for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import re
from pathlib import Path

import pytest

from forjex.cli import main as cli_main
from forjex.cli.args import parse_args
from forjex.cli.commands import display_config
from forjex.cli.main import EXIT_FAILED, EXIT_NAME_CONFLICT, EXIT_OK, _display_message, main
from forjex.commit.classifier import DEFAULT_TYPE, TYPE_RULES
from forjex.config import Config
from forjex.git import GitError
from forjex.hosting import HostingError, RepositoryExistsError
from forjex.output import COMMIT_TYPE_COLORS, NullReporter, Spinner, colorize_commit_type, print_error, print_info, print_success, print_warning
from forjex.sync import ScaffoldOptions, SyncPhase, SyncResult

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

UTILS_DIFF = (
    "diff --git a/utils.ts b/utils.ts\n"
    "new file mode 100644\n"
    "--- /dev/null\n"
    "+++ b/utils.ts\n"
    "@@ -0,0 +1,3 @@\n"
    "+export function foo() {\n"
    "+  return 1;\n"
    "+}\n"
)


# ---------------------------------------------------------------------------
# Fixtures and fakes
# ---------------------------------------------------------------------------

@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


class FakeBackend:
    """Stands in for GitBackend inside main()."""

    def __init__(self, staged_diff="", name_status="", workdir=Path("/work/my-app")):
        self.staged_diff = staged_diff
        self.name_status = name_status
        self.workdir = workdir

    def read_raw_diff(self, staged=True):
        return self.staged_diff if staged else ""

    def read_name_status(self, staged=True):
        return self.name_status if staged else ""


class FakeSync:
    """Replaces RepositorySync; records what main() asked for."""
    calls = []
    error = None
    result = None

    def __init__(self, backend, reporter=None, config=None):
        self.backend = backend

    def run(self, remote_url, existing_repo, scaffold=None):
        FakeSync.calls.append((remote_url, existing_repo, scaffold))
        if FakeSync.error:
            raise FakeSync.error
        return FakeSync.result or SyncResult(
            phases=[SyncPhase.START, SyncPhase.DONE], commit_message="feat: add app",
        )


class FakeClient:
    """Replaces GitHubClient."""
    error = None
    created = []

    def __init__(self, session, api_url=None, timeout=None):
        pass

    def create_repository(self, options):
        if FakeClient.error:
            raise FakeClient.error
        FakeClient.created.append(options)
        return f"https://github.com/me/{options.name}.git"


@pytest.fixture
def cli(monkeypatch):
    """Patch main()'s collaborators and return the fake backend."""
    backend = FakeBackend()
    FakeSync.calls, FakeSync.error, FakeSync.result = [], None, None
    FakeClient.created, FakeClient.error = [], None

    monkeypatch.setattr(cli_main, 'load_settings', lambda: Config())
    monkeypatch.setattr(cli_main, 'GitBackend', lambda **kwargs: backend)
    monkeypatch.setattr(cli_main, 'RepositorySync', FakeSync)
    monkeypatch.setattr(cli_main, 'GitHubClient', FakeClient)
    return backend


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

class TestOutputHelpers:

    def test_success_goes_to_stdout(self, capsys):
        print_success("Code pushed successfully!")
        captured = capsys.readouterr()
        assert "Code pushed successfully!" in captured.out
        assert captured.err == ""

    def test_error_and_warning_go_to_stderr(self, capsys):
        print_error("push rejected")
        print_warning("history may diverge")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "push rejected" in captured.err
        assert "history may diverge" in captured.err

    def test_info_prefixes_arrow(self, capsys, strip_ansi):
        print_info("Pushing")
        out = strip_ansi(capsys.readouterr().out)
        assert out.rstrip().endswith("Pushing")

    @pytest.mark.parametrize("message", [
        "feat(utils): add foo function",
        "fix: remove retry",
        "Update code",
    ])
    def test_colorize_keeps_text(self, message, strip_ansi):
        assert strip_ansi(colorize_commit_type(message)) == message

    def test_every_classifier_type_has_a_color(self):
        emitted = {commit_type for commit_type, _ in TYPE_RULES} | {DEFAULT_TYPE}
        assert emitted <= set(COMMIT_TYPE_COLORS)


class TestReporters:

    def test_null_reporter_prints_nothing(self, capsys):
        reporter = NullReporter()
        reporter.start("a")
        reporter.update("b")
        reporter.warn("c")
        reporter.fail("d")
        reporter.succeed("e")
        reporter.stop()
        captured = capsys.readouterr()
        assert captured.out == "" and captured.err == ""

    def test_spinner_without_tty_prints_final_states(self, capsys):
        spinner = Spinner()
        spinner.start("Adding files...")
        spinner.update("Pushing to remote...")
        spinner.warn("Pull failed")
        spinner.start("Pushing...")
        spinner.succeed("Code pushed successfully!")
        captured = capsys.readouterr()

        assert "Code pushed successfully!" in captured.out
        assert "Pull failed" in captured.err
        # no animation frames when not attached to a terminal
        assert "Adding files..." not in captured.out

    def test_spinner_fail_goes_to_stderr(self, capsys):
        spinner = Spinner("Pushing...")
        spinner.start()
        spinner.fail("Failed to push to remote")
        assert "Failed to push to remote" in capsys.readouterr().err

    def test_spinner_context_manager(self, capsys):
        with Spinner("Working...") as spinner:
            spinner.update("Still working...")
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# Commit message display
# ---------------------------------------------------------------------------

class TestDisplayMessage:
    """Output from _display_message()."""

    def test_message_shown(self, capsys, strip_ansi):
        _display_message("feat(utils): add foo function to utils")
        out = strip_ansi(capsys.readouterr().out)
        assert "feat(utils): add foo function to utils" in out

    def test_has_horizontal_rules(self, capsys, strip_ansi):
        _display_message("chore: update config")
        out = strip_ansi(capsys.readouterr().out)
        lines = [l for l in out.split("\n") if l.strip()]

        assert all(c == "─" for c in lines[0].strip())
        assert all(c == "─" for c in lines[-1].strip())

    def test_rule_width_follows_long_message(self, capsys, strip_ansi):
        message = "refactor(api): remove " + "x" * 60
        _display_message(message)
        lines = [l for l in strip_ansi(capsys.readouterr().out).split("\n") if l.strip()]
        assert len(lines[0]) == len(message)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.push is None
        assert args.create is None
        assert args.existing is False
        assert args.gitignore is None

    def test_push_existing(self):
        args = parse_args(["--push", "https://example.test/r.git", "--existing"])
        assert args.push == "https://example.test/r.git"
        assert args.existing is True

    def test_push_and_create_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--push", "u", "--create", "name"])

    def test_unknown_gitignore_template_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--gitignore", "Cobol"])


class TestDisplayConfig:

    def test_shows_defaults(self, capsys, monkeypatch, strip_ansi):
        monkeypatch.setattr('forjex.cli.commands.get_config_path', lambda: None)
        monkeypatch.delenv('FORJEX_BRANCH', raising=False)
        monkeypatch.delenv('FORJEX_GIT_TIMEOUT', raising=False)

        assert display_config(Config()) == 0
        out = strip_ansi(capsys.readouterr().out)
        assert "defaults (no .forjexrc found)" in out
        assert "branch:             main" in out
        assert "git_timeout:        none" in out
        assert "Environment overrides" not in out

    def test_shows_env_overrides(self, capsys, monkeypatch, strip_ansi):
        monkeypatch.setattr('forjex.cli.commands.get_config_path', lambda: None)
        monkeypatch.setenv('FORJEX_BRANCH', 'trunk')
        monkeypatch.delenv('FORJEX_GIT_TIMEOUT', raising=False)

        display_config(Config(branch='trunk'))
        out = strip_ansi(capsys.readouterr().out)
        assert "FORJEX_BRANCH=trunk" in out


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMainMessage:
    """forjex with no sync flags prints a message for pending changes."""

    def test_piped_output_is_plain_message(self, cli, capsys):
        cli.staged_diff = UTILS_DIFF
        cli.name_status = "A\tutils.ts\n"

        assert main([]) == EXIT_OK
        assert capsys.readouterr().out == "feat: add foo function to utils\n"

    def test_no_changes_prints_fallback(self, cli, capsys):
        assert main([]) == EXIT_OK
        assert capsys.readouterr().out == "Update code\n"


class TestMainPush:

    def test_push_success(self, cli, capsys, strip_ansi):
        assert main(["--push", "https://example.test/r.git", "--existing"]) == EXIT_OK
        assert FakeSync.calls == [("https://example.test/r.git", True, None)]
        assert "Committed: feat: add app" in strip_ansi(capsys.readouterr().out)

    def test_push_new_repository(self, cli):
        main(["--push", "https://example.test/r.git"])
        assert FakeSync.calls[0][1] is False

    def test_git_error_exits_failed(self, cli, capsys):
        FakeSync.error = GitError("Git command failed: git push --set-upstream origin main")
        assert main(["--push", "https://example.test/r.git"]) == EXIT_FAILED
        assert "git push" in capsys.readouterr().err

    def test_scaffold_write_error_exits_failed(self, cli, capsys):
        FakeSync.error = PermissionError("[Errno 13] Permission denied: 'README.md'")
        assert main(["--push", "u", "--readme"]) == EXIT_FAILED
        assert "Permission denied" in capsys.readouterr().err

    def test_pull_warning_reported(self, cli, capsys):
        FakeSync.result = SyncResult(
            phases=[SyncPhase.START, SyncPhase.DONE],
            commit_message="fix: remove retry",
            warnings=["Pull failed, pushing anyway"],
        )
        assert main(["--push", "u", "--existing"]) == EXIT_OK
        assert "diverged" in capsys.readouterr().err

    def test_scaffold_uses_directory_name(self, cli):
        main(["--push", "u", "--readme", "--gitignore", "Python"])
        scaffold = FakeSync.calls[0][2]
        assert scaffold == ScaffoldOptions(readme=True, gitignore="Python", project_name="my-app")


class TestMainCreate:

    def test_create_then_push(self, cli, capsys):
        assert main(["--create", "demo", "--private", "--description", "A demo"]) == EXIT_OK

        options = FakeClient.created[0]
        assert options.name == "demo"
        assert options.private is True
        assert options.description == "A demo"
        assert FakeSync.calls[0][0] == "https://github.com/me/demo.git"
        assert "Repository created" in capsys.readouterr().out

    def test_create_scaffold_uses_repository_name(self, cli):
        main(["--create", "demo", "--readme"])
        assert FakeSync.calls[0][2].project_name == "demo"

    def test_name_conflict_exits_distinctly(self, cli, capsys):
        FakeClient.error = RepositoryExistsError("Repository name already exists")

        assert main(["--create", "demo"]) == EXIT_NAME_CONFLICT
        err = capsys.readouterr().err
        assert "already exists" in err
        assert "--existing" in err
        assert FakeSync.calls == []

    def test_hosting_error_exits_failed(self, cli, capsys):
        FakeClient.error = HostingError("GitHub authentication failed")

        assert main(["--create", "demo"]) == EXIT_FAILED
        assert "authentication failed" in capsys.readouterr().err
        assert FakeSync.calls == []
