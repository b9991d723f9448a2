"""CLI Main Entry Point"""

import sys

from forjex.commit import CommitMessageSynthesizer
from forjex.config import Config, apply_env_overrides, load_config
from forjex.git import GitBackend, GitError
from forjex.hosting import GitHubClient, HostingError, HostingSession, RepoOptions, RepositoryExistsError
from forjex.output import NullReporter, Spinner, bold, colorize_commit_type, dim, print_error, print_success, print_warning
from forjex.sync import RepositorySync, ScaffoldOptions

from forjex.cli.args import parse_args
from forjex.cli.commands import display_config, run_install_completion

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NAME_CONFLICT = 2


def _display_message(message):
    """Display commit message between horizontal rules with colored type."""
    colored = colorize_commit_type(message)
    width = max(len(message), 40)
    print(f"\n{dim('─' * width)}")
    print(bold(colored))
    print(dim('─' * width))


def _scaffold_options(args, project_name):
    if not args.readme and not args.gitignore:
        return None
    return ScaffoldOptions(readme=args.readme, gitignore=args.gitignore, project_name=project_name)


def _create_repository(args, config) -> str:
    """Create the hosted repository and return its clone URL."""
    spinner = Spinner()
    spinner.start(f"Creating repository: {args.create}")
    try:
        client = GitHubClient(HostingSession.from_env(), api_url=config.github_api_url)
        clone_url = client.create_repository(
            RepoOptions(name=args.create, description=args.description, private=args.private)
        )
    except HostingError:
        spinner.stop()
        raise
    spinner.succeed(f"Repository created: {clone_url}")
    return clone_url


def _sync(args, config, backend, remote_url) -> int:
    """Run the repository sync and report the outcome."""
    reporter = Spinner()
    sync = RepositorySync(backend, reporter=reporter, config=config)
    project_name = args.create or backend.workdir.name
    try:
        result = sync.run(remote_url, existing_repo=args.existing,
                          scaffold=_scaffold_options(args, project_name))
    except (GitError, OSError) as e:
        print_error(str(e))
        return EXIT_FAILED

    if result.warnings:
        print_warning("Remote and local history may have diverged; check 'git log' before continuing.")
    print(dim(f"  Committed: {result.commit_message}"))
    return EXIT_OK


def _print_message(config, backend) -> int:
    """Generate and show a commit message for the pending changes."""
    is_pipe = not sys.stdout.isatty()
    reporter = NullReporter() if is_pipe else Spinner()
    synthesizer = CommitMessageSynthesizer.from_config(backend, config, reporter=reporter)
    message = synthesizer.generate()

    if is_pipe:
        print(message)
    else:
        _display_message(message)
    return EXIT_OK


def load_settings() -> Config:
    return apply_env_overrides(load_config())


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    config = load_settings()

    if args.install_completion:
        return run_install_completion()
    if args.display_config:
        return display_config(config)

    backend = GitBackend(timeout=config.git_timeout)

    if args.create:
        try:
            remote_url = _create_repository(args, config)
        except RepositoryExistsError as e:
            print_error(f"{e}. Choose another name or push with --push URL --existing.")
            return EXIT_NAME_CONFLICT
        except HostingError as e:
            print_error(str(e))
            return EXIT_FAILED
        return _sync(args, config, backend, remote_url)

    if args.push:
        return _sync(args, config, backend, args.push)

    return _print_message(config, backend)


if __name__ == "__main__":
    sys.exit(main())
