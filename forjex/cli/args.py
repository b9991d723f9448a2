"""CLI Argument Parsing"""

import argparse
import argcomplete

from forjex import __version__
from forjex.sync.scaffold import GITIGNORE_TEMPLATES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='forjex',
        description='Write a commit message for pending changes and push them to a remote',
        epilog='Example: forjex --push https://github.com/me/app.git --existing'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Sync options
    parser.add_argument('--push', type=str, metavar='URL', help='Commit everything and push to this remote URL')
    parser.add_argument('--existing', action='store_true', help='Remote already has history: reconcile before pushing')
    parser.add_argument('--create', type=str, metavar='NAME', help='Create a GitHub repository, then push to it')
    parser.add_argument('--description', type=str, default='', metavar='TEXT', help='Description for --create')
    parser.add_argument('--private', action='store_true', help='Make the repository created by --create private')

    # Scaffolding
    parser.add_argument('--readme', action='store_true', help='Write a README.md if missing before committing')
    parser.add_argument('--gitignore', type=str, choices=sorted(GITIGNORE_TEMPLATES), help='Write a .gitignore template if missing')

    # Setup/config
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if args.push and args.create:
        parser.error('--push and --create cannot be used together')
    return args
