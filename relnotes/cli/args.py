"""CLI Argument Parsing"""

import argparse
import argcomplete

from relnotes import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='relnotes',
        description='Changelog generation and commit message spellchecking',
        epilog='Example: relnotes changelog -o CHANGELOG.md'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', action='store_true', help='Show debug output on stderr')

    # Setup/config
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    changelog = subparsers.add_parser('changelog', help='Render CHANGELOG.md from git history')
    changelog.add_argument('-o', '--output', type=str, metavar='FILE', help="Write to FILE ('-' for stdout)")
    changelog.add_argument('-r', '--release', type=str, metavar='VERSION', help='Header for commits newer than the latest tag')
    changelog.add_argument('--repo-url', type=str, metavar='URL', help='Base URL for commit and issue links')
    changelog.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS, help='Show debug output on stderr')

    spellcheck = subparsers.add_parser('spellcheck', help='Warn about typos in the last commit message')
    spellcheck.add_argument('message_file', nargs='?', metavar='MESSAGE_FILE', help='Commit message file (default: .git/COMMIT_EDITMSG)')
    spellcheck.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS, help='Show debug output on stderr')

    argcomplete.autocomplete(parser)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
