"""CLI Argument Parsing"""

import argparse
import argcomplete

from smartcommit import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='smart-commit',
        description='Draft a commit message from local git changes, optionally refined by Gemini',
        epilog='Example: smart-commit --refine (copies message to clipboard)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-r', '--refine', action='store_true', help='Ask Gemini for a polished subject line')
    parser.add_argument('--hint', type=str, metavar='TEXT', help='Add context for refinement: --hint "fixing the login bug"')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Gemini model id')
    parser.add_argument('--include-diff', action='store_true', help='Append the unified diff to the message body')

    # Output options
    parser.add_argument('--no-copy', action='store_true', help='Print message only, do not copy to clipboard')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')

    # Branch-scoped log
    log_group = parser.add_argument_group('branch log')
    log_group.add_argument('--log', action='store_true', help='Show first-parent history of the current branch')
    log_group.add_argument('--branch', type=str, metavar='NAME', help='Branch for --log (default: current)')
    log_group.add_argument('--author', type=str, metavar='TEXT', help='Filter --log by author')
    log_group.add_argument('--since', type=str, metavar='YYYY-MM-DD', help='Filter --log by start date')
    log_group.add_argument('--until', type=str, metavar='YYYY-MM-DD', help='Filter --log by end date')
    log_group.add_argument('--path', type=str, metavar='PATH', help='Filter --log by file path')

    # Setup/config
    parser.add_argument('--set-key', action='store_true', help='Store the Gemini API key')
    parser.add_argument('--clear-key', action='store_true', help='Remove the stored Gemini API key')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
