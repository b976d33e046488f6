"""Main CLI entry point for envscope."""

import argparse
import sys
from typing import Optional

from envscope.types import Scope
from .commands import get_variable


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the envscope CLI."""
    parser = argparse.ArgumentParser(
        prog='envscope',
        description='Read environment variables from the process, user or machine scope'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    get_parser = subparsers.add_parser('get', help='Get one variable or list a scope')
    get_parser.add_argument(
        'name',
        nargs='?',
        default=None,
        help='Variable name (omit to list every variable in the scope)'
    )
    get_parser.add_argument(
        '--scope',
        choices=[scope.value for scope in Scope],
        default=Scope.PROCESS.value,
        help='Scope to read from'
    )
    get_parser.add_argument(
        '--delimiter',
        type=str,
        metavar='CHAR',
        help='Split the value on this character'
    )
    get_parser.add_argument(
        '--raw',
        action='store_true',
        help='Print the unmodified value (requires NAME)'
    )
    get_parser.add_argument(
        '--format',
        choices=['yaml', 'json'],
        default='yaml',
        help='Output format for structured records'
    )
    get_parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    get_parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    get_parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'get':
        return get_variable(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
