"""Get command implementation."""

import json
import logging
import sys
from argparse import Namespace
from typing import List, TextIO

import yaml

from envscope.config import ResolverConfig
from envscope.exceptions import NotFoundOrEmpty, ParameterBindingError, StoreFormatError
from envscope.resolver import VariableResolver
from envscope.types import OutputRecord, RawRecord, ResolveRequest, Scope


logger = logging.getLogger(__name__)


def configure_logging(args: Namespace) -> None:
    """Set up root logging from --log-level, --debug and --quiet."""
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_request(args: Namespace) -> ResolveRequest:
    """Translate parsed arguments into a resolve request."""
    return ResolveRequest(
        name=args.name or None,
        scope=Scope(args.scope),
        delimiter=args.delimiter,
        raw=args.raw,
    )


def write_records(records: List[OutputRecord], output_format: str = 'yaml', stream: TextIO = None) -> None:
    """
    Serialize records to a stream.

    Raw records are written one value per line. Structured records are
    written as a single YAML sequence or JSON array.
    """
    if stream is None:
        stream = sys.stdout

    if records and all(isinstance(record, RawRecord) for record in records):
        for record in records:
            stream.write(f"{record.value}\n")
        return

    data = [record.to_dict() for record in records]
    if output_format == 'json':
        stream.write(json.dumps(data, indent=2) + "\n")
    else:
        yaml.safe_dump(data, stream, sort_keys=False, default_flow_style=False, allow_unicode=True)


def get_variable(args: Namespace) -> int:
    """
    Resolve a variable (or list a scope) and print the result.

    Exit codes: 0 on success, 1 when the variable is missing or empty or on
    unexpected errors, 2 on parameter or store format errors.
    """
    configure_logging(args)

    try:
        config = ResolverConfig.from_environ()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    try:
        resolver = VariableResolver(config=config)
        records = resolver.resolve(build_request(args))
        write_records(records, output_format=args.format)
        return 0

    except ParameterBindingError as e:
        for error in e.errors:
            logger.error(f"Parameter error: {error}")
        return e.exit_code
    except NotFoundOrEmpty as e:
        logger.error(str(e))
        return e.exit_code
    except StoreFormatError as e:
        logger.error(f"Store format error: {e}")
        return e.exit_code
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
