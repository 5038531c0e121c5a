"""Command line entry point: match the records file and write the output file."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from settings_matcher.config.loader import (
    CONFIG_FILE,
    OUTPUT_FILE,
    RECORDS_FILE,
    init_config,
    init_records,
    write_output
)
from settings_matcher.core.errors import ConfigError, SettingsMatcherError
from settings_matcher.core.matcher import SettingsMatcher
from settings_matcher.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='settings-matcher',
        description="Assign settings from settled products to unsettled "
                    "products with similar names."
    )
    parser.add_argument('--config', type=Path, default=CONFIG_FILE,
                        help="Settings file, created with defaults if missing")
    parser.add_argument('--records', type=Path, default=RECORDS_FILE,
                        help="Products file, created empty if missing")
    parser.add_argument('--output', type=Path, default=OUTPUT_FILE,
                        help="Output file, overwritten on success")
    parser.add_argument('--log-dir', type=Path, default=Path('logs'),
                        help="Directory for rotated evaluation logs")
    parser.add_argument('--workers', type=int, default=None,
                        help="Override num_threads from the settings file")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Echo log records to stderr")
    return parser


def run(args: argparse.Namespace) -> Path:
    """Execute one matching run and return the output path."""
    config = init_config(args.config)
    if args.workers is not None:
        config = config.with_worker_count(args.workers)

    records = init_records(args.records)
    if not records:
        raise ConfigError("Products not found.")

    matcher = SettingsMatcher(config)
    results = matcher.match_records(records)

    return write_output(results, args.output)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_dir, verbose=args.verbose)

    try:
        output = run(args)
    except SettingsMatcherError as e:
        logger.error(f"Run aborted: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.info(f"Run finished: {output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
