"""
Command line entry point for the word count engine.
"""

import sys
import logging
import argparse

from wordcount.common.config import EngineConfig, setup_logging
from wordcount.common.errors import WordCountError
from wordcount.coordinator.engine import Coordinator
from wordcount.client.records import load_records
from wordcount.client.report import format_summary, write_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wordcount',
        description='Count words with a threaded in-memory map/reduce'
    )
    parser.add_argument('--input', '-i', type=str, default=None,
                        help="Input file, one record per line ('-' for stdin, default: sample corpus)")
    parser.add_argument('--workers', '-w', type=int, default=None,
                        help='Number of map workers (default: detected CPU count)')
    parser.add_argument('--no-coerce', action='store_true',
                        help='Fail instead of falling back to 1 worker when parallelism resolves to 0')
    parser.add_argument('--shards', type=int, default=None,
                        help='Number of lock shards in the intermediate aggregate (default: 1)')
    parser.add_argument('--keep-empty-tokens', action='store_true', default=None,
                        help='Count punctuation-only tokens as the empty word')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Write the report to this file instead of stdout')
    parser.add_argument('--metrics', type=str, default=None,
                        help='Write run metrics as JSON to this file')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level for messages on stderr (default: WARNING)')
    return parser


def run(args) -> int:
    """Run one job from parsed arguments and return the exit status."""
    try:
        config = EngineConfig.from_env(
            parallelism=args.workers,
            num_shards=args.shards,
            keep_empty_tokens=args.keep_empty_tokens,
        )
        config.coerce_parallelism = not args.no_coerce

        records = load_records(args.input)
        result = Coordinator(config).run(records)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1
    except UnicodeDecodeError as e:
        logger.error(f"Input is not valid UTF-8: {e}")
        return 1
    except WordCountError as e:
        logger.error(f"Word count failed: {e}")
        return 1

    try:
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                write_report(result, f)
        else:
            write_report(result)

        if args.metrics:
            result.metrics.save_to_file(args.metrics)
    except OSError as e:
        logger.error(f"Cannot write output: {e}")
        return 1

    logger.info(format_summary(result))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
