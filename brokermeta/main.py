#!/usr/bin/env python3
"""
Command line entry point.

Usage:
    # Everything: cluster, brokers and all topics including internal ones
    brokermeta metadata --brokers localhost:9092

    # Per-partition detail for two topics
    brokermeta metadata -d orders payments

    # Only the broker roster
    brokermeta status -b
"""

import argparse
import sys
from typing import List, Optional

from brokermeta import __version__
from brokermeta.client import MetadataClient
from brokermeta.errors import ConfigError, MetadataRequestError
from brokermeta.render.sections import SectionPrinter, select_sections
from brokermeta.utils.config import get_config, split_brokers
from brokermeta.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

METADATA_DESCRIPTION = """\
Request broker metadata.

The Kafka protocol's metadata contains information about brokers, topics, and
the cluster as a whole.

There are three sections: the cluster, the list of brokers, and the topics.
If no section is specified, all sections are printed.

If the topic section is requested, all topics are requested unless some are
given as arguments. Per-partition information is printed with -d, and
internal topics are printed with -i.

In the broker section, the controller node is suffixed with *.
"""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="brokermeta",
        description="Print Kafka cluster metadata",
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )

    parser.add_argument(
        '--brokers',
        type=str,
        help='Comma separated list of broker addresses (default: from config)'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to a YAML configuration file'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config)'
    )

    parser.add_argument(
        '--log-format',
        type=str,
        choices=['console', 'json'],
        help='Log output format (default: from config)'
    )

    commands = parser.add_subparsers(dest='command', required=True)
    metadata = commands.add_parser(
        'metadata',
        aliases=['status', 'info'],
        help='Request broker metadata',
        description=METADATA_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    metadata.add_argument(
        '-c', '--print-cluster',
        action='store_true',
        help='print cluster section'
    )

    metadata.add_argument(
        '-b', '--print-brokers',
        action='store_true',
        help='print brokers section'
    )

    metadata.add_argument(
        '-t', '--print-topics',
        action='store_true',
        help='print topics section (implied if any topics are specified)'
    )

    metadata.add_argument(
        '-i', '--print-internal-topics',
        action='store_true',
        help='print internal topics (implies -t)'
    )

    metadata.add_argument(
        '-d', '--print-detailed-topics',
        action='store_true',
        help='print per-partition information for topics (implies -t)'
    )

    metadata.add_argument(
        'topics',
        nargs='*',
        metavar='TOPIC',
        help='topics to print (default: all)'
    )

    return parser.parse_args(argv)


def _die(message: str) -> None:
    sys.stderr.write(message + "\n")
    sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = get_config(args.config)
    except ConfigError as e:
        _die(f"unable to load config: {e}")

    if args.brokers:
        config.set("kafka.brokers", split_brokers(args.brokers))
    if args.log_level:
        config.set("logging.level", args.log_level)
    if args.log_format:
        config.set("logging.format", args.log_format)

    configure_logging(
        log_level=config.get("logging.level"),
        log_format=config.get("logging.format"),
    )

    selection = select_sections(
        print_cluster=args.print_cluster,
        print_brokers=args.print_brokers,
        print_topics=args.print_topics,
        print_internal=args.print_internal_topics,
        print_detailed=args.print_detailed_topics,
        topics=args.topics,
    )

    logger.debug(
        "Resolved sections",
        cluster=selection.cluster,
        brokers=selection.brokers,
        topics=selection.topics,
        internal=selection.internal,
        detailed=selection.detailed,
    )

    try:
        client = MetadataClient.from_config(config)
        response = client.fetch(selection.requested_topics())
    except ConfigError as e:
        _die(f"unable to load config: {e}")
    except MetadataRequestError as e:
        logger.debug("Metadata request failed", error=str(e), exc_info=True)
        _die(f"unable to request metadata: {e}")

    SectionPrinter(selection).print(response)


if __name__ == '__main__':
    main()
