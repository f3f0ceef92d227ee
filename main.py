#!/usr/bin/env python3
"""
Main entry point for the content rendering service.

`serve` runs the RabbitMQ consumer with its Redis progress publisher;
`render` renders one document locally.
"""

import argparse
import sys
import traceback
import logging
from typing import List, Optional

from content_designer import HtmlGenerator
from messages import RenderConsumer

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="content-designer",
        description="Render authored content documents to templated HTML.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "serve",
        help="Consume render jobs from RabbitMQ (RABBITMQ_URL, REDIS_URL, SHARED_DIR).",
    )

    render = subparsers.add_parser(
        "render",
        help="Render one JSON document to an HTML file.",
    )
    render.add_argument(
        "input",
        type=str,
        help="Path to the render document (JSON).",
    )
    render.add_argument(
        "--out",
        "-o",
        type=str,
        default="output.html",
        help="Output file path. Default: output.html",
    )
    return parser.parse_args(argv)


def serve() -> int:
    """Run the consumer until interrupted"""
    consumer = RenderConsumer()

    try:
        consumer.run()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    return 0


def render(input_path: str, output_path: str) -> int:
    """Render one document, reporting failures on stderr"""
    try:
        result = HtmlGenerator().generate_from_json_data(input_path, output_path)
    except (ValueError, FileNotFoundError) as e:
        print(f"[content-designer] ERROR: {e}", file=sys.stderr)
        return 1

    print(f"[content-designer] {result.block_count} blocks rendered to {result.output_path}")
    print(f"[content-designer] Reading level: {result.stats.reading_level}, "
          f"about {result.stats.reading_time} min")
    if result.components:
        applied = ', '.join(f"{name} x{count}" for name, count in result.components.items())
        print(f"[content-designer] Components: {applied}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)

    try:
        if args.command == "serve":
            return serve()
        return render(args.input, args.out)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Fatal error: %s", e)
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
