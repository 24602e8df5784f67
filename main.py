#!/usr/bin/env python3
"""
Pith - Graph Build Entry Point

Loads extracted fact records, builds the node graph with computed metrics and
upserts every node into the JSON node store.
"""

import asyncio
import argparse
import sys

from pith.builder import build_graph
from pith.config import load_settings
from pith.errors import PithError, format_error, group_errors_by_severity
from pith.loader import load_fact_files
from pith.store import JsonNodeStore, store_nodes
from pith.utils.logger import app_logger, setup_logging


def build(args) -> int:
    """Build the node graph from fact files and store it."""
    settings = load_settings(args.root)
    if args.data_dir:
        settings.data_dir = args.data_dir
    setup_logging(args.log_level or settings.log_level, settings.log_file)

    app_logger.info("Building node graph...")
    facts, errors = asyncio.run(load_fact_files(args.facts, settings.max_concurrency))

    for error in errors:
        app_logger.warning(format_error(error))
    if group_errors_by_severity(errors)["fatal"]:
        return 1
    if not facts:
        app_logger.error("No extracted data found. Run extraction first.")
        return 1

    result = build_graph(facts, settings)

    # One store handle per process, passed to everything that persists
    store = JsonNodeStore(str(settings.store_path))
    store_nodes(store, result.all_nodes)

    stats = result.stats()
    app_logger.info(
        f"Build complete: {len(result.file_nodes)} file nodes, "
        f"{len(result.function_nodes)} function nodes, {len(result.module_nodes)} module nodes"
    )
    app_logger.info(f"Edges: {stats['edges']}")
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Pith - codebase knowledge graph builder")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Build node graph from extracted facts")
    build_parser.add_argument("facts", nargs="+", help="Fact JSON files written by the extractor")
    build_parser.add_argument("--root", default=None, help="Directory containing pith.config.json")
    build_parser.add_argument("--data-dir", default=None, help="Directory for the node store")
    build_parser.add_argument("--log-level", default=None, help="Log level")

    args = parser.parse_args()

    try:
        sys.exit(build(args))
    except PithError as e:
        app_logger.error(format_error(e))
        sys.exit(1)
    except KeyboardInterrupt:
        app_logger.info("Shutting down...")


if __name__ == "__main__":
    main()
