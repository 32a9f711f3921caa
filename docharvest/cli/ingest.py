# =============================================================================
# docharvest/cli/ingest.py -- CLI Ingest Command (chunk extraction)
# =============================================================================
#
# Standalone CLI for turning the raw documentation collections under the
# sources root into the durable chunk file consumed by the embedding stage.
#
# Supported subcommands:
#
#   parse -- discover configured sources, run their recognizers, write JSON
#   stats -- summarize an existing chunk file by source and by type
#
# Usage examples:
#   python -m docharvest.cli.ingest parse
#   python -m docharvest.cli.ingest parse --sources-dir ./sources \
#       --output ./data/chunks.json --source pyqt-reference
#   python -m docharvest.cli.ingest stats --chunks ./data/chunks.json
# =============================================================================

"""Standalone CLI for building the docharvest chunk file.

Usage::

    python -m docharvest.cli.ingest parse

    python -m docharvest.cli.ingest parse --source unreal-python --source pyqt-reference

    python -m docharvest.cli.ingest stats

Exit code is ``0`` on success and ``1`` when nothing could be discovered,
the configuration is invalid, or the chunk file cannot be read.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

from docharvest.config.loader import load_config, load_source_definitions
from docharvest.config.settings import Settings
from docharvest.models.chunk import DocSource
from docharvest.services.ingestion.chunk_store import ChunkStore
from docharvest.services.ingestion.discovery import discover_tasks
from docharvest.services.ingestion.ingestion_service import IngestionService
from docharvest.utils.errors import DocHarvestError, SourceDiscoveryError
from docharvest.utils.logging import configure_logging

# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _handle_parse(args: argparse.Namespace, app_settings: Settings) -> int:
    """Discover sources, parse them, and write the chunk file."""
    config = load_config(args.config or app_settings.config_path)
    definitions = load_source_definitions(config)
    if args.sources:
        wanted = {DocSource(tag) for tag in args.sources}
        definitions = [d for d in definitions if d.source in wanted]

    paths = config["paths"]
    sources_dir = args.sources_dir or paths["sources_dir"]
    print(f"Discovering documentation sources in {sources_dir} ...")
    tasks = discover_tasks(definitions, sources_dir)

    service = IngestionService(
        fail_on_duplicate_ids=config["pipeline"]["fail_on_duplicate_ids"]
    )
    try:
        report = service.run(tasks)
    except SourceDiscoveryError:
        print(
            f"No sources found under {sources_dir}. "
            "Fetch the documentation collections first.",
            file=sys.stderr,
        )
        return 1

    print("\nParse complete:")
    for source, count in sorted(report.counts_by_source.items()):
        print(f"  {source:<16} {count}")
    print(f"  {'total':<16} {report.total_chunks}")

    if report.duplicate_ids:
        print(f"  Repeated ids (kept):   {len(report.duplicate_ids)}")
    if report.failed_documents:
        print(f"  Failed documents:      {len(report.failed_documents)}")
        for doc in report.failed_documents:
            print(f"    {doc.path}: {doc.error}")

    store = ChunkStore(args.output or Path(paths["data_dir"]) / paths["chunks_filename"])
    path = store.save(report.chunks)
    print(f"\nWrote {report.total_chunks} chunks to {path}")
    return 0


def _handle_stats(args: argparse.Namespace, app_settings: Settings) -> int:
    """Print chunk counts from an existing chunk file."""
    store = ChunkStore(args.chunks or app_settings.chunks_path)
    chunks = store.load()

    by_source = Counter(c.source.value for c in chunks)
    by_type = Counter(c.type.value for c in chunks)

    print("Chunk Statistics")
    print("=" * 40)
    print(f"  File:          {store.path}")
    print(f"  Total chunks:  {len(chunks)}")
    if by_source:
        print("\n  By source:")
        for source, count in sorted(by_source.items()):
            print(f"    {source:<16} {count}")
        print("\n  By type:")
        for doc_type, count in sorted(by_type.items()):
            print(f"    {doc_type:<16} {count}")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ingestion CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m docharvest.cli.ingest",
        description="Extract retrievable documentation chunks.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Ingestion commands")

    # -- parse --
    parse_parser = subparsers.add_parser("parse", help="Parse all configured sources")
    parse_parser.add_argument(
        "--sources-dir", dest="sources_dir", help="Root of the raw documentation"
    )
    parse_parser.add_argument("--output", help="Chunk file to write")
    parse_parser.add_argument("--config", help="YAML file with source definitions")
    parse_parser.add_argument(
        "--source",
        action="append",
        dest="sources",
        choices=[s.value for s in DocSource],
        help="Only parse this source (repeatable)",
    )

    # -- stats --
    stats_parser = subparsers.add_parser("stats", help="Show chunk file statistics")
    stats_parser.add_argument("--chunks", help="Chunk file to read")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ingestion tool.

    Parses the subcommand, loads :class:`Settings` from the environment /
    ``.env`` file, configures logging, and dispatches to the handler.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = Settings()
    configure_logging(log_level=app_settings.log_level, app_env=app_settings.app_env)

    try:
        if args.command == "parse":
            exit_code = _handle_parse(args, app_settings)
        else:
            exit_code = _handle_stats(args, app_settings)
    except DocHarvestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
