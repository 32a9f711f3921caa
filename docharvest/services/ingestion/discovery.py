"""Turns configured :class:`SourceDefinition` entries into concrete tasks.

A definition whose ``path`` is a file yields one task; a directory yields
one task per file matching any of its glob ``patterns``, sorted by name so
runs are reproducible.  Missing paths are logged and skipped: discovering
nothing at all is the caller's decision to make fatal.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from docharvest.models.ingestion import IngestionTask, SourceDefinition

logger = structlog.get_logger(logger_name=__name__)


def discover_tasks(
    definitions: list[SourceDefinition],
    sources_dir: str | Path,
) -> list[IngestionTask]:
    """Expand *definitions* (relative to *sources_dir*) into ingestion tasks."""
    root = Path(sources_dir)
    tasks: list[IngestionTask] = []

    for definition in definitions:
        if not definition.enabled:
            logger.debug("source_disabled", source=definition.source.value)
            continue

        target = root / definition.path
        if target.is_file():
            files = [target]
        elif target.is_dir():
            matched = {fp for pattern in definition.patterns for fp in target.glob(pattern)}
            files = sorted(fp for fp in matched if fp.is_file())
        else:
            logger.info(
                "source_not_found",
                source=definition.source.value,
                path=str(target),
            )
            continue

        for fp in files:
            tasks.append(
                IngestionTask(
                    source=definition.source,
                    path=str(fp),
                    format=definition.format,
                    version=definition.version,
                )
            )

    logger.info("sources_discovered", tasks=len(tasks))
    return tasks
