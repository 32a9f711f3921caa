"""Durable intermediate form: one JSON array holding every chunk of a run.

The file is the hand-off point to the external embedding stage.  Optional
fields that do not apply are omitted rather than written as empty strings;
loading validates every entry back into a :class:`DocumentChunk`.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from docharvest.models.chunk import DocumentChunk
from docharvest.utils.errors import ChunkStoreError

logger = structlog.get_logger(logger_name=__name__)

_CHUNK_LIST = TypeAdapter(list[DocumentChunk])


class ChunkStore:
    """Reads and writes the chunk collection at a fixed path."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, chunks: list[DocumentChunk]) -> Path:
        """Write *chunks* (in order) and return the file path."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = [chunk.to_json_dict() for chunk in chunks]
        with open(self._path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
        logger.info("chunks_saved", path=str(self._path), chunks=len(chunks))
        return self._path

    def load(self) -> list[DocumentChunk]:
        """Read and validate the chunk collection.

        Raises
        ------
        ChunkStoreError
            If the file is missing, is not JSON, or holds an invalid chunk.
        """
        try:
            with open(self._path, encoding="utf-8") as fh:
                raw = json.load(fh)
        except FileNotFoundError as exc:
            raise ChunkStoreError(f"Chunk file not found: {self._path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise ChunkStoreError(f"Chunk file unreadable: {self._path}: {exc}") from exc

        try:
            chunks = _CHUNK_LIST.validate_python(raw)
        except ValidationError as exc:
            raise ChunkStoreError(
                f"Chunk file {self._path} failed validation ({exc.error_count()} errors)"
            ) from exc

        logger.debug("chunks_loaded", path=str(self._path), chunks=len(chunks))
        return chunks
