"""CLI tools for the docharvest pipeline.

- ``python -m docharvest.cli.ingest parse`` -- build the chunk file from
  the configured documentation sources.
- ``python -m docharvest.cli.ingest stats`` -- summarize a chunk file.
"""
