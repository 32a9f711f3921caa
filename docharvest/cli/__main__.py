"""Allow ``python -m docharvest.cli`` execution."""

from docharvest.cli.ingest import main

main()
