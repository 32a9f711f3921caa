"""Service layer for docharvest."""
