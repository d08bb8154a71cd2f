"""Adapters around the catalog core: persistence and upload parsing."""
