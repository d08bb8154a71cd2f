"""Inventory catalog core: validation, access filtering, reconciliation, mutation."""
