"""Data source package for flashdeck.

Only InMemoryDataSource is exported as the public API.
"""

from .data_source import InMemoryDataSource

__all__ = ["InMemoryDataSource"]
