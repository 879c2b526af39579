"""Sample ledger package."""

from .book import Book

__all__ = ["Book"]
