"""Sample shop package."""

from __future__ import annotations

import json

from ledger import Book

from .checkout import checkout

__all__ = ["Book", "checkout", "json"]
