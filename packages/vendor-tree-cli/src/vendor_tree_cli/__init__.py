# SPDX-License-Identifier: MIT
"""Command line interface for vendor-tree."""

__version__ = "0.1.0"
