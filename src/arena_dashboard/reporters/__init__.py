"""Reporters module - render dashboard data.

This module provides:
- JSONReporter: JSON output for stats, leaderboards and run pages
- TableReporter: terminal tables (Rich)
"""

from __future__ import annotations

from .json_reporter import JSONReporter
from .table_reporter import TableReporter

__all__ = [
    "JSONReporter",
    "TableReporter",
]
