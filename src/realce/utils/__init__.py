"""Utility modules for realce.

Contains:
- logger: get_logger for namespaced logging
"""

from realce.utils.logger import get_logger

__all__ = [
    "get_logger",
]
