#!/usr/bin/env python3
"""
icons.py - Centralized icon/emoji definitions for bitefetch output

Usage:
    from bitefetch.icons import icons
    print(f"{icons.SUCCESS} Download complete")

Or import individual icons:
    from bitefetch.icons import SUCCESS, BACKUP
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Centralized icon definitions.

    Categories:
    - Status: SUCCESS, ERROR, WARNING, INFO
    - Actions: BACKUP
    - Logging levels: DEBUG, CRITICAL
    """

    # =========================================================================
    # Status Icons
    # =========================================================================
    SUCCESS: str = "✅"
    ERROR: str = "❌"
    WARNING: str = "⚠️"
    INFO: str = "ℹ️"

    # =========================================================================
    # Action Icons
    # =========================================================================
    BACKUP: str = "💾"

    # =========================================================================
    # Logging-only Icons
    # =========================================================================
    DEBUG: str = "🔍"
    CRITICAL: str = "💥"


icons = Icons()

SUCCESS = icons.SUCCESS
ERROR = icons.ERROR
WARNING = icons.WARNING
INFO = icons.INFO
BACKUP = icons.BACKUP
