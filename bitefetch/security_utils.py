#!/usr/bin/env python3
"""
security_utils.py (bitefetch)

Helpers for keeping the Pybites API key out of logs and terminal output.
"""

from __future__ import annotations

from typing import Optional


def mask_sensitive(value: Optional[str], visible_chars: int = 4) -> str:
    """
    Mask a sensitive value for safe logging.

    Args:
        value: The sensitive string to mask
        visible_chars: Number of characters to show at start and end

    Returns:
        Masked string like "abc1****xyz9"
    """
    if not value:
        return "****"

    if len(value) <= visible_chars * 2:
        return "****"

    return f"{value[:visible_chars]}****{value[-visible_chars:]}"
