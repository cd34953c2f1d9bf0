"""Canonical ID factory for the journal.

All modules import from here instead of defining local _uuid() copies.
"""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Generate a new UUID v4 string.  Use for all trade IDs."""
    return str(uuid.uuid4())
