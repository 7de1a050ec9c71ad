"""Package initializer for the survival body and physiology core."""

from __future__ import annotations

from .config import settings as settings  # Re-export for convenience.

__all__ = ["settings"]
