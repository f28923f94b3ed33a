"""Configuration objects."""

from __future__ import annotations

from .schema import ViewerConfig

__all__ = ["ViewerConfig"]
