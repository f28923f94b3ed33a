"""Chart format codecs.

- aff: line-based chart notation (AudioOffset header, timing groups)
"""

from __future__ import annotations

from .aff_impl import export_aff, export_event, load_aff_text, parse_event_line

__all__ = ["export_aff", "export_event", "load_aff_text", "parse_event_line"]
