"""Immutable viewer configuration.

The playback values the conversion engine needs (drop rate, song length)
live here and are handed to :class:`aff_chart.engine.timing.PlaybackClock`
explicitly; nothing reads them from module globals.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ViewerConfig:
    """Immutable configuration for chart queries and export."""

    # Playback
    drop_rate: float = 100.0
    song_length: Optional[int] = None   # None: derive from the chart's last event

    # Export
    fix_offset: bool = False

    # Render range
    render_far: float = 100000.0
    render_delay: int = 120

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewerConfig:
        """Build a config from flat keys, ignoring unknown ones.

        Args:
            data: Flat mapping, e.g. from ``flatten_config_v2``

        Returns:
            ViewerConfig with coerced values

        Raises:
            ValueError: If a value cannot be coerced
        """
        kw: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            v = data[f.name]
            if f.name == "fix_offset":
                kw[f.name] = bool(v)
            elif f.name in ("song_length", "render_delay"):
                kw[f.name] = int(v)
            else:
                kw[f.name] = float(v)
        cfg = cls(**kw)
        if cfg.drop_rate <= 0:
            raise ValueError(f"drop_rate must be positive (got {cfg.drop_rate})")
        return cfg

    def merged(self, **overrides: Any) -> ViewerConfig:
        """Copy with the non-None overrides applied (CLI flags win over files)."""
        kw = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **kw) if kw else self
