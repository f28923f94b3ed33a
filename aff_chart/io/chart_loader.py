from __future__ import annotations

from .chart_loader_impl import download_chart, is_url, load_chart, open_chart

__all__ = ["download_chart", "is_url", "load_chart", "open_chart"]
