from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import List, Optional

import requests

from .config.schema import ViewerConfig
from .config_v2 import dump_config_v2, flatten_config_v2, load_config_v2
from .engine.timing import PlaybackClock
from .engine.beatlines import beatline_timings
from .engine.visibility import render_windows, should_render
from .formats.aff_impl import export_aff
from .io.chart_loader import open_chart
from .math.curves import arc_point, camera_progress
from .logging_setup import setup_logging
from .types import Chart, EventKind
from .ui.scoring import score_at


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="aff_chart")
    g_in = ap.add_argument_group("Input")
    g_in.add_argument("--input", required=True, help="chart.aff path or http(s) URL")

    g_cfg = ap.add_argument_group("Config")
    g_cfg.add_argument("--config", type=str, default=None, help="Config v2 (JSONC) path")
    g_cfg.add_argument("--save_config", type=str, default=None, help="Write the effective config v2 (JSONC) to this path")

    g_out = ap.add_argument_group("Export")
    g_out.add_argument("--export", type=str, default=None, help="Write the chart back to this path")
    g_out.add_argument("--fix_offset", action="store_true", default=None, help="Zero AudioOffset, shift times")

    g_q = ap.add_argument_group("Query")
    g_q.add_argument("--time", type=int, default=None, help="Playback clock (ms) for position queries")
    g_q.add_argument("--pos", type=float, default=None, help="Relative position to convert back to time")
    g_q.add_argument("--depth", type=int, default=0, help="Which crossing of --pos to report")
    g_q.add_argument("--drop_rate", type=float, default=None)
    g_q.add_argument("--song_length", type=int, default=None)
    g_q.add_argument("--score_at", type=int, default=None, help="Report combo/score at this clock time (ms)")

    g_cui = ap.add_argument_group("CUI")
    g_cui.add_argument("--quiet", action="store_true", help="Less console output")
    g_cui.add_argument("--basic_debug", action="store_true", help="Debug logging")
    return ap


def _summary(chart: Chart, logger: logging.Logger) -> None:
    logger.info("AudioOffset: %d", chart.audio_offset)
    for g in chart.timing_groups:
        label = "primary" if g.is_primary else f"group {g.index}"
        usable = g.track is not None and len(g.track) and not g.track.is_static
        base = f"{g.track.base_bpm:g}" if usable else "-"
        logger.info("%s: %d events, %d timings, base bpm %s", label, len(g.events), len(g.timing_events), base)
    logger.info(
        "taps=%d holds=%d arcs=%d cameras=%d",
        len(chart.taps()), len(chart.holds()), len(chart.arcs()), len(chart.cameras()),
    )


def _query(chart: Chart, cfg: ViewerConfig, args: argparse.Namespace, logger: logging.Logger) -> None:
    song_length = cfg.song_length if cfg.song_length is not None else chart.last_event_time()
    clock = PlaybackClock(
        song_length=song_length,
        timing=int(args.time),
        drop_rate=cfg.drop_rate,
        offset=chart.audio_offset,
    )
    chart_t = clock.timing - clock.offset
    for g in chart.timing_groups:
        if g.track is None or not len(g.track):
            continue
        if g.track.is_static:
            logger.info("group %d: static (opens with bpm 0), no scrolling", g.index)
            continue
        windows = render_windows(g.track, clock, cfg.render_far)
        visible = sum(
            1 for e in g.events
            if e.kind is not EventKind.TIMING and should_render(windows, e.time + clock.offset, cfg.render_delay)
        )
        logger.info(
            "group %d @%d: bpm=%g window=%s visible=%d",
            g.index, clock.timing, g.track.bpm_by_timing(chart_t), windows, visible,
        )
        logger.debug("group %d: %d beat lines", g.index, len(beatline_timings(g.track, song_length)))
        if args.pos is not None:
            t = g.track.timing_by_pos(args.pos, clock, depth=args.depth)
            logger.info("group %d: pos %g reached at %d ms", g.index, args.pos, t)

    for a in chart.arcs():
        if a.time <= chart_t <= a.end_time:
            x, y = arc_point(a, chart_t)
            logger.info("arc %d-%d at (%.2f, %.2f)", a.time, a.end_time, x, y)
    for c in chart.cameras():
        if c.time <= chart_t <= c.time + c.duration:
            logger.info("camera %s @%d: %.0f%%", c.camera_type.value, c.time, 100.0 * camera_progress(c, chart_t))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args)
    logger = logging.getLogger(__name__)
    logger.debug("CLI args parsed")

    try:
        cfg = ViewerConfig()
        if args.config:
            cfg = ViewerConfig.from_dict(flatten_config_v2(load_config_v2(args.config)))
        cfg = cfg.merged(drop_rate=args.drop_rate, song_length=args.song_length, fix_offset=args.fix_offset)

        if args.save_config:
            with open(args.save_config, "w", encoding="utf-8") as f:
                f.write(dump_config_v2(dataclasses.asdict(cfg)))
            logger.info("config written to %s", args.save_config)

        chart = open_chart(args.input)
        _summary(chart, logger)

        if args.time is not None:
            _query(chart, cfg, args, logger)

        if args.score_at is not None:
            score, combo, total = score_at(chart, args.score_at - chart.audio_offset)
            logger.info("combo %d/%d score %08d", combo, total, score)

        if args.export:
            with open(args.export, "w", encoding="utf-8") as f:
                f.write(export_aff(chart, fix_offset=cfg.fix_offset))
            logger.info("exported to %s", args.export)
    except (ValueError, OSError, requests.RequestException) as e:
        # AffError and config errors are ValueErrors
        logger.error("%s", e)
        return 2
    return 0
