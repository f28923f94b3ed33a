from __future__ import annotations

import logging

from aff_chart.app import build_parser, main
from aff_chart.config.schema import ViewerConfig
from aff_chart.config_v2 import flatten_config_v2, load_config_v2

from tests.conftest import FULL_CHART, SCENARIO


def test_parser_defaults():
    args = build_parser().parse_args(["--input", "x.aff"])
    assert args.fix_offset is None
    assert args.depth == 0
    assert args.time is None


def test_export_round_trip(tmp_path):
    src = tmp_path / "0.aff"
    out = tmp_path / "out.aff"
    src.write_text(SCENARIO, encoding="utf-8")
    assert main(["--input", str(src), "--export", str(out), "--quiet"]) == 0
    assert out.read_text(encoding="utf-8") == "AudioOffset:0\n-\ntiming(0,120.00,4.00);\n(1000,1);\n"


def test_config_applies_fix_offset(tmp_path):
    src = tmp_path / "1.aff"
    cfg = tmp_path / "viewer.jsonc"
    out = tmp_path / "out.aff"
    src.write_text(FULL_CHART, encoding="utf-8")
    cfg.write_text('{"export": {"fix_offset": true}} // zero the offset\n', encoding="utf-8")
    assert main(["--input", str(src), "--config", str(cfg), "--export", str(out)]) == 0
    assert out.read_text(encoding="utf-8").startswith("AudioOffset:0\n-\ntiming(-120,")


def test_query_and_score_are_logged(tmp_path, caplog):
    src = tmp_path / "1.aff"
    src.write_text(FULL_CHART, encoding="utf-8")
    with caplog.at_level(logging.INFO):
        rc = main(["--input", str(src), "--time", "880", "--pos", "500", "--drop_rate", "1", "--score_at", "1000"])
    assert rc == 0
    assert "pos 500 reached" in caplog.text
    assert "combo" in caplog.text


def test_bad_chart_exits_with_2(tmp_path, caplog):
    src = tmp_path / "bad.aff"
    src.write_text("AudioOffset:0\n-\nflick(0,1);\n", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert main(["--input", str(src)]) == 2
    assert "unknown event type" in caplog.text


def test_missing_file_exits_with_2(tmp_path):
    assert main(["--input", str(tmp_path / "nope.aff")]) == 2


STATIC_GROUP = """AudioOffset:0
-
timing(0,120.00,4.00);
(1000,1);
timinggroup(noinput){
    timing(0,0.00,0.00);
    (2000,2);
};
"""


def test_static_group_is_exported_and_queried(tmp_path, caplog):
    src = tmp_path / "static.aff"
    out = tmp_path / "out.aff"
    src.write_text(STATIC_GROUP, encoding="utf-8")
    with caplog.at_level(logging.INFO):
        rc = main(["--input", str(src), "--export", str(out), "--time", "500", "--pos", "100"])
    assert rc == 0
    assert "group 1: 2 events, 1 timings, base bpm -" in caplog.text
    assert "group 1: static" in caplog.text
    assert out.read_text(encoding="utf-8") == STATIC_GROUP


def test_save_config_writes_effective_values(tmp_path):
    src = tmp_path / "0.aff"
    saved = tmp_path / "viewer.jsonc"
    src.write_text(SCENARIO, encoding="utf-8")
    assert main(["--input", str(src), "--drop_rate", "7", "--fix_offset", "--save_config", str(saved)]) == 0
    cfg = ViewerConfig.from_dict(flatten_config_v2(load_config_v2(str(saved))))
    assert cfg == ViewerConfig(drop_rate=7.0, fix_offset=True)
