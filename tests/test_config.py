from __future__ import annotations

import pytest

from aff_chart.config.schema import ViewerConfig
from aff_chart.config_v2 import _strip_jsonc_comments, dump_config_v2, flatten_config_v2, load_config_v2

JSONC = "\ufeff" + """// viewer settings
{
  # playback
  "playback": {"drop_rate": 4.5, "song_length": 120000},
  "export": {"fix_offset": true},   // applied on --export
  /* render block */
  "render": {"far": 50000, "delay": "90"},
  "note": "keep // and # inside strings"
}
"""


def test_strip_comments_keeps_strings():
    out = _strip_jsonc_comments('{"a": "x // y", "b": 1} // tail')
    assert out.strip() == '{"a": "x // y", "b": 1}'


def test_load_and_flatten(tmp_path):
    p = tmp_path / "viewer.jsonc"
    p.write_text(JSONC, encoding="utf-8")
    cfg = load_config_v2(str(p))
    assert cfg["note"] == "keep // and # inside strings"
    assert flatten_config_v2(cfg) == {
        "drop_rate": 4.5,
        "song_length": 120000,
        "fix_offset": True,
        "render_far": 50000,
        "render_delay": "90",
    }


def test_root_must_be_object(tmp_path):
    p = tmp_path / "bad.jsonc"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config_v2(str(p))


def test_from_dict_coerces_and_ignores_unknown():
    cfg = ViewerConfig.from_dict({"drop_rate": "2", "render_delay": "90", "song_length": None, "bogus": 1})
    assert cfg.drop_rate == 2.0
    assert cfg.render_delay == 90
    assert cfg.song_length is None
    assert cfg.fix_offset is False


def test_drop_rate_must_be_positive():
    with pytest.raises(ValueError):
        ViewerConfig.from_dict({"drop_rate": 0})


def test_merged_skips_none():
    cfg = ViewerConfig(drop_rate=3.0)
    assert cfg.merged(drop_rate=None, song_length=None) is cfg
    merged = cfg.merged(song_length=5000, fix_offset=True)
    assert (merged.drop_rate, merged.song_length, merged.fix_offset) == (3.0, 5000, True)


def test_dump_round_trip(tmp_path):
    flat = {"drop_rate": 6.0, "song_length": 90000, "fix_offset": True, "render_far": 80000.0, "render_delay": 60}
    p = tmp_path / "out.jsonc"
    p.write_text(dump_config_v2(flat), encoding="utf-8")
    assert ViewerConfig.from_dict(flatten_config_v2(load_config_v2(str(p)))) == ViewerConfig(**flat)
