from __future__ import annotations

import json
from typing import Any, Dict, List


def _strip_jsonc_comments(src: str) -> str:
    # Drops //, # and /* */ comments; string literals pass through untouched.
    out: List[str] = []
    i = 0
    n = len(src)
    quote = ""        # active string delimiter, "" outside strings

    while i < n:
        ch = src[i]
        nxt = src[i + 1] if i + 1 < n else ""

        if quote:
            out.append(ch)
            if ch == "\\" and nxt:
                out.append(nxt)
                i += 2
                continue
            if ch == quote:
                quote = ""
            i += 1
            continue

        if ch in ("\"", "'"):
            quote = ch
            out.append(ch)
            i += 1
            continue

        if ch == "#" or (ch == "/" and nxt == "/"):
            j = src.find("\n", i)
            i = n if j == -1 else j
            continue

        if ch == "/" and nxt == "*":
            j = src.find("*/", i + 2)
            i = n if j == -1 else j + 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def load_config_v2(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()
    raw = raw.lstrip("\ufeff")
    data = json.loads(_strip_jsonc_comments(raw))
    if not isinstance(data, dict):
        raise ValueError("config root must be an object")
    return data


def _get_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    v = cfg.get(key)
    return v if isinstance(v, dict) else {}


def flatten_config_v2(cfg: Dict[str, Any]) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}

    playback = _get_section(cfg, "playback")
    export = _get_section(cfg, "export")
    render = _get_section(cfg, "render")

    def pull(dst_key: str, section: Dict[str, Any], section_key: str):
        if section_key in section:
            flat[dst_key] = section.get(section_key)

    pull("drop_rate", playback, "drop_rate")
    pull("song_length", playback, "song_length")

    pull("fix_offset", export, "fix_offset")

    pull("render_far", render, "far")
    pull("render_delay", render, "delay")

    return flat


def dump_config_v2(flat: Dict[str, Any]) -> str:
    cfg: Dict[str, Any] = {
        "version": 2,
        "playback": {
            "drop_rate": flat.get("drop_rate", 100.0),
            "song_length": flat.get("song_length"),
        },
        "export": {
            "fix_offset": bool(flat.get("fix_offset", False)),
        },
        "render": {
            "far": flat.get("render_far", 100000.0),
            "delay": flat.get("render_delay", 120),
        },
    }
    header = "\n".join([
        "// aff_chart config v2 (JSON with comments)",
        "//",
        "//   python3 -m aff_chart --input chart.aff --config <this_file>",
        "//",
        "// - Lines starting with // or # are comments.",
        "// - CLI args override config values.",
        "",
    ])
    return header + json.dumps(cfg, ensure_ascii=False, indent=2) + "\n"
