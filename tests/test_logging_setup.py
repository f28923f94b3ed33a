from __future__ import annotations

import argparse
import logging

import pytest

from aff_chart.logging_setup import ENV_LEVEL, _cli_level, _env_level


@pytest.mark.parametrize(
    "raw, level",
    [
        ("debug", logging.DEBUG),
        (" warn ", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("loud", None),
        ("", None),
    ],
)
def test_env_level(monkeypatch, raw, level):
    monkeypatch.setenv(ENV_LEVEL, raw)
    assert _env_level() == level


def test_cli_level():
    ns = argparse.Namespace
    assert _cli_level(None) == logging.INFO
    assert _cli_level(ns(quiet=True, basic_debug=False)) == logging.WARNING
    assert _cli_level(ns(quiet=True, basic_debug=True)) == logging.DEBUG
