from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..formats.aff_impl import load_aff_text
from ..types import Chart

logger = logging.getLogger(__name__)

USER_AGENT = "aff-chart/1.0"


def build_requests_session() -> requests.Session:
    s = requests.Session()
    retries = Retry(total=5, backoff_factor=0.4, status_forcelist=[429, 500, 502, 503, 504])
    s.mount("https://", HTTPAdapter(max_retries=retries))
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.headers.update({"User-Agent": USER_AGENT})
    return s


HTTP = build_requests_session()


def is_url(src: str) -> bool:
    return str(src).lower().startswith(("http://", "https://"))


def load_chart(path: str) -> Chart:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return load_aff_text(text.lstrip("\ufeff"))


def download_chart(url: str, *, session: requests.Session = HTTP, timeout: float = 30.0) -> Chart:
    r = session.get(url, timeout=timeout, headers={"Cache-Control": "no-cache"})
    r.raise_for_status()
    r.encoding = r.encoding or "utf-8"
    logger.debug("downloaded %s (%d bytes)", url, len(r.content))
    return load_aff_text(r.text.lstrip("\ufeff"))


def open_chart(src: str) -> Chart:
    if is_url(src):
        return download_chart(src)
    return load_chart(src)
