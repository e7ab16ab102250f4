# Methodology: Clean Architecture – infrastructure adapters (network)
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from ..domain.errors import FetchError

logger = logging.getLogger("ecb_fx.infrastructure.fetcher")

DEFAULT_FEED_URL = (
    "http://sdw.ecb.europa.eu/quickviewexport.do"
    "?SERIES_KEY=120.EXR.D.USD.EUR.SP00.A&type=csv"
)
DEFAULT_FEED_PATH = Path("rates/usdeur.csv")


def fetch_feed(
    dest: Union[str, Path] = DEFAULT_FEED_PATH,
    url: str = DEFAULT_FEED_URL,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
) -> Path:
    """Download the USD→EUR feed to ``dest``. Raises FetchError unless the server answers 200."""
    dest = Path(dest)
    sess = session or requests.Session()
    headers = {"User-Agent": "ecb-fx (rate feed refresh)"}
    logger.debug("[fetch] GET %s", url)
    try:
        resp = sess.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(url, reason=e) from e
    logger.debug("[fetch] status=%s bytes=%s", resp.status_code, len(resp.content))
    if resp.status_code != 200:
        raise FetchError(url, status_code=resp.status_code)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(resp.content)
    logger.info("Wrote rate feed to %s", dest)
    return dest
