# Methodology: Clean Architecture – application use case orchestration
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from ..infrastructure.feed_parser import read_rates
from ..infrastructure.fetcher import DEFAULT_FEED_URL, fetch_feed
from ..infrastructure.rate_store import RateStore

logger = logging.getLogger("ecb_fx.application.use_case")


def load_feed(feed_path: Union[str, Path], store: RateStore, delimiter: str = ",") -> int:
    """Parse the feed file and save every valid rate. Returns the number of dates written."""
    rates = read_rates(feed_path, delimiter=delimiter)
    if not rates:
        logger.warning("No exchange rates found in %s", feed_path)
    return store.save(rates)


def refresh(
    feed_path: Union[str, Path],
    store: RateStore,
    *,
    url: str = DEFAULT_FEED_URL,
    session: Optional[requests.Session] = None,
    delimiter: str = ",",
) -> int:
    path = fetch_feed(feed_path, url=url, session=session)
    return load_feed(path, store, delimiter=delimiter)
