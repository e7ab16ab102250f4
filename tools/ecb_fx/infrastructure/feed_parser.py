# Methodology: Clean Architecture – infrastructure adapters (feed file)
from __future__ import annotations

import csv
import logging
from collections import Counter
from pathlib import Path
from typing import List, Union

import pandas as pd

from ..domain.errors import FeedReadError
from ..domain.models import ExchangeRate, RowStatus, classify_row, is_data_row

logger = logging.getLogger("ecb_fx.infrastructure.feed_parser")


def _read_raw_rows(path: Path, delimiter: str) -> List[List[str]]:
    try:
        with path.open(encoding="utf-8-sig", errors="replace", newline="") as fh:
            return [row for row in csv.reader(fh, delimiter=delimiter) if row]
    except OSError as e:
        raise FeedReadError(path, e) from e


def read_rates(path: Union[str, Path], delimiter: str = ",") -> List[ExchangeRate]:
    """Read a USD→EUR rate feed and return its valid rows as ExchangeRate records.

    The number of leading metadata lines varies between feed exports, so rows are
    kept only when the first field starts with an ISO date. Rows whose date or
    value does not parse are dropped; the remaining rows keep their input order.
    Raises FeedReadError if the file cannot be read.
    """
    path = Path(path)
    raw_rows = _read_raw_rows(path, delimiter)
    if not raw_rows:
        logger.info("Feed %s has no rows", path)
        return []

    df = pd.DataFrame(raw_rows).reindex(columns=[0, 1])
    df.columns = ["date", "value"]
    data = df[df["date"].map(is_data_row)]
    logger.debug("Feed %s: %d lines, %d data rows", path, len(df), len(data))

    parsed = [classify_row(d, v) for d, v in zip(data["date"], data["value"])]
    dropped = Counter(row.status for row in parsed if not row.is_valid)
    if dropped:
        logger.debug(
            "Dropped rows: invalid date=%d invalid value=%d",
            dropped[RowStatus.INVALID_DATE],
            dropped[RowStatus.INVALID_VALUE],
        )
    rates = [row.rate for row in parsed if row.is_valid]
    logger.info("Parsed %d exchange rates from %s", len(rates), path)
    return rates
