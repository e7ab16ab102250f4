# Methodology: Clean Architecture – infrastructure adapters (persistence)
"""Date-keyed persistence of USD→EUR rates.

Rates live in a single SQLite table keyed by date. Values are stored as the
decimal's text form so a saved rate is read back exactly. Every read runs in
its own transaction so a fallback scan sees one snapshot, and writes take the
database write lock up front so two refreshes never interleave.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Union

from sqlalchemy import Column, Date, MetaData, String, Table, bindparam, create_engine, event, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection, Engine

from ..domain.errors import OutOfRangeError
from ..domain.models import EPOCH, ExchangeRate

logger = logging.getLogger("ecb_fx.infrastructure.rate_store")

DEFAULT_STORE_PATH = Path("rates.sqlite3")

metadata = MetaData()

exchange_rates = Table(
    "exchange_rates",
    metadata,
    Column("rate_date", Date, primary_key=True),
    Column("value", String(64), nullable=False),
)

_lookup = select(exchange_rates.c.value).where(exchange_rates.c.rate_date == bindparam("probe"))


def _install_transaction_hooks(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first write; take over so reads are transactional too
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None
        # WAL: a reader keeps its snapshot while a writer commits
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):  # type: ignore[no-untyped-def]
        mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


class RateStore:
    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_STORE_PATH,
        *,
        epoch: date = EPOCH,
        busy_timeout: float = 5.0,
    ) -> None:
        self.path = Path(path)
        self.epoch = epoch
        # seconds a writer waits for another writer before OperationalError
        self._engine = create_engine(f"sqlite:///{self.path}", connect_args={"timeout": busy_timeout})
        _install_transaction_hooks(self._engine)
        metadata.create_all(self._engine)

    # ------------------------------------------------------------------
    # Transaction scopes
    # ------------------------------------------------------------------
    @contextmanager
    def _read(self) -> Iterator[Connection]:
        with self._engine.connect() as conn:
            trans = conn.begin()
            try:
                yield conn
            finally:
                trans.rollback()

    @contextmanager
    def _write(self) -> Iterator[Connection]:
        with self._engine.connect() as conn:
            conn.execution_options(sqlite_begin="IMMEDIATE")
            with conn.begin():
                yield conn

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def save(self, rates: Iterable[ExchangeRate]) -> int:
        """Write all rates in one transaction; a later duplicate date wins. Returns dates written."""
        with self._write() as conn:
            latest: Dict[date, Decimal] = {}
            for rate in rates:
                latest[rate.date] = rate.value
            if not latest:
                logger.debug("Nothing to save")
                return 0
            stmt = sqlite_insert(exchange_rates)
            stmt = stmt.on_conflict_do_update(
                index_elements=[exchange_rates.c.rate_date],
                set_={"value": stmt.excluded.value},
            )
            conn.execute(stmt, [{"rate_date": d, "value": str(v)} for d, v in latest.items()])
        logger.info("Saved %d exchange rates to %s", len(latest), self.path)
        return len(latest)

    def retrieve(self, on: date) -> Decimal:
        """Return the rate for ``on``, or for the nearest earlier date that has one.

        Raises OutOfRangeError when ``on`` precedes the epoch or nothing is stored
        between the epoch and ``on``.
        """
        if isinstance(on, datetime):
            on = on.date()
        if on < self.epoch:
            raise OutOfRangeError(on, self.epoch)

        max_steps = (on - self.epoch).days + 1
        with self._read() as conn:
            for step in range(max_steps):
                probe = on - timedelta(days=step)
                raw = conn.execute(_lookup, {"probe": probe}).scalar()
                if raw is not None:
                    if step:
                        logger.debug("No rate on %s, using %s", on, probe)
                    return Decimal(raw)
        raise OutOfRangeError(on, self.epoch)

    def count(self) -> int:
        with self._read() as conn:
            return int(conn.execute(select(func.count()).select_from(exchange_rates)).scalar_one())

    def latest_date(self) -> Optional[date]:
        with self._read() as conn:
            return conn.execute(select(func.max(exchange_rates.c.rate_date))).scalar()

    def dispose(self) -> None:
        self._engine.dispose()
