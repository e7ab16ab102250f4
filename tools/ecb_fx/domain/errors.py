# Methodology: Clean Architecture – domain errors
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Union


class FeedReadError(OSError):
    """The feed file could not be opened or read."""

    def __init__(self, path: Union[str, Path], reason: object = None) -> None:
        self.path = Path(path)
        message = f"Unable to read rate feed {self.path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class OutOfRangeError(ValueError):
    """No rate can be resolved for the requested date within the valid range."""

    def __init__(self, requested: date, epoch: date, message: Optional[str] = None) -> None:
        self.requested = requested
        self.epoch = epoch
        if message is None:
            if requested < epoch:
                message = f"{requested.isoformat()} is before year {epoch.year}"
            else:
                message = f"No exchange rate on or before {requested.isoformat()} since {epoch.isoformat()}"
        super().__init__(message)


class FetchError(RuntimeError):
    def __init__(self, url: str, status_code: Optional[int] = None, reason: object = None) -> None:
        self.url = url
        self.status_code = status_code
        detail = f"status {status_code}" if status_code is not None else str(reason)
        super().__init__(f"Unable to fetch exchange rates from {url} ({detail})")
