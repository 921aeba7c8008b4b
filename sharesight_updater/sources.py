"""Registry of web price sources available to the ``scrape`` command."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List

from .config import AppConfig
from .errors import UsageError
from .logutils import logger
from .models import PriceObservation
from .integrations.vanguard import fetch_price_history, latest_price

Fetcher = Callable[..., PriceObservation]


@dataclass(frozen=True, slots=True)
class PriceSource:
    """A scrapeable price, keyed by the code users pass to ``scrape``."""

    code: str
    description: str
    fetch: Fetcher

    def as_row(self) -> str:
        return f"{self.code}\t{self.description}"


def _vanguard_fetcher(port_id: str) -> Fetcher:
    def fetch(
        *,
        today: date | None = None,
        session: Any | None = None,
        config: AppConfig | None = None,
    ) -> PriceObservation:
        records = fetch_price_history(port_id, today=today, session=session, config=config)
        return latest_price(records)

    return fetch


_SOURCES: Dict[str, PriceSource] = {
    source.code: source
    for source in (
        PriceSource(
            code="IE00B3X1NT05",
            description="Vanguard Global Small-Cap Index Fund",
            fetch=_vanguard_fetcher("9158"),
        ),
    )
}


def list_sources() -> List[PriceSource]:
    """Return the available sources. Makes no network calls."""
    return list(_SOURCES.values())


def get_source(code: str) -> PriceSource:
    try:
        return _SOURCES[code]
    except KeyError:
        raise UsageError(f"Invalid scraping code {code!r}; see `scrape --list`") from None


def fetch_reference_price(
    source_id: str,
    *,
    today: date | None = None,
    session: Any | None = None,
    config: AppConfig | None = None,
) -> PriceObservation:
    """Fetch the most recent price published by ``source_id``.

    Raises:
        UsageError: when ``source_id`` is not a known source.
        RemoteError: on any network or decoding failure.
    """
    source = get_source(source_id)
    logger.info(f"Scraping {source.description} ({source.code})")
    return source.fetch(today=today, session=session, config=config)
