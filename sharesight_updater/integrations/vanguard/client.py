"""Client for Vanguard's public (unauthenticated) fund price history feed."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List

import requests

from ...config import AppConfig
from ...errors import RemoteError
from ...helpers.validation import is_iso_date
from ...logutils import logger
from ...models import PriceObservation
from ..http import read_json, send


def _format_vars(port_id: str, start: date, end: date, issue_type: str = "S") -> str:
    return (
        f"portId:{port_id},issueType:{issue_type},"
        f"startDate:{start.isoformat()},endDate:{end.isoformat()}"
    )


def fetch_price_history(
    port_id: str,
    *,
    today: date | None = None,
    session: Any | None = None,
    config: AppConfig | None = None,
) -> List[Dict[str, Any]]:
    """Return the raw price records for ``port_id`` over the lookback window.

    The feed answers with ``[{"date": "2022-01-12T00:00:00-05:00",
    "navPrice": 398.2687, ...}, ...]`` ordered newest first.
    """
    config = config or AppConfig()
    end = today or date.today()
    start = end - timedelta(days=config.SCRAPE_LOOKBACK_DAYS)
    params = {"vars": _format_vars(port_id, start, end)}

    owns_session = session is None
    session = requests.Session() if owns_session else session
    try:
        resp = send(
            session,
            "get",
            config.VANGUARD_PRICE_URL,
            "Vanguard price lookup",
            params=params,
            timeout=config.REQUEST_TIMEOUT,
        )
        records = read_json(resp, "Vanguard price lookup")
    finally:
        if owns_session:
            session.close()

    if not isinstance(records, list):
        raise RemoteError("Vanguard price feed did not return a list")
    logger.debug(f"Vanguard returned {len(records)} prices for port {port_id} since {start}")
    return records


def latest_price(records: List[Dict[str, Any]]) -> PriceObservation:
    """Return the newest record, keeping only the calendar part of its date."""
    if not records:
        raise RemoteError("Vanguard price feed returned no prices")
    newest = records[0]
    try:
        day = str(newest["date"])[:10]
        price = float(newest["navPrice"])
    except (KeyError, TypeError, ValueError) as exc:
        raise RemoteError(f"Malformed Vanguard price record: {newest!r}") from exc
    if not is_iso_date(day):
        raise RemoteError(f"Unexpected date in Vanguard price record: {newest['date']!r}")
    return PriceObservation(date=day, price=price)
