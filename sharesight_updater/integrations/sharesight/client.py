"""Sharesight v3 API client for custom investments."""

from __future__ import annotations

from typing import Any, List

from ...config import AppConfig
from ...errors import InvestmentNotFoundError, RemoteError
from ...logutils import logger
from ...models import CustomInvestment, PriceObservation
from ..http import describe, is_success, read_json, send


class SharesightClient:
    """Authenticated wrapper around Sharesight's custom investment endpoints.

    Instances are returned by :func:`~.auth.authenticate`; the wrapped session
    already carries the bearer token as a default ``Authorization`` header.

    Usage:
        with authenticate(credentials, config) as client:
            for investment in client.list_investments():
                print(investment.as_row())
    """

    def __init__(self, session: Any, config: AppConfig | None = None) -> None:
        self._session = session
        self._config = config or AppConfig()

    def __enter__(self) -> "SharesightClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _url(self, path: str) -> str:
        return f"{self._config.API_BASE_URL.rstrip('/')}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, what: str, **kwargs: Any) -> Any:
        if self._session is None:
            raise RuntimeError("Client closed")
        return send(
            self._session,
            method,
            self._url(path),
            what,
            timeout=self._config.REQUEST_TIMEOUT,
            **kwargs,
        )

    # Investment directory -------------------------------------------
    def list_investments(self) -> List[CustomInvestment]:
        """Return all custom investments in the order the API lists them.

        Raises:
            RemoteError: on transport failure, a non-2xx status or a body that
                does not hold a well formed ``custom_investments`` list.
        """
        resp = self._send("get", "custom_investments.json", "Custom investment listing")
        data = read_json(resp, "custom investment listing")

        records = data.get("custom_investments") if isinstance(data, dict) else None
        if not isinstance(records, list):
            raise RemoteError("Custom investment listing has no 'custom_investments' list")

        try:
            investments = [CustomInvestment.from_record(r) for r in records]
        except (KeyError, TypeError, ValueError) as exc:
            raise RemoteError(f"Malformed custom investment record: {exc!r}") from exc

        logger.debug(f"Fetched {len(investments)} custom investments")
        return investments

    def resolve_id_by_code(self, code: str) -> int:
        """Return the id of the first investment whose code equals ``code``.

        The comparison is exact and case-sensitive.

        Raises:
            InvestmentNotFoundError: if no investment carries ``code``.
        """
        matches = [ci for ci in self.list_investments() if ci.code == code]
        if not matches:
            raise InvestmentNotFoundError(code)
        if len(matches) > 1:
            ids = ", ".join(str(ci.id) for ci in matches)
            logger.warning(f"Code {code!r} matches several investments ({ids}), using {matches[0].id}")
        return matches[0].id

    # Prices ---------------------------------------------------------
    def submit_price(self, investment_id: int, date: str, price: float) -> bool:
        """POST a single ``(date, price)`` pair for ``investment_id``.

        Returns ``True`` when the API answers with a 2xx status. The response
        body is not interpreted.

        Raises:
            RemoteError: when the request cannot be sent at all.
        """
        observation = PriceObservation(date=date, price=price)
        resp = self._send(
            "post",
            f"custom_investment/{investment_id}/prices.json",
            "Price submission",
            json=observation.as_payload(),
        )
        if is_success(resp):
            logger.info(f"Stored price {price} on {date} for investment {investment_id}")
            return True
        logger.error(f"Price submission for investment {investment_id} rejected: {describe(resp)}")
        return False
