"""CryptoCompare price API client.

Fetches OHLCV history, current prices and coin listings. The chart engine
never calls this module; the CLI feeds its output into ``render_chart``.
"""

import logging
import time
from typing import Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from candlestick.errors import MarketDataError
from candlestick.models import Candle

logger = logging.getLogger(__name__)

BASE_URL = "https://min-api.cryptocompare.com/data"

# The API returns at most this many points per request
MAX_LIMIT = 2000
DEFAULT_HOURS = 24
RATE_LIMIT_WAIT = 30.0
REQUEST_TIMEOUT = 10.0


class Coin(BaseModel):
    """A listed coin."""

    symbol: str = Field(..., description="Ticker symbol")
    name: str = Field(..., description="Display name")

    model_config = {"frozen": True}


class TopCoin(BaseModel):
    """A coin ranked by market cap."""

    symbol: str = Field(..., description="Ticker symbol")
    name: str = Field(..., description="Full display name")
    current_price: float = Field(0.0, description="Latest price in USD")
    market_cap: float = Field(0.0, description="Market cap in USD")
    change_24h: float = Field(0.0, description="Percent change over the last 24 hours")

    model_config = {"frozen": True}


def resolve_timeframe(
    days: Optional[int] = None,
    hours: Optional[int] = None,
    mins: Optional[int] = None,
) -> tuple[str, int]:
    """Pick the history endpoint and point limit for a timeframe.

    Minutes take precedence over hours, hours over days. With nothing set
    the last 24 hours are used.

    Returns:
        Tuple of (endpoint path, limit).
    """
    if mins:
        return "/v2/histominute", min(mins, MAX_LIMIT)
    if hours:
        return "/v2/histohour", min(hours, MAX_LIMIT)
    if days:
        return "/v2/histoday", min(days, MAX_LIMIT)
    return "/v2/histohour", DEFAULT_HOURS


class CryptoCompareClient:
    """Thin client for the CryptoCompare REST API."""

    def __init__(
        self,
        api_key: str = "",
        session: Optional[requests.Session] = None,
        retry_wait: float = RATE_LIMIT_WAIT,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            api_key: Optional API key; anonymous requests are rate limited harder.
            session: Session to reuse, mainly for tests.
            retry_wait: Seconds to wait before retrying a rate-limited request.
            timeout: Request timeout in seconds.
        """
        self.api_key = api_key
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.retry_wait = retry_wait
        self.timeout = timeout

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        """GET an endpoint, retrying once after a rate-limit response."""
        params = dict(params or {})
        if self.api_key:
            params["api_key"] = self.api_key

        url = f"{BASE_URL}{path}"
        logger.info("GET %s %s", path, {k: v for k, v in params.items() if k != "api_key"})

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            if response.status_code == 429:
                logger.warning("Rate limit reached, retrying in %.0fs", self.retry_wait)
                time.sleep(self.retry_wait)
                response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise MarketDataError(f"Request to {path} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not response.ok:
            message = payload.get("Message") if isinstance(payload, dict) else None
            raise MarketDataError(
                f"API Error: {message or f'HTTP {response.status_code}'}"
            )

        if isinstance(payload, dict) and payload.get("Response") == "Error":
            raise MarketDataError(f"API Error: {payload.get('Message', 'unknown error')}")

        return payload

    def fetch_candles(
        self,
        coin: str,
        currency: str = "USD",
        days: Optional[int] = None,
        hours: Optional[int] = None,
        mins: Optional[int] = None,
    ) -> list[Candle]:
        """Fetch OHLCV history for a pair.

        Args:
            coin: Base currency symbol (e.g., BTC).
            currency: Quote currency symbol (e.g., USD).
            days: Days of daily candles.
            hours: Hours of hourly candles.
            mins: Minutes of minute candles.

        Returns:
            Candles ordered oldest first.

        Raises:
            MarketDataError: If the API fails or returns no data.
        """
        endpoint, limit = resolve_timeframe(days, hours, mins)
        payload = self._get(endpoint, {
            "fsym": coin.upper(),
            "tsym": currency.upper(),
            "limit": limit,
            "aggregate": 1,
        })

        records = (payload.get("Data") or {}).get("Data") or []
        if not records:
            raise MarketDataError("No price data available for the specified timeframe.")

        try:
            return [Candle.model_validate(record) for record in records]
        except ValidationError as e:
            raise MarketDataError(f"Unexpected candle data from API: {e}") from e

    def list_coins(self) -> list[Coin]:
        """All coins known to the API, sorted by symbol."""
        payload = self._get("/all/coinlist")
        coins = [
            Coin(symbol=item.get("Symbol", key), name=item.get("CoinName", key))
            for key, item in (payload.get("Data") or {}).items()
        ]
        return sorted(coins, key=lambda c: c.symbol)

    def get_top_coins(self, limit: int = 10, currency: str = "USD") -> list[TopCoin]:
        """Top coins by market cap."""
        currency = currency.upper()
        payload = self._get("/top/mktcapfull", {"limit": limit, "tsym": currency})

        coins = []
        for item in payload.get("Data") or []:
            info = item.get("CoinInfo", {})
            raw = (item.get("RAW") or {}).get(currency, {})
            coins.append(TopCoin(
                symbol=info.get("Name", ""),
                name=info.get("FullName", ""),
                current_price=raw.get("PRICE") or 0.0,
                market_cap=raw.get("MKTCAP") or 0.0,
                change_24h=raw.get("CHANGEPCT24HOUR") or 0.0,
            ))
        return coins

    def fetch_current_price(self, coin: str, currency: str = "USD") -> float:
        """Latest price of ``coin`` in ``currency``.

        Raises:
            MarketDataError: If the API fails or does not quote the pair.
        """
        currency = currency.upper()
        payload = self._get("/price", {"fsym": coin.upper(), "tsyms": currency})
        try:
            return float(payload[currency])
        except (KeyError, TypeError, ValueError):
            raise MarketDataError(f"No price for {coin.upper()}-{currency}") from None

    def validate_pair(self, pair: str) -> bool:
        """Whether a ``COIN-CURRENCY`` pair is quoted by the API."""
        coin, _, currency = pair.partition("-")
        if not coin or not currency:
            return False
        try:
            self.fetch_current_price(coin, currency)
        except MarketDataError as e:
            logger.info("Pair %s is not available: %s", pair, e)
            return False
        return True
