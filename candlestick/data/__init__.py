"""Market data retrieval."""

from candlestick.data.cryptocompare import Coin, CryptoCompareClient, TopCoin

__all__ = ["Coin", "CryptoCompareClient", "TopCoin"]
