"""Coin name and ticker symbol normalization."""

from typing import Optional

# Display names used by the trading screens, keyed by ticker
COIN_NAMES: dict[str, str] = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "DOGE": "Dogecoin",
    "XRP": "Ripple",
    "ADA": "Cardano",
    "SOL": "Solana",
    "DOT": "Polkadot",
    "LTC": "Litecoin",
}

_SYMBOLS_BY_NAME: dict[str, str] = {name.upper(): symbol for symbol, name in COIN_NAMES.items()}


def normalize_symbol(value: Optional[str]) -> Optional[str]:
    """
    Return the ticker for a coin name or symbol.

    "Bitcoin", "bitcoin" and "btc" all map to "BTC". Unknown values are
    stripped and upper-cased; empty/None -> None.
    """
    if value is None:
        return None
    text = value.strip().upper()
    if not text:
        return None
    return _SYMBOLS_BY_NAME.get(text, text)


def coin_name(symbol: str) -> str:
    """Display name for a ticker, falling back to the ticker itself."""
    return COIN_NAMES.get(symbol, symbol)
