from .client import fetch_price_history, latest_price

__all__ = ["fetch_price_history", "latest_price"]
