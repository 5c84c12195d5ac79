"""Jigoor: Gemini-grounded trading signals for crypto tickers and forex pairs."""

__version__ = "0.1.0"
