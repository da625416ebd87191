"""
SecureQuote API

A quotation management service that keeps client-facing quotation details
apart from the confidential financial figures behind them, backed by a
PostgreSQL database.
"""

__version__ = "0.1.0"
