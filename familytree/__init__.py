"""Family relationship graph engine, persistence store and HTTP API."""

__version__ = "0.1.0"
