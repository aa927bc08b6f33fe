"""Bridge API gateway: authenticated, rate-limited proxy in front of the Bridge API."""

__version__ = "1.1.0"
