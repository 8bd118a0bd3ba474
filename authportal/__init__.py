"""Credential login, signed-cookie sessions and a protected dashboard."""

__version__ = "0.1.0"
