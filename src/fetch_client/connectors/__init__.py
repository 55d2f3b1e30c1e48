# Connectors package

from .fetch_client import FetchClient

__all__ = ["FetchClient"]
