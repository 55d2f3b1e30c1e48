"""Configuration domain package exports."""

from __future__ import annotations

from .request_options import RequestOptions

__all__ = ["RequestOptions"]
