"""Exceptions raised by the discord search."""

from __future__ import annotations


class HotSaxError(Exception):
    """Base class for hotsax errors."""


class InvalidParametersError(HotSaxError, ValueError):
    """Raised before any computation when search parameters are unusable."""
