"""Errors raised by discovery and describe calls."""

from __future__ import annotations

from ..exceptions import AppError


class DiscoveryError(AppError):
    """Remote service unreachable, rejected the call, or returned malformed data."""


class UnknownEndpointError(DiscoveryError):
    """Raised when a named endpoint is not configured."""


class OrgRequestError(DiscoveryError):
    """Raised when the local platform API call fails."""


__all__ = ["DiscoveryError", "OrgRequestError", "UnknownEndpointError"]
