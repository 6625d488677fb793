"""Errors surfaced by the configuration save path."""

from __future__ import annotations

from ..exceptions import AppError


class ConfigurationSaveError(AppError):
    """Save failed and was rolled back; the message is safe to show callers."""


class InvalidPayloadError(ConfigurationSaveError):
    """Submitted configuration or mapping payload has an unexpected shape."""
