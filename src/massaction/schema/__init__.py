"""Describe payloads for the configuration object."""

from .namespace import NamespaceNormalizer

__all__ = ["NamespaceNormalizer"]
