"""Named endpoints addressing remote capability services."""

from .endpoints_registry import EndpointRegistry, NamedEndpoint

__all__ = ["EndpointRegistry", "NamedEndpoint"]
