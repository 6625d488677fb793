"""Capability discovery against remote action services."""
