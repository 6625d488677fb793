"""Bulk data source browsing (reports and list views)."""
