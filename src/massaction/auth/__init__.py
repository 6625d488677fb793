"""Admin authentication for the configuration API."""
