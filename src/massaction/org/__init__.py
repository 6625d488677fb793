"""Clients for the platform REST APIs."""
