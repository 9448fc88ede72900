"""Shared test helpers and API fakes."""
