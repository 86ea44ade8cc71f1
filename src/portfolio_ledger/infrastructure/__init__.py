"""Adapters for the application ports (event log, in-memory storage)."""
