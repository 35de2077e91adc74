"""Logging setup and audit sinks."""
