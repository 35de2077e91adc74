"""Shared kernel: errors, clock, configuration, value objects, protocols."""
