"""Incentive event processing engine.

Defers "user performed action X" events for asynchronous evaluation against
employer-configured incentive programs and awards the user when a
program's trigger condition is met.
"""

__version__ = "0.1.0"
