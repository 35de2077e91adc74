"""Pending incentive event queues."""

from incentive_engine.queue.memory_queue import MemoryIncentiveQueue, build_incentive_event

__all__ = ["MemoryIncentiveQueue", "build_incentive_event"]
