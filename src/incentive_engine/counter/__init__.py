"""Occurrence counters with debounce and reset-on-max semantics."""

from incentive_engine.counter.memory_counter import MemoryCounterStore

__all__ = ["MemoryCounterStore"]
