"""Repository implementations backed by injected fixed maps."""

from incentive_engine.repository.memory_employer_incentives import (
    MemoryEmployerIncentiveRepository,
    build_employer_incentive,
)
from incentive_engine.repository.memory_incentives import (
    MemoryIncentiveRepository,
    build_incentive,
)

__all__ = [
    "MemoryEmployerIncentiveRepository",
    "MemoryIncentiveRepository",
    "build_employer_incentive",
    "build_incentive",
]
