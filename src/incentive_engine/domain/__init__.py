"""Domain aggregates."""

from incentive_engine.domain.employer_incentive import EmployerIncentive

__all__ = ["EmployerIncentive"]
