"""Test EmployerIncentive construction and ordered action execution."""

from __future__ import annotations

import pytest

from incentive_engine.actions import ImmediateAction, ThresholdCountingAction
from incentive_engine.core.errors import IncentiveValidationError, InvalidArgumentError
from incentive_engine.core.interfaces import IEmployerIncentive
from incentive_engine.core.models import Incentive, IncentiveEvent
from incentive_engine.domain import EmployerIncentive


class TestConstruction:
    def test_valid(self, persisted_incentive, make_action):
        action = make_action("a")
        ei = EmployerIncentive(3, 7, persisted_incentive, [action])
        assert ei.id == 3
        assert ei.employer_id == 7
        assert ei.incentive is persisted_incentive
        assert ei.actions == (action,)
        assert isinstance(ei, IEmployerIncentive)

    def test_id_must_be_positive(self, persisted_incentive, make_action):
        with pytest.raises(InvalidArgumentError, match="id"):
            EmployerIncentive(0, 1, persisted_incentive, [make_action("a")])

    def test_employer_id_must_be_positive(self, persisted_incentive, make_action):
        with pytest.raises(InvalidArgumentError, match="employer_id"):
            EmployerIncentive(1, 0, persisted_incentive, [make_action("a")])

    def test_requires_an_action(self, persisted_incentive):
        with pytest.raises(InvalidArgumentError, match="At least one action"):
            EmployerIncentive(1, 1, persisted_incentive, [])

    def test_rejects_unpersisted_incentive(self, make_action):
        unsaved = Incentive(name="user-birth", description="Reported a birth")
        unsaved.validate()  # valid on its own
        with pytest.raises(InvalidArgumentError, match="Uncommitted"):
            EmployerIncentive(1, 1, unsaved, [make_action("a")])

    def test_rejects_invalid_incentive(self, make_action):
        broken = Incentive.model_construct(id=1, name="", description="x", active=True)
        with pytest.raises(IncentiveValidationError):
            EmployerIncentive(1, 1, broken, [make_action("a")])

    def test_actions_are_copied(self, persisted_incentive, make_action):
        actions = [make_action("a")]
        ei = EmployerIncentive(1, 1, persisted_incentive, actions)
        actions.append(make_action("b"))
        assert len(ei.actions) == 1


class TestProcessEvent:
    def test_single_non_awarding_action(self, persisted_incentive, make_action, make_event):
        calls: list[str] = []
        ei = EmployerIncentive(1, 1, persisted_incentive, [make_action("a", calls=calls)])
        outcome = ei.process_event(make_event())
        assert not outcome.awarded
        assert calls == ["a"]

    def test_falls_through_to_awarding_action(
        self, persisted_incentive, make_action, make_event,
    ):
        calls: list[str] = []
        ei = EmployerIncentive(
            1, 1, persisted_incentive,
            [make_action("first", calls=calls), make_action("second", award=True, calls=calls)],
        )
        outcome = ei.process_event(make_event())
        assert outcome.awarded
        assert outcome.reason == "second"
        assert calls == ["first", "second"]

    def test_stops_at_first_award(self, persisted_incentive, make_action, make_event):
        calls: list[str] = []
        ei = EmployerIncentive(
            1, 1, persisted_incentive,
            [
                make_action("a", calls=calls),
                make_action("b", award=True, calls=calls),
                make_action("c", award=True, calls=calls),
            ],
        )
        assert ei.process_event(make_event()).reason == "b"
        assert calls == ["a", "b"]

    def test_stops_at_first_failure(self, persisted_incentive, make_action, make_event):
        calls: list[str] = []
        ei = EmployerIncentive(
            1, 1, persisted_incentive,
            [
                make_action("a", calls=calls, error=IncentiveValidationError("bad")),
                make_action("b", award=True, calls=calls),
            ],
        )
        with pytest.raises(IncentiveValidationError, match="bad"):
            ei.process_event(make_event())
        assert calls == ["a"]

    def test_prior_side_effects_are_kept_on_failure(
        self, persisted_incentive, counter, make_action, make_event,
    ):
        ei = EmployerIncentive(
            1, 1, persisted_incentive,
            [
                ThresholdCountingAction(5, counter),
                make_action("boom", error=IncentiveValidationError("boom")),
            ],
        )
        with pytest.raises(IncentiveValidationError):
            ei.process_event(make_event())
        assert counter.get_count(1, 1) == 1

    def test_invalid_event_runs_no_action(self, persisted_incentive, make_action):
        calls: list[str] = []
        ei = EmployerIncentive(1, 1, persisted_incentive, [make_action("a", calls=calls)])
        broken = IncentiveEvent.model_construct(
            user_id=1, employer_id=0, employer_incentive_id=1, event_name="x",
        )
        with pytest.raises(IncentiveValidationError):
            ei.process_event(broken)
        assert calls == []

    def test_immediate_action(self, persisted_incentive, make_event):
        ei = EmployerIncentive(1, 1, persisted_incentive, [ImmediateAction()])
        assert ei.process_event(make_event()).awarded
