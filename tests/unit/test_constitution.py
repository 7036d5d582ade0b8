"""Tests for lifeos.governance.constitution — static tables and invariants.

Covers:
    table shapes        8 states, 6 domains, 4 decision types, 4 scenarios
    invariants          weight sums, full 0..100 coverage, type ordering,
                        transition-map closure
    lookups             get_state, get_decision_type (tactical fallback)
    validate_constitution raises ConstitutionError on a broken table
"""

from __future__ import annotations

import pytest

from lifeos.governance import constitution
from lifeos.governance.constitution import (
    CLASSIFIER_WEIGHTS,
    CONSTITUTION_VERSION,
    DECISION_TYPES,
    DOMAINS,
    SCENARIOS,
    STATES,
    STATES_BY_MIN,
    THRESHOLDS,
    VALID_TRANSITIONS,
    AlertLevel,
    CapacityState,
    DecisionTypeConfig,
    DecisionTypeId,
    Domain,
    DomainId,
    ScenarioId,
    StateId,
    get_decision_type,
    get_state,
    validate_constitution,
)
from lifeos.governance.exceptions import ConstitutionError, GovernanceError


class TestTableShapes:
    def test_version(self) -> None:
        assert CONSTITUTION_VERSION == "0.4.0"

    def test_exactly_eight_states(self) -> None:
        assert len(STATES) == 8
        assert {s.id for s in STATES} == set(StateId)

    def test_exactly_six_domains(self) -> None:
        assert [d.id for d in DOMAINS] == list(DomainId)

    def test_exactly_four_decision_types(self) -> None:
        assert [t.id for t in DECISION_TYPES] == list(DecisionTypeId)

    def test_scenarios_fixed_order_and_multipliers(self) -> None:
        assert [(s.id, s.mult, s.cash_mult) for s in SCENARIOS] == [
            (ScenarioId.OPTIMISTIC, 0.7, 1.15),
            (ScenarioId.REALISTIC, 1.0, 1.0),
            (ScenarioId.STRESS, 1.4, 0.7),
            (ScenarioId.HUMAN_FAILURE, 1.8, 0.4),
        ]

    def test_thresholds_ranges(self) -> None:
        assert THRESHOLDS[AlertLevel.CRITICAL] == (0, 24)
        assert THRESHOLDS[AlertLevel.ATTENTION] == (25, 39)
        assert THRESHOLDS[AlertLevel.PREVENTIVE] == (40, 55)

    def test_severity_range(self) -> None:
        for state in STATES:
            assert 1 <= state.severity <= 9

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            VALID_TRANSITIONS[StateId.STABLE] = ()  # type: ignore[index]
        with pytest.raises(AttributeError):
            STATES[0].min = 5  # type: ignore[misc]


class TestInvariants:
    def test_domain_weights_sum_to_one(self) -> None:
        assert sum(d.weight for d in DOMAINS) == pytest.approx(1.0, abs=0.01)

    def test_classifier_weights_sum_to_one(self) -> None:
        assert sum(CLASSIFIER_WEIGHTS.values()) == pytest.approx(1.0, abs=0.01)

    def test_every_score_is_covered(self) -> None:
        for score in range(101):
            assert any(s.contains(score) for s in STATES), score

    def test_lookup_order_is_ascending_min(self) -> None:
        mins = [s.min for s in STATES_BY_MIN]
        assert mins == sorted(mins)
        assert STATES_BY_MIN[0].min == 0
        assert STATES_BY_MIN[-1].max == 100

    def test_equal_min_keeps_declared_order(self) -> None:
        ids = [s.id for s in STATES_BY_MIN]
        assert ids.index(StateId.FAILURE_RISK) < ids.index(StateId.RECOVERY)

    def test_decision_minimums_strictly_increase(self) -> None:
        order = [
            DecisionTypeId.TACTICAL,
            DecisionTypeId.STRATEGIC,
            DecisionTypeId.STRUCTURAL,
            DecisionTypeId.EXISTENTIAL,
        ]
        configs = [get_decision_type(t) for t in order]
        for lower, higher in zip(configs, configs[1:]):
            assert lower.min_overall < higher.min_overall
            assert lower.min_domain < higher.min_domain

    def test_transitions_defined_for_every_state(self) -> None:
        assert set(VALID_TRANSITIONS) == set(StateId)
        for targets in VALID_TRANSITIONS.values():
            assert targets
            assert set(targets) <= set(StateId)

    def test_validate_constitution_passes(self) -> None:
        validate_constitution()


class TestLookups:
    def test_get_state_by_string(self) -> None:
        state = get_state("stable")
        assert state is not None
        assert state.label == "Capacidade Estável"

    def test_get_state_unknown(self) -> None:
        assert get_state("nonexistent") is None

    def test_get_decision_type(self) -> None:
        existential = get_decision_type("existential")
        assert (existential.min_overall, existential.min_domain) == (85, 70)
        assert existential.level == 1

    def test_unknown_decision_type_falls_back_to_tactical(self, caplog) -> None:
        with caplog.at_level("WARNING"):
            config = get_decision_type("galactic")
        assert config.id is DecisionTypeId.TACTICAL
        assert "galactic" in caplog.text

    def test_none_decision_type_falls_back_to_tactical(self) -> None:
        assert get_decision_type(None).id is DecisionTypeId.TACTICAL


class TestValidationFailures:
    def test_bad_domain_weights(self, monkeypatch) -> None:
        broken = (*DOMAINS[:-1], Domain(DomainId.ENERGETIC, "Energética", 0.50))
        monkeypatch.setattr(constitution, "DOMAINS", broken)
        with pytest.raises(ConstitutionError) as exc_info:
            validate_constitution()
        assert exc_info.value.invariant == "domain_weights_sum"

    def test_coverage_gap(self, monkeypatch) -> None:
        shrunk = CapacityState(StateId.ACTIVE_FAILURE, "Falha Estrutural Ativa", 9, "#E03131", 5, 15)
        monkeypatch.setattr(constitution, "STATES", (shrunk, *STATES[1:]))
        with pytest.raises(ConstitutionError) as exc_info:
            validate_constitution()
        assert exc_info.value.invariant == "state_coverage"
        assert "[0, 1, 2, 3, 4]" in str(exc_info.value)

    def test_decision_type_ordering(self, monkeypatch) -> None:
        swapped = (
            DECISION_TYPES[0],
            DECISION_TYPES[1],
            DecisionTypeConfig(DecisionTypeId.STRATEGIC, "Estratégica", 3, 30, 20),
            DECISION_TYPES[3],
        )
        monkeypatch.setattr(constitution, "DECISION_TYPES", swapped)
        with pytest.raises(ConstitutionError) as exc_info:
            validate_constitution()
        assert exc_info.value.invariant == "decision_type_ordering"

    def test_error_is_governance_error(self) -> None:
        err = ConstitutionError("x", "detail")
        assert isinstance(err, GovernanceError)
        assert "detail" in str(err)
