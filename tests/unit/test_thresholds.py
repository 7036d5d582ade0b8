"""Tests for lifeos.governance.thresholds — violations and the block decision.

Covers:
    violation rule     alerting AND below the type's min_domain
    block conditions   critical violation, state severity, domain average
    alert level        critical > attention > ok
    unknown type       falls back to tactical minimums
"""

from __future__ import annotations

import pytest

from lifeos.governance.classifier import state_for_score
from lifeos.governance.constitution import AlertLevel, DomainId, StateId, get_state
from lifeos.governance.domains import DomainScores
from lifeos.governance.thresholds import BLOCKING_SEVERITY, BlockReason, check_thresholds

STABLE = get_state(StateId.STABLE)
EXPANSION = get_state(StateId.CONTROLLED_EXPANSION)


def _uniform(score: int, **overrides: int) -> DomainScores:
    values = {d.value: score for d in DomainId}
    values.update(overrides)
    return DomainScores(**values)


class TestViolations:
    def test_healthy_domains_have_no_violations(self) -> None:
        result = check_thresholds(_uniform(80), "existential", EXPANSION)
        assert result.violations == ()
        assert result.alert_level is AlertLevel.OK
        assert not result.blocked

    def test_alerting_but_above_minimum_is_not_a_violation(self) -> None:
        # 45 is preventive, but tactical only needs 25 per domain
        result = check_thresholds(_uniform(80, emotional=45), "tactical", EXPANSION)
        assert result.violations == ()

    def test_ok_band_never_violates(self) -> None:
        # 60 < existential min_domain 70, but 60 does not alert
        result = check_thresholds(_uniform(90, financial=60), "existential", EXPANSION)
        assert result.violations == ()

    def test_attention_violation(self) -> None:
        result = check_thresholds(_uniform(80, decisional=30), "strategic", EXPANSION)
        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.domain is DomainId.DECISIONAL
        assert violation.label == "Decisória"
        assert violation.score == 30
        assert violation.required == 40
        assert violation.level is AlertLevel.ATTENTION
        assert result.alert_level is AlertLevel.ATTENTION
        assert not result.blocked

    def test_violations_in_domain_order(self) -> None:
        result = check_thresholds(
            _uniform(80, energetic=10, financial=20), "tactical", EXPANSION
        )
        assert [v.domain for v in result.violations] == [DomainId.FINANCIAL, DomainId.ENERGETIC]


class TestBlocking:
    def test_critical_violation_blocks(self) -> None:
        result = check_thresholds(_uniform(90, operational=10), "tactical", EXPANSION)
        assert result.blocked
        assert result.alert_level is AlertLevel.CRITICAL
        assert result.block_reasons == (BlockReason.CRITICAL_VIOLATION,)

    @pytest.mark.parametrize(
        "state_id",
        [StateId.UNDER_TENSION, StateId.FAILURE_RISK, StateId.INSUFFICIENT, StateId.ACTIVE_FAILURE],
    )
    def test_severe_state_alone_blocks(self, state_id: StateId) -> None:
        state = get_state(state_id)
        assert state.severity >= BLOCKING_SEVERITY
        result = check_thresholds(_uniform(100), "tactical", state)
        assert result.blocked
        assert result.violations == ()
        assert result.block_reasons == (BlockReason.STATE_SEVERITY,)

    @pytest.mark.parametrize(
        "state_id",
        [StateId.RECOVERY, StateId.BUILDING, StateId.STABLE, StateId.CONTROLLED_EXPANSION],
    )
    def test_mild_state_does_not_block(self, state_id: StateId) -> None:
        result = check_thresholds(_uniform(100), "existential", get_state(state_id))
        assert not result.blocked

    def test_average_below_minimum_blocks(self) -> None:
        # average 80 < existential 85 with no alerting domain
        result = check_thresholds(_uniform(80), "existential", STABLE)
        assert result.blocked
        assert result.violations == ()
        assert result.block_reasons == (BlockReason.OVERALL_BELOW_MINIMUM,)

    def test_average_exactly_at_minimum_passes(self) -> None:
        result = check_thresholds(_uniform(85), "existential", STABLE)
        assert not result.blocked

    def test_all_reasons_reported(self) -> None:
        result = check_thresholds(_uniform(5), "existential", state_for_score(5))
        assert result.block_reasons == (
            BlockReason.CRITICAL_VIOLATION,
            BlockReason.STATE_SEVERITY,
            BlockReason.OVERALL_BELOW_MINIMUM,
        )
        assert len(result.violations) == 6


class TestDecisionTypes:
    def test_unknown_type_uses_tactical(self) -> None:
        unknown = check_thresholds(_uniform(80, emotional=30), "galactic", STABLE)
        tactical = check_thresholds(_uniform(80, emotional=30), "tactical", STABLE)
        assert unknown == tactical
        assert not unknown.blocked

    def test_same_scores_block_stricter_types_only(self) -> None:
        scores = _uniform(60)
        assert not check_thresholds(scores, "tactical", STABLE).blocked
        assert not check_thresholds(scores, "strategic", STABLE).blocked
        assert check_thresholds(scores, "structural", STABLE).blocked
        assert check_thresholds(scores, "existential", STABLE).blocked
