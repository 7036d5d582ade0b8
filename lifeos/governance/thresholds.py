"""Threshold and block resolver.

Compares domain scores against the minimum the decision type demands.

A domain is a *violation* only if it alerts (score <= 55) AND sits below
the decision type's ``min_domain``.  The decision is blocked when ANY of
three independent conditions holds:

1. a critical violation exists;
2. the classified state has severity >= 5; this alone blocks, whatever
   the domain scores are;
3. the unweighted domain average is below the type's ``min_overall``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from lifeos.governance.constitution import DOMAINS, AlertLevel, DomainId, get_decision_type
from lifeos.governance.domains import alert_level_for

if TYPE_CHECKING:
    from lifeos.governance.constitution import CapacityState
    from lifeos.governance.domains import DomainScores

log = logging.getLogger(__name__)

__all__ = [
    "BLOCKING_SEVERITY",
    "BlockReason",
    "ThresholdResult",
    "Violation",
    "check_thresholds",
]

#: States at or above this severity block every decision type.
BLOCKING_SEVERITY = 5


class BlockReason(StrEnum):
    """Which sufficient condition caused a block."""

    CRITICAL_VIOLATION = "critical_violation"
    STATE_SEVERITY = "state_severity"
    OVERALL_BELOW_MINIMUM = "overall_below_minimum"


@dataclass(slots=True, frozen=True)
class Violation:
    """A domain that both alerts and misses the decision type's minimum."""

    domain: DomainId
    label: str
    score: int
    required: int
    level: AlertLevel


@dataclass(slots=True, frozen=True)
class ThresholdResult:
    """Outcome of ``check_thresholds``.

    Attributes:
        blocked: True if any block reason applies.
        violations: Violations in ``DOMAINS`` order.
        alert_level: ``critical`` if any violation is critical, else
            ``attention`` if any violation exists, else ``ok``.
        block_reasons: Every condition that fired, in evaluation order.
    """

    blocked: bool
    violations: tuple[Violation, ...]
    alert_level: AlertLevel
    block_reasons: tuple[BlockReason, ...] = ()


def check_thresholds(
    domain_scores: DomainScores,
    decision_type_id: str,
    state: CapacityState,
) -> ThresholdResult:
    """Resolve violations and the block decision for one evaluation."""
    type_config = get_decision_type(decision_type_id)

    violations: list[Violation] = []
    for domain in DOMAINS:
        score = domain_scores[domain.id]
        level = alert_level_for(score)
        if level is not AlertLevel.OK and score < type_config.min_domain:
            violations.append(
                Violation(
                    domain=domain.id,
                    label=domain.label,
                    score=score,
                    required=type_config.min_domain,
                    level=level,
                )
            )

    has_critical = any(v.level is AlertLevel.CRITICAL for v in violations)

    reasons: list[BlockReason] = []
    if has_critical:
        reasons.append(BlockReason.CRITICAL_VIOLATION)
    if state.severity >= BLOCKING_SEVERITY:
        reasons.append(BlockReason.STATE_SEVERITY)
    if domain_scores.average < type_config.min_overall:
        reasons.append(BlockReason.OVERALL_BELOW_MINIMUM)

    if has_critical:
        alert_level = AlertLevel.CRITICAL
    elif violations:
        alert_level = AlertLevel.ATTENTION
    else:
        alert_level = AlertLevel.OK

    if reasons:
        log.debug(
            "Decision type %s blocked: %s",
            type_config.id.value,
            ", ".join(r.value for r in reasons),
        )

    return ThresholdResult(
        blocked=bool(reasons),
        violations=tuple(violations),
        alert_level=alert_level,
        block_reasons=tuple(reasons),
    )
