"""Governance pipeline — the single ``govern()`` entry point.

Fixed sequential contract:

    1. classify the assessment into a capacity state
    2. advisory transition check against the caller's previous state
    3. human / business / financial / relational layer analyses
    4. aggregate the six domain scores
    5. resolve thresholds (violations + block decision)
    6. overall score = mean of the four LAYER scores, and the gap
    7. simulate the four scenarios using the gap
    8. verdict, then a readiness plan iff blocked

Two aggregates coexist on purpose: ``overall_score`` (mean of the four
layer scores) drives the gap and the plan, while the six-domain average
inside ``check_thresholds`` drives blocking.  They are not interchangeable.

Every stage is a pure function.  The only non-deterministic fields of a
result are ``pipeline_id`` and ``timestamp``.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum, StrEnum
from typing import Any

from lifeos.governance.classifier import check_transition, classify_state
from lifeos.governance.constitution import (
    CONSTITUTION_VERSION,
    AlertLevel,
    CapacityState,
    DecisionTypeConfig,
    get_decision_type,
)
from lifeos.governance.domains import (
    DomainDetail,
    DomainScores,
    compute_domain_scores,
    domain_details,
)
from lifeos.governance.inputs import (
    Assessment,
    BusinessInput,
    Decision,
    FinancialInput,
    GovernanceRequest,
    RelationalInput,
    load_section,
)
from lifeos.governance.layers import (
    BusinessLayer,
    FinancialLayer,
    HumanLayer,
    RelationalLayer,
    analyze_business_layer,
    analyze_financial_layer,
    analyze_human_layer,
    analyze_relational_layer,
)
from lifeos.governance.numeric import clamp
from lifeos.governance.readiness import ReadinessPlan, generate_readiness_plan
from lifeos.governance.scenarios import Scenario, simulate_scenarios
from lifeos.governance.thresholds import BlockReason, Violation, check_thresholds

log = logging.getLogger(__name__)

__all__ = [
    "GovernanceResult",
    "LayerResults",
    "Verdict",
    "govern",
    "govern_request",
    "to_plain",
]


class Verdict(StrEnum):
    """Binary verdict: approve now, or defer."""

    APPROVE = "SIM"
    DEFER = "NÃO AGORA"


@dataclasses.dataclass(slots=True, frozen=True)
class LayerResults:
    human: HumanLayer
    business: BusinessLayer
    financial: FinancialLayer
    relational: RelationalLayer

    @property
    def mean_score(self) -> int:
        """Overall score: mean of the four layer scores, in [0, 100]."""
        return clamp(
            (self.human.score + self.business.score + self.financial.score + self.relational.score)
            / 4
        )


@dataclasses.dataclass(slots=True, frozen=True)
class GovernanceResult:
    """The engine's single output aggregate.

    Constructed once per ``govern()`` call and never mutated afterwards.
    ``readiness_plan`` is present if and only if ``blocked`` is True;
    ``transition_warning`` only when a previous state was supplied and the
    jump is off the transition map.

    Attributes:
        pipeline_id: Opaque unique token, fresh per call.
        timestamp: ISO-8601 UTC time of the evaluation.
        constitution_version: Version of the static tables used.
        verdict: ``"SIM"`` or ``"NÃO AGORA"``.
        overall_score: Mean of the four layer scores.
        gap: ``max(0, min_overall - overall_score)``.
        blocked: Output of the threshold resolver.
        state: Classified capacity state.
        state_score: Classifier capacity score.
        state_confidence: Classification confidence, 0.5–1.0.
        layers: The four layer sub-results.
        domain_scores: The six domain scores.
        domain_details: Per-domain label, score and alert level.
        violations: Domains that alert below the type's ``min_domain``.
        alert_level: Summary alert level of the violations.
        block_reasons: Every sufficient block condition that fired.
        scenarios: The four projected scenarios, in fixed order.
        readiness_plan: Remediation plan, only when blocked.
        decision_type: Echo of the resolved decision-type configuration.
        transition_warning: Advisory message for an off-map transition.
    """

    pipeline_id: str
    timestamp: str
    constitution_version: str
    verdict: Verdict
    overall_score: int
    gap: int
    blocked: bool
    state: CapacityState
    state_score: int
    state_confidence: float
    layers: LayerResults
    domain_scores: DomainScores
    domain_details: tuple[DomainDetail, ...]
    violations: tuple[Violation, ...]
    alert_level: AlertLevel
    block_reasons: tuple[BlockReason, ...]
    scenarios: tuple[Scenario, ...]
    readiness_plan: ReadinessPlan | None
    decision_type: DecisionTypeConfig
    transition_warning: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """JSON/YAML-safe plain representation (enums become values)."""
        return to_plain(self)


def to_plain(value: Any) -> Any:
    """Recursively convert result records into plain dicts, lists and scalars."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(to_plain(k)): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def govern(
    assessment: Assessment | Mapping[str, Any],
    business: BusinessInput | Mapping[str, Any],
    financial: FinancialInput | Mapping[str, Any],
    relational: RelationalInput | Mapping[str, Any],
    decision: Decision | Mapping[str, Any],
    previous_state_id: str | None = None,
    *,
    pipeline_id: str | None = None,
    now: datetime | None = None,
) -> GovernanceResult:
    """Run the full governance pipeline for one decision.

    Args:
        assessment: Capacity assessment (model or mapping).
        business: Business metrics (model or mapping).
        financial: Financial metrics (model or mapping).
        relational: Relational metrics (model or mapping).
        decision: The decision under evaluation (model or mapping).
        previous_state_id: Caller's last known state, for the advisory
            transition check.
        pipeline_id: Override the generated id (replay and tests).
        now: Override the evaluation time (replay and tests).

    Returns:
        A fresh, immutable ``GovernanceResult``.

    Raises:
        InputError: If a section is not a mapping or model at all.
    """
    assessment = load_section("assessment", Assessment, assessment)
    business = load_section("business", BusinessInput, business)
    financial = load_section("financial", FinancialInput, financial)
    relational = load_section("relational", RelationalInput, relational)
    decision = load_section("decision", Decision, decision)

    pipeline_id = pipeline_id or str(uuid.uuid4())
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    log.debug("Pipeline %s: governing %s decision", pipeline_id, decision.type or "?")

    # Step 1: state classification
    classification = classify_state(assessment)
    state = classification.state

    # Step 2: advisory transition check, never alters the verdict
    transition_warning: str | None = None
    if previous_state_id:
        transition_warning = check_transition(previous_state_id, state.id).warning

    # Step 3: layer analyses (independent of one another)
    layers = LayerResults(
        human=analyze_human_layer(assessment, classification.score),
        business=analyze_business_layer(business),
        financial=analyze_financial_layer(financial),
        relational=analyze_relational_layer(relational),
    )

    # Step 4: domain scores
    domain_scores = compute_domain_scores(
        layers.human, layers.business, layers.financial, layers.relational, assessment
    )

    # Step 5: thresholds
    type_config = get_decision_type(decision.type)
    thresholds = check_thresholds(domain_scores, type_config.id, state)

    # Step 6: overall score and gap
    overall_score = layers.mean_score
    gap = max(0, type_config.min_overall - overall_score)

    # Step 7: scenarios
    scenarios = simulate_scenarios(
        layers.human, layers.business, layers.financial, layers.relational, financial, gap
    )

    # Step 8: verdict and conditional readiness plan
    verdict = Verdict.DEFER if thresholds.blocked else Verdict.APPROVE
    readiness_plan = (
        generate_readiness_plan(domain_scores, type_config.id, overall_score, gap)
        if thresholds.blocked
        else None
    )

    log.info(
        "Pipeline %s: verdict=%s state=%s overall=%d gap=%d violations=%d",
        pipeline_id,
        verdict.value,
        state.id.value,
        overall_score,
        gap,
        len(thresholds.violations),
    )

    return GovernanceResult(
        pipeline_id=pipeline_id,
        timestamp=timestamp,
        constitution_version=CONSTITUTION_VERSION,
        verdict=verdict,
        overall_score=overall_score,
        gap=gap,
        blocked=thresholds.blocked,
        state=state,
        state_score=classification.score,
        state_confidence=classification.confidence,
        layers=layers,
        domain_scores=domain_scores,
        domain_details=domain_details(domain_scores),
        violations=thresholds.violations,
        alert_level=thresholds.alert_level,
        block_reasons=thresholds.block_reasons,
        scenarios=scenarios,
        readiness_plan=readiness_plan,
        decision_type=type_config,
        transition_warning=transition_warning,
    )


def govern_request(
    request: GovernanceRequest | Mapping[str, Any],
    *,
    pipeline_id: str | None = None,
    now: datetime | None = None,
) -> GovernanceResult:
    """Run ``govern()`` on a bundled request document."""
    request = load_section("request", GovernanceRequest, request)
    return govern(
        request.assessment,
        request.business,
        request.financial,
        request.relational,
        request.decision,
        request.previous_state_id,
        pipeline_id=pipeline_id,
        now=now,
    )
