"""Deterministic decision-governance engine.

Public API:
    - govern                 — full pipeline, returns a GovernanceResult
    - govern_request         — same, for a bundled GovernanceRequest
    - classify_state         — standalone capacity-state check
    - check_transition       — advisory state-transition check
    - check_thresholds       — violations and block decision
    - simulate_scenarios     — four stress projections
    - generate_readiness_plan — remediation for blocked decisions
    - STATES, DOMAINS, DECISION_TYPES, VALID_TRANSITIONS, THRESHOLDS,
      SCENARIOS, CONSTITUTION_VERSION — read-only constitution tables
    - GovernanceError        — base exception for blanket catch
"""

from __future__ import annotations

from lifeos.governance.classifier import (
    StateClassification,
    TransitionCheck,
    check_transition,
    classify_state,
    reachable_from,
    state_for_score,
)
from lifeos.governance.constitution import (
    CLASSIFIER_WEIGHTS,
    CONSTITUTION_VERSION,
    DECISION_TYPES,
    DOMAINS,
    SCENARIOS,
    STATES,
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
from lifeos.governance.domains import DomainDetail, DomainScores, compute_domain_scores
from lifeos.governance.exceptions import ConstitutionError, GovernanceError, InputError
from lifeos.governance.inputs import (
    Assessment,
    BusinessInput,
    Decision,
    FinancialInput,
    GovernanceRequest,
    RelationalInput,
)
from lifeos.governance.layers import (
    analyze_business_layer,
    analyze_financial_layer,
    analyze_human_layer,
    analyze_relational_layer,
)
from lifeos.governance.pipeline import (
    GovernanceResult,
    LayerResults,
    Verdict,
    govern,
    govern_request,
)
from lifeos.governance.readiness import ReadinessPlan, generate_readiness_plan
from lifeos.governance.scenarios import Scenario, simulate_scenarios
from lifeos.governance.thresholds import (
    BlockReason,
    ThresholdResult,
    Violation,
    check_thresholds,
)

__all__ = [
    "CLASSIFIER_WEIGHTS",
    "CONSTITUTION_VERSION",
    "DECISION_TYPES",
    "DOMAINS",
    "SCENARIOS",
    "STATES",
    "THRESHOLDS",
    "VALID_TRANSITIONS",
    "AlertLevel",
    "Assessment",
    "BlockReason",
    "BusinessInput",
    "CapacityState",
    "ConstitutionError",
    "Decision",
    "DecisionTypeConfig",
    "DecisionTypeId",
    "Domain",
    "DomainDetail",
    "DomainId",
    "DomainScores",
    "FinancialInput",
    "GovernanceError",
    "GovernanceRequest",
    "GovernanceResult",
    "InputError",
    "LayerResults",
    "ReadinessPlan",
    "RelationalInput",
    "Scenario",
    "ScenarioId",
    "StateClassification",
    "StateId",
    "ThresholdResult",
    "TransitionCheck",
    "Verdict",
    "Violation",
    "analyze_business_layer",
    "analyze_financial_layer",
    "analyze_human_layer",
    "analyze_relational_layer",
    "check_thresholds",
    "check_transition",
    "classify_state",
    "compute_domain_scores",
    "generate_readiness_plan",
    "get_decision_type",
    "get_state",
    "govern",
    "govern_request",
    "reachable_from",
    "simulate_scenarios",
    "state_for_score",
    "validate_constitution",
]
