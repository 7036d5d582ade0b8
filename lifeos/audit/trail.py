"""Audit trail — one append-only entry per pipeline stage.

``build_audit_trail`` is pure: it turns the inputs and the result of one
``govern()`` call into an ordered tuple of ``AuditEntry`` records.  Where
the entries go is the sink's business (see :mod:`lifeos.audit.sinks`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from lifeos.governance.constitution import CONSTITUTION_VERSION
from lifeos.governance.pipeline import to_plain

if TYPE_CHECKING:
    from lifeos.governance.inputs import GovernanceRequest
    from lifeos.governance.pipeline import GovernanceResult

__all__ = [
    "AuditEntry",
    "AuditEventType",
    "build_audit_trail",
]


class AuditEventType(StrEnum):
    """Pipeline stages recorded in the audit trail, in pipeline order."""

    INTAKE = "intake"
    STATE_CLASSIFICATION = "state_classification"
    LAYER_ANALYSIS = "layer_analysis"
    THRESHOLD_CHECK = "threshold_check"
    SCENARIO_SIMULATION = "scenario_simulation"
    VERDICT = "verdict"
    READINESS_PLAN = "readiness_plan"


@dataclass(slots=True, frozen=True)
class AuditEntry:
    """A single audit record.

    Attributes:
        pipeline_id: Id of the evaluation this entry belongs to.
        user_id: Who requested the evaluation.
        event_type: Pipeline stage.
        event_data: JSON-safe payload for the stage.
        constitution_version: Version of the tables the result was scored on.
    """

    pipeline_id: str
    user_id: str
    event_type: AuditEventType
    event_data: dict[str, Any] = field(default_factory=dict)
    constitution_version: str = CONSTITUTION_VERSION

    def as_dict(self) -> dict[str, Any]:
        return {
            "pipeline_id": self.pipeline_id,
            "user_id": self.user_id,
            "event_type": self.event_type.value,
            "event_data": self.event_data,
            "constitution_version": self.constitution_version,
        }


def build_audit_trail(
    user_id: str,
    request: GovernanceRequest,
    result: GovernanceResult,
) -> tuple[AuditEntry, ...]:
    """Describe one evaluation as audit entries.

    Six entries always; a seventh ``readiness_plan`` entry when the
    result carries a plan.  Scenario entries leave out the cash
    projection and the plan entry reports only the number of actions.
    """
    version = result.constitution_version

    def entry(event_type: AuditEventType, data: dict[str, Any]) -> AuditEntry:
        return AuditEntry(
            pipeline_id=result.pipeline_id,
            user_id=user_id,
            event_type=event_type,
            event_data=data,
            constitution_version=version,
        )

    entries = [
        entry(AuditEventType.INTAKE, request.model_dump(mode="json")),
        entry(
            AuditEventType.STATE_CLASSIFICATION,
            {
                "state_id": result.state.id.value,
                "state_label": result.state.label,
                "severity": result.state.severity,
                "score": result.state_score,
                "confidence": result.state_confidence,
                "transition_warning": result.transition_warning,
            },
        ),
        entry(AuditEventType.LAYER_ANALYSIS, to_plain(result.layers)),
        entry(
            AuditEventType.THRESHOLD_CHECK,
            {
                "domain_scores": result.domain_scores.as_dict(),
                "violations": to_plain(result.violations),
                "blocked": result.blocked,
                "block_reasons": to_plain(result.block_reasons),
                "decision_type": to_plain(result.decision_type),
                "gap": result.gap,
            },
        ),
        entry(
            AuditEventType.SCENARIO_SIMULATION,
            {
                "scenarios": [
                    {
                        "id": s.id.value,
                        "name": s.name,
                        "leader_load": s.leader_load,
                        "systemic_risk": s.systemic_risk,
                        "failure_probability": s.failure_probability,
                        "months_to_tension": s.months_to_tension,
                        "break_month": s.break_month,
                    }
                    for s in result.scenarios
                ]
            },
        ),
        entry(
            AuditEventType.VERDICT,
            {
                "verdict": result.verdict.value,
                "overall_score": result.overall_score,
                "blocked": result.blocked,
            },
        ),
    ]

    plan = result.readiness_plan
    if plan is not None:
        entries.append(
            entry(
                AuditEventType.READINESS_PLAN,
                {
                    "structural_reason": plan.structural_reason,
                    "primary_bottleneck": to_plain(plan.primary_bottleneck),
                    "secondary_bottleneck": to_plain(plan.secondary_bottleneck),
                    "actions_count": len(plan.actions),
                    "timeline": plan.timeline,
                },
            )
        )

    return tuple(entries)
