"""Domain score aggregation.

A pure remap of layer outputs plus the raw assessment into the six named
domains used by the threshold resolver.  Financial, operational and
relational come straight from their layers; emotional, decisional and
energetic are recomputed from the assessment, not from the human layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lifeos.governance.constitution import DOMAINS, THRESHOLDS, AlertLevel, DomainId
from lifeos.governance.numeric import clamp

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lifeos.governance.inputs import Assessment
    from lifeos.governance.layers import (
        BusinessLayer,
        FinancialLayer,
        HumanLayer,
        RelationalLayer,
    )

__all__ = [
    "DomainDetail",
    "DomainScores",
    "alert_level_for",
    "compute_domain_scores",
    "domain_details",
]


@dataclass(slots=True, frozen=True)
class DomainScores:
    """The six domain scores, each in [0, 100]."""

    financial: int
    emotional: int
    decisional: int
    operational: int
    relational: int
    energetic: int

    def __getitem__(self, domain_id: str) -> int:
        return getattr(self, DomainId(domain_id).value)

    def items(self) -> Iterator[tuple[DomainId, int]]:
        """Yield ``(domain_id, score)`` pairs in ``DOMAINS`` order."""
        for domain in DOMAINS:
            yield domain.id, self[domain.id]

    def as_dict(self) -> dict[str, int]:
        return {domain_id.value: score for domain_id, score in self.items()}

    @property
    def average(self) -> float:
        """Unweighted mean of the six scores (the blocking aggregate)."""
        return sum(score for _, score in self.items()) / len(DOMAINS)


@dataclass(slots=True, frozen=True)
class DomainDetail:
    id: DomainId
    label: str
    score: int
    alert_level: AlertLevel


def compute_domain_scores(
    human: HumanLayer,
    business: BusinessLayer,
    financial: FinancialLayer,
    relational: RelationalLayer,
    assessment: Assessment,
) -> DomainScores:
    """Recombine the layers and the raw assessment into domain scores.

    *human* is accepted so every stage sees the same inputs, but no domain
    reads it: the assessment-derived domains use their own blends.
    """
    a = assessment
    return DomainScores(
        financial=clamp(financial.score),
        emotional=clamp((100 - a.stress) * 0.5 + a.confidence * 0.3 + a.energy * 0.2),
        decisional=clamp(a.clarity * 0.4 + a.confidence * 0.3 + (100 - a.load) * 0.3),
        operational=clamp(business.score),
        relational=clamp(relational.score),
        energetic=clamp(a.energy * 0.6 + (100 - a.load) * 0.4),
    )


def alert_level_for(score: int) -> AlertLevel:
    """Static alert band of a domain score, independent of decision type."""
    if score <= THRESHOLDS[AlertLevel.CRITICAL][1]:
        return AlertLevel.CRITICAL
    if score <= THRESHOLDS[AlertLevel.ATTENTION][1]:
        return AlertLevel.ATTENTION
    if score <= THRESHOLDS[AlertLevel.PREVENTIVE][1]:
        return AlertLevel.PREVENTIVE
    return AlertLevel.OK


def domain_details(scores: DomainScores) -> tuple[DomainDetail, ...]:
    """Per-domain label, score and alert level, in ``DOMAINS`` order."""
    return tuple(
        DomainDetail(
            id=domain.id,
            label=domain.label,
            score=scores[domain.id],
            alert_level=alert_level_for(scores[domain.id]),
        )
        for domain in DOMAINS
    )
