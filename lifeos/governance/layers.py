"""The four layer analyzers: human, business, financial, relational.

Each analyzer is a pure function of its own input section and has no data
dependency on the others, so they may be evaluated in any order.  Scores
and secondary metrics are clamped to [0, 100]; the financial leverage and
runway ratios are unbounded and only rounded.
"""

from __future__ import annotations

from dataclasses import dataclass

from lifeos.governance.inputs import (
    Assessment,
    BusinessInput,
    FinancialInput,
    RelationalInput,
)
from lifeos.governance.numeric import clamp, round_to, saturate

__all__ = [
    "RUNWAY_SENTINEL",
    "BusinessLayer",
    "FinancialLayer",
    "HumanLayer",
    "RelationalLayer",
    "analyze_business_layer",
    "analyze_financial_layer",
    "analyze_human_layer",
    "analyze_relational_layer",
]

#: Runway reported when there are no fixed costs to burn through.
RUNWAY_SENTINEL = 99.0


@dataclass(slots=True, frozen=True)
class HumanLayer:
    score: int
    pressure_capacity: int
    impulsivity_risk: int


@dataclass(slots=True, frozen=True)
class BusinessLayer:
    score: int
    margin: int
    complexity: int


@dataclass(slots=True, frozen=True)
class FinancialLayer:
    """Financial layer output.

    Attributes:
        score: Blend of leverage, runway, cash and margin sub-scores.
        leverage: Current debt over annual revenue (2 decimals).
        intended_leverage: Debt plus intended new debt over annual revenue.
        runway: Months of fixed costs covered by cash (1 decimal), or
            ``RUNWAY_SENTINEL`` when fixed costs are not positive.
        tension_probability: Likelihood of financial tension, 5–95.
    """

    score: int
    leverage: float
    intended_leverage: float
    runway: float
    tension_probability: int


@dataclass(slots=True, frozen=True)
class RelationalLayer:
    score: int
    conflict_risk: int


def analyze_human_layer(assessment: Assessment, state_score: int) -> HumanLayer:
    """Human layer.

    The layer score is the classifier's capacity score, passed in rather
    than recomputed, so both always agree.
    """
    a = assessment
    pressure_capacity = clamp(a.confidence * 0.3 + (100 - a.stress) * 0.4 + a.energy * 0.3)
    impulsivity_risk = clamp(a.stress * 0.4 + (100 - a.clarity) * 0.3 + a.load * 0.3)
    return HumanLayer(
        score=state_score,
        pressure_capacity=pressure_capacity,
        impulsivity_risk=impulsivity_risk,
    )


def analyze_business_layer(business: BusinessInput) -> BusinessLayer:
    b = business
    margin = clamp((b.revenue - b.costs) / b.revenue * 100) if b.revenue > 0 else 0
    independence = 100 - b.founder_dependence
    # every front beyond the first costs 12 points
    front_load = clamp(100 - (b.active_fronts - 1) * 12)
    score = clamp(
        margin * 0.25
        + independence * 0.20
        + front_load * 0.15
        + b.process_maturity * 0.20
        + b.delegation_capacity * 0.20
    )
    complexity = clamp(
        b.active_fronts * 10 + b.founder_dependence * 0.3 + (100 - b.process_maturity) * 0.3
    )
    return BusinessLayer(score=score, margin=margin, complexity=complexity)


def analyze_financial_layer(financial: FinancialInput) -> FinancialLayer:
    f = financial
    annual_revenue = max(saturate(f.revenue * 12), 1)
    leverage = f.debt / annual_revenue
    intended_leverage = saturate(f.debt + f.intended_leverage) / annual_revenue
    runway = saturate(f.cash / f.fixed_costs) if f.fixed_costs > 0 else RUNWAY_SENTINEL

    leverage_score = clamp(100 - leverage * 50)
    runway_score = clamp(min(100, runway * 15))
    cash_score = clamp(f.cash / f.revenue * 30) if f.revenue > 0 else 0
    margin_score = clamp((f.revenue - f.fixed_costs) / f.revenue * 100) if f.revenue > 0 else 0

    score = clamp(
        leverage_score * 0.30 + runway_score * 0.25 + cash_score * 0.20 + margin_score * 0.25
    )
    tension_probability = clamp(min(95, max(5, intended_leverage / 1.4 * 40)))

    return FinancialLayer(
        score=score,
        leverage=round_to(leverage, 2),
        intended_leverage=round_to(intended_leverage, 2),
        runway=RUNWAY_SENTINEL if f.fixed_costs <= 0 else round_to(runway, 1),
        tension_probability=tension_probability,
    )


def analyze_relational_layer(relational: RelationalInput) -> RelationalLayer:
    r = relational
    conflict_penalty = r.active_conflicts * 8
    dependency_penalty = r.critical_dependencies * 5
    score = clamp(
        r.partner_alignment * 0.30
        + r.team_stability * 0.30
        + r.ecosystem_health * 0.20
        - conflict_penalty
        - dependency_penalty
        + 20
    )
    conflict_risk = clamp(r.active_conflicts * 12 + r.critical_dependencies * 8)
    return RelationalLayer(score=score, conflict_risk=conflict_risk)
