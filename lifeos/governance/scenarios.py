"""Scenario simulator — four fixed stress projections.

Every scenario applies its multiplier to the same base leader load and
systemic risk, so ordering by multiplier (0.7 < 1.0 < 1.4 < 1.8) carries
over to load and failure probability.  Cash is projected linearly (no
compounding) over months 0..12 inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lifeos.governance.constitution import SCENARIOS, ScenarioConfig, ScenarioId
from lifeos.governance.numeric import clamp, round_half_up, saturate

if TYPE_CHECKING:
    from lifeos.governance.inputs import FinancialInput
    from lifeos.governance.layers import (
        BusinessLayer,
        FinancialLayer,
        HumanLayer,
        RelationalLayer,
    )

__all__ = [
    "HORIZON_MONTHS",
    "NEVER_BREAKS",
    "CashPoint",
    "Scenario",
    "ScenarioBase",
    "project_scenario",
    "scenario_base",
    "simulate_scenarios",
]

HORIZON_MONTHS = 12

#: ``break_month`` when cash stays non-negative across the horizon.
NEVER_BREAKS = -1


@dataclass(slots=True, frozen=True)
class CashPoint:
    month: int
    cash: int


@dataclass(slots=True, frozen=True)
class ScenarioBase:
    """Multiplier-independent starting point shared by all scenarios."""

    leader_load: int
    systemic_risk: int
    monthly_cash_flow: float
    starting_cash: float
    complexity: int


@dataclass(slots=True, frozen=True)
class Scenario:
    """One projected scenario.

    Attributes:
        break_month: First month with negative cash, or ``NEVER_BREAKS``.
        months_to_tension: ``break_month`` when it is positive, otherwise
            ``max(1, round(12 / mult))``, a capacity-pressure estimate that
            does not depend on cash actually breaking.
        cash_projection: Exactly 13 points, months 0..12.
    """

    id: ScenarioId
    name: str
    color: str
    leader_load: int
    systemic_risk: int
    failure_probability: int
    months_to_tension: int
    complexity_added: int
    cash_projection: tuple[CashPoint, ...]
    break_month: int


def scenario_base(
    human: HumanLayer,
    business: BusinessLayer,
    financial: FinancialLayer,
    relational: RelationalLayer,
    financial_input: FinancialInput,
) -> ScenarioBase:
    return ScenarioBase(
        leader_load=clamp(100 - human.score),
        systemic_risk=clamp(
            business.complexity * 0.4
            + relational.conflict_risk * 0.3
            + (100 - financial.score) * 0.3
        ),
        monthly_cash_flow=saturate(financial_input.revenue - financial_input.fixed_costs),
        starting_cash=financial_input.cash,
        complexity=business.complexity,
    )


def project_scenario(base: ScenarioBase, config: ScenarioConfig, gap: int) -> Scenario:
    """Project *base* under one scenario's multipliers."""
    load = clamp(base.leader_load * config.mult + gap * 0.3)
    risk = clamp(base.systemic_risk * config.mult)
    failure_probability = clamp(min(95, risk * 0.6 + load * 0.4))
    monthly_flow = saturate(base.monthly_cash_flow * config.cash_mult)

    projection = tuple(
        CashPoint(month=m, cash=round_half_up(saturate(base.starting_cash + monthly_flow * m)))
        for m in range(HORIZON_MONTHS + 1)
    )
    break_month = next((p.month for p in projection if p.cash < 0), NEVER_BREAKS)
    months_to_tension = (
        break_month if break_month > 0 else max(1, round_half_up(HORIZON_MONTHS / config.mult))
    )

    return Scenario(
        id=config.id,
        name=config.name,
        color=config.color,
        leader_load=load,
        systemic_risk=risk,
        failure_probability=failure_probability,
        months_to_tension=months_to_tension,
        complexity_added=clamp(base.complexity * config.mult * 0.5),
        cash_projection=projection,
        break_month=break_month,
    )


def simulate_scenarios(
    human: HumanLayer,
    business: BusinessLayer,
    financial: FinancialLayer,
    relational: RelationalLayer,
    financial_input: FinancialInput,
    gap: int,
) -> tuple[Scenario, ...]:
    """Return the four scenarios in fixed order: optimistic, realistic,
    stress, human failure."""
    base = scenario_base(human, business, financial, relational, financial_input)
    return tuple(project_scenario(base, config, gap) for config in SCENARIOS)
