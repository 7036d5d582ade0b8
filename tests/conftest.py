"""Shared test fixtures for lifeos."""

from __future__ import annotations

import os

import pytest

from lifeos.governance import (
    Assessment,
    BusinessInput,
    Decision,
    FinancialInput,
    GovernanceRequest,
    RelationalInput,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep LIFEOS_* settings from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("LIFEOS_"):
            monkeypatch.delenv(key)


# ── Assessments ──────────────────────────────────────


@pytest.fixture
def strong_assessment() -> Assessment:
    return Assessment(energy=80, clarity=85, stress=20, confidence=80, load=20)


@pytest.fixture
def weak_assessment() -> Assessment:
    return Assessment(energy=15, clarity=10, stress=90, confidence=10, load=95)


@pytest.fixture
def medium_assessment() -> Assessment:
    return Assessment(energy=50, clarity=55, stress=50, confidence=50, load=50)


# ── Domain inputs ────────────────────────────────────


@pytest.fixture
def strong_business() -> BusinessInput:
    return BusinessInput(
        revenue=50000,
        costs=20000,
        founder_dependence=20,
        active_fronts=2,
        process_maturity=80,
        delegation_capacity=75,
    )


@pytest.fixture
def weak_business() -> BusinessInput:
    return BusinessInput(
        revenue=5000,
        costs=8000,
        founder_dependence=90,
        active_fronts=8,
        process_maturity=10,
        delegation_capacity=10,
    )


@pytest.fixture
def strong_financial() -> FinancialInput:
    return FinancialInput(
        revenue=50000, cash=200000, debt=10000, fixed_costs=15000, intended_leverage=0
    )


@pytest.fixture
def weak_financial() -> FinancialInput:
    return FinancialInput(
        revenue=5000, cash=2000, debt=100000, fixed_costs=8000, intended_leverage=50000
    )


@pytest.fixture
def strong_relational() -> RelationalInput:
    return RelationalInput(
        active_conflicts=0,
        critical_dependencies=1,
        partner_alignment=85,
        team_stability=90,
        ecosystem_health=80,
    )


@pytest.fixture
def weak_relational() -> RelationalInput:
    return RelationalInput(
        active_conflicts=8,
        critical_dependencies=7,
        partner_alignment=15,
        team_stability=10,
        ecosystem_health=10,
    )


# ── Decisions ────────────────────────────────────────


@pytest.fixture
def tactical_decision() -> Decision:
    return Decision(
        description="Comprar novo software de gestão",
        type="tactical",
        impact="low",
        reversibility="easy",
        urgency="low",
        resources_required="minimal",
    )


@pytest.fixture
def strategic_decision() -> Decision:
    return Decision(
        description="Expandir para novo mercado",
        type="strategic",
        impact="high",
        reversibility="difficult",
        urgency="moderate",
        resources_required="significant",
    )


@pytest.fixture
def existential_decision() -> Decision:
    return Decision(
        description="Pivotar modelo de negócio",
        type="existential",
        impact="transformational",
        reversibility="irreversible",
        urgency="high",
        resources_required="massive",
    )


# ── Bundles ──────────────────────────────────────────


@pytest.fixture
def strong_inputs(strong_assessment, strong_business, strong_financial, strong_relational):
    """(assessment, business, financial, relational) for a healthy founder."""
    return strong_assessment, strong_business, strong_financial, strong_relational


@pytest.fixture
def weak_inputs(weak_assessment, weak_business, weak_financial, weak_relational):
    """(assessment, business, financial, relational) for a founder in crisis."""
    return weak_assessment, weak_business, weak_financial, weak_relational


@pytest.fixture
def strong_request(strong_inputs, tactical_decision) -> GovernanceRequest:
    assessment, business, financial, relational = strong_inputs
    return GovernanceRequest(
        assessment=assessment,
        business=business,
        financial=financial,
        relational=relational,
        decision=tactical_decision,
    )


@pytest.fixture
def weak_request(weak_inputs, existential_decision) -> GovernanceRequest:
    assessment, business, financial, relational = weak_inputs
    return GovernanceRequest(
        assessment=assessment,
        business=business,
        financial=financial,
        relational=relational,
        decision=existential_decision,
    )
