"""Constitution — the immutable configuration tables of the engine.

Every table here is process-wide constant data, built once at import and
validated once by ``validate_constitution()``.  Nothing in the engine
mutates them; callers rendering the tables or stamping audit records read
them directly.

This module exposes:

- ``CONSTITUTION_VERSION`` — version string stamped on every result.
- ``STATES``               — the eight capacity states (overlapping bands).
- ``VALID_TRANSITIONS``    — advisory one-cycle adjacency map between states.
- ``DECISION_TYPES``       — minimum scores required per decision type.
- ``DOMAINS``              — the six weighted evaluation domains.
- ``THRESHOLDS``           — static alert cutoffs per domain score.
- ``CLASSIFIER_WEIGHTS``   — assessment weights used by the state classifier.
- ``SCENARIOS``            — the four stress-scenario multipliers.
- ``validate_constitution`` — invariant check, raises ``ConstitutionError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from lifeos.governance.exceptions import ConstitutionError

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

__all__ = [
    "CLASSIFIER_WEIGHTS",
    "CONSTITUTION_VERSION",
    "DECISION_TYPES",
    "DEFAULT_DECISION_TYPE",
    "DOMAINS",
    "SCENARIOS",
    "STATES",
    "STATES_BY_MIN",
    "THRESHOLDS",
    "VALID_TRANSITIONS",
    "AlertLevel",
    "CapacityState",
    "DecisionTypeConfig",
    "DecisionTypeId",
    "Domain",
    "DomainId",
    "ScenarioConfig",
    "ScenarioId",
    "StateId",
    "get_decision_type",
    "get_state",
    "validate_constitution",
]

CONSTITUTION_VERSION = "0.4.0"

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class StateId(StrEnum):
    """Identifiers of the eight capacity states."""

    ACTIVE_FAILURE = "active_failure"
    INSUFFICIENT = "insufficient"
    FAILURE_RISK = "failure_risk"
    UNDER_TENSION = "under_tension"
    RECOVERY = "recovery"
    BUILDING = "building"
    STABLE = "stable"
    CONTROLLED_EXPANSION = "controlled_expansion"


class DomainId(StrEnum):
    """The six evaluation domains used for threshold checks."""

    FINANCIAL = "financial"
    EMOTIONAL = "emotional"
    DECISIONAL = "decisional"
    OPERATIONAL = "operational"
    RELATIONAL = "relational"
    ENERGETIC = "energetic"


class DecisionTypeId(StrEnum):
    """Decision types, in descending order of required capacity."""

    EXISTENTIAL = "existential"
    STRUCTURAL = "structural"
    STRATEGIC = "strategic"
    TACTICAL = "tactical"


class AlertLevel(StrEnum):
    """Alert band of a single domain score."""

    OK = "ok"
    PREVENTIVE = "preventive"
    ATTENTION = "attention"
    CRITICAL = "critical"


class ScenarioId(StrEnum):
    """The four projected stress scenarios."""

    OPTIMISTIC = "optimistic"
    REALISTIC = "realistic"
    STRESS = "stress"
    HUMAN_FAILURE = "hfailure"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class CapacityState:
    """A qualitative band on the [0, 100] capacity axis.

    Attributes:
        id: State identifier.
        label: Display label.
        severity: 1 (best) to 9 (worst); inversely related to capacity.
        color: Hex color used by renderers.
        min: Inclusive lower bound of the band.
        max: Inclusive upper bound of the band.
    """

    id: StateId
    label: str
    severity: int
    color: str
    min: int
    max: int

    def contains(self, score: int) -> bool:
        """Return True if *score* falls inside ``[min, max]``."""
        return self.min <= score <= self.max


@dataclass(slots=True, frozen=True)
class Domain:
    """A weighted evaluation axis."""

    id: DomainId
    label: str
    weight: float


@dataclass(slots=True, frozen=True)
class DecisionTypeConfig:
    """Minimum capacity required to approve a decision of one type.

    Attributes:
        id: Decision type identifier.
        label: Display label.
        level: 1 (existential) to 4 (tactical).
        min_overall: Minimum average domain score.
        min_domain: Minimum score for any single alerting domain.
    """

    id: DecisionTypeId
    label: str
    level: int
    min_overall: int
    min_domain: int


@dataclass(slots=True, frozen=True)
class ScenarioConfig:
    """Multipliers applied to the base projection of one scenario."""

    id: ScenarioId
    name: str
    color: str
    mult: float
    cash_mult: float


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

#: Declared order matters: the classifier sorts by ``min`` with a stable sort,
#: so failure_risk (20) stays ahead of recovery (20).
STATES: tuple[CapacityState, ...] = (
    CapacityState(StateId.ACTIVE_FAILURE, "Falha Estrutural Ativa", 9, "#E03131", 0, 15),
    CapacityState(StateId.INSUFFICIENT, "Capacidade Insuficiente", 8, "#E8590C", 16, 30),
    CapacityState(StateId.FAILURE_RISK, "Risco de Falha", 7, "#D9780F", 20, 35),
    CapacityState(StateId.UNDER_TENSION, "Sob Tensão", 5, "#C09A1F", 36, 50),
    CapacityState(StateId.RECOVERY, "Recuperação Estrutural", 4, "#7C8A30", 20, 40),
    CapacityState(StateId.BUILDING, "Em Construção", 3, "#6B9E3A", 40, 60),
    CapacityState(StateId.STABLE, "Capacidade Estável", 2, "#2B9348", 55, 75),
    CapacityState(StateId.CONTROLLED_EXPANSION, "Expansão Controlada", 1, "#0B7A4C", 76, 100),
)

#: Classification lookup order: ascending ``min``, first match wins.
STATES_BY_MIN: tuple[CapacityState, ...] = tuple(sorted(STATES, key=lambda s: s.min))

_STATE_INDEX: Mapping[str, CapacityState] = MappingProxyType({s.id.value: s for s in STATES})

#: Advisory only; an off-map jump yields a warning, never a block.
VALID_TRANSITIONS: Mapping[StateId, tuple[StateId, ...]] = MappingProxyType(
    {
        StateId.ACTIVE_FAILURE: (StateId.RECOVERY,),
        StateId.INSUFFICIENT: (StateId.BUILDING, StateId.RECOVERY),
        StateId.FAILURE_RISK: (StateId.ACTIVE_FAILURE, StateId.RECOVERY, StateId.UNDER_TENSION),
        StateId.UNDER_TENSION: (StateId.STABLE, StateId.FAILURE_RISK, StateId.RECOVERY),
        StateId.RECOVERY: (StateId.BUILDING, StateId.STABLE, StateId.INSUFFICIENT),
        StateId.BUILDING: (StateId.STABLE, StateId.INSUFFICIENT, StateId.UNDER_TENSION),
        StateId.STABLE: (StateId.CONTROLLED_EXPANSION, StateId.UNDER_TENSION, StateId.BUILDING),
        StateId.CONTROLLED_EXPANSION: (StateId.STABLE, StateId.UNDER_TENSION),
    }
)

DECISION_TYPES: tuple[DecisionTypeConfig, ...] = (
    DecisionTypeConfig(DecisionTypeId.EXISTENTIAL, "Existencial", 1, 85, 70),
    DecisionTypeConfig(DecisionTypeId.STRUCTURAL, "Estrutural", 2, 70, 55),
    DecisionTypeConfig(DecisionTypeId.STRATEGIC, "Estratégica", 3, 55, 40),
    DecisionTypeConfig(DecisionTypeId.TACTICAL, "Tática", 4, 35, 25),
)

_DECISION_TYPE_INDEX: Mapping[str, DecisionTypeConfig] = MappingProxyType(
    {t.id.value: t for t in DECISION_TYPES}
)

DEFAULT_DECISION_TYPE: DecisionTypeConfig = _DECISION_TYPE_INDEX[DecisionTypeId.TACTICAL]

DOMAINS: tuple[Domain, ...] = (
    Domain(DomainId.FINANCIAL, "Financeira", 0.20),
    Domain(DomainId.EMOTIONAL, "Emocional", 0.18),
    Domain(DomainId.DECISIONAL, "Decisória", 0.17),
    Domain(DomainId.OPERATIONAL, "Operacional", 0.18),
    Domain(DomainId.RELATIONAL, "Relacional", 0.13),
    Domain(DomainId.ENERGETIC, "Energética", 0.14),
)

#: Inclusive (low, high) score band per alert level; above 55 is OK.
THRESHOLDS: Mapping[AlertLevel, tuple[int, int]] = MappingProxyType(
    {
        AlertLevel.PREVENTIVE: (40, 55),
        AlertLevel.ATTENTION: (25, 39),
        AlertLevel.CRITICAL: (0, 24),
    }
)

#: stress and load are inverted (``100 - value``) before weighting.
CLASSIFIER_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "energy": 0.18,
        "clarity": 0.22,
        "stress": 0.20,
        "confidence": 0.18,
        "load": 0.22,
    }
)

SCENARIOS: tuple[ScenarioConfig, ...] = (
    ScenarioConfig(ScenarioId.OPTIMISTIC, "Otimista", "#0B7A4C", 0.7, 1.15),
    ScenarioConfig(ScenarioId.REALISTIC, "Realista", "#2563EB", 1.0, 1.0),
    ScenarioConfig(ScenarioId.STRESS, "Estresse", "#E8590C", 1.4, 0.7),
    ScenarioConfig(ScenarioId.HUMAN_FAILURE, "Falha Humana", "#E03131", 1.8, 0.4),
)

_WEIGHT_TOLERANCE = 0.01

# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_state(state_id: str) -> CapacityState | None:
    """Return the capacity state for *state_id*, or None if unknown."""
    return _STATE_INDEX.get(str(state_id))


def get_decision_type(type_id: str | None) -> DecisionTypeConfig:
    """Resolve a decision type id, falling back to tactical when unknown."""
    config = _DECISION_TYPE_INDEX.get(str(type_id)) if type_id is not None else None
    if config is None:
        log.warning(
            "Unknown decision type %r, falling back to %s",
            type_id,
            DEFAULT_DECISION_TYPE.id.value,
        )
        return DEFAULT_DECISION_TYPE
    return config


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


def validate_constitution() -> None:
    """Check every static-table invariant.

    Raises
    ------
    ConstitutionError
        On the first invariant that does not hold.
    """
    domain_sum = sum(d.weight for d in DOMAINS)
    if abs(domain_sum - 1.0) > _WEIGHT_TOLERANCE:
        raise ConstitutionError("domain_weights_sum", f"weights sum to {domain_sum:.4f}")

    classifier_sum = sum(CLASSIFIER_WEIGHTS.values())
    if abs(classifier_sum - 1.0) > _WEIGHT_TOLERANCE:
        raise ConstitutionError(
            "classifier_weights_sum", f"weights sum to {classifier_sum:.4f}"
        )

    if len(_STATE_INDEX) != len(STATES):
        raise ConstitutionError("state_ids_unique")

    uncovered = [s for s in range(101) if not any(st.contains(s) for st in STATES)]
    if uncovered:
        raise ConstitutionError("state_coverage", f"uncovered scores: {uncovered}")

    # tactical < strategic < structural < existential on both minimums
    by_level = sorted(DECISION_TYPES, key=lambda t: t.level, reverse=True)
    for lower, higher in zip(by_level, by_level[1:]):
        if not (lower.min_overall < higher.min_overall and lower.min_domain < higher.min_domain):
            raise ConstitutionError(
                "decision_type_ordering",
                f"{lower.id.value} must require less than {higher.id.value}",
            )

    if set(VALID_TRANSITIONS) != {s.id for s in STATES}:
        raise ConstitutionError("transition_sources", "every state needs an entry")
    for source, targets in VALID_TRANSITIONS.items():
        unknown = [t for t in targets if t.value not in _STATE_INDEX]
        if unknown:
            raise ConstitutionError(
                "transition_targets", f"{source.value} points to unknown {unknown}"
            )


validate_constitution()
