"""State classifier — maps an assessment to a discrete capacity state.

The classifier is a pure function: weighted sum of the five assessment
metrics (stress and load inverted), rounded half-up and clamped, then a
first-match lookup over ``STATES_BY_MIN``.  The state bands overlap; the
tie-break is ascending ``min`` in declared order, NOT severity, and must
not be changed without changing classification outcomes.

Transition checks are advisory: ``check_transition`` reports whether a
jump is on the ``VALID_TRANSITIONS`` map and never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lifeos.governance.constitution import (
    CLASSIFIER_WEIGHTS,
    STATES,
    STATES_BY_MIN,
    VALID_TRANSITIONS,
    CapacityState,
    StateId,
    get_state,
)
from lifeos.governance.inputs import Assessment, load_section
from lifeos.governance.numeric import clamp, round_to

log = logging.getLogger(__name__)

__all__ = [
    "StateClassification",
    "TransitionCheck",
    "capacity_score",
    "check_transition",
    "classify_state",
    "reachable_from",
    "state_for_score",
]


@dataclass(slots=True, frozen=True)
class StateClassification:
    """Result of classifying an assessment.

    Attributes:
        state: The matched capacity state.
        score: Capacity score in [0, 100].
        confidence: 0.5–1.0; higher when the score sits far from both edges
            of the state's band.
    """

    state: CapacityState
    score: int
    confidence: float


@dataclass(slots=True, frozen=True)
class TransitionCheck:
    """Outcome of comparing a previous state with the current one."""

    previous_state_id: str
    current_state_id: StateId
    valid: bool
    allowed: tuple[StateId, ...]
    warning: str | None = None


def capacity_score(assessment: Assessment) -> int:
    """Weighted capacity score of *assessment*, in [0, 100]."""
    adjusted = {
        "energy": assessment.energy,
        "clarity": assessment.clarity,
        "stress": 100 - assessment.stress,
        "confidence": assessment.confidence,
        "load": 100 - assessment.load,
    }
    return clamp(sum(adjusted[key] * weight for key, weight in CLASSIFIER_WEIGHTS.items()))


def state_for_score(score: int) -> CapacityState:
    """First state, in ascending-min order, whose band contains *score*.

    Falls back to the first declared state if no band matches.
    """
    state = next((s for s in STATES_BY_MIN if s.contains(score)), None)
    if state is None:
        log.warning("No capacity state covers score %d, using %s", score, STATES[0].id.value)
        return STATES[0]
    return state


def classify_state(assessment: Assessment | Mapping[str, Any]) -> StateClassification:
    """Classify *assessment* into one of the eight capacity states.

    Exposed standalone for quick state checks that need no full decision
    evaluation; accepts a model or a plain mapping, like ``govern()``.

    Raises:
        InputError: If *assessment* is not a mapping or model at all.
    """
    score = capacity_score(load_section("assessment", Assessment, assessment))
    state = state_for_score(score)

    distance = min(abs(score - state.min), abs(score - state.max))
    confidence = round_to(min(1.0, 0.5 + distance / 50), 2)

    return StateClassification(state=state, score=score, confidence=confidence)


def reachable_from(state_id: str) -> tuple[StateId, ...]:
    """Return the states directly reachable from *state_id* in one cycle.

    Unknown ids have no successors.
    """
    state = get_state(state_id)
    if state is None:
        return ()
    return VALID_TRANSITIONS[state.id]


def check_transition(previous_state_id: str, current: StateId) -> TransitionCheck:
    """Compare *previous_state_id* with the freshly classified *current* state.

    Staying in the same state is always valid.  An invalid jump produces a
    warning string; it never affects the verdict.
    """
    allowed = reachable_from(previous_state_id)
    if str(previous_state_id) == current.value or current in allowed:
        return TransitionCheck(
            previous_state_id=str(previous_state_id),
            current_state_id=current,
            valid=True,
            allowed=allowed,
        )

    allowed_str = ", ".join(s.value for s in allowed) or "nenhuma"
    warning = (
        f"Transição {previous_state_id} → {current.value} não é válida. "
        f"Transições permitidas: {allowed_str}. Pode indicar mudança abrupta."
    )
    log.warning("Off-map state transition %s -> %s", previous_state_id, current.value)
    return TransitionCheck(
        previous_state_id=str(previous_state_id),
        current_state_id=current,
        valid=False,
        allowed=allowed,
        warning=warning,
    )
