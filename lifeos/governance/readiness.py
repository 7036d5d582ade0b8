"""Readiness plan generator — remediation for blocked decisions.

Only invoked when a decision is blocked.  The weakest domains (up to
three below the type's ``min_domain``) each contribute up to two actions
from a fixed catalog; the plan is padded to at least three actions.
Horizons and the overall timeline scale with the gap between the
required and actual overall score.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from lifeos.governance.constitution import DOMAINS, DomainId, get_decision_type
from lifeos.governance.numeric import round_half_up

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lifeos.governance.domains import DomainScores

__all__ = [
    "ACTION_CATALOG",
    "MIN_ACTIONS",
    "ActionTemplate",
    "Bottleneck",
    "ReadinessAction",
    "ReadinessPlan",
    "generate_readiness_plan",
]

MIN_ACTIONS = 3
_MAX_WEAK_DOMAINS = 3
_ACTIONS_PER_DOMAIN = 2


@dataclass(slots=True, frozen=True)
class ActionTemplate:
    action: str
    indicator: str


#: Remediation templates per domain, most impactful first.
ACTION_CATALOG: Mapping[DomainId, tuple[ActionTemplate, ...]] = MappingProxyType(
    {
        DomainId.FINANCIAL: (
            ActionTemplate("Reduzir alavancagem para nível seguro", "Alavancagem < 1.4x"),
            ActionTemplate("Estabilizar fluxo de caixa por 2 ciclos", "2 meses positivos consecutivos"),
            ActionTemplate("Criar reserva de emergência de 3 meses", "Caixa ≥ 3x custos fixos"),
        ),
        DomainId.EMOTIONAL: (
            ActionTemplate("Reduzir fontes de estresse ativas", "Estresse auto-reportado < 50"),
            ActionTemplate("Recuperar rotina de descanso cognitivo", "Energia auto-reportada > 60"),
        ),
        DomainId.DECISIONAL: (
            ActionTemplate("Reduzir decisões paralelas por 30 dias", "Carga decisória < 40"),
            ActionTemplate("Implementar processo de decisão estruturado", "Clareza > 65"),
        ),
        DomainId.OPERATIONAL: (
            ActionTemplate("Reduzir frentes ativas simultâneas", "Frentes ativas ≤ 3"),
            ActionTemplate("Aumentar maturidade de processos", "Processos > 60"),
            ActionTemplate("Fortalecer capacidade de delegação", "Delegação > 60"),
        ),
        DomainId.RELATIONAL: (
            ActionTemplate("Resolver conflito ativo mais crítico", "Conflitos ativos ≤ 1"),
            ActionTemplate("Alinhar expectativas com parceiros-chave", "Alinhamento > 65"),
        ),
        DomainId.ENERGETIC: (
            ActionTemplate("Recuperar margem de energia e ritmo", "Energia > 60"),
            ActionTemplate("Reduzir carga decisória excessiva", "Carga < 50"),
        ),
    }
)

#: Padding used, in order, when the weak domains yield too few actions.
#: ``{min_overall}`` is filled from the decision type.
_GENERIC_ACTIONS: tuple[ActionTemplate, ...] = (
    ActionTemplate("Fortalecer capacidade geral antes de avançar", "Score geral ≥ {min_overall}%"),
    ActionTemplate("Reavaliar a decisão com dados atualizados", "Nova avaliação completa registrada"),
    ActionTemplate("Proteger a rotina contra novas frentes", "Nenhuma frente nova aberta no período"),
)
_GENERIC_HORIZON = "4–8 semanas"


@dataclass(slots=True, frozen=True)
class Bottleneck:
    domain: DomainId
    label: str
    score: int


@dataclass(slots=True, frozen=True)
class ReadinessAction:
    action: str
    horizon: str
    indicator: str


@dataclass(slots=True, frozen=True)
class ReadinessPlan:
    """Structured remediation attached to a blocked verdict.

    Attributes:
        structural_reason: Why the decision cannot be approved now.
        primary_bottleneck: Worst-scoring domain.
        secondary_bottleneck: Second-worst domain, None if there is none.
        actions: At least ``MIN_ACTIONS`` remediation actions.
        reevaluation_triggers: 2–3 conditions that warrant a new evaluation.
        timeline: Expected weeks until re-evaluation, e.g. ``"3–6 semanas"``.
    """

    structural_reason: str
    primary_bottleneck: Bottleneck
    secondary_bottleneck: Bottleneck | None
    actions: tuple[ReadinessAction, ...]
    reevaluation_triggers: tuple[str, ...]
    timeline: str


def _weeks(low: int, high: int) -> str:
    return f"{low}–{high} semanas"


def generate_readiness_plan(
    domain_scores: DomainScores,
    decision_type_id: str,
    overall_score: int,
    gap: int,
) -> ReadinessPlan:
    """Turn the weakest domains into a prioritized remediation plan.

    Driven by the raw domain ranking rather than by violations, so a weak
    domain above the alert bands still gets actions.
    """
    type_config = get_decision_type(decision_type_id)

    # stable sort: ties keep DOMAINS order
    ranked = sorted(
        (Bottleneck(domain=d.id, label=d.label, score=domain_scores[d.id]) for d in DOMAINS),
        key=lambda b: b.score,
    )
    primary = ranked[0]
    secondary = ranked[1] if len(ranked) > 1 else None

    horizon = _weeks(max(2, round_half_up(gap / 5)), max(4, round_half_up(gap / 3)))
    weak = [b for b in ranked if b.score < type_config.min_domain][:_MAX_WEAK_DOMAINS]

    actions: list[ReadinessAction] = [
        ReadinessAction(action=t.action, horizon=horizon, indicator=t.indicator)
        for bottleneck in weak
        for t in ACTION_CATALOG[bottleneck.domain][:_ACTIONS_PER_DOMAIN]
    ]
    for template in _GENERIC_ACTIONS[: max(0, MIN_ACTIONS - len(actions))]:
        actions.append(
            ReadinessAction(
                action=template.action,
                horizon=_GENERIC_HORIZON,
                indicator=template.indicator.format(min_overall=type_config.min_overall),
            )
        )

    triggers = [
        f"Score geral ≥ {type_config.min_overall}%",
        f"{primary.label} ≥ {type_config.min_domain}% (atual: {primary.score}%)",
    ]
    if secondary is not None and secondary.score < type_config.min_domain:
        triggers.append(
            f"{secondary.label} ≥ {type_config.min_domain}% (atual: {secondary.score}%)"
        )

    reason = (
        f"Esta decisão {type_config.label.lower()} exige capacidade mínima de "
        f"{type_config.min_overall}%. Seu score atual é {overall_score}%, "
        f"gerando um gap de {gap}%. O sistema identifica incompatibilidade "
        f"estrutural, não opinião."
    )

    return ReadinessPlan(
        structural_reason=reason,
        primary_bottleneck=primary,
        secondary_bottleneck=secondary,
        actions=tuple(actions),
        reevaluation_triggers=tuple(triggers),
        timeline=_weeks(max(2, round_half_up(gap / 4)), max(4, round_half_up(gap / 2))),
    )
