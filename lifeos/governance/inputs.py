"""Pydantic v2 input models for a governance evaluation.

Inputs arrive from very different collaborators (LLM-extracted JSON, a
step-by-step form, a chat-bot Q&A session) and are deliberately NOT
range-validated.  Every numeric field is coerced through
``coerce_number``: a missing, non-numeric, NaN or infinite value becomes
``0`` and out-of-range values pass through untouched, to be clamped where
they are consumed.  Fields accept snake_case names and camelCase aliases
alike; unknown keys are ignored.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from lifeos.governance.constitution import DecisionTypeId
from lifeos.governance.exceptions import InputError
from lifeos.governance.numeric import coerce_number

__all__ = [
    "Assessment",
    "BusinessInput",
    "Decision",
    "FinancialInput",
    "GovernanceRequest",
    "Impact",
    "RelationalInput",
    "ResourcesRequired",
    "Reversibility",
    "Urgency",
    "load_section",
]

_INPUT_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    populate_by_name=True,
    alias_generator=to_camel,
)


class _NumericRecord(BaseModel):
    """Flat record whose every field is a leniently coerced float."""

    model_config = _INPUT_CONFIG

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_number(value)


# ── Numeric sections ─────────────────────────────────


class Assessment(_NumericRecord):
    """Five self-reported capacity metrics on a 0–100 scale.

    ``stress`` and ``load`` are inverted metrics: high means bad.
    """

    energy: float = Field(default=0.0, description="0-100")
    clarity: float = Field(default=0.0, description="0-100")
    stress: float = Field(default=0.0, description="0-100, high is bad")
    confidence: float = Field(default=0.0, description="0-100")
    load: float = Field(default=0.0, description="0-100, high is bad")


class BusinessInput(_NumericRecord):
    """Operating metrics of the business."""

    revenue: float = Field(default=0.0, description="Monthly revenue")
    costs: float = Field(default=0.0, description="Monthly costs")
    founder_dependence: float = Field(default=0.0, description="0-100")
    active_fronts: float = Field(default=0.0, description="1-10 simultaneous fronts")
    process_maturity: float = Field(default=0.0, description="0-100")
    delegation_capacity: float = Field(default=0.0, description="0-100")


class FinancialInput(_NumericRecord):
    """Cash position and leverage."""

    revenue: float = Field(default=0.0, description="Monthly revenue")
    cash: float = Field(default=0.0, description="Available cash")
    debt: float = Field(default=0.0, description="Total debt")
    fixed_costs: float = Field(default=0.0, description="Monthly fixed costs")
    intended_leverage: float = Field(default=0.0, description="Additional debt intended")


class RelationalInput(_NumericRecord):
    """Health of partner, team and ecosystem relationships."""

    active_conflicts: float = Field(default=0.0, description="0-10")
    critical_dependencies: float = Field(default=0.0, description="0-10")
    partner_alignment: float = Field(default=0.0, description="0-100")
    team_stability: float = Field(default=0.0, description="0-100")
    ecosystem_health: float = Field(default=0.0, description="0-100")


# ── Decision ─────────────────────────────────────────


class Impact(StrEnum):
    TRANSFORMATIONAL = "transformational"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Reversibility(StrEnum):
    IRREVERSIBLE = "irreversible"
    DIFFICULT = "difficult"
    MODERATE = "moderate"
    EASY = "easy"


class Urgency(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


class ResourcesRequired(StrEnum):
    MASSIVE = "massive"
    SIGNIFICANT = "significant"
    MODERATE = "moderate"
    MINIMAL = "minimal"


_DISPLAY_ENUMS: dict[str, type[StrEnum]] = {
    "impact": Impact,
    "reversibility": Reversibility,
    "urgency": Urgency,
    "resources_required": ResourcesRequired,
}


class Decision(BaseModel):
    """The decision under evaluation.

    Only ``type`` drives scoring.  ``type`` is kept as the raw string so an
    unknown id can fall back to tactical at scoring time instead of failing
    here.  The four display attributes are recorded for audit and rendering;
    values outside their enum become None.
    """

    model_config = _INPUT_CONFIG

    description: str = ""
    type: str = DecisionTypeId.TACTICAL.value
    impact: Impact | None = None
    reversibility: Reversibility | None = None
    urgency: Urgency | None = None
    resources_required: ResourcesRequired | None = None

    @field_validator("description", "type", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("impact", "reversibility", "urgency", "resources_required", mode="before")
    @classmethod
    def _lenient_enum(cls, value: Any, info: ValidationInfo) -> StrEnum | None:
        enum_cls = _DISPLAY_ENUMS[info.field_name]
        try:
            return enum_cls(str(value).strip().lower())
        except ValueError:
            return None


# ── Request bundle ───────────────────────────────────


class GovernanceRequest(BaseModel):
    """Everything ``govern()`` needs, as one document.

    Used by the command line and by callers that receive the whole
    evaluation as a single JSON/YAML payload.
    """

    model_config = _INPUT_CONFIG

    assessment: Assessment = Field(default_factory=Assessment)
    business: BusinessInput = Field(default_factory=BusinessInput)
    financial: FinancialInput = Field(default_factory=FinancialInput)
    relational: RelationalInput = Field(default_factory=RelationalInput)
    decision: Decision = Field(default_factory=Decision)
    previous_state_id: str | None = None

    @field_validator("assessment", "business", "financial", "relational", "decision", mode="before")
    @classmethod
    def _empty_section(cls, value: Any) -> Any:
        return {} if value is None else value


# ── Section loading ──────────────────────────────────

_M = TypeVar("_M", bound=BaseModel)


def load_section(name: str, model_cls: type[_M], value: Any) -> _M:
    """Accept a model instance or any mapping for one input section.

    None reads as an empty section.  Another model is re-read through its
    dumped fields.

    Raises:
        InputError: If *value* cannot be read as a record at all.
    """
    if isinstance(value, model_cls):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump()
    try:
        return model_cls.model_validate({} if value is None else value)
    except PydanticValidationError as exc:
        raise InputError(name, exc.errors(include_url=False)) from exc
