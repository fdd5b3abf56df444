from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from config import ExportConfig
from normalize import normalize_value

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = normalize_value(value).strip()
    return text or None


def _optional_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip().rstrip("%"))
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _optional_flag(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, Mapping):
        return _optional_flag(value.get("status"))
    text = str(value).strip().lower()
    if text in {"true", "yes", "1", "ok", "active", "compliant", "var", "evet", "aktif", "uyumlu", "mevcut"}:
        return True
    if text in {"false", "no", "0", "missing", "inactive", "yok", "hayir", "hayÄ±r", "pasif", "eksik"}:
        return False
    return None


ABSENT_SENTINELS = {"n/a", "na", "none", "null", "-", "yok", "bulunamadı", "not found"}


def _presence_text(value: Any) -> Optional[str]:
    text = _optional_text(value)
    if text is None or text.lower() in ABSENT_SENTINELS:
        return None
    return text


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        value = [value]
    items = [normalize_value(item).strip() for item in value]
    return [item for item in items if item]


def _coerce_enum(enum_cls: type, value: Any, aliases: Dict[str, str], default: Enum) -> Enum:
    if isinstance(value, enum_cls):
        return value
    text = normalize_value(value).strip().lower().replace("-", "_").replace(" ", "_")
    text = aliases.get(text, text)
    try:
        return enum_cls(text)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Export schemas
# ---------------------------------------------------------------------------


class ColumnSpec(BaseModel):
    """One column of a tabular export: the record key and its display header."""

    key: str
    header: str


class FieldSpec(BaseModel):
    """One labeled field of a detail document section."""

    key: str
    label: str
    formatter: Optional[Callable[[Any], str]] = None


class DetailSection(BaseModel):
    title: str
    fields: List[FieldSpec] = Field(default_factory=list)


ColumnLike = Union[ColumnSpec, Mapping[str, str], Tuple[str, str]]


def coerce_columns(columns: Iterable[ColumnLike]) -> List[ColumnSpec]:
    """Accept ColumnSpec objects, ``{"key", "header"}`` mappings or ``(key, header)`` pairs."""

    specs: List[ColumnSpec] = []
    for column in columns:
        if isinstance(column, ColumnSpec):
            specs.append(column)
        elif isinstance(column, Mapping):
            specs.append(ColumnSpec.model_validate(column))
        else:
            key, header = column
            specs.append(ColumnSpec(key=str(key), header=str(header)))
    return specs


def coerce_sections(sections: Iterable[Union[DetailSection, Mapping[str, Any]]]) -> List[DetailSection]:
    return [
        section if isinstance(section, DetailSection) else DetailSection.model_validate(section)
        for section in sections
    ]


# ---------------------------------------------------------------------------
# Digital analysis result
# ---------------------------------------------------------------------------


class RoadmapHorizon(str, Enum):
    IMMEDIATE = "immediate"
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InsightKind(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


ROADMAP_ALIASES = {
    "acil": "immediate",
    "acil_7gun": "immediate",
    "now": "immediate",
    "short": "short_term",
    "kisa": "short_term",
    "kisa_30gun": "short_term",
    "ilk_30_gun": "short_term",
    "medium": "medium_term",
    "orta": "medium_term",
    "orta_90gun": "medium_term",
    "30_90_gun": "medium_term",
    "long": "long_term",
    "uzun": "long_term",
    "uzun_1yil": "long_term",
    "90_365_gun": "long_term",
}
PRIORITY_ALIASES = {
    "critical": "high",
    "urgent": "high",
    "kritik": "high",
    "yuksek": "high",
    "yÃ¼ksek": "high",
    "orta": "medium",
    "dusuk": "low",
    "dÃ¼ÅÃ¼k": "low",
}
INSIGHT_ALIASES = {
    "pozitif": "positive",
    "kritik": "negative",
    "uyari": "negative",
    "warning": "negative",
    "firsat": "neutral",
    "opportunity": "neutral",
}


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TechnicalStatus(_Lenient):
    ssl_enabled: Optional[bool] = Field(default=None, validation_alias=AliasChoices("ssl_enabled", "ssl_status"))
    ssl_grade: Optional[str] = None
    mobile_score: Optional[float] = None
    desktop_score: Optional[float] = None
    lcp_mobile: Optional[str] = None
    lcp_desktop: Optional[str] = None
    summary: Optional[str] = Field(default=None, validation_alias=AliasChoices("summary", "teknik_ozet"))

    @field_validator("ssl_enabled", mode="before")
    @classmethod
    def clean_flag(cls, value: Any) -> Optional[bool]:
        return _optional_flag(value)

    @field_validator("mobile_score", "desktop_score", mode="before")
    @classmethod
    def clean_number(cls, value: Any) -> Optional[float]:
        return _optional_number(value)

    @field_validator("ssl_grade", "lcp_mobile", "lcp_desktop", "summary", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class Compliance(_Lenient):
    flags: Dict[str, bool] = Field(default_factory=dict)
    compliance_score: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def split_flags(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "flags" in data:
            return data
        flags: Dict[str, bool] = {}
        for key, value in data.items():
            if key == "compliance_score":
                continue
            flag = _optional_flag(value)
            if flag is not None:
                flags[str(key)] = flag
        return {"flags": flags, "compliance_score": _optional_number(data.get("compliance_score"))}

    def ordered_flags(self) -> List[Tuple[str, bool]]:
        known = [(key, self.flags[key]) for key in ExportConfig.COMPLIANCE_FLAGS if key in self.flags]
        extra = [(key, value) for key, value in self.flags.items() if key not in ExportConfig.COMPLIANCE_FLAGS]
        return known + extra

    @property
    def has_violation(self) -> bool:
        return any(not value for value in self.flags.values())


class SocialMedia(_Lenient):
    platforms: Dict[str, Optional[str]] = Field(default_factory=dict)
    assessment: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def split_platforms(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "platforms" in data:
            return data
        platforms: Dict[str, Optional[str]] = {}
        assessment = None
        for key, value in data.items():
            if key in {"overall_assessment", "assessment", "degerlendirme"}:
                assessment = assessment or _optional_text(value)
                continue
            if key not in ExportConfig.SOCIAL_PLATFORMS and not isinstance(value, Mapping):
                continue
            if isinstance(value, Mapping):
                value = value.get("url") or value.get("handle") or value.get("status")
            platforms[str(key)] = value
        return {"platforms": platforms, "assessment": assessment}

    @field_validator("platforms", mode="before")
    @classmethod
    def clean_platforms(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {str(key): _presence_text(item) for key, item in value.items()}

    def ordered_platforms(self) -> List[Tuple[str, Optional[str]]]:
        known = [(key, self.platforms[key]) for key in ExportConfig.SOCIAL_PLATFORMS if key in self.platforms]
        extra = [(key, value) for key, value in self.platforms.items() if key not in ExportConfig.SOCIAL_PLATFORMS]
        return known + extra


class UIReview(_Lenient):
    assessment: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("assessment", "summary", "ux_assessment")
    )
    findings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    desktop_image: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("desktop_image", "desktop_screenshot")
    )
    mobile_image: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("mobile_image", "mobile_screenshot")
    )

    @field_validator("assessment", "desktop_image", "mobile_image", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("findings", "suggestions", mode="before")
    @classmethod
    def clean_list(cls, value: Any) -> List[str]:
        return _text_list(value)


class PainPoint(_Lenient):
    issue: str = Field(validation_alias=AliasChoices("issue", "problem"))
    solution: Optional[str] = None
    service: Optional[str] = None

    @field_validator("issue", "solution", "service", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class RoadmapItem(_Lenient):
    title: str = Field(validation_alias=AliasChoices("title", "action", "aksiyon"))
    description: Optional[str] = Field(default=None, validation_alias=AliasChoices("description", "neden", "detail"))
    category: RoadmapHorizon = RoadmapHorizon.SHORT_TERM

    @field_validator("title", "description", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value: Any) -> RoadmapHorizon:
        return _coerce_enum(RoadmapHorizon, value, ROADMAP_ALIASES, RoadmapHorizon.SHORT_TERM)


class Recommendation(_Lenient):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    category: Optional[str] = None
    impact: Optional[str] = None
    effort: Optional[str] = None

    @field_validator("title", "description", "category", "impact", "effort", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, value: Any) -> Priority:
        return _coerce_enum(Priority, value, PRIORITY_ALIASES, Priority.MEDIUM)


class Insight(_Lenient):
    kind: InsightKind = Field(default=InsightKind.NEUTRAL, validation_alias=AliasChoices("type", "kind", "tip"))
    title: str = Field(validation_alias=AliasChoices("title", "tespit"))
    description: Optional[str] = Field(default=None, validation_alias=AliasChoices("description", "detay"))

    @field_validator("title", "description", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, value: Any) -> InsightKind:
        return _coerce_enum(InsightKind, value, INSIGHT_ALIASES, InsightKind.NEUTRAL)


def _valid_items(model: type, value: Any, group: str) -> Optional[list]:
    if value is None:
        return None
    if isinstance(value, Mapping) or not isinstance(value, Sequence) or isinstance(value, str):
        value = [value]
    items = []
    for raw in value:
        try:
            items.append(raw if isinstance(raw, model) else model.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Dropping malformed %s entry: %s", group, exc.errors()[:1])
    return items or None


class AnalysisResult(_Lenient):
    """Digital-analysis payload with every group optional (None when absent)."""

    summary: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("summary", "executive_summary", "analysis_summary")
    )
    scores: Optional[Dict[str, float]] = None
    score_labels: Dict[str, str] = Field(default_factory=dict)
    technical_status: Optional[TechnicalStatus] = None
    compliance: Optional[Compliance] = Field(
        default=None, validation_alias=AliasChoices("compliance", "legal_compliance")
    )
    social_media: Optional[SocialMedia] = None
    ui_review: Optional[UIReview] = None
    pain_points: Optional[List[PainPoint]] = None
    roadmap: Optional[List[RoadmapItem]] = Field(
        default=None, validation_alias=AliasChoices("roadmap", "yol_haritasi")
    )
    recommendations: Optional[List[Recommendation]] = None
    insights: Optional[List[Insight]] = None

    @field_validator("summary", mode="before")
    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @model_validator(mode="before")
    @classmethod
    def extract_score_labels(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        raw_scores = data.get("scores")
        if not isinstance(raw_scores, Mapping):
            return data
        existing = data.get("score_labels")
        labels = dict(existing) if isinstance(existing, Mapping) else {}
        for key, value in raw_scores.items():
            if isinstance(value, Mapping) and value.get("label"):
                labels.setdefault(str(key), normalize_value(value["label"]))
        return {**data, "score_labels": labels}

    @field_validator("scores", mode="before")
    @classmethod
    def coerce_scores(cls, value: Any) -> Optional[Dict[str, float]]:
        if not isinstance(value, Mapping):
            return None
        scores: Dict[str, float] = {}
        for key, raw in value.items():
            if isinstance(raw, Mapping):
                score = _optional_number(raw.get("score"))
                max_score = _optional_number(raw.get("maxScore") or raw.get("max_score")) or 100.0
                if score is not None and max_score > 0:
                    scores[str(key)] = round(score / max_score * 100.0, 1)
                continue
            number = _optional_number(raw)
            if number is not None:
                scores[str(key)] = number
        return scores or None

    @field_validator("roadmap", mode="before")
    @classmethod
    def flatten_roadmap(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return _valid_items(RoadmapItem, value, "roadmap")
        items: List[Any] = []
        for category, entries in value.items():
            if not isinstance(entries, (list, tuple)):
                continue
            for entry in entries:
                if isinstance(entry, Mapping):
                    items.append({**entry, "category": entry.get("category") or category})
                else:
                    items.append({"title": normalize_value(entry), "category": category})
        return _valid_items(RoadmapItem, items, "roadmap")

    @field_validator("pain_points", mode="before")
    @classmethod
    def valid_pain_points(cls, value: Any) -> Any:
        return _valid_items(PainPoint, value, "pain_points")

    @field_validator("recommendations", mode="before")
    @classmethod
    def valid_recommendations(cls, value: Any) -> Any:
        return _valid_items(Recommendation, value, "recommendations")

    @field_validator("insights", mode="before")
    @classmethod
    def valid_insights(cls, value: Any) -> Any:
        return _valid_items(Insight, value, "insights")

    def category_scores(self) -> List[Tuple[str, float]]:
        return [(key, value) for key, value in (self.scores or {}).items() if key != "overall"]

    def roadmap_by_horizon(self) -> Dict[RoadmapHorizon, List[RoadmapItem]]:
        grouped: Dict[RoadmapHorizon, List[RoadmapItem]] = {horizon: [] for horizon in RoadmapHorizon}
        for item in self.roadmap or []:
            grouped[item.category].append(item)
        return grouped

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalysisResult":
        """Parse an upstream payload, keeping every group that validates on its own."""

        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            logger.warning("Analysis payload is %s, expected a mapping", type(payload).__name__)
            return cls()
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Analysis payload has %s invalid field(s); keeping valid groups", exc.error_count())
        accepted: Dict[str, Any] = {}
        for key, value in payload.items():
            try:
                cls.model_validate({key: value})
            except ValidationError:
                logger.warning("Skipping malformed analysis group '%s'", key)
                continue
            accepted[key] = value
        return cls.model_validate(accepted)
