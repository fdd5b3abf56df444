"""Section builders for the digital analysis report.

Each section knows its own key, heading and whether the current result has
anything for it to show. The composer in ``analysis_report`` owns ordering
and page breaks; a section only renders its own body.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jinja2 import Template

from config import ExportConfig
from labels import has_label, label
from models import AnalysisResult, InsightKind, Priority, RoadmapHorizon
from normalize import display_value
from scoring import RING_CIRCUMFERENCE, clamp_score, format_score, tier_style

from .templates import ENV

logger = logging.getLogger(__name__)

SAFE_URL_PREFIXES = ("http://", "https://", "data:image/")

INSIGHT_STYLES: Dict[InsightKind, Dict[str, str]] = {
    InsightKind.POSITIVE: {"color": "#10b981", "background": "#ecfdf5", "icon": "✅"},
    InsightKind.NEGATIVE: {"color": "#ef4444", "background": "#fef2f2", "icon": "⚠️"},
    InsightKind.NEUTRAL: {"color": "#3b82f6", "background": "#eff6ff", "icon": "💡"},
}

PRIORITY_STYLES: Dict[Priority, Dict[str, str]] = {
    Priority.HIGH: {"color": "#b91c1c", "background": "#fee2e2"},
    Priority.MEDIUM: {"color": "#b45309", "background": "#fef3c7"},
    Priority.LOW: {"color": "#047857", "background": "#d1fae5"},
}


def safe_url(value: Optional[str]) -> Optional[str]:
    """Return ``value`` only when it is an http(s) link or an inline image."""

    if not value:
        return None
    text = value.strip()
    if text.lower().startswith(SAFE_URL_PREFIXES):
        return text
    return None


@dataclass
class ReportContext:
    result: AnalysisResult
    overall_score: Optional[float] = None
    locale: str = "tr"

    def text(self, key: str, **values: Any) -> str:
        return label(key, self.locale, **values)

    def category_name(self, key: str) -> str:
        custom = self.result.score_labels.get(key)
        if custom:
            return custom
        if has_label(f"category_{key}"):
            return self.text(f"category_{key}")
        return key.replace("_", " ").title()


def _compile(source: str) -> Template:
    return ENV.from_string(source)


class ReportSection(ABC):
    """One block of the analysis report."""

    key: str = ""
    title_key: str = ""
    page_break: bool = False
    template: Template

    @abstractmethod
    def is_present(self, context: ReportContext) -> bool:
        """True when the result carries data for this section."""

    @abstractmethod
    def build(self, context: ReportContext) -> Dict[str, Any]:
        """Return the template variables for this section."""

    def render(self, context: ReportContext) -> str:
        values = self.build(context)
        values.setdefault("heading", context.text(self.title_key))
        return self.template.render(**values)


class OverallScoreSection(ReportSection):
    key = "overall"
    title_key = "section_overall"
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="card ring-wrap" style="background: {{ style.background }}; border-color: {{ style.border }};">
  <svg width="140" height="140" viewBox="0 0 120 120" role="img">
    <circle cx="60" cy="60" r="52" fill="none" stroke="#e5e7eb" stroke-width="10"></circle>
    <circle cx="60" cy="60" r="52" fill="none" stroke="{{ style.color }}" stroke-width="10"
      stroke-linecap="round" stroke-dasharray="{{ circumference }}" stroke-dashoffset="{{ style.ring_offset }}"
      transform="rotate(-90 60 60)"></circle>
    <text x="60" y="68" text-anchor="middle" font-size="26" font-weight="700" fill="{{ style.color }}">{{ score }}</text>
  </svg>
  <div>
    <div class="ring-value" style="color: {{ style.color }};">{{ score }}/100</div>
    <div class="tier-label">{{ style.icon }} {{ style.label }}</div>
  </div>
</div>
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return context.overall_score is not None

    def build(self, context: ReportContext) -> Dict[str, Any]:
        return {
            "style": tier_style(context.overall_score, context.locale),
            "score": format_score(context.overall_score),
            "circumference": RING_CIRCUMFERENCE,
        }


class CategoryScoresSection(ReportSection):
    key = "scores"
    title_key = "section_scores"
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="grid grid-3">
{% for card in cards %}
  <div class="card score-card" data-tier="{{ card.style.tier.value }}" style="border-color: {{ card.style.border }};">
    <div class="muted">{{ card.name }}</div>
    <div class="value" style="color: {{ card.style.color }};">{{ card.score }}</div>
    <div class="bar"><span style="width: {{ card.width }}%; background: {{ card.style.color }};"></span></div>
    <div class="muted">{{ card.style.icon }} {{ card.style.label }}</div>
  </div>
{% endfor %}
</div>
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return bool(context.result.category_scores())

    def build(self, context: ReportContext) -> Dict[str, Any]:
        cards = []
        for key, score in context.result.category_scores():
            cards.append(
                {
                    "name": context.category_name(key),
                    "score": format_score(score),
                    "width": format_score(clamp_score(score)),
                    "style": tier_style(score, context.locale),
                }
            )
        return {"cards": cards}


class SummarySection(ReportSection):
    key = "summary"
    title_key = "section_summary"
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="card summary" style="white-space: pre-wrap;">{{ summary }}</div>
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return bool(context.result.summary)

    def build(self, context: ReportContext) -> Dict[str, Any]:
        return {"summary": context.result.summary}


class TechnicalStatusSection(ReportSection):
    key = "technical_status"
    title_key = "section_technical"
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="grid grid-4">
{% for cell in cells %}
  <div class="card metric"{% if cell.color %} style="border-color: {{ cell.color }};"{% endif %}>
    <div class="label">{{ cell.label }}</div>
    <div class="value"{% if cell.color %} style="color: {{ cell.color }};"{% endif %}>{{ cell.value }}</div>
  </div>
{% endfor %}
</div>
{% if summary %}
<div class="callout callout-info">{{ summary }}</div>
{% endif %}
"""
    )

    def _cells(self, context: ReportContext) -> List[Dict[str, Any]]:
        status = context.result.technical_status
        cells: List[Dict[str, Any]] = []
        if status is None:
            return cells
        if status.ssl_enabled is not None:
            text = context.text("ssl_active" if status.ssl_enabled else "ssl_missing")
            if status.ssl_grade:
                text = f"{text} ({status.ssl_grade})"
            cells.append(
                {
                    "label": context.text("ssl"),
                    "value": text,
                    "color": "#10b981" if status.ssl_enabled else "#ef4444",
                }
            )
        for field, label_key in (("mobile_score", "mobile_performance"), ("desktop_score", "desktop_performance")):
            score = getattr(status, field)
            if score is not None:
                cells.append(
                    {
                        "label": context.text(label_key),
                        "value": format_score(score),
                        "color": tier_style(score, context.locale).color,
                    }
                )
        for field in ("lcp_mobile", "lcp_desktop"):
            value = getattr(status, field)
            if value:
                cells.append({"label": context.text(field), "value": value, "color": None})
        return cells

    def is_present(self, context: ReportContext) -> bool:
        status = context.result.technical_status
        return status is not None and (bool(self._cells(context)) or bool(status.summary))

    def build(self, context: ReportContext) -> Dict[str, Any]:
        return {"cells": self._cells(context), "summary": context.result.technical_status.summary}


class ComplianceSection(ReportSection):
    key = "compliance"
    title_key = "section_compliance"
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="grid grid-3">
{% for flag in flags %}
  <div class="card metric">
    <div class="label">{{ flag.name }}</div>
    <div class="value {{ 'flag-ok' if flag.ok else 'flag-missing' }}">{{ '✅' if flag.ok else '❌' }} {{ flag.status }}</div>
  </div>
{% endfor %}
{% if score is not none %}
  <div class="card metric">
    <div class="label">{{ score_label }}</div>
    <div class="value" style="color: {{ score_color }};">{{ score }}</div>
  </div>
{% endif %}
</div>
{% if warning %}
<div class="callout callout-warning">⚠️ {{ warning }}</div>
{% endif %}
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        compliance = context.result.compliance
        return compliance is not None and (bool(compliance.flags) or compliance.compliance_score is not None)

    def build(self, context: ReportContext) -> Dict[str, Any]:
        compliance = context.result.compliance
        flags = []
        for key, ok in compliance.ordered_flags():
            name = context.text(f"compliance_{key}") if has_label(f"compliance_{key}") else key.replace("_", " ").title()
            flags.append(
                {"name": name, "ok": ok, "status": context.text("compliance_ok" if ok else "compliance_missing")}
            )
        score = compliance.compliance_score
        return {
            "flags": flags,
            "score": format_score(score) if score is not None else None,
            "score_label": context.text("compliance_score"),
            "score_color": tier_style(score, context.locale).color,
            "warning": context.text("compliance_warning") if compliance.has_violation else None,
        }


class SocialMediaSection(ReportSection):
    key = "social_media"
    title_key = "section_social"
    template = _compile(
        """<h2>{{ heading }}</h2>
{% if platforms %}
<div class="grid grid-3">
{% for platform in platforms %}
  <div class="card metric">
    <div class="label">{{ platform.name }}</div>
    <div class="value {{ 'flag-ok' if platform.present else 'flag-missing' }}">
{% if platform.href %}
      <a href="{{ platform.href }}">{{ platform.value }}</a>
{% else %}
      {{ platform.value }}
{% endif %}
    </div>
  </div>
{% endfor %}
</div>
{% endif %}
{% if assessment %}
<div class="callout callout-info"><strong>{{ assessment_label }}:</strong> {{ assessment }}</div>
{% endif %}
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        social = context.result.social_media
        return social is not None and (bool(social.platforms) or bool(social.assessment))

    def build(self, context: ReportContext) -> Dict[str, Any]:
        social = context.result.social_media
        platforms = []
        for key, value in social.ordered_platforms():
            name = context.text(f"social_{key}") if has_label(f"social_{key}") else key.title()
            platforms.append(
                {
                    "name": name,
                    "present": bool(value),
                    "value": value or context.text("social_absent"),
                    "href": safe_url(value),
                }
            )
        return {
            "platforms": platforms,
            "assessment": social.assessment,
            "assessment_label": context.text("social_assessment"),
        }


class UIReviewSection(ReportSection):
    key = "ui_review"
    title_key = "section_ui_review"
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="ui-columns">
  <div>
{% if assessment %}
    <p style="white-space: pre-wrap;">{{ assessment }}</p>
{% endif %}
{% if findings %}
    <h3>{{ findings_label }}</h3>
    <ul class="plain">
{% for item in findings %}
      <li>{{ item }}</li>
{% endfor %}
    </ul>
{% endif %}
{% if suggestions %}
    <h3>{{ suggestions_label }}</h3>
    <ul class="plain">
{% for item in suggestions %}
      <li>{{ item }}</li>
{% endfor %}
    </ul>
{% endif %}
  </div>
  <div>
{% for frame in frames %}
    <figure class="frame" data-frame="{{ frame.key }}">
{% if frame.src %}
      <img src="{{ frame.src }}" alt="{{ frame.caption }}">
{% else %}
      <div class="placeholder">{{ no_image }}</div>
{% endif %}
      <figcaption>{{ frame.caption }}</figcaption>
    </figure>
{% endfor %}
  </div>
</div>
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        review = context.result.ui_review
        if review is None:
            return False
        return any(
            (review.assessment, review.findings, review.suggestions, review.desktop_image, review.mobile_image)
        )

    def build(self, context: ReportContext) -> Dict[str, Any]:
        review = context.result.ui_review
        return {
            "assessment": review.assessment,
            "findings": review.findings,
            "suggestions": review.suggestions,
            "findings_label": context.text("ui_findings"),
            "suggestions_label": context.text("ui_suggestions"),
            "no_image": context.text("ui_no_image"),
            "frames": [
                {"key": "desktop", "caption": context.text("ui_desktop"), "src": safe_url(review.desktop_image)},
                {"key": "mobile", "caption": context.text("ui_mobile"), "src": safe_url(review.mobile_image)},
            ],
        }


class PainPointsSection(ReportSection):
    key = "pain_points"
    title_key = "section_pain_points"
    template = _compile(
        """<h2>{{ heading }}</h2>
{% for point in points %}
<div class="pain-point" style="break-inside: avoid;">
  <div class="card pain-problem"><strong>{{ problem_label }}:</strong> {{ point.issue }}</div>
  <div class="card pain-solution">
    <strong>{{ solution_label }}:</strong> {{ point.solution }}
{% if point.service %}
    <div><span class="tag">{{ service_label }}: {{ point.service }}</span></div>
{% endif %}
  </div>
</div>
{% endfor %}
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return bool(context.result.pain_points)

    def build(self, context: ReportContext) -> Dict[str, Any]:
        return {
            "points": [
                {"issue": point.issue, "solution": display_value(point.solution), "service": point.service}
                for point in context.result.pain_points
            ],
            "problem_label": context.text("pain_problem"),
            "solution_label": context.text("pain_solution"),
            "service_label": context.text("pain_service"),
        }


class RoadmapSection(ReportSection):
    key = "roadmap"
    title_key = "section_roadmap"
    page_break = True
    template = _compile(
        """<h2>{{ heading }}</h2>
<div class="grid grid-4">
{% for column in columns %}
  <div class="card roadmap-column" data-horizon="{{ column.key }}">
    <h3>{{ column.title }}</h3>
{% if column["items"] %}
    <ul>
{% for item in column["items"] %}
      <li><strong>{{ item.title }}</strong>{% if item.description %}<div class="muted">{{ item.description }}</div>{% endif %}</li>
{% endfor %}
    </ul>
{% else %}
    <div class="empty">{{ empty_label }}</div>
{% endif %}
  </div>
{% endfor %}
</div>
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return bool(context.result.roadmap)

    def build(self, context: ReportContext) -> Dict[str, Any]:
        grouped = context.result.roadmap_by_horizon()
        columns = [
            {"key": horizon.value, "title": context.text(f"roadmap_{horizon.value}"), "items": grouped[horizon]}
            for horizon in RoadmapHorizon
        ]
        return {"columns": columns, "empty_label": context.text("roadmap_empty")}


class RecommendationsSection(ReportSection):
    key = "recommendations"
    title_key = "section_recommendations"
    page_break = True
    template = _compile(
        """<h2>{{ heading }}</h2>
{% for item in items %}
<div class="card recommendation" data-priority="{{ item.priority }}">
  <div class="number">{{ loop.index }}</div>
  <div>
    <strong>{{ item.title }}</strong>
    <span class="badge" style="color: {{ item.style.color }}; background: {{ item.style.background }};">{{ item.priority_label }}</span>
{% if item.category %}
    <span class="tag">{{ item.category }}</span>
{% endif %}
{% if item.description %}
    <div class="muted">{{ item.description }}</div>
{% endif %}
{% if item.impact or item.effort %}
    <div class="muted">
{% if item.impact %}{{ impact_label }}: {{ item.impact }}{% endif %}
{% if item.impact and item.effort %} | {% endif %}
{% if item.effort %}{{ effort_label }}: {{ item.effort }}{% endif %}
    </div>
{% endif %}
  </div>
</div>
{% endfor %}
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return bool(context.result.recommendations)

    def build(self, context: ReportContext) -> Dict[str, Any]:
        items = []
        for item in context.result.recommendations:
            items.append(
                {
                    "title": item.title,
                    "description": item.description,
                    "category": item.category,
                    "impact": item.impact,
                    "effort": item.effort,
                    "priority": item.priority.value,
                    "priority_label": context.text(f"priority_{item.priority.value}"),
                    "style": PRIORITY_STYLES[item.priority],
                }
            )
        return {"items": items, "impact_label": context.text("impact"), "effort_label": context.text("effort")}


class InsightsSection(ReportSection):
    key = "insights"
    title_key = "section_insights"
    template = _compile(
        """<h2>{{ heading }}</h2>
{% for item in items %}
<div class="card insight" data-kind="{{ item.kind }}" style="border-left-color: {{ item.style.color }}; background: {{ item.style.background }};">
  <div class="icon">{{ item.style.icon }}</div>
  <div>
    <strong>{{ item.title }}</strong>
    <span class="badge" style="color: {{ item.style.color }};">{{ item.kind_label }}</span>
{% if item.description %}
    <div class="muted">{{ item.description }}</div>
{% endif %}
  </div>
</div>
{% endfor %}
"""
    )

    def is_present(self, context: ReportContext) -> bool:
        return bool(context.result.insights)

    def build(self, context: ReportContext) -> Dict[str, Any]:
        items = [
            {
                "title": insight.title,
                "description": insight.description,
                "kind": insight.kind.value,
                "kind_label": context.text(f"insight_{insight.kind.value}"),
                "style": INSIGHT_STYLES[insight.kind],
            }
            for insight in context.result.insights
        ]
        return {"items": items}


SECTION_ORDER: List[str] = [
    "overall",
    "scores",
    "summary",
    "technical_status",
    "compliance",
    "social_media",
    "ui_review",
    "pain_points",
    "roadmap",
    "recommendations",
    "insights",
]


def default_sections() -> List[ReportSection]:
    return [
        OverallScoreSection(),
        CategoryScoresSection(),
        SummarySection(),
        TechnicalStatusSection(),
        ComplianceSection(),
        SocialMediaSection(),
        UIReviewSection(),
        PainPointsSection(),
        RoadmapSection(),
        RecommendationsSection(),
        InsightsSection(),
    ]


def section_locale(locale: Optional[str]) -> str:
    return (locale or ExportConfig.locale()).lower()
