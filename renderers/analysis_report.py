"""Composer for the multi-section digital analysis report."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from labels import label
from models import AnalysisResult

from .sections import SECTION_ORDER, ReportContext, ReportSection, default_sections, safe_url, section_locale
from .templates import document_chrome, render_template

logger = logging.getLogger(__name__)


class AnalysisReportComposer:
    """Render the sections present in an analysis result in canonical order.

    Sections are sorted by ``SECTION_ORDER`` whatever order they were passed
    in. Each rendered section is wrapped in a ``report-section`` block that
    carries its key and, for roadmap and recommendations, a page break.
    """

    def __init__(self, sections: Optional[Iterable[ReportSection]] = None, locale: Optional[str] = None) -> None:
        chosen = list(sections) if sections is not None else default_sections()
        rank = {key: index for index, key in enumerate(SECTION_ORDER)}
        self.sections: List[ReportSection] = sorted(chosen, key=lambda section: rank.get(section.key, len(rank)))
        self.locale = section_locale(locale)

    def blocks(self, context: ReportContext) -> List[Dict[str, Any]]:
        rendered: List[Dict[str, Any]] = []
        for section in self.sections:
            if not section.is_present(context):
                continue
            rendered.append({"key": section.key, "page_break": section.page_break, "html": section.render(context)})
        logger.debug("Analysis report sections: %s", [block["key"] for block in rendered])
        return rendered

    def render(
        self,
        subject_name: str,
        subject_url: Optional[str],
        overall_score: Optional[float],
        result: Any,
        generated_at: Optional[datetime] = None,
    ) -> str:
        parsed = AnalysisResult.from_payload(result if result is not None else {})
        context = ReportContext(result=parsed, overall_score=overall_score, locale=self.locale)
        title = label("analysis_title", self.locale)
        page = document_chrome(
            f"{title} - {subject_name}" if subject_name else title,
            generated_at=generated_at,
            locale=self.locale,
            footer_key="report_footer",
        )
        page.update(
            {
                "report_title": title,
                "subject_name": subject_name or "",
                "subject_url": subject_url or "",
                "subject_href": safe_url(subject_url),
                "blocks": self.blocks(context),
            }
        )
        return render_template("analysis_report.html", page)


def render_analysis_report(
    subject_name: str,
    subject_url: Optional[str],
    overall_score: Optional[float],
    result: Any,
    generated_at: Optional[datetime] = None,
    locale: Optional[str] = None,
) -> str:
    return AnalysisReportComposer(locale=locale).render(
        subject_name, subject_url, overall_score, result, generated_at=generated_at
    )
