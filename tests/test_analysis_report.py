from datetime import datetime

from labels import label
from models import AnalysisResult
from renderers.analysis_report import AnalysisReportComposer, render_analysis_report
from renderers.sections import SECTION_ORDER, CategoryScoresSection, RecommendationsSection, safe_url


def full_payload():
    return {
        "summary": "Strong brand, weak mobile experience.",
        "scores": {"website": 82, "seo": {"score": 11, "maxScore": 20, "label": "Arama Motoru"}, "overall": 71},
        "technical_status": {"ssl_enabled": True, "ssl_grade": "A", "mobile_score": 45, "desktop_score": 88,
                             "lcp_mobile": "4.1s"},
        "compliance": {"kvkk": True, "cookie_policy": False, "etbis": True},
        "social_media": {"linkedin": "https://linkedin.com/company/acme", "instagram": None,
                         "overall_assessment": "LinkedIn only."},
        "ui_review": {"assessment": "Clean layout.", "findings": ["Small tap targets"],
                      "suggestions": ["Larger buttons"], "desktop_image": "https://cdn.example.com/desktop.png"},
        "pain_points": [{"issue": "Slow mobile site", "solution": "Image compression", "service": "Web Performance"}],
        "roadmap": [
            {"title": "Fix cookie banner", "category": "immediate"},
            {"title": "Mobile redesign", "category": "long_term"},
        ],
        "recommendations": [
            {"title": "Publish a cookie policy", "priority": "high", "impact": "Legal safety", "effort": "Low"},
            {"title": "Start an Instagram account", "priority": "low"},
        ],
        "insights": [
            {"type": "positive", "title": "Valid SSL"},
            {"type": "negative", "title": "Missing cookie policy", "description": "KVKK risk"},
        ],
    }


def render(payload, overall=71, **kwargs):
    return render_analysis_report(
        "Acme Ltd.", "https://acme.example", overall, payload,
        generated_at=datetime(2024, 6, 1, 12, 0), locale="en", **kwargs
    )


def section_marker(key, page_break=False):
    css = "report-section page-break" if page_break else "report-section"
    return f'class="{css}" data-section="{key}"'


def test_full_report_renders_every_section_in_order():
    html = render(full_payload())
    positions = [html.index(f'data-section="{key}"') for key in SECTION_ORDER]
    assert positions == sorted(positions)
    assert "Acme Ltd." in html
    assert '<a href="https://acme.example">https://acme.example</a>' in html
    assert "window.print()" in html
    assert "© 2024" in html


def test_only_present_sections_render():
    html = render({"scores": {"seo": 40}, "recommendations": [{"title": "Add meta tags"}]}, overall=None)
    assert section_marker("scores") in html
    assert section_marker("recommendations", page_break=True) in html
    for key in SECTION_ORDER:
        if key not in ("scores", "recommendations"):
            assert f'data-section="{key}"' not in html


def test_overall_ring_needs_overall_score():
    assert 'data-section="overall"' not in render({"summary": "x"}, overall=None)
    html = render({"summary": "x"}, overall=85)
    assert section_marker("overall") in html
    assert "#10b981" in html
    assert "85/100" in html


def test_empty_result_renders_frame_only():
    html = render({}, overall=None)
    assert "data-section=" not in html
    assert "Acme Ltd." in html


def test_category_cards_use_tiers_and_labels():
    html = render(full_payload())
    assert 'data-tier="good"' in html
    assert 'data-tier="poor"' in html
    assert "Arama Motoru" in html
    assert "Website" in html
    # overall belongs to the ring, not to a category card
    assert html.count('class="card score-card"') == 2


def test_page_breaks_only_on_roadmap_and_recommendations():
    html = render(full_payload())
    assert section_marker("roadmap", page_break=True) in html
    assert section_marker("recommendations", page_break=True) in html
    assert html.count("report-section page-break") == 2
    assert "page-break-before: always" in html


def test_roadmap_always_has_four_columns():
    html = render(full_payload())
    assert html.count("data-horizon=") == 4
    assert html.index('data-horizon="immediate"') < html.index('data-horizon="short_term"')
    assert html.index('data-horizon="medium_term"') < html.index('data-horizon="long_term"')
    assert html.count(label("roadmap_empty", "en")) == 2


def test_compliance_warning_only_when_a_flag_fails():
    assert label("compliance_warning", "en") in render(full_payload())
    passing = {"compliance": {"kvkk": True, "cookie_policy": True, "etbis": True}}
    html = render(passing)
    assert section_marker("compliance") in html
    assert label("compliance_warning", "en") not in html


def test_ui_review_frames_show_placeholder_for_missing_image():
    html = render(full_payload())
    assert '<img src="https://cdn.example.com/desktop.png"' in html
    assert html.count(label("ui_no_image", "en")) == 1
    assert "Small tap targets" in html
    assert "Larger buttons" in html


def test_pain_point_problem_precedes_its_solution():
    html = render(full_payload())
    assert html.index("Slow mobile site") < html.index("Image compression") < html.index("Web Performance")


def test_recommendations_are_numbered_with_priority_badges():
    html = render(full_payload())
    assert 'data-priority="high"' in html
    assert 'data-priority="low"' in html
    assert '<div class="number">2</div>' in html
    assert "Legal safety" in html


def test_insight_kinds_are_styled():
    html = render(full_payload())
    assert 'data-kind="positive"' in html
    assert 'data-kind="negative"' in html
    assert "KVKK risk" in html


def test_free_text_is_escaped():
    payload = {
        "summary": "<script>alert('x')</script>",
        "recommendations": [{"title": "<b>bold</b>"}],
    }
    html = render_analysis_report("<img src=x onerror=alert(1)>", "javascript:alert(1)", None, payload, locale="en")
    assert "<script>alert(" not in html
    assert "&lt;script&gt;" in html
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "<img src=x" not in html
    assert 'href="javascript:' not in html


def test_accepts_parsed_result():
    result = AnalysisResult.from_payload({"summary": "Parsed already"})
    html = render(result, overall=None)
    assert "Parsed already" in html


def test_composer_enforces_order_of_custom_sections():
    composer = AnalysisReportComposer(sections=[RecommendationsSection(), CategoryScoresSection()], locale="en")
    html = composer.render("Acme", None, None, {"scores": {"seo": 90}, "recommendations": [{"title": "Keep going"}]})
    assert html.index('data-section="scores"') < html.index('data-section="recommendations"')


def test_safe_url():
    assert safe_url("https://a.example/x.png") == "https://a.example/x.png"
    assert safe_url("data:image/png;base64,AAAA") == "data:image/png;base64,AAAA"
    assert safe_url("javascript:alert(1)") is None
    assert safe_url(None) is None


def test_huge_scores_do_not_break_the_report():
    html = render({"scores": {"seo": 10**400, "website": 64}}, overall=10**400)
    assert section_marker("overall") in html
    assert "100/100" in html
    assert html.count('class="card score-card"') == 1


def test_placeholder_platform_renders_as_not_found():
    html = render({"social_media": {"linkedin": {"url": "N/A"}}})
    assert section_marker("social_media") in html
    assert "N/A" not in html
    assert 'class="value flag-missing"' in html
    assert 'class="value flag-ok"' not in html
    assert label("social_absent", "en") in html


def test_numeric_pain_point_still_renders():
    html = render({"pain_points": [{"issue": 404, "solution": "fix"}]})
    assert section_marker("pain_points") in html
    assert "404" in html
