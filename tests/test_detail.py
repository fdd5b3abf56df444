from models import DetailSection, FieldSpec
from normalize import format_date_for_export
from renderers.detail import render_detail


def _explode(value):
    raise ValueError("bad value")


def sample_sections():
    return [
        DetailSection(
            title="Kişisel Bilgiler",
            fields=[
                FieldSpec(key="name", label="Ad Soyad"),
                FieldSpec(key="created_at", label="Başvuru Tarihi", formatter=format_date_for_export),
            ],
        ),
        {
            "title": "Deneyim",
            "fields": [
                {"key": "skills", "label": "Yetenekler"},
                {"key": "portfolio", "label": "Portfolyo"},
                {"key": "score", "label": "Skor", "formatter": _explode},
            ],
        },
    ]


def test_every_field_is_rendered_with_placeholder_for_missing():
    record = {"name": "Ece <Demir>", "created_at": "2024-05-01T10:00:00", "skills": ["ux", "figma"], "score": 88}
    html = render_detail(record, sample_sections(), "Başvuru Detayı", locale="tr")
    for text in ("Kişisel Bilgiler", "Deneyim", "Ad Soyad", "Başvuru Tarihi", "Yetenekler", "Portfolyo", "Skor"):
        assert text in html
    assert "Ece &lt;Demir&gt;" in html
    assert "ux, figma" in html
    assert "<span>-</span>" in html
    assert "window.print()" in html


def test_formatter_is_applied_and_failures_fall_back_to_raw_value():
    record = {"name": "x", "created_at": "2024-05-01T10:00:00", "score": 88}
    html = render_detail(record, sample_sections(), "Detay")
    assert format_date_for_export("2024-05-01T10:00:00") in html
    assert "<span>88</span>" in html


def test_sections_keep_their_order():
    html = render_detail({}, sample_sections(), "Detay")
    assert html.index("Kişisel Bilgiler") < html.index("Deneyim")
