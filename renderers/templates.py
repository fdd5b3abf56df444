"""Templating utilities for the export renderers."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, StrictUndefined

from config import ExportConfig
from labels import label

PRINT_SCRIPT = """
<script>
  window.onload = function() {
    window.print();
    window.onafterprint = function() {
      window.close();
    };
  };
</script>
"""

PRINT_BASE = """<!DOCTYPE html>
<html lang="{{ locale }}">
<head>
  <meta charset="UTF-8">
  <title>{{ title }}</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: {{ body_font|safe }};
      padding: 40px;
      color: #333;
      font-size: 12px;
      line-height: 1.5;
    }
    .header {
      display: flex;
      justify-content: space-between;
      align-items: center;
      margin-bottom: 30px;
      padding-bottom: 20px;
      border-bottom: 2px solid {{ accent }};
    }
    .logo { font-size: 24px; font-weight: bold; color: {{ accent }}; }
    .date { color: #666; font-size: 11px; }
    h1 { font-size: 20px; margin-bottom: 20px; color: #1a1a1a; }
    .footer {
      margin-top: 40px;
      padding-top: 20px;
      border-top: 1px solid #eee;
      text-align: center;
      color: #999;
      font-size: 10px;
    }
    @media print {
      body { padding: 20px; }
      .no-print { display: none; }
    }
{% block styles %}{% endblock %}
  </style>
</head>
<body>
  <div class="header">
    <div class="logo">{{ brand }}</div>
    <div class="date">{{ generated_label }}: {{ generated_at }}</div>
  </div>
{% block content %}{% endblock %}
  <div class="footer">{{ footer }}</div>
{{ print_script|safe }}
</body>
</html>
"""

PRINT_TABLE = """{% extends "print_base.html" %}
{% block styles %}
    .stats { display: flex; gap: 20px; margin-bottom: 20px; }
    .stat-box { background: #f5f5f5; padding: 10px 20px; border-radius: 8px; }
    .stat-box strong { display: block; font-size: 18px; color: {{ accent }}; }
    .stat-box span { font-size: 11px; color: #666; }
    table { width: 100%; border-collapse: collapse; margin-top: 20px; }
    th {
      background-color: {{ accent }};
      color: white;
      padding: 12px 8px;
      text-align: left;
      font-weight: 600;
      font-size: 11px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    td { padding: 10px 8px; border-bottom: 1px solid #eee; font-size: 11px; }
    tr.even { background-color: #fafafa; }
    tr.odd { background-color: white; }
{% endblock %}
{% block content %}
  <h1>{{ title }}</h1>
  <div class="stats">
    <div class="stat-box">
      <strong>{{ record_count }}</strong>
      <span>{{ total_label }}</span>
    </div>
  </div>
  <table>
    <thead>
      <tr>
{% for header in headers %}
        <th>{{ header }}</th>
{% endfor %}
      </tr>
    </thead>
    <tbody>
{% for row in rows %}
      <tr class="{{ loop.cycle('even', 'odd') }}">
{% for cell in row %}
        <td>{{ cell }}</td>
{% endfor %}
      </tr>
{% endfor %}
    </tbody>
  </table>
{% endblock %}
"""

DETAIL = """{% extends "print_base.html" %}
{% block styles %}
    body { font-size: 13px; line-height: 1.6; }
    h1 { font-size: 22px; margin-bottom: 30px; }
    .section {
      margin-bottom: 30px;
      padding: 20px;
      background: #fafafa;
      border-radius: 12px;
      border: 1px solid #eee;
    }
    .section h2 {
      font-size: 14px;
      color: {{ accent }};
      margin-bottom: 15px;
      padding-bottom: 10px;
      border-bottom: 1px solid #eee;
      text-transform: uppercase;
      letter-spacing: 1px;
    }
    .fields { display: grid; grid-template-columns: repeat(2, 1fr); gap: 15px; }
    .field { display: flex; flex-direction: column; }
    .field label {
      font-size: 11px;
      color: #888;
      margin-bottom: 4px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    .field span { color: #333; font-size: 13px; white-space: pre-wrap; }
    @media print { .section { break-inside: avoid; } }
{% endblock %}
{% block content %}
  <h1>{{ title }}</h1>
{% for section in sections %}
  <div class="section">
    <h2>{{ section.title }}</h2>
    <div class="fields">
{% for field in section.fields %}
      <div class="field">
        <label>{{ field.label }}</label>
        <span>{{ field.value }}</span>
      </div>
{% endfor %}
    </div>
  </div>
{% endfor %}
{% endblock %}
"""

SPREADSHEET = """<html xmlns:o="urn:schemas-microsoft-com:office:office" xmlns:x="urn:schemas-microsoft-com:office:excel" xmlns="http://www.w3.org/TR/REC-html40">
<head>
  <meta charset="UTF-8">
  <!--[if gte mso 9]>
  <xml>
    <x:ExcelWorkbook>
      <x:ExcelWorksheets>
        <x:ExcelWorksheet>
          <x:Name>{{ sheet_name }}</x:Name>
          <x:WorksheetOptions>
            <x:DisplayGridlines/>
          </x:WorksheetOptions>
        </x:ExcelWorksheet>
      </x:ExcelWorksheets>
    </x:ExcelWorkbook>
  </xml>
  <![endif]-->
  <style>
    table { border-collapse: collapse; }
    th { background-color: {{ accent }}; color: white; font-weight: bold; padding: 8px; border: 1px solid #ddd; }
    td { padding: 8px; border: 1px solid #ddd; mso-number-format: "\\@"; }
    tr:nth-child(even) { background-color: #f9f9f9; }
  </style>
</head>
<body>
  <table>
    <thead>
      <tr>
{% for header in headers %}
        <th>{{ header }}</th>
{% endfor %}
      </tr>
    </thead>
    <tbody>
{% for row in rows %}
      <tr>
{% for cell in row %}
        <td>{{ cell }}</td>
{% endfor %}
      </tr>
{% endfor %}
    </tbody>
  </table>
</body>
</html>
"""

ANALYSIS_REPORT = """{% extends "print_base.html" %}
{% block styles %}
    body { font-size: 12px; color: #1f2937; }
    .cover { margin-bottom: 28px; }
    .cover h1 { font-size: 26px; margin-bottom: 6px; }
    .cover .subject { font-size: 16px; font-weight: 600; color: {{ accent }}; }
    .cover .url { font-size: 11px; color: #6b7280; }
    .report-section { margin-bottom: 26px; }
    .report-section h2 {
      font-size: 15px;
      color: #111827;
      margin-bottom: 12px;
      padding-bottom: 6px;
      border-bottom: 2px solid {{ accent }};
    }
    .page-break { page-break-before: always; break-before: page; }
    .card { border: 1px solid #e5e7eb; border-radius: 10px; padding: 12px 14px; background: #fff; }
    .grid { display: grid; gap: 12px; }
    .grid-2 { grid-template-columns: repeat(2, 1fr); }
    .grid-3 { grid-template-columns: repeat(3, 1fr); }
    .grid-4 { grid-template-columns: repeat(4, 1fr); }
    .muted { color: #6b7280; }
    .callout { border-radius: 10px; padding: 12px 14px; margin-top: 12px; }
    .callout-warning { background: #fffbeb; border: 1px solid #fde68a; color: #92400e; }
    .callout-info { background: #eff6ff; border: 1px solid #bfdbfe; color: #1e3a8a; }
    .ring-wrap { display: flex; align-items: center; gap: 24px; }
    .ring-value { font-size: 34px; font-weight: 700; }
    .score-card .value { font-size: 22px; font-weight: 700; }
    .score-card .bar { height: 6px; border-radius: 3px; background: #f3f4f6; margin-top: 6px; }
    .score-card .bar span { display: block; height: 6px; border-radius: 3px; }
    .metric .label { font-size: 10px; text-transform: uppercase; letter-spacing: 0.5px; color: #6b7280; }
    .metric .value { font-size: 16px; font-weight: 600; margin-top: 4px; }
    .flag-ok { color: #10b981; }
    .flag-missing { color: #ef4444; }
    .ui-columns { display: grid; grid-template-columns: 3fr 2fr; gap: 16px; }
    .frame { border: 1px solid #e5e7eb; border-radius: 8px; padding: 8px; margin-bottom: 10px; text-align: center; }
    .frame img { max-width: 100%; border-radius: 4px; }
    .frame .placeholder { padding: 30px 0; color: #9ca3af; }
    .frame figcaption { font-size: 10px; color: #6b7280; margin-top: 4px; }
    .pain-problem { background: #fef2f2; border-color: #fecaca; margin-top: 10px; }
    .pain-solution { background: #ecfdf5; border-color: #a7f3d0; margin-top: 4px; }
    .tag { display: inline-block; font-size: 10px; padding: 2px 8px; border-radius: 999px; background: #eef2ff; color: #3730a3; margin-top: 6px; }
    .roadmap-column h3 { font-size: 12px; margin-bottom: 8px; }
    .roadmap-column li { margin-bottom: 6px; list-style: none; }
    .roadmap-column .empty { color: #9ca3af; font-style: italic; }
    .recommendation { display: flex; gap: 12px; margin-bottom: 10px; break-inside: avoid; }
    .recommendation .number {
      min-width: 26px; height: 26px; border-radius: 50%;
      background: {{ accent }}; color: #fff; text-align: center; line-height: 26px; font-weight: 700;
    }
    .badge { display: inline-block; font-size: 10px; padding: 2px 8px; border-radius: 999px; margin-left: 6px; }
    .insight { display: flex; gap: 10px; margin-bottom: 8px; border-left: 4px solid; break-inside: avoid; }
    ul.plain { padding-left: 18px; }
{% endblock %}
{% block content %}
  <div class="cover">
    <h1>{{ report_title }}</h1>
    <div class="subject">{{ subject_name }}</div>
{% if subject_href %}
    <div class="url"><a href="{{ subject_href }}">{{ subject_url }}</a></div>
{% elif subject_url %}
    <div class="url">{{ subject_url }}</div>
{% endif %}
  </div>
{% for block in blocks %}
  <div class="report-section{% if block.page_break %} page-break{% endif %}" data-section="{{ block.key }}">
{{ block.html|safe }}
  </div>
{% endfor %}
{% endblock %}
"""

ENV = Environment(
    loader=DictLoader(
        {
            "print_base.html": PRINT_BASE,
            "print_table.html": PRINT_TABLE,
            "detail.html": DETAIL,
            "spreadsheet.html": SPREADSHEET,
            "analysis_report.html": ANALYSIS_REPORT,
        }
    ),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


def format_timestamp(value: Optional[datetime] = None) -> str:
    return (value or datetime.now()).strftime(ExportConfig.DATE_FORMAT)


def document_chrome(
    title: str,
    *,
    generated_at: Optional[datetime] = None,
    locale: Optional[str] = None,
    footer_key: str = "footer_note",
) -> Dict[str, Any]:
    """Shared context for the branded header/footer of every print document."""

    moment = generated_at or datetime.now()
    locale = locale or ExportConfig.locale()
    return {
        "title": title,
        "locale": locale,
        "brand": ExportConfig.BRAND_NAME,
        "accent": ExportConfig.ACCENT_COLOR,
        "body_font": ExportConfig.BODY_FONT,
        "generated_label": label("generated_at", locale),
        "generated_at": format_timestamp(moment),
        "footer": label(footer_key, locale, brand=ExportConfig.BRAND_NAME, year=moment.year),
        "print_script": PRINT_SCRIPT,
    }


def render_template(name: str, context: Dict[str, Any]) -> str:
    return ENV.get_template(name).render(**context)
