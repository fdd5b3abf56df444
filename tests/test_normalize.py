from datetime import date, datetime

from config import ExportConfig
from labels import label
from normalize import display_value, format_date_for_export, format_status_for_export, normalize_value


class _Unprintable:
    def __str__(self):
        raise RuntimeError("no text form")


def test_null_uses_placeholder():
    assert normalize_value(None) == ""
    assert normalize_value(None, "n/a") == "n/a"
    assert display_value(None) == "-"


def test_sequences_join_with_comma():
    assert normalize_value(["react", "python", 3]) == "react, python, 3"
    assert normalize_value(("a",)) == "a"
    assert normalize_value({"b", "a"}) == "a, b"
    assert normalize_value([]) == ""


def test_mapping_becomes_compact_json():
    assert normalize_value({"city": "İstanbul", "zip": 34000}) == '{"city":"İstanbul","zip":34000}'
    assert normalize_value({"when": date(2024, 1, 2)}) == '{"when":"2024-01-02"}'


def test_scalars():
    assert normalize_value("plain") == "plain"
    assert normalize_value(True) == "true"
    assert normalize_value(False) == "false"
    assert normalize_value(0) == "0"
    assert normalize_value(2.5) == "2.5"
    assert normalize_value(b"caf\xc3\xa9") == "café"
    assert normalize_value(datetime(2024, 3, 5, 14, 30)) == "2024-03-05T14:30:00"


def test_unprintable_value_never_raises():
    text = normalize_value(_Unprintable())
    assert "_Unprintable" in text


def test_format_date_for_export():
    assert format_date_for_export(None) == "-"
    assert format_date_for_export("") == "-"
    expected = datetime(2024, 3, 5, 14, 30).strftime(ExportConfig.DATE_FORMAT)
    assert format_date_for_export("2024-03-05T14:30:00Z") == expected
    assert format_date_for_export(datetime(2024, 3, 5, 14, 30)) == expected
    assert format_date_for_export("2024-03-05", "%Y/%m/%d") == "2024/03/05"
    assert format_date_for_export("not a date") == "not a date"


def test_format_status_for_export():
    assert format_status_for_export("pending", "en") == "Pending"
    assert format_status_for_export("in-progress", "tr") == "Devam Ediyor"
    assert format_status_for_export("APPROVED", "en") == label("status_approved", "en")
    assert format_status_for_export("archived", "en") == "archived"
    assert format_status_for_export(None, "en") == ""


def test_label_falls_back_to_english_then_key():
    assert label("total_records", "de") == "Total Records"
    assert label("does_not_exist", "tr") == "does_not_exist"
    assert label("report_footer", "en", brand="ACME", year=2024) == "This report was prepared by ACME. © 2024"


def test_self_referencing_list_never_raises():
    items = ["x"]
    items.append(items)
    text = normalize_value(items)
    assert text.startswith("x, ")
    assert "[...]" in text


def test_mapping_with_self_reference_never_raises():
    payload = {"name": "loop"}
    payload["self"] = payload
    assert "loop" in normalize_value(payload)
