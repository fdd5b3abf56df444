from typing import List, Tuple

from delivery import DeliverySurface
from export_service import ExportStatus, ReportExporter
from labels import label

COLUMNS = [("name", "Name"), ("status", "Status")]


class FakeSurface(DeliverySurface):
    def __init__(self, printable=True, fail_save=False):
        self.saved: List[Tuple[bytes, str, str]] = []
        self.printed: List[str] = []
        self.printable = printable
        self.fail_save = fail_save
        self.last_location = None

    def save(self, data, filename, mime_type):
        if self.fail_save:
            raise RuntimeError("disk full")
        self.saved.append((data, filename, mime_type))
        self.last_location = f"memory://{filename}"
        return self.last_location

    def present_and_print(self, markup):
        if not self.printable:
            return False
        self.printed.append(markup)
        self.last_location = "memory://print"
        return True


def exporter(**kwargs):
    surface = FakeSurface(**kwargs)
    return ReportExporter(surface, locale="en"), surface


def test_csv_export_saves_bom_prefixed_file():
    service, surface = exporter()
    outcome = service.export_csv([{"name": "Ada", "status": "pending"}], COLUMNS, "applicants")
    assert outcome.status is ExportStatus.OK
    assert outcome.ok
    assert outcome.location == "memory://applicants.csv"
    data, filename, mime_type = surface.saved[0]
    assert filename == "applicants.csv"
    assert data.startswith(b"\xef\xbb\xbf")
    assert mime_type == "text/csv;charset=utf-8;"


def test_excel_export_uses_xls_extension_and_sheet():
    service, surface = exporter()
    outcome = service.export_excel([{"name": "Ada"}], COLUMNS, "applicants.xls", sheet_name="Başvurular")
    assert outcome.status is ExportStatus.OK
    data, filename, mime_type = surface.saved[0]
    assert filename == "applicants.xls"
    assert "<x:Name>Başvurular</x:Name>" in data.decode("utf-8")
    assert mime_type.startswith("application/vnd.ms-excel")


def test_empty_batches_never_reach_the_surface():
    service, surface = exporter()
    for outcome in (
        service.export_csv([], COLUMNS, "x"),
        service.export_excel([], COLUMNS, "x"),
        service.export_pdf([], COLUMNS, "x", "Title"),
    ):
        assert outcome.status is ExportStatus.EMPTY
        assert outcome.message == label("nothing_to_export", "en")
    assert surface.saved == []
    assert surface.printed == []


def test_blocked_print_surface_is_reported_distinctly():
    service, surface = exporter(printable=False)
    outcome = service.export_pdf([{"name": "Ada"}], COLUMNS, "x", "Applicants")
    assert outcome.status is ExportStatus.SURFACE_UNAVAILABLE
    assert outcome.message == label("popup_blocked", "en")
    assert outcome.message != label("nothing_to_export", "en")


def test_unexpected_failures_are_contained():
    service, _ = exporter(fail_save=True)
    outcome = service.export_csv([{"name": "Ada"}], COLUMNS, "x")
    assert outcome.status is ExportStatus.FAILED
    assert outcome.message == label("export_failed", "en")
    assert outcome.details["error_type"] == "RuntimeError"
    assert outcome.details["context"]["operation"] == "export_csv"


def test_print_and_detail_exports_reach_the_surface():
    service, surface = exporter()
    assert service.export_pdf([{"name": "Ada"}], COLUMNS, "x", "Applicants").status is ExportStatus.OK
    detail = service.export_detail_pdf(
        {"name": "Ada"}, [{"title": "Profile", "fields": [{"key": "name", "label": "Name"}]}], "Ada"
    )
    assert detail.status is ExportStatus.OK
    assert detail.location == "memory://print"
    assert len(surface.printed) == 2
    assert "Profile" in surface.printed[1]


def test_analysis_report_export():
    service, surface = exporter()
    outcome = service.export_analysis_report(
        "Acme", "https://acme.example", 64, {"summary": "Solid basics", "scores": {"seo": 70}}
    )
    assert outcome.status is ExportStatus.OK
    html = surface.printed[0]
    assert "Acme" in html
    assert 'data-section="overall"' in html
    assert "Solid basics" in html


def test_analysis_report_with_blocked_surface():
    service, _ = exporter(printable=False)
    outcome = service.export_analysis_report("Acme", None, None, {"summary": "x"})
    assert outcome.status is ExportStatus.SURFACE_UNAVAILABLE


def test_generator_records_are_exported():
    service, surface = exporter()
    outcome = service.export_csv((row for row in [{"name": "Ada"}]), COLUMNS, "x")
    assert outcome.status is ExportStatus.OK
    assert surface.saved[0][0].decode("utf-8-sig") == '"Name","Status"\n"Ada",""'

    service.export_pdf((row for row in [{"name": "Ada"}]), COLUMNS, "x", "Applicants")
    assert "Ada" in surface.printed[0]


def test_empty_generator_is_reported_as_empty():
    service, surface = exporter()
    outcome = service.export_excel((row for row in []), COLUMNS, "x")
    assert outcome.status is ExportStatus.EMPTY
    assert surface.saved == []


def test_print_export_uses_exporter_locale():
    service, surface = exporter()
    service.export_pdf([{"name": "Ada"}], COLUMNS, "x", "Applicants")
    assert label("total_records", "en") in surface.printed[0]
