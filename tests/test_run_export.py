import json
import logging

import pytest

import run_export


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parse_column():
    column = run_export.parse_column("email:E-posta")
    assert (column.key, column.header) == ("email", "E-posta")
    assert run_export.parse_column("name").header == "name"


def test_infer_columns_keeps_first_seen_order():
    columns = run_export.infer_columns([{"b": 1, "a": 2}, {"c": 3, "a": 4}])
    assert [column.key for column in columns] == ["b", "a", "c"]


def test_table_export_writes_csv(tmp_path, restore_root_logging):
    source = tmp_path / "records.json"
    source.write_text(json.dumps([{"name": "Ada", "city": "İzmir"}]), encoding="utf-8")
    out_dir = tmp_path / "out"
    code = run_export.main(
        ["--output-dir", str(out_dir), "--no-browser", "table", str(source), "--columns", "name:Ad", "--filename", "people"]
    )
    assert code == 0
    data = (out_dir / "people.csv").read_bytes().decode("utf-8-sig")
    assert data == '"Ad"\n"Ada"'


def test_empty_table_exits_with_distinct_code(tmp_path, restore_root_logging):
    source = tmp_path / "records.json"
    source.write_text("[]", encoding="utf-8")
    code = run_export.main(["--output-dir", str(tmp_path), "--no-browser", "table", str(source)])
    assert code == 2
    assert not list(tmp_path.glob("*.csv"))


def test_analysis_export_writes_print_document(tmp_path, restore_root_logging):
    source = tmp_path / "result.json"
    source.write_text(json.dumps({"summary": "Solid"}), encoding="utf-8")
    code = run_export.main(
        ["--output-dir", str(tmp_path), "--no-browser", "analysis", str(source), "--subject", "Acme", "--score", "81"]
    )
    assert code == 0
    documents = list(tmp_path.glob("print_*.html"))
    assert len(documents) == 1
    assert "Solid" in documents[0].read_text(encoding="utf-8")
