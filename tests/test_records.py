"""Tests for loading parser hand-off records."""

from __future__ import annotations

from pathlib import Path

import pytest

from testdoc.records import RecordsError, load_records, parse_records
from tests._fixtures.records_builder import RecordsBuilder


def test_json_round_trip(records_builder: RecordsBuilder) -> None:
    records_builder.add_class(
        "LoginTests",
        [records_builder.method("testLogin", "assertTrue(ok);", "Feature: Login")],
    )
    path = records_builder.write_json()

    classes = load_records(path)

    assert classes == records_builder.classes()


def test_yaml_records(tmp_path: Path) -> None:
    path = tmp_path / "records.yml"
    path.write_text(
        """
classes:
  - class_name: ApiTests
    package_name: com.example.api
    methods:
      - name: TC01_statusIsOk
        body_text: |
          Assert.assertEquals(code, 200, "Status code should be 200 OK");
        tags: "Feature: API"
      - name: testHealth
""",
        encoding="utf-8",
    )

    classes = load_records(path)

    assert len(classes) == 1
    api = classes[0]
    assert api.package_name == "com.example.api"
    assert api.methods[0].tags == ("Feature: API",)
    assert api.methods[0].body_text is not None
    assert api.methods[1].body_text is None
    assert api.methods[1].tags == ()


def test_bare_list_is_accepted() -> None:
    classes = parse_records([{"class_name": "A", "methods": [{"name": "test"}]}])
    assert classes[0].package_name == ""
    assert classes[0].methods[0].name == "test"


def test_empty_document_has_no_classes() -> None:
    assert parse_records(None) == []


@pytest.mark.parametrize(
    "data",
    [
        {"classes": "nope"},
        [{"methods": []}],
        [{"class_name": "A", "methods": [{"tags": []}]}],
        [{"class_name": "A", "methods": [{"name": "m", "tags": {"a": 1}}]}],
        ["not a mapping"],
    ],
)
def test_malformed_documents_raise(data: object) -> None:
    with pytest.raises(RecordsError):
        parse_records(data)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "absent.json")


def test_unparseable_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RecordsError, match="records.json"):
        load_records(path)


def test_non_utf8_records_raise_records_error(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_bytes(b'{"classes": ["\xff"]}')

    with pytest.raises(RecordsError, match="not valid UTF-8"):
        load_records(path)
