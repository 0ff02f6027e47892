from __future__ import annotations

import csv
import io
import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from sfafkit.codec import serialize_record
from sfafkit.export import CSV_COLUMNS, export_record, persist_export
from sfafkit.typing.enums import ExportFormat
from sfafkit.typing.models import Record

if TYPE_CHECKING:
    from pathlib import Path

GENERATED_AT = datetime(2025, 1, 31, 12, 0, tzinfo=UTC)


@pytest.fixture
def record() -> Record:
    return Record.from_mapping({"501": ["first", "second"], "005": "U", "999": "extra"})


def test_export_sfaf_matches_codec(record: Record) -> None:
    assert export_record(record, generated_at=GENERATED_AT) == serialize_record(record, generated_at=GENERATED_AT)


def test_export_sfaf_custom_publication(record: Record) -> None:
    text = export_record(record, "SFAF", generated_at=GENERATED_AT, publication="Local Publication")

    assert text.splitlines()[1] == "Local Publication"


def test_export_json_groups_occurrences(record: Record) -> None:
    payload = json.loads(export_record(record, ExportFormat.JSON))

    assert payload["fields"] == [
        {"field_id": "005", "title": "Security Classification", "occurrences": ["U"]},
        {"field_id": "501", "title": "Notes/Comments", "occurrences": ["first", "second"]},
        {"field_id": "999", "title": None, "occurrences": ["extra"]},
    ]


def test_export_csv_rows(record: Record) -> None:
    rows = list(csv.reader(io.StringIO(export_record(record, "csv"))))

    assert tuple(rows[0]) == CSV_COLUMNS
    assert rows[1:] == [
        ["005", "1", "Security Classification", "U"],
        ["501", "1", "Notes/Comments", "first"],
        ["501", "2", "Notes/Comments", "second"],
        ["999", "1", "", "extra"],
    ]


def test_export_rejects_unknown_format(record: Record) -> None:
    with pytest.raises(ValueError, match="Unsupported ExportFormat value 'xml'"):
        export_record(record, "xml")


def test_persist_export_creates_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "record.sfaf"

    persist_export("005. U\n", path)

    assert path.read_text(encoding="utf-8") == "005. U\n"
