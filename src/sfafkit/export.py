"""Record export to SFAF text, JSON and CSV."""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING

from sfafkit.codec import serialize_record
from sfafkit.schema import get_registry
from sfafkit.typing.enums import ExportFormat
from sfafkit.typing.models.export import ExportedField, ExportedRecord

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from sfafkit.schema import FieldSchemaRegistry
    from sfafkit.typing.models import Record

CSV_COLUMNS = ("field", "occurrence", "title", "value")


def _to_json(record: Record, registry: FieldSchemaRegistry) -> str:
    exported = ExportedRecord()
    for item in record.field_values(order=registry.all_field_ids()):
        if item.occurrence == 1:
            spec = registry.get_spec(item.field_id)
            exported.fields.append(ExportedField(field_id=item.field_id, title=spec.title if spec else None))
        exported.fields[-1].occurrences.append(item.value)
    return exported.model_dump_json(indent=2)


def _to_csv(record: Record, registry: FieldSchemaRegistry) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for item in record.field_values(order=registry.all_field_ids()):
        spec = registry.get_spec(item.field_id)
        writer.writerow((item.field_id, item.occurrence, spec.title if spec else "", item.value))
    return buffer.getvalue()


def export_record(
    record: Record,
    fmt: ExportFormat | str = ExportFormat.SFAF,
    *,
    generated_at: datetime | None = None,
    publication: str | None = None,
    registry: FieldSchemaRegistry | None = None,
) -> str:
    """Render a record in one of the supported export formats.

    Args:
        record (Record): Record to export.
        fmt (ExportFormat | str): Target format.
        generated_at (datetime | None): SFAF header timestamp.
        publication (str | None): SFAF header publication line.
        registry (FieldSchemaRegistry | None): Schema providing order and titles.

    Raises:
        ValueError: If `fmt` is not a supported format.

    Returns:
        str: Exported text.
    """
    export_format = fmt if isinstance(fmt, ExportFormat) else ExportFormat.from_str(fmt.lower())
    schema = registry or get_registry()

    if export_format is ExportFormat.JSON:
        return _to_json(record, schema)
    if export_format is ExportFormat.CSV:
        return _to_csv(record, schema)

    options = {"publication": publication} if publication else {}
    return serialize_record(record, generated_at=generated_at, registry=schema, **options)


def persist_export(content: str, path: Path) -> None:
    """Write exported content, creating parent directories.

    Args:
        content (str): Exported text.
        path (Path): Output path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
