"""SFAF text record codec.

Records are exchanged as line-oriented text. Each field occurrence sits on its own
line as `NNN. value` for the first occurrence and `NNN/OO. value` for later ones,
wrapped between a fixed banner header and footer:

    ***** STANDARD FREQUENCY ACTION FORMAT (SFAF) *****
    MCEB Publication 7, June 30, 2005
    Generated: 2025-01-31T12:00:00+00:00

    005. U
    501. first
    501/02. second

    ***** END OF SFAF RECORD *****
"""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sfafkit.logging import get_logger
from sfafkit.schema import get_registry
from sfafkit.settings import DEFAULT_IMPORT_SKIP_FIELDS as _SKIP_FIELDS_SETTING
from sfafkit.settings import DEFAULT_PUBLICATION_REFERENCE
from sfafkit.typing.models import Record

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from sfafkit.schema import FieldSchemaRegistry

logger = get_logger(__name__)

SFAF_HEADER = "***** STANDARD FREQUENCY ACTION FORMAT (SFAF) *****"
SFAF_FOOTER = "***** END OF SFAF RECORD *****"
COMPUTER_GENERATED_MARKERS: tuple[str, ...] = ("*****", "MCEB Publication", "Generated:", "System:")
DEFAULT_IMPORT_SKIP_FIELDS: frozenset[str] = frozenset(_SKIP_FIELDS_SETTING.split(","))

_LINE_RE = re.compile(r"^(\d{3})(?:/(\d{2}))?\.\s*(.+)$")


def is_computer_generated(line: str) -> bool:
    """Return whether a line is blank or was written by an exporting system.

    Args:
        line (str): Raw text line.

    Returns:
        bool: True for blank lines, banner lines and system/publication marker lines.
    """
    stripped = line.strip()
    if not stripped:
        return True
    lowered = stripped.lower()
    return any(lowered.startswith(marker.lower()) for marker in COMPUTER_GENERATED_MARKERS)


def _first_free_occurrence(taken: Iterable[int]) -> int:
    used = set(taken)
    occurrence = 1
    while occurrence in used:
        occurrence += 1
    return occurrence


def parse_record(text: str, *, skip_fields: Collection[str] | None = None) -> Record:
    """Parse SFAF text into a record.

    Lines that are not field lines are ignored. A line without `/OO` takes occurrence 1,
    or the lowest occurrence of its field not yet taken. Explicit occurrence
    numbers are kept in order but renumbered from 1 when they leave gaps.

    Args:
        text (str): SFAF text.
        skip_fields (Collection[str] | None): Derived fields dropped on import;
            defaults to `DEFAULT_IMPORT_SKIP_FIELDS`.

    Returns:
        Record: Parsed record.
    """
    skipped_ids = DEFAULT_IMPORT_SKIP_FIELDS if skip_fields is None else frozenset(skip_fields)
    collected: dict[str, list[tuple[int, int, str]]] = defaultdict(list)
    skipped: set[str] = set()

    for sequence, line in enumerate(text.splitlines()):
        if is_computer_generated(line):
            continue
        match = _LINE_RE.fullmatch(line.strip())
        if match is None:
            continue

        field_id, explicit, value = match.group(1), match.group(2), match.group(3).strip()
        if field_id in skipped_ids:
            skipped.add(field_id)
            continue

        entries = collected[field_id]
        occurrence = int(explicit) if explicit and int(explicit) > 0 else None
        if occurrence is None:
            occurrence = _first_free_occurrence(entry[0] for entry in entries)
        entries.append((occurrence, sequence, value))

    if skipped:
        logger.info("Skipped auto-generated fields on import", extra={"fields": sorted(skipped)})

    fields: dict[str, list[str]] = {}
    for field_id, entries in collected.items():
        entries.sort()
        occurrences = [entry[0] for entry in entries]
        if occurrences != list(range(1, len(entries) + 1)):
            logger.info(
                "Closed occurrence gaps on import",
                extra={"field_id": field_id, "occurrences": occurrences},
            )
        fields[field_id] = [entry[2] for entry in entries]
    return Record(fields=fields)


def _field_line(field_id: str, occurrence: int, value: str) -> str:
    label = field_id if occurrence == 1 else f"{field_id}/{occurrence:02d}"
    return f"{label}. {' '.join(value.splitlines())}"


def serialize_record(
    record: Record,
    *,
    generated_at: datetime | None = None,
    publication: str = DEFAULT_PUBLICATION_REFERENCE,
    registry: FieldSchemaRegistry | None = None,
) -> str:
    """Serialize a record into canonical SFAF text.

    Fields follow the official MCEB order; fields unknown to the schema come last
    in numeric order. Fields without occurrences produce no line.

    Args:
        record (Record): Record to serialize.
        generated_at (datetime | None): Timestamp of the header; now (UTC) when omitted.
        publication (str): Publication reference line of the header.
        registry (FieldSchemaRegistry | None): Schema providing the field order.

    Returns:
        str: SFAF text ending with a newline.
    """
    timestamp = (generated_at or datetime.now(tz=UTC)).isoformat(timespec="seconds")
    order = (registry or get_registry()).all_field_ids()

    lines = [SFAF_HEADER, publication, f"Generated: {timestamp}", ""]
    lines.extend(_field_line(item.field_id, item.occurrence, item.value) for item in record.field_values(order=order))
    lines.extend(["", SFAF_FOOTER])
    return "\n".join(lines) + "\n"
