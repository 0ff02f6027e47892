"""SFAF field schema registry (MCEB Publication 7)."""

from __future__ import annotations

from collections import Counter
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import ValidationError

from sfafkit.exceptions import SchemaError
from sfafkit.typing.models import FieldSpec, normalize_field_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

OFFICIAL_FIELD_ORDER: tuple[str, ...] = (
    "005", "010", "013", "019", "102", "103", "107", "701", "702",
    "110", "113", "114", "115", "116", "117", "118",
    "130", "131", "140", "141", "142", "143", "144",
    "200", "201", "202", "204", "205", "206", "207", "208", "209",
    "300", "301", "303", "306", "340", "343", "357", "362", "363", "373",
    "400", "401", "402", "403", "407", "440", "443", "457", "462", "463",
    "470", "471", "472", "473",
    "500", "501", "502", "503", "511", "512", "513", "520",
    "716", "801", "803", "804", "903",
)  # fmt: skip


def _spec(
    field_id: str,
    title: str,
    max_length: int,
    *,
    required: bool = False,
    max_occurrences: int = 1,
    options: tuple[str, ...] = (),
) -> dict[str, object]:
    return {
        "id": field_id,
        "title": title,
        "max_length": max_length,
        "required": required,
        "dynamic": max_occurrences > 1,
        "max_occurrences": max_occurrences,
        "options": options,
    }


_FIELD_TABLE: tuple[dict[str, object], ...] = (
    # Administrative data
    _spec("005", "Security Classification", 2, required=True, options=("U", "UE", "C", "S", "T")),
    _spec("010", "Type of Action", 1, required=True, options=("A", "D", "E", "F", "M", "N", "R")),
    _spec("013", "Declassification Instruction Comment", 35),
    _spec("019", "Declassification Date", 8),
    _spec("102", "Agency Serial Number", 10, required=True),
    _spec("103", "IRAC Docket Number", 10),
    _spec("107", "Authorization Date", 8),
    _spec("701", "Frequency Action Officer", 8),
    _spec("702", "Control/Request Number", 15),
    # Emission characteristics
    _spec("110", "Frequency(ies)", 14, required=True),
    _spec("113", "Station Class", 4, required=True, max_occurrences=20),
    _spec("114", "Emission Designator", 11, required=True, max_occurrences=20),
    _spec("115", "Transmitter Power", 9, required=True, max_occurrences=20),
    _spec("116", "Power Type", 1, max_occurrences=20, options=("C", "M", "P")),
    _spec("117", "Effective Radiated Power", 6, max_occurrences=20),
    _spec("118", "Power/ERP Augmentation", 1, max_occurrences=20),
    # Time and dates
    _spec("130", "Time", 4),
    _spec("131", "Percent Time", 2),
    _spec("140", "Required Date (YYYYMMDD)", 8),
    _spec("141", "Expiration Date (YYYYMMDD)", 8),
    _spec("142", "Review Date (YYYYMMDD)", 8),
    _spec("143", "Revision Date (YYYYMMDD)", 8),
    _spec("144", "Approval Authority", 1, options=("Y", "N", "U")),
    # Organization
    _spec("200", "Agency", 6, required=True, options=("USAF", "USA", "USN", "USMC", "USCG")),
    _spec("201", "Unified Command", 8, max_occurrences=10),
    _spec("202", "Unified Command Service", 8, max_occurrences=10),
    _spec("204", "Command", 18),
    _spec("205", "Subcommand", 18),
    _spec("206", "Installation Frequency Manager", 18),
    _spec("207", "Operating Unit", 18, max_occurrences=10),
    _spec("208", "Equipment Designation", 40, max_occurrences=10),
    _spec("209", "Area AFC/DoD AFC", 18, max_occurrences=10),
    # Transmitter location and equipment
    _spec("300", "State/Country", 4, required=True),
    _spec("301", "Antenna Location", 24, required=True),
    _spec("303", "Antenna Coordinates", 21, required=True),
    _spec("306", "Authorized Radius", 5),
    _spec("340", "Equipment Nomenclature", 18, max_occurrences=10),
    _spec("343", "Equipment Certification ID", 15, max_occurrences=10),
    _spec("357", "Antenna Gain", 4, max_occurrences=10),
    _spec("362", "Antenna Orientation", 3, max_occurrences=10),
    _spec("363", "Antenna Polarization", 1, max_occurrences=10, options=("V", "H", "C", "L", "R")),
    _spec("373", "JSC Area Code", 1),
    # Receiver location and equipment
    _spec("400", "State/Country", 4, required=True),
    _spec("401", "Antenna Location", 24, required=True),
    _spec("402", "Power (Watts)", 9),
    _spec("403", "Antenna Coordinates", 21, required=True),
    _spec("407", "Geographic Area (RX)", 1),
    _spec("440", "Equipment Nomenclature", 18, max_occurrences=10),
    _spec("443", "Equipment Certification ID", 15, max_occurrences=10),
    _spec("457", "Antenna Gain", 4, max_occurrences=10),
    _spec("462", "Antenna Orientation", 3, max_occurrences=10),
    _spec("463", "Antenna Polarization", 1, max_occurrences=10, options=("V", "H", "C", "L", "R")),
    _spec("470", "RX Antenna Beamwidth H", 3),
    _spec("471", "RX Antenna Beamwidth V", 3),
    _spec("472", "RX Antenna Front-to-Back", 3),
    _spec("473", "JSC Area Code", 1),
    # Supplementary details
    _spec("500", "IRAC Notes", 4, max_occurrences=10),
    _spec("501", "Notes/Comments", 35, max_occurrences=30),
    _spec("502", "Description of Requirement", 1440),
    _spec("503", "Agency Free-text Comments", 35, max_occurrences=30),
    _spec("511", "Major Function Identifier", 30),
    _spec("512", "Intermediate Function Identifier", 30),
    _spec("513", "Minor Function Identifier", 50),
    _spec("520", "Supplementary Details", 1080),
    # Other assignment identifiers
    _spec("716", "Usage Code", 1),
    _spec("801", "Coordination Data/Remarks", 60, max_occurrences=20),
    _spec("803", "Requestor Data POC", 60),
    _spec("804", "Tuning Range/Tuning Increments", 60, max_occurrences=30),
    _spec("903", "Coordination Status", 20),
)


class FieldSchemaRegistry:
    """Immutable lookup of field specs in official MCEB order."""

    def __init__(self, specs: Iterable[FieldSpec], order: Iterable[str]) -> None:
        """Index specs and check them against the serialization order.

        Args:
            specs (Iterable[FieldSpec]): Field definitions.
            order (Iterable[str]): Official field order.

        Raises:
            SchemaError: If ids are duplicated or specs and order disagree.
        """
        spec_list = list(specs)
        order_tuple = tuple(order)

        duplicates = sorted(field_id for field_id, count in Counter(s.id for s in spec_list).items() if count > 1)
        if duplicates:
            raise SchemaError(message=f"Duplicate field specs: {', '.join(duplicates)}")
        duplicated_order = sorted(field_id for field_id, count in Counter(order_tuple).items() if count > 1)
        if duplicated_order:
            raise SchemaError(message=f"Duplicate ids in field order: {', '.join(duplicated_order)}")

        by_id = {spec.id: spec for spec in spec_list}
        unordered = sorted(set(by_id) - set(order_tuple))
        unknown = sorted(set(order_tuple) - set(by_id))
        if unordered or unknown:
            raise SchemaError(
                message=f"Field order mismatch (missing from order: {unordered}, missing specs: {unknown})",
            )

        self._order = order_tuple
        self._specs: Mapping[str, FieldSpec] = MappingProxyType({field_id: by_id[field_id] for field_id in order_tuple})

    def get_spec(self, field_id: str) -> FieldSpec | None:
        """Return the spec for a field, or None when the field is unknown.

        Args:
            field_id (str): Field id, `110` or `field110`.

        Returns:
            FieldSpec | None: Matching spec.
        """
        try:
            key = normalize_field_key(field_id)
        except ValueError:
            return None
        return self._specs.get(key)

    def is_known(self, field_id: str) -> bool:
        """Return whether the field exists in the schema."""
        return self.get_spec(field_id) is not None

    def all_field_ids(self) -> tuple[str, ...]:
        """Return every field id in official MCEB order."""
        return self._order

    def required_field_ids(self) -> tuple[str, ...]:
        """Return unconditionally required field ids in official order."""
        return tuple(field_id for field_id, spec in self._specs.items() if spec.required)

    @property
    def specs(self) -> Mapping[str, FieldSpec]:
        """Return a read-only view of specs keyed by id."""
        return self._specs

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, field_id: object) -> bool:
        return isinstance(field_id, str) and self.is_known(field_id)


def build_registry(
    table: Iterable[dict[str, object]] = _FIELD_TABLE,
    order: Iterable[str] = OFFICIAL_FIELD_ORDER,
) -> FieldSchemaRegistry:
    """Build a registry from raw field definitions.

    Args:
        table (Iterable[dict[str, object]]): Raw field definitions.
        order (Iterable[str]): Official field order.

    Raises:
        SchemaError: If a definition breaks a field invariant or the table is inconsistent.

    Returns:
        FieldSchemaRegistry: Validated registry.
    """
    specs: list[FieldSpec] = []
    for raw in table:
        try:
            specs.append(FieldSpec.model_validate(raw))
        except ValidationError as exc:
            raise SchemaError(message=f"Invalid field definition {raw.get('id')!r}: {exc}") from exc
    return FieldSchemaRegistry(specs, order)


@lru_cache(maxsize=1)
def get_registry() -> FieldSchemaRegistry:
    """Return the process-wide registry built from the static field table."""
    return build_registry()


def get_field_spec(field_id: str) -> FieldSpec | None:
    """Return the spec of a field from the default registry.

    Args:
        field_id (str): Field id, `110` or `field110`.

    Returns:
        FieldSpec | None: Matching spec, or None for unknown fields.
    """
    return get_registry().get_spec(field_id)
