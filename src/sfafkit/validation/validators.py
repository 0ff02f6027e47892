"""Per-field format validators."""

from __future__ import annotations

import re
from datetime import date
from types import MappingProxyType
from typing import TYPE_CHECKING

from sfafkit.coordinates import parse_antenna_coordinates
from sfafkit.exceptions import ContractViolationError, CoordinateError
from sfafkit.reference_data import get_reference_data
from sfafkit.schema import get_registry
from sfafkit.typing.enums import PowerUnit
from sfafkit.typing.models import (
    ErrorDetail,
    ReferenceData,
    ValidationOutcome,
    WarningDetail,
    normalize_field_key,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sfafkit.schema import FieldSchemaRegistry
    from sfafkit.typing.protocol import FieldRule

    Finding = ErrorDetail | WarningDetail

_SERIAL_RE = re.compile(r"^[A-Z]{1,4}\d{6}$")
_FREQUENCY_RES = (
    re.compile(r"^[KMG]\d{1,7}(\.\d{1,3})?(\(\d{1,7}(\.\d{1,3})?\))?$"),
    re.compile(r"^\d{1,7}(\.\d{1,6})?$"),
    re.compile(r"^[HV]\d{1,7}(\.\d{1,3})?$"),
)
_EMISSION_RE = re.compile(
    r"^(\d{1,3}[HKMG]\d{0,3})?[NAHRJBCFGDPKLMQVWX][0-9X][NABCDEFWX]([ABCDEFGHJKLMNWX]([NCFTWX])?)?$",
)
_POWER_RE = re.compile(r"^([WKMGV])(\d{1,7}(?:\.\d{1,5})?)$")
_TIME_CODE_RE = re.compile(r"^[1-4]H(24|X|N|J|T)$|^[1-4]$|^\d{3,4}$")
_PERCENT_RE = re.compile(r"^\d{1,2}$")
_DATE_RE = re.compile(r"^\d{8}$")
_GAIN_RE = re.compile(r"^[+-]?\d{1,3}(\.\d)?$")
_ORIENTATION_RE = re.compile(r"^(ND|\d{1,3}|[NSEW])$")
_NOMENCLATURE_RE = re.compile(r"^[A-Z],AN/[A-Z]{3}-\d+(\([A-Z]+\))?$")
_COMMERCIAL_RE = re.compile(r"^C,([A-Z0-9]+)")
_CERTIFICATION_RE = re.compile(r"^[A-Z]/[A-Z]\s\d{2}/\d{5}$")

_MIN_YEAR, _MAX_YEAR = 1950, 2099
_MIN_GAIN, _MAX_GAIN = -50.0, 100.0
_MAX_BEARING = 360
_KILO = 1000


def _serial_number(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    if not _SERIAL_RE.fullmatch(value.replace(" ", "").upper()):
        yield WarningDetail(
            message="Serial number expected as 1-4 agency letters followed by 6 digits (e.g. AF 014589)",
        )


def _frequency(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    candidate = value.upper()
    if not any(pattern.fullmatch(candidate) for pattern in _FREQUENCY_RES):
        yield ErrorDetail(
            message=f"Invalid frequency '{value}'",
            expected_format="K4726.5, M123.45(123.4), bare numeric, or H/V prefixed numeric",
        )


def _station_class(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if not reference.is_station_class(value):
        yield WarningDetail(message=f"Station class '{value}' not in MCEB Pub 7 Annex A list")


def _emission(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    if not _EMISSION_RE.fullmatch(value.upper()):
        yield ErrorDetail(
            message=f"Invalid emission designator '{value}'",
            expected_format="[bandwidth] class letter, signal digit, information letter (e.g. 16K0F3E, A3E)",
        )


def _power(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    match = _POWER_RE.fullmatch(value.upper())
    if match is None:
        yield ErrorDetail(
            message=f"Invalid transmitter power '{value}'",
            expected_format="W, K, M, G or V followed by a number with up to 5 decimals (e.g. K5, W500)",
        )
        return

    unit, amount = PowerUnit(match.group(1)), float(match.group(2))
    if amount <= 0:
        yield ErrorDetail(message="Transmitter power must be greater than zero")
        return

    if unit is PowerUnit.WATTS and amount >= _KILO:
        yield WarningDetail(message="Power of 1000 W or more should use the K prefix")
    elif unit is PowerUnit.KILOWATTS and not 1 <= amount < _KILO:
        yield ErrorDetail(message="K prefix valid for 1–999.99999 kW range only", expected_format="K1 to K999.99999")
    elif unit is PowerUnit.MEGAWATTS and not 1 <= amount < _KILO:
        yield ErrorDetail(message="M prefix valid for 1–999.99999 MW range only", expected_format="M1 to M999.99999")
    elif unit is PowerUnit.GIGAWATTS and amount < 1:
        yield ErrorDetail(message="G prefix valid for 1 GW and above only", expected_format="G1 or more")


def _time_code(value: str, reference: ReferenceData) -> Iterator[Finding]:
    candidate = value.upper()
    if not _TIME_CODE_RE.fullmatch(candidate):
        yield ErrorDetail(
            message=f"Invalid time code '{value}'",
            expected_format="1-4 optionally followed by H24, HX, HN, HJ or HT, or a 3-4 digit code",
        )
        return
    # Numeric codes are not listed in the time code table.
    if candidate.isdigit() and len(candidate) > 1:
        return
    if reference.time_code_description(candidate) is None:
        yield WarningDetail(message=f"Time code '{value}' not in MCEB Pub 7 time code list")


def _power_type(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if value.upper() not in reference.power_types:
        yield WarningDetail(message=f"Power type '{value}' not in MCEB Pub 7 power type list")


def _percent_time(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    if not _PERCENT_RE.fullmatch(value) or not 1 <= int(value) <= 99:  # noqa: PLR2004
        yield ErrorDetail(message=f"Invalid percent time '{value}'", expected_format="integer from 1 to 99")


def _date(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    if not _DATE_RE.fullmatch(value):
        yield ErrorDetail(message=f"Invalid date '{value}'", expected_format="YYYYMMDD")
        return
    try:
        parsed = date(int(value[:4]), int(value[4:6]), int(value[6:]))
    except ValueError:
        yield ErrorDetail(message=f"'{value}' is not a calendar date", expected_format="YYYYMMDD")
        return
    if not _MIN_YEAR <= parsed.year <= _MAX_YEAR:
        yield WarningDetail(message=f"Year {parsed.year} is outside the expected {_MIN_YEAR}-{_MAX_YEAR} range")


def _state_code(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if not reference.is_state_code(value):
        yield WarningDetail(message=f"State/country code '{value}' not in reference list")


def _coordinates(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    try:
        parse_antenna_coordinates(value)
    except CoordinateError as exc:
        yield ErrorDetail(message=exc.message, expected_format=exc.expected_format)


def _gain(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    if not _GAIN_RE.fullmatch(value):
        yield ErrorDetail(
            message=f"Invalid antenna gain '{value}'",
            expected_format="signed number in dB (e.g. 6, -3, +12.5)",
        )
        return
    if not _MIN_GAIN <= float(value) <= _MAX_GAIN:
        yield WarningDetail(
            message=f"Antenna gain {value} dB is outside the typical {_MIN_GAIN:g} to {_MAX_GAIN:g} dB range",
        )


def _orientation(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    candidate = value.upper()
    match = _ORIENTATION_RE.fullmatch(candidate)
    if match is None or (candidate.isdigit() and int(candidate) > _MAX_BEARING):
        yield ErrorDetail(
            message=f"Invalid antenna orientation '{value}'",
            expected_format="ND, 0-360 degrees, or N/S/E/W",
        )


def _nomenclature(value: str, reference: ReferenceData) -> Iterator[Finding]:
    candidate = value.upper()
    if _NOMENCLATURE_RE.fullmatch(candidate):
        return
    commercial = _COMMERCIAL_RE.match(candidate)
    if commercial is None:
        yield WarningDetail(message="Nomenclature does not follow the military format X,AN/XXX-NNN(V)")
        return
    code = commercial.group(1)
    if reference.manufacturer_name(code) is None:
        yield WarningDetail(message=f"Manufacturer code '{code}' not in MCEB Pub 7 Annex D list")


def _certification(value: str, reference: ReferenceData) -> Iterator[Finding]:  # noqa: ARG001
    if not _CERTIFICATION_RE.fullmatch(value.upper()):
        yield WarningDetail(message="Certification ID does not follow the X/Y NN/NNNNN format")


def _region(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if reference.region(value) is None:
        yield WarningDetail(message=f"Geographic region '{value}' not in MCEB Pub 7 Annex C list")


def _irac_note(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if reference.irac_note(value) is None:
        yield WarningDetail(message=f"IRAC note '{value}' not in MCEB Pub 7 Annex E list")


def _major_function(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if not reference.is_major_function_identifier(value):
        yield WarningDetail(message=f"Major function identifier '{value}' not in MCEB Pub 7 Annex G list")


def _function_identifier(value: str, reference: ReferenceData) -> Iterator[Finding]:
    if not reference.is_function_identifier(value):
        yield WarningDetail(message=f"Function identifier '{value}' not in MCEB Pub 7 Annex G list")


FIELD_RULES: Mapping[str, FieldRule] = MappingProxyType(
    {
        "102": _serial_number,
        "110": _frequency,
        "113": _station_class,
        "114": _emission,
        "115": _power,
        "116": _power_type,
        "130": _time_code,
        "131": _percent_time,
        "140": _date,
        "141": _date,
        "142": _date,
        "143": _date,
        "300": _state_code,
        "400": _state_code,
        "303": _coordinates,
        "403": _coordinates,
        "340": _nomenclature,
        "440": _nomenclature,
        "343": _certification,
        "443": _certification,
        "357": _gain,
        "457": _gain,
        "362": _orientation,
        "462": _orientation,
        "373": _region,
        "473": _region,
        "500": _irac_note,
        "511": _major_function,
        "512": _function_identifier,
        "513": _function_identifier,
    },
)


def validate_field(
    field_id: str,
    value: str,
    *,
    registry: FieldSchemaRegistry | None = None,
    reference: ReferenceData | None = None,
) -> ValidationOutcome:
    """Validate one occurrence of a field.

    Checks run in order and stop at the first failing stage: blank values pass,
    then the length limit, then the closed option set, then the field-specific
    structural rule.

    Args:
        field_id (str): Three-digit field id (`field110` is also accepted).
        value (str): Raw occurrence value.
        registry (FieldSchemaRegistry | None): Schema to validate against.
        reference (ReferenceData | None): Reference tables used by lookup rules.

    Raises:
        ContractViolationError: If `field_id` is not a field number.

    Returns:
        ValidationOutcome: Errors and warnings for the value.
    """
    try:
        key = normalize_field_key(field_id)
    except ValueError as exc:
        raise ContractViolationError(message=str(exc)) from exc

    text = value.strip()
    if not text:
        return ValidationOutcome()

    spec = (registry or get_registry()).get_spec(key)
    if spec is None:
        return ValidationOutcome(warnings=(WarningDetail(message=f"Field {key} is not defined in the SFAF schema"),))

    if len(text) > spec.max_length:
        return ValidationOutcome(
            errors=(
                ErrorDetail(
                    message=f"Maximum {spec.max_length} characters per MCEB Pub 7 field {key}",
                    expected_format=f"at most {spec.max_length} characters",
                ),
            ),
        )

    if spec.options and text.upper() not in spec.options:
        allowed = ", ".join(spec.options)
        return ValidationOutcome(
            errors=(ErrorDetail(message=f"Value '{text}' is not one of: {allowed}", expected_format=allowed),),
        )

    rule = FIELD_RULES.get(key)
    if rule is None:
        return ValidationOutcome()

    findings = list(rule(text, reference or get_reference_data()))
    return ValidationOutcome(
        errors=tuple(item for item in findings if isinstance(item, ErrorDetail)),
        warnings=tuple(item for item in findings if isinstance(item, WarningDetail)),
    )
