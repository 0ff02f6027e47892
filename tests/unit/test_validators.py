from __future__ import annotations

import pytest

from sfafkit.exceptions import ContractViolationError
from sfafkit.reference_data import default_reference_data
from sfafkit.typing.models import ReferenceData
from sfafkit.validation import FIELD_RULES, validate_field


def _messages(outcome) -> list[str]:
    return [item.message for item in (*outcome.errors, *outcome.warnings)]


def test_blank_value_is_ok_for_any_field() -> None:
    assert validate_field("115", "   ").ok is True
    assert validate_field("110", "").errors == ()


def test_malformed_field_id_is_contract_violation() -> None:
    with pytest.raises(ContractViolationError):
        validate_field("11", "K1")


def test_unknown_field_only_warns() -> None:
    outcome = validate_field("999", "anything")

    assert outcome.ok is True
    assert _messages(outcome) == ["Field 999 is not defined in the SFAF schema"]


def test_length_limit_boundary() -> None:
    assert validate_field("301", "A" * 24).ok is True

    outcome = validate_field("301", "A" * 25)
    assert outcome.ok is False
    assert outcome.errors[0].message == "Maximum 24 characters per MCEB Pub 7 field 301"


def test_length_is_measured_after_stripping() -> None:
    assert validate_field("301", f"  {'A' * 24}  ").ok is True


def test_options_are_case_insensitive() -> None:
    assert validate_field("005", "u").ok is True
    assert validate_field("field200", "usaf").ok is True


def test_options_reject_unlisted_value() -> None:
    outcome = validate_field("005", "X")

    assert outcome.ok is False
    assert outcome.errors[0].message == "Value 'X' is not one of: U, UE, C, S, T"


@pytest.mark.parametrize("value", ["K4726.5", "M123.45(123.4)", "4726.5", "H12", "G1.5"])
def test_frequency_accepts_known_forms(value: str) -> None:
    assert validate_field("110", value).ok is True


@pytest.mark.parametrize("value", ["X4726", "K", "M1.23456"])
def test_frequency_rejects_malformed(value: str) -> None:
    outcome = validate_field("110", value)

    assert outcome.ok is False
    assert outcome.errors[0].expected_format is not None


@pytest.mark.parametrize("value", ["A3E", "16K0F3E", "2K70J3E"])
def test_emission_accepts_designators(value: str) -> None:
    assert validate_field("114", value).ok is True


def test_emission_rejects_bad_class_letter() -> None:
    assert validate_field("114", "Z3E").ok is False


@pytest.mark.parametrize("value", ["1A3E", "16F3E", "2K70J3E9"])
def test_emission_requires_bandwidth_unit_letter(value: str) -> None:
    assert validate_field("114", value).ok is False


@pytest.mark.parametrize("value", ["K5", "W500", "K999.9999", "M1", "G2", "V10"])
def test_power_accepts_values_in_prefix_range(value: str) -> None:
    outcome = validate_field("115", value)

    assert outcome.ok is True
    assert outcome.warnings == ()


def test_power_kilowatt_below_one_is_rejected() -> None:
    outcome = validate_field("115", "K0.5")

    assert outcome.ok is False
    assert outcome.errors[0].message == "K prefix valid for 1–999.99999 kW range only"


def test_power_kilowatt_upper_bound() -> None:
    assert validate_field("115", "K1000").ok is False


def test_power_megawatt_and_gigawatt_ranges() -> None:
    assert _messages(validate_field("115", "M0.5")) == ["M prefix valid for 1–999.99999 MW range only"]
    assert _messages(validate_field("115", "G0.5")) == ["G prefix valid for 1 GW and above only"]


def test_power_large_watts_warns() -> None:
    outcome = validate_field("115", "W1500")

    assert outcome.ok is True
    assert _messages(outcome) == ["Power of 1000 W or more should use the K prefix"]


def test_power_zero_is_rejected() -> None:
    assert _messages(validate_field("115", "W0")) == ["Transmitter power must be greater than zero"]


def test_power_rejects_unknown_unit() -> None:
    assert validate_field("115", "X5").ok is False


@pytest.mark.parametrize("value", ["1", "1H24", "2HN", "3HX", "0800"])
def test_time_code_accepts_valid_codes(value: str) -> None:
    assert validate_field("130", value).ok is True


def test_time_code_rejects_unknown_group() -> None:
    assert validate_field("130", "5H24").ok is False


def test_time_code_checked_against_reference_table() -> None:
    tables = default_reference_data().model_dump()
    tables["time_codes"] = {"1": tables["time_codes"]["1"]}
    reference = ReferenceData.model_validate(tables)

    assert validate_field("130", "1H24", reference=reference).warnings == ()
    assert validate_field("130", "0800", reference=reference).warnings == ()
    outcome = validate_field("130", "2HN", reference=reference)
    assert outcome.ok is True
    assert [item.message for item in outcome.warnings] == ["Time code '2HN' not in MCEB Pub 7 time code list"]


def test_power_type_checked_against_reference_table() -> None:
    tables = default_reference_data().model_dump()
    tables["power_types"] = {"M": tables["power_types"]["M"]}
    reference = ReferenceData.model_validate(tables)

    assert validate_field("116", "m", reference=reference).warnings == ()
    assert len(validate_field("116", "P", reference=reference).warnings) == 1
    assert validate_field("116", "P").warnings == ()


def test_percent_time_bounds() -> None:
    assert validate_field("131", "1").ok is True
    assert validate_field("131", "99").ok is True
    assert validate_field("131", "0").ok is False


def test_dates() -> None:
    assert validate_field("140", "20240131").ok is True
    assert validate_field("141", "20240231").ok is False
    assert validate_field("142", "2024-01-31").ok is False

    outcome = validate_field("143", "19400101")
    assert outcome.ok is True
    assert outcome.warnings[0].message == "Year 1940 is outside the expected 1950-2099 range"


def test_serial_number_warns_on_unusual_format() -> None:
    assert validate_field("102", "AF 014589").warnings == ()
    assert validate_field("102", "12345").ok is True
    assert len(validate_field("102", "12345").warnings) == 1


def test_station_class_warns_when_unlisted() -> None:
    assert validate_field("113", "FX").warnings == ()
    assert _messages(validate_field("113", "QQ")) == ["Station class 'QQ' not in MCEB Pub 7 Annex A list"]


def test_state_code_warns_when_unlisted() -> None:
    assert validate_field("300", "FL").warnings == ()
    assert validate_field("400", "ZZ").ok is True
    assert len(validate_field("400", "ZZ").warnings) == 1


def test_coordinates_validated_on_303_and_403() -> None:
    assert validate_field("303", "302400N0864300W").ok is True
    outcome = validate_field("403", "912400N0864300W")
    assert outcome.ok is False
    assert outcome.errors[0].expected_format is not None


def test_antenna_gain() -> None:
    assert validate_field("357", "-3").ok is True
    assert validate_field("457", "abc").ok is False
    assert len(validate_field("357", "150").warnings) == 1


@pytest.mark.parametrize(("value", "ok"), [("ND", True), ("360", True), ("N", True), ("361", False), ("NE", False)])
def test_antenna_orientation(value: str, ok: bool) -> None:
    assert validate_field("362", value).ok is ok


def test_nomenclature_military_and_commercial() -> None:
    assert validate_field("340", "G,AN/PRC-117(V)").warnings == ()
    assert validate_field("440", "C,MOT").warnings == ()
    assert _messages(validate_field("340", "C,ZZZ")) == ["Manufacturer code 'ZZZ' not in MCEB Pub 7 Annex D list"]
    assert len(validate_field("340", "RADIO").warnings) == 1


def test_certification_id_format() -> None:
    assert validate_field("343", "J/F 12/12345").warnings == ()
    assert len(validate_field("443", "12345").warnings) == 1


def test_region_lookup_on_373_and_473() -> None:
    assert validate_field("373", "A").warnings == ()
    assert len(validate_field("473", "I").warnings) == 1


def test_irac_note_lookup() -> None:
    assert validate_field("500", "C010").warnings == ()
    assert _messages(validate_field("500", "Z999")) == ["IRAC note 'Z999' not in MCEB Pub 7 Annex E list"]


def test_function_identifiers() -> None:
    assert validate_field("511", "AIR OPERATIONS").warnings == ()
    assert len(validate_field("511", "FLIGHT TEST").warnings) == 1
    assert validate_field("512", "FLIGHT TEST").warnings == ()
    assert validate_field("513", "AIR OPERATIONS").warnings == ()


def test_validation_is_idempotent() -> None:
    reference = default_reference_data()
    for field_id in FIELD_RULES:
        first = validate_field(field_id, "K0.5", reference=reference)
        assert validate_field(field_id, "K0.5", reference=reference) == first
