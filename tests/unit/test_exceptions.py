from sfafkit.exceptions import (
    ContractViolationError,
    CoordinateError,
    PackageError,
    RecordError,
    ReferenceDataError,
    SchemaError,
    SettingsError,
)


def test_root_exception_hierarchy() -> None:
    for error_type in (
        ContractViolationError,
        CoordinateError,
        RecordError,
        ReferenceDataError,
        SchemaError,
        SettingsError,
    ):
        assert issubclass(error_type, PackageError)


def test_exception_messages() -> None:
    assert str(RecordError(field_id="501", message="duplicate occurrence 2")) == "Field 501: duplicate occurrence 2"
    assert str(CoordinateError(message="bad", expected_format="DDMMSSH")) == "bad (expected: DDMMSSH)"
    assert str(SettingsError()) == "Failed to load settings"
    assert str(ReferenceDataError(message="unreadable", exc=OSError("gone"))) == "unreadable: gone"
