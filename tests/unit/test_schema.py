from __future__ import annotations

import pytest

from sfafkit.exceptions import SchemaError
from sfafkit.schema import OFFICIAL_FIELD_ORDER, build_registry, get_field_spec, get_registry


def test_official_order_covers_every_spec() -> None:
    registry = get_registry()

    assert registry.all_field_ids() == OFFICIAL_FIELD_ORDER
    assert len(registry) == len(OFFICIAL_FIELD_ORDER)
    assert [spec.id for spec in registry] == list(OFFICIAL_FIELD_ORDER)


def test_official_order_places_701_after_107_and_903_last() -> None:
    order = get_registry().all_field_ids()

    assert order.index("701") == order.index("107") + 1
    assert order[-1] == "903"


def test_get_field_spec_accepts_form_keys() -> None:
    spec = get_field_spec("field005")

    assert spec is not None
    assert spec.options == ("U", "UE", "C", "S", "T")
    assert spec.required is True


def test_get_field_spec_returns_none_for_unknown_or_malformed_ids() -> None:
    assert get_field_spec("999") is None
    assert get_field_spec("abc") is None


def test_non_dynamic_fields_allow_one_occurrence() -> None:
    for spec in get_registry():
        assert spec.max_occurrences >= 1
        if not spec.dynamic:
            assert spec.max_occurrences == 1


def test_dynamic_field_limits() -> None:
    registry = get_registry()

    assert registry.get_spec("113").max_occurrences == 20
    assert registry.get_spec("500").max_occurrences == 10
    assert registry.get_spec("501").max_occurrences == 30
    assert registry.get_spec("110").dynamic is False


def test_required_field_ids() -> None:
    assert get_registry().required_field_ids() == (
        "005", "010", "102", "110", "113", "114", "115", "200", "300", "301", "303", "400", "401", "403",
    )  # fmt: skip


def test_registry_is_cached_and_read_only() -> None:
    registry = get_registry()

    assert get_registry() is registry
    with pytest.raises(TypeError):
        registry.specs["005"] = registry.specs["010"]  # type: ignore[index]


def test_build_registry_rejects_spec_missing_from_order() -> None:
    table = [{"id": "005", "title": "Security Classification", "max_length": 2}]

    with pytest.raises(SchemaError, match="order mismatch"):
        build_registry(table, order=("005", "010"))


def test_build_registry_rejects_repeat_limit_on_single_field() -> None:
    table = [{"id": "005", "title": "Security Classification", "max_length": 2, "max_occurrences": 3}]

    with pytest.raises(SchemaError, match="Invalid field definition"):
        build_registry(table, order=("005",))


def test_build_registry_rejects_duplicate_ids() -> None:
    spec = {"id": "005", "title": "Security Classification", "max_length": 2}

    with pytest.raises(SchemaError, match="Duplicate field specs"):
        build_registry([spec, spec], order=("005",))
