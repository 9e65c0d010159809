"""
🧪 test_catalog.py — побудова каталогу атрибутів, ворота вибору та відбиток.
"""

import pytest

from variant_engine.domain.variants.catalog import (
    all_selected,
    build_catalog,
    build_catalogs,
    catalog_fingerprint,
    check_selection,
    missing_attributes,
)
from variant_engine.domain.variants.entities import AttributeDescriptor, RawVariant
from variant_engine.domain.variants.normalizer import normalize
from variant_engine.shared.errors import InvalidSelectionError


def test_catalog_first_seen_attribute_order_and_sorted_values():
    variants = [
        RawVariant(id="1", attribute_values={"Size": "42", "Color": "Red"}),
        RawVariant(id="2", attribute_values={"Color": "Blue", "Size": "40"}),
        RawVariant(id="3", attribute_values={"Color": "Red", "Size": "40", "Material": "Suede"}),
    ]

    assert build_catalog(variants) == (
        AttributeDescriptor(name="Size", values=("40", "42")),
        AttributeDescriptor(name="Color", values=("Blue", "Red")),
        AttributeDescriptor(name="Material", values=("Suede",)),
    )


def test_catalog_values_use_plain_string_order():
    variants = [RawVariant(id=str(i), name=f"Red - {size}") for i, size in enumerate(["9", "10", "38"])]

    (_, sizes) = build_catalog(variants)

    assert sizes.values == ("10", "38", "9")


def test_catalog_mixed_representations():
    variants = [
        RawVariant(id="1", name="Red - 40"),
        RawVariant(id="2", name="Color: Blue | Size: 42"),
        RawVariant(id="3", color="Green", size="40"),
        RawVariant(id="4", metadata='{"attributes":[{"type":"color","option":"Black"},{"type":"size","option":"39"}]}'),
    ]

    catalog = build_catalog(variants)

    assert [descriptor.to_dict() for descriptor in catalog] == [
        {"name": "Color", "values": ["Black", "Blue", "Green", "Red"]},
        {"name": "Size", "values": ["39", "40", "42"]},
    ]


def test_catalog_contains_every_normalized_pair(grid_variants, shoe_variants):
    for variants in (grid_variants, shoe_variants):
        catalog = {descriptor.name: descriptor for descriptor in build_catalog(variants)}
        for variant in variants:
            for name, value in normalize(variant).items():
                assert value in catalog[name]


def test_empty_catalog_when_nothing_normalizes():
    variants = [
        RawVariant(id="1", name="Standard", metadata="{broken"),
        RawVariant(id="2", name=""),
    ]

    assert build_catalog(variants) == ()


def test_build_catalogs_for_many_products(grid_variants):
    catalogs = build_catalogs({"shoe": grid_variants, "kit": [RawVariant(id="k", name="Kit")]})

    assert [descriptor.name for descriptor in catalogs["shoe"]] == ["Color", "Size"]
    assert catalogs["kit"] == ()


def test_all_selected_gate(grid_variants):
    catalog = build_catalog(grid_variants)

    assert not all_selected(catalog, {})
    assert not all_selected(catalog, {"Color": "Red"})
    assert not all_selected(catalog, {"Color": "Red", "Size": ""})
    assert all_selected(catalog, {"Color": "Red", "Size": "40"})
    assert not all_selected((), {})
    assert missing_attributes(catalog, {"Size": "40"}) == ["Color"]


def test_check_selection_rejects_unknown_attribute_and_value(grid_variants):
    catalog = build_catalog(grid_variants)

    check_selection(catalog, {"Color": "Red"})
    with pytest.raises(InvalidSelectionError) as unknown_attr:
        check_selection(catalog, {"Width": "Wide"})
    with pytest.raises(InvalidSelectionError):
        check_selection(catalog, {"Color": "Purple"})

    assert unknown_attr.value.attribute == "Width"
    assert unknown_attr.value.to_log_extra()["error_code"] == "invalid_selection"


def test_fingerprint_ignores_stock_and_price_but_not_attributes():
    base = [RawVariant(id="1", name="Red - 40", stock=3, price="10")]
    restocked = [RawVariant(id="1", name="Red - 40", stock=0, price="12.5")]
    renamed = [RawVariant(id="1", name="Red - 41", stock=3, price="10")]

    assert catalog_fingerprint(base) == catalog_fingerprint(restocked)
    assert catalog_fingerprint(base) != catalog_fingerprint(renamed)
