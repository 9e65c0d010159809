"""
🧪 test_entities.py — `RawVariant` (коерція полів, незмінність) та DTO каталогу.
"""

import dataclasses
from decimal import Decimal

import pytest

from variant_engine.domain.variants.entities import (
    AttributeDescriptor,
    RawVariant,
    ResolutionKind,
    frozen_selection,
)
from variant_engine.domain.variants.normalizer import normalize


def test_from_mapping_coerces_catalog_record():
    variant = RawVariant.from_mapping(
        {
            "id": 17,
            "name": "  Red - 40 ",
            "sku": "",
            "price": "129.90",
            "stock": "3",
            "type": " color ",
            "attributeValues": {"Color": "Red"},
        }
    )

    assert variant.id == "17"
    assert variant.name == "Red - 40"
    assert variant.sku is None
    assert variant.price == Decimal("129.90")
    assert variant.stock == 3
    assert variant.type == "color"
    assert dict(variant.attribute_values) == {"Color": "Red"}


def test_from_mapping_accepts_snake_case_attribute_values():
    variant = RawVariant.from_mapping({"id": "1", "attribute_values": {"Size": "M"}})

    assert dict(variant.attribute_values) == {"Size": "M"}


@pytest.mark.parametrize("stock", [None, "", "lots", True, float("inf"), "-Infinity", "NaN"])
def test_unparseable_stock_is_untracked(stock):
    assert RawVariant(id="1", stock=stock).stock is None


@pytest.mark.parametrize("price", ["free", "NaN", None])
def test_unparseable_price_is_dropped(price):
    assert RawVariant(id="1", price=price).price is None


@pytest.mark.parametrize("variant_id", [None, "", "   "])
def test_empty_id_is_rejected(variant_id):
    with pytest.raises(ValueError):
        RawVariant(id=variant_id)


def test_variant_is_read_only():
    source = {"Color": "Red"}
    variant = RawVariant(id="1", attribute_values=source, metadata={"attributes": [{"type": "size"}]})
    source["Color"] = "Blue"

    assert variant.attribute_values["Color"] == "Red"
    with pytest.raises(dataclasses.FrozenInstanceError):
        variant.name = "changed"  # type: ignore[misc]
    with pytest.raises(TypeError):
        variant.attribute_values["Color"] = "Green"  # type: ignore[index]


def test_to_dict_omits_absent_fields():
    variant = RawVariant(id="1", name="Red - 40", price="10.5", metadata={"a": [1]}, attribute_values={"Color": "Red"})

    assert variant.to_dict() == {
        "id": "1",
        "name": "Red - 40",
        "price": "10.5",
        "metadata": {"a": [1]},
        "attributeValues": {"Color": "Red"},
    }


def test_descriptor_membership_and_dict():
    descriptor = AttributeDescriptor(name="Size", values=("40", "42"))

    assert "40" in descriptor
    assert "44" not in descriptor
    assert descriptor.to_dict() == {"name": "Size", "values": ["40", "42"]}


def test_resolution_kind_str_and_frozen_selection():
    selection = {"Color": "Red"}
    frozen = frozen_selection(selection)
    selection["Color"] = "Blue"

    assert str(ResolutionKind.AMBIGUOUS) == "ambiguous"
    assert frozen["Color"] == "Red"
    assert dict(frozen_selection(None)) == {}


def test_non_finite_stock_does_not_break_normalization():
    assert normalize({"id": "1", "name": "Red - 40", "stock": float("inf")}) == {"Color": "Red", "Size": "40"}
