from variant_engine.domain.variants.metadata import (
    CanonicalMapForm,
    TypedAttribute,
    TypedAttributesForm,
    UnrecognizedForm,
    parse_metadata,
)


def test_parse_typed_form_trims_entries():
    (form,) = parse_metadata('{"attributes": [{"type": " color ", "name": "Colour", "option": 39}, "junk"]}')

    assert isinstance(form, TypedAttributesForm)
    assert form.attributes == (TypedAttribute(type="color", name="Colour", option="39"),)


def test_parse_canonical_form_keeps_order():
    (form,) = parse_metadata('{"attributeValues": {"Size": "40", "Color": "Red"}}')

    assert isinstance(form, CanonicalMapForm)
    assert form.attribute_values == (("Size", "40"), ("Color", "Red"))


def test_parse_both_forms_typed_first():
    forms = parse_metadata({"attributeValues": {"Color": "Red"}, "attributes": []})

    assert [type(form) for form in forms] == [TypedAttributesForm, CanonicalMapForm]


def test_parse_absent_and_garbage():
    assert parse_metadata(None) == (UnrecognizedForm("absent"),)
    assert parse_metadata("{oops") == (UnrecognizedForm("undecodable"),)
    assert parse_metadata('{"foo": 1}') == (UnrecognizedForm("unknown-shape"),)
    assert parse_metadata('{"attributes": "not-a-list"}') == (UnrecognizedForm("unknown-shape"),)


def test_parse_typed_form_keeps_type_case():
    (form,) = parse_metadata({"attributes": [{"type": "Color", "name": "Shade", "option": "Red"}]})

    assert form.attributes == (TypedAttribute(type="Color", name="Shade", option="Red"),)
