"""
Tests for serialization and deserialization of model objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `protogen.serialization`, and that malformed
model documents are reported as DeclarationParseError.
"""

import pytest
from protogen.errors import DeclarationParseError
from protogen.examples import build_prefs, build_profile
from protogen.model import AccessLevel, DeclarationKind, MemberAttribute
from protogen.serialization import (
    attributes_from_list,
    attributes_to_list,
    member_from_dict,
    model_from_dict,
    model_from_json,
    model_from_yaml,
    model_to_dict,
    model_to_json,
    model_to_yaml,
)


def test_json_roundtrip():
    model = build_profile()
    before = model_to_dict(model)
    restored = model_from_json(model_to_json(model))
    assert model_to_dict(restored) == before
    assert restored == model


def test_yaml_roundtrip():
    model = build_prefs()
    before = model_to_dict(model)
    restored = model_from_yaml(model_to_yaml(model))
    assert model_to_dict(restored) == before
    assert restored == model


def test_yaml_keeps_member_order():
    text = model_to_yaml(build_profile())
    assert text.index("name: pin") < text.index("name: birthday") < text.index("name: token")


def test_attribute_names():
    flags = MemberAttribute.VISIBLE | MemberAttribute.SECURE
    assert attributes_to_list(flags) == ["secure", "visible"]
    assert attributes_from_list(["Visible", "SECURE"]) == flags
    assert attributes_from_list([]) == MemberAttribute.NONE


def test_unknown_attribute_rejected():
    with pytest.raises(DeclarationParseError):
        attributes_from_list(["visible", "editable"])


def test_member_defaults():
    member = member_from_dict({"name": "x", "type": "Int"})
    assert member.attributes == MemberAttribute.VISIBLE | MemberAttribute.MODIFIABLE
    assert member.section_title is None
    assert member.initializer is None


def test_model_defaults():
    model = model_from_dict({"name": "M"})
    assert model.members == ()
    assert model.access_level is AccessLevel.INTERNAL
    assert model.declaration_kind is DeclarationKind.STRUCT


def test_hand_written_yaml():
    model = model_from_yaml(
        "name: Credentials\n"
        "access_level: public\n"
        "members:\n"
        "  - name: username\n"
        "    type: String\n"
        "  - name: password\n"
        "    type: String\n"
        "    attributes: [visible, modifiable, secure]\n"
    )
    assert model.access_level is AccessLevel.PUBLIC
    assert model.get_member("password").is_secure
    assert model.get_member("username").is_modifiable


@pytest.mark.parametrize("document", [
    {"members": []},
    {"name": "M", "access_level": "secret"},
    {"name": "M", "declaration_kind": "union"},
    {"name": "M", "members": [{"name": "x"}]},
    {"name": "M", "members": [{"name": "", "type": "Int"}]},
])
def test_invalid_documents(document):
    with pytest.raises(DeclarationParseError):
        model_from_dict(document)


def test_invalid_json():
    with pytest.raises(DeclarationParseError):
        model_from_json("{not json")


def test_invalid_yaml():
    with pytest.raises(DeclarationParseError):
        model_from_yaml("name: [unclosed")


def test_yaml_must_be_mapping():
    with pytest.raises(DeclarationParseError):
        model_from_yaml("- just\n- a list\n")
