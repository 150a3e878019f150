"""
Serialization helpers for model objects (ModelSpec, MemberSpec).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.

Attribute flags are stored as a list of lowercase names:

    {"name": "password", "type": "String", "attributes": ["modifiable", "secure", "visible"]}
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

import yaml

from protogen.errors import DeclarationParseError
from protogen.model import (
    AccessLevel,
    DeclarationKind,
    MemberAttribute,
    MemberSpec,
    ModelSpec,
)

_ATTRIBUTE_NAMES = {
    "visible": MemberAttribute.VISIBLE,
    "modifiable": MemberAttribute.MODIFIABLE,
    "secure": MemberAttribute.SECURE,
    "section": MemberAttribute.SECTION,
}


def attributes_to_list(attributes: MemberAttribute) -> List[str]:
    return sorted(name for name, flag in _ATTRIBUTE_NAMES.items() if flag in attributes)


def attributes_from_list(names: List[str]) -> MemberAttribute:
    attributes = MemberAttribute.NONE
    for name in names or []:
        try:
            attributes |= _ATTRIBUTE_NAMES[str(name).lower()]
        except KeyError:
            raise DeclarationParseError(f"Unknown member attribute: {name}")
    return attributes


def member_to_dict(m: MemberSpec) -> Dict[str, Any]:
    return {
        "name": m.name,
        "type": m.type_name,
        "attributes": attributes_to_list(m.attributes),
        "section_title": m.section_title,
        "initializer": m.initializer,
    }


def member_from_dict(d: Dict[str, Any]) -> MemberSpec:
    try:
        return MemberSpec(
            name=d["name"],
            type_name=d["type"],
            attributes=attributes_from_list(d.get("attributes", ["visible", "modifiable"])),
            section_title=d.get("section_title"),
            initializer=d.get("initializer"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DeclarationParseError(f"Invalid member entry {d!r}: {e}")


def model_to_dict(m: ModelSpec) -> Dict[str, Any]:
    return {
        "name": m.name,
        "access_level": m.access_level.value,
        "declaration_kind": m.declaration_kind.value,
        "members": [member_to_dict(member) for member in m.members],
    }


def model_from_dict(d: Dict[str, Any]) -> ModelSpec:
    if not isinstance(d, dict) or not d.get("name"):
        raise DeclarationParseError("Model document must be a mapping with a 'name'")
    try:
        access_level = AccessLevel(d.get("access_level", AccessLevel.INTERNAL.value))
        declaration_kind = DeclarationKind(d.get("declaration_kind", DeclarationKind.STRUCT.value))
    except ValueError as e:
        raise DeclarationParseError(str(e))
    return ModelSpec(
        name=d["name"],
        members=tuple(member_from_dict(member) for member in d.get("members", [])),
        access_level=access_level,
        declaration_kind=declaration_kind,
    )


def model_to_json(m: ModelSpec) -> str:
    return json.dumps(model_to_dict(m), sort_keys=True)


def model_from_json(s: str) -> ModelSpec:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise DeclarationParseError(f"Invalid JSON model document: {e}")
    return model_from_dict(d)


def model_to_yaml(m: ModelSpec) -> str:
    return yaml.safe_dump(model_to_dict(m), sort_keys=False)


def model_from_yaml(s: str) -> ModelSpec:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise DeclarationParseError(f"Invalid YAML model document: {e}")
    return model_from_dict(d)
