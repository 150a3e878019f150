"""
Member Widget Resolver

Maps one member to the nodes that present it on one kind of surface.

Dispatch is over the member's TypeCategory, in priority order:

    BOOLEAN      -> toggle             (view: textual description)
    TEXT         -> text field         (view: the value)
    SECRET_TEXT  -> secure field       (view: the literal mask, never the value)
    DATE         -> date picker        (view: fixed date format)
    NUMERIC      -> number text field  (view: fixed number format)
    NESTED       -> the nested type's own generated surface

The resolver is pure and total: every member resolves to some nodes,
and hidden members resolve to none.
"""

from typing import Callable, Dict, Tuple

from protogen import config
from protogen.arguments import ArtifactKind, LabelStyle
from protogen.model import MemberSpec, TypeCategory
from protogen.nodes import (
    BindingMode,
    Control,
    ControlType,
    Display,
    DisplayFormat,
    LabelClose,
    LabelOpen,
    NestedSurface,
    Node,
    ValueRef,
)


_CONTROLS: Dict[TypeCategory, ControlType] = {
    TypeCategory.BOOLEAN: ControlType.TOGGLE,
    TypeCategory.TEXT: ControlType.TEXT_FIELD,
    TypeCategory.SECRET_TEXT: ControlType.SECURE_FIELD,
    TypeCategory.DATE: ControlType.DATE_PICKER,
    TypeCategory.NUMERIC: ControlType.NUMBER_FIELD,
}

_DISPLAYS: Dict[TypeCategory, DisplayFormat] = {
    TypeCategory.BOOLEAN: DisplayFormat.DESCRIPTION,
    TypeCategory.TEXT: DisplayFormat.TEXT,
    TypeCategory.SECRET_TEXT: DisplayFormat.MASKED,
    TypeCategory.DATE: DisplayFormat.DATE_TIME,
    TypeCategory.NUMERIC: DisplayFormat.NUMBER,
}


def member_key(kind: ArtifactKind, model_name: str, member_name: str) -> str:
    """Lookup key of a member control, e.g. `CredentialsForm.username`."""
    return f"{kind.surface_name(model_name)}.{member_name}"


def label_key(kind: ArtifactKind, model_name: str, member_name: str) -> str:
    """Lookup key of a member's label row, e.g. `CredentialsForm.username.label`."""
    return member_key(kind, model_name, member_name) + config.LABEL_KEY_SUFFIX


def value_path(kind: ArtifactKind, member_name: str) -> str:
    """Where a member's value lives inside the generated surface."""
    # Settings surfaces declare one stored property per member.
    if kind is ArtifactKind.SETTINGS:
        return member_name
    return f"model.{member_name}"


def value_ref(kind: ArtifactKind, member: MemberSpec) -> ValueRef:
    """
    Binding of a member for a kind.

    Writable kinds bind two-way only when the member is modifiable and
    fall back to a constant snapshot otherwise. The view kind never binds.
    """
    path = value_path(kind, member.name)
    if not kind.writable:
        return ValueRef(path, BindingMode.SNAPSHOT)
    if member.is_modifiable:
        return ValueRef(path, BindingMode.TWO_WAY)
    return ValueRef(path, BindingMode.CONSTANT)


def resolve_member(
    kind: ArtifactKind,
    style: LabelStyle,
    model_name: str,
    member: MemberSpec,
) -> Tuple[Node, ...]:
    """
    Resolve one member to its nodes.

    Args:
        kind: Surface kind being generated
        style: LabelStyle of the invocation
        model_name: Name of the model owning the member
        member: Member to resolve

    Returns:
        Tuple of nodes; empty when the member is not visible
    """
    if not member.is_visible:
        return ()

    key = member_key(kind, model_name, member.name)
    nodes = [_resolve_widget(kind, key, member)]

    if style is LabelStyle.LABELED:
        nodes.insert(0, LabelOpen(label_key(kind, model_name, member.name)))
        nodes.append(LabelClose())

    return tuple(nodes)


def _resolve_widget(kind: ArtifactKind, key: str, member: MemberSpec) -> Node:
    value = value_ref(kind, member)

    if member.category is TypeCategory.NESTED:
        return NestedSurface(kind.nested_kind.surface_name(member.type_name), value)

    if kind.writable:
        return Control(_CONTROLS[member.category], key, value)

    display = _DISPLAYS[member.category]
    if display is DisplayFormat.MASKED:
        return Display(display, key, None)
    return Display(display, key, value)


def resolver_for(kind: ArtifactKind, style: LabelStyle, model_name: str) -> Callable[[MemberSpec], Tuple[Node, ...]]:
    """Bind kind, style and model name, leaving a per-member resolver."""
    def resolve(member: MemberSpec) -> Tuple[Node, ...]:
        return resolve_member(kind, style, model_name, member)
    return resolve


__all__ = [
    "member_key",
    "label_key",
    "value_ref",
    "resolve_member",
    "resolver_for",
]
