"""
Artifact Assemblers

One generic assembly routine, driven by a per-kind AssemblyPolicy:

    FORM      writable, bound to a caller-owned instance, optional footer
    SETTINGS  writable, every member persisted under "<Model>.<member>"
    VIEW      read-only, receives a plain value, explicit empty placeholder

Each assembly:
    1. filters the model to visible members (order kept)
    2. runs the Section Grouper with the Member Widget Resolver
    3. wraps the blocks in a Surface carrying the kind's boilerplate
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from protogen import config
from protogen.arguments import ArtifactKind, GenerationArguments
from protogen.model import MemberSpec, ModelSpec
from protogen.nodes import (
    Constructor,
    ContainerStyle,
    EmptyPlaceholder,
    Node,
    Parameter,
    StoredProperty,
    Surface,
)
from protogen.resolver import resolver_for
from protogen.sections import group_members


@dataclass(frozen=True)
class AssemblyPolicy:
    """
    Per-kind assembly decisions.

    Properties:
        kind:              ArtifactKind this policy assembles
        parameter:         How the surface receives the model
        container:         ContainerStyle of section groups
        constructors:      Constructor entry points, in emission order
        uses_formatter:    Whether a number formatter is accepted
        has_footer:        Whether a trailing custom-content slot exists
        persisted:         Whether members are backed by persisted storage
        empty_placeholder: Whether an empty body becomes an EmptyPlaceholder
    """

    kind: ArtifactKind
    parameter: Parameter
    container: ContainerStyle
    constructors: Tuple[Constructor, ...]
    uses_formatter: bool
    has_footer: bool
    persisted: bool = False
    empty_placeholder: bool = False


POLICIES: Dict[ArtifactKind, AssemblyPolicy] = {
    ArtifactKind.FORM: AssemblyPolicy(
        kind=ArtifactKind.FORM,
        parameter=Parameter.BINDING,
        container=ContainerStyle.SECTION,
        constructors=(Constructor.PLAIN, Constructor.WITH_FOOTER),
        uses_formatter=True,
        has_footer=True,
    ),
    ArtifactKind.SETTINGS: AssemblyPolicy(
        kind=ArtifactKind.SETTINGS,
        parameter=Parameter.STORAGE,
        container=ContainerStyle.SECTION,
        constructors=(Constructor.WITH_FOOTER,),
        uses_formatter=True,
        has_footer=True,
        persisted=True,
    ),
    ArtifactKind.VIEW: AssemblyPolicy(
        kind=ArtifactKind.VIEW,
        parameter=Parameter.VALUE,
        container=ContainerStyle.GROUP_BOX,
        constructors=(Constructor.PLAIN,),
        uses_formatter=False,
        has_footer=False,
        empty_placeholder=True,
    ),
}


def storage_key(model_name: str, member_name: str) -> str:
    """Persisted storage key of a settings member, e.g. `Prefs.volume`."""
    return f"{model_name}.{member_name}"


def stored_property(model: ModelSpec, member: MemberSpec) -> StoredProperty:
    """Persisted backing declaration of one settings member."""
    default = member.initializer if member.initializer else config.DEFAULT_INITIALIZER
    return StoredProperty(
        key=storage_key(model.name, member.name),
        name=member.name,
        type_name=member.type_name,
        default=default,
    )


def assemble(model: ModelSpec, arguments: GenerationArguments, kind: ArtifactKind) -> Surface:
    """
    Assemble the surface of one kind for a model.

    Args:
        model: Model to generate for
        arguments: Arguments of the invocation (the style is used)
        kind: Surface kind to assemble

    Returns:
        Surface ready for a backend
    """
    policy = POLICIES[kind]
    surface_name = model.surface_name(kind)
    members = model.visible_members()

    body: List[Node] = group_members(
        members,
        resolver_for(kind, arguments.style, model.name),
        lambda title: f"{surface_name}.{title}",
        policy.container,
    )

    if policy.empty_placeholder and not body:
        body.append(EmptyPlaceholder())

    storage: Tuple[StoredProperty, ...] = ()
    if policy.persisted:
        storage = tuple(stored_property(model, m) for m in members)

    return Surface(
        kind=kind,
        name=surface_name,
        model_name=model.name,
        access_level=model.access_level,
        parameter=policy.parameter,
        constructors=policy.constructors,
        uses_formatter=policy.uses_formatter,
        has_footer=policy.has_footer,
        storage=storage,
        body=tuple(body),
    )


def assemble_form(model: ModelSpec, arguments: GenerationArguments) -> Surface:
    return assemble(model, arguments, ArtifactKind.FORM)


def assemble_settings(model: ModelSpec, arguments: GenerationArguments) -> Surface:
    return assemble(model, arguments, ArtifactKind.SETTINGS)


def assemble_view(model: ModelSpec, arguments: GenerationArguments) -> Surface:
    return assemble(model, arguments, ArtifactKind.VIEW)


__all__ = [
    "AssemblyPolicy",
    "POLICIES",
    "storage_key",
    "stored_property",
    "assemble",
    "assemble_form",
    "assemble_settings",
    "assemble_view",
]
