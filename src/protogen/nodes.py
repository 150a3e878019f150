"""
Intermediate Representation for Generated Surfaces

Generated surfaces are built as sequences of typed nodes, never as strings.
Backends turn the nodes into target syntax.

This ensures:
    - The grouping and dispatch logic is independent of target syntax
    - Output structure can be tested without parsing text
    - One model can be rendered by several backends

ARCHITECTURAL RULE:
    No raw target-language text in this module.
    Keys and titles are data; how they are quoted is a backend concern.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from protogen.arguments import ArtifactKind
from protogen.model import AccessLevel


class Node(ABC):
    """
    Base class for all surface nodes.

    This class is structure only. Rendering belongs in backends.
    """
    pass


class BindingMode(Enum):
    """
    How a control reaches the value it shows.

        TWO_WAY:  edits flow back to the field
        CONSTANT: writable-looking control over a fixed snapshot; edits are discarded
        SNAPSHOT: plain read-only value
    """

    TWO_WAY = "two_way"
    CONSTANT = "constant"
    SNAPSHOT = "snapshot"


@dataclass(frozen=True)
class ValueRef:
    """
    Reference to a member value.

    Properties:
        path: Dotted access path, e.g. "model.username" or "username"
        mode: BindingMode
    """

    path: str
    mode: BindingMode


class ControlType(Enum):
    """Writable controls."""

    TOGGLE = "toggle"
    TEXT_FIELD = "text_field"
    SECURE_FIELD = "secure_field"
    DATE_PICKER = "date_picker"
    NUMBER_FIELD = "number_field"


class DisplayFormat(Enum):
    """How a read-only value is presented."""

    DESCRIPTION = "description"
    TEXT = "text"
    MASKED = "masked"
    DATE_TIME = "date_time"
    NUMBER = "number"


@dataclass(frozen=True)
class Control(Node):
    """A writable control keyed by `key`, bound to `value`."""

    control: ControlType
    key: str
    value: ValueRef


@dataclass(frozen=True)
class Display(Node):
    """
    A read-only value keyed by `key`.

    IMPORTANT:
        A MASKED display never exposes its value to the backend.
        `value` is None in that case.
    """

    format: DisplayFormat
    key: str
    value: Optional[ValueRef]


@dataclass(frozen=True)
class NestedSurface(Node):
    """
    Delegation to another model's generated surface.

    Example:
        A member `address: Address` on a form becomes
        NestedSurface(surface_name="AddressForm", value=ValueRef("model.address", TWO_WAY))
    """

    surface_name: str
    value: ValueRef


@dataclass(frozen=True)
class LabelOpen(Node):
    """Opens a labeled row keyed by `label_key`."""

    label_key: str


@dataclass(frozen=True)
class LabelClose(Node):
    """Closes the innermost labeled row."""
    pass


class ContainerStyle(Enum):
    """Visual container used for section groups."""

    SECTION = "section"
    GROUP_BOX = "group_box"


@dataclass(frozen=True)
class GroupOpen(Node):
    """
    Opens a section group.

    Properties:
        container: ContainerStyle of the surface
        title_key: Formatted title key, or None for an untitled group
    """

    container: ContainerStyle
    title_key: Optional[str] = None


@dataclass(frozen=True)
class GroupClose(Node):
    """Closes the open section group."""

    container: ContainerStyle


@dataclass(frozen=True)
class EmptyPlaceholder(Node):
    """Explicit empty body of a surface with no visible members."""
    pass


@dataclass(frozen=True)
class Fragment(Node):
    """
    The resolved nodes of one member.

    Properties:
        member: Member name the fragment was resolved from
        nodes:  Resolved nodes; empty for a suppressed member
    """

    member: str
    nodes: Tuple[Node, ...] = ()


class Constructor(Enum):
    """Constructor entry points of a surface."""

    PLAIN = "plain"
    WITH_FOOTER = "with_footer"


class Parameter(Enum):
    """How the surface receives the model."""

    BINDING = "binding"      # two-way binding to a caller-owned instance
    VALUE = "value"          # plain value, read-only
    STORAGE = "storage"      # no model parameter; values are persisted


@dataclass(frozen=True)
class StoredProperty:
    """
    One persisted settings value.

    Properties:
        key:       Storage key, "<ModelName>.<memberName>"
        name:      Property name (the member name)
        type_name: Declared type
        default:   Default value expression text
    """

    key: str
    name: str
    type_name: str
    default: str


@dataclass(frozen=True)
class Surface:
    """
    A complete generated surface, ready for a backend.

    Properties:
        kind:             ArtifactKind the surface was assembled for
        name:             Surface type name (e.g., "CredentialsForm")
        model_name:       Name of the model type
        access_level:     AccessLevel copied from the model
        parameter:        Parameter describing how the model is received
        constructors:     Constructor entry points, in emission order
        uses_formatter:   Whether a number formatter is accepted
        has_footer:       Whether a trailing custom-content slot exists
        storage:          StoredProperty tuple (settings only)
        body:             Ordered body blocks
    """

    kind: ArtifactKind
    name: str
    model_name: str
    access_level: AccessLevel
    parameter: Parameter
    constructors: Tuple[Constructor, ...]
    uses_formatter: bool
    has_footer: bool
    storage: Tuple[StoredProperty, ...]
    body: Tuple[Node, ...]


__all__ = [
    "Node",
    "BindingMode",
    "ValueRef",
    "ControlType",
    "DisplayFormat",
    "Control",
    "Display",
    "NestedSurface",
    "LabelOpen",
    "LabelClose",
    "ContainerStyle",
    "GroupOpen",
    "GroupClose",
    "EmptyPlaceholder",
    "Fragment",
    "Constructor",
    "Parameter",
    "StoredProperty",
    "Surface",
]
