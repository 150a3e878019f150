"""
Core Declaration Model Objects

Defines the structural description the generator consumes:
    - Members (named, typed fields with an attribute set)
    - Models (the record-like declaration owning the members)

These are pure data classes representing:
    - Attribute flags (visible, modifiable, secure, section)
    - Type categories (resolved once, at construction)
    - Access levels and declaration kinds

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about SwiftUI or any target syntax
        - Are immutable
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Optional, Tuple

from protogen import config
from protogen.arguments import ArtifactKind


class MemberAttribute(Flag):
    """
    Capability flags of a member.

    Only membership tests matter:
        MemberAttribute.VISIBLE in member.attributes
    """

    NONE = 0
    VISIBLE = auto()
    MODIFIABLE = auto()
    SECURE = auto()
    SECTION = auto()


class TypeCategory(Enum):
    """
    Closed set of member type categories.

    NESTED is the total fallback: every type name resolves to some
    category, there is no unknown-type case.
    """

    BOOLEAN = "boolean"
    TEXT = "text"
    SECRET_TEXT = "secret_text"
    DATE = "date"
    NUMERIC = "numeric"
    NESTED = "nested"


def classify_type(type_name: str, attributes: MemberAttribute = MemberAttribute.NONE) -> TypeCategory:
    """
    Resolve a type-name token to its TypeCategory.

    Examples:
        classify_type("Bool")                           -> BOOLEAN
        classify_type("String", MemberAttribute.SECURE) -> SECRET_TEXT
        classify_type("UInt16")                         -> NUMERIC
        classify_type("Address")                        -> NESTED
    """
    if type_name == config.BOOLEAN_TYPE_NAME:
        return TypeCategory.BOOLEAN
    if type_name == config.TEXT_TYPE_NAME:
        if MemberAttribute.SECURE in attributes:
            return TypeCategory.SECRET_TEXT
        return TypeCategory.TEXT
    if type_name == config.DATE_TYPE_NAME:
        return TypeCategory.DATE
    if type_name in config.NUMERIC_TYPE_NAMES:
        return TypeCategory.NUMERIC
    return TypeCategory.NESTED


class AccessLevel(Enum):
    """Access level of a declaration, copied onto the generated surfaces."""

    OPEN = "open"
    PUBLIC = "public"
    PACKAGE = "package"
    INTERNAL = "internal"
    FILEPRIVATE = "fileprivate"
    PRIVATE = "private"

    @property
    def struct_modifier(self) -> str:
        """Modifier for a generated struct (structs cannot be `open`)."""
        if self is AccessLevel.OPEN:
            return AccessLevel.PUBLIC.value
        return self.value


class DeclarationKind(Enum):
    """What kind of declaration the model was extracted from."""

    STRUCT = "struct"
    CLASS = "class"
    ENUM = "enum"
    ACTOR = "actor"
    PROTOCOL = "protocol"
    EXTENSION = "extension"

    @property
    def is_record(self) -> bool:
        """Only record-like declarations can carry generated surfaces."""
        return self in (DeclarationKind.STRUCT, DeclarationKind.CLASS)


@dataclass(frozen=True)
class MemberSpec:
    """
    One named, typed field of a model.

    Properties:
        name:
            Field identifier (e.g., "username")

        type_name:
            Type-name token as written in the declaration
            Examples: "String", "Int64", "Address"

        attributes:
            MemberAttribute flags

        section_title:
            Optional title of the section this member opens
            Only meaningful when SECTION is in attributes

        initializer:
            Optional initializer expression text, without the leading "="
            Example: "true", "\"guest\"", ".init()"

        category:
            Derived TypeCategory, resolved once from type_name and attributes

    IMPORTANT:
        Members are processed strictly in declaration order.
        They are never reordered or de-duplicated.
    """

    name: str
    type_name: str
    attributes: MemberAttribute = MemberAttribute.VISIBLE | MemberAttribute.MODIFIABLE
    section_title: Optional[str] = None
    initializer: Optional[str] = None
    category: TypeCategory = field(init=False, compare=False)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Member name must not be empty")
        if not self.type_name:
            raise ValueError(f"Member '{self.name}' must have a non-empty type name")
        object.__setattr__(self, "category", classify_type(self.type_name, self.attributes))

    @property
    def is_visible(self) -> bool:
        return MemberAttribute.VISIBLE in self.attributes

    @property
    def is_modifiable(self) -> bool:
        return MemberAttribute.MODIFIABLE in self.attributes

    @property
    def is_secure(self) -> bool:
        return MemberAttribute.SECURE in self.attributes

    @property
    def opens_section(self) -> bool:
        return MemberAttribute.SECTION in self.attributes


@dataclass(frozen=True)
class ModelSpec:
    """
    Root container for one record-like declaration.

    Everything the generator emits MUST be derivable from this object
    and the GenerationArguments alone.

    Properties:
        name:
            Type name of the declaration (e.g., "Credentials")

        members:
            Ordered MemberSpec tuple, in declaration order

        access_level:
            AccessLevel copied onto every generated surface

        declaration_kind:
            DeclarationKind the model was extracted from
            Only STRUCT and CLASS can be generated for
    """

    name: str
    members: Tuple[MemberSpec, ...] = ()
    access_level: AccessLevel = AccessLevel.INTERNAL
    declaration_kind: DeclarationKind = DeclarationKind.STRUCT

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))

    def visible_members(self) -> Tuple[MemberSpec, ...]:
        """Members carrying VISIBLE, in declaration order."""
        return tuple(m for m in self.members if m.is_visible)

    def get_member(self, name: str) -> Optional[MemberSpec]:
        """
        Retrieve a member by name.

        Args:
            name: Member identifier

        Returns:
            MemberSpec or None if not found
        """
        for member in self.members:
            if member.name == name:
                return member
        return None

    def surface_name(self, kind: ArtifactKind) -> str:
        """Name of this model's generated surface for a kind."""
        return kind.surface_name(self.name)


@dataclass(frozen=True)
class GeneratedArtifact:
    """
    One generated surface as source text.

    Properties:
        kind_name: Artifact kind value ("form", "settings", "view")
        type_name: Name of the generated type (e.g., "CredentialsView")
        text:      Complete declaration source text
    """

    kind_name: str
    type_name: str
    text: str


__all__ = [
    "MemberAttribute",
    "TypeCategory",
    "classify_type",
    "AccessLevel",
    "DeclarationKind",
    "MemberSpec",
    "ModelSpec",
    "GeneratedArtifact",
]
