"""
Generation Arguments

Describes WHAT to generate for one annotated declaration:
    - which artifact kinds (form, settings, view)
    - which label style (labeled, unlabeled)

Also parses the literal argument list of a `@Prototype(...)` attribute:

    @Prototype(kinds: .form, .view, style: .labeled)

becomes

    GenerationArguments(
        kinds=(ArtifactKind.FORM, ArtifactKind.VIEW),
        style=LabelStyle.LABELED,
    )
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from protogen.errors import ArgumentError


class ArtifactKind(Enum):
    """
    The three derived surfaces.

    Each kind knows:
        suffix:      appended to the model name to name the surface
        writable:    whether controls edit values
        nested_kind: the kind a nested-type member delegates to
    """

    FORM = "form"
    SETTINGS = "settings"
    VIEW = "view"

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]

    @property
    def writable(self) -> bool:
        return self is not ArtifactKind.VIEW

    @property
    def nested_kind(self) -> "ArtifactKind":
        # Settings surfaces have no instance entry point, so nested
        # members of a settings surface are edited through a form.
        if self is ArtifactKind.VIEW:
            return ArtifactKind.VIEW
        return ArtifactKind.FORM

    def surface_name(self, model_name: str) -> str:
        """Name of the generated surface type for a model, e.g. `UserForm`."""
        return f"{model_name}{self.suffix}"


_SUFFIXES = {
    ArtifactKind.FORM: "Form",
    ArtifactKind.SETTINGS: "SettingsView",
    ArtifactKind.VIEW: "View",
}


class LabelStyle(Enum):
    """Whether each control is wrapped in an explicit label row."""
    LABELED = "labeled"
    UNLABELED = "unlabeled"


@dataclass(frozen=True)
class GenerationArguments:
    """
    Immutable arguments of one generation invocation.

    Properties:
        kinds:
            Requested artifact kinds in request order, no duplicates.
            Must be non-empty.

        style:
            LabelStyle applied to every control.
    """

    kinds: Tuple[ArtifactKind, ...]
    style: LabelStyle = LabelStyle.UNLABELED

    def validate(self) -> None:
        """
        Check the arguments are well formed.

        Raises:
            ArgumentError: If kinds is empty, holds non-kinds or repeats a kind
        """
        if not self.kinds:
            raise ArgumentError("At least one artifact kind must be requested")
        for kind in self.kinds:
            if not isinstance(kind, ArtifactKind):
                raise ArgumentError(f"Not an artifact kind: {kind!r}")
        if len(set(self.kinds)) != len(self.kinds):
            raise ArgumentError(f"Duplicate artifact kinds: {[k.value for k in self.kinds]}")
        if not isinstance(self.style, LabelStyle):
            raise ArgumentError(f"Not a label style: {self.style!r}")

    @classmethod
    def from_names(cls, kinds: Iterable[str], style: Optional[str] = None) -> "GenerationArguments":
        """
        Build arguments from plain names such as `["form", ".view"]`.

        Duplicate kinds are dropped, keeping the first occurrence.

        Raises:
            ArgumentError: If a name is not recognised or no kind is given
        """
        resolved: List[ArtifactKind] = []
        for name in kinds:
            kind = _lookup(ArtifactKind, name, "artifact kind")
            if kind not in resolved:
                resolved.append(kind)

        label_style = LabelStyle.UNLABELED if style is None else _lookup(LabelStyle, style, "style")
        arguments = cls(kinds=tuple(resolved), style=label_style)
        arguments.validate()
        return arguments


def _lookup(enum_type, token: str, what: str):
    name = token.strip().lstrip(".").lower()
    for member in enum_type:
        if member.value == name:
            return member
    choices = ", ".join(m.value for m in enum_type)
    raise ArgumentError(f"Unrecognized {what} '{token.strip()}' (expected one of: {choices})")


_LABEL_RE = re.compile(r'^\s*([A-Za-z_][A-Za-z0-9_]*)\s*:\s*(.*)$', re.DOTALL)


def parse_arguments(text: str) -> GenerationArguments:
    """
    Parse the literal argument list of a `@Prototype(...)` attribute.

    Accepts labelled arguments in any order:

        kinds: .form, .settings, style: .labeled
        style: .unlabeled, kinds: .view
        kinds: [.form, .view]

    An unlabelled value continues the list of the preceding label, so
    `.form, .view` after `kinds:` are both kinds.

    Args:
        text: Argument list without the surrounding parentheses

    Returns:
        Validated GenerationArguments

    Raises:
        ArgumentError: If the list is empty, uses an unknown label,
                       or names an unknown kind or style
    """
    kinds: List[str] = []
    style: Optional[str] = None
    label: Optional[str] = None

    for part in _split_top_level(text or ""):
        part = part.strip()
        if not part:
            raise ArgumentError(f"Empty argument in '{text}'")

        match = _LABEL_RE.match(part)
        if match:
            label, part = match.group(1), match.group(2).strip()

        if label == "kinds":
            if part.startswith("[") and part.endswith("]"):
                kinds.extend(p for p in _split_top_level(part[1:-1]) if p.strip())
            else:
                kinds.append(part)
        elif label == "style":
            if style is not None:
                raise ArgumentError("Argument 'style' given more than once")
            style = part
        elif label is None:
            raise ArgumentError(f"Unlabelled argument '{part}' (expected 'kinds:' or 'style:')")
        else:
            raise ArgumentError(f"Unknown argument label '{label}'")

    return GenerationArguments.from_names(kinds, style)


def _split_top_level(text: str) -> List[str]:
    """Split on commas that are not inside brackets."""
    if not text.strip():
        return []
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


__all__ = [
    "ArtifactKind",
    "LabelStyle",
    "GenerationArguments",
    "parse_arguments",
]
