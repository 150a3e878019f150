"""
Errors raised while generating prototype surfaces.

Every error is fatal to a single invocation: generation either yields all
artifacts for all requested kinds, or yields none and raises one of these.
"""

from typing import Optional


class PrototypeError(Exception):
    """Base class for all generation failures."""
    pass


class UnsupportedTargetError(PrototypeError):
    """Raised when the declaration is not a struct or class."""

    def __init__(self, declaration_kind: Optional[str] = None, name: Optional[str] = None):
        self.declaration_kind = declaration_kind
        self.name = name
        target = f" '{name}'" if name else ""
        found = f" (found {declaration_kind})" if declaration_kind else ""
        super().__init__(
            f"@Prototype can only be attached to a struct or class declaration{target}{found}"
        )


class ArgumentError(PrototypeError):
    """Raised when the generation arguments are empty or malformed."""
    pass


class DeclarationParseError(PrototypeError):
    """Raised when a declaration or model document cannot be parsed."""
    pass


__all__ = [
    "PrototypeError",
    "UnsupportedTargetError",
    "ArgumentError",
    "DeclarationParseError",
]
