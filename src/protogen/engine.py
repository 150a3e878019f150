"""
Generation Engine

Entry points that turn models into generated artifacts:

    generate(model, arguments)       one model, one artifact per requested kind
    generate_many(requests)          several models from one compilation unit
    generate_source(source)          parse Swift declarations, then generate

Generation is all-or-nothing per model: either every requested artifact
is produced, or one PrototypeError is raised and nothing is returned.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from protogen import config
from protogen.arguments import ArtifactKind, GenerationArguments, LabelStyle
from protogen.assemblers import assemble
from protogen.backends.swiftui import render_surface
from protogen.declaration_parser import parse_declarations
from protogen.errors import ArgumentError, UnsupportedTargetError
from protogen.model import GeneratedArtifact, ModelSpec, TypeCategory

logger = logging.getLogger(__name__)


def check_target(model: ModelSpec) -> None:
    """
    Reject models that did not come from a struct or class declaration.

    Raises:
        UnsupportedTargetError: If the declaration is not record-like
    """
    if not model.declaration_kind.is_record:
        raise UnsupportedTargetError(model.declaration_kind.value, model.name)


def generate(model: ModelSpec, arguments: GenerationArguments) -> List[GeneratedArtifact]:
    """
    Generate one artifact per requested kind.

    Args:
        model: Model to generate for
        arguments: Requested kinds and label style

    Returns:
        GeneratedArtifact list, in request order

    Raises:
        UnsupportedTargetError: If the model is not a struct or class
        ArgumentError: If the arguments are empty or malformed
    """
    check_target(model)
    if not isinstance(arguments, GenerationArguments):
        raise ArgumentError(f"Expected GenerationArguments, got {type(arguments).__name__}")
    arguments.validate()

    artifacts = []
    for kind in arguments.kinds:
        surface = assemble(model, arguments, kind)
        text = render_surface(surface)
        logger.debug("Generated %s for %s (%d body blocks)", surface.name, model.name, len(surface.body))
        artifacts.append(GeneratedArtifact(kind_name=kind.value, type_name=surface.name, text=text))

    logger.info(
        "Generated %d artifact(s) for %s: %s",
        len(artifacts), model.name, ", ".join(a.type_name for a in artifacts),
    )
    return artifacts


def nested_references(model: ModelSpec, kind: ArtifactKind) -> List[str]:
    """
    Names of the surfaces a model delegates to for one kind.

    Example:
        Profile { address: Address } -> ["AddressForm"] for FORM
    """
    return [
        kind.nested_kind.surface_name(member.type_name)
        for member in model.visible_members()
        if member.category is TypeCategory.NESTED
    ]


def generate_many(requests: Iterable[Tuple[ModelSpec, GenerationArguments]]) -> List[GeneratedArtifact]:
    """
    Generate artifacts for several models.

    Nested member types that are not generated in the same batch are
    logged, not rejected: they may be provided elsewhere.

    Raises:
        PrototypeError: From the first model that fails
    """
    requests = list(requests)
    provided = {
        model.surface_name(kind)
        for model, arguments in requests
        for kind in arguments.kinds
    }

    artifacts: List[GeneratedArtifact] = []
    for model, arguments in requests:
        for kind in arguments.kinds:
            for name in nested_references(model, kind):
                if name not in provided:
                    logger.debug("%s references %s, which is not generated in this batch", model.name, name)
        artifacts.extend(generate(model, arguments))
    return artifacts


def generate_source(
    source: str,
    default_arguments: Optional[GenerationArguments] = None,
    style: Optional[LabelStyle] = None,
) -> List[GeneratedArtifact]:
    """
    Parse Swift source and generate for its annotated declarations.

    Declarations carrying `@Prototype(...)` use their own arguments.
    When `default_arguments` is given, unannotated structs and classes
    use it and annotated declarations are overridden by it. Unannotated
    enums, protocols, actors and extensions are skipped.

    When `style` is given, it replaces the label style of every
    declaration's arguments and keeps their kinds.

    Raises:
        DeclarationParseError: If the source cannot be parsed
        UnsupportedTargetError: If `@Prototype` is attached to a non-record declaration
        PrototypeError: If generation fails
    """
    requests = []
    for declaration in parse_declarations(source):
        model = declaration.model
        if declaration.arguments is None:
            if default_arguments is None:
                logger.debug("Skipping %s: no @Prototype attribute", model.name)
                continue
            if not model.declaration_kind.is_record:
                logger.debug("Skipping %s %s: not a struct or class", model.declaration_kind.value, model.name)
                continue

        arguments = default_arguments or declaration.arguments
        if style is not None:
            arguments = replace(arguments, style=style)
        requests.append((model, arguments))

    if not requests:
        logger.warning("No @Prototype declarations found")
    return generate_many(requests)


def write_artifacts(artifacts: Sequence[GeneratedArtifact], output_dir, suffix: str = config.OUTPUT_SUFFIX) -> List[Path]:
    """
    Write each artifact to `<output_dir>/<TypeName><suffix>`.

    Returns:
        Paths written, in artifact order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for artifact in artifacts:
        path = output_dir / f"{artifact.type_name}{suffix}"
        path.write_text(artifact.text, encoding="utf-8")
        logger.info("Wrote %s", path)
        paths.append(path)
    return paths


__all__ = [
    "check_target",
    "generate",
    "nested_references",
    "generate_many",
    "generate_source",
    "write_artifacts",
]
