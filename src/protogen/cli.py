"""
Command line entry point.

    protogen Models.swift
    protogen Models.swift --kinds form view --style labeled --output-dir Generated
    protogen Models.swift --style labeled
    protogen profile.yaml --model-format yaml --kinds settings

Swift input generates for every `@Prototype` declaration (or for every
struct and class when --kinds is given). YAML/JSON input holds one model
document and requires --kinds.
"""

import argparse
import logging
import sys
from typing import List, Optional

from protogen import __version__
from protogen.arguments import ArtifactKind, GenerationArguments, LabelStyle
from protogen.engine import generate, generate_source, write_artifacts
from protogen.errors import ArgumentError, PrototypeError
from protogen.serialization import model_from_json, model_from_yaml

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protogen",
        description="Generate SwiftUI form, settings and view surfaces from model declarations",
    )
    parser.add_argument("input", help="Path to a Swift source file or a YAML/JSON model document")
    parser.add_argument(
        "--kinds", nargs="+", choices=[k.value for k in ArtifactKind],
        help="Artifact kinds to generate (overrides @Prototype arguments)",
    )
    parser.add_argument(
        "--style", choices=[s.value for s in LabelStyle], default=None,
        help="Label style (default: unlabeled). Without --kinds, replaces only the style "
             "of each @Prototype declaration",
    )
    parser.add_argument(
        "--model-format", choices=["swift", "yaml", "json"], default=None,
        help="Input format (default: from file extension)",
    )
    parser.add_argument("--output-dir", help="Write one .swift file per artifact into this directory")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _input_format(path: str, explicit: Optional[str]) -> str:
    if explicit:
        return explicit
    lowered = path.lower()
    if lowered.endswith((".yaml", ".yml")):
        return "yaml"
    if lowered.endswith(".json"):
        return "json"
    return "swift"


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Process exit status (0 on success, 1 on generation failure)
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        print(f"protogen: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        arguments = None
        if args.kinds:
            arguments = GenerationArguments.from_names(args.kinds, args.style)

        fmt = _input_format(args.input, args.model_format)
        if fmt == "swift":
            style = LabelStyle(args.style) if args.style else None
            artifacts = generate_source(content, default_arguments=arguments, style=style)
        else:
            if arguments is None:
                raise ArgumentError(f"--kinds is required for {fmt} model documents")
            model = model_from_yaml(content) if fmt == "yaml" else model_from_json(content)
            artifacts = generate(model, arguments)
    except PrototypeError as e:
        print(f"protogen: error: {e}", file=sys.stderr)
        return 1

    if args.output_dir:
        write_artifacts(artifacts, args.output_dir)
    else:
        sys.stdout.write("\n".join(a.text for a in artifacts))

    logger.info("Done: %d artifact(s)", len(artifacts))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
