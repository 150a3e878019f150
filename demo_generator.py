#!/usr/bin/env python3
"""
Demo: Generate SwiftUI surfaces from example models.

Shows all three kinds (FORM, SETTINGS, VIEW) in both label styles,
then the end-to-end path from annotated Swift source.
"""

from protogen.arguments import ArtifactKind, GenerationArguments, LabelStyle
from protogen.engine import generate, generate_source
from protogen.examples import EXAMPLE_SOURCE, build_profile


def main():
    profile = build_profile()

    print("=" * 80)
    print("SURFACE GENERATOR DEMO")
    print("=" * 80)

    for style in [LabelStyle.UNLABELED, LabelStyle.LABELED]:
        arguments = GenerationArguments(kinds=tuple(ArtifactKind), style=style)

        for artifact in generate(profile, arguments):
            print(f"\n{artifact.type_name} ({style.value}):")
            print("-" * 80)
            print(artifact.text)

    print("\n" + "=" * 80)
    print("FROM SWIFT SOURCE")
    print("=" * 80)

    for artifact in generate_source(EXAMPLE_SOURCE):
        print(f"\n{artifact.type_name}:")
        print("-" * 80)
        print(artifact.text)


if __name__ == "__main__":
    main()
