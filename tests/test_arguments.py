"""
Tests for generation arguments and their parsing.
"""

import pytest
from protogen.arguments import (
    ArtifactKind,
    GenerationArguments,
    LabelStyle,
    parse_arguments,
)
from protogen.errors import ArgumentError


class TestArtifactKind:
    """Test per-kind properties."""

    def test_suffixes(self):
        assert ArtifactKind.FORM.suffix == "Form"
        assert ArtifactKind.SETTINGS.suffix == "SettingsView"
        assert ArtifactKind.VIEW.suffix == "View"

    def test_writable(self):
        assert ArtifactKind.FORM.writable
        assert ArtifactKind.SETTINGS.writable
        assert not ArtifactKind.VIEW.writable

    def test_nested_kind(self):
        """Settings surfaces edit nested members through a form."""
        assert ArtifactKind.FORM.nested_kind is ArtifactKind.FORM
        assert ArtifactKind.SETTINGS.nested_kind is ArtifactKind.FORM
        assert ArtifactKind.VIEW.nested_kind is ArtifactKind.VIEW


class TestGenerationArguments:
    """Test construction and validation."""

    def test_from_names(self):
        arguments = GenerationArguments.from_names(["form", ".view"], ".labeled")
        assert arguments.kinds == (ArtifactKind.FORM, ArtifactKind.VIEW)
        assert arguments.style is LabelStyle.LABELED

    def test_style_defaults_to_unlabeled(self):
        assert GenerationArguments.from_names(["view"]).style is LabelStyle.UNLABELED

    def test_duplicates_dropped_keeping_order(self):
        arguments = GenerationArguments.from_names(["view", "form", "view"])
        assert arguments.kinds == (ArtifactKind.VIEW, ArtifactKind.FORM)

    def test_empty_kinds_rejected(self):
        with pytest.raises(ArgumentError):
            GenerationArguments.from_names([])

    def test_unknown_kind_rejected(self):
        with pytest.raises(ArgumentError, match="artifact kind"):
            GenerationArguments.from_names(["table"])

    def test_unknown_style_rejected(self):
        with pytest.raises(ArgumentError, match="style"):
            GenerationArguments.from_names(["form"], "fancy")

    def test_validate_empty(self):
        with pytest.raises(ArgumentError):
            GenerationArguments(kinds=()).validate()

    def test_validate_non_kind(self):
        with pytest.raises(ArgumentError):
            GenerationArguments(kinds=("form",)).validate()

    def test_validate_duplicates(self):
        with pytest.raises(ArgumentError):
            GenerationArguments(kinds=(ArtifactKind.FORM, ArtifactKind.FORM)).validate()


class TestParseArguments:
    """Test parsing of @Prototype argument lists."""

    def test_kinds_and_style(self):
        arguments = parse_arguments("kinds: .form, .settings, style: .labeled")
        assert arguments.kinds == (ArtifactKind.FORM, ArtifactKind.SETTINGS)
        assert arguments.style is LabelStyle.LABELED

    def test_style_first(self):
        arguments = parse_arguments("style: .unlabeled, kinds: .view")
        assert arguments.kinds == (ArtifactKind.VIEW,)
        assert arguments.style is LabelStyle.UNLABELED

    def test_array_literal(self):
        arguments = parse_arguments("kinds: [.form, .view]")
        assert arguments.kinds == (ArtifactKind.FORM, ArtifactKind.VIEW)

    def test_empty_list_rejected(self):
        with pytest.raises(ArgumentError):
            parse_arguments("")

    def test_empty_array_rejected(self):
        with pytest.raises(ArgumentError):
            parse_arguments("kinds: []")

    def test_style_only_rejected(self):
        with pytest.raises(ArgumentError):
            parse_arguments("style: .labeled")

    def test_unknown_label_rejected(self):
        with pytest.raises(ArgumentError, match="label"):
            parse_arguments("kinds: .form, colour: .red")

    def test_unlabelled_first_argument_rejected(self):
        with pytest.raises(ArgumentError):
            parse_arguments(".form")

    def test_repeated_style_rejected(self):
        with pytest.raises(ArgumentError):
            parse_arguments("kinds: .form, style: .labeled, style: .unlabeled")

    def test_unknown_style_token_rejected(self):
        with pytest.raises(ArgumentError):
            parse_arguments("kinds: .form, style: .compact")
