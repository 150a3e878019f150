"""
Tests for the declaration parser (Swift source -> ModelSpec).

We need to:
1. Find top-level type declarations and their @Prototype arguments
2. Extract stored properties in declaration order
3. Derive member attributes from keywords, modifiers and attributes
4. Skip computed, static and non-property statements
"""

import pytest
from protogen.arguments import ArtifactKind, LabelStyle
from protogen.declaration_parser import (
    parse_declaration,
    parse_declaration_file,
    parse_declarations,
    parse_member,
    strip_comments,
)
from protogen.errors import ArgumentError, DeclarationParseError
from protogen.examples import EXAMPLE_SOURCE
from protogen.model import AccessLevel, DeclarationKind, MemberAttribute, TypeCategory

VISIBLE = MemberAttribute.VISIBLE
MODIFIABLE = MemberAttribute.MODIFIABLE


class TestDeclarations:
    """Test declaration headers."""

    def test_prototype_arguments(self):
        declaration = parse_declaration(
            "@Prototype(kinds: .form, .view, style: .labeled)\n"
            "public struct Credentials {\n"
            "    var username: String\n"
            "}\n"
        )
        assert declaration.model.name == "Credentials"
        assert declaration.model.access_level is AccessLevel.PUBLIC
        assert declaration.model.declaration_kind is DeclarationKind.STRUCT
        assert declaration.arguments.kinds == (ArtifactKind.FORM, ArtifactKind.VIEW)
        assert declaration.arguments.style is LabelStyle.LABELED

    def test_unannotated_declaration_has_no_arguments(self):
        declaration = parse_declaration("struct Plain { var x: Int }")
        assert declaration.arguments is None
        assert declaration.model.access_level is AccessLevel.INTERNAL

    def test_final_class_with_conformances(self):
        declaration = parse_declaration("open final class Box: ObservableObject, Codable {\n var x: Int = 0\n}")
        assert declaration.model.declaration_kind is DeclarationKind.CLASS
        assert declaration.model.access_level is AccessLevel.OPEN

    def test_enum_kind(self):
        declaration = parse_declaration("enum Choice {\n    case a\n    case b\n}")
        assert declaration.model.declaration_kind is DeclarationKind.ENUM
        assert declaration.model.members == ()

    def test_multiple_declarations_in_order(self):
        declarations = parse_declarations(EXAMPLE_SOURCE)
        assert [d.model.name for d in declarations] == ["Address", "Profile"]

    def test_nested_types_are_not_top_level(self):
        declarations = parse_declarations(
            "struct Outer {\n"
            "    struct Inner { var y: Int }\n"
            "    var x: Int\n"
            "}\n"
        )
        assert [d.model.name for d in declarations] == ["Outer"]
        assert [m.name for m in declarations[0].model.members] == ["x"]

    def test_other_attributes_ignored(self):
        declaration = parse_declaration(
            "@MainActor\n@Prototype(kinds: .view)\nstruct S { var x: Int }"
        )
        assert declaration.arguments.kinds == (ArtifactKind.VIEW,)

    def test_prototype_without_arguments_rejected(self):
        with pytest.raises(ArgumentError):
            parse_declarations("@Prototype\nstruct S { var x: Int }")

    def test_exactly_one_expected(self):
        with pytest.raises(DeclarationParseError):
            parse_declaration(EXAMPLE_SOURCE)

    @pytest.mark.parametrize("statement", [
        "var items = [1, 2]",
        "var bag = Set<AnyCancellable>()",
        "var onTap = { }",
    ])
    def test_unannotated_declaration_drops_untyped_members(self, statement):
        source = f"final class Store {{\n    var name: String\n    {statement}\n}}\n"
        with pytest.warns(UserWarning):
            (declaration,) = parse_declarations(source)
        assert [m.name for m in declaration.model.members] == ["name"]

    def test_annotated_declaration_rejects_untyped_members(self):
        source = "@Prototype(kinds: .form)\nstruct Store {\n    var items = [1, 2]\n}\n"
        with pytest.raises(DeclarationParseError):
            parse_declarations(source)

    def test_unbalanced_braces(self):
        with pytest.raises(DeclarationParseError):
            parse_declarations("struct S {\n var x: Int\n")


class TestMembers:
    """Test stored property extraction."""

    def test_example_profile_members(self):
        profile = parse_declarations(EXAMPLE_SOURCE)[1].model
        assert [m.name for m in profile.members] == [
            "name", "pin", "birthday", "age", "verified", "address", "token",
        ]

        name = profile.get_member("name")
        assert name.opens_section and name.section_title == "Identity"
        assert name.initializer == '"Anonymous"'

        assert profile.get_member("pin").category is TypeCategory.SECRET_TEXT
        assert not profile.get_member("birthday").is_modifiable
        assert profile.get_member("address").category is TypeCategory.NESTED
        assert profile.get_member("address").section_title == "Contact"
        assert not profile.get_member("token").is_visible

    def test_var_is_modifiable(self):
        assert parse_member("var x: Int").attributes == VISIBLE | MODIFIABLE

    def test_let_is_read_only(self):
        assert parse_member("let x: Int").attributes == VISIBLE

    def test_private_is_hidden(self):
        assert not parse_member("private var x: Int").is_visible
        assert not parse_member("fileprivate let x: Int").is_visible

    def test_private_setter_is_read_only(self):
        member = parse_member("public private(set) var x: Int")
        assert member.is_visible
        assert not member.is_modifiable

    def test_hidden_attribute(self):
        assert not parse_member("@Hidden var x: Int").is_visible

    def test_untitled_section(self):
        member = parse_member("@Section var x: Int")
        assert member.opens_section
        assert member.section_title is None

    def test_section_title_unescaped(self):
        member = parse_member('@Section("Say \\"hi\\"") var x: Int')
        assert member.section_title == 'Say "hi"'

    def test_section_requires_string(self):
        with pytest.raises(DeclarationParseError):
            parse_member("@Section(42) var x: Int")

    def test_pending_attributes(self):
        member = parse_member("var x: String", pending_attributes="@Secure")
        assert member.is_secure

    @pytest.mark.parametrize("initializer,type_name", [
        ("true", "Bool"),
        ('"text"', "String"),
        ("42", "Int"),
        ("-3.5", "Double"),
        ("Date()", "Date"),
        ("Address(street: \"x\")", "Address"),
    ])
    def test_type_inferred_from_initializer(self, initializer, type_name):
        member = parse_member(f"var x = {initializer}")
        assert member.type_name == type_name
        assert member.initializer == initializer

    def test_missing_type_rejected(self):
        with pytest.raises(DeclarationParseError):
            parse_member("var x = makeValue()")

    def test_optional_and_generic_types_kept(self):
        assert parse_member("var x: String?").type_name == "String?"
        assert parse_member("var x: [String: Int] = [:]").type_name == "[String: Int]"
        assert parse_member("var x: Dictionary<String, Int>").type_name == "Dictionary<String, Int>"

    def test_closure_type(self):
        member = parse_member("var action: () -> Void = {}")
        assert member.type_name == "() -> Void"
        assert member.initializer == "{}"

    def test_observers_are_stored(self):
        member = parse_member("var x: Int = 0 { didSet { print(x) } }")
        assert member.type_name == "Int"
        assert member.initializer == "0"

    def test_observers_without_initializer(self):
        member = parse_member("var x: Int { willSet { } }")
        assert member is not None
        assert member.initializer is None

    def test_computed_property_skipped(self):
        assert parse_member("var total: Int { a + b }") is None
        assert parse_member("var total: Int { get { 1 } set { } }") is None

    def test_static_skipped(self):
        assert parse_member("static var shared: Int = 0") is None
        assert parse_member("class var shared: Int { 0 }") is None

    @pytest.mark.parametrize("statement", [
        "func reset() { }",
        "init() { }",
        "case a",
        "typealias ID = String",
    ])
    def test_non_properties_skipped(self, statement):
        assert parse_member(statement) is None

    def test_multiple_bindings_warn(self):
        with pytest.warns(UserWarning):
            member = parse_member("var a: Int = 1, b: Int = 2")
        assert member.name == "a"
        assert member.initializer == "1"

    def test_multi_line_initializer(self):
        declaration = parse_declaration("struct S {\n    var x: Int =\n        5\n    var y: Bool\n}")
        assert [m.name for m in declaration.model.members] == ["x", "y"]
        assert declaration.model.members[0].initializer == "5"

    def test_semicolon_separated(self):
        declaration = parse_declaration("struct S { var a: Int; var b: Int }")
        assert [m.name for m in declaration.model.members] == ["a", "b"]

    def test_body_methods_skipped(self):
        declaration = parse_declaration(
            "struct S {\n"
            "    var a: Int\n"
            "    func bump() {\n"
            "        let local: Int = 1\n"
            "    }\n"
            "    var b: Int\n"
            "}\n"
        )
        assert [m.name for m in declaration.model.members] == ["a", "b"]


class TestComments:
    """Test comment stripping."""

    def test_line_comments(self):
        assert strip_comments("var x: Int // note\n") == "var x: Int \n"

    def test_block_comments_keep_newlines(self):
        assert strip_comments("a /* one\ntwo */ b") == "a \n b"

    def test_comment_markers_in_strings_kept(self):
        assert strip_comments('var url = "http://x" // c') == 'var url = "http://x" '

    def test_unterminated_block_comment(self):
        with pytest.raises(DeclarationParseError):
            strip_comments("/* open")

    def test_commented_member_ignored(self):
        declaration = parse_declaration("struct S {\n    // var hidden: Int\n    var shown: Int\n}")
        assert [m.name for m in declaration.model.members] == ["shown"]


class TestFiles:
    """Test file loading."""

    def test_parse_file(self, tmp_path):
        path = tmp_path / "Models.swift"
        path.write_text(EXAMPLE_SOURCE, encoding="utf-8")
        assert len(parse_declaration_file(str(path))) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_declaration_file(str(tmp_path / "missing.swift"))
