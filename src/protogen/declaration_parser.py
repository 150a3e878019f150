"""
Declaration Parser (Swift source -> ModelSpec).

Extracts record-like type declarations and their stored properties from a
subset of Swift source:

    @Prototype(kinds: .form, .view, style: .labeled)
    public struct Credentials {
        @Section("Account") var username: String
        @Secure var password: String = ""
        let createdAt: Date
        private var token: String?
    }

Member attribute rules:
    - `var`                         -> MODIFIABLE
    - `let`, `private(set)`         -> not MODIFIABLE
    - `private`, `fileprivate`      -> not VISIBLE
    - `@Hidden`                     -> not VISIBLE
    - `@Secure`                     -> SECURE
    - `@Section`, `@Section("T")`   -> SECTION, with optional title

Skipped: computed properties, static/class members, functions,
initializers, nested types and enum cases.
"""

import logging
import re
import warnings
from dataclasses import dataclass
from typing import List, Optional, Tuple

from protogen import config
from protogen.arguments import GenerationArguments, parse_arguments
from protogen.errors import DeclarationParseError
from protogen.model import (
    AccessLevel,
    DeclarationKind,
    MemberAttribute,
    MemberSpec,
    ModelSpec,
)

logger = logging.getLogger(__name__)


@dataclass
class Declaration:
    """A parsed type declaration and the arguments of its @Prototype attribute."""
    model: ModelSpec
    arguments: Optional[GenerationArguments] = None


_ATTRIBUTE = r'@[A-Za-z_][A-Za-z0-9_.]*(?:\s*\((?:[^()"]|"(?:[^"\\]|\\.)*")*\))?'

_DECL_RE = re.compile(
    r'(?P<attributes>(?:' + _ATTRIBUTE + r'\s*)*)'
    r'(?P<modifiers>(?:(?:open|public|package|internal|fileprivate|private|final)\s+)*)'
    r'\b(?P<keyword>struct|class|enum|actor|protocol|extension)\s+'
    r'(?P<name>[A-Za-z_][A-Za-z0-9_.]*)'
    r'(?P<tail>[^{]*)\{'
)

_ATTRIBUTE_RE = re.compile(
    r'@(?P<name>[A-Za-z_][A-Za-z0-9_.]*)(?:\s*\((?P<args>(?:[^()"]|"(?:[^"\\]|\\.)*")*)\))?'
)

_ATTRIBUTES_ONLY_RE = re.compile(r'^(?:' + _ATTRIBUTE + r'\s*)+$', re.DOTALL)

_PROPERTY_RE = re.compile(
    r'^(?P<attributes>(?:' + _ATTRIBUTE + r'\s*)*)'
    r'(?P<modifiers>(?:[a-z]+(?:\s*\(\s*set\s*\))?\s+)*)'
    r'(?P<binding>var|let)\s+'
    r'(?P<name>`?[A-Za-z_][A-Za-z0-9_]*`?)'
    r'(?P<rest>.*)$',
    re.DOTALL,
)

_STRING_LITERAL_RE = re.compile(r'"((?:[^"\\]|\\.)*)"')

_ACCESS_LEVELS = {level.value: level for level in AccessLevel}


def strip_comments(source: str) -> str:
    """
    Remove `//` and `/* */` comments, keeping string literals and newlines.
    """
    out = []
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch == '"':
            j = i + 1
            while j < n and source[j] != '"':
                j += 2 if source[j] == '\\' else 1
            out.append(source[i:j + 1])
            i = j + 1
        elif source.startswith("//", i):
            while i < n and source[i] != "\n":
                i += 1
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                raise DeclarationParseError("Unterminated block comment")
            out.append("\n" * source.count("\n", i, end))
            i = end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _find_closing(text: str, open_index: int) -> int:
    """Index of the `}` matching the `{` at open_index."""
    depth = 0
    i = open_index
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i += 1
            while i < n and text[i] != '"':
                i += 2 if text[i] == '\\' else 1
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise DeclarationParseError(f"Unbalanced braces starting at offset {open_index}")


def _split_statements(body: str) -> List[str]:
    """Split a declaration body into top-level statements."""
    statements = []
    current = []
    depth = 0
    i = 0
    n = len(body)

    while i < n:
        ch = body[i]
        if ch == '"':
            j = i + 1
            while j < n and body[j] != '"':
                j += 2 if body[j] == '\\' else 1
            current.append(body[i:j + 1])
            i = j + 1
            continue
        if ch in "({[":
            depth += 1
        elif ch in ")}]":
            depth -= 1
        if depth == 0 and ch in "\n;":
            statements.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    statements.append("".join(current))

    # Join continuation lines (`var x: Int =` / `    5`).
    joined: List[str] = []
    for statement in (s.strip() for s in statements):
        if not statement:
            continue
        if joined and (joined[-1].endswith(("=", ",", ":")) or statement.startswith(".")):
            joined[-1] = f"{joined[-1]} {statement}"
        else:
            joined.append(statement)
    return joined


def _top_level_positions(text: str) -> Tuple[int, int, int]:
    """First top-level `:`, `=` and `{` in text (-1 when absent)."""
    colon = equals = brace = -1
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i += 1
            while i < n and text[i] != '"':
                i += 2 if text[i] == '\\' else 1
        elif ch in "([<":
            depth += 1
        elif ch in ")]" or (ch == ">" and text[i - 1:i] != "-"):
            depth -= 1
        elif depth == 0:
            if ch == ":" and colon == -1 and equals == -1:
                colon = i
            elif ch == "=" and equals == -1 and brace == -1:
                if text[i + 1:i + 2] != "=":
                    equals = i
            elif ch == "{" and brace == -1:
                brace = i
        i += 1
    return colon, equals, brace


def _first_binding(text: str) -> Tuple[str, bool]:
    """
    Cut a pattern list (`a = 1, b = 2`) down to its first binding.

    Returns:
        (text of the first binding, whether anything was cut)
    """
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i += 1
            while i < n and text[i] != '"':
                i += 2 if text[i] == '\\' else 1
        elif ch in "([{<":
            depth += 1
        elif ch in ")]}" or (ch == ">" and text[i - 1:i] != "-"):
            depth -= 1
        elif ch == "," and depth == 0:
            if re.match(r'\s*`?[A-Za-z_][A-Za-z0-9_]*`?\s*[:=]', text[i + 1:]):
                return text[:i], True
        i += 1
    return text, False


def _is_observer_block(block: str) -> bool:
    return re.match(r'^\{\s*(willSet|didSet)\b', block) is not None


def _infer_type(initializer: str) -> Optional[str]:
    """Infer a type name from a literal or constructor-call initializer."""
    value = initializer.strip()
    if value in ("true", "false"):
        return config.BOOLEAN_TYPE_NAME
    if value.startswith('"'):
        return config.TEXT_TYPE_NAME
    if re.match(r'^-?\d[\d_]*$', value):
        return "Int"
    if re.match(r'^-?\d[\d_]*\.\d[\d_]*(?:[eE][-+]?\d+)?$', value):
        return "Double"
    call = re.match(r'^([A-Z][A-Za-z0-9_.]*)(?:\(.*\))$', value, re.DOTALL)
    if call:
        return call.group(1)
    return None


def _section_title(args: Optional[str]) -> Optional[str]:
    if not args:
        return None
    literal = _STRING_LITERAL_RE.search(args)
    if literal is None:
        raise DeclarationParseError(f"@{config.SECTION_ATTRIBUTE} expects a string title, got '{args}'")
    return re.sub(r'\\(.)', r'\1', literal.group(1))


def parse_member(statement: str, pending_attributes: str = "") -> Optional[MemberSpec]:
    """
    Parse one body statement into a MemberSpec.

    Args:
        statement: A single top-level statement of a declaration body
        pending_attributes: Attribute text from preceding attribute-only lines

    Returns:
        MemberSpec, or None when the statement is not a stored property

    Raises:
        DeclarationParseError: If a stored property has no type and none can be inferred
    """
    text = f"{pending_attributes} {statement}".strip() if pending_attributes else statement
    match = _PROPERTY_RE.match(text)
    if not match:
        return None

    name = match.group("name").strip("`")
    modifiers = match.group("modifiers").split()
    if "static" in modifiers or "class" in modifiers:
        logger.debug("Skipping static member '%s'", name)
        return None

    rest, truncated = _first_binding(match.group("rest"))
    if truncated:
        warnings.warn(f"Only the first binding of '{statement}' is used", UserWarning)
    colon, equals, brace = _top_level_positions(rest)

    if brace != -1 and (equals == -1 or brace < equals):
        if not _is_observer_block(rest[brace:].strip()):
            logger.debug("Skipping computed property '%s'", name)
            return None
        rest = rest[:brace]
        colon, equals, _ = _top_level_positions(rest)

    initializer = None
    if equals != -1:
        initializer = rest[equals + 1:].strip()
        _, _, observer = _top_level_positions(initializer)
        if observer != -1 and _is_observer_block(initializer[observer:].strip()):
            initializer = initializer[:observer].strip()
        if not initializer:
            raise DeclarationParseError(f"Member '{name}' has an empty initializer")
        type_text = rest[:equals]
    else:
        type_text = rest

    type_name = None
    if colon != -1:
        type_name = type_text[colon + 1:].strip() or None
    if type_name is None and initializer is not None:
        type_name = _infer_type(initializer)
    if type_name is None:
        raise DeclarationParseError(f"Member '{name}' needs an explicit type annotation")

    attributes = MemberAttribute.VISIBLE
    if match.group("binding") == "var":
        attributes |= MemberAttribute.MODIFIABLE

    for modifier in re.findall(r'([a-z]+)(\s*\(\s*set\s*\))?', match.group("modifiers")):
        keyword, setter_only = modifier
        if keyword in ("private", "fileprivate"):
            if setter_only:
                attributes &= ~MemberAttribute.MODIFIABLE
            else:
                attributes &= ~MemberAttribute.VISIBLE

    section_title = None
    for attribute in _ATTRIBUTE_RE.finditer(match.group("attributes")):
        attr_name = attribute.group("name")
        if attr_name == config.SECURE_ATTRIBUTE:
            attributes |= MemberAttribute.SECURE
        elif attr_name == config.HIDDEN_ATTRIBUTE:
            attributes &= ~MemberAttribute.VISIBLE
        elif attr_name == config.SECTION_ATTRIBUTE:
            attributes |= MemberAttribute.SECTION
            section_title = _section_title(attribute.group("args"))

    return MemberSpec(
        name=name,
        type_name=type_name,
        attributes=attributes,
        section_title=section_title,
        initializer=initializer,
    )


def parse_members(body: str, strict: bool = True) -> List[MemberSpec]:
    """
    Parse the stored properties of a declaration body, in order.

    With strict=False a member that cannot be parsed is dropped with a
    UserWarning instead of failing the whole body.
    """
    members = []
    pending = ""
    for statement in _split_statements(body):
        if _ATTRIBUTES_ONLY_RE.match(statement):
            pending = f"{pending} {statement}".strip()
            continue
        try:
            member = parse_member(statement, pending)
        except DeclarationParseError as e:
            if strict:
                raise
            warnings.warn(f"Skipping member: {e}", UserWarning)
            member = None
        pending = ""
        if member is not None:
            members.append(member)
    return members


def _access_level(modifiers: str) -> AccessLevel:
    for word in modifiers.split():
        if word in _ACCESS_LEVELS:
            return _ACCESS_LEVELS[word]
    return AccessLevel.INTERNAL


def _prototype_arguments(attributes: str) -> Optional[GenerationArguments]:
    for attribute in _ATTRIBUTE_RE.finditer(attributes):
        if attribute.group("name") == config.PROTOTYPE_ATTRIBUTE:
            return parse_arguments(attribute.group("args") or "")
    return None


def parse_declarations(source: str) -> List[Declaration]:
    """
    Parse every top-level type declaration in Swift source.

    Args:
        source: Swift source text

    Returns:
        Declaration list in source order

    Raises:
        DeclarationParseError: If the source cannot be parsed
        ArgumentError: If a @Prototype attribute has malformed arguments
    """
    text = strip_comments(source)
    declarations = []
    pos = 0

    while True:
        match = _DECL_RE.search(text, pos)
        if match is None:
            break
        open_index = match.end() - 1
        close_index = _find_closing(text, open_index)

        # Only annotated declarations must parse cleanly.
        arguments = _prototype_arguments(match.group("attributes"))
        body = text[open_index + 1:close_index]
        model = ModelSpec(
            name=match.group("name"),
            members=tuple(parse_members(body, strict=arguments is not None)),
            access_level=_access_level(match.group("modifiers")),
            declaration_kind=DeclarationKind(match.group("keyword")),
        )
        logger.debug("Parsed %s %s with %d member(s)", model.declaration_kind.value, model.name, len(model.members))
        declarations.append(Declaration(model=model, arguments=arguments))
        pos = close_index + 1

    return declarations


def parse_declaration(source: str) -> Declaration:
    """
    Parse source holding exactly one top-level declaration.

    Raises:
        DeclarationParseError: If there is not exactly one declaration
    """
    declarations = parse_declarations(source)
    if len(declarations) != 1:
        raise DeclarationParseError(f"Expected one declaration, found {len(declarations)}")
    return declarations[0]


def parse_declaration_file(filepath: str) -> List[Declaration]:
    """
    Parse a Swift file into declarations.

    Raises:
        FileNotFoundError: If file doesn't exist
        DeclarationParseError: If parsing fails
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Swift file not found: {filepath}")

    return parse_declarations(content)


__all__ = [
    "Declaration",
    "strip_comments",
    "parse_member",
    "parse_members",
    "parse_declarations",
    "parse_declaration",
    "parse_declaration_file",
]
