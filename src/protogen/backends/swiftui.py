"""
SwiftUI source generator for prototype surfaces.

Converts a Surface into the declaration of a SwiftUI `View` type:

    - FORM:     `<Model>Form`, `@Binding` to a caller-owned instance
    - SETTINGS: `<Model>SettingsView`, one `@AppStorage` property per member
    - VIEW:     `<Model>View`, read-only over a plain value

Output is deterministic: the same Surface always renders to the same text.
"""

from typing import List

from protogen import config
from protogen.nodes import (
    BindingMode,
    Constructor,
    ContainerStyle,
    Control,
    ControlType,
    Display,
    DisplayFormat,
    EmptyPlaceholder,
    Fragment,
    GroupClose,
    GroupOpen,
    LabelClose,
    LabelOpen,
    NestedSurface,
    Node,
    Parameter,
    Surface,
    ValueRef,
)


def _swift_string(s: str) -> str:
    """Quote a value as a Swift string literal."""
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _binding(value: ValueRef) -> str:
    if value.mode is BindingMode.TWO_WAY:
        return f"${value.path}"
    if value.mode is BindingMode.CONSTANT:
        return f".constant({value.path})"
    return value.path


def _control_line(node: Control) -> str:
    key = _swift_string(node.key)
    binding = _binding(node.value)

    if node.control is ControlType.TOGGLE:
        return f"Toggle({key}, isOn: {binding})"
    if node.control is ControlType.TEXT_FIELD:
        return f"TextField({key}, text: {binding})"
    if node.control is ControlType.SECURE_FIELD:
        return f"SecureField({key}, text: {binding})"
    if node.control is ControlType.DATE_PICKER:
        return f"DatePicker({key}, selection: {binding})"
    if node.control is ControlType.NUMBER_FIELD:
        return f"TextField({key}, value: {binding}, formatter: numberFormatter)"
    raise TypeError(f"Unsupported control: {node.control}")


def _display_lines(node: Display) -> List[str]:
    key = _swift_string(node.key)

    if node.format is DisplayFormat.MASKED:
        return [f"LabeledContent({key}, value: {_swift_string(config.SECURE_MASK)})"]

    value = _binding(node.value)
    if node.format is DisplayFormat.DESCRIPTION:
        return [
            f"LabeledContent({key}) {{",
            f"{config.INDENT}Text({value}.description)",
            "}",
        ]
    if node.format is DisplayFormat.TEXT:
        return [f"LabeledContent({key}, value: {value})"]
    if node.format is DisplayFormat.DATE_TIME:
        return [f"LabeledContent({key}, value: {value}, format: {config.DATE_DISPLAY_FORMAT})"]
    if node.format is DisplayFormat.NUMBER:
        return [f"LabeledContent({key}, value: {value}, format: {config.NUMBER_DISPLAY_FORMAT})"]
    raise TypeError(f"Unsupported display format: {node.format}")


def _group_open_line(node: GroupOpen) -> str:
    if node.container is ContainerStyle.GROUP_BOX:
        if node.title_key is None:
            return "GroupBox {"
        return f"GroupBox({_swift_string(node.title_key)}) {{"
    if node.title_key is None:
        return "Section {"
    return f"Section(header: Text({_swift_string(node.title_key)})) {{"


def render_nodes(nodes, depth: int = 0) -> List[str]:
    """
    Render body nodes to indented source lines.

    Args:
        nodes: Iterable of body nodes (fragments are flattened)
        depth: Starting indentation level

    Returns:
        List of source lines
    """
    lines: List[str] = []

    def emit(text: str) -> None:
        lines.append(f"{config.INDENT * depth}{text}")

    for node in _flatten(nodes):
        if isinstance(node, (GroupClose, LabelClose)):
            depth -= 1
            emit("}")
        elif isinstance(node, GroupOpen):
            emit(_group_open_line(node))
            depth += 1
        elif isinstance(node, LabelOpen):
            emit(f"LabeledContent({_swift_string(node.label_key)}) {{")
            depth += 1
        elif isinstance(node, Control):
            emit(_control_line(node))
        elif isinstance(node, Display):
            for line in _display_lines(node):
                emit(line)
        elif isinstance(node, NestedSurface):
            emit(f"{node.surface_name}(model: {_binding(node.value)})")
        elif isinstance(node, EmptyPlaceholder):
            emit("EmptyView()")
        else:
            raise TypeError(f"Unsupported node type: {type(node)}")

    return lines


def _flatten(nodes):
    for node in nodes:
        if isinstance(node, Fragment):
            yield from node.nodes
        else:
            yield node


def _init_lines(surface: Surface, constructor: Constructor) -> List[str]:
    params = []
    assignments = []

    if surface.parameter is Parameter.BINDING:
        params.append(f"model: Binding<{surface.model_name}>")
        assignments.append("self._model = model")
    elif surface.parameter is Parameter.VALUE:
        params.append(f"model: {surface.model_name}")
        assignments.append("self.model = model")

    if constructor is Constructor.WITH_FOOTER:
        if surface.uses_formatter:
            params.append("numberFormatter: NumberFormatter = .init()")
        params.append("@ViewBuilder footer: () -> Footer")
        assignments.append("self.footer = AnyView(erasing: footer())")
        signature = f"public init<Footer>({', '.join(params)}) where Footer: View {{"
    else:
        if surface.uses_formatter:
            params.append("numberFormatter: NumberFormatter = .init()")
        if surface.has_footer:
            assignments.append("self.footer = nil")
        signature = f"public init({', '.join(params)}) {{"

    if surface.uses_formatter:
        assignments.append("self.numberFormatter = numberFormatter")

    return [signature] + [f"{config.INDENT}{a}" for a in assignments] + ["}"]


def _property_lines(surface: Surface) -> List[str]:
    lines = []

    if surface.parameter is Parameter.BINDING:
        lines.append(f"@Binding public var model: {surface.model_name}")
    elif surface.parameter is Parameter.VALUE:
        lines.append(f"public let model: {surface.model_name}")

    for prop in surface.storage:
        lines.append(
            f"@AppStorage({_swift_string(prop.key)}) private var {prop.name}: {prop.type_name} = {prop.default}"
        )

    if surface.has_footer:
        lines.append("private let footer: AnyView?")
    if surface.uses_formatter:
        lines.append("private let numberFormatter: NumberFormatter")

    return lines


def _body_lines(surface: Surface) -> List[str]:
    lines = ["public var body: some View {"]

    if surface.has_footer:
        indent = config.INDENT
        lines.append(f"{indent}Form {{")
        lines.extend(render_nodes(surface.body, depth=2))
        if surface.body:
            lines.append("")
        lines.append(f"{indent * 2}if let footer {{")
        lines.append(f"{indent * 3}footer")
        lines.append(f"{indent * 2}}}")
        lines.append(f"{indent}}}")
    else:
        lines.extend(render_nodes(surface.body, depth=1))

    lines.append("}")
    return lines


def render_surface(surface: Surface) -> str:
    """
    Render a Surface to a complete SwiftUI declaration.

    Args:
        surface: Assembled surface

    Returns:
        Source text of the declaration, ending with a newline
    """
    indent = config.INDENT
    lines = [f"{surface.access_level.struct_modifier} struct {surface.name}: View {{"]

    sections = [_property_lines(surface)]
    sections.extend(_init_lines(surface, c) for c in surface.constructors)
    sections.append(_body_lines(surface))

    for i, section in enumerate(sections):
        if i > 0:
            lines.append("")
        lines.extend(f"{indent}{line}" if line else "" for line in section)

    lines.append("}")
    return "\n".join(lines) + "\n"


__all__ = ["render_nodes", "render_surface"]
