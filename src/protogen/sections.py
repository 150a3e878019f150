"""
Section Grouper

Folds an ordered member sequence into body blocks, opening a group at
every section-tagged member and closing it at the next one or at the end.

Example:
    [a: section("General"), b, c: section(untitled), d]

Becomes:
    GroupOpen("General"), Fragment(a), Fragment(b), GroupClose,
    GroupOpen(None),      Fragment(c), Fragment(d), GroupClose

INVARIANTS:
    - GroupOpen count == GroupClose count
    - Groups never nest (depth is 0 or 1)
    - Fragments keep input order

The grouper performs no visibility filtering. Callers pass the members
they want on the surface.
"""

from typing import Callable, Iterable, List, Optional, Tuple

from protogen.model import MemberSpec
from protogen.nodes import ContainerStyle, Fragment, GroupClose, GroupOpen, Node


def group_members(
    members: Iterable[MemberSpec],
    render: Callable[[MemberSpec], Tuple[Node, ...]],
    title_for: Callable[[str], str],
    container: ContainerStyle = ContainerStyle.SECTION,
) -> List[Node]:
    """
    Group members into section blocks.

    Args:
        members: Ordered members to place on the surface
        render: Resolves one member to its nodes
        title_for: Formats a section title into its lookup key
        container: ContainerStyle of the emitted groups

    Returns:
        Ordered list of GroupOpen / Fragment / GroupClose blocks
    """
    blocks: List[Node] = []
    in_section = False

    for member in members:
        if member.opens_section:
            if in_section:
                blocks.append(GroupClose(container))
            in_section = True
            blocks.append(GroupOpen(container, _title_key(member.section_title, title_for)))

        blocks.append(Fragment(member.name, tuple(render(member))))

    if in_section:
        blocks.append(GroupClose(container))

    return blocks


def _title_key(title: Optional[str], title_for: Callable[[str], str]) -> Optional[str]:
    if title is None:
        return None
    return title_for(title)


__all__ = ["group_members"]
