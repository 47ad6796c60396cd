"""View Tree — immutable declarative nodes emitted by the blog view.

Invariants:
    - Nodes are frozen: a rendered tree never changes after render() returns
    - Html nodes only ever carry output of core.markdown.render (already sanitized)
    - Interactive nodes carry Actions; the UI layer hands them back to BlogView.dispatch
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ActionKind(str, Enum):
    """Every input event the blog view understands."""
    OPEN_POST = "open_post"
    CREATE_POST = "create_post"
    NEXT_PAGE = "next_page"
    PREV_PAGE = "prev_page"
    BEGIN_EDIT = "begin_edit"
    CLOSE = "close"
    EDIT_TITLE = "edit_title"
    EDIT_DESCRIPTION = "edit_description"
    CONFIRM_EDIT = "confirm_edit"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    post_id: int | None = None


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Html:
    """Pre-sanitized markup, inserted as inner HTML by the UI layer."""
    markup: str


@dataclass(frozen=True)
class Element:
    tag: str
    children: tuple["Node", ...] = ()
    attrs: tuple[tuple[str, str], ...] = ()
    on: tuple[tuple[str, Action], ...] = ()

    def attr(self, name: str) -> str | None:
        return dict(self.attrs).get(name)

    def handler(self, event: str) -> Action | None:
        return dict(self.on).get(event)


Node = Union[Element, Text, Html]


def el(
    tag: str,
    *children: Node | str,
    attrs: dict[str, str] | None = None,
    on: dict[str, Action] | None = None,
) -> Element:
    """Build an Element; bare strings become Text nodes."""
    return Element(
        tag=tag,
        children=tuple(Text(c) if isinstance(c, str) else c for c in children),
        attrs=tuple((attrs or {}).items()),
        on=tuple((on or {}).items()),
    )


def walk(node: Node) -> Iterator[Node]:
    """Depth-first iteration over node and all its descendants."""
    yield node
    if isinstance(node, Element):
        for child in node.children:
            yield from walk(child)


def find_by_class(node: Node, css_class: str) -> list[Element]:
    return [
        n for n in walk(node)
        if isinstance(n, Element) and n.attr("class") == css_class
    ]


def text_content(node: Node) -> str:
    """Concatenated Text values under node (Html markup excluded)."""
    return "".join(n.value for n in walk(node) if isinstance(n, Text))
