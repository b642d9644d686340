"""Render nodes back to indented shortcode text, with slot templating."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from shortcodes.ast import Node
from shortcodes.errors import InvalidInput
from shortcodes.tokens import ParamValue, TokenKind

SLOT = "{slot}"
INDENT = "  "

Params = Mapping[str, ParamValue] | str | None


def render(node: Node, params: Params = None, level: int = 1) -> str:
    """Render *node* and its subtree as indented shortcode text.

    *params* replaces the node's own parameters for this rendering only: a
    mapping is formatted like node parameters, a string is used verbatim.
    """
    parts: list[str] = []
    # Work items are either literal text or (node, level, params) to expand
    work: list[str | tuple[Node, int, Params]] = [(node, level, params)]

    while work:
        item = work.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        current, lvl, explicit = item

        if current.kind is TokenKind.TEXT:
            parts.append(current.raw.strip() + "\n")
            continue

        if current.kind is TokenKind.ROOT:
            work.extend((child, lvl, None) for child in reversed(current.children))
            continue

        parts.append(f"[{current.name}{format_params(current.params, explicit)}]\n")
        if not current.children:
            continue

        work.append(f"{INDENT * (lvl - 1)}[/{current.name}]\n")
        for child in reversed(current.children):
            work.append((child, lvl + 1, None))
            work.append(INDENT * lvl)

    return "".join(parts)


def render_forest(nodes: Iterable[Node]) -> str:
    """Render every root-level node of a forest in order."""
    return "".join(render(node) for node in nodes)


def format_params(params: Mapping[str, ParamValue], explicit: Params = None) -> str:
    """Format parameters as they appear inside a tag, with a leading space."""
    if isinstance(explicit, str):
        return f" {explicit.strip()}"
    if explicit is not None:
        params = explicit

    result: list[str] = []
    for key, value in params.items():
        if isinstance(value, bool):
            result.append(f" {key}={'yes' if value else 'no'}")
        elif isinstance(value, str):
            result.append(f' {key}="{value}"')
        else:
            result.append(f" {key}={value}")
    return "".join(result)


def build_template(node: Node | None, params: Params = None) -> str:
    """Render *node* as a layout with its children injected at ``{slot}``.

    Children that have children of their own are built the same way first;
    leaf children are rendered directly. Every non-leaf node on the way is
    rendered with *params*.
    """
    if node is None:
        return ""
    if not isinstance(node, Node):
        raise InvalidInput("Expected Node instance.")

    built: dict[int, str] = {}
    work: list[tuple[Node, bool]] = [(node, False)]

    while work:
        current, expanded = work.pop()
        if not expanded:
            work.append((current, True))
            work.extend((child, False) for child in reversed(current.children) if child.children)
            continue

        slot = "".join(
            built.pop(id(child)) if child.children else render(child)
            for child in current.children
        )
        built[id(current)] = render(current, params).replace(SLOT, slot)

    return built[id(node)]
