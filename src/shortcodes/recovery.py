"""Mismatch recovery: reflow the ancestor stack on unmatched closes.

Malformed nesting never fails a build. When a close tag does not match the
current parent, or input ends with tags still open, the stack is reflowed:

1. Find the match target: the nearest ancestor whose name equals the close
   tag's name, or ROOT when there is none. At end of input the target is the
   outermost open tag, so every pending open closes with its nesting kept.
2. Every node above the target is closed, relabelled SELF_CLOSING, and its
   children are moved onto the target (outermost first, skipping any child
   already present there).
3. The target is closed and the stack is cut back to just below it. ROOT is
   never removed.

All functions here operate on an explicit list whose first entry is ROOT and
whose last entry is the current parent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from shortcodes.ast import Node


class RepairKind(Enum):
    MISMATCHED_CLOSE = auto()
    UNCLOSED_AT_EOF = auto()


@dataclass(frozen=True, slots=True)
class Repair:
    """One recovery event recorded while building a forest."""

    kind: RepairKind
    close: str | None  # None at end of input
    target: str | None  # None when the target was ROOT
    collapsed: tuple[str, ...]
    position: int
    length: int = 0

    def describe(self) -> str:
        target = f"[{self.target}]" if self.target is not None else "the document root"
        if self.kind is RepairKind.UNCLOSED_AT_EOF:
            message = f"unclosed [{self.target}] at end of input"
        else:
            message = f"mismatched close tag [/{self.close}], matched {target}"
        if self.collapsed:
            tags = ", ".join(f"[{name}]" for name in self.collapsed)
            message += f"; {tags} closed as self-closing"
        return message


def find_match_index(stack: list[Node], name: str | None) -> int:
    """Return the index of the innermost ancestor named *name*, or 0 (ROOT)."""
    for i in range(len(stack) - 1, 0, -1):
        if stack[i].can_close(name):
            return i
    return 0


def reflow(stack: list[Node], match_index: int) -> tuple[list[Node], list[Node]]:
    """Close everything from ``stack[match_index]`` up to the top of *stack*.

    Returns the truncated stack (its last entry is the new current parent)
    and the nodes that were collapsed into leaves, outermost first.
    """
    target = stack[match_index]
    collapsed = stack[match_index + 1 :]

    present = {id(child) for child in target.children}
    for node in collapsed:
        for child in node.collapse():
            if id(child) not in present:
                target.children.append(child)
                present.add(id(child))
        if id(node) not in present:
            target.children.append(node)
            present.add(id(node))

    target.closed = True

    if match_index == 0:
        return stack[:1], collapsed
    return stack[:match_index], collapsed


def _names(nodes: list[Node]) -> tuple[str, ...]:
    return tuple(node.name for node in nodes if node.name is not None)


def recover_close(stack: list[Node], close: Node) -> tuple[list[Node], Repair]:
    """Reflow *stack* for a close node that does not match the current parent."""
    match_index = find_match_index(stack, close.name)
    target = stack[match_index]
    new_stack, collapsed = reflow(stack, match_index)
    repair = Repair(
        RepairKind.MISMATCHED_CLOSE,
        close.name,
        target.name,
        _names(collapsed),
        close.position,
        len(close.raw),
    )
    return new_stack, repair


def recover_end(stack: list[Node]) -> tuple[list[Node], Repair]:
    """Close every tag still open at end of input.

    The repair is reported at the outermost unclosed open tag.
    """
    match_index = 1 if len(stack) > 1 else 0
    target = stack[match_index]
    new_stack, collapsed = reflow(stack, match_index)
    repair = Repair(
        RepairKind.UNCLOSED_AT_EOF,
        None,
        target.name,
        _names(collapsed),
        target.position,
        len(target.raw),
    )
    return new_stack, repair
