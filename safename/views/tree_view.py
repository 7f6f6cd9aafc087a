"""Render planned renames as a colored directory tree."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from colorama import Fore, Style

from safename.dtos.rename_result import RenameResult


ARROW = "━━▶ "
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
BLANK = "    "


@dataclass
class _TreeNode:
    """Node of the rendered tree keyed by original entry name."""

    label: str
    children: Dict[str, "_TreeNode"] = field(default_factory=dict)


def _paint(text: str, color: str, enabled: bool) -> str:
    """Wrap ``text`` with ``color`` when coloring is enabled."""

    if not enabled:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def format_change(result: RenameResult, color: bool = True) -> str:
    """Return the ``old ━━▶ new`` label of a single change."""

    return f"{_paint(result.oldName, Fore.RED, color)}{ARROW}{_paint(result.newName, Fore.GREEN, color)}"


def _relative_parts(root: str, directory: str) -> List[str]:
    """Split ``directory`` into its components relative to ``root``."""

    relative = os.path.relpath(directory, root)
    if relative == os.curdir:
        return []
    return relative.split(os.sep)


def build_tree(root: str, results: Iterable[RenameResult], color: bool = True) -> _TreeNode:
    """Group the changes by directory below ``root``."""

    tree = _TreeNode(label=root)
    for result in results:
        node = tree
        for part in _relative_parts(root, result.directory):
            if part not in node.children:
                node.children[part] = _TreeNode(label=_paint(part, Fore.CYAN, color))
            node = node.children[part]
        label = format_change(result, color)
        if result.oldName in node.children:
            node.children[result.oldName].label = label
        else:
            node.children[result.oldName] = _TreeNode(label=label)
    return tree


def _render_children(node: _TreeNode, prefix: str, lines: List[str]) -> None:
    """Append the lines of ``node``'s children to ``lines``."""

    keys = sorted(node.children)
    for index, key in enumerate(keys):
        child = node.children[key]
        is_last = index == len(keys) - 1
        lines.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{child.label}")
        _render_children(child, prefix + (BLANK if is_last else PIPE), lines)


def render_tree(root: str, results: Iterable[RenameResult], color: bool = True) -> str:
    """Return the text tree of ``results``; empty when there is nothing to show."""

    tree = build_tree(root, results, color)
    if not tree.children:
        return ""
    lines = [tree.label]
    _render_children(tree, "", lines)
    return "\n".join(lines) + "\n"
